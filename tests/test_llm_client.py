# 📦 tests/test_llm_client.py

import json

import httpx
import pytest

from engine.errors import UpstreamError
from engine.llm_client import ChatCompletionClient

API_URL = "https://models.test/v1/chat/completions"


def make_client(handler):
    return ChatCompletionClient(
        api_url=API_URL,
        api_key="secret",
        model="test-model",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_request_shape_and_content_extraction():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "[1]"}}]})

    content = await make_client(handler).complete("hello")

    assert content == "[1]"
    assert seen["auth"] == "Bearer secret"
    assert seen["body"] == {
        "model": "test-model",
        "messages": [{"role": "user", "content": "hello"}],
        "temperature": 0.7,
        "max_tokens": 1000,
    }


@pytest.mark.asyncio
async def test_non_success_status_is_upstream_error_without_retry():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503, text="overloaded")

    with pytest.raises(UpstreamError) as exc:
        await make_client(handler).complete("hello")

    assert exc.value.status == 503
    assert exc.value.body == "overloaded"
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_missing_content_is_upstream_error():
    def handler(request):
        return httpx.Response(200, json={"choices": []})

    with pytest.raises(UpstreamError) as exc:
        await make_client(handler).complete("hello")
    assert "Missing content" in exc.value.message


@pytest.mark.asyncio
async def test_transport_failure_is_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as exc:
        await make_client(handler).complete("hello")
    assert exc.value.status is None
