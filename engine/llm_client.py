# 📦 engine/llm_client.py
# ─────────────────────────────
# Chat-completion client for the OpenAI-compatible model service

from typing import Optional

import httpx
import structlog

from engine.errors import UpstreamError

log = structlog.get_logger()


class ChatCompletionClient:
    """Single-attempt chat completion over httpx. Failures are never retried."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings, transport=None):
        return cls(
            api_url=settings.model_api_url,
            api_key=settings.groq_api_key,
            model=settings.model_name,
            temperature=settings.model_temperature,
            max_tokens=settings.model_max_tokens,
            timeout=settings.model_timeout_s,
            transport=transport,
        )

    def build_payload(self, prompt: str) -> dict:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    async def complete(self, prompt: str) -> str:
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, json=self.build_payload(prompt), headers=headers)
        except httpx.HTTPError as e:
            log.error("Model service request failed", error=str(e))
            raise UpstreamError(f"Model service request failed: {e}") from e

        log.info("Model service responded", status=response.status_code)

        if not response.is_success:
            log.error("Model service error response", status=response.status_code, body=response.text)
            raise UpstreamError(
                f"Model service error: {response.status_code} {response.reason_phrase}",
                status=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError(
                "Invalid response format from model service: Missing content",
                status=response.status_code,
                body=response.text,
            ) from e

        if not content:
            raise UpstreamError(
                "Invalid response format from model service: Missing content",
                status=response.status_code,
                body=response.text,
            )
        return content
