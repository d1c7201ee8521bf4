# 📦 tests/test_settings.py

import pytest

from engine.fallback import KeywordMatcher
from engine.matcher import LLMMatcher
from services.matcher_service import build_backend, build_matcher
from services.repositories import CatalogueDirectory, LocalProfileRepository
from tests.utils.dummies import FakeChatClient, FakeDirectory, demo_settings, live_settings


def test_all_keys_present_means_live():
    assert live_settings().live_backend_available is True
    assert live_settings().mode == "live"


@pytest.mark.parametrize("missing", ["groq_api_key", "supabase_url", "supabase_anon_key"])
def test_any_missing_key_forces_fallback(missing):
    settings = live_settings(**{missing: None})
    assert settings.live_backend_available is False


def test_demo_flag_forces_fallback():
    assert live_settings(matching_mode="demo").live_backend_available is False


def test_matcher_selection_follows_settings():
    live = build_matcher(live_settings(), directory=FakeDirectory([]), chat_client=FakeChatClient())
    demo = build_matcher(demo_settings())
    assert isinstance(live, LLMMatcher)
    assert isinstance(demo, KeywordMatcher)


def test_demo_backend_uses_local_storage():
    backend = build_backend(demo_settings())
    assert backend.mode == "demo"
    assert isinstance(backend.directory, CatalogueDirectory)
    assert isinstance(backend.profiles, LocalProfileRepository)
