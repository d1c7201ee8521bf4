# 📦 /services/matcher_service.py

import structlog
from prometheus_client import Counter

from engine.errors import MatchError
from engine.fallback import KeywordMatcher
from engine.llm_client import ChatCompletionClient
from engine.matcher import LLMMatcher
from services.repositories import (
    CatalogueDirectory,
    LocalProfileRepository,
    SupabaseDirectory,
    SupabaseProfileRepository,
)
from services.session_store import LocalSessionStore, SupabaseSessionStore
from supabase_client import get_supabase

log = structlog.get_logger()

REQUEST_COUNTER = Counter("therapistmatch_requests_total", "Total /match requests made")
FALLBACK_COUNTER = Counter("therapistmatch_fallbacks_total", "Total number of matches served by the keyword fallback")
MATCHES_RETURNED_COUNTER = Counter("therapistmatch_matches_returned", "Number of matches returned per request")
FAILURE_COUNTER = Counter("therapistmatch_failures_total", "Failed match requests by error kind", ["kind"])


class Backend:
    """Repositories, session store and matcher selected for one app instance."""
    def __init__(self, mode, directory, profiles, sessions, matcher):
        self.mode = mode
        self.directory = directory
        self.profiles = profiles
        self.sessions = sessions
        self.matcher = matcher


def build_matcher(settings, directory=None, chat_client=None, catalogue=None):
    """LLM matcher when the live backend is configured, keyword fallback otherwise."""
    if settings.live_backend_available:
        chat_client = chat_client or ChatCompletionClient.from_settings(settings)
        return LLMMatcher(directory, chat_client)
    return KeywordMatcher(catalogue=catalogue, delay_s=settings.fallback_delay_s)


def build_backend(settings, chat_client=None, supabase=None, catalogue=None) -> Backend:
    if settings.live_backend_available:
        supabase = supabase or get_supabase(settings)
        directory = SupabaseDirectory(supabase, settings.therapists_table)
        profiles = SupabaseProfileRepository(supabase, settings.profiles_table)
        sessions = SupabaseSessionStore(supabase)
        matcher = build_matcher(settings, directory=directory, chat_client=chat_client)
    else:
        matcher = build_matcher(settings, catalogue=catalogue)
        directory = CatalogueDirectory(matcher.therapists())
        profiles = LocalProfileRepository()
        sessions = LocalSessionStore(profiles, ttl_s=settings.session_ttl_s)

    log.info("Matching backend ready", mode=settings.mode, algorithm=matcher.algorithm)
    return Backend(settings.mode, directory, profiles, sessions, matcher)


async def run_matcher(matcher, profile, needs):
    REQUEST_COUNTER.inc()
    try:
        matches = await matcher.run(profile, needs)
    except MatchError as e:
        FAILURE_COUNTER.labels(type(e).__name__).inc()
        log.warning("Matching failed", user_id=profile.id if profile else None, error=e.message)
        raise

    if matcher.algorithm == "keyword":
        FALLBACK_COUNTER.inc()
    if matches:
        MATCHES_RETURNED_COUNTER.inc(len(matches))
    return matches
