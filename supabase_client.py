# 📦 supabase_client.py
# ─────────────────────────────
# Lazily created Supabase client shared by the repositories

from supabase import Client, create_client
import structlog

log = structlog.get_logger()

_clients: dict = {}


def get_supabase(settings) -> Client | None:
    """Return a client for the configured project, or None in demo mode."""
    if not settings.live_backend_available:
        return None

    key = (settings.supabase_url, settings.supabase_anon_key)
    if key not in _clients:
        _clients[key] = create_client(settings.supabase_url, settings.supabase_anon_key)
        log.info("Supabase client created", url=settings.supabase_url)
    return _clients[key]
