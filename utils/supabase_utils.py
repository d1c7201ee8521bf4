import asyncio

import structlog

from engine.errors import UpstreamError

log = structlog.get_logger()


async def execute_query(call, action: str):
    """Run a blocking Supabase call off the event loop. One attempt; failures become UpstreamError."""
    try:
        response = await asyncio.to_thread(call)
    except Exception as e:
        log.error("Supabase request failed", action=action, error=str(e))
        raise UpstreamError(f"Database error: {e}") from e
    return response
