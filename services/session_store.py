# 📦 /services/session_store.py
# ─────────────────────────────
# Who is calling: local device sessions or Supabase auth tokens

import secrets
from functools import partial
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

import structlog

from schemas.schemas import SessionRecord, SessionUser
from utils.supabase_utils import execute_query

log = structlog.get_logger()


def _utcnow():
    return datetime.now(timezone.utc)


def local_user_id(device_id: str) -> str:
    """Local profiles belong to the device, whichever email signed in on it."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"device:{device_id}"))


class LocalSessionStore:
    """Device-keyed sessions with a fixed lifetime; expiry also drops the device's profile."""

    def __init__(self, profiles, ttl_s: int = 3600, clock: Callable[[], datetime] = _utcnow):
        self.profiles = profiles
        self.ttl = timedelta(seconds=ttl_s)
        self.clock = clock
        self._sessions: Dict[str, SessionRecord] = {}

    async def login(self, email: str, device_id: str) -> SessionRecord:
        user = SessionUser(id=local_user_id(device_id), email=email.strip())
        session = SessionRecord(
            user=user,
            access_token=secrets.token_urlsafe(24),
            expires_at=self.clock() + self.ttl,
        )
        self._sessions[device_id] = session
        log.info("Demo mode: login successful", user_id=user.id, device_id=device_id)
        return session

    async def current(self, device_id: Optional[str] = None, access_token: Optional[str] = None) -> Optional[SessionUser]:
        if not device_id:
            return None
        session = self._sessions.get(device_id)
        if session is None:
            return None
        if session.expires_at <= self.clock():
            log.info("Demo session expired", device_id=device_id)
            await self.logout(device_id)
            return None
        return session.user

    async def logout(self, device_id: Optional[str] = None) -> None:
        session = self._sessions.pop(device_id, None)
        if session is not None:
            await self.profiles.discard_profile(session.user.id)


class SupabaseSessionStore:
    """Delegates authentication to Supabase; sessions live in the client."""

    def __init__(self, supabase):
        self.supabase = supabase

    async def login(self, email: str, device_id: Optional[str] = None) -> None:
        await execute_query(partial(self.supabase.auth.sign_in_with_otp, {"email": email}), action="sign_in_with_otp")
        log.info("Magic link sent", email=email)
        return None

    async def current(self, device_id: Optional[str] = None, access_token: Optional[str] = None) -> Optional[SessionUser]:
        if not access_token:
            return None
        response = await execute_query(partial(self.supabase.auth.get_user, access_token), action="get_user")
        user = getattr(response, "user", None)
        if user is None:
            return None
        return SessionUser(id=str(user.id), email=user.email or "")

    async def logout(self, device_id: Optional[str] = None) -> None:
        return None

