# 📦 tests/test_session_store.py

from datetime import datetime, timedelta, timezone

import pytest

from services.repositories import LocalProfileRepository
from services.session_store import LocalSessionStore, local_user_id
from tests.utils.dummies import make_profile


class Clock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now


@pytest.mark.asyncio
async def test_login_creates_device_session():
    store = LocalSessionStore(LocalProfileRepository(), ttl_s=3600, clock=Clock())
    session = await store.login("jamie@example.com", "device-a")

    assert session.user.email == "jamie@example.com"
    assert session.user.id == local_user_id("device-a")
    assert session.access_token
    assert (await store.current(device_id="device-a")).id == session.user.id
    assert await store.current(device_id="device-b") is None


@pytest.mark.asyncio
async def test_expired_session_discards_session_and_profile():
    clock = Clock()
    profiles = LocalProfileRepository()
    store = LocalSessionStore(profiles, ttl_s=3600, clock=clock)
    session = await store.login("jamie@example.com", "device-a")
    await profiles.upsert_profile(make_profile(id=session.user.id))

    clock.now += timedelta(seconds=3601)

    assert await store.current(device_id="device-a") is None
    assert await profiles.fetch_profile(session.user.id) is None


@pytest.mark.asyncio
async def test_logout_forgets_device():
    store = LocalSessionStore(LocalProfileRepository(), clock=Clock())
    await store.login("jamie@example.com", "device-a")
    await store.logout("device-a")
    assert await store.current(device_id="device-a") is None


@pytest.mark.asyncio
async def test_expiry_on_one_device_keeps_other_device_profile():
    clock = Clock()
    profiles = LocalProfileRepository()
    store = LocalSessionStore(profiles, ttl_s=3600, clock=clock)
    on_a = await store.login("jamie@example.com", "device-a")
    clock.now += timedelta(seconds=1800)
    on_b = await store.login("jamie@example.com", "device-b")
    await profiles.upsert_profile(make_profile(id=on_a.user.id, location="Oakland"))
    await profiles.upsert_profile(make_profile(id=on_b.user.id, location="Berkeley"))

    clock.now += timedelta(seconds=1801)

    assert on_a.user.id != on_b.user.id
    assert await store.current(device_id="device-a") is None
    assert await profiles.fetch_profile(on_a.user.id) is None
    assert (await store.current(device_id="device-b")).id == on_b.user.id
    assert (await profiles.fetch_profile(on_b.user.id)).location == "Berkeley"
