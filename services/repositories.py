# 📦 /services/repositories.py
# ─────────────────────────────
# Directory and profile storage, remote (Supabase) or local (in-process)

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from engine.errors import UpstreamError
from engine.validation import missing_profile_fields
from schemas.schemas import Profile, Therapist
from utils.fetch_therapists import fetch_therapists
from utils.supabase_utils import execute_query

log = structlog.get_logger()


def profile_from_row(row: dict) -> Profile:
    """Build a Profile from a table row; null columns take the model defaults."""
    data = {k: v for k, v in row.items() if v is not None}
    try:
        return Profile(**data)
    except PydanticValidationError as e:
        log.error("Malformed profile row", user_id=row.get("id"), error=str(e))
        raise UpstreamError("Stored profile could not be read") from e


class DirectoryRepository(ABC):
    @abstractmethod
    async def list_therapists(self) -> List[Therapist]:
        ...


class ProfileRepository(ABC):
    @abstractmethod
    async def upsert_profile(self, profile: Profile) -> Profile:
        ...

    @abstractmethod
    async def fetch_profile(self, user_id: str) -> Optional[Profile]:
        ...

    async def discard_profile(self, user_id: str) -> None:
        """Only local storage forgets profiles; remote records outlive sessions."""


# ─────────────────────────────
# Supabase

class SupabaseDirectory(DirectoryRepository):
    def __init__(self, supabase, table: str = "therapists"):
        self.supabase = supabase
        self.table = table

    async def list_therapists(self) -> List[Therapist]:
        return await fetch_therapists(self.supabase, self.table)


class SupabaseProfileRepository(ProfileRepository):
    def __init__(self, supabase, table: str = "profiles"):
        self.supabase = supabase
        self.table = table

    async def upsert_profile(self, profile: Profile) -> Profile:
        query = self.supabase.table(self.table).upsert(profile.model_dump())
        response = await execute_query(query.execute, action="upsert_profile")
        log.info("Profile saved successfully", user_id=profile.id)
        if response.data:
            return profile_from_row(response.data[0])
        return profile

    async def fetch_profile(self, user_id: str) -> Optional[Profile]:
        query = self.supabase.table(self.table).select("*").eq("id", user_id).limit(1)
        response = await execute_query(query.execute, action="fetch_profile")
        if not response.data:
            log.info("No profile found", user_id=user_id)
            return None

        profile = profile_from_row(response.data[0])
        missing = missing_profile_fields(profile)
        if missing:
            log.warning("Profile missing required fields", user_id=user_id, missing=missing)
            return None
        return profile


# ─────────────────────────────
# Local

class CatalogueDirectory(DirectoryRepository):
    """Serves the fallback catalogue as the directory."""
    def __init__(self, therapists: List[Therapist]):
        self._therapists = list(therapists)

    async def list_therapists(self) -> List[Therapist]:
        return list(self._therapists)


class LocalProfileRepository(ProfileRepository):
    def __init__(self):
        self._profiles: Dict[str, Profile] = {}

    async def upsert_profile(self, profile: Profile) -> Profile:
        self._profiles[profile.id] = profile.model_copy(deep=True)
        log.info("Demo mode: profile stored locally", user_id=profile.id)
        return profile.model_copy(deep=True)

    async def fetch_profile(self, user_id: str) -> Optional[Profile]:
        profile = self._profiles.get(user_id)
        return profile.model_copy(deep=True) if profile else None

    async def discard_profile(self, user_id: str) -> None:
        self._profiles.pop(user_id, None)
