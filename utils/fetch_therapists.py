# 📦 utils/fetch_therapists.py

import structlog
from typing import List

from pydantic import ValidationError as PydanticValidationError

from engine.errors import UpstreamError
from schemas.schemas import Therapist
from utils.supabase_utils import execute_query

log = structlog.get_logger()

LIST_FIELDS = ("specialties", "insurance_accepted", "session_formats", "languages")


def _rating(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return None
    return rating if 0 <= rating <= 5 else None


def therapist_from_row(row: dict) -> Therapist:
    """Build a Therapist from a table row; null list columns become empty lists."""
    data = {k: row.get(k) for k in Therapist.model_fields if k in row}
    for field in LIST_FIELDS:
        data[field] = data.get(field) or []
    data["id"] = str(row.get("id"))
    data["name"] = row.get("name") or ""
    if "rating" in data:
        data["rating"] = _rating(data["rating"])
        if data["rating"] is None and row.get("rating") is not None:
            log.warning("Ignoring invalid therapist rating", therapist_id=data["id"], rating=row.get("rating"))
    try:
        return Therapist(**data)
    except PydanticValidationError as e:
        log.error("Malformed therapist row", therapist_id=data["id"], error=str(e))
        raise UpstreamError(f"Malformed therapist record {data['id']}") from e


async def fetch_therapists(supabase, table: str = "therapists") -> List[Therapist]:
    """Fetch every therapist from Supabase."""
    log.info("Fetching therapists", table=table)
    response = await execute_query(supabase.table(table).select("*").execute, action="fetch_therapists")

    if not response.data:
        log.warning("No therapists found in Supabase.")
        return []

    therapists = [therapist_from_row(th) for th in response.data]
    log.info(f"Successfully fetched {len(therapists)} therapists from Supabase.")
    return therapists
