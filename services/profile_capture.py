# 📦 /services/profile_capture.py
# ─────────────────────────────
# Questionnaire submission: normalize the raw form and upsert the profile

import re

import structlog

from engine.errors import ValidationError
from engine.validation import REQUIRED_PROFILE_FIELDS
from schemas.schemas import Profile, ProfileForm

log = structlog.get_logger()

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")
_LEADING_FLOAT = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_TRUTHY = {"true", "on", "yes", "1", "checked"}


def _as_text(value) -> str:
    return "" if value is None else str(value)


def parse_int(value) -> int:
    """Leading-integer parse: '34 years' -> 34, 'abc' -> 0."""
    match = _LEADING_INT.match(_as_text(value))
    return int(match.group(0)) if match else 0


def parse_float(value) -> float:
    match = _LEADING_FLOAT.match(_as_text(value))
    return float(match.group(0)) if match else 0.0


def parse_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


def split_tags(value) -> list:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


def normalize_form(form: ProfileForm, user_id: str) -> Profile:
    for field in REQUIRED_PROFILE_FIELDS:
        if not str(getattr(form, field) or "").strip():
            raise ValidationError(field, f"{field.replace('_', ' ')} is required")

    profile = Profile(
        id=user_id,
        name=form.name.strip(),
        age=parse_int(form.age),
        gender_identity=form.gender_identity.strip(),
        location=form.location.strip(),
        cultural_background=form.cultural_background.strip(),
        preferred_language=form.preferred_language.strip(),
        lgbtq_identity=parse_bool(form.lgbtq_identity),
        relationship_status=form.relationship_status.strip(),
        has_children=parse_bool(form.has_children),
        occupation=form.occupation.strip(),
        mental_health_conditions=split_tags(form.mental_health_conditions),
        medications=split_tags(form.medications),
        communication_style=form.communication_style.strip(),
        religious_beliefs=form.religious_beliefs.strip(),
        session_format=form.session_format.strip(),
        insurance=form.insurance.strip(),
        budget=parse_float(form.budget),
    )

    if profile.age <= 0:
        raise ValidationError("age", "Please enter a valid age")
    if profile.budget < 0:
        raise ValidationError("budget", "Please enter a valid budget")
    return profile


async def submit(form: ProfileForm, user_id: str, repository) -> Profile:
    profile = normalize_form(form, user_id)
    stored = await repository.upsert_profile(profile)
    log.info("Profile submitted", user_id=user_id)
    return stored
