# 📦 engine/validation.py
# ─────────────────────────────
# Request checks shared by both matching paths

from engine.errors import ValidationError

REQUIRED_PROFILE_FIELDS = ("name", "age", "gender_identity", "location")


def missing_profile_fields(profile):
    """Required fields that are absent, blank or (for age) not positive, in check order."""
    missing = []
    for field in REQUIRED_PROFILE_FIELDS:
        value = getattr(profile, field, None)
        if field == "age":
            if not value or value <= 0:
                missing.append(field)
        elif value is None or not str(value).strip():
            missing.append(field)
    return missing


def validate_request(profile, needs):
    if profile is None:
        raise ValidationError("profile", "User profile is missing")

    missing = missing_profile_fields(profile)
    if missing:
        raise ValidationError(missing[0])

    if needs is None or not needs.strip():
        raise ValidationError("needs", "Please enter your specific needs for therapy")
