# 📦 tests/test_validation.py

import pytest

from engine.errors import ValidationError
from engine.validation import missing_profile_fields, validate_request
from tests.utils.dummies import make_profile


@pytest.mark.parametrize("field, value", [
    ("name", ""),
    ("name", "   "),
    ("age", 0),
    ("age", -3),
    ("gender_identity", ""),
    ("location", ""),
])
def test_missing_required_field_is_named(field, value):
    profile = make_profile(**{field: value})
    with pytest.raises(ValidationError) as exc:
        validate_request(profile, "I feel anxious")
    assert exc.value.field == field


def test_first_missing_field_wins():
    profile = make_profile(name="", location="")
    assert missing_profile_fields(profile) == ["name", "location"]
    with pytest.raises(ValidationError) as exc:
        validate_request(profile, "help")
    assert exc.value.field == "name"


@pytest.mark.parametrize("needs", ["", "   ", "\n\t", None])
def test_blank_needs_rejected(needs):
    with pytest.raises(ValidationError) as exc:
        validate_request(make_profile(), needs)
    assert exc.value.field == "needs"


def test_missing_profile_rejected():
    with pytest.raises(ValidationError):
        validate_request(None, "help")


def test_complete_request_passes():
    validate_request(make_profile(), "Work stress")
