# 📦 tests/test_prompt.py

from engine.prompt import build_prompt
from tests.utils.dummies import make_profile, make_therapists


def test_prompt_includes_profile_needs_and_every_therapist():
    prompt = build_prompt(make_profile(), "  Panic attacks at work  ", make_therapists())

    assert "Name: Jamie" in prompt
    assert "Age: 29" in prompt
    assert "LGBTQ+ Identity: Yes" in prompt
    assert "Has Children: No" in prompt
    assert "Mental Health Conditions: anxiety" in prompt
    assert "User's specific needs:\nPanic attacks at work\n" in prompt
    for therapist_id in ("ID: th-1", "ID: th-2", "ID: th-3"):
        assert therapist_id in prompt


def test_missing_values_get_placeholders():
    profile = make_profile(cultural_background="", medications=[], budget=0)
    prompt = build_prompt(profile, "help", make_therapists())

    assert "Cultural Background: Not specified" in prompt
    assert "Medications: None specified" in prompt
    assert "Budget: Not specified" in prompt
    # th-3 has no optional data at all
    th3_block = prompt.split("ID: th-3")[1]
    assert "Specialties: Not specified" in th3_block
    assert "Availability: Not specified" in th3_block
    assert "Rating: Not rated" in th3_block


def test_prompt_requests_verbatim_ids_as_json_array():
    prompt = build_prompt(make_profile(), "help", make_therapists())
    assert "top 3" in prompt
    assert "exact therapist IDs" in prompt
    assert '"reason"' in prompt
