# 📦 tests/test_fallback.py

import pytest

from engine.errors import ValidationError
from engine.fallback import KeywordMatcher
from tests.utils.dummies import make_profile

ANXIETY_ID = "demo-therapist-1"
IDENTITY_ID = "demo-therapist-2"
FAMILY_ID = "demo-therapist-3"


def matcher():
    return KeywordMatcher(delay_s=0)


@pytest.mark.asyncio
async def test_anxiety_needs_put_anxiety_specialist_first():
    results = await matcher().run(make_profile(), "I have been dealing with anxiety and panic attacks at work")

    assert results[0].id == ANXIETY_ID
    assert "anxiety" in results[0].reason.lower()
    assert len(results) == 3


@pytest.mark.asyncio
async def test_gender_identity_needs_include_lgbtq_specialist():
    results = await matcher().run(make_profile(), "Looking for support around my gender identity")
    assert IDENTITY_ID in [r.id for r in results]
    assert results[0].id == IDENTITY_ID


@pytest.mark.asyncio
async def test_relationship_needs_put_family_specialist_first():
    results = await matcher().run(make_profile(), "Constant fights in my marriage")
    assert results[0].id == FAMILY_ID


@pytest.mark.asyncio
async def test_every_band_matched_keeps_band_order():
    results = await matcher().run(make_profile(), "Stress about my sexuality and my family")
    assert [r.id for r in results] == [ANXIETY_ID, IDENTITY_ID, FAMILY_ID]


@pytest.mark.asyncio
async def test_no_keyword_uses_general_reason_then_pads():
    results = await matcher().run(make_profile(), "I just want someone to talk to")

    assert [r.id for r in results] == [ANXIETY_ID, IDENTITY_ID, FAMILY_ID]
    assert "versatile" in results[0].reason
    assert "general fit" in results[1].reason


@pytest.mark.asyncio
async def test_same_needs_same_order():
    needs = "Worried about my relationship"
    first = await matcher().run(make_profile(), needs)
    second = await matcher().run(make_profile(), needs)
    assert [r.id for r in first] == [r.id for r in second]
    assert [r.reason for r in first] == [r.reason for r in second]


@pytest.mark.asyncio
async def test_reason_is_rendered_for_the_profile():
    results = await matcher().run(make_profile(name="Robin"), "anxiety")
    assert "Robin" in results[0].reason
    assert "{" not in results[0].reason


@pytest.mark.asyncio
async def test_small_catalogue_is_exhausted_not_repeated():
    catalogue = {
        "bands": {"anxiety": {"keywords": ["anxiety"]}},
        "generic_reason": "{therapist} is available.",
        "therapists": [
            {"id": "a", "name": "Dr. A", "band": "anxiety", "general": True, "reason": "Anxiety care for {name}."},
            {"id": "b", "name": "Dr. B", "reason": "Listens well."},
        ],
    }
    results = await KeywordMatcher(catalogue=catalogue, delay_s=0).run(make_profile(), "anxiety")
    assert [r.id for r in results] == ["a", "b"]
    assert results[1].reason == "Dr. B is available."


@pytest.mark.asyncio
async def test_blank_needs_still_rejected():
    with pytest.raises(ValidationError):
        await matcher().run(make_profile(), "   ")


@pytest.mark.asyncio
async def test_incomplete_profile_rejected():
    with pytest.raises(ValidationError) as exc:
        await matcher().run(make_profile(age=0), "anxiety")
    assert exc.value.field == "age"


def test_catalogue_is_the_directory():
    assert [th.id for th in matcher().therapists()] == [ANXIETY_ID, IDENTITY_ID, FAMILY_ID]
