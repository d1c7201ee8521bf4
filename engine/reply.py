# 📦 engine/reply.py
# ─────────────────────────────
# Strict validation of the model's JSON reply

import json

from pydantic import ValidationError as PydanticValidationError

from engine.errors import MatchShapeError, ParseError
from schemas.schemas import ModelMatch, ParsedReply, ReplyParsed, ReplyParseError, ReplyShapeError

REQUIRED_KEYS = ("id", "name", "reason")


def _scalar_id(value):
    """Numeric ids are echoed back as strings; bools and containers are not ids."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _shape_ok(item) -> bool:
    if not isinstance(item, dict):
        return False
    return all(isinstance(item.get(k), str) and item[k].strip() for k in REQUIRED_KEYS)


def parse_model_reply(content: str) -> ParsedReply:
    """Classify reply content as parsed matches, a parse error or a shape error."""
    try:
        payload = json.loads(content)
    except (TypeError, ValueError) as e:
        return ReplyParseError(message=f"Failed to parse therapist matches: {e}")

    if not isinstance(payload, list):
        return ReplyParseError(message="Model response is not an array")
    if not payload:
        return ReplyParseError(message="No therapist matches found")

    matches = []
    for index, item in enumerate(payload):
        if isinstance(item, dict) and "id" in item:
            item = {**item, "id": _scalar_id(item["id"])}
        if not _shape_ok(item):
            return ReplyShapeError(
                index=index,
                message=f"Invalid match at index {index}: Missing required fields",
            )
        try:
            matches.append(ModelMatch.model_validate(item))
        except PydanticValidationError as e:
            return ReplyShapeError(index=index, message=f"Invalid match at index {index}: {e.errors()[0]['msg']}")

    return ReplyParsed(matches=matches)


def raise_for_reply(result: ParsedReply):
    """Return the parsed matches or raise the matching pipeline error."""
    if isinstance(result, ReplyParseError):
        raise ParseError(result.message)
    if isinstance(result, ReplyShapeError):
        raise MatchShapeError(result.index, result.message)
    return result.matches
