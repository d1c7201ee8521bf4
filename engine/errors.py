# 📦 engine/errors.py
# ─────────────────────────────
# Error taxonomy for the matching pipeline

from typing import Optional


class MatchError(Exception):
    """Base class; `message` is safe to show to the user."""

    is_upstream = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MatchError):
    """Bad or missing user input. `field` names the first offending field."""

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Please complete your profile. {field.replace('_', ' ')} is required.")
        self.field = field


class EmptyDirectoryError(MatchError):
    def __init__(self, message: str = "No therapists found in the database"):
        super().__init__(message)


class UpstreamError(MatchError):
    """Directory or model service failure."""

    is_upstream = True

    def __init__(self, message: str, status: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.body = body


class ParseError(MatchError):
    """Model reply content is not a non-empty JSON array."""

    is_upstream = True


class MatchShapeError(MatchError):
    is_upstream = True

    def __init__(self, index: int, message: Optional[str] = None):
        super().__init__(message or f"Invalid match at index {index}: Missing required fields")
        self.index = index
