# 📦 /schemas/schemas.py

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


class Profile(BaseModel):
    id: str = ""
    name: str = ""
    age: int = 0
    gender_identity: str = ""
    location: str = ""
    cultural_background: str = ""
    preferred_language: str = ""
    lgbtq_identity: bool = False
    relationship_status: str = ""
    has_children: bool = False
    occupation: str = ""
    mental_health_conditions: List[str] = []
    medications: List[str] = []
    communication_style: str = ""
    religious_beliefs: str = ""
    session_format: str = ""
    insurance: str = ""
    budget: float = 0


class ProfileForm(BaseModel):
    """Raw questionnaire payload, before trimming and coercion."""
    name: str = ""
    age: Union[str, int, None] = ""
    gender_identity: str = ""
    location: str = ""
    cultural_background: str = ""
    preferred_language: str = ""
    lgbtq_identity: Union[bool, str, None] = False
    relationship_status: str = ""
    has_children: Union[bool, str, None] = False
    occupation: str = ""
    mental_health_conditions: str = ""
    medications: str = ""
    communication_style: str = ""
    religious_beliefs: str = ""
    session_format: str = ""
    insurance: str = ""
    budget: Union[str, float, None] = ""


class Therapist(BaseModel):
    id: str
    name: str
    photo_url: Optional[str] = None
    location: Optional[str] = None
    specialties: List[str] = []
    insurance_accepted: List[str] = []
    availability: Optional[str] = None
    contact_info: Optional[str] = None
    session_formats: List[str] = []
    languages: List[str] = []
    rating: Optional[float] = Field(default=None, ge=0, le=5)


class MatchResult(Therapist):
    reason: str


class ModelMatch(BaseModel):
    """One element of the model's JSON reply."""
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    reason: str = Field(min_length=1)


# ─────────────────────────────
# Tagged result of parsing the model reply

class ReplyParsed(BaseModel):
    kind: Literal["parsed"] = "parsed"
    matches: List[ModelMatch]

class ReplyParseError(BaseModel):
    kind: Literal["parse_error"] = "parse_error"
    message: str

class ReplyShapeError(BaseModel):
    kind: Literal["shape_error"] = "shape_error"
    index: int
    message: str

ParsedReply = Union[ReplyParsed, ReplyParseError, ReplyShapeError]


# ─────────────────────────────
# Sessions

class SessionUser(BaseModel):
    id: str
    email: str

class SessionRecord(BaseModel):
    user: SessionUser
    access_token: str
    expires_at: datetime


# ─────────────────────────────
# Requests and responses

class LoginRequest(BaseModel):
    email: str = Field(min_length=3)

class LoginResponse(BaseModel):
    status: str
    message: str
    session: Optional[SessionRecord] = None

class MatchRequest(BaseModel):
    needs: str

class MatchResponse(BaseModel):
    status: str
    mode: str
    request_token: int
    data: List[MatchResult]

class ProfileResponse(BaseModel):
    status: str
    data: Profile

class TherapistListResponse(BaseModel):
    status: str
    data: List[Therapist]

class HealthCheckResponse(BaseModel):
    status: str
    message: str
    version: str
    mode: str

class ErrorResponse(BaseModel):
    status: str
    message: str
    info: Optional[str | dict] = None
