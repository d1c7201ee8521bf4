# engine/__init__.py
# ─────────────────────────────
# Init file for the TherapistMatch engine package
# Exposes core components

from .fallback import KeywordMatcher
from .matcher import LLMMatcher
from .prompt import build_prompt
from .reply import parse_model_reply

__all__ = [
    "KeywordMatcher",
    "LLMMatcher",
    "build_prompt",
    "parse_model_reply",
]
