# 📦 settings.py
# ─────────────────────────────
# Runtime configuration for TherapistMatch

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", protected_namespaces=()
    )

    app_name: str = "TherapistMatch"
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    prometheus_port: int = 0

    # External services
    groq_api_key: Optional[str] = None
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    matching_mode: Literal["auto", "demo"] = Field(
        default="auto",
        description="'demo' forces the keyword fallback even when all keys are present.",
    )

    # Model service
    model_api_url: str = "https://api.groq.com/openai/v1/chat/completions"
    model_name: str = "mixtral-8x7b-32768"
    model_temperature: float = 0.7
    model_max_tokens: int = 1000
    model_timeout_s: float = 30.0

    # Fallback / local mode
    fallback_delay_s: float = 1.5
    session_ttl_s: int = 3600

    # Tables
    therapists_table: str = "therapists"
    profiles_table: str = "profiles"

    @property
    def live_backend_available(self) -> bool:
        """True when the model and directory services are fully configured and not forced off."""
        if self.matching_mode == "demo":
            return False
        return all([self.groq_api_key, self.supabase_url, self.supabase_anon_key])

    @property
    def mode(self) -> str:
        return "live" if self.live_backend_available else "demo"


@lru_cache
def get_settings() -> Settings:
    return Settings()
