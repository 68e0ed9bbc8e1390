from functools import lru_cache
import os

from pydantic import BaseModel


class Settings(BaseModel):
    # Hosted auth service (Supabase-compatible GoTrue API)
    supabase_url: str = os.getenv("SUPABASE_URL", "http://localhost:54321")
    supabase_anon_key: str = os.getenv("SUPABASE_ANON_KEY", "")
    supabase_jwt_secret: str = os.getenv("SUPABASE_JWT_SECRET", "change-me-in-production")
    jwt_algorithm: str = "HS256"
    jwt_audience: str = os.getenv("JWT_AUDIENCE", "authenticated")

    # Feedback
    feedback_rate_limit: int = int(os.getenv("FEEDBACK_RATE_LIMIT", "10"))  # submissions per minute
    feedback_max_length: int = int(os.getenv("FEEDBACK_MAX_LENGTH", "5000"))

    cors_origins: str = os.getenv("CORS_ORIGINS", "")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def extra_cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
