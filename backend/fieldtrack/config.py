"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Database ===
    database_url: str = Field(
        default="sqlite:///./fieldtrack.db",
        description="Database connection URL"
    )

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Auth ===
    jwt_secret: str = Field(
        default="change-me-in-production-fieldtrack-signing-key",
        description="Secret used to sign bearer tokens"
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_days: int = Field(default=7)

    # === Live tracking ===
    tracking_min_increment_km: float = Field(
        default=0.002,
        description="Increments at or below this are GPS jitter (km)"
    )
    tracking_max_jump_km: float = Field(
        default=100.0,
        description="Increments at or above this are GPS jumps (km)"
    )
    location_history_default_hours: int = Field(default=24)

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @field_validator('tracking_max_jump_km')
    @classmethod
    def check_jump_band(cls, v: float, info) -> float:
        """Max jump must sit above the jitter floor."""
        min_km = info.data.get('tracking_min_increment_km')
        if min_km is not None and v <= min_km:
            raise ValueError("tracking_max_jump_km must exceed tracking_min_increment_km")
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
