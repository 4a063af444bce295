"""Application configuration using pydantic-settings.

All environment variables should be accessed through the settings object
rather than using os.getenv() directly. Services receive the Settings
instance through their constructors; routes receive it through the
``SettingsDep`` dependency so tests can override it.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Annotated, List, Literal

from fastapi import Depends
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Database - defaults to a local SQLite file, override via env for Postgres
    database_url: str = "sqlite:///./christmas_dinner.db"

    # Admin gate - single shared secret, no user accounts
    admin_password: str = ""

    # Payment link: {base_url}/{amount}?h={hash}
    payment_link_base_url: str = "https://monzo.me/christmas-dinner"
    payment_link_hash: str = ""

    # Pricing
    deposit_amount: Decimal = Field(default=Decimal("10.00"), ge=0)  # 3-course tier
    two_course_deposit_amount: Decimal = Field(default=Decimal("5.00"), ge=0)
    tip_rate: Decimal = Field(default=Decimal("0.10"), ge=0, le=1)

    # Booking references: PREFIX-<base36 timestamp>-<random>
    booking_reference_prefix: str = "XM"
    booking_reference_random_length: int = Field(default=4, ge=1, le=16)

    # CORS - comma-separated origins or "*" for development only
    cors_origins: str = "http://localhost:3000,http://localhost:8000"

    # Server
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # API
    api_prefix: str = "/api"

    # Rate limiting
    rate_limit_enabled: bool = True

    @field_validator("payment_link_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("booking_reference_prefix")
    @classmethod
    def validate_reference_prefix(cls, v: str) -> str:
        if not v or not v.isalnum():
            raise ValueError("BOOKING_REFERENCE_PREFIX must be a non-empty alphanumeric string")
        return v.upper()

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate settings for production safety."""
        import warnings

        if not self.admin_password:
            if not self.debug:
                raise ValueError(
                    "FATAL: Cannot start in production mode without ADMIN_PASSWORD. "
                    "Set the ADMIN_PASSWORD environment variable."
                )
            warnings.warn(
                "ADMIN_PASSWORD is not set; the admin API will reject every request.",
                UserWarning,
                stacklevel=2,
            )
        return self

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

# Type alias for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
