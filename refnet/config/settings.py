"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from decimal import Decimal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = (
    "TRACE",
    "DEBUG",
    "INFO",
    "SUCCESS",
    "WARNING",
    "ERROR",
    "CRITICAL",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./refnet.db"
    database_echo: bool = False

    # Application
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str = "logs/refnet.log"

    # Referral links and codes
    referral_link_base_url: str = Field(
        default="http://localhost:5000/",
        description="Base URL that referral links are built on",
    )
    referral_code_length: int = Field(
        default=8, ge=6, le=20, description="Length of generated referral codes"
    )

    # Rewards
    vip_promotion_threshold: Decimal = Field(
        default=Decimal("100"),
        gt=0,
        description="Minimum single deposit that promotes VIP level 0 to 1",
    )
    bonus_window_hours: int = Field(
        default=24,
        ge=1,
        description="Rolling window for team volume and bonus de-duplication",
    )
    atomic_deposits: bool = Field(
        default=True,
        description=(
            "Run each deposit in a single transaction. "
            "When false every processing step is committed on its own."
        ),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level against loguru level names."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log level {v!r}. "
                f"Expected one of: {', '.join(LOG_LEVELS)}"
            )
        return level

    @model_validator(mode="after")
    def validate_production(self) -> "Settings":
        """Validate production-specific requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG must be False in production environment. "
                "Set DEBUG=false in your .env file."
            )
        return self


# Global settings instance
settings = Settings()
