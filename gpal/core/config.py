"""Configuration management for G-Pal using Pydantic Settings."""

import re
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_OFFSET_RE = re.compile(r"^[+-]\d{2}:\d{2}$")


class SystemSettings(BaseSettings):
    """System-level configuration settings.

    Attributes:
        system_name: Name shown in logs and the API title.
        environment: Deployment environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: ``console`` for human-readable output, ``json`` for log shipping.
    """

    system_name: str = Field(default="G-Pal", description="System name")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Deployment environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: Literal["console", "json"] = Field(
        default="console", description="Log renderer"
    )

    model_config = SettingsConfigDict(
        env_prefix="GPAL_SYSTEM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class OpenAISettings(BaseSettings):
    """OpenAI LLM configuration settings.

    Attributes:
        api_key: OpenAI API key.
        default_model: Model used to translate utterances into commands.
        base_url: API base URL (override for compatible gateways).
        timeout_seconds: HTTP timeout for a single completion.
    """

    api_key: SecretStr = Field(default=SecretStr(""), description="OpenAI API key")
    default_model: str = Field(
        default="gpt-4.1-mini",
        description="Default OpenAI model",
    )
    base_url: str = Field(
        default="https://api.openai.com/v1", description="OpenAI API base URL"
    )
    timeout_seconds: float = Field(default=60.0, description="Request timeout", gt=0)

    @property
    def is_configured(self) -> bool:
        """Whether a real API key has been provided."""
        return bool(self.api_key.get_secret_value())

    model_config = SettingsConfigDict(
        env_prefix="GPAL_OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class GoogleCalendarSettings(BaseSettings):
    """Google Calendar configuration.

    Token acquisition happens outside this service; ``access_token`` only seeds
    the in-memory calendar session at startup.

    Attributes:
        calendar_id: Calendar to operate on.
        access_token: Optional pre-issued Bearer token.
        timeout_seconds: HTTP timeout for calendar calls.
    """

    calendar_id: str = Field(default="primary", description="Google Calendar ID")
    access_token: SecretStr = Field(
        default=SecretStr(""), description="Static Google access token"
    )
    timeout_seconds: float = Field(default=15.0, description="Request timeout", gt=0)

    @property
    def has_static_token(self) -> bool:
        """Check if a static access token is set."""
        return bool(self.access_token.get_secret_value())

    model_config = SettingsConfigDict(
        env_prefix="GPAL_GOOGLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class SchedulingSettings(BaseSettings):
    """Time resolution and event search configuration.

    Attributes:
        timezone: IANA zone name sent to the calendar with each event.
        utc_offset: Fixed offset appended to local timestamps (no DST handling).
        default_start_hour: Start hour used when only a date is known.
        default_duration_minutes: Event length used when no end is given.
        search_days_back: Days before now included in title search.
        search_days_ahead: Days after now included in title search.
        search_max_results: Cap on events fetched for a title search.
    """

    timezone: str = Field(default="America/New_York", description="Calendar time zone")
    utc_offset: str = Field(default="-05:00", description="Fixed UTC offset")
    default_start_hour: int = Field(default=9, ge=0, le=23)
    default_duration_minutes: int = Field(default=60, gt=0)
    search_days_back: int = Field(default=7, ge=0)
    search_days_ahead: int = Field(default=14, ge=0)
    search_max_results: int = Field(default=50, gt=0, le=2500)

    @field_validator("utc_offset")
    @classmethod
    def validate_utc_offset(cls, v: str) -> str:
        """Require a ``±HH:MM`` offset."""
        if not _OFFSET_RE.match(v):
            raise ValueError(f"utc_offset must look like +HH:MM or -HH:MM, got {v!r}")
        return v

    model_config = SettingsConfigDict(
        env_prefix="GPAL_SCHEDULING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class MasterSettings(BaseSettings):
    """Master settings combining all configuration classes."""

    system: SystemSettings = Field(default_factory=SystemSettings)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    google_calendar: GoogleCalendarSettings = Field(default_factory=GoogleCalendarSettings)
    scheduling: SchedulingSettings = Field(default_factory=SchedulingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def from_env(cls) -> "MasterSettings":
        """Load settings from environment variables and .env file.

        Returns:
            MasterSettings instance with all configuration loaded.
        """
        return cls(
            system=SystemSettings(),
            openai=OpenAISettings(),
            google_calendar=GoogleCalendarSettings(),
            scheduling=SchedulingSettings(),
        )

    @property
    def is_configured(self) -> bool:
        """Whether the language model is configured."""
        return self.openai.is_configured


# Alias so main.py can do: from gpal.core.config import Settings
Settings = MasterSettings
