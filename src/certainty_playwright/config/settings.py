# src/certainty_playwright/config/settings.py
"""
Configuration Management with Pydantic v2

Settings are loaded from defaults, then `.env`, then environment variables
prefixed with ``CERTAINTY_`` (nested sections use ``__``), for example::

    CERTAINTY_FAILURE_MODE=collect
    CERTAINTY_LOGGING__LEVEL=DEBUG
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FailureMode(str, Enum):
    """How the default failure strategy reacts to a failed assertion."""
    RAISE = "raise"
    COLLECT = "collect"


class LoggingSettings(BaseModel):
    """Logging configuration."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    json_format: bool = Field(
        default=False,
        description="Render log events as JSON instead of console output"
    )

    console_enabled: bool = Field(default=True)
    file_enabled: bool = Field(default=False)
    file_path: Path = Field(default=Path("logs/certainty.log"))

    max_file_size_mb: int = Field(default=10, ge=1, le=1000)
    backup_count: int = Field(default=3, ge=1, le=30)

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v_upper


class Settings(BaseSettings):
    """
    Library settings.

    Attributes:
        failure_mode: ``raise`` fails on the first false assertion,
            ``collect`` records failures until ``assert_all()``
        element_label: Label used to describe an unnamed element in messages
        logging: Logging section
    """

    model_config = SettingsConfigDict(
        env_prefix="CERTAINTY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    failure_mode: FailureMode = Field(
        default=FailureMode.RAISE,
        description="Default failure strategy behavior"
    )

    element_label: str = Field(
        default="element",
        min_length=1,
        description="Description of an unnamed element in failure messages"
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration"
    )

    @field_validator("element_label")
    @classmethod
    def validate_element_label(cls, v: str) -> str:
        """Strip surrounding whitespace; an all-blank label is rejected."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("element_label must not be blank")
        return stripped


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached library settings.

    The cache can be cleared using get_settings.cache_clear()

    Example:
        >>> settings = get_settings()
        >>> settings.failure_mode
        <FailureMode.RAISE: 'raise'>
    """
    return Settings()


def reload_settings() -> Settings:
    """Force reload settings by clearing cache."""
    get_settings.cache_clear()
    return get_settings()
