"""Process-level settings for scrutinizer.

These are not project settings (those live in .scrutinizer.yml). They tune
how the tool itself runs and can be set from the environment, e.g.

    SCRUTINIZER_COMMAND_TIMEOUT=600 SCRUTINIZER_FAIL_FAST=false scrutinizer run .
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_COMMAND_TIMEOUT

logger = logging.getLogger(__name__)

VERBOSITY_LEVELS = ("quiet", "normal", "verbose", "debug")


class Settings(BaseSettings):
    """Runtime settings, read from SCRUTINIZER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCRUTINIZER_",
        extra="ignore",
    )

    command_timeout: float = Field(
        default=DEFAULT_COMMAND_TIMEOUT,
        gt=0,
        description="Timeout for before/after commands, in seconds",
    )
    verbosity: str = Field(
        default="normal",
        description="Output verbosity: quiet, normal, verbose, debug",
    )
    color: bool = Field(default=True, description="Enable colored output")
    fail_fast: bool = Field(
        default=True,
        description="Abort the run when an analyzer fails",
    )

    @field_validator("verbosity")
    @classmethod
    def _check_verbosity(cls, value: str) -> str:
        value = value.lower()
        if value not in VERBOSITY_LEVELS:
            raise ValueError(f"Must be one of: {', '.join(VERBOSITY_LEVELS)}")
        return value


def load_settings() -> Settings:
    """Load settings from the environment."""
    settings = Settings()
    logger.debug(f"Loaded settings: {settings.model_dump()}")
    return settings
