"""
Environment-based configuration for gh-actions-logging.

Uses pydantic-settings to load values from environment variables and an
optional ``.env`` file.  All variables are prefixed with ``GHA_LOG_`` to
avoid collisions with the variables the Actions runner itself sets.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .levels import Severity


class Settings(BaseSettings):
    """Configuration loaded from ``GHA_LOG_``-prefixed environment variables.

    Attributes:
        log_level: Minimum level forwarded to the handler (``trace`` ...
            ``critical``).
        output: Standard stream the workflow commands are written to.
        default_label: Logger label used when none is given.
    """

    model_config = SettingsConfigDict(
        env_prefix="GHA_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="debug", description="Minimum log level.")
    output: Literal["stdout", "stderr"] = Field(
        default="stdout",
        description="Standard stream receiving workflow commands.",
    )
    default_label: str = Field(
        default="github-actions",
        min_length=1,
        description="Label for loggers obtained without a name.",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        """Normalise the level name, rejecting unknown levels."""
        return Severity.parse(value).name.lower()

    @property
    def severity(self) -> Severity:
        return Severity.parse(self.log_level)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings singleton."""
    return Settings()
