"""
Pydantic models for command-line options and fetch settings.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

REPO_URL = "https://api.github.com/repos/Qwertic/cursorrules/contents/rules"
RULES_FILENAME = ".cursorrules"


class FetchSettings(BaseModel):
    """Settings for talking to the GitHub contents API."""

    api_url: str = REPO_URL
    max_attempts: int = 3
    retry_delay: float = 1.0  # seconds, fixed between attempts
    # Per-connect and per-read limits; there is no limit on the whole transfer.
    connect_timeout: float = 15.0
    read_timeout: float = 90.0

    class Config:
        """Pydantic model configuration."""

        frozen = True

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        """Ensures a reasonable number of attempts."""
        if v < 1 or v > 10:
            raise ValueError("Max attempts must be between 1 and 10.")
        return v

    @field_validator("retry_delay")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Retry delay cannot be negative.")
        return v

    @field_validator("connect_timeout", "read_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeouts must be positive.")
        return v


class CliOptions(BaseModel):
    """
    Options given on the command line. Immutable once parsed.

    `local_dir` has no default here: the CLI injects the current working
    directory when `--dir` is omitted.
    """

    remote_url: Optional[str] = None
    local_dir: Path

    class Config:
        """Pydantic model configuration."""

        frozen = True
        str_strip_whitespace = True

    @field_validator("remote_url")
    @classmethod
    def empty_url_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treats `--url ""` the same as no URL at all."""
        return v or None
