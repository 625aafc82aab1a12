"""Configuration models for playfit.

PolicyConfig describes what the target playback device accepts and how to
convert what it does not. It is a frozen pydantic model so that a policy is
validated once at startup and then passed around unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONTAINERS = frozenset({"avi", "mkv"})
DEFAULT_VIDEO_CODECS = frozenset({"h264", "mpeg4"})
DEFAULT_AUDIO_CODECS = frozenset({"mp3", "ac3", "aac"})
DEFAULT_MAX_RESOLUTION = 1920
DEFAULT_VIDEO_CODEC = "h264"
DEFAULT_AUDIO_CODEC = "aac"
DEFAULT_CONTAINER = "mkv"
DEFAULT_BITS_PER_PIXEL = 0.3
DEFAULT_PASS_COUNT = 2


def normalize_token(value: Any) -> str:
    """Normalize a codec or container token.

    Raises:
        ValueError: If the token is empty or contains whitespace.
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected a string token, got {type(value).__name__}")
    token = value.strip().casefold()
    if not token:
        raise ValueError("Empty token")
    if any(ch.isspace() for ch in token):
        raise ValueError(f"Token contains whitespace: '{value}'")
    return token


def _normalize_token_set(value: Any) -> frozenset[str]:
    if isinstance(value, str):
        raise ValueError(
            "Expected a list of tokens, not a single string "
            f"(got '{value}'). Use a list or a comma-separated env value."
        )
    if not isinstance(value, Iterable):
        raise ValueError(f"Expected a list of tokens, got {type(value).__name__}")
    tokens = frozenset(normalize_token(item) for item in value)
    if not tokens:
        raise ValueError("At least one token is required")
    return tokens


class PolicyConfig(BaseModel):
    """Playback device capabilities and conversion preferences."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    supported_containers: frozenset[str] = DEFAULT_CONTAINERS
    supported_video_codecs: frozenset[str] = DEFAULT_VIDEO_CODECS
    supported_audio_codecs: frozenset[str] = DEFAULT_AUDIO_CODECS
    max_resolution: int = Field(default=DEFAULT_MAX_RESOLUTION, gt=0)
    preferred_video_codec: str = DEFAULT_VIDEO_CODEC
    preferred_audio_codec: str = DEFAULT_AUDIO_CODEC
    preferred_container: str = DEFAULT_CONTAINER
    bits_per_pixel: float = Field(
        default=DEFAULT_BITS_PER_PIXEL, gt=0, allow_inf_nan=False
    )
    pass_count: int = DEFAULT_PASS_COUNT

    @field_validator(
        "supported_containers",
        "supported_video_codecs",
        "supported_audio_codecs",
        mode="before",
    )
    @classmethod
    def validate_token_sets(cls, v: Any) -> frozenset[str]:
        """Normalize token lists to lowercase sets."""
        return _normalize_token_set(v)

    @field_validator("supported_containers", mode="after")
    @classmethod
    def strip_container_dots(cls, v: frozenset[str]) -> frozenset[str]:
        """Accept '.mkv' as well as 'mkv'."""
        return frozenset(normalize_token(token.lstrip(".")) for token in v)

    @field_validator(
        "preferred_video_codec",
        "preferred_audio_codec",
        "preferred_container",
        mode="before",
    )
    @classmethod
    def validate_preferred(cls, v: Any) -> str:
        """Normalize a preferred codec or container."""
        return normalize_token(v)

    @field_validator("preferred_container", mode="after")
    @classmethod
    def strip_preferred_container_dot(cls, v: str) -> str:
        """Accept '.mkv' as well as 'mkv'."""
        return normalize_token(v.lstrip("."))

    @field_validator("pass_count")
    @classmethod
    def validate_pass_count(cls, v: int) -> int:
        """Only single-pass and two-pass encoding exist."""
        if v not in (1, 2):
            raise ValueError(f"Invalid pass_count: {v}. Must be 1 or 2.")
        return v


@dataclass(frozen=True)
class ToolPathsConfig:
    """Explicit paths to external tools (None = look up on PATH)."""

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "warning"
    file: Path | None = None
    format: str = "text"  # "text" or "json"
    include_stderr: bool = False
    max_bytes: int = 10_485_760
    backup_count: int = 5


@dataclass(frozen=True)
class PlayfitConfig:
    """Complete runtime configuration."""

    policy: PolicyConfig = field(default_factory=PolicyConfig)
    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    policy_file: Path | None = None
