"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building PlayfitConfig by composing
configuration sources with explicit precedence handling:

1. CLI flags (highest priority)
2. Environment variables (PLAYFIT_*)
3. Policy file (YAML)
4. Default values (lowest priority)
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from playfit.config.env import EnvReader
from playfit.config.models import (
    LoggingConfig,
    PlayfitConfig,
    PolicyConfig,
    ToolPathsConfig,
)

# ConfigSource field name -> PolicyConfig field name
_POLICY_FIELDS: dict[str, str] = {
    "containers": "supported_containers",
    "video_codecs": "supported_video_codecs",
    "audio_codecs": "supported_audio_codecs",
    "max_resolution": "max_resolution",
    "video_codec": "preferred_video_codec",
    "audio_codec": "preferred_audio_codec",
    "container": "preferred_container",
    "bits_per_pixel": "bits_per_pixel",
    "pass_count": "pass_count",
}


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Policy
    containers: list[str] | None = None
    video_codecs: list[str] | None = None
    audio_codecs: list[str] | None = None
    max_resolution: int | None = None
    video_codec: str | None = None
    audio_codec: str | None = None
    container: str | None = None
    bits_per_pixel: float | None = None
    pass_count: int | None = None

    # Tool paths
    ffmpeg_path: Path | None = None
    ffprobe_path: Path | None = None

    # Logging
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None


class ConfigBuilder:
    """Builds PlayfitConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        """Initialize the builder with no values set."""
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource) -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build_policy(self) -> PolicyConfig:
        """Build the PolicyConfig from the accumulated values.

        Raises:
            pydantic.ValidationError: If any value is invalid.
        """
        policy_values = {
            policy_name: self._values[source_name]
            for source_name, policy_name in _POLICY_FIELDS.items()
            if source_name in self._values
        }
        return PolicyConfig(**policy_values)

    def build(self, policy_file: Path | None = None) -> PlayfitConfig:
        """Build the final PlayfitConfig with defaults for unset values.

        Args:
            policy_file: Policy file the values were loaded from, if any.

        Returns:
            Complete PlayfitConfig.

        Raises:
            pydantic.ValidationError: If any policy value is invalid.
        """
        tools = ToolPathsConfig(
            ffmpeg=self._get("ffmpeg_path", None),
            ffprobe=self._get("ffprobe_path", None),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "warning"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
        )

        return PlayfitConfig(
            policy=self.build_policy(),
            tools=tools,
            logging=logging_config,
            policy_file=policy_file,
        )


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from a parsed policy file.

    The file uses PolicyConfig field names at the top level.

    Args:
        file_config: Parsed policy mapping.

    Returns:
        ConfigSource with values from the file.

    Raises:
        ValueError: If the mapping contains keys that are not policy fields.
    """
    reverse = {policy: source for source, policy in _POLICY_FIELDS.items()}

    unknown = sorted(set(file_config) - set(reverse))
    if unknown:
        raise ValueError(
            f"Unknown keys in policy file: {unknown}. "
            f"Valid keys are: {sorted(reverse)}"
        )

    return ConfigSource(**{reverse[key]: value for key, value in file_config.items()})


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from environment variables.

    Args:
        reader: EnvReader instance for reading environment variables.

    Returns:
        ConfigSource with values from environment variables.
    """
    return ConfigSource(
        # Policy
        containers=reader.get_list("PLAYFIT_CONTAINERS"),
        video_codecs=reader.get_list("PLAYFIT_VIDEO_CODECS"),
        audio_codecs=reader.get_list("PLAYFIT_AUDIO_CODECS"),
        max_resolution=reader.get_int("PLAYFIT_MAX_RESOLUTION"),
        video_codec=reader.get_str("PLAYFIT_VIDEO_CODEC"),
        audio_codec=reader.get_str("PLAYFIT_AUDIO_CODEC"),
        container=reader.get_str("PLAYFIT_CONTAINER"),
        bits_per_pixel=reader.get_float("PLAYFIT_BITS_PER_PIXEL"),
        pass_count=reader.get_int("PLAYFIT_PASSES"),
        # Tool paths
        ffmpeg_path=reader.get_path("PLAYFIT_FFMPEG_PATH"),
        ffprobe_path=reader.get_path("PLAYFIT_FFPROBE_PATH"),
        # Logging
        logging_level=reader.get_str("PLAYFIT_LOG_LEVEL"),
        logging_file=reader.get_path("PLAYFIT_LOG_FILE", must_exist=False),
        logging_format=reader.get_str("PLAYFIT_LOG_FORMAT"),
        logging_include_stderr=reader.get_bool("PLAYFIT_LOG_STDERR"),
    )
