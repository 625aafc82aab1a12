"""Configuration loading for playfit.

Builds the runtime configuration once at startup from defaults, an optional
YAML policy file, environment variables and CLI overrides. The resulting
PlayfitConfig is passed explicitly to every component; there is no cached
module-level configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from playfit.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from playfit.config.env import EnvReader
from playfit.config.models import PlayfitConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or is invalid."""

    pass


def load_policy_file(path: Path) -> dict[str, Any]:
    """Load a YAML policy file.

    Args:
        path: Path to the policy file.

    Returns:
        Parsed mapping (empty for an empty file).

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping.
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read policy file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in policy file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Policy file {path} must contain a mapping, got {type(data).__name__}"
        )
    return data


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "policy"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def load_config(
    env: Mapping[str, str] | None = None,
    policy_file: Path | None = None,
    cli_source: ConfigSource | None = None,
) -> PlayfitConfig:
    """Build the runtime configuration.

    Args:
        env: Environment mapping (None = os.environ).
        policy_file: Explicit policy file; overrides PLAYFIT_POLICY_FILE.
        cli_source: Values given on the command line.

    Returns:
        Validated PlayfitConfig.

    Raises:
        ConfigError: If any source is unreadable or any value is invalid.
    """
    reader = EnvReader(env=env)
    builder = ConfigBuilder()

    if policy_file is None:
        policy_file = reader.get_path("PLAYFIT_POLICY_FILE", must_exist=False)

    if policy_file is not None:
        policy_file = policy_file.expanduser()
        file_config = load_policy_file(policy_file)
        try:
            builder.apply(source_from_file(file_config))
        except ValueError as e:
            raise ConfigError(str(e)) from e
        logger.debug("Loaded policy file %s", policy_file)

    builder.apply(source_from_env(reader))

    if cli_source is not None:
        builder.apply(cli_source)

    try:
        config = builder.build(policy_file=policy_file)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid policy configuration: {_format_validation_error(e)}"
        ) from e

    logger.debug(
        "Policy: containers=%s video=%s audio=%s max_resolution=%d passes=%d",
        sorted(config.policy.supported_containers),
        sorted(config.policy.supported_video_codecs),
        sorted(config.policy.supported_audio_codecs),
        config.policy.max_resolution,
        config.policy.pass_count,
    )
    return config
