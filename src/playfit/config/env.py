"""Environment variable reader with dependency injection support.

EnvReader wraps an env mapping (os.environ by default) and converts PLAYFIT_*
values to the types the configuration builder expects. Tests pass their own
mapping instead of patching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EnvReader:
    """Environment variable reader with type conversion.

    Unset variables give the default. Numeric values that do not parse are
    logged and also give the default.

    Example:
        reader = EnvReader(env={"PLAYFIT_MAX_RESOLUTION": "1280"})
        reader.get_int("PLAYFIT_MAX_RESOLUTION", 1920)  # 1280
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def _convert(
        self, var: str, convert: Callable[[str], T], kind: str, default: T | None
    ) -> T | None:
        value = self._env.get(var)
        if value is None:
            return default
        try:
            return convert(value)
        except ValueError:
            logger.warning("Invalid %s value for %s: %s", kind, var, value)
            return default

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a string; an empty value is returned as-is."""
        return self._env.get(var, default)

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Get an integer, or default if unset or invalid."""
        return self._convert(var, int, "integer", default)

    def get_float(self, var: str, default: float | None = None) -> float | None:
        """Get a float, or default if unset or invalid."""
        return self._convert(var, float, "float", default)

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean; "true", "1", "yes" and "on" are true, anything else false."""
        value = self._env.get(var)
        if value is None:
            return default
        return value.strip().casefold() in ("true", "1", "yes", "on")

    def get_list(
        self, var: str, separator: str = ",", default: list[str] | None = None
    ) -> list[str] | None:
        """Get a list of tokens from a separated value.

        Items are stripped. Empty items are kept so that validation rejects
        malformed lists such as "avi,,mkv".

        Args:
            var: Environment variable name.
            separator: Delimiter between items.
            default: Value if the variable is unset.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return [part.strip() for part in value.split(separator)]

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """Get a path with ``~`` expanded.

        Args:
            var: Environment variable name.
            must_exist: If True, a path that does not exist is logged and
                the default returned instead.
            default: Value if unset (or missing when must_exist is set).
        """
        value = self._env.get(var)
        if value is None:
            return default

        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s", var, value
            )
            return default
        return path
