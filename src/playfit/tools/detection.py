"""External tool detection.

Locates the ffmpeg and ffprobe executables, preferring configured paths and
falling back to a PATH lookup.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from playfit.config.models import ToolPathsConfig

logger = logging.getLogger(__name__)

# Install hints shown when a required tool is missing
TOOL_HINTS: dict[str, str] = {
    "ffmpeg": (
        "Install ffmpeg (https://ffmpeg.org) or set PLAYFIT_FFMPEG_PATH."
    ),
    "ffprobe": (
        "ffprobe ships with ffmpeg (https://ffmpeg.org); "
        "install it or set PLAYFIT_FFPROBE_PATH."
    ),
}


class MissingToolError(Exception):
    """Raised when a required external tool cannot be found."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        hint = TOOL_HINTS.get(tool_name, "")
        super().__init__(f"Required tool not available: {tool_name}. {hint}".rstrip())


def find_tool(name: str, configured_path: Path | None = None) -> Path | None:
    """Find a tool executable.

    Args:
        name: Tool name (e.g., "ffmpeg").
        configured_path: Optional configured path override.

    Returns:
        Path to tool executable, or None if not found.
    """
    if configured_path:
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "Configured path for %s is not a file: %s", name, configured_path
        )

    which_result = shutil.which(name)
    if which_result:
        return Path(which_result)

    return None


def require_tool(name: str, configured_path: Path | None = None) -> Path:
    """Get path to a required tool.

    Args:
        name: Tool name.
        configured_path: Optional configured path override.

    Returns:
        Path to the tool executable.

    Raises:
        MissingToolError: If the tool is not available.
    """
    path = find_tool(name, configured_path)
    if path is None:
        raise MissingToolError(name)
    logger.debug("Using %s at %s", name, path)
    return path


def require_tools(names: list[str], tools: ToolPathsConfig) -> dict[str, Path]:
    """Resolve every required tool before any work starts.

    Args:
        names: Tool names, each one of the ToolPathsConfig fields.
        tools: Configured tool paths.

    Returns:
        Mapping of tool name to executable path.

    Raises:
        MissingToolError: For the first tool that is not available.
    """
    return {name: require_tool(name, getattr(tools, name, None)) for name in names}
