"""Helpers shared by the CLI commands.

Each check exits through error_exit with the matching exit code; pass
``json_output=True`` to report the error as JSON.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from playfit.config import PlayfitConfig
from playfit.domain import StreamFacts
from playfit.introspector import FFprobeStreamProbe, ProbeError, StreamProbe
from playfit.tools import MissingToolError, require_tools

from .exit_codes import ExitCode
from .output import error_exit
from .paths import SourceNotFoundError, require_source

logger = logging.getLogger(__name__)


def get_config(ctx: click.Context) -> PlayfitConfig:
    return ctx.obj["config"]


def check_source(source: Path, json_output: bool = False) -> Path:
    """Exit with INPUT_ERROR unless the source file exists."""
    try:
        return require_source(source)
    except SourceNotFoundError as e:
        error_exit(str(e), ExitCode.INPUT_ERROR, json_output)


def check_tools(
    ctx: click.Context, names: list[str], json_output: bool = False
) -> dict[str, Path]:
    """Resolve the required tools or exit with TOOL_NOT_AVAILABLE."""
    try:
        return require_tools(names, get_config(ctx).tools)
    except MissingToolError as e:
        error_exit(str(e), ExitCode.TOOL_NOT_AVAILABLE, json_output)


def probe_source(
    ctx: click.Context, source: Path, ffprobe_path: Path, json_output: bool = False
) -> StreamFacts:
    """Probe the source, exiting with PROBE_FAILED on error.

    A probe placed in ``ctx.obj["probe"]`` is used instead of ffprobe.
    """
    probe: StreamProbe = ctx.obj.get("probe") or FFprobeStreamProbe(ffprobe_path)
    try:
        return probe.probe(source)
    except ProbeError as e:
        logger.debug("Probe failed for %s", source, exc_info=True)
        error_exit(f"Could not probe {source}: {e}", ExitCode.PROBE_FAILED, json_output)
