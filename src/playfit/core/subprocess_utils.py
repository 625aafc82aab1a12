"""Subprocess utilities for external tool invocation.

This module provides the two subprocess wrappers used by playfit:

- run_command: captured output with a timeout, used for ffprobe queries
- run_passthrough: inherited stdio with no timeout, used for ffmpeg encodes
  so the user sees encoder progress
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffmpeg invocation
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _command_name(str_args: list[str]) -> str:
    return Path(str_args[0]).name if str_args else "unknown"


def run_command(
    args: list[str | Path],
    timeout: int = 60,
    errors: str = "replace",
    **kwargs: Any,
) -> tuple[str, str, int]:
    """Run external command and capture its output.

    Args:
        args: Command and arguments. Path objects are converted to strings.
        timeout: Timeout in seconds (default 60).
        errors: Error handling mode for text decoding (default "replace").
        **kwargs: Additional subprocess.run arguments.

    Returns:
        Tuple of (stdout, stderr, returncode).

    Raises:
        subprocess.TimeoutExpired: If command times out. subprocess.run()
            kills the child before raising.
    """
    str_args = [str(arg) for arg in args]
    command_name = _command_name(str_args)

    logger.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": command_name, "arg_count": len(str_args)},
    )

    start_time = time.monotonic()

    try:
        result = subprocess.run(  # nosec B603 - caller validates args
            str_args,
            capture_output=True,
            text=True,
            errors=errors,
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired:
        elapsed = time.monotonic() - start_time
        logger.warning(
            "Command timed out after %ds: %s",
            timeout,
            " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
            extra={
                "command": command_name,
                "timeout_seconds": timeout,
                "elapsed_seconds": round(elapsed, 3),
            },
        )
        raise

    elapsed = time.monotonic() - start_time
    logger.debug(
        "Command completed",
        extra={
            "command": command_name,
            "elapsed_seconds": round(elapsed, 3),
            "returncode": result.returncode,
        },
    )

    return result.stdout or "", result.stderr or "", result.returncode


def run_passthrough(args: list[str | Path]) -> int:
    """Run external command attached to the caller's terminal.

    Blocks until the process exits. stdin is not forwarded.

    Args:
        args: Command and arguments.

    Returns:
        The process exit code.
    """
    str_args = [str(arg) for arg in args]
    command_name = _command_name(str_args)

    logger.info(
        "Running %s",
        command_name,
        extra={"command": command_name, "argv": " ".join(str_args)},
    )

    start_time = time.monotonic()
    result = subprocess.run(  # nosec B603 - argv is built from validated plan
        str_args,
        stdin=subprocess.DEVNULL,
        check=False,
    )
    elapsed = time.monotonic() - start_time

    logger.info(
        "%s exited with code %d (%.1fs)",
        command_name,
        result.returncode,
        elapsed,
        extra={
            "command": command_name,
            "returncode": result.returncode,
            "elapsed_seconds": round(elapsed, 3),
        },
    )
    return result.returncode
