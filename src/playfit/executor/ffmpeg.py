"""Encoder collaborator running ffmpeg as a subprocess."""

import logging
from typing import Protocol

from playfit.core.subprocess_utils import run_passthrough

logger = logging.getLogger(__name__)

# Exit code reported when the encoder binary cannot be started (as in sh)
EXIT_CANNOT_EXECUTE = 127


class Encoder(Protocol):
    """Runs one encoder command and reports its exit code."""

    def run(self, args: list[str]) -> int:
        """Run the command to completion.

        Args:
            args: Full command line.

        Returns:
            Process exit code; 0 means success.
        """
        ...


class FFmpegEncoder:
    """Runs ffmpeg synchronously with the caller's stdout/stderr."""

    def run(self, args: list[str]) -> int:
        try:
            return run_passthrough(args)
        except OSError as e:
            logger.error("Could not start %s: %s", args[0] if args else "encoder", e)
            return EXIT_CANNOT_EXECUTE
