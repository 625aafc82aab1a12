"""Centralized exit codes for all CLI commands.

Exit codes:
    0: Success (for ``info``: the file is fully compatible)
    1: General error
    2: Input error (source missing, destination exists)
    3: Conversion needed (``info`` only)
    4: Required external tool not available
    5: Probe failed
    6: Invalid configuration

``start`` exits with the encoder's own exit code when an encode fails.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for playfit CLI commands."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INPUT_ERROR = 2
    CONVERSION_NEEDED = 3
    TOOL_NOT_AVAILABLE = 4
    PROBE_FAILED = 5
    CONFIG_ERROR = 6
