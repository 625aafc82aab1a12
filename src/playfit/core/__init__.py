"""Core utilities shared across playfit modules."""

from playfit.core.subprocess_utils import run_command, run_passthrough

__all__ = [
    "run_command",
    "run_passthrough",
]
