"""Encode planning and execution."""

from playfit.executor.command import (
    build_first_pass_command,
    build_second_pass_command,
    null_device,
)
from playfit.executor.executor import (
    ENCODE_STATE_TRANSITIONS,
    EncodeExecutor,
    EncodeResult,
    EncodeState,
    InvalidEncodeTransitionError,
    remove_pass_logs,
)
from playfit.executor.ffmpeg import Encoder, FFmpegEncoder
from playfit.executor.plan import (
    EncodePlan,
    build_plan,
    default_pass_log_prefix,
    pass_log_artifacts,
)

__all__ = [
    "ENCODE_STATE_TRANSITIONS",
    "Encoder",
    "EncodeExecutor",
    "EncodePlan",
    "EncodeResult",
    "EncodeState",
    "FFmpegEncoder",
    "InvalidEncodeTransitionError",
    "build_first_pass_command",
    "build_plan",
    "build_second_pass_command",
    "default_pass_log_prefix",
    "null_device",
    "pass_log_artifacts",
    "remove_pass_logs",
]
