"""FFmpeg command building for playfit encodes.

This module builds the ffmpeg argument lists for the first (analysis) pass
and the second (or only) pass of an EncodePlan.
"""

from __future__ import annotations

import platform
from pathlib import Path

from playfit.tools.encoders import get_audio_encoder, get_video_encoder

from .plan import EncodePlan


def null_device() -> str:
    """Output sink for the first pass."""
    return "NUL" if platform.system() == "Windows" else "/dev/null"


def _video_args(plan: EncodePlan, current_pass: int | None) -> list[str]:
    """Build -c:v and the re-encode parameters.

    Args:
        plan: Encode plan.
        current_pass: 1 or 2 for a two-pass run, None for single pass.
    """
    if not plan.reencode_video:
        return ["-c:v", "copy"]

    args = ["-c:v", get_video_encoder(str(plan.video_codec))]
    if plan.target_bitrate:
        args.extend(["-b:v", plan.target_bitrate])
    if plan.scale:
        args.extend(["-vf", f"scale={plan.scale}"])
    if current_pass is not None and plan.pass_log_prefix:
        args.extend(["-pass", str(current_pass)])
        args.extend(["-passlogfile", plan.pass_log_prefix])
    return args


def _audio_args(plan: EncodePlan) -> list[str]:
    """Copy all audio, then override the streams that need conversion."""
    args = ["-c:a", "copy"]
    for index in sorted(plan.audio_overrides):
        args.extend([f"-c:a:{index}", get_audio_encoder(plan.audio_overrides[index])])
    return args


def build_first_pass_command(
    plan: EncodePlan, ffmpeg_path: Path, source: Path
) -> list[str]:
    """Build the ffmpeg command for the first pass of a two-pass encode.

    Only the primary video stream is mapped; output goes to the null muxer.

    Raises:
        ValueError: If the plan is not a two-pass plan.
    """
    if not plan.two_pass or not plan.reencode_video:
        raise ValueError("First pass requested for a single-pass plan")

    cmd = [str(ffmpeg_path), "-hide_banner", "-nostdin", "-y"]
    cmd.extend(["-i", str(source)])
    cmd.extend(["-map", "0:v:0"])
    cmd.extend(_video_args(plan, current_pass=1))
    cmd.extend(["-an", "-sn"])
    cmd.extend(["-f", "null", null_device()])
    return cmd


def build_second_pass_command(
    plan: EncodePlan, ffmpeg_path: Path, source: Path, destination: Path
) -> list[str]:
    """Build the ffmpeg command that writes the destination file.

    Maps the primary video stream, all audio streams and any subtitle
    streams. Subtitles are always copied. ``-n`` makes ffmpeg refuse to
    overwrite an existing destination.
    """
    cmd = [str(ffmpeg_path), "-hide_banner", "-nostdin", "-n"]
    cmd.extend(["-i", str(source)])
    cmd.extend(["-map", "0:v:0", "-map", "0:a?", "-map", "0:s?"])
    cmd.extend(_video_args(plan, current_pass=2 if plan.two_pass else None))
    cmd.extend(_audio_args(plan))
    cmd.extend(["-c:s", "copy"])
    cmd.append(str(destination))
    return cmd
