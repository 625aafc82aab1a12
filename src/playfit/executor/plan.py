"""Encode planning.

Turns a DecisionReport into an EncodePlan: which streams are copied, what the
video is re-encoded to, at what bitrate and scale, and in how many passes.
Planning is pure; the same report and policy always give an equal plan.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from playfit.config.models import PolicyConfig
from playfit.policy.bitrate import compute_average_bitrate
from playfit.policy.report import DecisionReport

logger = logging.getLogger(__name__)

# ffmpeg/libx264 write <prefix>-0.log and <prefix>-0.log.mbtree
PASS_LOG_SUFFIXES = ("-0.log", "-0.log.mbtree")


def default_pass_log_prefix() -> str:
    """Pass-log prefix unique to this process.

    Separate playfit processes working in the same directory get different
    prefixes; calls within one process get the same one.
    """
    return f"playfit-{os.getpid()}-2pass"


def pass_log_artifacts(prefix: str) -> tuple[Path, ...]:
    """Paths of the log files a two-pass encode leaves behind."""
    return tuple(Path(prefix + suffix) for suffix in PASS_LOG_SUFFIXES)


@dataclass(frozen=True)
class EncodePlan:
    """Concrete encode parameters for one file."""

    container: str
    """Output container (file extension without dot)."""

    video_codec: str | None = None
    """Target video codec, or None to copy the video stream."""

    scale: str | None = None
    """Scale spec "W:H" (one side may be -1), or None for no scaling."""

    target_bitrate: str | None = None
    """Average video bitrate like "5184k" (re-encode only)."""

    pass_count: int = 1

    audio_overrides: Mapping[int, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    """Audio stream index -> target codec; streams not listed are copied."""

    pass_log_prefix: str | None = None
    """Pass-log file prefix (two-pass only)."""

    def __hash__(self) -> int:
        # MappingProxyType is unhashable; hash the overrides as sorted pairs
        return hash(
            (
                self.container,
                self.video_codec,
                self.scale,
                self.target_bitrate,
                self.pass_count,
                tuple(sorted(self.audio_overrides.items())),
                self.pass_log_prefix,
            )
        )

    @property
    def reencode_video(self) -> bool:
        return self.video_codec is not None

    @property
    def two_pass(self) -> bool:
        return self.pass_count == 2

    @property
    def pass_log_files(self) -> tuple[Path, ...]:
        if self.pass_log_prefix is None:
            return ()
        return pass_log_artifacts(self.pass_log_prefix)


def build_plan(
    report: DecisionReport,
    policy: PolicyConfig,
    pass_log_prefix: str | None = None,
) -> EncodePlan:
    """Build the encode plan for a report.

    The video is copied only when container, resolution and video codec are
    all compatible. A re-encode triggered by resolution or container alone
    still needs a codec and uses the preferred one.

    Args:
        report: Decisions for the file.
        policy: Device policy.
        pass_log_prefix: Prefix for two-pass logs (default: per process).

    Returns:
        EncodePlan for the file.
    """
    facts = report.facts
    video = facts.video

    if report.container.is_copy:
        container = facts.container
    else:
        container = str(report.container.value)

    video_codec: str | None = None
    scale: str | None = None
    target_bitrate: str | None = None

    if not (report.container.is_copy and report.resolution.is_copy and report.video.is_copy):
        video_codec = (
            policy.preferred_video_codec if report.video.is_copy else report.video.value
        )
        if not report.resolution.is_copy:
            scale = report.resolution.value
        target_bitrate = compute_average_bitrate(
            video.width, video.height, video.frame_rate, policy.bits_per_pixel
        )

    pass_count = 2 if video_codec is not None and policy.pass_count == 2 else 1
    prefix = None
    if pass_count == 2:
        prefix = pass_log_prefix or default_pass_log_prefix()

    audio_overrides = {
        stream.index: str(decision.value)
        for stream, decision in zip(facts.audio_streams, report.audio)
        if not decision.is_copy
    }

    plan = EncodePlan(
        container=container,
        video_codec=video_codec,
        scale=scale,
        target_bitrate=target_bitrate,
        pass_count=pass_count,
        audio_overrides=MappingProxyType(audio_overrides),
        pass_log_prefix=prefix,
    )
    logger.debug(
        "Plan for %s: video=%s scale=%s bitrate=%s passes=%d audio=%s container=%s",
        facts.path,
        video_codec or "copy",
        scale,
        target_bitrate,
        pass_count,
        dict(audio_overrides),
        container,
    )
    return plan
