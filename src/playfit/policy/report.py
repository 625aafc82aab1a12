"""Decision report for one media file.

A DecisionReport collects the container, resolution, video and per-audio
stream decisions for a file. It drives both the ``info`` output and the
encode planner.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from playfit.config.models import PolicyConfig
from playfit.domain import StreamFacts
from playfit.policy.decisions import (
    Decision,
    decide_audio_codec,
    decide_container,
    decide_resolution,
    decide_video_codec,
)


@dataclass(frozen=True)
class DecisionReport:
    """All compatibility decisions for one file."""

    facts: StreamFacts
    container: Decision
    resolution: Decision
    video: Decision
    audio: tuple[Decision, ...]  # Index-aligned with facts.audio_streams

    def __post_init__(self) -> None:
        if len(self.audio) != len(self.facts.audio_streams):
            raise ValueError(
                f"Report has {len(self.audio)} audio decision(s) for "
                f"{len(self.facts.audio_streams)} audio stream(s)"
            )

    @property
    def all_copy(self) -> bool:
        """True if the file plays on the device without any conversion."""
        return (
            self.container.is_copy
            and self.resolution.is_copy
            and self.video.is_copy
            and all(d.is_copy for d in self.audio)
        )


def build_report(policy: PolicyConfig, facts: StreamFacts) -> DecisionReport:
    """Apply the policy to every probed property of a file.

    Args:
        policy: Device policy.
        facts: Probed stream facts.

    Returns:
        DecisionReport with audio decisions in stream order.
    """
    video = facts.video
    return DecisionReport(
        facts=facts,
        container=decide_container(policy, facts.container),
        resolution=decide_resolution(policy, video.width, video.height),
        video=decide_video_codec(policy, video.codec),
        audio=tuple(decide_audio_codec(policy, a.codec) for a in facts.audio_streams),
    )


def _describe(current: str, decision: Decision) -> str:
    if decision.is_copy:
        return f"{current} (copy)"
    return f"{current} -> {decision.value}"


def format_human(report: DecisionReport) -> str:
    """Format a report for terminal output.

    Args:
        report: The report to format.

    Returns:
        Multi-line description ending with a summary line.
    """
    facts = report.facts
    container = facts.container or "(none)"
    lines = [
        f"File: {facts.path}",
        f"  container:  {_describe(container, report.container)}",
        f"  resolution: {_describe(facts.video.resolution, report.resolution)}",
        f"  video:      {_describe(facts.video.codec, report.video)}",
    ]

    if not facts.audio_streams:
        lines.append("  audio:      (no audio streams)")
    for stream, decision in zip(facts.audio_streams, report.audio):
        lines.append(f"  audio #{stream.index}:   {_describe(stream.codec, decision)}")

    lines.append("")
    if report.all_copy:
        lines.append("Compatible: no conversion needed")
    else:
        lines.append("Conversion needed")
    return "\n".join(lines)


def report_to_dict(report: DecisionReport) -> dict[str, Any]:
    """Convert a report to a JSON-serializable dictionary."""
    facts = report.facts
    return {
        "file": str(facts.path),
        "all_copy": report.all_copy,
        "container": {"current": facts.container, "decision": str(report.container)},
        "resolution": {
            "current": facts.video.resolution,
            "decision": str(report.resolution),
        },
        "video": {
            "current": facts.video.codec,
            "frame_rate": str(facts.video.frame_rate),
            "decision": str(report.video),
        },
        "audio": [
            {"index": stream.index, "current": stream.codec, "decision": str(d)}
            for stream, d in zip(facts.audio_streams, report.audio)
        ],
    }


def format_json(report: DecisionReport) -> str:
    """Format a report as JSON."""
    return json.dumps(report_to_dict(report), indent=2)
