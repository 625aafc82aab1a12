"""Compatibility policy evaluation.

- decisions: per-property copy/convert decisions
- bitrate: bits-per-pixel average bitrate
- report: per-file DecisionReport and its formatters
"""

from playfit.policy.bitrate import compute_average_bitrate
from playfit.policy.decisions import (
    Decision,
    DecisionAction,
    decide_audio_codec,
    decide_container,
    decide_resolution,
    decide_video_codec,
)
from playfit.policy.report import (
    DecisionReport,
    build_report,
    format_human,
    format_json,
    report_to_dict,
)

__all__ = [
    "Decision",
    "DecisionAction",
    "DecisionReport",
    "build_report",
    "compute_average_bitrate",
    "decide_audio_codec",
    "decide_container",
    "decide_resolution",
    "decide_video_codec",
    "format_human",
    "format_json",
    "report_to_dict",
]
