"""Compatibility decisions for containers, codecs and resolution.

Every function here is pure and total: given a PolicyConfig and one probed
property, it answers whether the property can be kept as-is (copy) or what it
must be converted to.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from playfit.config.models import PolicyConfig


class DecisionAction(Enum):
    """What to do with one property of a media file."""

    COPY = "copy"  # Already compatible, keep as-is
    CONVERT = "convert"  # Convert to Decision.value


@dataclass(frozen=True)
class Decision:
    """Outcome of one compatibility check.

    For a CONVERT decision, ``value`` is a codec name, a "W:H" scale spec or
    a container name depending on what was checked.
    """

    action: DecisionAction
    value: str | None = None

    def __post_init__(self) -> None:
        if self.action == DecisionAction.CONVERT and not self.value:
            raise ValueError("A convert decision needs a target value")
        if self.action == DecisionAction.COPY and self.value is not None:
            raise ValueError("A copy decision has no target value")

    @classmethod
    def copy(cls) -> Decision:
        return cls(DecisionAction.COPY)

    @classmethod
    def convert_to(cls, value: str) -> Decision:
        return cls(DecisionAction.CONVERT, value)

    @property
    def is_copy(self) -> bool:
        return self.action == DecisionAction.COPY

    def __str__(self) -> str:
        return "copy" if self.is_copy else str(self.value)


def decide_container(policy: PolicyConfig, extension: str) -> Decision:
    """Decide whether the container can be kept.

    Args:
        policy: Device policy.
        extension: File extension, with or without the leading dot.
    """
    if extension.lstrip(".").casefold() in policy.supported_containers:
        return Decision.copy()
    return Decision.convert_to(policy.preferred_container)


def decide_video_codec(policy: PolicyConfig, codec: str) -> Decision:
    """Decide whether the video codec can be kept."""
    if codec.casefold() in policy.supported_video_codecs:
        return Decision.copy()
    return Decision.convert_to(policy.preferred_video_codec)


def decide_audio_codec(policy: PolicyConfig, codec: str) -> Decision:
    """Decide whether an audio codec can be kept."""
    if codec.casefold() in policy.supported_audio_codecs:
        return Decision.copy()
    return Decision.convert_to(policy.preferred_audio_codec)


def decide_resolution(policy: PolicyConfig, width: int, height: int) -> Decision:
    """Decide whether the resolution fits within the device maximum.

    The larger dimension is limited to ``max_resolution``; the other one is
    left for the encoder to compute (-1) so the aspect ratio is kept. Square
    frames are constrained by width.

    Returns:
        Copy, or a convert decision with "<max>:-1" or "-1:<max>".
    """
    limit = policy.max_resolution
    if max(width, height) <= limit:
        return Decision.copy()
    if width >= height:
        return Decision.convert_to(f"{limit}:-1")
    return Decision.convert_to(f"-1:{limit}")
