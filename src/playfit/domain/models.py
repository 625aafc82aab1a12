"""Domain models for probed media files.

These models hold the stream facts a compatibility decision is made from.
They are immutable once the probe has produced them.
"""

from dataclasses import dataclass, field
from fractions import Fraction
from pathlib import Path


@dataclass(frozen=True)
class VideoStream:
    """Primary video stream of a media file."""

    codec: str
    width: int
    height: int
    frame_rate: Fraction  # r_frame_rate as reported by ffprobe, e.g. 24000/1001

    @property
    def resolution(self) -> str:
        """Resolution as WIDTHxHEIGHT."""
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class AudioStream:
    """One audio stream of a media file."""

    index: int  # Position among audio streams (0-based), matches ffmpeg 0:a:N
    codec: str


@dataclass(frozen=True)
class StreamFacts:
    """Everything a compatibility decision needs to know about a file."""

    path: Path
    container: str  # Lowercased file extension without the dot
    video: VideoStream
    audio_streams: tuple[AudioStream, ...] = field(default_factory=tuple)

    @classmethod
    def container_from_path(cls, path: Path) -> str:
        """Derive the container token from a file name."""
        return path.suffix.lstrip(".").casefold()
