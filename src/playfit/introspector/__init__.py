"""Introspector module for playfit.

- StreamProbe: Protocol defining the probe interface
- FFprobeStreamProbe: Production implementation using ffprobe
- StubStreamProbe: Stub implementation for testing
- ProbeError: Exception for probe failures
"""

from playfit.introspector.ffprobe import FFprobeStreamProbe
from playfit.introspector.interface import (
    ProbeError,
    StreamProbe,
)
from playfit.introspector.parsers import (
    parse_audio_output,
    parse_frame_rate,
    parse_video_output,
)
from playfit.introspector.stub import StubStreamProbe

__all__ = [
    "StreamProbe",
    "ProbeError",
    "FFprobeStreamProbe",
    "StubStreamProbe",
    "parse_audio_output",
    "parse_frame_rate",
    "parse_video_output",
]
