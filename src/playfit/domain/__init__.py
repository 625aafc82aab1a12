"""Domain models for playfit.

Usage:
    from playfit.domain import StreamFacts, VideoStream, AudioStream
"""

from .models import (
    AudioStream,
    StreamFacts,
    VideoStream,
)

__all__ = [
    "AudioStream",
    "StreamFacts",
    "VideoStream",
]
