"""Shared test fixtures for playfit."""

from fractions import Fraction
from pathlib import Path

import pytest

from playfit.config import PolicyConfig
from playfit.domain import AudioStream, StreamFacts, VideoStream


def _make_facts(
    path: Path | str = "/media/movie.mkv",
    codec: str = "h264",
    width: int = 1280,
    height: int = 720,
    frame_rate: Fraction = Fraction(25),
    audio: tuple[str, ...] = ("aac",),
) -> StreamFacts:
    """Build StreamFacts with sensible defaults."""
    path = Path(path)
    return StreamFacts(
        path=path,
        container=StreamFacts.container_from_path(path),
        video=VideoStream(codec=codec, width=width, height=height, frame_rate=frame_rate),
        audio_streams=tuple(
            AudioStream(index=i, codec=c) for i, c in enumerate(audio)
        ),
    )


@pytest.fixture
def make_facts():
    """Factory for StreamFacts; keyword arguments override the defaults."""
    return _make_facts


@pytest.fixture
def policy() -> PolicyConfig:
    """Default device policy."""
    return PolicyConfig()


@pytest.fixture
def compatible_facts() -> StreamFacts:
    """A file that needs no conversion under the default policy."""
    return _make_facts(audio=("aac", "ac3"))


@pytest.fixture
def incompatible_facts() -> StreamFacts:
    """A file that needs every kind of conversion under the default policy."""
    return _make_facts(
        path="/media/show.mp4",
        codec="hevc",
        width=3840,
        height=2160,
        frame_rate=Fraction(24000, 1001),
        audio=("ac3", "dts", "aac"),
    )
