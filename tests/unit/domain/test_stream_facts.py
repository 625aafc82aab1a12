"""Tests for the stream fact models."""

from fractions import Fraction
from pathlib import Path

import pytest

from playfit.domain import StreamFacts, VideoStream


class TestStreamFacts:
    """Tests for StreamFacts."""

    @pytest.mark.parametrize(
        ("name", "container"),
        [("a.MKV", "mkv"), ("b.tar.avi", "avi"), ("noext", ""), ("/x/y.Mp4", "mp4")],
    )
    def test_container_from_path(self, name: str, container: str) -> None:
        assert StreamFacts.container_from_path(Path(name)) == container

    def test_resolution(self) -> None:
        video = VideoStream(codec="h264", width=1280, height=720, frame_rate=Fraction(25))
        assert video.resolution == "1280x720"
