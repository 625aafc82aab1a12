"""Tests for FFprobeStreamProbe."""

import subprocess
from fractions import Fraction
from pathlib import Path
from unittest.mock import patch

import pytest

from playfit.domain import StreamFacts
from playfit.introspector import (
    FFprobeStreamProbe,
    ProbeError,
    StubStreamProbe,
)

FFPROBE = Path("/usr/bin/ffprobe")
MEDIA = Path("/media/Movie.MP4")


def _fake_run(video: str, audio: str, rc: int = 0, stderr: str = ""):
    def run(cmd, timeout):
        stream_class = cmd[cmd.index("-select_streams") + 1]
        return (video if stream_class == "v" else audio), stderr, rc

    return run


class TestBuildQuery:
    """Tests for FFprobeStreamProbe.build_query."""

    def test_video_query(self) -> None:
        """The video query selects video streams as CSV."""
        probe = FFprobeStreamProbe(FFPROBE)
        cmd = probe.build_query(MEDIA, "v", ("codec_name", "width"))
        assert cmd == [
            "/usr/bin/ffprobe",
            "-v",
            "error",
            "-select_streams",
            "v",
            "-show_entries",
            "stream=codec_name,width",
            "-of",
            "csv=p=0",
            "/media/Movie.MP4",
        ]


class TestProbe:
    """Tests for FFprobeStreamProbe.probe."""

    def test_probe_builds_facts(self) -> None:
        """Video and audio queries are combined into StreamFacts."""
        probe = FFprobeStreamProbe(FFPROBE)
        with patch(
            "playfit.introspector.ffprobe.run_command",
            side_effect=_fake_run("hevc,3840,2160,24000/1001\n", "ac3\naac\n"),
        ):
            facts = probe.probe(MEDIA)

        assert facts.path == MEDIA
        assert facts.container == "mp4"
        assert facts.video.codec == "hevc"
        assert facts.video.frame_rate == Fraction(24000, 1001)
        assert [a.codec for a in facts.audio_streams] == ["ac3", "aac"]

    def test_non_zero_exit(self) -> None:
        """ffprobe failing is a probe error carrying its stderr."""
        probe = FFprobeStreamProbe(FFPROBE)
        with patch(
            "playfit.introspector.ffprobe.run_command",
            side_effect=_fake_run("", "", rc=1, stderr="Invalid data found"),
        ):
            with pytest.raises(ProbeError, match="Invalid data found"):
                probe.probe(MEDIA)

    def test_timeout(self) -> None:
        """A hung ffprobe is a probe error."""
        probe = FFprobeStreamProbe(FFPROBE)
        with patch(
            "playfit.introspector.ffprobe.run_command",
            side_effect=subprocess.TimeoutExpired(cmd="ffprobe", timeout=60),
        ):
            with pytest.raises(ProbeError, match="timed out"):
                probe.probe(MEDIA)

    def test_no_video_stream(self) -> None:
        """A file without video cannot be probed."""
        probe = FFprobeStreamProbe(FFPROBE)
        with patch(
            "playfit.introspector.ffprobe.run_command",
            side_effect=_fake_run("", "aac\n"),
        ):
            with pytest.raises(ProbeError, match="No video stream"):
                probe.probe(MEDIA)


class TestStubStreamProbe:
    """Tests for StubStreamProbe."""

    def test_returns_registered_facts(self, compatible_facts: StreamFacts) -> None:
        probe = StubStreamProbe()
        probe.add(compatible_facts)

        assert probe.probe(compatible_facts.path) is compatible_facts
        assert probe.probed == [compatible_facts.path]

    def test_unknown_path(self) -> None:
        with pytest.raises(ProbeError):
            StubStreamProbe().probe(Path("/nowhere.mkv"))
