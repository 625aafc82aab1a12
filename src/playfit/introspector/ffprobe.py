"""ffprobe-based implementation of the StreamProbe protocol."""

import logging
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
from pathlib import Path

from playfit.core.subprocess_utils import run_command
from playfit.domain import StreamFacts
from playfit.introspector.interface import ProbeError
from playfit.introspector.parsers import (
    AUDIO_FIELDS,
    VIDEO_FIELDS,
    parse_audio_output,
    parse_video_output,
)

logger = logging.getLogger(__name__)


class FFprobeStreamProbe:
    """ffprobe-based implementation of StreamProbe.

    Runs one query per stream class (video, audio) and parses the CSV output.
    """

    PROBE_TIMEOUT = 60  # Prevent hangs on corrupted files

    def __init__(self, ffprobe_path: Path) -> None:
        """Initialize the probe.

        Args:
            ffprobe_path: Path to the ffprobe executable.
        """
        self._ffprobe_path = ffprobe_path

    def build_query(
        self, path: Path, stream_class: str, entries: tuple[str, ...]
    ) -> list[str]:
        """Build the ffprobe command for one stream class.

        Args:
            path: Media file.
            stream_class: ffprobe stream specifier ("v" or "a").
            entries: Stream entries to print, in order.

        Returns:
            Command argument list.
        """
        return [
            str(self._ffprobe_path),
            "-v",
            "error",
            "-select_streams",
            stream_class,
            "-show_entries",
            "stream=" + ",".join(entries),
            "-of",
            "csv=p=0",
            str(path),
        ]

    def _query(self, path: Path, stream_class: str, entries: tuple[str, ...]) -> str:
        cmd = self.build_query(path, stream_class, entries)
        try:
            stdout, stderr, returncode = run_command(cmd, timeout=self.PROBE_TIMEOUT)
        except subprocess.TimeoutExpired as e:
            raise ProbeError(
                f"ffprobe timed out for {path} after {e.timeout}s"
            ) from e
        except OSError as e:
            raise ProbeError(f"Could not run ffprobe for {path}: {e}") from e

        if returncode != 0:
            raise ProbeError(
                f"ffprobe failed for {path} (exit {returncode}): {stderr.strip()}"
            )
        return stdout

    def probe(self, path: Path) -> StreamFacts:
        """Probe a media file.

        Args:
            path: Path to the media file.

        Returns:
            StreamFacts for the file.

        Raises:
            ProbeError: If ffprobe fails or its output is malformed.
        """
        video_output = self._query(path, "v", VIDEO_FIELDS)
        try:
            video = parse_video_output(video_output)
        except ProbeError as e:
            raise ProbeError(f"{path}: {e}") from e

        audio_output = self._query(path, "a", AUDIO_FIELDS)
        try:
            audio_streams = parse_audio_output(audio_output)
        except ProbeError as e:
            raise ProbeError(f"{path}: {e}") from e

        facts = StreamFacts(
            path=path,
            container=StreamFacts.container_from_path(path),
            video=video,
            audio_streams=audio_streams,
        )
        logger.debug(
            "Probed %s: container=%s video=%s %s @ %s fps, audio=%s",
            path,
            facts.container,
            video.codec,
            video.resolution,
            video.frame_rate,
            [a.codec for a in audio_streams],
        )
        return facts
