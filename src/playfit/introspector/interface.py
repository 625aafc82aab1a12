"""StreamProbe interface for media stream facts."""

from pathlib import Path
from typing import Protocol

from playfit.domain import StreamFacts


class ProbeError(Exception):
    """Raised when probe output is missing, malformed or unobtainable."""

    pass


class StreamProbe(Protocol):
    """Protocol for stream probe implementations.

    A probe reports the primary video stream and every audio stream of a
    media file. It makes no decisions.
    """

    def probe(self, path: Path) -> StreamFacts:
        """Probe a media file.

        Args:
            path: Path to the media file.

        Returns:
            StreamFacts for the file.

        Raises:
            ProbeError: If the file cannot be probed or has no video stream.
        """
        ...
