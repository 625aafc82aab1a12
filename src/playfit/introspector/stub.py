"""Stub implementation of StreamProbe for development and testing."""

from pathlib import Path

from playfit.domain import StreamFacts
from playfit.introspector.interface import ProbeError


class StubStreamProbe:
    """Stub probe that returns preset StreamFacts.

    Facts are registered per path; probing any other path raises ProbeError,
    the same way an unreadable file would.
    """

    def __init__(self, facts: dict[Path, StreamFacts] | None = None) -> None:
        self._facts: dict[Path, StreamFacts] = dict(facts or {})
        self.probed: list[Path] = []

    def add(self, facts: StreamFacts) -> None:
        """Register facts for ``facts.path``."""
        self._facts[facts.path] = facts

    def probe(self, path: Path) -> StreamFacts:
        """Return the registered facts for ``path``.

        Raises:
            ProbeError: If no facts are registered for the path.
        """
        self.probed.append(path)
        try:
            return self._facts[path]
        except KeyError:
            raise ProbeError(f"No video stream found: {path}") from None
