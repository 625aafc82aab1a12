"""Source and destination path checks for CLI commands."""

from __future__ import annotations

from pathlib import Path


class SourceNotFoundError(Exception):
    """Raised when the source media file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Source not found: {path}")


class DestinationExistsError(Exception):
    """Raised when the output file already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Destination already exists: {path}")


class DestinationContainerError(Exception):
    """Raised when a destination file's extension is not the output container.

    ffmpeg picks the muxer from the extension, so a mismatch would write a
    container the device does not accept.
    """

    def __init__(self, path: Path, container: str) -> None:
        self.path = path
        self.container = container
        super().__init__(
            f"Destination {path} must have the .{container} extension "
            "(or pass a directory)"
        )


def require_source(source: Path) -> Path:
    """Check that the source is an existing file.

    Raises:
        SourceNotFoundError: If it is missing or not a regular file.
    """
    if not source.is_file():
        raise SourceNotFoundError(source)
    return source


def resolve_destination(destination: Path, source: Path, container: str) -> Path:
    """Resolve the output file path.

    If ``destination`` is an existing directory the output is written there
    as ``<source stem>.<container>``; otherwise ``destination`` is the output
    file itself and its extension must name the container.

    Args:
        destination: Directory or file given on the command line.
        source: Source media file.
        container: Output container extension (without dot).

    Returns:
        Output file path.

    Raises:
        DestinationContainerError: If a file destination has another extension.
        DestinationExistsError: If the output file already exists.
    """
    if destination.is_dir():
        output = destination / f"{source.stem}.{container}"
    else:
        if destination.suffix.lstrip(".").casefold() != container.casefold():
            raise DestinationContainerError(destination, container)
        output = destination

    if output.exists():
        raise DestinationExistsError(output)
    return output
