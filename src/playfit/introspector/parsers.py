"""Pure parsing functions for ffprobe CSV output.

ffprobe is queried with ``-of csv=p=0``, which prints one record per stream
and one comma-separated field per requested entry, in stream-index order.
These functions turn that text into domain objects. They do no I/O.
"""

import logging
from fractions import Fraction

from playfit.domain import AudioStream, VideoStream
from playfit.introspector.interface import ProbeError

logger = logging.getLogger(__name__)

VIDEO_FIELDS = ("codec_name", "width", "height", "r_frame_rate")
AUDIO_FIELDS = ("codec_name",)


def split_records(output: str, field_count: int) -> list[list[str]]:
    """Split CSV probe output into records.

    Blank lines are skipped. Fields beyond ``field_count`` are dropped.

    Args:
        output: Raw ffprobe stdout.
        field_count: Number of fields each record must have.

    Returns:
        List of records, each a list of ``field_count`` stripped fields.

    Raises:
        ProbeError: If a record has fewer fields than required.
    """
    records: list[list[str]] = []
    for line_no, line in enumerate(output.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        fields = [f.strip() for f in line.split(",")]
        if len(fields) < field_count:
            raise ProbeError(
                f"Probe record {line_no} has {len(fields)} field(s), "
                f"expected {field_count}: '{line}'"
            )
        if len(fields) > field_count:
            logger.debug("Ignoring extra probe fields in record %d: %s", line_no, line)
        records.append(fields[:field_count])
    return records


def parse_frame_rate(value: str) -> Fraction:
    """Parse an ffprobe frame rate ("24000/1001", "25/1" or "25").

    Raises:
        ProbeError: If the value is unparsable or not positive.
    """
    try:
        rate = Fraction(value)
    except (ValueError, ZeroDivisionError) as e:
        raise ProbeError(f"Invalid frame rate: '{value}'") from e
    if rate <= 0:
        raise ProbeError(f"Frame rate must be positive: '{value}'")
    return rate


def _parse_dimension(value: str, name: str) -> int:
    try:
        dimension = int(value)
    except ValueError as e:
        raise ProbeError(f"Invalid {name}: '{value}'") from e
    if dimension <= 0:
        raise ProbeError(f"{name.capitalize()} must be positive: '{value}'")
    return dimension


def _parse_codec(value: str) -> str:
    codec = value.casefold()
    if not codec:
        raise ProbeError("Empty codec name in probe output")
    return codec


def parse_video_output(output: str) -> VideoStream:
    """Parse the primary video stream from ffprobe output.

    The first record is the primary stream; any further video streams
    (cover art, alternate angles) are ignored.

    Raises:
        ProbeError: If there is no video record or it is malformed.
    """
    records = split_records(output, len(VIDEO_FIELDS))
    if not records:
        raise ProbeError("No video stream found")
    if len(records) > 1:
        logger.info("File has %d video streams, using the first", len(records))

    codec, width, height, frame_rate = records[0]
    return VideoStream(
        codec=_parse_codec(codec),
        width=_parse_dimension(width, "width"),
        height=_parse_dimension(height, "height"),
        frame_rate=parse_frame_rate(frame_rate),
    )


def parse_audio_output(output: str) -> tuple[AudioStream, ...]:
    """Parse all audio streams from ffprobe output.

    No records means no audio streams, which is not an error.

    Raises:
        ProbeError: If a record is malformed.
    """
    records = split_records(output, len(AUDIO_FIELDS))
    return tuple(
        AudioStream(index=index, codec=_parse_codec(record[0]))
        for index, record in enumerate(records)
    )
