"""Average video bitrate from resolution and frame rate.

The target bitrate scales with the number of pixels per second:

    bitrate = bits_per_pixel * width * height * frame_rate

and is expressed in whole kbit/s, truncated (not rounded). Arithmetic is done
with Fractions so the truncation does not depend on float rounding; the float
bits-per-pixel setting is taken at its decimal value (0.3 is exactly 3/10).
"""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction


def _exact(value: float | Fraction | int) -> Fraction:
    if isinstance(value, float):
        return Fraction(Decimal(repr(value)))
    return Fraction(value)


def compute_average_bitrate(
    width: int,
    height: int,
    frame_rate: Fraction | float | int,
    bits_per_pixel: float,
) -> str:
    """Compute the target average video bitrate.

    Args:
        width: Source width in pixels.
        height: Source height in pixels.
        frame_rate: Source frame rate (frames per second).
        bits_per_pixel: Bits spent per pixel per frame.

    Returns:
        Bitrate string in kbit/s, e.g. "5184k".

    Raises:
        ValueError: If any input is not positive.

    Examples:
        compute_average_bitrate(1280, 540, 25, 0.3) -> "5184k"
        compute_average_bitrate(1920, 1080, Fraction(24000, 1001), 0.3) -> "14915k"
    """
    rate = _exact(frame_rate)
    bpp = _exact(bits_per_pixel)

    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid resolution: {width}x{height}")
    if rate <= 0:
        raise ValueError(f"Frame rate must be positive, got {frame_rate}")
    if bpp <= 0:
        raise ValueError(f"Bits per pixel must be positive, got {bits_per_pixel}")

    kbits_per_second = bpp * width * height * rate / 1000
    return f"{math.floor(kbits_per_second)}k"
