"""Bit rate estimation and parsing."""

from __future__ import annotations

# Motion factor 2 with a 0.07 bits-per-pixel constant. Tuned for AVC;
# other codec families need their own constant or an explicit bit rate.
BITS_PER_PIXEL = 0.07
MOTION_FACTOR = 2


def estimate_bit_rate(width: int, height: int, frame_rate: int) -> int:
    """Estimate a reasonable AVC bit rate for the given output parameters.

    This is a rule-of-thumb approximation, not a guarantee of output quality
    or file size.

    Args:
        width: Output width in pixels.
        height: Output height in pixels.
        frame_rate: Output frame rate in frames per second.

    Returns:
        Estimated bit rate in bits per second, never below 1.
    """
    return max(1, round(BITS_PER_PIXEL * MOTION_FACTOR * width * height * frame_rate))


def parse_bit_rate(bit_rate_str: str) -> int | None:
    """Parse a bit rate string like '10M' or '5000k' to bits per second.

    Args:
        bit_rate_str: Bit rate with M/m (megabits) or K/k (kilobits) suffix,
            or a plain number of bits per second.

    Returns:
        Bit rate in bits per second, or None if parsing fails.

    Examples:
        parse_bit_rate("10M") -> 10_000_000
        parse_bit_rate("5000k") -> 5_000_000
        parse_bit_rate("2500000") -> 2_500_000
    """
    if not bit_rate_str:
        return None

    bit_rate_str = bit_rate_str.strip()
    try:
        if bit_rate_str[-1].casefold() == "m":
            return int(float(bit_rate_str[:-1]) * 1_000_000)
        elif bit_rate_str[-1].casefold() == "k":
            return int(float(bit_rate_str[:-1]) * 1_000)
        else:
            return int(bit_rate_str)
    except (ValueError, IndexError):
        return None
