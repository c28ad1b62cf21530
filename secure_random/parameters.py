# secure_random/parameters.py
"""
Derives the sampling parameters (bit width, byte width, mask) for a range.
"""
from typing import NamedTuple

from .constants import BITS_PER_BYTE, MIN_ENTROPY_REQUEST_BYTES


class RandomParameters(NamedTuple):
    bit_width: int   # smallest b such that 2**b - 1 >= range
    byte_width: int  # bytes requested per draw, never less than 1
    mask: int        # (1 << bit_width) - 1


def calculate_parameters(range_: int) -> RandomParameters:
    """
    Computes how many random bits/bytes are needed to cover [0, range_].

    Args:
        range_: Non-negative integer, the distance between max and min.

    Returns:
        RandomParameters(bit_width, byte_width, mask). For range_ == 0 the
        bit width and mask are 0 but byte_width is still 1, so a draw always
        consumes entropy.

    Raises:
        TypeError: If range_ is not an int.
        ValueError: If range_ is negative.
    """
    if not isinstance(range_, int) or isinstance(range_, bool):
        raise TypeError("Range must be an integer.")
    if range_ < 0:
        raise ValueError("Range must be a non-negative integer.")

    bit_width = range_.bit_length()
    byte_width = max(MIN_ENTROPY_REQUEST_BYTES, -(-bit_width // BITS_PER_BYTE))
    mask = (1 << bit_width) - 1
    return RandomParameters(bit_width=bit_width, byte_width=byte_width, mask=mask)
