# secure_random/generator.py
"""
Cryptographically secure, unbiased random integers in [min, max].

Bytes from an entropy source are packed little-endian, masked down to the bit
width of the range and rejected when they still exceed it. Rejected
candidates are redrawn, never reduced modulo the range, so every value in
[min, max] is equally likely.
"""
import logging
import math
from typing import Any, Optional

from .config import get_default_entropy_source
from .constants import is_safe_integer
from .entropy_source import EntropySourceInterface
from .errors import (
    EntropySourceUnavailableError,
    MaxNotDefinedError, MaxNotGreaterThanMinError, MaxNotIntegerError, MaxOutOfSafeRangeError,
    MinNotDefinedError, MinNotIntegerError, MinOutOfSafeRangeError, RangeOutOfSafeRangeError,
)
from .parameters import calculate_parameters

logger = logging.getLogger(__name__)


def _as_integer(value: Any) -> Optional[int]:
    """
    Returns value as an int if it is a whole number (ints, and floats such as
    5.0), otherwise None. Booleans are not accepted as numbers.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def validate_bounds(min_value: Any, max_value: Any) -> tuple[int, int, int]:
    """
    Checks the bounds in a fixed order and returns (min, max, range) as ints.
    The first failing check raises; later checks are not run.

    Zero is a valid bound: only None counts as "not defined".
    """
    if min_value is None:
        raise MinNotDefinedError(min_value)
    if max_value is None:
        raise MaxNotDefinedError(max_value)

    min_int = _as_integer(min_value)
    if min_int is None:
        raise MinNotIntegerError(min_value)
    max_int = _as_integer(max_value)
    if max_int is None:
        raise MaxNotIntegerError(max_value)

    if not max_int > min_int:
        raise MaxNotGreaterThanMinError((min_int, max_int))

    if not is_safe_integer(min_int):
        raise MinOutOfSafeRangeError(min_int)
    if not is_safe_integer(max_int):
        raise MaxOutOfSafeRangeError(max_int)

    range_ = max_int - min_int
    if not is_safe_integer(range_):
        raise RangeOutOfSafeRangeError(range_)
    return min_int, max_int, range_


async def secure_random_integer(min_value: Any, max_value: Any,
                                entropy_source: Optional[EntropySourceInterface] = None) -> int:
    """
    Generates a uniformly distributed random integer r with min <= r <= max.

    Args:
        min_value: Lower bound (inclusive). Must be a safe integer.
        max_value: Upper bound (inclusive). Must be a safe integer > min_value.
        entropy_source: Where random bytes come from. Defaults to the source
                        configured via SECURE_RANDOM_ENTROPY_BACKEND.

    Returns:
        The random integer.

    Raises:
        SecureRandomError: A subclass naming the first failed validation check.
                           No entropy is consumed in that case.
        EntropySourceUnavailableError: The entropy source failed. Not retried.
    """
    min_int, _, range_ = validate_bounds(min_value, max_value)
    return await draw_in_range(min_int, range_, entropy_source)


async def draw_in_range(min_int: int, range_: int,
                        entropy_source: Optional[EntropySourceInterface] = None) -> int:
    """
    Sampling loop for bounds already checked by validate_bounds.
    Returns min_int + c for a uniformly drawn c in [0, range_].
    """
    if entropy_source is None:
        entropy_source = get_default_entropy_source()

    bit_width, byte_width, mask = calculate_parameters(range_)

    attempt = 0
    while True:
        attempt += 1
        random_bytes = await entropy_source.get_random_bytes(byte_width)
        if len(random_bytes) != byte_width:
            raise EntropySourceUnavailableError(
                f"Entropy source returned {len(random_bytes)} bytes, expected {byte_width}.")

        candidate = int.from_bytes(random_bytes, "little") & mask
        if candidate <= range_:
            return min_int + candidate

        # Outside [0, range]: discard and draw again with the same parameters.
        logger.debug("[SecureRandom] Rejected candidate %d > range %d (bit width %d, attempt %d).",
                     candidate, range_, bit_width, attempt)
