# secure_random/constants.py
"""
Numeric limits shared by the secure random integer generator.

Python integers are unbounded, but bounds and ranges are still restricted to
the exact-integer range of an IEEE-754 double (53-bit mantissa). Callers that
exchange these values with JSON/JavaScript clients get the same boundary
behaviour on both sides.
"""

SAFE_INTEGER_BITS = 53
MAX_SAFE_INTEGER = 2**SAFE_INTEGER_BITS - 1   # 9007199254740991
MIN_SAFE_INTEGER = -MAX_SAFE_INTEGER          # -9007199254740991

BITS_PER_BYTE = 8
MIN_ENTROPY_REQUEST_BYTES = 1 # Sampling always draws at least one byte, even for range 0


def is_safe_integer(value: int) -> bool:
    """True if value lies within [MIN_SAFE_INTEGER, MAX_SAFE_INTEGER]."""
    return MIN_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER
