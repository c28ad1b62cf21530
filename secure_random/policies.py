# secure_random/policies.py
"""
Latency policies layered on top of secure_random_integer.

The generator itself loops until it accepts a candidate. Callers that need a
worst-case bound wrap it here instead of changing the core.
"""
import asyncio
import logging
from typing import Any, Optional

from .entropy_source import EntropySourceInterface
from .errors import RandomGenerationTimeoutError
from .generator import draw_in_range, validate_bounds

logger = logging.getLogger(__name__)


async def secure_random_integer_with_timeout(min_value: Any, max_value: Any, timeout_sec: float,
                                             entropy_source: Optional[EntropySourceInterface] = None) -> int:
    """
    Like secure_random_integer, but gives up after `timeout_sec` seconds.

    Validation errors are raised before the clock starts.

    Raises:
        ValueError: If timeout_sec is not positive.
        RandomGenerationTimeoutError: If no value was accepted in time.
    """
    if not timeout_sec > 0:
        raise ValueError("timeout_sec must be a positive number.")
    min_int, _, range_ = validate_bounds(min_value, max_value)
    try:
        return await asyncio.wait_for(draw_in_range(min_int, range_, entropy_source), timeout=timeout_sec)
    except asyncio.TimeoutError:
        logger.warning("[SecureRandom] Generation for [%s, %s] exceeded %.3fs.", min_value, max_value, timeout_sec)
        raise RandomGenerationTimeoutError(
            f"No random integer in [{min_value}, {max_value}] within {timeout_sec}s.") from None
