# secure_random/errors.py
"""
Exception types raised by the secure random integer generator.

Validation failures derive from SecureRandomError (a ValueError) and carry a
stable machine-readable `name` plus the offending `value`. Entropy backend
failures are IOErrors and are never retried by the generator.
"""
from typing import Any


class SecureRandomError(ValueError):
    """Base class for input validation failures of secure_random_integer."""
    name = "secureRandomError"
    default_message = "invalid arguments for secure random integer generation"

    def __init__(self, value: Any = None, message: str | None = None):
        self.value = value
        self.message = message or self.default_message
        super().__init__(f"{self.message} (got {value!r})")

    def to_dict(self) -> dict:
        """Serializable description, used by the HTTP layer for error bodies."""
        value = self.value
        if isinstance(value, tuple):
            value = list(value)
        elif value is not None and not isinstance(value, (int, float, str, bool)):
            value = repr(value)
        return {"error": self.name, "message": self.message, "value": value}


class MinNotDefinedError(SecureRandomError):
    name = "minNotDefined"
    default_message = "you should define min value"


class MaxNotDefinedError(SecureRandomError):
    name = "maxNotDefined"
    default_message = "you should define max value"


class MinNotIntegerError(SecureRandomError):
    name = "minNotInteger"
    default_message = "you should define min as an integer"


class MaxNotIntegerError(SecureRandomError):
    name = "maxNotInteger"
    default_message = "you should define max as an integer"


class MaxNotGreaterThanMinError(SecureRandomError):
    """Raised when max <= min. `value` is the (min, max) pair."""
    name = "maxLowerThanMin"
    default_message = "max must be greater than min"


class MinOutOfSafeRangeError(SecureRandomError):
    name = "minSafeInteger"
    default_message = "min must be a safe integer"


class MaxOutOfSafeRangeError(SecureRandomError):
    name = "maxSafeInteger"
    default_message = "max must be a safe integer"


class RangeOutOfSafeRangeError(SecureRandomError):
    """Raised when max - min is not a safe integer even though both bounds are."""
    name = "rangeSafeInteger"
    default_message = "max - min must be a safe integer"


class EntropySourceUnavailableError(IOError):
    """The entropy backend failed or returned fewer bytes than requested."""


class RandomGenerationTimeoutError(RuntimeError):
    """Raised by the timeout policy wrapper, never by the core generator."""
