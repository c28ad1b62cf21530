"""
Cryptographically secure random integers without modulo bias.
"""
from .entropy_source import (
    AesCtrEntropySource, EntropySourceInterface, MockEntropySource,
    OsUrandomEntropySource, SecretsEntropySource, create_entropy_source,
)
from .errors import (
    EntropySourceUnavailableError, MaxNotDefinedError, MaxNotGreaterThanMinError,
    MaxNotIntegerError, MaxOutOfSafeRangeError, MinNotDefinedError, MinNotIntegerError,
    MinOutOfSafeRangeError, RandomGenerationTimeoutError, RangeOutOfSafeRangeError,
    SecureRandomError,
)
from .generator import secure_random_integer
from .parameters import RandomParameters, calculate_parameters
from .policies import secure_random_integer_with_timeout

__all__ = [
    "AesCtrEntropySource", "EntropySourceInterface", "MockEntropySource",
    "OsUrandomEntropySource", "SecretsEntropySource", "create_entropy_source",
    "EntropySourceUnavailableError", "MaxNotDefinedError", "MaxNotGreaterThanMinError",
    "MaxNotIntegerError", "MaxOutOfSafeRangeError", "MinNotDefinedError", "MinNotIntegerError",
    "MinOutOfSafeRangeError", "RandomGenerationTimeoutError", "RangeOutOfSafeRangeError",
    "SecureRandomError",
    "secure_random_integer", "secure_random_integer_with_timeout",
    "RandomParameters", "calculate_parameters",
]
