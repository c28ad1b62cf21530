# secure_random/config.py
"""
Environment-driven settings for the secure random package and its API server.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from .entropy_source import ENTROPY_BACKENDS, EntropySourceInterface, create_entropy_source

# Environment variable names
ENTROPY_BACKEND_ENV = 'SECURE_RANDOM_ENTROPY_BACKEND'
TIMEOUT_SEC_ENV = 'SECURE_RANDOM_TIMEOUT_SEC'
LOG_LEVEL_ENV = 'SECURE_RANDOM_LOG_LEVEL'
SERVER_API_KEY_ENV = 'SERVER_API_KEY'

DEFAULT_ENTROPY_BACKEND = 'secrets'
DEFAULT_TIMEOUT_SEC = 5.0
DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_POC_API_KEY = "poc_super_secret_api_key_123!"


@dataclass(frozen=True)
class Settings:
    entropy_backend: str = DEFAULT_ENTROPY_BACKEND
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    log_level: str = DEFAULT_LOG_LEVEL
    api_key: str = DEFAULT_POC_API_KEY


def load_entropy_backend() -> str:
    """
    Reads only the entropy backend name, so unrelated settings (timeout, log
    level) cannot break random generation.

    Raises:
        ValueError: If the backend name is unknown.
    """
    backend = os.environ.get(ENTROPY_BACKEND_ENV, DEFAULT_ENTROPY_BACKEND).strip().lower()
    if backend not in ENTROPY_BACKENDS:
        raise ValueError(
            f"{ENTROPY_BACKEND_ENV} must be one of {sorted(ENTROPY_BACKENDS)}, got '{backend}'.")
    return backend


def load_settings() -> Settings:
    """
    Reads settings from the environment, falling back to defaults.

    Raises:
        ValueError: If the backend name, timeout or log level is invalid.
    """
    backend = load_entropy_backend()

    raw_timeout = os.environ.get(TIMEOUT_SEC_ENV, str(DEFAULT_TIMEOUT_SEC))
    try:
        timeout_sec = float(raw_timeout)
    except ValueError:
        raise ValueError(f"{TIMEOUT_SEC_ENV} must be a number, got '{raw_timeout}'.") from None
    if not timeout_sec > 0:
        raise ValueError(f"{TIMEOUT_SEC_ENV} must be positive, got {timeout_sec}.")

    log_level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"{LOG_LEVEL_ENV} is not a valid logging level: '{log_level}'.")

    return Settings(
        entropy_backend=backend,
        timeout_sec=timeout_sec,
        log_level=log_level,
        api_key=os.environ.get(SERVER_API_KEY_ENV, DEFAULT_POC_API_KEY),
    )


_default_entropy_source: Optional[EntropySourceInterface] = None


def get_default_entropy_source() -> EntropySourceInterface:
    """Lazily builds (once per process) the entropy source named in the environment."""
    global _default_entropy_source
    if _default_entropy_source is None:
        _default_entropy_source = create_entropy_source(load_entropy_backend())
    return _default_entropy_source


def reset_default_entropy_source() -> None:
    """Forgets the cached default source; the next call re-reads the environment."""
    global _default_entropy_source
    _default_entropy_source = None
