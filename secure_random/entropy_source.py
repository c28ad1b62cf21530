# secure_random/entropy_source.py
"""
Entropy sources for the secure random integer generator.
Includes an abstract async interface, backends wrapping Python's `secrets`
module, `os.urandom` and an AES-256-CTR keystream, and a mock source for tests.
"""
import asyncio
import logging
import os
import secrets
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import EntropySourceUnavailableError

logger = logging.getLogger(__name__)

AES_KEY_SIZE_BYTES = 32


def _check_num_bytes(num_bytes: int) -> None:
    if not isinstance(num_bytes, int) or isinstance(num_bytes, bool):
        raise TypeError("Number of bytes must be an integer.")
    if num_bytes < 0:
        raise ValueError("Number of bytes must be non-negative.")


# --- Entropy Source Interface Definition ---
class EntropySourceInterface(ABC):
    """
    Abstract Base Class for cryptographically secure entropy sources.
    Defines the interface for acquiring random bytes.
    """
    @abstractmethod
    async def get_random_bytes(self, num_bytes: int) -> bytes:
        """
        Returns exactly `num_bytes` uniformly random bytes.

        Args:
            num_bytes: The number of random bytes to generate.

        Returns:
            A bytes object containing the random data.

        Raises:
            TypeError: If num_bytes is not an integer.
            ValueError: If num_bytes is negative.
            EntropySourceUnavailableError: If the backend cannot supply bytes.
        """


# --- OS-backed implementations ---
class SecretsEntropySource(EntropySourceInterface):
    """
    Uses Python's `secrets` module for cryptographically strong bytes.
    The call runs in a worker thread, as the OS may block while gathering entropy.
    """
    async def get_random_bytes(self, num_bytes: int) -> bytes:
        _check_num_bytes(num_bytes)
        if num_bytes == 0:
            return b""
        try:
            return await asyncio.to_thread(secrets.token_bytes, num_bytes)
        except OSError as e:
            raise EntropySourceUnavailableError(
                f"Error generating random bytes using 'secrets' module: {e}") from e


class OsUrandomEntropySource(EntropySourceInterface):
    """
    Reads from `os.urandom`, which is suitable for cryptographic use.
    """
    async def get_random_bytes(self, num_bytes: int) -> bytes:
        _check_num_bytes(num_bytes)
        if num_bytes == 0:
            return b""
        try:
            return await asyncio.to_thread(os.urandom, num_bytes)
        except OSError as e: # NotImplementedError is not caught: no fallback to a weaker source
            raise EntropySourceUnavailableError(f"Error generating random bytes from os.urandom: {e}") from e


class AesCtrEntropySource(EntropySourceInterface):
    """
    A CSPRNG built on the AES-256 keystream in Counter (CTR) mode.
    With an explicit 32-byte seed the output is reproducible; without one the
    key is taken from os.urandom.
    """
    def __init__(self, seed: bytes | None = None):
        if seed is not None:
            if not isinstance(seed, bytes):
                raise TypeError("Seed must be bytes if provided.")
            if len(seed) != AES_KEY_SIZE_BYTES:
                raise ValueError("Seed must be a 32-byte string if provided.")
            self.key = seed
        else:
            try:
                self.key = os.urandom(AES_KEY_SIZE_BYTES)
            except OSError as e:
                raise EntropySourceUnavailableError(f"Could not seed AES-CTR source from os.urandom: {e}") from e
        self.counter_int = 0

    def generate_bytes(self, num_bytes: int) -> bytes:
        _check_num_bytes(num_bytes)
        if num_bytes == 0:
            return b""

        output_bytes = bytearray()
        block_size = algorithms.AES.block_size // 8

        while len(output_bytes) < num_bytes:
            nonce_counter_bytes = self.counter_int.to_bytes(16, 'big')
            encryptor = Cipher(algorithms.AES(self.key), modes.CTR(nonce_counter_bytes)).encryptor()
            output_bytes.extend(encryptor.update(b'\x00' * block_size))
            self.counter_int += 1
        return bytes(output_bytes[:num_bytes])

    async def get_random_bytes(self, num_bytes: int) -> bytes:
        # Pure computation on a few blocks; no need for a worker thread.
        return self.generate_bytes(num_bytes)


# --- Mock implementation (for testing) ---
class MockEntropySource(EntropySourceInterface):
    """
    A predictable source for tests and demos. NOT random.

    Either serves `script` chunks in order (each call consumes one chunk, which
    must have the requested length), or produces a byte pattern starting at
    `seed_byte`. Every request is recorded in `requests`.
    """
    def __init__(self, seed_byte: int = 0xAA, increment: bool = True,
                 script: Optional[Iterable[bytes]] = None):
        if not (0 <= seed_byte <= 255):
            raise ValueError("seed_byte must be between 0 and 255.")
        self.seed_byte = seed_byte
        self.increment = increment
        self._script: Optional[List[bytes]] = list(script) if script is not None else None
        self.requests: List[int] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def bytes_consumed(self) -> int:
        return sum(self.requests)

    async def get_random_bytes(self, num_bytes: int) -> bytes:
        _check_num_bytes(num_bytes)
        self.requests.append(num_bytes)

        if self._script is not None:
            if not self._script:
                raise EntropySourceUnavailableError("MockEntropySource script exhausted.")
            chunk = self._script.pop(0)
            if len(chunk) != num_bytes:
                raise ValueError(
                    f"MockEntropySource expected a request for {len(chunk)} bytes, got {num_bytes}.")
            return chunk

        if self.increment:
            return bytes([(self.seed_byte + i) % 256 for i in range(num_bytes)])
        return bytes([self.seed_byte] * num_bytes)


ENTROPY_BACKENDS = {
    "secrets": SecretsEntropySource,
    "urandom": OsUrandomEntropySource,
    "aes_ctr": AesCtrEntropySource,
}


def create_entropy_source(backend_name: str) -> EntropySourceInterface:
    """Builds the entropy source registered under `backend_name`."""
    try:
        source_cls = ENTROPY_BACKENDS[backend_name]
    except KeyError:
        raise ValueError(
            f"Unknown entropy backend '{backend_name}'. "
            f"Expected one of: {', '.join(sorted(ENTROPY_BACKENDS))}.") from None
    logger.debug("[EntropySource] Using backend '%s' (%s).", backend_name, source_cls.__name__)
    return source_cls()
