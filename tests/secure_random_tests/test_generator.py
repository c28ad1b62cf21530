# tests/secure_random_tests/test_generator.py
import asyncio
import unittest
from collections import Counter
from unittest.mock import patch

from secure_random.constants import MAX_SAFE_INTEGER, MIN_SAFE_INTEGER
from secure_random.entropy_source import MockEntropySource, SecretsEntropySource
from secure_random.errors import (
    EntropySourceUnavailableError,
    MaxNotDefinedError, MaxNotGreaterThanMinError, MaxNotIntegerError, MaxOutOfSafeRangeError,
    MinNotDefinedError, MinNotIntegerError, MinOutOfSafeRangeError, RangeOutOfSafeRangeError,
    SecureRandomError,
)
from secure_random.generator import secure_random_integer

# Chi-square critical value, 9 degrees of freedom, p = 0.0001
CHI_SQUARE_CRITICAL_9_DOF = 33.72


class FailingEntropySource(MockEntropySource):
    async def get_random_bytes(self, num_bytes: int) -> bytes:
        self.requests.append(num_bytes)
        raise EntropySourceUnavailableError("Simulated entropy backend failure")


class ShortReadEntropySource(MockEntropySource):
    async def get_random_bytes(self, num_bytes: int) -> bytes:
        self.requests.append(num_bytes)
        return b""


class TestSecureRandomIntegerSampling(unittest.IsolatedAsyncioTestCase):

    async def test_results_within_inclusive_bounds(self):
        source = SecretsEntropySource()
        seen = set()
        for _ in range(500):
            value = await secure_random_integer(-3, 3, entropy_source=source)
            self.assertIsInstance(value, int)
            self.assertTrue(-3 <= value <= 3, f"{value} outside [-3, 3]")
            seen.add(value)
        # max is reachable: the upper bound is inclusive
        self.assertEqual(seen, set(range(-3, 4)))

    async def test_uniform_distribution_chi_square(self):
        source = SecretsEntropySource()
        trials = 10000
        counts = Counter([await secure_random_integer(0, 9, entropy_source=source) for _ in range(trials)])
        self.assertEqual(set(counts), set(range(10)))

        expected = trials / 10
        chi_square = sum((counts[v] - expected) ** 2 / expected for v in range(10))
        self.assertLess(chi_square, CHI_SQUARE_CRITICAL_9_DOF, f"Distribution looks biased: {dict(counts)}")

    async def test_single_step_range(self):
        # range 1 -> mask 0x1: low bit of the byte picks min or max
        self.assertEqual(
            await secure_random_integer(5, 6, entropy_source=MockEntropySource(seed_byte=0xAA, increment=False)), 5)
        self.assertEqual(
            await secure_random_integer(5, 6, entropy_source=MockEntropySource(seed_byte=0xAB, increment=False)), 6)

    async def test_byte_exact_mask(self):
        # range 255 -> 8-bit mask, every byte value is accepted
        mock = MockEntropySource(script=[b"\xff"])
        self.assertEqual(await secure_random_integer(0, 255, entropy_source=mock), 255)
        self.assertEqual(mock.requests, [1])

    async def test_range_256_uses_two_bytes_and_returns_max(self):
        # range 256 -> 9-bit mask 0x1ff over two bytes; 0x1ff (511) rejected, 0x0100 (256) accepted
        mock = MockEntropySource(script=[b"\xff\xff", b"\x00\x01"])
        self.assertEqual(await secure_random_integer(0, 256, entropy_source=mock), 256)
        self.assertEqual(mock.requests, [2, 2])

    async def test_bytes_packed_little_endian(self):
        # range 1000 -> 10-bit mask; b"\x01\x02" is 0x0201 = 513 little-endian
        mock = MockEntropySource(script=[b"\x01\x02"])
        self.assertEqual(await secure_random_integer(0, 1000, entropy_source=mock), 513)

    async def test_rejected_candidate_is_redrawn_once(self):
        # range 9 -> mask 0x0f; 0xfe masks to 14 (> 9, rejected), then 0x03 -> 3
        mock = MockEntropySource(script=[b"\xfe", b"\x03"])
        self.assertEqual(await secure_random_integer(0, 9, entropy_source=mock), 3)
        self.assertEqual(mock.call_count, 2)

    async def test_rejected_candidates_are_not_reduced_modulo(self):
        # 14 % 10 would give 4; the generator must discard 14 and keep drawing
        mock = MockEntropySource(script=[b"\x0e", b"\x0e", b"\x02"])
        value = await secure_random_integer(100, 109, entropy_source=mock)
        self.assertEqual(value, 102)
        self.assertNotEqual(value, 104)
        self.assertEqual(mock.call_count, 3)

    async def test_many_rejections_do_not_recurse(self):
        rejections = [b"\x0f"] * 2000
        mock = MockEntropySource(script=rejections + [b"\x00"])
        self.assertEqual(await secure_random_integer(0, 9, entropy_source=mock), 0)
        self.assertEqual(mock.call_count, 2001)

    async def test_negative_bounds(self):
        mock = MockEntropySource(script=[b"\x07"])
        self.assertEqual(await secure_random_integer(-10, 0, entropy_source=mock), -3)

    async def test_zero_is_a_valid_bound(self):
        # A truthiness check would reject 0 as "not defined"; only None is treated as missing.
        self.assertIn(await secure_random_integer(0, 1, entropy_source=MockEntropySource()), (0, 1))
        self.assertIn(await secure_random_integer(-1, 0, entropy_source=MockEntropySource()), (-1, 0))

    async def test_whole_floats_are_accepted_as_integers(self):
        mock = MockEntropySource(script=[b"\x04"])
        value = await secure_random_integer(0.0, 9.0, entropy_source=mock)
        self.assertEqual(value, 4)
        self.assertIsInstance(value, int)

    async def test_full_safe_range_from_zero(self):
        # range 2**53 - 1 -> 7 bytes, 53-bit mask; all-ones bytes mask down to exactly the range
        mock = MockEntropySource(script=[b"\xff" * 7])
        self.assertEqual(await secure_random_integer(0, MAX_SAFE_INTEGER, entropy_source=mock), MAX_SAFE_INTEGER)
        self.assertEqual(mock.requests, [7])

    async def test_concurrent_calls_are_independent(self):
        source = SecretsEntropySource()
        results = await asyncio.gather(*(secure_random_integer(1, 6, entropy_source=source) for _ in range(100)))
        self.assertEqual(len(results), 100)
        self.assertTrue(all(1 <= r <= 6 for r in results))

    async def test_default_entropy_source_is_used(self):
        mock = MockEntropySource(script=[b"\x02"])
        with patch('secure_random.generator.get_default_entropy_source', return_value=mock):
            self.assertEqual(await secure_random_integer(10, 19), 12)
        self.assertEqual(mock.call_count, 1)


class TestSecureRandomIntegerValidation(unittest.IsolatedAsyncioTestCase):

    async def _assert_rejected(self, min_value, max_value, error_cls):
        mock = MockEntropySource()
        with self.assertRaises(error_cls) as ctx:
            await secure_random_integer(min_value, max_value, entropy_source=mock)
        self.assertEqual(mock.call_count, 0, "Validation failure must not consume entropy")
        return ctx.exception

    async def test_min_not_defined(self):
        error = await self._assert_rejected(None, 5, MinNotDefinedError)
        self.assertEqual(error.name, "minNotDefined")
        # min is checked first even when max is also missing
        await self._assert_rejected(None, None, MinNotDefinedError)

    async def test_max_not_defined(self):
        error = await self._assert_rejected(1, None, MaxNotDefinedError)
        self.assertEqual(error.name, "maxNotDefined")
        # presence is checked before integrality
        await self._assert_rejected(1.5, None, MaxNotDefinedError)

    async def test_min_not_integer(self):
        for bad_min in (1.5, "1", True, float("nan"), float("-inf"), [1]):
            with self.subTest(min=bad_min):
                error = await self._assert_rejected(bad_min, 10, MinNotIntegerError)
                self.assertEqual(error.name, "minNotInteger")
        error = await self._assert_rejected(0.25, "x", MinNotIntegerError)
        self.assertEqual(error.value, 0.25)

    async def test_max_not_integer(self):
        for bad_max in (9.99, "10", False, float("inf")):
            with self.subTest(max=bad_max):
                await self._assert_rejected(1, bad_max, MaxNotIntegerError)

    async def test_max_not_greater_than_min(self):
        error = await self._assert_rejected(5, 5, MaxNotGreaterThanMinError)
        self.assertEqual(error.name, "maxLowerThanMin")
        self.assertEqual(error.value, (5, 5))
        await self._assert_rejected(5, 3, MaxNotGreaterThanMinError)
        # ordering is checked before the safe-range checks
        await self._assert_rejected(2**60, 2**59, MaxNotGreaterThanMinError)

    async def test_min_out_of_safe_range(self):
        error = await self._assert_rejected(MIN_SAFE_INTEGER - 1, 0, MinOutOfSafeRangeError)
        self.assertEqual(error.value, MIN_SAFE_INTEGER - 1)
        await self._assert_rejected(MAX_SAFE_INTEGER + 1, MAX_SAFE_INTEGER + 2, MinOutOfSafeRangeError)

    async def test_max_out_of_safe_range(self):
        error = await self._assert_rejected(0, MAX_SAFE_INTEGER + 1, MaxOutOfSafeRangeError)
        self.assertEqual(error.name, "maxSafeInteger")

    async def test_range_out_of_safe_range(self):
        # Both bounds are safe, but their distance is 2**53
        error = await self._assert_rejected(-(2**52), 2**52, RangeOutOfSafeRangeError)
        self.assertEqual(error.value, 2**53)
        await self._assert_rejected(MIN_SAFE_INTEGER, MAX_SAFE_INTEGER, RangeOutOfSafeRangeError)

    async def test_validation_errors_are_value_errors_with_context(self):
        error = await self._assert_rejected(3, 1, SecureRandomError)
        self.assertIsInstance(error, ValueError)
        self.assertEqual(error.to_dict(), {
            "error": "maxLowerThanMin", "message": "max must be greater than min", "value": [3, 1]})
        self.assertIn("(3, 1)", str(error))


class TestSecureRandomIntegerEntropyFailures(unittest.IsolatedAsyncioTestCase):

    async def test_entropy_failure_propagates_without_retry(self):
        source = FailingEntropySource()
        with self.assertRaisesRegex(EntropySourceUnavailableError, "Simulated entropy backend failure"):
            await secure_random_integer(0, 9, entropy_source=source)
        self.assertEqual(source.call_count, 1)

    async def test_short_read_is_not_sampled(self):
        source = ShortReadEntropySource()
        with self.assertRaisesRegex(EntropySourceUnavailableError, "returned 0 bytes, expected 1"):
            await secure_random_integer(0, 9, entropy_source=source)
        self.assertEqual(source.call_count, 1)


if __name__ == '__main__':
    unittest.main()
