# main_random_demo.py
"""
Demonstrates the secure random integer generator with the available entropy
sources, and runs a basic frequency / chi-square check on its output.
"""
import asyncio
from collections import Counter

from secure_random.entropy_source import (
    AesCtrEntropySource, MockEntropySource, OsUrandomEntropySource, SecretsEntropySource,
)
from secure_random.errors import SecureRandomError
from secure_random.generator import secure_random_integer
from secure_random.parameters import calculate_parameters

# Critical chi-square value for 9 degrees of freedom at p = 0.001
CHI_SQUARE_CRITICAL_9_DOF = 27.877


async def _run_uniformity_check(sample_size: int = 20000):
    """
    Rough uniformity check over [0, 9]. Not a substitute for a proper
    statistical test suite.
    """
    print("\n--- Uniformity Check [0, 9] ---")
    source = SecretsEntropySource()
    results = [await secure_random_integer(0, 9, entropy_source=source) for _ in range(sample_size)]
    counts = Counter(results)
    expected = sample_size / 10

    for value in range(10):
        print(f"Value {value}: {counts[value]:<6} occurrences (Delta from expected: {counts[value] - expected:+.1f})")

    chi_square = sum((counts[v] - expected) ** 2 / expected for v in range(10))
    print(f"\nChi-square statistic: {chi_square:.3f} (critical value at p=0.001: {CHI_SQUARE_CRITICAL_9_DOF})")
    if chi_square > CHI_SQUARE_CRITICAL_9_DOF:
        print("WARNING: Distribution looks skewed. Rerun with a larger sample before drawing conclusions.")
    else:
        print("NOTE: Distribution is consistent with uniform.")
    print("--- End Uniformity Check ---")


async def run_full_demo():
    print("=" * 50)
    print(" Secure Random Integer Demo")
    print("=" * 50)

    # --- Parameters ---
    print("\n[Parameters] bit width / byte width / mask per range:")
    for range_ in (0, 1, 9, 255, 256, 2**53 - 1):
        params = calculate_parameters(range_)
        print(f"  range={range_:<17} bits={params.bit_width:<3} bytes={params.byte_width} mask={params.mask:#x}")

    # --- Sources ---
    sources = [SecretsEntropySource(), OsUrandomEntropySource(), AesCtrEntropySource()]
    for source in sources:
        dice = [await secure_random_integer(1, 6, entropy_source=source) for _ in range(10)]
        print(f"\n[{source.__class__.__name__}] 10 dice rolls: {dice}")

    # --- Rejection sampling, made visible with a scripted mock source ---
    # range 9 -> 4-bit mask 0x0f. 0xfe masks to 14 (rejected), 0x03 masks to 3 (accepted).
    mock = MockEntropySource(script=[b"\xfe", b"\x03"])
    value = await secure_random_integer(0, 9, entropy_source=mock)
    print(f"\n[MockEntropySource] Scripted draws 0xfe, 0x03 -> value {value} after {mock.call_count} requests")

    # --- Validation ---
    print("\n[Validation] Rejected inputs:")
    for bad_min, bad_max in ((None, 5), (1.5, 5), (5, 5), (0, 2**53)):
        try:
            await secure_random_integer(bad_min, bad_max, entropy_source=MockEntropySource())
        except SecureRandomError as e:
            print(f"  ({bad_min!r}, {bad_max!r}) -> {e.name}: {e.message}")

    await _run_uniformity_check()


if __name__ == '__main__':
    asyncio.run(run_full_demo())
