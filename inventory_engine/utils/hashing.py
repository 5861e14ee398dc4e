"""
Deterministic key hashing.

Turns a string key into a stable pseudo-random value in [0, 1).
The exact bit behaviour is part of the contract: mock market numbers
derived from it must reproduce across processes and ports.
"""

from __future__ import annotations

from typing import Dict, Iterable

HASH_MODULUS = 2 ** 32
HASH_NORMALIZER = 2147483647

# abs(-2**31) / 2**31-1 lands just above 1.0
_MAX_BELOW_ONE = 1.0 - 2 ** -53


def _to_int32(value: int) -> int:
    value %= HASH_MODULUS
    if value >= 2 ** 31:
        value -= HASH_MODULUS
    return value


def _code_units(seed: str) -> Iterable[int]:
    """Yield UTF-16 code units, matching charCodeAt semantics."""
    raw = seed.encode("utf-16-le", errors="surrogatepass")
    for i in range(0, len(raw), 2):
        yield raw[i] | (raw[i + 1] << 8)


def rolling_hash32(seed: str) -> int:
    """Signed 32-bit rolling hash: h = (h * 31 + unit) mod 2**32."""
    h = 0
    for unit in _code_units(seed):
        h = _to_int32(h * 31 + unit)
    return h


def hash_key(seed: str) -> float:
    """
    Map a seed string to a float in [0, 1).

    Pure function with no hidden state.
    """
    value = abs(rolling_hash32(seed)) / HASH_NORMALIZER
    return min(value, _MAX_BELOW_ONE)


def hash_channels(seed: str, suffixes: Iterable[str]) -> Dict[str, float]:
    """
    Independent pseudo-random channels for one logical entity.

    Each channel hashes ``seed + suffix``, so channels are order-independent.
    The empty suffix gives the base channel.
    """
    return {suffix: hash_key(seed + suffix) for suffix in suffixes}
