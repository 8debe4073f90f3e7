"""
Big-integer substrate for the Paillier / ring-Pedersen proofs.

Provides modular exponentiation and multiplication over an arbitrary
modulus, interval and coprimality predicates, secure sampling, and the
minimal big-endian byte codec used on the wire.  Heavy arithmetic is
delegated to ``gmpy2``; entropy comes from :pymod:`secrets`.

Everything here returns plain Python ``int`` so proof objects never hold
``mpz`` values.
"""

from __future__ import annotations

import secrets
from typing import Optional, Sequence

import gmpy2


# ── modular arithmetic ──────────────────────────────────────────────────
class ModInt:
    """
    Arithmetic in  Z_m  for a fixed positive modulus *m*.

    Exponents are plain (unreduced) integers; a negative exponent raises
    the modular inverse of the base to ``-exponent``.
    """

    __slots__ = ("_m",)

    def __init__(self, modulus: int) -> None:
        if modulus <= 0:
            raise ValueError("modulus must be positive")
        self._m = gmpy2.mpz(modulus)

    @property
    def modulus(self) -> int:
        return int(self._m)

    def exp(self, base: int, exponent: int) -> int:
        if exponent < 0:
            base = self.inverse(base)
            exponent = -exponent
        return int(gmpy2.powmod(base, exponent, self._m))

    def mul(self, a: int, b: int) -> int:
        return int(gmpy2.f_mod(gmpy2.mpz(a) * b, self._m))

    def inverse(self, a: int) -> int:
        """Raises ``ZeroDivisionError`` if *a* is not a unit mod *m*."""
        return int(gmpy2.invert(a, self._m))

    def __repr__(self) -> str:
        return f"ModInt(<{self._m.bit_length()}-bit modulus>)"


# ── predicates ──────────────────────────────────────────────────────────
def is_in_interval(b: Optional[int], bound: int) -> bool:
    """``0 <= b < bound``."""
    return b is not None and 0 <= b < bound


def gcd(a: int, b: int) -> int:
    return int(gmpy2.gcd(a, b))


def is_coprime(a: int, n: int) -> bool:
    return gcd(a, n) == 1


def isqrt(n: int) -> int:
    """Floor square root of a non-negative integer."""
    return int(gmpy2.isqrt(n))


# ── sampling ────────────────────────────────────────────────────────────
def get_random_positive_int(bound: int) -> int:
    """Uniform in  [0, bound)  from the OS CSPRNG."""
    if bound <= 0:
        raise ValueError("sampling bound must be positive")
    return secrets.randbelow(bound)


def get_random_positive_relatively_prime_int(n: int) -> int:
    """Uniform in  [0, n)  conditioned on  gcd(x, n) = 1."""
    if n <= 1:
        raise ValueError("modulus must be greater than one")
    while True:
        x = secrets.randbelow(n)
        if is_coprime(x, n):
            return x


# ── byte codec ──────────────────────────────────────────────────────────
def int_to_bytes(x: int) -> bytes:
    """
    Minimal big-endian encoding of ``|x|``; zero encodes as ``b""``.

    The sign is dropped, exactly like Go's ``big.Int.Bytes``.
    """
    x = abs(int(x))
    return x.to_bytes((x.bit_length() + 7) // 8, "big")


def int_from_bytes(data: bytes) -> int:
    return int.from_bytes(data, "big")


def non_empty_multi_bytes(parts: Optional[Sequence[bytes]], expected: int) -> bool:
    """True iff *parts* holds exactly *expected* non-empty byte strings."""
    if parts is None or len(parts) != expected:
        return False
    return all(p is not None and len(p) > 0 for p in parts)
