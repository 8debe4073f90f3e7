"""Shared fixtures: small Paillier keys and ring-Pedersen parameters."""

from __future__ import annotations

import secrets
from typing import NamedTuple

import gmpy2
import pytest

from tsszk import PublicKey

FACTOR_BITS = 512


class PaillierKey(NamedTuple):
    pk: PublicKey
    p: int
    q: int


class RingPedersen(NamedTuple):
    n_tilde: int
    h1: int
    h2: int
    p: int
    q: int


def random_prime(bits: int = FACTOR_BITS) -> int:
    """Prime with the top bit set, so products have exactly 2·bits bits."""
    start = secrets.randbits(bits) | (1 << (bits - 1)) | (1 << (bits - 2))
    return int(gmpy2.next_prime(start))


def distinct_primes(bits: int = FACTOR_BITS):
    p = random_prime(bits)
    q = random_prime(bits)
    while q == p:
        q = random_prime(bits)
    return p, q


def encrypt(pk: PublicKey, m: int, r: int) -> int:
    """Γ^m · r^N mod N²."""
    n2 = pk.n_square
    return pow(pk.gamma, m, n2) * pow(r, pk.n, n2) % n2


def random_unit(n: int) -> int:
    while True:
        x = secrets.randbelow(n)
        if gmpy2.gcd(x, n) == 1:
            return x


@pytest.fixture(scope="session")
def paillier() -> PaillierKey:
    p, q = distinct_primes()
    return PaillierKey(pk=PublicKey(p * q), p=p, q=q)


@pytest.fixture(scope="session")
def ring_pedersen() -> RingPedersen:
    """h1 a random square, h2 = h1^λ with λ unknown to provers."""
    p, q = distinct_primes()
    n_tilde = p * q
    phi = (p - 1) * (q - 1)
    h1 = pow(random_unit(n_tilde), 2, n_tilde)
    lam = secrets.randbelow(phi)
    h2 = pow(h1, lam, n_tilde)
    return RingPedersen(n_tilde=n_tilde, h1=h1, h2=h2, p=p, q=q)
