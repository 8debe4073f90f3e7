"""
No-small-factor proof for an RSA-type modulus.

Proves that  N0 = p·q  with both factors of roughly  √N0  size, without
revealing them, against a ring-Pedersen setup  (N̂, s, t).  Used during
key refresh so that a party cannot register a Paillier modulus with a
tiny factor.

Protocol (CGGMP Fig. 28, Fiat-Shamir), with  ℓ = 2^15:
    α, β ←$ [0, ℓ·q·√N0)          μ, ν ←$ [0, ℓ·N̂)
    σ ←$ [0, ℓ·N0·N̂)              r ←$ Z*_{ℓ·q·N0·N̂}
    x, y ←$ [0, ℓ·q·N̂)

    P = s^p · t^μ    Q = s^q · t^ν
    A = s^α · t^x    B = s^β · t^y    T = Q^α · t^r      (mod N̂)

    e = H(N0, N̂, s, t, P, Q, A, B, T, σ)

    z1 = e·p + α    z2 = e·q + β
    w1 = e·μ + x    w2 = e·ν + y    v = e·(σ − ν·p) + r

Responses are never reduced: their size is what the range checks bound.

Verify:
    interval and unit checks on every field, then
    s^z1 · t^w1 == A · P^e
    s^z2 · t^w2 == B · Q^e
    Q^z1 · t^v  == T · R^e,   R = s^N0 · t^σ               (mod N̂)

References
----------
- Canetti, Gennaro, Goldfeder, Makriyannis, Peled (2020). "UC
  Non-Interactive, Proactive, Threshold ECDSA with Identifiable
  Aborts."  CCS 2020, Fig. 28.
"""

from __future__ import annotations

import logging
from dataclasses import astuple, dataclass
from typing import List, NamedTuple, Optional, Sequence

from .arith import (
    ModInt,
    get_random_positive_int,
    get_random_positive_relatively_prime_int,
    int_from_bytes,
    int_to_bytes,
    is_coprime,
    is_in_interval,
    isqrt,
    non_empty_multi_bytes,
)
from .curve import Curve
from .errors import ProofConstructionError, ProofFormatError
from .hash import challenge

logger = logging.getLogger(__name__)

# ℓ bounds each factor to  [2^(1024-ℓ), 2^(1024+ℓ)]  for 2048-bit N0
RANGE_PARAMETER = 1 << 15
FAC_PROOF_BYTES_PARTS = 11


class _Bounds(NamedTuple):
    le_sqrt_n0: int      # ℓ·q·√N0
    l_n_cap: int         # ℓ·N̂
    l_n0_n_cap: int      # ℓ·N0·N̂
    le_n0_n_cap: int     # ℓ·q·N0·N̂
    le_n_cap: int        # ℓ·q·N̂


def _bounds(q: int, n0: int, n_cap: int) -> _Bounds:
    l_n_cap = RANGE_PARAMETER * n_cap
    l_n0_n_cap = l_n_cap * n0
    return _Bounds(
        le_sqrt_n0=RANGE_PARAMETER * q * isqrt(n0),
        l_n_cap=l_n_cap,
        l_n0_n_cap=l_n0_n_cap,
        le_n0_n_cap=l_n0_n_cap * q,
        le_n_cap=l_n_cap * q,
    )


@dataclass(frozen=True)
class FactorizationProof:
    """Transcript of the factorization proof, in wire order."""

    P: int
    Q: int
    A: int
    B: int
    T: int
    Sigma: int
    Z1: int
    Z2: int
    W1: int
    W2: int
    V: int

    @staticmethod
    def prove(
        ec: Curve,
        n0: int,
        n_cap: int,
        s: int,
        t: int,
        n0p: int,
        n0q: int,
    ) -> FactorizationProof:
        """
        Prove knowledge of  N0 = n0p · n0q  with balanced factors.

        Raises
        ------
        ProofConstructionError
            If any argument is ``None``.
        """
        if any(a is None for a in (ec, n0, n_cap, s, t, n0p, n0q)):
            raise ProofConstructionError(
                "FactorizationProof.prove received None value(s)"
            )

        q = ec.order
        b = _bounds(q, n0, n_cap)

        alpha = get_random_positive_int(b.le_sqrt_n0)
        beta = get_random_positive_int(b.le_sqrt_n0)
        mu = get_random_positive_int(b.l_n_cap)
        nu = get_random_positive_int(b.l_n_cap)
        sigma = get_random_positive_int(b.l_n0_n_cap)
        r = get_random_positive_relatively_prime_int(b.le_n0_n_cap)
        x = get_random_positive_int(b.le_n_cap)
        y = get_random_positive_int(b.le_n_cap)

        mod = ModInt(n_cap)
        P = mod.mul(mod.exp(s, n0p), mod.exp(t, mu))
        Q = mod.mul(mod.exp(s, n0q), mod.exp(t, nu))
        A = mod.mul(mod.exp(s, alpha), mod.exp(t, x))
        B = mod.mul(mod.exp(s, beta), mod.exp(t, y))
        T = mod.mul(mod.exp(Q, alpha), mod.exp(t, r))

        e = challenge(q, n0, n_cap, s, t, P, Q, A, B, T, sigma)

        z1 = e * n0p + alpha
        z2 = e * n0q + beta
        w1 = e * mu + x
        w2 = e * nu + y
        v = e * (sigma - nu * n0p) + r

        logger.debug(
            "built factorization proof for %d-bit modulus", n0.bit_length(),
        )
        return FactorizationProof(
            P=P, Q=Q, A=A, B=B, T=T, Sigma=sigma,
            Z1=z1, Z2=z2, W1=w1, W2=w2, V=v,
        )

    def validate_basic(self) -> bool:
        """Structural check: every field is present."""
        return all(v is not None for v in astuple(self))

    def verify(
        self,
        ec: Optional[Curve],
        n0: Optional[int],
        n_cap: Optional[int],
        s: Optional[int],
        t: Optional[int],
    ) -> bool:
        """
        Verify against the statement  (N0, N̂, s, t).

        Fail-fast and total: returns ``False`` on the first violated
        check and never raises.
        """
        ok = self._verify(ec, n0, n_cap, s, t)
        logger.debug("factorization proof %s", "accepted" if ok else "rejected")
        return ok

    def _verify(self, ec, n0, n_cap, s, t) -> bool:
        if not self.validate_basic():
            return False
        if any(a is None for a in (ec, n0, n_cap, s, t)):
            return False
        if n0 <= 0 or n_cap <= 0:
            return False

        q = ec.order
        b = _bounds(q, n0, n_cap)
        # responses add a challenge-scaled term to a same-sized mask
        le_n0_n_cap2 = b.le_n0_n_cap << 1
        le_n_cap2 = b.le_n_cap << 1

        for commitment in (self.P, self.Q, self.A, self.B, self.T):
            if not is_in_interval(commitment, n_cap):
                return False
        if not is_in_interval(self.Sigma, b.l_n0_n_cap):
            return False
        for commitment in (self.P, self.Q, self.A, self.B, self.T):
            if not is_coprime(commitment, n_cap):
                return False
        if not is_in_interval(self.W1, le_n_cap2):
            return False
        if not is_in_interval(self.W2, le_n_cap2):
            return False
        if not is_in_interval(self.V, le_n0_n_cap2):
            return False
        if not is_in_interval(self.Z1, b.le_sqrt_n0):
            return False
        if not is_in_interval(self.Z2, b.le_sqrt_n0):
            return False

        e = challenge(
            q, n0, n_cap, s, t,
            self.P, self.Q, self.A, self.B, self.T, self.Sigma,
        )

        mod = ModInt(n_cap)
        lhs = mod.mul(mod.exp(s, self.Z1), mod.exp(t, self.W1))
        rhs = mod.mul(self.A, mod.exp(self.P, e))
        if lhs != rhs:
            return False

        lhs = mod.mul(mod.exp(s, self.Z2), mod.exp(t, self.W2))
        rhs = mod.mul(self.B, mod.exp(self.Q, e))
        if lhs != rhs:
            return False

        R = mod.mul(mod.exp(s, n0), mod.exp(t, self.Sigma))
        lhs = mod.mul(mod.exp(self.Q, self.Z1), mod.exp(t, self.V))
        rhs = mod.mul(self.T, mod.exp(R, e))
        return lhs == rhs

    # serialisation ----------------------------------------------------------
    def to_bytes(self) -> List[bytes]:
        """Wire parts in order  P, Q, A, B, T, Sigma, Z1, Z2, W1, W2, V."""
        return [int_to_bytes(v) for v in astuple(self)]

    @classmethod
    def from_bytes(cls, parts: Sequence[bytes]) -> FactorizationProof:
        """
        Rebuild a proof from its 11 wire parts.

        Only the shape is checked here; ranges are :meth:`verify`'s job.
        """
        if not non_empty_multi_bytes(parts, FAC_PROOF_BYTES_PARTS):
            raise ProofFormatError(
                f"expected {FAC_PROOF_BYTES_PARTS} non-empty byte parts "
                "to construct FactorizationProof"
            )
        return cls(*(int_from_bytes(p) for p in parts))
