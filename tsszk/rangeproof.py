"""
Alice's range proof for the MtA (Multiplicative-to-Additive) protocol.

Alice sends  c = Enc_pk(m; r)  and proves in zero knowledge that the
plaintext is small,  m ∈ [0, q³],  relative to a ring-Pedersen setup
(Ñ, h1, h2) owned by the verifier.

Protocol (GG18 Fig. 9, Fiat-Shamir):
    α ←$ [0, q³)        β ←$ Z*_N
    γ ←$ [0, q³·Ñ)      ρ ←$ [0, q·Ñ)

    z = h1^m  · h2^ρ    mod Ñ
    u = Γ^α   · β^N     mod N²
    w = h1^α  · h2^γ    mod Ñ

    e  = H(N, Γ, c, z, u, w)
    s  = r^e · β  mod N
    s1 = e·m + α         (not reduced)
    s2 = e·ρ + γ         (not reduced)

Verify:
    s1 ≤ q³
    u == Γ^s1 · s^N · c^-e    mod N²
    w == h1^s1 · h2^s2 · z^-e mod Ñ

References
----------
- Gennaro & Goldfeder (2018). "Fast Multiparty Threshold ECDSA with
  Fast Trustless Setup."  CCS 2018, Fig. 9.
"""

from __future__ import annotations

import logging
from dataclasses import astuple, dataclass
from typing import List, Optional, Sequence

from .arith import (
    ModInt,
    get_random_positive_int,
    get_random_positive_relatively_prime_int,
    int_from_bytes,
    int_to_bytes,
    is_coprime,
    non_empty_multi_bytes,
)
from .curve import Curve, SECP256K1
from .errors import ProofFormatError
from .hash import challenge
from .paillier import PublicKey

logger = logging.getLogger(__name__)

RANGE_PROOF_BYTES_PARTS = 6


@dataclass(frozen=True)
class RangeProof:
    """Transcript  (z, u, w, s, s1, s2)  of Alice's range proof."""

    Z: int
    U: int
    W: int
    S: int
    S1: int
    S2: int

    @staticmethod
    def prove(
        pk: PublicKey,
        c: int,
        n_tilde: int,
        h1: int,
        h2: int,
        m: int,
        r: int,
        ec: Curve = SECP256K1,
    ) -> RangeProof:
        """
        Prove that *c* encrypts a plaintext  m ∈ [0, q³]  under *pk*.

        Parameters
        ----------
        pk : PublicKey
            Alice's Paillier key.
        c : int
            The ciphertext  Γ^m · r^N mod N².
        n_tilde, h1, h2 : int
            The verifier's ring-Pedersen parameters.
        m, r : int
            Witness: plaintext and Paillier randomness of *c*.
        ec : Curve
            Signing curve; only its order is used.
        """
        q = ec.order
        q3 = q ** 3
        q_n_tilde = q * n_tilde
        q3_n_tilde = q3 * n_tilde

        alpha = get_random_positive_int(q3)
        beta = get_random_positive_relatively_prime_int(pk.n)
        gamma = get_random_positive_int(q3_n_tilde)
        rho = get_random_positive_int(q_n_tilde)

        mod_n_tilde = ModInt(n_tilde)
        z = mod_n_tilde.mul(mod_n_tilde.exp(h1, m), mod_n_tilde.exp(h2, rho))
        w = mod_n_tilde.mul(mod_n_tilde.exp(h1, alpha), mod_n_tilde.exp(h2, gamma))

        mod_n_square = ModInt(pk.n_square)
        u = mod_n_square.mul(
            mod_n_square.exp(pk.gamma, alpha),
            mod_n_square.exp(beta, pk.n),
        )

        e = challenge(q, *pk.as_ints(), c, z, u, w)

        mod_n = ModInt(pk.n)
        s = mod_n.mul(mod_n.exp(r, e), beta)
        s1 = e * m + alpha
        s2 = e * rho + gamma

        logger.debug(
            "built range proof for %d-bit Paillier modulus", pk.n.bit_length(),
        )
        return RangeProof(Z=z, U=u, W=w, S=s, S1=s1, S2=s2)

    def validate_basic(self) -> bool:
        """Structural check: every field is present."""
        return all(v is not None for v in astuple(self))

    def verify(
        self,
        pk: Optional[PublicKey],
        n_tilde: Optional[int],
        h1: Optional[int],
        h2: Optional[int],
        c: Optional[int],
        ec: Optional[Curve] = SECP256K1,
    ) -> bool:
        """
        Verify against the statement  (pk, Ñ, h1, h2, c).

        Total: malformed input yields ``False``, never an exception.
        """
        ok = self._verify(pk, n_tilde, h1, h2, c, ec)
        logger.debug("range proof %s", "accepted" if ok else "rejected")
        return ok

    def _verify(self, pk, n_tilde, h1, h2, c, ec) -> bool:
        if not self.validate_basic():
            return False
        if pk is None or n_tilde is None or h1 is None or h2 is None:
            return False
        if c is None or ec is None or pk.n is None or pk.gamma is None:
            return False
        if pk.n <= 0 or n_tilde <= 0:
            return False
        if min(self.S, self.S1, self.S2) < 0:
            return False

        q = ec.order
        q3 = q ** 3
        if self.S1 > q3:
            return False

        n_square = pk.n_square
        # c^-e and z^-e need units
        if not is_coprime(c, n_square) or not is_coprime(self.Z, n_tilde):
            return False

        e = challenge(q, *pk.as_ints(), c, self.Z, self.U, self.W)

        mod_n_square = ModInt(n_square)
        products = mod_n_square.mul(
            mod_n_square.exp(pk.gamma, self.S1),
            mod_n_square.exp(self.S, pk.n),
        )
        products = mod_n_square.mul(products, mod_n_square.exp(c, -e))
        if products != self.U:
            return False

        mod_n_tilde = ModInt(n_tilde)
        products = mod_n_tilde.mul(
            mod_n_tilde.exp(h1, self.S1),
            mod_n_tilde.exp(h2, self.S2),
        )
        products = mod_n_tilde.mul(products, mod_n_tilde.exp(self.Z, -e))
        return products == self.W

    # serialisation ----------------------------------------------------------
    def to_bytes(self) -> List[bytes]:
        """Wire parts in field order  Z, U, W, S, S1, S2."""
        return [int_to_bytes(v) for v in astuple(self)]

    @classmethod
    def from_bytes(cls, parts: Sequence[bytes]) -> RangeProof:
        if not non_empty_multi_bytes(parts, RANGE_PROOF_BYTES_PARTS):
            raise ProofFormatError(
                f"expected {RANGE_PROOF_BYTES_PARTS} non-empty byte parts "
                "to construct RangeProof"
            )
        return cls(*(int_from_bytes(p) for p in parts))
