"""
Elliptic-curve parameter set for the threshold-ECDSA proofs.

The proofs only read the group order *q* of the signing curve: it fixes
the challenge space ``[0, q)`` and the ``q³`` bound of Alice's proof.
The rest of the short-Weierstrass domain is carried so the same ``Curve``
value can be shared with the signing code.

References
----------
- SEC 2 v2 §2.4.1  secp256k1 domain parameters
"""

from __future__ import annotations

from dataclasses import dataclass

# ── secp256k1 constants ─────────────────────────────────────────────────
ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
FIELD_PRIME = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
GX = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
GY = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8


@dataclass(frozen=True)
class Curve:
    """
    Domain parameters of  y² = x³ + a·x + b  over  F_p  with a base
    point of prime order ``order``.

    ``params()`` mirrors the ``ec.Params().N`` accessor protocol code
    tends to be written against.
    """

    name: str
    order: int
    field_prime: int
    a: int
    b: int
    gx: int
    gy: int

    def params(self) -> Curve:
        return self

    @property
    def n(self) -> int:
        return self.order

    @property
    def bit_size(self) -> int:
        return self.field_prime.bit_length()

    def is_on_curve(self, x: int, y: int) -> bool:
        p = self.field_prime
        if not (0 <= x < p and 0 <= y < p):
            return False
        return (y * y - x * x * x - self.a * x - self.b) % p == 0


SECP256K1 = Curve(
    name="secp256k1",
    order=ORDER,
    field_prime=FIELD_PRIME,
    a=0,
    b=7,
    gx=GX,
    gy=GY,
)
