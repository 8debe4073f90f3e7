"""
tsszk: zero-knowledge proofs for threshold ECDSA.

Two Fiat-Shamir Sigma protocols over Paillier / ring-Pedersen moduli:

- **Range proof** ("Alice's proof") for the MtA conversion
  [Gennaro & Goldfeder, CCS 2018, Fig. 9]
- **Factorization proof** for Paillier moduli with no small factor
  [Canetti et al., CCS 2020, Fig. 28]

Provers return immutable proof values; verifiers are total boolean
predicates that never raise.

Quick start
-----------
::

    from tsszk import FactorizationProof, SECP256K1

    proof = FactorizationProof.prove(SECP256K1, N0, NCap, s, t, p, q)
    wire = proof.to_bytes()

    received = FactorizationProof.from_bytes(wire)
    assert received.verify(SECP256K1, N0, NCap, s, t)
"""

__version__ = "0.1.0"

# ── curve parameters ────────────────────────────────────────────────────
from .curve import Curve, ORDER, SECP256K1

# ── proofs ──────────────────────────────────────────────────────────────
from .rangeproof import RangeProof, RANGE_PROOF_BYTES_PARTS
from .facproof import (
    FactorizationProof,
    FAC_PROOF_BYTES_PARTS,
    RANGE_PARAMETER,
)

# ── key material & errors ───────────────────────────────────────────────
from .paillier import PublicKey
from .errors import TSSZKError, ProofConstructionError, ProofFormatError

# ── building blocks ─────────────────────────────────────────────────────
from .hash import sha512_256i, rejection_sample, challenge
from .arith import ModInt

__all__ = [
    "__version__",
    # curve
    "Curve", "ORDER", "SECP256K1",
    # proofs
    "RangeProof", "RANGE_PROOF_BYTES_PARTS",
    "FactorizationProof", "FAC_PROOF_BYTES_PARTS", "RANGE_PARAMETER",
    # keys & errors
    "PublicKey",
    "TSSZKError", "ProofConstructionError", "ProofFormatError",
    # building blocks
    "sha512_256i", "rejection_sample", "challenge", "ModInt",
]
