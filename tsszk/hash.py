"""
Fiat-Shamir challenge derivation over integer transcripts.

Transcripts are ordered tuples of non-negative integers.  They are
framed and hashed with SHA-512/256:

    H(x_1, …, x_n) = SHA-512/256( LE64(n) ‖ bytes(x_1) ‖ "$" ‖ … ‖ bytes(x_n) ‖ "$" )

where ``bytes`` is the minimal big-endian encoding.  The count prefix and
the delimiter keep differently-split transcripts from colliding.  The
resulting 256-bit digest is folded into  [0, q)  by rejection sampling
rather than by a biased  ``mod q``.

The order of the integers is part of each proof's definition: prover
and verifier must pass them identically.
"""

from __future__ import annotations

import hashlib
from typing import Optional

from .arith import int_to_bytes

# ── framing constants ───────────────────────────────────────────────────
HASH_NAME = "sha512_256"
HASH_INPUT_DELIMITER = b"$"
_COUNT_BYTES = 8


def _hasher():
    return hashlib.new(HASH_NAME)


def _encode_item(item: Optional[int]) -> bytes:
    """``None`` hashes as zero, i.e. as the empty byte string."""
    if item is None:
        return b""
    return int_to_bytes(item)


def sha512_256i(*ints: Optional[int]) -> Optional[int]:
    """Hash an ordered integer sequence to a 256-bit integer."""
    if not ints:
        return None
    h = _hasher()
    h.update(len(ints).to_bytes(_COUNT_BYTES, "little"))
    for x in ints:
        h.update(_encode_item(x))
        h.update(HASH_INPUT_DELIMITER)
    return int.from_bytes(h.digest(), "big")


def rejection_sample(q: int, e_hash: int) -> int:
    """
    Map a digest to a uniform value in  [0, q).

    The candidate is the low ``bitlen(q)`` bits of the digest; while it
    lands outside  [0, q)  the full previous digest is re-hashed and
    truncated again.  For secp256k1 a retry happens with probability
    about 2^-128.
    """
    if q <= 0:
        raise ValueError("group order must be positive")
    mask = (1 << q.bit_length()) - 1
    candidate = e_hash & mask
    while candidate >= q:
        e_hash = sha512_256i(e_hash)
        candidate = e_hash & mask
    return candidate


def challenge(q: int, *ints: Optional[int]) -> int:
    """Fiat-Shamir challenge  e ∈ [0, q)  for the given transcript."""
    return rejection_sample(q, sha512_256i(*ints))
