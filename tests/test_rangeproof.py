"""Tests for the `tsszk.rangeproof` module."""

from __future__ import annotations

import secrets
from dataclasses import replace

import pytest

from tsszk import (
    ORDER,
    ProofFormatError,
    PublicKey,
    RangeProof,
    SECP256K1,
)
from tests.conftest import encrypt, random_unit


@pytest.fixture(scope="module")
def statement(paillier, ring_pedersen):
    pk = paillier.pk
    m = secrets.randbelow(ORDER)
    r = random_unit(pk.n)
    c = encrypt(pk, m, r)
    rp = ring_pedersen
    proof = RangeProof.prove(pk, c, rp.n_tilde, rp.h1, rp.h2, m, r)
    return pk, c, rp, m, r, proof


def _verify(proof, statement) -> bool:
    pk, c, rp, *_ = statement
    return proof.verify(pk, rp.n_tilde, rp.h1, rp.h2, c)


def test_completeness(statement) -> None:
    proof = statement[-1]
    assert proof.validate_basic()
    assert _verify(proof, statement)
    # no hidden randomness on the verifier side
    assert _verify(proof, statement)


def test_fresh_randomness(statement) -> None:
    pk, c, rp, m, r, proof = statement
    other = RangeProof.prove(pk, c, rp.n_tilde, rp.h1, rp.h2, m, r)
    assert other != proof
    assert _verify(other, statement)


def test_small_plaintexts(paillier, ring_pedersen) -> None:
    pk = paillier.pk
    rp = ring_pedersen
    for m in (0, 1, ORDER - 1):
        r = random_unit(pk.n)
        c = encrypt(pk, m, r)
        proof = RangeProof.prove(pk, c, rp.n_tilde, rp.h1, rp.h2, m, r)
        assert proof.verify(pk, rp.n_tilde, rp.h1, rp.h2, c)


def test_responses_not_reduced(statement) -> None:
    pk, c, rp, m, r, proof = statement
    # s2 = e·ρ + γ with γ up to q³·Ñ
    assert proof.S2 > rp.n_tilde
    assert proof.S1 > ORDER


@pytest.mark.parametrize("field", ["Z", "U", "W", "S", "S1", "S2"])
def test_single_field_mutation(statement, field) -> None:
    proof = statement[-1]
    forged = replace(proof, **{field: getattr(proof, field) + 1})
    assert not _verify(forged, statement)


def test_swapped_responses(statement) -> None:
    proof = statement[-1]
    forged = replace(proof, S1=proof.S2, S2=proof.S1)
    assert not _verify(forged, statement)


def test_s1_above_q_cubed(statement) -> None:
    proof = statement[-1]
    forged = replace(proof, S1=ORDER ** 3 + 1)
    assert not _verify(forged, statement)


def test_s1_bound_with_equalities_intact(statement) -> None:
    pk, c, rp, m, r, proof = statement
    # Γ = N + 1 has order N mod N², and h1^φ(Ñ) = 1 mod Ñ, so adding
    # N·φ(Ñ) to s1 keeps both equalities and only breaks s1 ≤ q³
    phi = (rp.p - 1) * (rp.q - 1)
    forged = replace(proof, S1=proof.S1 + pk.n * phi)
    assert forged.S1 > ORDER ** 3
    n2 = pk.n_square
    e_free_lhs = pow(pk.gamma, forged.S1, n2) * pow(proof.S, pk.n, n2) % n2
    assert e_free_lhs == pow(pk.gamma, proof.S1, n2) * pow(proof.S, pk.n, n2) % n2
    assert pow(rp.h1, forged.S1, rp.n_tilde) == pow(rp.h1, proof.S1, rp.n_tilde)
    assert not _verify(forged, statement)


def test_wrong_ciphertext(statement) -> None:
    pk, c, rp, m, r, proof = statement
    other = encrypt(pk, m + 1, r)
    assert not proof.verify(pk, rp.n_tilde, rp.h1, rp.h2, other)


def test_non_invertible_ciphertext(statement) -> None:
    pk, c, rp, m, r, proof = statement
    assert not proof.verify(pk, rp.n_tilde, rp.h1, rp.h2, pk.n)
    assert not proof.verify(pk, rp.n_tilde, rp.h1, rp.h2, 0)


def test_none_robustness(statement) -> None:
    pk, c, rp, m, r, proof = statement
    args = [pk, rp.n_tilde, rp.h1, rp.h2, c]
    for i in range(len(args)):
        broken = list(args)
        broken[i] = None
        assert not proof.verify(*broken)
    assert not proof.verify(*args, ec=None)
    assert not proof.verify(PublicKey(-pk.n), rp.n_tilde, rp.h1, rp.h2, c)
    assert not proof.verify(pk, 0, rp.h1, rp.h2, c)

    empty = RangeProof(None, None, None, None, None, None)
    assert not empty.validate_basic()
    assert not _verify(empty, statement)
    assert not _verify(replace(proof, W=None), statement)


def test_negative_response_rejected(statement) -> None:
    proof = statement[-1]
    assert not _verify(replace(proof, S2=-proof.S2), statement)


def test_bytes_round_trip(statement) -> None:
    proof = statement[-1]
    parts = proof.to_bytes()
    assert len(parts) == 6
    assert parts[0] == proof.Z.to_bytes((proof.Z.bit_length() + 7) // 8, "big")
    decoded = RangeProof.from_bytes(parts)
    assert decoded == proof
    assert decoded.to_bytes() == parts
    assert _verify(decoded, statement)


def test_malformed_bytes(statement) -> None:
    parts = statement[-1].to_bytes()
    with pytest.raises(ProofFormatError):
        RangeProof.from_bytes(parts[:5])
    with pytest.raises(ProofFormatError):
        RangeProof.from_bytes(parts[:3] + [b""] + parts[4:])
    with pytest.raises(ValueError):
        RangeProof.from_bytes(None)


def test_explicit_curve(statement) -> None:
    pk, c, rp, m, r, _ = statement
    proof = RangeProof.prove(
        pk, c, rp.n_tilde, rp.h1, rp.h2, m, r, ec=SECP256K1,
    )
    assert proof.verify(pk, rp.n_tilde, rp.h1, rp.h2, c, ec=SECP256K1)
