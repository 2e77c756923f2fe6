"""
Key Agreement Tests

Covers key pair generation, shared key derivation (DH symmetry) and
the fixed-size key contract.
"""

import base64
import hashlib

import pytest
from nacl.public import Box, PrivateKey, PublicKey

from docseal import (
    KeyPair,
    RandomnessError,
    derive_shared_secret,
    fingerprint,
    generate_key_pair,
    public_key_from_b64,
    public_key_to_b64,
)


# =============================================================================
# Generation
# =============================================================================

def test_generate_key_pair_sizes():
    pair = generate_key_pair()
    assert len(pair.public_key) == 32
    assert len(pair.private_key) == 32
    assert pair.matches()


def test_generate_key_pair_is_random():
    assert generate_key_pair().public_key != generate_key_pair().public_key


def test_generate_key_pair_uses_random_source():
    seed = bytes(range(32))
    pair = generate_key_pair(random_source=lambda n: seed[:n])

    expected = PrivateKey(seed)
    assert pair.private_key == bytes(expected)
    assert pair.public_key == bytes(expected.public_key)


def test_generate_key_pair_failing_source():
    def broken(n):
        raise OSError("entropy pool unavailable")

    with pytest.raises(RandomnessError) as exc_info:
        generate_key_pair(random_source=broken)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_generate_key_pair_short_read():
    with pytest.raises(RandomnessError):
        generate_key_pair(random_source=lambda n: b"\x00" * (n - 1))


# =============================================================================
# Derivation
# =============================================================================

def test_dh_symmetry():
    for _ in range(20):
        a = generate_key_pair()
        b = generate_key_pair()
        assert derive_shared_secret(a.private_key, b.public_key) == \
            derive_shared_secret(b.private_key, a.public_key)


def test_derive_matches_nacl_box_precompute():
    a = generate_key_pair()
    b = generate_key_pair()
    box = Box(PrivateKey(a.private_key), PublicKey(b.public_key))
    assert derive_shared_secret(a.private_key, b.public_key) == box.shared_key()


def test_derive_is_deterministic():
    a = generate_key_pair()
    b = generate_key_pair()
    first = derive_shared_secret(a.private_key, b.public_key)
    assert len(first) == 32
    assert derive_shared_secret(a.private_key, b.public_key) == first


def test_different_peers_give_different_secrets():
    a = generate_key_pair()
    b = generate_key_pair()
    c = generate_key_pair()
    assert derive_shared_secret(a.private_key, b.public_key) != \
        derive_shared_secret(a.private_key, c.public_key)


@pytest.mark.parametrize("bad", [b"", b"\x01" * 31, b"\x01" * 33])
def test_derive_rejects_wrong_key_length(bad):
    good = generate_key_pair()
    with pytest.raises(ValueError):
        derive_shared_secret(bad, good.public_key)
    with pytest.raises(ValueError):
        derive_shared_secret(good.private_key, bad)


# =============================================================================
# KeyPair model
# =============================================================================

def test_key_pair_rejects_wrong_length():
    with pytest.raises(ValueError):
        KeyPair(public_key=b"\x00" * 31, private_key=b"\x00" * 32)


def test_key_pair_is_frozen():
    pair = generate_key_pair()
    with pytest.raises(ValueError):
        pair.public_key = b"\x00" * 32


def test_key_pair_hides_private_key():
    pair = generate_key_pair()
    assert "private_key" not in repr(pair)
    assert repr(pair.private_key) not in repr(pair)
    assert "private_key" not in pair.model_dump()
    assert pair.model_dump()["public_key"] == pair.public_key


def test_key_pair_mismatch_detected():
    a = generate_key_pair()
    b = generate_key_pair()
    assert not KeyPair(public_key=b.public_key, private_key=a.private_key).matches()


def test_public_key_b64_round_trip():
    pair = generate_key_pair()
    text = pair.public_key_b64()
    assert base64.b64decode(text) == pair.public_key
    assert public_key_from_b64(text) == pair.public_key


def test_public_key_from_b64_rejects_garbage():
    with pytest.raises(ValueError):
        public_key_from_b64("not base64 at all!")
    with pytest.raises(ValueError):
        public_key_from_b64(base64.b64encode(b"\x00" * 16).decode())


def test_fingerprint_format():
    pair = generate_key_pair()
    fp = fingerprint(pair.public_key)

    parts = fp.split(':')
    assert len(parts) == 8, "Fingerprint should have 8 parts"
    for part in parts:
        assert len(part) == 2, "Each part should be 2 hex chars"
    assert fp.replace(':', '') == hashlib.sha256(pair.public_key).hexdigest()[:16]
    assert pair.fingerprint() == fp


@pytest.mark.parametrize("low_order", [b"\x00" * 32, b"\x01" + b"\x00" * 31])
def test_derive_rejects_low_order_peer_key(low_order):
    own = generate_key_pair()
    with pytest.raises(ValueError, match="low-order"):
        derive_shared_secret(own.private_key, low_order)


def test_public_key_to_b64():
    pair = generate_key_pair()
    assert public_key_to_b64(pair.public_key) == pair.public_key_b64()
    assert public_key_from_b64(public_key_to_b64(pair.public_key)) == pair.public_key
    with pytest.raises(ValueError):
        public_key_to_b64(b"\x00" * 31)
