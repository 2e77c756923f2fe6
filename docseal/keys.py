"""
docseal - Key Agreement

Curve25519 key pairs and precomputed shared keys.

Security Architecture:
- Key pairs: X25519 (via nacl.public)
- Shared key: X25519 + HSalsa20 (crypto_box_beforenm), so that
  derive(a.private, b.public) == derive(b.private, a.public)
- Private key bytes never appear in repr(), model_dump() or log lines
"""

import base64
import hashlib
import logging
from typing import Annotated, Optional

from nacl.encoding import RawEncoder
from nacl.exceptions import CryptoError
from nacl.public import Box, PrivateKey, PublicKey
from pydantic import BaseModel, ConfigDict, Field

from . import config
from .randomness import RandomSource, random_bytes

logger = logging.getLogger(__name__)

# Fixed-size key material; wrong lengths fail model validation
Key32 = Annotated[bytes, Field(min_length=config.KEY_SIZE, max_length=config.KEY_SIZE)]


class _KeyBytes(BaseModel):
    """Validation helper for bare 32-byte values."""
    model_config = ConfigDict(strict=True)

    value: Key32


def ensure_key(value: bytes) -> bytes:
    """Return `value` as bytes if it is exactly 32 bytes long, else raise ValueError."""
    if isinstance(value, bytearray):
        value = bytes(value)
    return _KeyBytes(value=value).value


class KeyPair(BaseModel):
    """A Curve25519 key pair."""
    model_config = ConfigDict(frozen=True, strict=True)

    public_key: Key32 = Field(..., description="Raw 32-byte X25519 public key")
    private_key: Key32 = Field(..., description="Raw 32-byte X25519 private key", repr=False, exclude=True)

    def public_key_b64(self) -> str:
        """Base64 text form of the public key, for out-of-band exchange."""
        return public_key_to_b64(self.public_key)

    def fingerprint(self) -> str:
        return fingerprint(self.public_key)

    def matches(self) -> bool:
        """True if public_key is the X25519 public key of private_key."""
        derived = PrivateKey(self.private_key, encoder=RawEncoder).public_key
        return bytes(derived) == self.public_key


def generate_key_pair(random_source: Optional[RandomSource] = None) -> KeyPair:
    """
    Generate a new Curve25519 key pair.

    The private scalar is 32 bytes from the random source; libsodium
    clamps it on use, exactly as PrivateKey.generate() does.

    Raises:
        RandomnessError: The random source could not supply 32 bytes
    """
    seed = random_bytes(PrivateKey.SIZE, random_source)
    private = PrivateKey(seed, encoder=RawEncoder)
    pair = KeyPair(
        public_key=bytes(private.public_key),
        private_key=bytes(private),
    )
    logger.debug(f"Generated key pair {pair.fingerprint()}")
    return pair


def derive_shared_secret(own_private_key: bytes, peer_public_key: bytes) -> bytes:
    """
    Derive the 32-byte shared key for (own private key, peer public key).

    Pure and deterministic; the same value is obtained by the peer from
    (peer private key, own public key). Runs in libsodium, constant time
    with respect to the private key.

    Raises:
        ValueError: Either key is not exactly 32 bytes, or the peer key is
            a low-order point (libsodium refuses the all-zero result)
    """
    private = PrivateKey(ensure_key(own_private_key), encoder=RawEncoder)
    public = PublicKey(ensure_key(peer_public_key), encoder=RawEncoder)
    try:
        return Box(private, public).shared_key()
    except CryptoError as e:
        raise ValueError("peer public key is a low-order point") from e


def public_key_to_b64(public_key: bytes) -> str:
    """Base64 text form of a public key, for out-of-band exchange."""
    return base64.b64encode(ensure_key(public_key)).decode()


def public_key_from_b64(text: str) -> bytes:
    """Parse a Base64 public key (as produced by public_key_b64)."""
    try:
        raw = base64.b64decode(text.strip(), validate=True)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid Base64 public key: {e}") from e
    return ensure_key(raw)


def fingerprint(public_key: bytes) -> str:
    """
    SHA256 fingerprint of a public key for human verification.

    Format: colon-separated hex pairs, e.g. "3f:a2:09:...".
    """
    digest = hashlib.sha256(ensure_key(public_key)).hexdigest()
    width = config.FINGERPRINT_BYTES * 2
    return ':'.join(digest[i:i+2] for i in range(0, width, 2))
