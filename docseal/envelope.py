"""
docseal - Envelope Codec

Seals documents into nonce-prefixed authenticated ciphertexts using a
precomputed shared key, and opens them again.

Wire format:
    offset 0       : nonce, 24 bytes, fresh random per envelope
    offset 24..end : XSalsa20 ciphertext || Poly1305 tag (16 bytes)

No version byte, key id or associated data: the caller must know which
shared key and which document shape apply.
"""

import base64
import binascii
import logging
from typing import Any, Dict, Optional, Tuple, Type, Union

from nacl.encoding import RawEncoder
from nacl.exceptions import CryptoError
from nacl.public import Box

from . import config
from .documents import Document, ModelT, deserialize_document, serialize_document
from .errors import AuthenticationError, FormatError
from .keys import ensure_key
from .randomness import RandomSource, random_bytes

logger = logging.getLogger(__name__)


def _box(shared_secret: bytes) -> Box:
    return Box.decode(ensure_key(shared_secret), encoder=RawEncoder)


def seal(
    shared_secret: bytes,
    document: Document,
    random_source: Optional[RandomSource] = None,
) -> bytes:
    """
    Serialize and encrypt a document.

    Args:
        shared_secret: 32-byte precomputed shared key
        document: Mapping or pydantic model
        random_source: Optional byte source for the nonce

    Returns:
        nonce || ciphertext+tag

    Raises:
        SerializationError: Document could not be encoded
        RandomnessError: No nonce could be drawn
    """
    box = _box(shared_secret)
    plaintext = serialize_document(document)

    # A fresh nonce per call is the only protection against reuse
    nonce = random_bytes(config.NONCE_SIZE, random_source)

    encrypted = box.encrypt(plaintext, nonce)
    return bytes(encrypted)


def split_envelope(envelope: bytes) -> Tuple[bytes, bytes]:
    """
    Split an envelope into (nonce, body) without decrypting.

    Raises:
        FormatError: Envelope shorter than the nonce
    """
    if len(envelope) < config.NONCE_SIZE:
        raise FormatError(
            f"envelope shorter than nonce length: {len(envelope)} < {config.NONCE_SIZE} bytes"
        )
    envelope = bytes(envelope)
    return envelope[:config.NONCE_SIZE], envelope[config.NONCE_SIZE:]


def open_envelope(
    envelope: bytes,
    shared_secret: bytes,
    model: Optional[Type[ModelT]] = None,
) -> Union[Dict[str, Any], ModelT]:
    """
    Authenticate, decrypt and deserialize an envelope.

    Args:
        envelope: nonce || ciphertext+tag, as produced by seal()
        shared_secret: 32-byte precomputed shared key
        model: Optional pydantic model for the decoded document

    Returns:
        The document (dict, or `model` instance)

    Raises:
        FormatError: Envelope shorter than the nonce (nothing decrypted)
        AuthenticationError: Tag mismatch, wrong key or truncated body
        DeserializationError: Authentic plaintext is not a valid document
    """
    box = _box(shared_secret)
    nonce, body = split_envelope(envelope)

    try:
        plaintext = box.decrypt(body, nonce)
    except CryptoError:
        logger.warning(f"Envelope failed authentication ({len(envelope)} bytes)")
        raise AuthenticationError("unable to open envelope: authentication failed") from None

    return deserialize_document(plaintext, model)


# `open` is the name used by the wire-level call surface
open = open_envelope


# =============================================================================
# Text transport
# =============================================================================

def envelope_to_text(envelope: bytes) -> str:
    """Encode an envelope as URL-safe Base64 text."""
    return base64.urlsafe_b64encode(envelope).decode()


def envelope_from_text(text: str) -> bytes:
    """
    Decode URL-safe Base64 text back into envelope bytes.

    Characters outside the URL-safe alphabet are rejected, not skipped.

    Raises:
        FormatError: Text is not valid URL-safe Base64
    """
    try:
        return base64.b64decode(text.strip().encode('ascii'), altchars=b'-_', validate=True)
    except (binascii.Error, ValueError) as e:
        raise FormatError(f"Invalid envelope encoding: {e}") from e
