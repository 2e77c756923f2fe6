"""
docseal - Receiver Registry (Collector)

A Collector is a long-lived receiver. It wraps a static key pair handed
in by the caller and caches one precomputed shared key per registered
sender identifier.

Locking:
- The key pair is immutable and read without locking.
- The identifier -> shared key table is guarded by a ReadWriteLock.
  Lookups take the read lock; inserts and removals take the write lock.
- Shared key derivation is pure CPU work and runs before the write lock
  is taken, so unrelated registrations do not serialize on it.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from .documents import Document, ModelT
from .envelope import open_envelope, seal
from .errors import UnknownSenderError
from .keys import KeyPair, derive_shared_secret, ensure_key, fingerprint
from .locks import ReadWriteLock
from .randomness import RandomSource

logger = logging.getLogger(__name__)


class Collector:
    """
    Receiver registry holding shared keys for many senders.

    Usage:
        collector = Collector(KeyPair(public_key=pub, private_key=priv))
        collector.register("agent-1", agent_public_key)
        secret, found = collector.shared_secret("agent-1")
    """

    def __init__(self, key_pair: KeyPair):
        """
        Args:
            key_pair: The receiver's static key pair

        Raises:
            ValueError: public_key does not belong to private_key
        """
        if not key_pair.matches():
            raise ValueError("Collector public key does not match its private key")

        self._key_pair = key_pair
        self._shared_secrets: Dict[str, bytes] = {}
        self._lock = ReadWriteLock()

    @property
    def public_key(self) -> bytes:
        """The receiver's 32-byte public key."""
        return self._key_pair.public_key

    def fingerprint(self) -> str:
        return fingerprint(self._key_pair.public_key)

    # =========================================================================
    # Shared key table
    # =========================================================================

    def register(self, identifier: str, sender_public_key: bytes) -> None:
        """
        Precompute and cache the shared key for a sender.

        Re-registering an identifier overwrites its entry (last write wins).

        Args:
            identifier: Opaque, non-empty sender identifier
            sender_public_key: The sender's 32-byte public key

        Raises:
            ValueError: Empty identifier or malformed key
        """
        if not isinstance(identifier, str) or not identifier:
            raise ValueError("Sender identifier must be a non-empty string")
        sender_public_key = ensure_key(sender_public_key)

        shared = derive_shared_secret(self._key_pair.private_key, sender_public_key)

        with self._lock.write_locked():
            replaced = identifier in self._shared_secrets
            self._shared_secrets[identifier] = shared

        logger.debug(
            f"{'Re-registered' if replaced else 'Registered'} sender '{identifier}' "
            f"({fingerprint(sender_public_key)})"
        )

    def shared_secret(self, identifier: str) -> Tuple[bytes, bool]:
        """
        Look up the cached shared key for a sender.

        Returns:
            (shared_key, True) if registered, else (b"", False)
        """
        with self._lock.read_locked():
            shared = self._shared_secrets.get(identifier)
        if shared is None:
            return b"", False
        return shared, True

    def unregister(self, identifier: str) -> bool:
        """Drop a sender. Returns True if it was registered."""
        with self._lock.write_locked():
            existed = self._shared_secrets.pop(identifier, None) is not None
        if existed:
            logger.debug(f"Unregistered sender '{identifier}'")
        return existed

    def identifiers(self) -> List[str]:
        """Sorted snapshot of registered sender identifiers."""
        with self._lock.read_locked():
            return sorted(self._shared_secrets)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._shared_secrets)

    def __contains__(self, identifier: object) -> bool:
        with self._lock.read_locked():
            return identifier in self._shared_secrets

    # =========================================================================
    # Envelope helpers
    # =========================================================================

    def _require(self, identifier: str) -> bytes:
        shared, found = self.shared_secret(identifier)
        if not found:
            logger.warning(f"No shared key registered for sender '{identifier}'")
            raise UnknownSenderError(f"Sender '{identifier}' is not registered")
        return shared

    def seal_for(
        self,
        identifier: str,
        document: Document,
        random_source: Optional[RandomSource] = None,
    ) -> bytes:
        """
        Seal a document for a registered sender.

        Raises:
            UnknownSenderError: identifier is not registered
        """
        return seal(self._require(identifier), document, random_source)

    def open_from(
        self,
        identifier: str,
        envelope: bytes,
        model: Optional[Type[ModelT]] = None,
    ) -> Union[Dict[str, Any], ModelT]:
        """
        Open an envelope sealed by a registered sender.

        Raises:
            UnknownSenderError: identifier is not registered
            FormatError, AuthenticationError, DeserializationError: see open_envelope()
        """
        return open_envelope(envelope, self._require(identifier), model)

    def __repr__(self) -> str:
        return f"Collector(fingerprint='{self.fingerprint()}', senders={len(self)})"


def new_collector(private_key: bytes, public_key: bytes) -> Collector:
    """
    Wrap an existing static key pair in a Collector.

    The collector never generates its own keys; use generate_key_pair()
    and keep the private half wherever long-lived keys belong.
    """
    key_pair = KeyPair(public_key=ensure_key(public_key), private_key=ensure_key(private_key))
    return Collector(key_pair)


new_registry = new_collector
