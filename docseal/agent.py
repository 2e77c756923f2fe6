"""
docseal - Sender Identity (Agent)

An Agent is a short-lived sender. On construction it generates an
ephemeral key pair, derives the shared key toward one fixed receiver and
keeps only {public key, shared key}; the ephemeral private key is
dropped as soon as derivation is done.

Both fields are immutable bytes set once in __init__, so concurrent
reads need no locking.
"""

import logging
from typing import Any, Dict, Optional, Type, Union

from .documents import Document, ModelT
from .envelope import open_envelope, seal
from .keys import (
    derive_shared_secret,
    ensure_key,
    fingerprint,
    generate_key_pair,
    public_key_to_b64,
)
from .randomness import RandomSource

logger = logging.getLogger(__name__)


class Agent:
    """
    Sender identity bound to a single receiver public key.

    Usage:
        agent = Agent(receiver_public_key)
        send_out_of_band(agent.public_key)
        envelope = agent.seal({"title": "hello"})
    """

    __slots__ = ('_public_key', '_shared_secret')

    def __init__(
        self,
        peer_public_key: bytes,
        random_source: Optional[RandomSource] = None,
    ):
        """
        Args:
            peer_public_key: Receiver's 32-byte public key
            random_source: Optional byte source for the ephemeral key

        Raises:
            RandomnessError: Ephemeral key could not be generated
            ValueError: peer_public_key is not 32 bytes
        """
        peer_public_key = ensure_key(peer_public_key)
        ephemeral = generate_key_pair(random_source)
        shared = derive_shared_secret(ephemeral.private_key, peer_public_key)
        public = ephemeral.public_key
        del ephemeral

        self._public_key = public
        self._shared_secret = shared
        logger.debug(f"Created agent {self.fingerprint()} for receiver {fingerprint(peer_public_key)}")

    @property
    def public_key(self) -> bytes:
        """This identity's 32-byte public key, for out-of-band exchange."""
        return self._public_key

    @property
    def shared_secret(self) -> bytes:
        """The cached 32-byte shared key toward the receiver."""
        return self._shared_secret

    def public_key_b64(self) -> str:
        return public_key_to_b64(self._public_key)

    def fingerprint(self) -> str:
        return fingerprint(self._public_key)

    def seal(
        self,
        document: Document,
        random_source: Optional[RandomSource] = None,
    ) -> bytes:
        """Seal a document for the receiver."""
        return seal(self._shared_secret, document, random_source)

    def open(
        self,
        envelope: bytes,
        model: Optional[Type[ModelT]] = None,
    ) -> Union[Dict[str, Any], ModelT]:
        """Open an envelope sealed by the receiver for this agent."""
        return open_envelope(envelope, self._shared_secret, model)

    def __repr__(self) -> str:
        return f"Agent(fingerprint='{self.fingerprint()}')"


def new_agent(
    peer_public_key: bytes,
    random_source: Optional[RandomSource] = None,
) -> Agent:
    """Create a sender identity toward `peer_public_key`."""
    return Agent(peer_public_key, random_source)
