"""
docseal - Application-level authenticated encryption for documents

Security Model: Curve25519 key agreement + XSalsa20-Poly1305 envelopes
Library: PyNaCl (libsodium binding)

Participants:
- Agent: short-lived sender with an ephemeral key pair
- Collector: long-lived receiver caching one shared key per sender

`docseal.open` is the envelope opener (alias of open_envelope). It is left
out of __all__ so a star import never shadows the builtin open().
"""

import logging

from . import config
from .agent import Agent, new_agent
from .collector import Collector, new_collector, new_registry
from .documents import deserialize_document, serialize_document
from .envelope import (
    envelope_from_text,
    envelope_to_text,
    open,
    open_envelope,
    seal,
    split_envelope,
)
from .errors import (
    AuthenticationError,
    DeserializationError,
    DocSealError,
    FormatError,
    RandomnessError,
    SerializationError,
    UnknownSenderError,
)
from .keys import (
    KeyPair,
    derive_shared_secret,
    fingerprint,
    generate_key_pair,
    public_key_from_b64,
    public_key_to_b64,
)

__version__ = "1.0.0"

_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
if config.LOG_LEVEL:
    _logger.setLevel(config.LOG_LEVEL)

__all__ = [
    'Agent',
    'new_agent',
    'Collector',
    'new_collector',
    'new_registry',
    'KeyPair',
    'generate_key_pair',
    'derive_shared_secret',
    'fingerprint',
    'public_key_from_b64',
    'public_key_to_b64',
    'seal',
    'open_envelope',
    'split_envelope',
    'envelope_to_text',
    'envelope_from_text',
    'serialize_document',
    'deserialize_document',
    'DocSealError',
    'RandomnessError',
    'SerializationError',
    'DeserializationError',
    'FormatError',
    'AuthenticationError',
    'UnknownSenderError',
]
