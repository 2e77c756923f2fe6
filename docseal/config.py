"""
docseal - Configuration

Fixed wire-format sizes plus a couple of environment overrides.
Invalid override values are ignored with a warning and the default is used.
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

# =============================================================================
# Wire Format (fixed, not overridable)
# =============================================================================

# Curve25519 key length (public, private and precomputed shared key)
KEY_SIZE = 32

# XSalsa20 nonce length, prefixed to every envelope
NONCE_SIZE = 24

# Poly1305 authenticator length
TAG_SIZE = 16


# =============================================================================
# Configuration
# =============================================================================

DEFAULT_FINGERPRINT_BYTES = 8


def _fingerprint_bytes(raw: Optional[str]) -> int:
    """Parse DOCSEAL_FINGERPRINT_BYTES; must be 1..32 (SHA256 length)."""
    if raw is None or not raw.strip():
        return DEFAULT_FINGERPRINT_BYTES
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring DOCSEAL_FINGERPRINT_BYTES={raw!r}: not an integer")
        return DEFAULT_FINGERPRINT_BYTES
    if not 1 <= value <= 32:
        logger.warning(f"Ignoring DOCSEAL_FINGERPRINT_BYTES={value}: must be between 1 and 32")
        return DEFAULT_FINGERPRINT_BYTES
    return value


def _log_level(raw: Optional[str]) -> Optional[str]:
    """Parse DOCSEAL_LOG_LEVEL; only standard level names are accepted."""
    if raw is None or not raw.strip():
        return None
    name = raw.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        logger.warning(f"Ignoring DOCSEAL_LOG_LEVEL={raw!r}: unknown level")
        return None
    return name


# Number of SHA256 bytes shown in a public key fingerprint
FINGERPRINT_BYTES = _fingerprint_bytes(os.environ.get('DOCSEAL_FINGERPRINT_BYTES'))

# Package log level (None = inherit from the application)
LOG_LEVEL = _log_level(os.environ.get('DOCSEAL_LOG_LEVEL'))
