"""
docseal - Random Source

Thin wrapper over a cryptographically secure byte source. The default is
libsodium's randombytes via PyNaCl. Callers may inject their own source
(any callable taking a size and returning bytes) for auditing.
"""

import logging
from typing import Callable, Optional

import nacl.utils

from .errors import RandomnessError

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]


def random_bytes(size: int, source: Optional[RandomSource] = None) -> bytes:
    """
    Draw exactly `size` random bytes.

    Args:
        size: Number of bytes required
        source: Optional byte source, defaults to nacl.utils.random

    Returns:
        `size` bytes

    Raises:
        RandomnessError: The source failed or returned a short read
    """
    source = source or nacl.utils.random
    try:
        data = source(size)
    except Exception as e:
        logger.warning(f"Random source failed: {type(e).__name__}")
        raise RandomnessError(f"unable to read {size} random bytes") from e

    if not isinstance(data, (bytes, bytearray)) or len(data) != size:
        got = len(data) if isinstance(data, (bytes, bytearray)) else type(data).__name__
        logger.warning(f"Random source returned {got} instead of {size} bytes")
        raise RandomnessError(
            f"random source returned insufficient data: wanted {size} bytes, got {got}"
        )
    return bytes(data)
