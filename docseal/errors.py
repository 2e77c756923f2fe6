"""
docseal - Exceptions

Every failure surfaced by the library derives from DocSealError.
Key length problems are not part of this family: they are rejected by
model validation (ValueError) before any work is done.
"""


class DocSealError(Exception):
    """Base exception for docseal failures."""
    pass


class RandomnessError(DocSealError):
    """Raised when the random source cannot supply the requested bytes."""
    pass


class SerializationError(DocSealError):
    """Raised when a document cannot be encoded."""
    pass


class DeserializationError(DocSealError):
    """Raised when decrypted bytes cannot be decoded into a document."""
    pass


class FormatError(DocSealError):
    """Raised when an envelope is structurally invalid (e.g. too short)."""
    pass


class AuthenticationError(DocSealError):
    """Raised when an envelope fails authenticated decryption."""
    pass


class UnknownSenderError(DocSealError, KeyError):
    """Raised when no shared secret is registered for an identifier."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ''
