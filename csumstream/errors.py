"""Exception hierarchy for checksum streams."""


class ChecksumStreamError(Exception):
    """Base class for all checksum stream errors."""


class InvalidSourceError(ChecksumStreamError, TypeError):
    """Raised when the wrapped object is not a readable byte stream."""


class UnsupportedChecksumError(ChecksumStreamError, ValueError):
    """Raised when a checksum type has no backend implementation."""


class UnsupportedBackendError(ChecksumStreamError, ValueError):
    """Raised when a digest backend name is not registered."""


class DigestFinalizedError(ChecksumStreamError):
    """Raised when a finalized stream is asked to consume more bytes."""


class BackendError(ChecksumStreamError, RuntimeError):
    """
    Raised when a digest backend fails internally.

    A hashing context that failed mid-stream cannot be trusted, so this is
    never caught inside the package.
    """
