"""Read-side stream decorator that checksums bytes as they pass through."""

import io
import logging
from typing import Optional, Union

from .backends import ChecksumType, DigestBackend, get_backend
from .errors import DigestFinalizedError, InvalidSourceError

logger = logging.getLogger(__name__)


class ChecksumInputStream:
    """
    Wrap a readable binary stream and hash everything read through it.

    Reads are forwarded unchanged to the wrapped ``source``; each non-empty
    result is fed to the digest exactly once, in the order it is returned.
    The source is borrowed: it is never closed here.

    The digest is computed once, on the first call to ``finalize``, any
    digest accessor, or leaving a ``with`` block, and cached. Reading after
    that raises DigestFinalizedError. Retrieving the digest before any read
    yields the digest of empty input.

    Instances are not thread-safe; callers must serialize reads and
    finalization.
    """

    def __init__(
        self,
        source,
        checksum_type: Union[ChecksumType, str] = ChecksumType.SHA256,
        backend: Optional[DigestBackend] = None,
    ) -> None:
        """
        Bind a checksum stream to an already-open source.

        Args:
            source: Readable binary stream exposing ``read(size)``
            checksum_type: Algorithm to hash with (only SHA-256 today)
            backend: Digest backend; the configured default when omitted

        Raises:
            InvalidSourceError: If source is not a readable stream
            UnsupportedChecksumError: If the algorithm is not available
        """
        _check_source(source)
        self._checksum_type = ChecksumType.parse(checksum_type)
        if backend is None:
            backend = get_backend()
        self._context = backend.init(self._checksum_type)
        self._source = source
        self._digest: Optional[bytes] = None
        self._bytes_read = 0

    def __enter__(self) -> "ChecksumInputStream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        # Releases the digest context; the source belongs to the caller.
        self.finalize()

    @property
    def source(self):
        return self._source

    @property
    def checksum_type(self) -> ChecksumType:
        return self._checksum_type

    @property
    def digest_size(self) -> int:
        return self._checksum_type.digest_size

    @property
    def finalized(self) -> bool:
        return self._digest is not None

    @property
    def bytes_read(self) -> int:
        """Total number of bytes fed to the digest so far."""
        return self._bytes_read

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> Optional[bytes]:
        """
        Read up to ``size`` bytes from the source and hash them.

        Returns exactly what the source returned: data, ``b""`` at end of
        stream, or ``None`` for a non-blocking source with nothing ready.
        Exceptions raised by the source propagate untouched and leave the
        digest unchanged.
        """
        self._check_not_finalized()
        data = self._source.read(size)
        if data:
            self._update(data)
        return data

    def readinto(self, buffer) -> Optional[int]:
        """
        Read into a writable buffer and hash the bytes written.

        Uses the source's own ``readinto`` when it has one.
        """
        self._check_not_finalized()
        readinto = getattr(self._source, "readinto", None)
        view = memoryview(buffer).cast("B")
        if readinto is not None:
            count = readinto(view)
        else:
            data = self._source.read(len(view))
            if data is None:
                return None
            count = len(data)
            view[:count] = data
        if count:
            self._update(view[:count])
        return count

    def finalize(self) -> bytes:
        """
        Close the digest computation and return the digest.

        Only the first call computes anything; later calls return the same
        bytes.
        """
        if self._digest is None:
            self._digest = self._context.finalize()
            self._context = None
            logger.debug(
                f"Finalized {self._checksum_type.value} over {self._bytes_read} bytes: "
                f"{self._digest.hex()}"
            )
        return self._digest

    def get_digest(self, buffer) -> int:
        """
        Write the raw digest into a caller-supplied buffer.

        Args:
            buffer: Writable buffer of at least ``digest_size`` bytes

        Returns:
            Number of digest bytes written

        Raises:
            ValueError: If the buffer is too small
        """
        view = memoryview(buffer).cast("B")
        if len(view) < self.digest_size:
            raise ValueError(
                f"Digest buffer too small: {len(view)} < {self.digest_size} bytes"
            )
        digest = self.finalize()
        view[:len(digest)] = digest
        return len(digest)

    def dup_digest(self) -> bytes:
        """Return the raw digest, sized to ``digest_size``."""
        return bytes(self.finalize())

    def get_string(self) -> str:
        """Return the digest as lowercase hexadecimal."""
        return self.finalize().hex()

    def _update(self, data) -> None:
        self._context.update(data)
        self._bytes_read += len(data)

    def _check_not_finalized(self) -> None:
        if self._digest is not None:
            raise DigestFinalizedError("Cannot read from a finalized checksum stream")


def _check_source(source) -> None:
    if source is None:
        raise InvalidSourceError("Source stream must not be None")
    if isinstance(source, io.TextIOBase):
        raise InvalidSourceError("Source stream must be binary, not text")
    if not callable(getattr(source, "read", None)):
        raise InvalidSourceError(
            f"Source must be a readable stream, got {type(source).__name__}"
        )
    if getattr(source, "closed", False):
        raise InvalidSourceError("Source stream is closed")
    readable = getattr(source, "readable", None)
    if callable(readable):
        try:
            is_readable = readable()
        except ValueError as e:
            raise InvalidSourceError(f"Source stream is not usable: {e}") from e
        if not is_readable:
            raise InvalidSourceError("Source stream is not readable")
