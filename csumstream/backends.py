"""Digest backends used by checksum streams."""

import abc
import enum
import hashlib
import logging
from typing import Dict, List, Optional, Protocol, Union

from . import config
from .errors import BackendError, UnsupportedBackendError, UnsupportedChecksumError

logger = logging.getLogger(__name__)


class ChecksumType(enum.Enum):
    """Supported checksum algorithms."""

    SHA256 = "sha256"

    @property
    def digest_size(self) -> int:
        """Length in bytes of the digest this algorithm produces."""
        return _DIGEST_SIZES[self]

    @classmethod
    def parse(cls, value: Union["ChecksumType", str]) -> "ChecksumType":
        """
        Resolve an enum member from itself or its (case-insensitive) name.

        Raises:
            UnsupportedChecksumError: If the value names no known algorithm
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "")
            for member in cls:
                if member.value == key:
                    return member
        raise UnsupportedChecksumError(f"Unsupported checksum type: {value!r}")


_DIGEST_SIZES = {
    ChecksumType.SHA256: 32,
}


class DigestContext(Protocol):
    """Running hash state for a single algorithm."""

    def update(self, data: bytes) -> None:
        ...

    def finalize(self) -> bytes:
        ...


class DigestBackend(abc.ABC):
    """Factory for digest contexts."""

    name: str = ""

    @abc.abstractmethod
    def supports(self, checksum_type: ChecksumType) -> bool:
        """Return True if this backend can hash with ``checksum_type``."""

    @abc.abstractmethod
    def init(self, checksum_type: ChecksumType) -> DigestContext:
        """
        Create a fresh context for ``checksum_type``.

        Raises:
            UnsupportedChecksumError: If the backend lacks the algorithm
        """


class _HashlibContext:
    """DigestContext over a ``hashlib`` hash object."""

    def __init__(self, checksum_type: ChecksumType, hash_obj) -> None:
        self.checksum_type = checksum_type
        self._hash = hash_obj

    def update(self, data: bytes) -> None:
        if self._hash is None:
            raise BackendError("Digest context already finalized")
        try:
            self._hash.update(data)
        except (TypeError, ValueError, MemoryError) as e:
            raise BackendError(f"{self.checksum_type.value} update failed: {e}") from e

    def finalize(self) -> bytes:
        if self._hash is None:
            raise BackendError("Digest context already finalized")
        digest = self._hash.digest()
        self._hash = None
        if len(digest) != self.checksum_type.digest_size:
            raise BackendError(
                f"{self.checksum_type.value} produced {len(digest)} bytes, "
                f"expected {self.checksum_type.digest_size}"
            )
        return digest


class HashlibBackend(DigestBackend):
    """Backend built on the interpreter's ``hashlib`` (OpenSSL in CPython)."""

    name = "hashlib"

    _CONSTRUCTORS = {
        ChecksumType.SHA256: hashlib.sha256,
    }

    def supports(self, checksum_type: ChecksumType) -> bool:
        return checksum_type in self._CONSTRUCTORS

    def init(self, checksum_type: ChecksumType) -> DigestContext:
        if not self.supports(checksum_type):
            raise UnsupportedChecksumError(
                f"Backend {self.name!r} does not support {checksum_type.value}"
            )
        return _HashlibContext(checksum_type, self._CONSTRUCTORS[checksum_type]())


_REGISTRY: Dict[str, DigestBackend] = {}


def register_backend(backend: DigestBackend) -> None:
    """
    Make a backend available by name.

    Args:
        backend: Backend instance; replaces any backend with the same name
    """
    if not backend.name:
        raise ValueError("Backend must define a name")
    if backend.name in _REGISTRY:
        logger.debug(f"Replacing digest backend: {backend.name}")
    _REGISTRY[backend.name] = backend


def available_backends() -> List[str]:
    """Names of all registered backends, sorted."""
    return sorted(_REGISTRY)


def get_backend(name: Optional[str] = None) -> DigestBackend:
    """
    Look up a registered backend.

    Args:
        name: Backend name; the configured default when omitted

    Returns:
        The backend instance

    Raises:
        UnsupportedBackendError: If no backend has that name
    """
    if name is None:
        name = config.get_default_backend()
    try:
        return _REGISTRY[name]
    except KeyError:
        raise UnsupportedBackendError(
            f"Unknown digest backend: {name!r} "
            f"(available: {', '.join(available_backends())})"
        ) from None


register_backend(HashlibBackend())
