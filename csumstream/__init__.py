"""csumstream - checksum bytes while they stream through a reader."""

import logging
import logging.handlers
from typing import BinaryIO, Optional

from . import config
from .backends import (
    ChecksumType,
    DigestBackend,
    HashlibBackend,
    available_backends,
    get_backend,
    register_backend,
)
from .errors import (
    BackendError,
    ChecksumStreamError,
    DigestFinalizedError,
    InvalidSourceError,
    UnsupportedBackendError,
    UnsupportedChecksumError,
)
from .stream import ChecksumInputStream
from .utils.hashing import calculate_sha256, checksum_bytes, drain, verify_checksum

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(config.get_log_level())

formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Rotating file handler, only when a log file is configured
log_file = config.get_log_file()
if log_file is not None:
    handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=1024 * 1024, backupCount=5
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

# Console handler
console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)
logger.addHandler(console_handler)

__version__ = "1.0.0"

__all__ = [
    "ChecksumInputStream",
    "ChecksumType",
    "DigestBackend",
    "HashlibBackend",
    "available_backends",
    "get_backend",
    "register_backend",
    "BackendError",
    "ChecksumStreamError",
    "DigestFinalizedError",
    "InvalidSourceError",
    "UnsupportedBackendError",
    "UnsupportedChecksumError",
    "calculate_sha256",
    "checksum_bytes",
    "drain",
    "verify_checksum",
    "checksum_stream",
]


def checksum_stream(
    source: BinaryIO, chunk_size: Optional[int] = None
) -> ChecksumInputStream:
    """Read ``source`` to the end through a checksum stream and finalize it."""
    stream = ChecksumInputStream(source)
    drain(stream, chunk_size)
    stream.finalize()
    return stream
