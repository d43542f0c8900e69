"""Environment-driven defaults for checksum streams."""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_BACKEND = "hashlib"
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1 MiB
DEFAULT_LOG_LEVEL = "INFO"

BACKEND_ENV = "CSUMSTREAM_BACKEND"
CHUNK_SIZE_ENV = "CSUMSTREAM_CHUNK_SIZE"
LOG_FILE_ENV = "CSUMSTREAM_LOG_FILE"
LOG_LEVEL_ENV = "CSUMSTREAM_LOG_LEVEL"


def get_default_backend() -> str:
    """Name of the digest backend used when none is requested."""
    return os.environ.get(BACKEND_ENV, DEFAULT_BACKEND).strip() or DEFAULT_BACKEND


def get_chunk_size() -> int:
    """
    Read size used when draining streams.

    Falls back to DEFAULT_CHUNK_SIZE when the environment value is not a
    positive integer.
    """
    raw = os.environ.get(CHUNK_SIZE_ENV)
    if raw is None:
        return DEFAULT_CHUNK_SIZE
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {CHUNK_SIZE_ENV}: {raw!r}")
        return DEFAULT_CHUNK_SIZE
    if value <= 0:
        logger.warning(f"Ignoring non-positive {CHUNK_SIZE_ENV}: {value}")
        return DEFAULT_CHUNK_SIZE
    return value


def get_log_file() -> Optional[Path]:
    """Rotating log file path, or None when file logging is disabled."""
    raw = os.environ.get(LOG_FILE_ENV)
    return Path(raw) if raw else None


def get_log_level() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, name, logging.INFO)
