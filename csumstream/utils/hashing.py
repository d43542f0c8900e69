"""Checksum helpers built on ChecksumInputStream."""

import io
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .. import config
from ..stream import ChecksumInputStream


def calculate_sha256(file_path: Path, chunk_size: Optional[int] = None) -> str:
    """
    Calculate SHA-256 checksum of a file using streaming reads.
    
    Args:
        file_path: Path to the file to hash
        chunk_size: Read size in bytes (configured default when omitted)
        
    Returns:
        SHA-256 hash as hexadecimal string
        
    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the path is not a regular file
        PermissionError: If the file cannot be read
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    
    if not file_path.is_file():
        raise ValueError(f"Path is not a file: {file_path}")
    
    try:
        with open(file_path, "rb") as f:
            stream = ChecksumInputStream(f)
            drain(stream, chunk_size)
    except PermissionError:
        raise PermissionError(f"Cannot read file: {file_path}")
    
    return stream.get_string()


def checksum_bytes(data: bytes) -> str:
    """Return the SHA-256 hex digest of an in-memory buffer."""
    stream = ChecksumInputStream(io.BytesIO(data))
    drain(stream)
    return stream.get_string()


def drain(stream: BinaryIO, chunk_size: Optional[int] = None) -> int:
    """
    Read a stream to end-of-stream, discarding the data.
    
    Only blocking streams can be drained: a read returning ``None`` (no data
    ready on a non-blocking source) raises instead of ending the loop, so a
    digest is never finalized over a partial stream.
    
    Args:
        stream: Stream to read from (typically a ChecksumInputStream)
        chunk_size: Read size in bytes (configured default when omitted)
        
    Returns:
        Total number of bytes read
        
    Raises:
        BlockingIOError: If the stream reports no data ready
    """
    if chunk_size is None:
        chunk_size = config.get_chunk_size()
    if chunk_size <= 0:
        raise ValueError(f"Chunk size must be positive: {chunk_size}")
    
    total = 0
    while True:
        chunk = stream.read(chunk_size)
        if chunk is None:
            raise BlockingIOError(
                f"Stream returned no data after {total} bytes; "
                "non-blocking sources cannot be drained"
            )
        if not chunk:
            break
        total += len(chunk)
    return total


def verify_checksum(target: Union[Path, ChecksumInputStream], expected: str) -> bool:
    """
    Check a file or checksum stream against an expected hex digest.
    
    A stream that is not yet finalized is drained first.
    
    Args:
        target: File path or ChecksumInputStream
        expected: Expected hexadecimal digest (case-insensitive)
        
    Returns:
        True if the digests match, False otherwise
    """
    if isinstance(target, ChecksumInputStream):
        if not target.finalized:
            drain(target)
        actual = target.get_string()
    else:
        actual = calculate_sha256(Path(target))
    return actual == expected.strip().lower()
