"""Shared fixtures and test configuration."""

import io
import tempfile
from pathlib import Path
from typing import Generator, List, Optional
import pytest


class ChunkedSource:
    """
    Readable stream that hands out its payload in scripted chunk sizes.
    
    Each read returns at most the next scripted size (and never more than
    requested); once the script runs out, reads return what is asked for.
    Every returned chunk is recorded in ``chunks``.
    """
    
    def __init__(self, payload: bytes, sizes: Optional[List[int]] = None) -> None:
        self._buffer = io.BytesIO(payload)
        self._sizes = list(sizes or [])
        self.chunks: List[bytes] = []
        self.closed = False
    
    def readable(self) -> bool:
        return True
    
    def read(self, size: int = -1) -> bytes:
        if self._sizes:
            scripted = self._sizes.pop(0)
            size = scripted if size < 0 else min(size, scripted)
        data = self._buffer.read(size)
        self.chunks.append(data)
        return data
    
    def close(self) -> None:
        self.closed = True


class FlakySource(ChunkedSource):
    """ChunkedSource whose reads fail, without consuming data, on chosen calls."""
    
    def __init__(self, payload: bytes, fail_on: List[int], sizes: Optional[List[int]] = None) -> None:
        super().__init__(payload, sizes)
        self._fail_on = set(fail_on)
        self.calls = 0
    
    def read(self, size: int = -1) -> bytes:
        self.calls += 1
        if self.calls in self._fail_on:
            raise OSError(5, "Simulated I/O error")
        return super().read(size)


@pytest.fixture
def payload() -> bytes:
    """Deterministic ~100 KiB payload that is not a multiple of common chunk sizes."""
    pattern = bytes(range(256))
    return pattern * 400 + b"tail-bytes"


@pytest.fixture
def tmp_data_tree() -> Generator[Path, None, None]:
    """
    Builds a temporary directory with files of known content.
    
    Creates:
    - empty.bin: zero-length file
    - abc.txt: the ASCII bytes "abc"
    - nested/blob.bin: multi-chunk binary file
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        
        (temp_path / "nested").mkdir()
        (temp_path / "empty.bin").write_bytes(b"")
        (temp_path / "abc.txt").write_bytes(b"abc")
        (temp_path / "nested" / "blob.bin").write_bytes(bytes(range(256)) * 4096)
        
        yield temp_path


@pytest.fixture
def chunked_source():
    """Factory for ChunkedSource instances."""
    return ChunkedSource


@pytest.fixture
def flaky_source():
    """Factory for FlakySource instances."""
    return FlakySource
