"""Utility modules for checksum streams."""

from .hashing import calculate_sha256, checksum_bytes, drain, verify_checksum

__all__ = ["calculate_sha256", "checksum_bytes", "drain", "verify_checksum"]
