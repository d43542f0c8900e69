"""Tests for environment-driven configuration."""

import logging
from pathlib import Path
import pytest

from csumstream import config


class TestConfig:
    """Test cases for the config accessors."""
    
    def test_defaults(self, monkeypatch) -> None:
        for name in (config.BACKEND_ENV, config.CHUNK_SIZE_ENV, config.LOG_FILE_ENV, config.LOG_LEVEL_ENV):
            monkeypatch.delenv(name, raising=False)
        
        assert config.get_default_backend() == "hashlib"
        assert config.get_chunk_size() == 1024 * 1024
        assert config.get_log_file() is None
        assert config.get_log_level() == logging.INFO
    
    def test_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv(config.BACKEND_ENV, "custom")
        monkeypatch.setenv(config.CHUNK_SIZE_ENV, "4096")
        monkeypatch.setenv(config.LOG_FILE_ENV, "/tmp/csumstream.log")
        monkeypatch.setenv(config.LOG_LEVEL_ENV, "debug")
        
        assert config.get_default_backend() == "custom"
        assert config.get_chunk_size() == 4096
        assert config.get_log_file() == Path("/tmp/csumstream.log")
        assert config.get_log_level() == logging.DEBUG
    
    @pytest.mark.parametrize("raw", ["abc", "0", "-5", ""])
    def test_invalid_chunk_size_falls_back(self, monkeypatch, caplog, raw: str) -> None:
        monkeypatch.setenv(config.CHUNK_SIZE_ENV, raw)
        
        with caplog.at_level(logging.WARNING, logger="csumstream.config"):
            assert config.get_chunk_size() == config.DEFAULT_CHUNK_SIZE
        
        assert config.CHUNK_SIZE_ENV in caplog.text
    
    def test_blank_backend_uses_default(self, monkeypatch) -> None:
        monkeypatch.setenv(config.BACKEND_ENV, "  ")
        
        assert config.get_default_backend() == config.DEFAULT_BACKEND
    
    def test_unknown_log_level_uses_info(self, monkeypatch) -> None:
        monkeypatch.setenv(config.LOG_LEVEL_ENV, "chatty")
        
        assert config.get_log_level() == logging.INFO
