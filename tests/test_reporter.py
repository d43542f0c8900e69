"""Tests for the DigestReport class."""

import csv
import json
from pathlib import Path
import pytest

from csumstream.reporter import (
    DigestRecord,
    DigestReport,
    STATUS_FAILED,
    STATUS_MISSING,
    STATUS_OK,
)

ABC_SHA256 = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


@pytest.fixture
def records() -> list[DigestRecord]:
    return [
        DigestRecord("abc.txt", ABC_SHA256, size=3),
        DigestRecord("empty.bin", EMPTY_SHA256, size=0),
        DigestRecord("gone.bin", None, status=STATUS_MISSING, error="No such file"),
    ]


class TestDigestReport:
    """Test cases for DigestReport class."""
    
    def test_table_output_is_manifest(self, records, capsys) -> None:
        """Test that table output lists readable inputs in sha256sum format."""
        DigestReport(records).generate("table")
        
        lines = capsys.readouterr().out.splitlines()
        
        assert lines == [f"{ABC_SHA256}  abc.txt", f"{EMPTY_SHA256}  empty.bin"]
    
    def test_verification_table(self, records, tmp_path: Path) -> None:
        """Test verification output with a warning line."""
        records[1].status = STATUS_FAILED
        output_file = tmp_path / "report.txt"
        
        DigestReport(records, verification=True).generate("table", output_file)
        
        lines = output_file.read_text().splitlines()
        assert lines[:3] == ["abc.txt: OK", "empty.bin: FAILED", "gone.bin: MISSING"]
        assert lines[3].startswith("WARNING: 2 of 3")
    
    def test_verification_table_all_ok(self, capsys) -> None:
        DigestReport([DigestRecord("abc.txt", ABC_SHA256, size=3)], verification=True).generate()
        
        assert capsys.readouterr().out == "abc.txt: OK\n"
    
    def test_csv_export(self, records, tmp_path: Path) -> None:
        """Test CSV export functionality."""
        output_file = tmp_path / "report.csv"
        DigestReport(records).generate("csv", output_file)
        
        with open(output_file, newline='', encoding='utf-8') as f:
            rows = list(csv.DictReader(f))
        
        assert [row['path'] for row in rows] == ["abc.txt", "empty.bin", "gone.bin"]
        assert rows[0]['checksum'] == ABC_SHA256
        assert rows[0]['algorithm'] == "sha256"
        assert rows[0]['size'] == "3"
        assert rows[2]['status'] == STATUS_MISSING
        assert rows[2]['checksum'] == ""
    
    def test_json_export(self, records, tmp_path: Path) -> None:
        """Test JSON export functionality."""
        output_file = tmp_path / "report.json"
        DigestReport(records).generate("json", output_file)
        
        data = json.loads(output_file.read_text())
        
        assert data['algorithm'] == "sha256"
        assert data['summary']['total_files'] == 3
        assert data['summary']['ok'] == 2
        assert data['summary']['missing'] == 1
        assert data['summary']['total_size_bytes'] == 3
        assert data['files'][0] == {
            'path': "abc.txt",
            'checksum': ABC_SHA256,
            'size': 3,
            'status': STATUS_OK,
            'error': None,
        }
    
    def test_unsupported_format(self, records) -> None:
        with pytest.raises(ValueError):
            DigestReport(records).generate("xml")
