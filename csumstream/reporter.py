"""Digest report generation."""

import csv
import json
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

STATUS_OK = "OK"
STATUS_FAILED = "FAILED"
STATUS_MISSING = "MISSING"
STATUS_ERROR = "ERROR"


@dataclass
class DigestRecord:
    """One checksummed input."""

    path: str
    checksum: Optional[str]
    size: int = 0
    status: str = STATUS_OK
    error: Optional[str] = None


class DigestReport:
    """Human-readable & CSV/JSON reporting of computed digests."""

    def __init__(
        self,
        records: List[DigestRecord],
        algorithm: str = "sha256",
        verification: bool = False,
    ) -> None:
        """
        Initialize reporter with computed records.

        Args:
            records: Digest records in input order
            algorithm: Algorithm name shown in headers
            verification: Records come from checking a manifest
        """
        self.records = records
        self.algorithm = algorithm
        self.verification = verification

    def generate(
        self,
        format: str = "table",
        output_file: Optional[Path] = None
    ) -> None:
        """
        Generate report in specified format.

        Args:
            format: Output format ('table', 'csv', 'json')
            output_file: Output file path (optional)
        """
        if format == "table":
            self._generate_table(output_file)
        elif format == "csv":
            self._generate_csv(output_file)
        elif format == "json":
            self._generate_json(output_file)
        else:
            raise ValueError(f"Unsupported format: {format}")

    def get_statistics(self) -> dict:
        """
        Summarize the records.

        Returns:
            Dictionary with counts per status and total bytes hashed
        """
        counts = {STATUS_OK: 0, STATUS_FAILED: 0, STATUS_MISSING: 0, STATUS_ERROR: 0}
        total_size = 0
        for record in self.records:
            counts[record.status] = counts.get(record.status, 0) + 1
            total_size += record.size

        return {
            'total_files': len(self.records),
            'ok': counts[STATUS_OK],
            'failed': counts[STATUS_FAILED],
            'missing': counts[STATUS_MISSING],
            'errors': counts[STATUS_ERROR],
            'total_size_bytes': total_size,
        }

    def _generate_table(self, output_file: Optional[Path] = None) -> None:
        """
        Generate ``sha256sum``-compatible output.

        Digest listings print ``<hex>  <path>`` per readable input, so the
        output can be fed back in as a manifest. Verification listings print
        ``<path>: <status>`` and a warning line when anything failed.

        Args:
            output_file: Output file path (optional, defaults to stdout)
        """
        lines = []
        if self.verification:
            for record in self.records:
                lines.append(f"{record.path}: {record.status}")
            stats = self.get_statistics()
            not_ok = stats['total_files'] - stats['ok']
            if not_ok:
                lines.append(
                    f"WARNING: {not_ok} of {stats['total_files']} "
                    f"{self.algorithm} checksums did NOT match or could not be read"
                )
        else:
            for record in self.records:
                if record.checksum is not None:
                    lines.append(f"{record.checksum}  {record.path}")

        output = "\n".join(lines)

        if output_file:
            output_file.write_text(output + "\n", encoding='utf-8')
            logger.info(f"Table report written to: {output_file}")
        else:
            print(output)

    def _generate_csv(self, output_file: Optional[Path] = None) -> None:
        """
        Generate CSV report.

        Args:
            output_file: Output file path (optional, defaults to stdout)
        """
        if output_file:
            file_obj = open(output_file, 'w', newline='', encoding='utf-8')
        else:
            file_obj = sys.stdout

        try:
            writer = csv.writer(file_obj)
            writer.writerow(['path', 'algorithm', 'checksum', 'size', 'status', 'error'])
            for record in self.records:
                writer.writerow([
                    record.path,
                    self.algorithm,
                    record.checksum or '',
                    record.size,
                    record.status,
                    record.error or '',
                ])
        finally:
            if output_file:
                file_obj.close()
                logger.info(f"CSV report written to: {output_file}")

    def _generate_json(self, output_file: Optional[Path] = None) -> None:
        """
        Generate JSON report.

        Args:
            output_file: Output file path (optional, defaults to stdout)
        """
        data = {
            'algorithm': self.algorithm,
            'summary': self.get_statistics(),
            'files': [asdict(record) for record in self.records],
        }

        output = json.dumps(data, indent=2, ensure_ascii=False)

        if output_file:
            output_file.write_text(output, encoding='utf-8')
            logger.info(f"JSON report written to: {output_file}")
        else:
            print(output)
