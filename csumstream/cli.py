"""Command-line interface for checksum streams."""

import argparse
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional, Tuple
import logging

from . import config
from .backends import ChecksumType, DigestBackend, available_backends, get_backend
from .reporter import (
    DigestRecord,
    DigestReport,
    STATUS_ERROR,
    STATUS_FAILED,
    STATUS_MISSING,
    STATUS_OK,
)
from .stream import ChecksumInputStream
from .utils.hashing import drain

logger = logging.getLogger(__name__)

STDIN_PATH = "-"


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging level
    if args.verbose:
        logging.getLogger("csumstream").setLevel(logging.DEBUG)

    try:
        if args.command == 'sum':
            ok = cmd_sum(args)
        elif args.command == 'check':
            ok = cmd_check(args)
        else:
            parser.print_help()
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Operation interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    if not ok:
        sys.exit(1)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="csumstream",
        description="Compute and verify streaming SHA-256 checksums",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s sum /path/to/file.tar /path/to/other.bin
  cat file.bin | %(prog)s sum -
  %(prog)s sum --format json --output digests.json *.iso
  %(prog)s check SHA256SUMS
        """
    )

    parser.add_argument(
        '--backend',
        choices=available_backends(),
        default=None,
        help=f'Digest backend (default: {config.get_default_backend()})'
    )
    parser.add_argument(
        '--chunk-size',
        type=_positive_int,
        default=None,
        help=f'Read size in bytes (default: {config.get_chunk_size()})'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )

    # Sum command
    sum_parser = subparsers.add_parser(
        'sum',
        help='Print checksums of files'
    )
    sum_parser.add_argument(
        'paths',
        nargs='+',
        help="Files to checksum ('-' reads standard input)"
    )
    _add_output_arguments(sum_parser)

    # Check command
    check_parser = subparsers.add_parser(
        'check',
        help='Verify files against a checksum manifest'
    )
    check_parser.add_argument(
        'manifest',
        help="Manifest of '<hex>  <path>' lines ('-' reads standard input)"
    )
    _add_output_arguments(check_parser)

    return parser


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--format',
        choices=['table', 'csv', 'json'],
        default='table',
        help='Output format (default: table)'
    )
    parser.add_argument(
        '--output',
        type=Path,
        help='Output file (default: stdout)'
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {number}")
    return number


def cmd_sum(args: argparse.Namespace) -> bool:
    """Execute sum command."""
    backend = get_backend(args.backend)
    logger.debug(f"Checksumming {len(args.paths)} inputs with backend {backend.name}")

    records = [checksum_path(path, backend, args.chunk_size) for path in args.paths]

    reporter = DigestReport(records, ChecksumType.SHA256.value)
    reporter.generate(args.format, args.output)

    return all(record.status == STATUS_OK for record in records)


def cmd_check(args: argparse.Namespace) -> bool:
    """Execute check command."""
    backend = get_backend(args.backend)

    if args.manifest == STDIN_PATH:
        text = sys.stdin.read()
    else:
        text = Path(args.manifest).read_text(encoding='utf-8')
    entries = parse_manifest(text)
    logger.debug(f"Verifying {len(entries)} manifest entries")

    records = []
    for expected, path in entries:
        record = checksum_path(path, backend, args.chunk_size)
        if record.status == STATUS_OK and record.checksum != expected:
            record.status = STATUS_FAILED
            logger.warning(f"Checksum mismatch: {path}")
        records.append(record)

    reporter = DigestReport(records, ChecksumType.SHA256.value, verification=True)
    reporter.generate(args.format, args.output)

    return all(record.status == STATUS_OK for record in records)


def checksum_path(
    path: str,
    backend: Optional[DigestBackend] = None,
    chunk_size: Optional[int] = None,
) -> DigestRecord:
    """
    Stream one input through a checksum stream.

    Args:
        path: File path, or '-' for standard input
        backend: Digest backend (configured default when omitted)
        chunk_size: Read size in bytes (configured default when omitted)

    Returns:
        DigestRecord describing the outcome; I/O failures are recorded, not raised
    """
    if path == STDIN_PATH:
        return _checksum_file_obj(path, sys.stdin.buffer, backend, chunk_size)

    file_path = Path(path)
    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        return DigestRecord(path, None, status=STATUS_MISSING, error="No such file")
    if not file_path.is_file():
        logger.error(f"Path is not a file: {file_path}")
        return DigestRecord(path, None, status=STATUS_ERROR, error="Not a regular file")

    try:
        with open(file_path, "rb") as f:
            return _checksum_file_obj(path, f, backend, chunk_size)
    except OSError as e:
        logger.error(f"Cannot read file {file_path}: {e}")
        return DigestRecord(path, None, status=STATUS_ERROR, error=str(e))


def _checksum_file_obj(
    path: str,
    file_obj: BinaryIO,
    backend: Optional[DigestBackend],
    chunk_size: Optional[int],
) -> DigestRecord:
    with ChecksumInputStream(file_obj, ChecksumType.SHA256, backend) as stream:
        drain(stream, chunk_size)
    return DigestRecord(path, stream.get_string(), size=stream.bytes_read)


def parse_manifest(text: str) -> List[Tuple[str, str]]:
    """
    Parse ``sha256sum`` output into (hex digest, path) pairs.

    Accepts both text (``<hex>  <path>``) and binary (``<hex> *<path>``)
    markers. Blank lines and ``#`` comments are skipped.

    Raises:
        ValueError: If a line is malformed
    """
    entries = []
    digest_chars = ChecksumType.SHA256.digest_size * 2
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip() or line.lstrip().startswith('#'):
            continue
        digest, sep, rest = line.partition(' ')
        if (
            not sep
            or len(digest) != digest_chars
            or any(c not in '0123456789abcdefABCDEF' for c in digest)
            or rest[:1] not in (' ', '*')
            or not rest[1:]
        ):
            raise ValueError(f"Malformed manifest line {lineno}: {line!r}")
        entries.append((digest.lower(), rest[1:]))
    return entries


if __name__ == '__main__':
    main()
