#!/usr/bin/env python3
"""Read FASTQ records from plain or gzip-compressed files.

Compression is detected from the leading bytes of a file, never from its name.
"""

import gzip
import re
from collections.abc import Generator, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from umitransfer.core.constants import FASTQ_HEADER_START, FASTQ_SEPARATOR_START, GZIP_MAGIC
from umitransfer.core.errors import FastqFormatError, InputNotFoundError


@dataclass
class FastqRecord:
    """A single FASTQ record."""

    name: str
    sequence: str
    quality: str
    description: Optional[str] = None

    @classmethod
    def from_header(cls, header: str, sequence: str, quality: str) -> "FastqRecord":
        """Build a record from a header line without the leading '@'."""
        # Split at the first whitespace only; a leading blank gives an empty id.
        parts = re.split(r"\s", header.rstrip(), maxsplit=1)
        description = parts[1] if len(parts) > 1 else None
        return cls(name=parts[0], sequence=sequence, quality=quality, description=description)


def detect_compression(path: Path) -> bool:
    """Return True if the file at path starts with the gzip magic bytes."""
    with path.open("rb") as f:
        return f.read(len(GZIP_MAGIC)) == GZIP_MAGIC


def open_fastq(path: Path | str) -> TextIO:
    """Open a FASTQ file for reading, decompressing it if needed.

    Args:
        path: Path to a plain or gzip-compressed FASTQ file.

    Returns:
        Open text handle positioned at the start of the file.

    Raises:
        InputNotFoundError: If the metadata of path cannot be read.
    """
    path = Path(path)
    try:
        path.stat()
    except OSError:
        raise InputNotFoundError(path) from None

    if detect_compression(path):
        return gzip.open(path, "rt")  # type: ignore[return-value]
    return path.open()


def _readline(infile: TextIO, source: str, nrecord: int) -> str:
    """Read one line, reporting decompression and decoding failures as format errors."""
    try:
        return infile.readline()
    except (OSError, EOFError, UnicodeDecodeError) as e:
        raise FastqFormatError(source, nrecord, str(e)) from e


def read_fastq(infile: TextIO, source: str = "<stream>") -> Generator[FastqRecord, None, None]:
    """Read one fastq record at a time using a generator.

    Args:
        infile: Open file handle for reading FASTQ records.
        source: Name of the input used in error messages.

    Yields:
        FastqRecord for each record.

    Raises:
        FastqFormatError: At the first record that is not well formed.
    """
    nrecord = 0
    while line := _readline(infile, source, nrecord + 1):
        header = line.rstrip("\r\n")
        if not header.strip():
            continue
        nrecord += 1
        if not header.startswith(FASTQ_HEADER_START):
            raise FastqFormatError(source, nrecord, f"expected '@' at record start, found {header[:20]!r}")
        seq = _readline(infile, source, nrecord)
        sep = _readline(infile, source, nrecord)
        qual = _readline(infile, source, nrecord)
        if not qual:
            raise FastqFormatError(source, nrecord, "incomplete record")
        if not sep.startswith(FASTQ_SEPARATOR_START):
            raise FastqFormatError(source, nrecord, "expected '+' separator line")
        seq = seq.rstrip("\r\n")
        qual = qual.rstrip("\r\n")
        if len(seq) != len(qual):
            raise FastqFormatError(
                source, nrecord, f"unequal length of sequence ({len(seq)}) and quality ({len(qual)})"
            )
        yield FastqRecord.from_header(header[1:], seq, qual)


def iter_fastq(path: Path | str) -> Iterator[FastqRecord]:
    """Open path and yield its records, closing the file once exhausted."""
    path = Path(path)
    with open_fastq(path) as f:
        yield from read_fastq(f, source=str(path))
