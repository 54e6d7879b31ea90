#!/usr/bin/env python3
"""Write FASTQ records to plain or gzip-compressed output files."""

from __future__ import annotations

import gzip
from enum import Enum
from pathlib import Path
from typing import TextIO

from rich.markup import escape

from umitransfer.core.constants import DEFAULT_COMPRESSION_LEVEL, DEFAULT_UMI_DELIMITER, GZIP_SUFFIX
from umitransfer.core.errors import DescriptionEditError, OutputNotWritableError, ReadWriteError
from umitransfer.core.logging_config import get_logger
from umitransfer.core.read_fastq_records import FastqRecord

logger = get_logger(__name__)


class OutputEncoding(Enum):
    """Encoding of an output file, fixed when the file is created."""

    PLAIN_TEXT = "plain"
    GZIP_COMPRESSED = "gzip"


class OutputFile:
    """An open FASTQ output file.

    Use ``output_file`` to create one; the encoding is chosen once from the
    path and never changes afterwards.
    """

    encoding: OutputEncoding

    def __init__(self, path: Path, handle: TextIO) -> None:
        self.path = path
        self._handle = handle

    def write(self, header: str, desc: str | None, record: FastqRecord) -> OutputFile:
        """Write one record with a new header and description.

        Args:
            header: Header text without the leading '@'.
            desc: Description to append after a space, or None.
            record: Record providing sequence and quality.

        Returns:
            The writer itself, for the next call.

        Raises:
            ReadWriteError: If the record could not be written.
        """
        title = f"{header} {desc}" if desc is not None else header
        try:
            self._handle.write(f"@{title}\n{record.sequence}\n+\n{record.quality}\n")
        except (OSError, ValueError) as e:
            raise ReadWriteError(record, self.path) from e
        return self

    def close(self) -> None:
        self._handle.close()

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def __enter__(self) -> OutputFile:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class PlainOutputFile(OutputFile):
    encoding = OutputEncoding.PLAIN_TEXT


class GzipOutputFile(OutputFile):
    encoding = OutputEncoding.GZIP_COMPRESSED


def output_file(name: Path | str) -> OutputFile:
    """Create an output file, gzip-compressed if the extension is exactly 'gz'.

    Args:
        name: Path of the file to create. An existing file is truncated.

    Returns:
        GzipOutputFile or PlainOutputFile.

    Raises:
        OutputNotWritableError: If the file cannot be created.
    """
    path = Path(name)
    try:
        if path.suffix == GZIP_SUFFIX:
            handle = gzip.open(path, "wt", compresslevel=DEFAULT_COMPRESSION_LEVEL)
            logger.debug(f"Writing gzip-compressed output to {escape(str(path))}")
            return GzipOutputFile(path, handle)  # type: ignore[arg-type]
        handle = path.open("w")
        logger.debug(f"Writing plain-text output to {escape(str(path))}")
        return PlainOutputFile(path, handle)
    except OSError as e:
        raise OutputNotWritableError(path, e.strerror) from e


def write_to_file(
    record: FastqRecord,
    output: OutputFile,
    umi: str,
    delim: str = DEFAULT_UMI_DELIMITER,
    edit_nr: int | None = None,
) -> OutputFile:
    """Write record to output with the UMI appended to its ID.

    Args:
        record: Record to rewrite.
        output: Destination file.
        umi: UMI sequence to embed in the header.
        delim: Delimiter between the read ID and the UMI.
        edit_nr: If given, replaces the first character of the description
            with this digit.

    Returns:
        The output file, for the next call.

    Raises:
        DescriptionEditError: If edit_nr is given and the record has no description.
    """
    header = f"{record.name}{delim}{umi}"
    desc = record.description
    if edit_nr is not None:
        if not desc:
            raise DescriptionEditError(record)
        desc = f"{edit_nr}{desc[1:]}"
    return output.write(header, desc, record)
