#!/usr/bin/env python3
"""Exceptions raised while transferring UMIs.

Every error is fatal for the run. The CLI catches ``UmiTransferError``,
prints its message once and exits with a non-zero status.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from umitransfer.core.read_fastq_records import FastqRecord


class UmiTransferError(Exception):
    """Base class for all umitransfer errors."""


class InputNotFoundError(UmiTransferError, FileNotFoundError):
    """An input file could not be found or its metadata could not be read."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Specified file does not exist or is not readable: {self.path}")


class OutputNotWritableError(UmiTransferError):
    """An output file could not be created."""

    def __init__(self, path: Path | str, reason: str | None = None) -> None:
        self.path = Path(path)
        msg = f"Output file is not writable: {self.path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class OutputExistsError(UmiTransferError, FileExistsError):
    """An output file exists and overwriting it was declined."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Output file {self.path} exists, but must not be overwritten.")


class FastqFormatError(UmiTransferError):
    """A FASTQ record could not be parsed."""

    def __init__(self, source: str, record_number: int, reason: str) -> None:
        self.source = source
        self.record_number = record_number
        super().__init__(f"Failed to read record {record_number} from {source}: {reason}")


class ReadIDMismatchError(UmiTransferError):
    """A read and its index read do not share the same identifier."""

    def __init__(self, read_id: str, umi_id: str, step: int) -> None:
        self.read_id = read_id
        self.umi_id = umi_id
        self.step = step
        super().__init__(
            f"IDs of UMI and read records mismatch at record {step}: {read_id!r} != {umi_id!r}. "
            "Please provide sorted files as input."
        )


class ReadCountMismatchError(UmiTransferError):
    """The three input files do not contain the same number of records."""

    def __init__(self, step: int, exhausted: list[str]) -> None:
        self.step = step
        self.exhausted = exhausted
        super().__init__(
            f"Input files contain a different number of records: {', '.join(exhausted)} "
            f"ended after {step - 1} records while the others continue."
        )


class ReadWriteError(UmiTransferError):
    """A record could not be written to its output file."""

    def __init__(self, record: FastqRecord, path: Path | str | None = None) -> None:
        self.record = record
        self.path = Path(path) if path is not None else None
        target = f" to {self.path}" if self.path is not None else ""
        super().__init__(f"Failed to write record {record.name!r}{target}.")


class DescriptionEditError(UmiTransferError):
    """The read number could not be edited because the record has no description."""

    def __init__(self, record: FastqRecord) -> None:
        self.record = record
        super().__init__(
            f"Cannot edit the read number of record {record.name!r}: the record has no description."
        )
