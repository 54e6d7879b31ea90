#!/usr/bin/env python3
"""
umitransfer, transfer.py - Transfer UMIs from an index read into paired reads.
============================================================================

Purpose
-------

Read three FASTQ files in lockstep: read 1, read 2 and the index read that
holds the UMI of each molecule. For every record triple the IDs are checked
against each other and the UMI sequence is appended to the IDs of read 1 and
read 2, which are written to two new FASTQ files. Tools like UMI-tools or
fgbio can then deduplicate the reads without needing the third file.

"""

from collections.abc import Iterable
from contextlib import ExitStack
from itertools import zip_longest
from pathlib import Path
from typing import Optional

from rich.markup import escape

from umitransfer.core.constants import DEFAULT_UMI_DELIMITER
from umitransfer.core.errors import (
    InputNotFoundError,
    OutputNotWritableError,
    ReadCountMismatchError,
    ReadIDMismatchError,
)
from umitransfer.core.logging_config import get_logger
from umitransfer.core.output_file import OutputFile, output_file, write_to_file
from umitransfer.core.paths import (
    Confirm,
    append_umi_to_path,
    check_outputpath,
    never_overwrite,
    prefixed_output,
    rectify_extension,
)
from umitransfer.core.read_fastq_records import FastqRecord, open_fastq, read_fastq
from umitransfer.models.models import TransferConfig, TransferResult

logger = get_logger(__name__)

READ_LABELS = ("read 1", "read 2", "UMI read")


def check_inputs(*paths: Path) -> None:
    """Raise InputNotFoundError for the first path whose metadata cannot be read."""
    for path in paths:
        try:
            path.stat()
        except OSError:
            raise InputNotFoundError(path) from None


def check_distinct_outputs(out1: Path, out2: Path, *inputs: Path) -> None:
    """Raise OutputNotWritableError if an output would replace an input or the other output."""
    taken = {path.resolve(): f"{label} input" for label, path in zip(READ_LABELS, inputs)}
    for label, out in (("read 1 output", out1), ("read 2 output", out2)):
        resolved = out.resolve()
        if resolved in taken:
            raise OutputNotWritableError(out, f"same file as the {taken[resolved]}")
        taken[resolved] = label


def resolve_output_paths(config: TransferConfig, confirm: Confirm = never_overwrite) -> tuple[Path, Path]:
    """Decide where the two output files go.

    Args:
        config: Transfer configuration.
        confirm: Asked before an existing output file is overwritten.

    Returns:
        Tuple of (read 1 output path, read 2 output path).

    Raises:
        OutputNotWritableError: If an output would replace an input or the other output.
        OutputExistsError: If an output exists and overwriting was declined.
    """
    if config.prefix is not None:
        out1 = prefixed_output(config.prefix, 1)
        out2 = prefixed_output(config.prefix, 2)
    else:
        out1 = config.out if config.out is not None else append_umi_to_path(config.r1_in)
        out2 = config.out2 if config.out2 is not None else append_umi_to_path(config.r2_in)

    out1 = rectify_extension(out1, config.gzip)
    out2 = rectify_extension(out2, config.gzip)
    check_distinct_outputs(out1, out2, config.r1_in, config.r2_in, config.ru_in)

    out1 = check_outputpath(out1, config.force, confirm)
    out2 = check_outputpath(out2, config.force, confirm)
    return out1, out2


def transfer_records(
    r1: Iterable[FastqRecord],
    r2: Iterable[FastqRecord],
    ru: Iterable[FastqRecord],
    out1: OutputFile,
    out2: OutputFile,
    delim: str = DEFAULT_UMI_DELIMITER,
    edit_nr: Optional[int] = None,
) -> int:
    """Append the UMI of each index record to the IDs of the matching read records.

    Args:
        r1: Records of read 1.
        r2: Records of read 2.
        ru: Records of the index read carrying the UMIs.
        out1: Destination of the rewritten read 1 records.
        out2: Destination of the rewritten read 2 records.
        delim: Delimiter between read ID and UMI.
        edit_nr: If given, the first character of each read 2 description is
            replaced with this digit.

    Returns:
        Number of record triples written.

    Raises:
        ReadIDMismatchError: If a read ID differs from its index read ID.
        ReadCountMismatchError: If one input ends before the others.
    """
    nseqs = 0
    for step, (r1_rec, r2_rec, ru_rec) in enumerate(zip_longest(r1, r2, ru), start=1):
        if r1_rec is None or r2_rec is None or ru_rec is None:
            exhausted = [label for label, rec in zip(READ_LABELS, (r1_rec, r2_rec, ru_rec)) if rec is None]
            raise ReadCountMismatchError(step, exhausted)

        umi = ru_rec.sequence

        # Both IDs are checked before anything of this step is written.
        if r1_rec.name != ru_rec.name:
            raise ReadIDMismatchError(r1_rec.name, ru_rec.name, step)
        if r2_rec.name != ru_rec.name:
            raise ReadIDMismatchError(r2_rec.name, ru_rec.name, step)

        out1 = write_to_file(r1_rec, out1, umi, delim)
        out2 = write_to_file(r2_rec, out2, umi, delim, edit_nr)

        nseqs = step
    return nseqs


def run_transfer(config: TransferConfig, confirm: Confirm = never_overwrite) -> TransferResult:
    """Run the UMI transfer for one set of input files.

    Handles the complete workflow:
    1. Checks that the three input files exist
    2. Derives, rectifies and checks the output paths
    3. Streams all record triples into the two output files

    Output that was written before an error remains on disk.

    Args:
        config: TransferConfig with input/output paths and options.
        confirm: Asked before an existing output file is overwritten.

    Returns:
        TransferResult with output paths and the number of records.
    """
    check_inputs(config.r1_in, config.r2_in, config.ru_in)

    out1_path, out2_path = resolve_output_paths(config, confirm)
    logger.info(f"Writing read 1 to {escape(str(out1_path))}")
    logger.info(f"Writing read 2 to {escape(str(out2_path))}")
    if config.gzip:
        logger.info("Output will be gzip-compressed")

    with ExitStack() as stack:
        r1 = read_fastq(stack.enter_context(open_fastq(config.r1_in)), source=str(config.r1_in))
        r2 = read_fastq(stack.enter_context(open_fastq(config.r2_in)), source=str(config.r2_in))
        ru = read_fastq(stack.enter_context(open_fastq(config.ru_in)), source=str(config.ru_in))

        out1 = stack.enter_context(output_file(out1_path))
        out2 = stack.enter_context(output_file(out2_path))

        logger.info("Transferring UMIs to records...")
        nseqs = transfer_records(r1, r2, ru, out1, out2, config.delim, config.edit_nr)

    logger.info(f"Processed {nseqs} records")
    return TransferResult(
        output_read1=out1_path,
        output_read2=out2_path,
        num_records=nseqs,
    )
