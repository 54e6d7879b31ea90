#!/usr/bin/env python3
"""Output path handling: default names, compression extensions and overwrite checks."""

import os
from collections.abc import Callable
from pathlib import Path

from rich.markup import escape

from umitransfer.core.constants import GZIP_SUFFIX, UMI_NAME_MARKER
from umitransfer.core.errors import OutputExistsError
from umitransfer.core.logging_config import get_logger

logger = get_logger(__name__)

Confirm = Callable[[str], bool]
"""Callable answering a yes/no prompt."""


def never_overwrite(prompt: str) -> bool:
    """Confirmation that declines every prompt, for non-interactive use."""
    return False


def split_extension(name: str) -> tuple[str, str]:
    """Split a file name at its last dot into (stem, extension).

    A single leading dot marks a hidden file and does not start an extension,
    so ``.bashrc`` has no extension. The extension is returned without the dot.
    """
    idx = name.rfind(".")
    if idx <= 0:
        return name, ""
    return name[:idx], name[idx + 1 :]


def check_outputpath(path: Path, force: bool = False, confirm: Confirm = never_overwrite) -> Path:
    """Check whether an output path may be written to.

    Args:
        path: Candidate output path.
        force: Skip the confirmation and allow overwriting.
        confirm: Asked whether an existing file may be overwritten.

    Returns:
        The unchanged path.

    Raises:
        OutputExistsError: If the path exists and overwriting was declined.
    """
    if path.exists() and not force:
        if not confirm(f"{path} exists. Overwrite?"):
            raise OutputExistsError(path)
        logger.info(f"{escape(str(path))} will be overwritten.")
    return path


def rectify_extension(path: Path, compress: bool) -> Path:
    """Make the extension of path agree with the requested compression.

    ``test.fastq`` becomes ``test.fastq.gz`` when compressing and
    ``test.fastq.gz`` becomes ``test.fastq`` when not. A path without
    extension gets ``.gz`` appended when compressing.

    Args:
        path: Output path.
        compress: Whether the output will be gzip-compressed.

    Returns:
        Path with a rectified extension.
    """
    name = path.name
    if not name:
        return path

    stem, extension = split_extension(name)
    if extension:
        if compress and not extension.endswith("gz"):
            return path.with_name(name + GZIP_SUFFIX)
        if not compress and extension.endswith("gz"):
            # Repeated gz layers would otherwise survive a single pass.
            while extension.endswith("gz"):
                name = stem
                stem, extension = split_extension(name)
            return path.with_name(name)
    elif compress:
        return path.with_name(stem.rstrip(".") + GZIP_SUFFIX)
    return path


def append_umi_to_path(path: Path | str) -> Path:
    """Derive a default output name by inserting the UMI marker before the extension.

    The file name is split at its first dot that is not a leading dot, so that
    multi-part extensions stay intact::

        test.fastq.gz           -> test_with_UMIs.fastq.gz
        /dir/.test.fastq.gz     -> /dir/.test_with_UMIs.fastq.gz

    Names without an extension are returned unchanged.
    """
    path = Path(path)
    name = path.name
    idx = name.find(".", 1)
    if idx == -1:
        return path
    return path.with_name(name[:idx] + UMI_NAME_MARKER + name[idx:])


def prefixed_output(prefix: str, read_number: int) -> Path:
    """Output path for one mate when an explicit prefix is given."""
    return Path(os.fspath(prefix) + str(read_number))
