#!/usr/bin/env python3
"""Constants used throughout the umitransfer package."""

# =============================================================================
# Header Composition
# =============================================================================
DEFAULT_UMI_DELIMITER = ":"
"""Delimiter placed between the read ID and the UMI sequence."""

DEFAULT_MATE_NUMBER = 2
"""Read number written into the description of the second mate with --edit-nr."""

# =============================================================================
# File Naming
# =============================================================================
UMI_NAME_MARKER = "_with_UMIs"
"""Marker inserted before the extension when deriving default output names."""

GZIP_SUFFIX = ".gz"
"""Suffix of gzip-compressed output files."""

# =============================================================================
# Compression
# =============================================================================
GZIP_MAGIC = b"\x1f\x8b"
"""Leading bytes of every gzip stream."""

DEFAULT_COMPRESSION_LEVEL = 6
"""zlib default compression level used for gzip output."""

# =============================================================================
# FASTQ Layout
# =============================================================================
FASTQ_HEADER_START = "@"
"""First character of a FASTQ header line."""

FASTQ_SEPARATOR_START = "+"
"""First character of a FASTQ separator line."""

ASCII_ART = r"""
░░░░░░░░░░░░ umi-transfer ░░░░░░░░░░░░
"""
"""Banner printed by the CLI."""
