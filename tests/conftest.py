"""Shared pytest fixtures for umitransfer tests."""

import gzip
import shutil
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for test outputs."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir)


def fastq_text(records):
    """Render (name, description, sequence, quality) tuples as FASTQ text."""
    lines = []
    for name, desc, seq, qual in records:
        header = f"@{name} {desc}" if desc is not None else f"@{name}"
        lines.extend([header, seq, "+", qual])
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_fastq():
    """Return a function writing FASTQ records to a plain or gzip file."""

    def _write(path, records, compress=False):
        text = fastq_text(records)
        if compress:
            with gzip.open(path, "wt") as f:
                f.write(text)
        else:
            path.write_text(text)
        return path

    return _write


@pytest.fixture
def sample_read1_records():
    """Read 1 records of three molecules."""
    return [
        ("READ1", "1:N:0:ACGT", "ACGTACGTAC", "IIIIIIIIII"),
        ("READ2", "1:N:0:ACGT", "TTTTGGGGCC", "FFFFFFFFFF"),
        ("READ3", "1:N:0:ACGT", "GATTACAGAT", "##########"),
    ]


@pytest.fixture
def sample_read2_records():
    """Read 2 records matching sample_read1_records."""
    return [
        ("READ1", "3:N:0:ACGT", "GTACGTACGT", "IIIIIIIIII"),
        ("READ2", "3:N:0:ACGT", "GGCCCCAAAA", "FFFFFFFFFF"),
        ("READ3", "3:N:0:ACGT", "ATCTGTAATC", "##########"),
    ]


@pytest.fixture
def sample_umi_records():
    """Index read records carrying the UMIs."""
    return [
        ("READ1", "2:N:0:ACGT", "AAAACCCC", "IIIIIIII"),
        ("READ2", "2:N:0:ACGT", "GGGGTTTT", "IIIIIIII"),
        ("READ3", "2:N:0:ACGT", "ACGTTGCA", "IIIIIIII"),
    ]


@pytest.fixture
def sample_inputs(temp_output_dir, write_fastq, sample_read1_records, sample_read2_records, sample_umi_records):
    """Write plain-text R1, R2 and UMI files and return their paths."""
    r1 = write_fastq(temp_output_dir / "sample_R1.fastq", sample_read1_records)
    r2 = write_fastq(temp_output_dir / "sample_R2.fastq", sample_read2_records)
    ru = write_fastq(temp_output_dir / "sample_UMI.fastq", sample_umi_records)
    return r1, r2, ru
