import gzip

import pytest
from typer.testing import CliRunner

from umitransfer.cli import app
from umitransfer.core.read_fastq_records import iter_fastq

runner = CliRunner()


@pytest.mark.integration
def test_external_end_to_end(sample_inputs, temp_output_dir):
    """Runs the external subcommand and checks both output files."""
    r1, r2, ru = sample_inputs

    result = runner.invoke(
        app,
        ["external", "--in", str(r1), "--in2", str(r2), "--umi", str(ru), "--gzip", "--edit-nr"],
    )

    assert result.exit_code == 0, result.output

    out1 = temp_output_dir / "sample_R1_with_UMIs.fastq.gz"
    out2 = temp_output_dir / "sample_R2_with_UMIs.fastq.gz"
    assert out1.exists()
    assert out2.exists()

    with gzip.open(out2, "rt") as f:
        assert f.readline() == "@READ1:AAAACCCC 2:N:0:ACGT\n"
    assert [r.name for r in iter_fastq(out1)] == ["READ1:AAAACCCC", "READ2:GGGGTTTT", "READ3:ACGTTGCA"]


@pytest.mark.integration
def test_external_prefix_and_delimiter(sample_inputs, temp_output_dir):
    r1, r2, ru = sample_inputs
    prefix = str(temp_output_dir / "out_R")

    result = runner.invoke(
        app,
        ["external", "--in", str(r1), "--in2", str(r2), "--umi", str(ru), "--prefix", prefix, "--delim", "_"],
    )

    assert result.exit_code == 0, result.output
    assert [r.name for r in iter_fastq(prefix + "1")][0] == "READ1_AAAACCCC"
    assert [r.name for r in iter_fastq(prefix + "2")][0] == "READ1_AAAACCCC"


@pytest.mark.integration
def test_external_missing_input_exits_nonzero(sample_inputs, temp_output_dir):
    r1, r2, _ = sample_inputs

    result = runner.invoke(
        app,
        ["external", "--in", str(r1), "--in2", str(r2), "--umi", str(temp_output_dir / "missing.fastq")],
    )

    assert result.exit_code == 1


@pytest.mark.integration
def test_external_declined_overwrite(sample_inputs, temp_output_dir):
    r1, r2, ru = sample_inputs
    existing = temp_output_dir / "sample_R1_with_UMIs.fastq"
    existing.write_text("old")

    result = runner.invoke(app, ["external", "--in", str(r1), "--in2", str(r2), "--umi", str(ru)], input="n\n")

    assert result.exit_code == 1
    assert existing.read_text() == "old"


@pytest.mark.integration
def test_external_confirmed_overwrite(sample_inputs, temp_output_dir):
    r1, r2, ru = sample_inputs
    existing = temp_output_dir / "sample_R1_with_UMIs.fastq"
    existing.write_text("old")

    result = runner.invoke(app, ["external", "--in", str(r1), "--in2", str(r2), "--umi", str(ru)], input="y\n")

    assert result.exit_code == 0, result.output
    assert existing.read_text().startswith("@READ1:AAAACCCC")


@pytest.mark.integration
def test_external_invalid_mate_nr(sample_inputs):
    r1, r2, ru = sample_inputs

    result = runner.invoke(
        app,
        ["external", "--in", str(r1), "--in2", str(r2), "--umi", str(ru), "--edit-nr", "--mate-nr", "12"],
    )

    assert result.exit_code != 0


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "umitransfer" in result.output


@pytest.mark.integration
def test_external_truncated_gzip_reports_error(sample_inputs, temp_output_dir, write_fastq, sample_umi_records):
    r1, r2, _ = sample_inputs
    ru = write_fastq(temp_output_dir / "cut_UMI.fastq.gz", sample_umi_records, compress=True)
    ru.write_bytes(ru.read_bytes()[:-10])

    result = runner.invoke(app, ["external", "--in", str(r1), "--in2", str(r2), "--umi", str(ru)])

    assert result.exit_code == 1
    assert "Failed to include the UMIs" in result.output
    assert "Aborted" not in result.output


@pytest.mark.integration
def test_external_error_with_brackets_in_path(sample_inputs, temp_output_dir):
    r1, r2, _ = sample_inputs
    missing = temp_output_dir / "[red]missing.fastq"

    result = runner.invoke(app, ["external", "--in", str(r1), "--in2", str(r2), "--umi", str(missing)])

    assert result.exit_code == 1
    assert "[red]missing.fastq" in result.output
