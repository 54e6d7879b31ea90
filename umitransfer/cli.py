#!/usr/bin/env python3
"""Command line interface for umitransfer using Typer."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.text import Text

from umitransfer.core.constants import ASCII_ART, DEFAULT_MATE_NUMBER, DEFAULT_UMI_DELIMITER
from umitransfer.core.errors import UmiTransferError
from umitransfer.core.logging_config import add_file_handler, get_logger, setup_logging, timedrun
from umitransfer.version import __version__

app = typer.Typer(
    name="umitransfer",
    help=(
        "A tool for transferring Unique Molecular Identifiers (UMIs).\n\n"
        "Most tools capable of using UMIs to increase the accuracy of quantitative DNA sequencing "
        "experiments expect the respective UMI sequence to be embedded into the reads' IDs. Use "
        "`umitransfer external` to retrieve UMIs from a separate FastQ file and embed them to the "
        "IDs of your paired FastQ files."
    ),
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)
logger = get_logger("cli")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold green]umitransfer[/bold green] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Enable verbose output (DEBUG level)."),
    ] = False,
) -> None:
    """umitransfer - embed UMIs from an index read into paired FastQ headers."""
    log_level = "DEBUG" if verbose else "INFO"
    setup_logging(level=log_level)  # type: ignore


def confirm_overwrite(prompt: str) -> bool:
    """Ask on the terminal whether an existing file may be overwritten."""
    return typer.confirm(prompt, default=False, err=True)


@app.command()
def external(
    r1_in: Annotated[Path, typer.Option("--in", help="[Input] Path to file with R1 reads.")],
    r2_in: Annotated[Path, typer.Option("--in2", help="[Input] Path to file with R2 reads.")],
    ru_in: Annotated[Path, typer.Option("--umi", "-u", help="[Input] Path to FastQ file with UMI reads.")],
    out: Annotated[
        Optional[Path],
        typer.Option("--out", help="[Output] Path for R1 with UMIs. Defaults to R1 name with '_with_UMIs'."),
    ] = None,
    out2: Annotated[
        Optional[Path],
        typer.Option("--out2", help="[Output] Path for R2 with UMIs. Defaults to R2 name with '_with_UMIs'."),
    ] = None,
    prefix: Annotated[
        Optional[str],
        typer.Option("--prefix", "-p", help="[Output] Write outputs to <prefix>1 and <prefix>2."),
    ] = None,
    gzip: Annotated[bool, typer.Option("--gzip", "-z", help="Compress output files with gzip.")] = False,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite existing output files without prompting.")
    ] = False,
    delim: Annotated[
        str, typer.Option("--delim", "-d", help="Delimiter placed between the read ID and the UMI.")
    ] = DEFAULT_UMI_DELIMITER,
    edit_nr: Annotated[
        bool,
        typer.Option("--edit-nr", help="Replace the read number in the description of R2 with --mate-nr."),
    ] = False,
    mate_nr: Annotated[
        int, typer.Option("--mate-nr", min=0, max=9, help="Read number written with --edit-nr.")
    ] = DEFAULT_MATE_NUMBER,
    log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Also write the log to this file.")] = None,
) -> None:
    """Integrate UMIs from a separate FastQ file."""
    from umitransfer.models.models import TransferConfig
    from umitransfer.transfer import run_transfer

    if log_file is not None:
        add_file_handler(log_file)
        logger.info(f"Logging to {escape(str(log_file))}")

    console.print(Text(ASCII_ART, style="bold green"))
    console.print(f"  Version: {__version__}")
    console.print()

    try:
        config = TransferConfig(
            r1_in=r1_in,
            r2_in=r2_in,
            ru_in=ru_in,
            out=out,
            out2=out2,
            prefix=prefix,
            gzip=gzip,
            force=force,
            delim=delim,
            edit_nr=mate_nr if edit_nr else None,
        )
    except ValidationError as e:
        err_console.print(f"[red]Error:[/red] Invalid options: {e}")
        raise typer.Exit(1) from None

    try:
        result = timedrun("umitransfer finished", lambda: run_transfer(config, confirm=confirm_overwrite))
    except UmiTransferError as e:
        logger.error(f"Failed to include the UMIs: {escape(str(e))}")
        raise typer.Exit(1) from None

    console.print(f"  Records: {result.num_records}")
    console.print(f"  Output R1: {result.output_read1}")
    console.print(f"  Output R2: {result.output_read2}")


def main_cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main_cli()
