"""
Command-line entry points for deskscripts.

Each command is installed as its own console script.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import default_config_path
from .exceptions import HandleInvariantError, ScriptsError
from .invoice import prepare_transport
from .pdf import concatenate
from .sink import Target, switch_sink
from .utils import configure_logging

EXIT_FAILURE = 1
EXIT_INTERNAL_ERROR = 70

console = Console(soft_wrap=True)
error_console = Console(stderr=True, soft_wrap=True)


def _fail(exc: ScriptsError) -> None:
    if isinstance(exc, HandleInvariantError):
        error_console.print(f"\n[bold red]✗ Internal error:[/bold red] {escape(str(exc))}")
        sys.exit(EXIT_INTERNAL_ERROR)
    error_console.print(f"\n[bold red]✗ Error:[/bold red] {escape(str(exc))}")
    sys.exit(EXIT_FAILURE)


verbose_option = click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Log external commands and their output",
)


@click.command(name="cat-pdf")
@click.version_option(version=__version__)
@click.option(
    "--output", "-o",
    required=True,
    help="Path of the concatenated PDF",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--no-validate",
    is_flag=True,
    help="Skip checking the inputs before calling pdftk",
)
@verbose_option
@click.argument("files", nargs=-1, required=True)
def cat_pdf(output: Path, no_validate: bool, verbose: bool, files: tuple[str, ...]) -> None:
    """
    Concatenate PDFs with pdftk, naming plain files automatically.

    FILES are plain filenames, HANDLE=file tokens, or bare handles that
    refer to explicitly named files.

    Examples:

        cat-pdf -o merged.pdf intro.pdf body.pdf

        cat-pdf -o merged.pdf C=cover.pdf intro.pdf C body.pdf
    """
    configure_logging(verbose)
    try:
        result = concatenate(files, output, validate=not no_validate)
    except ScriptsError as exc:
        _fail(exc)
        return

    console.print(f"[bold green]✓ Created:[/bold green] {escape(str(result))}")


@click.command(name="change-sink")
@click.version_option(version=__version__)
@verbose_option
@click.argument(
    "target",
    type=click.Choice([target.value for target in Target], case_sensitive=False),
)
def change_sink(verbose: bool, target: str) -> None:
    """
    Change the current sink to the specified device.

    Sets the matching PipeWire sink as default and moves every playing
    stream onto it.

    Example:

        change-sink hdmi
    """
    configure_logging(verbose)
    try:
        result = switch_sink(Target(target.lower()))
    except ScriptsError as exc:
        _fail(exc)
        return

    if result is None:
        console.print("Couldn't find specified target sink.")
        return

    table = Table(title="Default Sink", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Sink", escape(result.description))
    table.add_row("Serial", str(result.serial))
    table.add_row("Moved streams", ", ".join(result.moved_streams) or "none")
    console.print(table)


@click.command(name="send-invoice")
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path",
    envvar="DESKSCRIPTS_CONFIG",
    help="Configuration file (defaults to scripts/scripts.toml in the user config dir)",
    type=click.Path(dir_okay=False, path_type=Path),
)
@verbose_option
def send_invoice(config_path: Path | None, verbose: bool) -> None:
    """
    Prepare the SMTP transport used to send invoices.
    """
    configure_logging(verbose)
    try:
        config, transport = prepare_transport(config_path or default_config_path())
    except ScriptsError as exc:
        _fail(exc)
        return

    console.print(
        f"[bold green]✓ SMTP transport ready:[/bold green] "
        f"{escape(transport.credentials.user)}@{escape(transport.host)}:{transport.port} "
        f"(from {escape(str(config.mail.from_))})"
    )
