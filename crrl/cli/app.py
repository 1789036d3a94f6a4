"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from crrl import __version__
from crrl.api.client import RulesAPIClient
from crrl.core.installer import InstallOutcome, InstallResult, RulesInstaller
from crrl.models.config import RULES_FILENAME, CliOptions, FetchSettings

from .formatters import banner_text, format_error_with_suggestions
from .selector import prompt_for_directory

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("crrl")

app = typer.Typer(
    name="crrl",
    help=f"CLI to fetch and save {RULES_FILENAME} files.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]crrl[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()


def _print_cancelled() -> None:
    console.print("\n[yellow]Operation cancelled by user.[/yellow]")


async def _install(options: CliOptions, settings: FetchSettings) -> InstallResult:
    async with RulesAPIClient(settings) as client:
        installer = RulesInstaller(
            client, lambda directories: prompt_for_directory(directories, console)
        )
        return await installer.run(options)


@app.command()
def main(
    url: Optional[str] = typer.Option(
        None, "--url", "-u", help=f"Remote URL of the {RULES_FILENAME} file."
    ),
    directory: Optional[Path] = typer.Option(
        None,
        "--dir",
        "-d",
        help="Local directory to save the file. Defaults to the current directory.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        is_eager=True,
        callback=_version_callback,
    ),
):
    """Fetch a .cursorrules file and save it locally."""
    logging.getLogger("crrl").setLevel("DEBUG" if verbose else "INFO")
    console.print(banner_text())

    options = CliOptions(remote_url=url, local_dir=directory or Path.cwd())

    try:
        result = asyncio.run(_install(options, FetchSettings()))
    except KeyboardInterrupt:
        # Ctrl-C at the prompt also cancels the running task, so asyncio.run
        # reports it here rather than as a CANCELLED outcome.
        _print_cancelled()
        raise typer.Exit() from None
    except Exception as e:
        console.print(format_error_with_suggestions(e))
        log.debug("Full traceback:", exc_info=True)
        raise typer.Exit(code=1) from e

    if result.outcome is InstallOutcome.CANCELLED:
        _print_cancelled()
        raise typer.Exit()

    console.print(
        f"[bold green]✓ Successfully created {RULES_FILENAME} file[/bold green]"
    )
