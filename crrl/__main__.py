"""
Main entry point for crrl; also lets the package run as `python -m crrl`.
Anything that escapes the Typer command ends up here as a panel and exit code 1.
"""

import logging
import os
import sys

import typer
from rich.console import Console

from crrl.cli.app import app
from crrl.cli.formatters import format_error_with_suggestions


def main() -> None:
    """Main entry point function."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    console = Console(stderr=True)

    try:
        app(prog_name="crrl")
    except (typer.Exit, typer.Abort):
        pass
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user.[/yellow]")
        sys.exit(0)
    except Exception as e:
        console.print(format_error_with_suggestions(e))
        logging.getLogger("crrl").debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
