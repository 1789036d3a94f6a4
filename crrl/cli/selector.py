"""
Interactive single-choice prompt for picking a rules directory.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

log = logging.getLogger(__name__)


def _resolve_choice(answer: str, directories: list[str]) -> Optional[str]:
    """Maps a 1-based index or an exact directory name to a directory."""
    answer = answer.strip()
    if answer in directories:
        return answer
    if answer.isdigit() and 1 <= int(answer) <= len(directories):
        return directories[int(answer) - 1]
    return None


def prompt_for_directory(
    directories: list[str], console: Optional[Console] = None
) -> Optional[str]:
    """
    Shows `directories` as a numbered list and asks the operator to choose one.

    Returns:
        The chosen name, or None if the operator cancelled the prompt
        (Ctrl-C or end of input).
    """
    console = console or Console()

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="bold cyan", justify="right")
    table.add_column()
    for index, name in enumerate(directories, start=1):
        table.add_row(f"{index}.", escape(name))
    console.print(table)

    while True:
        try:
            answer = Prompt.ask(
                "[bold]Choose a directory[/bold] (number or name)", console=console
            )
        except (KeyboardInterrupt, EOFError):
            return None

        choice = _resolve_choice(answer, directories)
        if choice is not None:
            log.debug(f"Selected directory: {escape(choice)}")
            return choice
        console.print(
            f"[red]✗ Please enter a number between 1 and {len(directories)} "
            "or one of the names above.[/red]"
        )
