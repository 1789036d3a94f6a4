"""
Functions for formatting and displaying output in the console using Rich.
"""

import errno
from enum import Enum
from typing import Iterator, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from crrl.exceptions import PermissionDeniedError, RateLimitError

BANNER = r"""
   _____                           _____       _           
  / ____|                         |  __ \     | |          
 | |     _   _ _ __ ___  ___  _ __| |__) |   _| | ___  ___ 
 | |    | | | | '__/ __|/ _ \| '__|  _  / | | | |/ _ \/ __|
 | |____| |_| | |  \__ \ (_) | |  | | \ \ |_| | |  __/\__ \
  \_____|\__,_|_|  |___/\___/|_|  |_|  \_\__,_|_|\___||___/
                                                           
"""


class ErrorKind(str, Enum):
    DISK_FULL = "disk_full"
    PERMISSION_DENIED = "permission_denied"
    RATE_LIMIT = "rate_limit"
    UNEXPECTED = "unexpected"


SUGGESTIONS = {
    ErrorKind.DISK_FULL: [
        "• There is not enough space on the disk to save the file.",
    ],
    ErrorKind.PERMISSION_DENIED: [
        "• Permission denied. Try running the command with sudo or as an administrator.",
        "• Or pass a directory you can write to with --dir.",
    ],
    ErrorKind.RATE_LIMIT: [
        "• GitHub API rate limit exceeded. Please try again later.",
    ],
    ErrorKind.UNEXPECTED: [
        "• An unexpected error occurred. Please try again or contact support "
        "if the problem persists.",
        "• Run the command with -v for detailed logs.",
    ],
}


def _error_chain(error: Optional[BaseException]) -> Iterator[BaseException]:
    """Yields `error` and every exception it was raised from."""
    seen: set[int] = set()
    while error is not None and id(error) not in seen:
        seen.add(id(error))
        yield error
        error = error.__cause__ or getattr(error, "cause", None)


def classify_error(error: BaseException) -> ErrorKind:
    """Picks the hint category for `error` from its type and its causes."""
    for exc in _error_chain(error):
        if isinstance(exc, RateLimitError):
            return ErrorKind.RATE_LIMIT
        if isinstance(exc, PermissionDeniedError):
            return ErrorKind.PERMISSION_DENIED
        if isinstance(exc, OSError):
            if exc.errno == errno.ENOSPC:
                return ErrorKind.DISK_FULL
            if exc.errno in (errno.EACCES, errno.EPERM):
                return ErrorKind.PERMISSION_DENIED
    return ErrorKind.UNEXPECTED


def format_error_with_suggestions(error: BaseException) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_text = Text()
    error_text.append("Error: ", style="bold red")
    error_text.append(str(error) or type(error).__name__)

    suggestion_text = Text("\n".join(SUGGESTIONS[classify_error(error)]))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def banner_text() -> Text:
    return Text(BANNER, style="bold cyan")
