"""
Writes the fetched rules into the target directory.
"""

import asyncio
import logging
import os
from pathlib import Path

import aiofiles
from rich.markup import escape

from crrl.exceptions import DirectoryNotFoundError, PermissionDeniedError
from crrl.models.config import RULES_FILENAME

log = logging.getLogger(__name__)


async def save_local_file(content: str, directory: Path) -> Path:
    """
    Writes `content` to `<directory>/.cursorrules`, replacing any existing file.

    Returns:
        The path of the written file.

    Raises:
        DirectoryNotFoundError: If `directory` does not exist.
        PermissionDeniedError: If `directory` is not writable.
        OSError: For any other filesystem failure, unchanged.
    """
    directory = Path(directory)
    file_path = directory / RULES_FILENAME

    if not await asyncio.to_thread(directory.exists):
        raise DirectoryNotFoundError(f"Directory does not exist: {directory}")
    if not await asyncio.to_thread(os.access, directory, os.W_OK):
        raise PermissionDeniedError(f"Permission denied: Unable to write to {directory}")

    async with aiofiles.open(file_path, "w", encoding="utf-8", newline="") as f:
        await f.write(content)

    log.info(f"File saved to [bold]{escape(str(file_path))}[/bold]")
    return file_path
