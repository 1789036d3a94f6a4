"""
End-to-end flow: resolve the rules source, fetch, validate, write.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from crrl.api.client import RulesAPIClient
from crrl.exceptions import EmptyContentError, InvalidUrlError, NoDirectoriesError
from crrl.models.config import RULES_FILENAME, CliOptions
from crrl.storage.writer import save_local_file

log = logging.getLogger(__name__)

# Returns the chosen directory, or None when the operator cancels.
DirectorySelector = Callable[[list[str]], Optional[str]]


class InstallOutcome(str, Enum):
    WRITTEN = "written"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class InstallResult:
    outcome: InstallOutcome
    path: Optional[Path] = None


def validate_remote_url(url: str) -> str:
    if not url.startswith(("http://", "https://")):
        raise InvalidUrlError(
            "Invalid URL format. URL must start with http:// or https://"
        )
    return url


def validate_content(content: str) -> str:
    if not content.strip():
        raise EmptyContentError(f"The {RULES_FILENAME} file is empty.")
    return content


class RulesInstaller:
    """
    Runs one install: fetch the rules from the given URL or from a directory
    the operator selects, then write them into the target directory.
    """

    def __init__(self, client: RulesAPIClient, select: DirectorySelector):
        self.client = client
        self.select = select

    async def run(self, options: CliOptions) -> InstallResult:
        """
        Raises:
            CrrlError: For any failure along the way; nothing is written.
            OSError: For unexpected filesystem failures during the write.
        """
        if options.remote_url:
            url = validate_remote_url(options.remote_url)
            content = await self.client.fetch_remote_file(url)
        else:
            directories = await self.client.fetch_directory_list()
            if not directories:
                raise NoDirectoriesError("No directories found in the repository.")

            selected = self.select(directories)
            if selected is None:
                log.debug("Directory selection cancelled, nothing written.")
                return InstallResult(InstallOutcome.CANCELLED)
            content = await self.client.fetch_cursorrules_file(selected)

        validate_content(content)
        path = await save_local_file(content, options.local_dir)
        return InstallResult(InstallOutcome.WRITTEN, path)
