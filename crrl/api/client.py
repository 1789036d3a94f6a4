"""
Client for the cursorrules repository on the GitHub contents API.
"""

import logging
from typing import Optional

import aiohttp
from pydantic import ValidationError
from rich.markup import escape

from crrl import __version__
from crrl.exceptions import ApiConnectionError, CrrlError, RulesNotFoundError
from crrl.models.config import RULES_FILENAME, FetchSettings
from crrl.models.entries import DirectoryListing, FileListing

from .fetcher import RetryingFetcher

log = logging.getLogger(__name__)

# Everything a component boundary turns into an ApiConnectionError.
_FETCH_FAILURES = (CrrlError, aiohttp.ClientError, ValidationError, ValueError)


class RulesAPIClient:
    """
    Lists the rule directories, locates a directory's .cursorrules file and
    downloads file contents.

    Use as an async context manager; the aiohttp session lives for the
    duration of the `async with` block.
    """

    def __init__(self, settings: Optional[FetchSettings] = None):
        self.settings = settings or FetchSettings()
        self._session: Optional[aiohttp.ClientSession] = None
        self._fetcher: Optional[RetryingFetcher] = None

    async def __aenter__(self) -> "RulesAPIClient":
        self._session = aiohttp.ClientSession(
            headers={
                "User-Agent": f"crrl/{__version__}",
                "Accept": "application/vnd.github+json, */*",
            },
            timeout=aiohttp.ClientTimeout(
                total=None,
                sock_connect=self.settings.connect_timeout,
                sock_read=self.settings.read_timeout,
            ),
        )
        self._fetcher = RetryingFetcher(
            self._session,
            max_attempts=self.settings.max_attempts,
            retry_delay=self.settings.retry_delay,
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    @property
    def fetcher(self) -> RetryingFetcher:
        if self._fetcher is None:
            raise RuntimeError("RulesAPIClient must be used inside 'async with'.")
        return self._fetcher

    async def fetch_directory_list(self) -> list[str]:
        """Returns the rule directory names in the order the API lists them."""
        log.info("[cyan]Fetching directory list...[/cyan]")
        try:
            payload = await self.fetcher.fetch_json(self.settings.api_url)
            directories = DirectoryListing.validate_python(payload)
        except _FETCH_FAILURES as e:
            log.error(f"[red]✗ Error fetching directory list: {escape(str(e))}[/red]")
            raise ApiConnectionError(
                "There was a problem connecting to the GitHub API. "
                "Please check your internet connection and try again."
            ) from e

        log.info("[green]✓ Successfully fetched directory list[/green]")
        return [entry.name for entry in directories]

    async def fetch_cursorrules_file(self, dir_name: str) -> str:
        """
        Finds the .cursorrules file in `dir_name` and returns its contents.

        Raises:
            RulesNotFoundError: If the directory has no .cursorrules file.
            ApiConnectionError: If the listing or the download failed.
        """
        log.info(
            f"[cyan]Fetching {RULES_FILENAME} file from {escape(dir_name)}...[/cyan]"
        )
        try:
            payload = await self.fetcher.fetch_json(f"{self.settings.api_url}/{dir_name}")
            entries = FileListing.validate_python(payload)
        except _FETCH_FAILURES as e:
            log.error(
                f"[red]✗ Error fetching {RULES_FILENAME} file: {escape(str(e))}[/red]"
            )
            raise ApiConnectionError(
                f"There was a problem fetching the {RULES_FILENAME} file. "
                "Please try again later."
            ) from e

        entry = next((e for e in entries if e.is_file_named(RULES_FILENAME)), None)
        if entry is None or not entry.download_url:
            log.error(
                f"[red]✗ No {RULES_FILENAME} file found in {escape(dir_name)}[/red]"
            )
            raise RulesNotFoundError(f"No {RULES_FILENAME} file found in {dir_name}")

        log.info(f"[green]✓ Found {RULES_FILENAME} file in {escape(dir_name)}[/green]")
        return await self.fetch_remote_file(entry.download_url)

    async def fetch_remote_file(self, url: str) -> str:
        """Downloads `url` and returns the body as text."""
        log.info("[cyan]Fetching remote file...[/cyan]")
        try:
            content = await self.fetcher.fetch_text(url)
        except _FETCH_FAILURES as e:
            log.error(f"[red]✗ Error fetching remote file: {escape(str(e))}[/red]")
            raise ApiConnectionError(
                "There was a problem downloading the file. "
                "Please check your internet connection and try again."
            ) from e

        log.info("[green]✓ Successfully fetched remote file[/green]")
        return content
