"""
HTTP GET with bounded retries and a fixed delay between attempts.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, TypeVar

import aiohttp
from rich.markup import escape

from crrl.exceptions import FetchError, HTTPStatusError, RateLimitError

log = logging.getLogger(__name__)

T = TypeVar("T")


class RetryingFetcher:
    """
    Issues GET requests through a shared aiohttp session, retrying transport
    failures and error statuses up to `max_attempts` times.

    A 403 whose `X-RateLimit-Remaining` header is "0" is not transient and fails
    on the spot with `RateLimitError`.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
    ):
        self._session = session
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay

    async def fetch_text(self, url: str) -> str:
        """Returns the response body decoded as text."""
        return await self._get(url, lambda r: r.text())

    async def fetch_json(self, url: str) -> Any:
        """Returns the response body parsed as JSON, whatever its content type."""
        return await self._get(url, lambda r: r.json(content_type=None))

    async def _get(
        self,
        url: str,
        read: Callable[[aiohttp.ClientResponse], Awaitable[T]],
    ) -> T:
        last_status: Optional[int] = None
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_attempts + 1):
            log.debug(f"GET {escape(url)} (attempt {attempt}/{self.max_attempts})")
            try:
                async with self._session.get(url) as response:
                    if response.status == 403:
                        self._check_rate_limit(response)

                    if response.ok:
                        return await read(response)

                    last_status, last_error = response.status, None
                    log.debug(f"GET {escape(url)} returned HTTP {response.status}")
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_status, last_error = None, e
                log.debug(f"GET {escape(url)} failed: {escape(repr(e))}")

            if attempt < self.max_attempts:
                await asyncio.sleep(self.retry_delay)

        if last_status is not None:
            raise HTTPStatusError(url, self.max_attempts, last_status)
        raise FetchError(url, self.max_attempts, last_error)

    @staticmethod
    def _check_rate_limit(response: aiohttp.ClientResponse) -> None:
        if response.headers.get("X-RateLimit-Remaining") != "0":
            return

        message = "GitHub API rate limit exceeded. Please try again later."
        reset = response.headers.get("X-RateLimit-Reset", "")
        if reset.isdigit():
            reset_at = datetime.fromtimestamp(int(reset)).strftime("%H:%M:%S")
            message = f"GitHub API rate limit exceeded. Try again after {reset_at}."
        raise RateLimitError(message)
