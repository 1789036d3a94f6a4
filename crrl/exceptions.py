"""
Defines custom exceptions for the application to allow for more specific error handling.

Every failure the CLI knows how to explain derives from `CrrlError`, so the
top-level handler can pick a hint from the exception type instead of its text.
"""


class CrrlError(Exception):
    """Base exception for all application-specific errors."""


class FetchError(CrrlError):
    """Raised when a request keeps failing after all retry attempts."""

    def __init__(self, url: str, attempts: int, cause: Exception):
        self.url = url
        self.attempts = attempts
        self.cause = cause
        super().__init__(f"Failed to fetch {url} after {attempts} attempts: {cause}")


class HTTPStatusError(FetchError):
    """Raised when the server keeps answering with a non-success status code."""

    def __init__(self, url: str, attempts: int, status: int):
        self.status = status
        super().__init__(url, attempts, ValueError(f"HTTP error! status: {status}"))


class RateLimitError(CrrlError):
    """Raised when the GitHub API reports an exhausted rate limit. Never retried."""


class ApiConnectionError(CrrlError):
    """Raised at a component boundary when talking to the remote API failed."""


class RulesNotFoundError(CrrlError):
    """Raised when a directory listing has no .cursorrules file."""


class InputValidationError(CrrlError):
    """Base class for rejected input or content."""


class InvalidUrlError(InputValidationError):
    """Raised when a user-supplied URL is not http:// or https://."""


class NoDirectoriesError(InputValidationError):
    """Raised when the remote repository lists no directories."""


class EmptyContentError(InputValidationError):
    """Raised when the fetched file is empty or whitespace only."""


class FilesystemError(CrrlError):
    """Base class for problems with the local target directory."""


class DirectoryNotFoundError(FilesystemError):
    """Raised when the target directory does not exist."""


class PermissionDeniedError(FilesystemError):
    """Raised when the target directory is not writable."""
