"""
Data Models Layer.

This package contains Pydantic models for the command-line options, the fetch
settings and the entries returned by the GitHub contents API.
"""

from .config import CliOptions, FetchSettings
from .entries import DirectoryEntry, RemoteFileEntry

__all__ = ["CliOptions", "DirectoryEntry", "FetchSettings", "RemoteFileEntry"]
