"""
GitHub API Layer.

This package handles all communication with the GitHub contents API and the
download locations it hands out.
"""

from .client import RulesAPIClient
from .fetcher import RetryingFetcher

__all__ = ["RetryingFetcher", "RulesAPIClient"]
