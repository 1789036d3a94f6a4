"""
Storage Layer.

This package handles writing the fetched .cursorrules file to disk.
"""

from .writer import save_local_file

__all__ = ["save_local_file"]
