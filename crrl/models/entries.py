"""
Models for the entries of a GitHub contents API listing.

Only the fields the application reads are declared; everything else in the
API response is ignored.
"""

from typing import Optional

from pydantic import BaseModel, TypeAdapter


class DirectoryEntry(BaseModel):
    """A named remote folder in the rules listing."""

    name: str


class RemoteFileEntry(BaseModel):
    """One entry of a per-directory listing."""

    name: str
    type: str
    download_url: Optional[str] = None

    def is_file_named(self, filename: str) -> bool:
        return self.type == "file" and self.name == filename


DirectoryListing = TypeAdapter(list[DirectoryEntry])
FileListing = TypeAdapter(list[RemoteFileEntry])
