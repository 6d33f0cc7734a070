from .base import StorageAdapter
from .dto import FileEntry, FolderEntry, ListingEntry

__all__ = ["StorageAdapter", "FileEntry", "FolderEntry", "ListingEntry"]
