from .dbox import DropboxAdapter
from .s3 import AmazonS3Adapter
from .storage.base import StorageAdapter
from .storage.dto import FileEntry, FolderEntry, ListingEntry

__all__ = [
    "StorageAdapter",
    "DropboxAdapter",
    "AmazonS3Adapter",
    "FileEntry",
    "FolderEntry",
    "ListingEntry",
]
