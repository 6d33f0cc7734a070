# storage/base.py
from abc import ABC, abstractmethod
from typing import List, Optional
from .dto import ListingEntry


class StorageAdapter(ABC):
    """
    Abstract base class for a remote storage adapter.
    Defines the common interface that all specific backends
    (e.g., Dropbox, Amazon S3) must implement, so calling code
    can swap backends without changing call sites.
    """

    @abstractmethod
    def get_full_path(self, path: Optional[str] = None) -> str:
        """
        Resolves a backend-relative path to the backend's absolute path.

        :param path: The path relative to the configured base directory.
        :return: The fully resolved remote path.
        :raises PathTraversalError: If the path contains a parent-directory segment.
        """
        pass

    @abstractmethod
    def get_list(
        self, path: str, depth: int = 0, limit: Optional[int] = None
    ) -> List[ListingEntry]:
        """
        Lists the contents of a remote folder, recursing into subfolders.

        :param path: The folder to list, relative to the base directory.
        :param depth: Internal recursion counter; callers pass 0.
        :param limit: Maximum recursion depth; None uses the configured one, 0 is unlimited.
        :return: The listing tree in backend order.
        """
        pass

    @abstractmethod
    def download(self, src: str, dst: str, overwrite: bool = False) -> str:
        """
        Downloads a remote object to the local filesystem.

        :param src: The remote path, relative to the base directory.
        :param dst: The local path to write to (including file name).
        :param overwrite: Whether an existing local file may be replaced.
        :return: The local path that was written.
        :raises DestinationExistsError: If `dst` exists and `overwrite` is False.
        """
        pass

    @abstractmethod
    def upload(self, src: str, dst: str) -> bool:
        """
        Uploads a local file, renaming the remote target on a name collision.

        :param src: The local path of the file to upload.
        :param dst: The remote path including the file name.
        :return: True if the backend confirms the object exists.
        """
        pass

    @abstractmethod
    def delete(self, remote: str) -> bool:
        """
        Deletes a remote file or folder.

        :param remote: The remote path, relative to the base directory.
        :return: True if the backend reports a deleted entity.
        """
        pass

    @abstractmethod
    def delete_recursive(self, items: List[ListingEntry], depth: int = 0) -> bool:
        """
        Deletes every entry of a listing tree, children before their folder.

        :param items: A tree previously returned by get_list.
        :param depth: Internal recursion counter; callers pass 0.
        :return: True only if every entry was deleted; stops at the first failure.
        """
        pass

    @abstractmethod
    def create_folder(self, path: str) -> bool:
        """
        Creates a remote folder.

        :param path: The folder path, relative to the base directory.
        :return: True if the backend reports a folder was created.
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """
        Checks whether a remote file or folder exists.

        :param path: The remote path, relative to the base directory.
        """
        pass
