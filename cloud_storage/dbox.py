# dbox.py
import dropbox
from dropbox.files import WriteMode, FileMetadata, FolderMetadata
from dropbox.exceptions import ApiError
import logging
import os
from typing import Iterable, List, Optional
from .config import DropboxSettings
from .exceptions import DestinationExistsError, PathTraversalError
from .storage.base import StorageAdapter
from .storage.dto import FileEntry, FolderEntry, ListingEntry


class DropboxAdapter(StorageAdapter):
    """
    Adapter for the Dropbox API, implementing the StorageAdapter interface.

    Every operation is confined to the configured base directory: relative
    paths are resolved against it and parent-directory segments are refused.
    Methods that recurse take a `depth` argument; only the outermost call
    (depth 0) resolves its path, deeper calls receive full paths taken from
    a previous listing.
    """

    def __init__(
        self,
        settings: DropboxSettings,
        client: Optional[dropbox.Dropbox] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.base_dir = settings.DBX_BASE_DIR
        self.depth_limit = settings.DBX_LIST_DEPTH_LIMIT
        if client is not None:
            self.dbx = client
            return

        try:
            self.dbx = dropbox.Dropbox(
                oauth2_access_token=settings.DBX_ACCESS_TOKEN,
                app_key=settings.DBX_APP_KEY,
                app_secret=settings.DBX_APP_SECRET,
            )
            # Verify successful authentication by requesting current user info
            self.dbx.users_get_current_account()
            self.logger.info("Dropbox client initialized successfully.")
        except Exception as e:
            self.logger.error(
                f"Failed to initialize Dropbox client. Check your credentials. Error: {e}"
            )
            raise

    def get_full_path(self, path: Optional[str] = None) -> str:
        if path is not None and ".." in path:
            raise PathTraversalError(
                f"Remote path '{path}' should not move to a parent directory"
            )
        full_path = self.base_dir
        if path is not None:
            full_path += path if path.startswith("/") else "/" + path
        return full_path

    @staticmethod
    def _to_api_path(path: str) -> str:
        """Dropbox addresses its root as '' and rejects a trailing separator."""
        if path.endswith("/"):
            path = path[:-1]
        return path

    def _list_entries(self, folder_path: str) -> Iterable:
        """Yields the immediate children of a folder, following pagination."""
        result = self.dbx.files_list_folder(self._to_api_path(folder_path))
        yield from result.entries
        while result.has_more:
            self.logger.debug(f"Found more entries in '{folder_path}', continuing listing...")
            result = self.dbx.files_list_folder_continue(result.cursor)
            yield from result.entries

    def get_list(
        self, path: str, depth: int = 0, limit: Optional[int] = None
    ) -> List[ListingEntry]:
        """
        Returns the listing tree of a Dropbox folder in the order the API returns it.

        `limit` caps the recursion depth (None uses DBX_LIST_DEPTH_LIMIT,
        0 means unlimited). Folders at or beyond the limit are left out
        of the result altogether.
        """
        if limit is None:
            limit = self.depth_limit
        folder_path = self.get_full_path(path) if depth == 0 else path
        self.logger.debug(f"Listing Dropbox path: '{folder_path}' (depth {depth})")

        items: List[ListingEntry] = []
        for entry in self._list_entries(folder_path):
            if isinstance(entry, FolderMetadata):
                if limit and depth + 1 >= limit:
                    continue
                items.append(
                    FolderEntry(
                        title=entry.name,
                        path=entry.path_display,
                        children=self.get_list(entry.path_display, depth + 1, limit),
                    )
                )
            elif isinstance(entry, FileMetadata):
                items.append(
                    FileEntry(
                        title=entry.name,
                        path=entry.path_display,
                        modified_at=entry.server_modified,
                    )
                )
        return items

    def download(self, src: str, dst: str, overwrite: bool = False) -> str:
        """Downloads a file from Dropbox and writes its content verbatim to `dst`."""
        remote_path = self.get_full_path(src)
        if not overwrite and os.path.exists(dst):
            raise DestinationExistsError(f"{dst} already exists")
        try:
            self.logger.info(f"Downloading {remote_path} to {dst}...")
            _, response = self.dbx.files_download(remote_path)
        except ApiError as e:
            self.logger.error(f"Failed to download file '{remote_path}': {e}")
            raise
        with open(dst, "wb") as f:
            f.write(response.content)
        return dst

    def upload(self, src: str, dst: str) -> bool:
        """Uploads a local file to Dropbox, letting Dropbox rename it on a conflict."""
        remote_path = self.get_full_path(dst)
        self.logger.info(f"start uploading from: {src} to: {remote_path}")
        with open(src, "rb") as f:
            try:
                metadata = self.dbx.files_upload(
                    f.read(), remote_path, mode=WriteMode("add"), autorename=True
                )
            except ApiError as e:
                self.logger.error(f"Failed to upload file to '{remote_path}': {e}")
                raise
        return bool(metadata.id)

    def delete(self, remote: str, depth: int = 0) -> bool:
        """Deletes a file or folder in Dropbox."""
        remote_path = self.get_full_path(remote) if depth == 0 else remote
        try:
            self.logger.debug(f"Deleting {remote_path}...")
            result = self.dbx.files_delete_v2(remote_path)
        except ApiError as e:
            self.logger.error(f"Failed to delete path '{remote_path}': {e}")
            raise
        return isinstance(result.metadata, (FileMetadata, FolderMetadata))

    def delete_recursive(self, items: List[ListingEntry], depth: int = 0) -> bool:
        """
        Deletes every entry of a listing tree, children before their folder.

        Stops at the first entry Dropbox does not report as deleted and
        returns False; whatever was deleted before that stays deleted.
        """
        for item in items:
            if isinstance(item, FolderEntry) and not self.delete_recursive(
                item.children, depth + 1
            ):
                return False
            if not self.delete(item.path, depth + 1):
                self.logger.warning(f"Dropbox did not confirm deletion of '{item.path}'")
                return False
        return True

    def create_folder(self, path: str, depth: int = 0) -> bool:
        folder_path = self.get_full_path(path) if depth == 0 else path
        result = self.dbx.files_create_folder_v2(folder_path)
        return isinstance(result.metadata, FolderMetadata)

    def exists(self, path: str) -> bool:
        """
        Checks whether a file or folder exists.
        Only a 'not found' lookup error means False; other API errors are re-raised.
        """
        remote_path = self._to_api_path(self.get_full_path(path))
        # The Dropbox root always exists and cannot be queried for metadata.
        if remote_path == "":
            return True
        try:
            self.dbx.files_get_metadata(remote_path)
            return True
        except ApiError as e:
            if e.error.is_path() and e.error.get_path().is_not_found():
                return False
            self.logger.error(f"Error accessing Dropbox path '{remote_path}': {e}")
            raise
