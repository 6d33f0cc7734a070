# tests/conftest.py
import itertools
from datetime import datetime

import pytest
from unittest.mock import MagicMock
from dropbox.exceptions import ApiError
from dropbox.files import FileMetadata, FolderMetadata

from cloud_storage.config import (
    DropboxSettings,
    get_settings,
    get_dropbox_settings,
    get_s3_settings,
)
from cloud_storage.dbox import DropboxAdapter


def make_file_metadata(name, path, server_modified=None, id="id:file"):
    """A stand-in for a Dropbox FileMetadata that passes isinstance checks."""
    metadata = MagicMock(spec=FileMetadata)
    metadata.name = name
    metadata.path_display = path
    metadata.server_modified = server_modified or datetime(2024, 1, 1, 12, 0, 0)
    metadata.id = id
    return metadata


def make_folder_metadata(name, path, id="id:folder"):
    """A stand-in for a Dropbox FolderMetadata that passes isinstance checks."""
    metadata = MagicMock(spec=FolderMetadata)
    metadata.name = name
    metadata.path_display = path
    metadata.id = id
    return metadata


def make_list_result(entries, has_more=False, cursor=None):
    return MagicMock(entries=entries, has_more=has_more, cursor=cursor)


def not_found_error():
    """An ApiError shaped like Dropbox's path/not_found lookup error."""
    error = MagicMock()
    error.is_path.return_value = True
    error.get_path.return_value.is_not_found.return_value = True
    return ApiError("request-id", error, None, None)


class FakeDropbox:
    """
    In-memory stand-in for dropbox.Dropbox covering the calls the adapter makes.
    Children are listed in the order they were created.
    """

    def __init__(self):
        self.nodes = {}  # path -> {"kind": ..., "content": ..., "metadata": ...}
        self._ids = itertools.count(1)
        self._clock = itertools.count(0)

    @staticmethod
    def _parent(path):
        return path.rsplit("/", 1)[0]

    def _add_folder(self, path):
        if path == "" or path in self.nodes:
            return
        self._add_folder(self._parent(path))
        name = path.rsplit("/", 1)[1]
        self.nodes[path] = {
            "kind": "folder",
            "metadata": make_folder_metadata(name, path, id=f"id:{next(self._ids)}"),
        }

    def _lookup(self, path):
        if path not in self.nodes:
            raise not_found_error()
        return self.nodes[path]

    def files_upload(self, data, path, mode=None, autorename=False):
        if path in self.nodes and autorename:
            stem, dot, ext = path.rpartition(".")
            for n in itertools.count(1):
                candidate = f"{stem} ({n}).{ext}" if dot else f"{path} ({n})"
                if candidate not in self.nodes:
                    path = candidate
                    break
        self._add_folder(self._parent(path))
        name = path.rsplit("/", 1)[1]
        metadata = make_file_metadata(
            name,
            path,
            server_modified=datetime(2024, 1, 1, 12, 0, next(self._clock) % 60),
            id=f"id:{next(self._ids)}",
        )
        self.nodes[path] = {"kind": "file", "content": data, "metadata": metadata}
        return metadata

    def files_list_folder(self, path):
        if path != "" and self._lookup(path)["kind"] != "folder":
            raise not_found_error()
        entries = [
            node["metadata"]
            for child, node in self.nodes.items()
            if self._parent(child) == path
        ]
        return make_list_result(entries)

    def files_list_folder_continue(self, cursor):
        raise AssertionError("FakeDropbox never paginates")

    def files_download(self, path):
        node = self._lookup(path)
        return node["metadata"], MagicMock(content=node["content"])

    def files_delete_v2(self, path):
        node = self._lookup(path)
        for other in [p for p in self.nodes if p == path or p.startswith(path + "/")]:
            del self.nodes[other]
        return MagicMock(metadata=node["metadata"])

    def files_create_folder_v2(self, path):
        self._add_folder(path)
        return MagicMock(metadata=self.nodes[path]["metadata"])

    def files_get_metadata(self, path):
        return self._lookup(path)["metadata"]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Cached settings must never leak between tests."""
    get_settings.cache_clear()
    get_dropbox_settings.cache_clear()
    get_s3_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_dropbox_settings.cache_clear()
    get_s3_settings.cache_clear()


@pytest.fixture
def dropbox_settings():
    return DropboxSettings(DBX_ACCESS_TOKEN="test_token", DBX_BASE_DIR="/base")


@pytest.fixture
def mock_dbx():
    """A bare mock of the Dropbox SDK client."""
    return MagicMock()


@pytest.fixture
def adapter(dropbox_settings, mock_dbx):
    """A DropboxAdapter wired to a bare SDK mock."""
    return DropboxAdapter(dropbox_settings, client=mock_dbx)


@pytest.fixture
def fake_dbx():
    return FakeDropbox()


@pytest.fixture
def fake_adapter(dropbox_settings, fake_dbx):
    """A DropboxAdapter wired to the in-memory fake."""
    return DropboxAdapter(dropbox_settings, client=fake_dbx)
