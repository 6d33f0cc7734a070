# cloud_storage/storage/dto.py
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, Field


class FileEntry(BaseModel):
    """A file discovered while listing a remote folder."""

    kind: Literal["file"] = "file"
    title: str
    path: str
    modified_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "path": self.path,
            "modified_at": self.modified_at.isoformat(),
        }


class FolderEntry(BaseModel):
    """
    A folder discovered while listing a remote folder.
    `children` holds the folder contents in the order the backend returned them.
    """

    kind: Literal["folder"] = "folder"
    title: str
    path: str
    children: List["ListingEntry"] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "path": self.path,
            "children": [child.to_dict() for child in self.children],
        }


ListingEntry = Annotated[Union[FileEntry, FolderEntry], Field(discriminator="kind")]

FolderEntry.model_rebuild()
