"""Endpoints for importing files and changing their local state."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union

from ..helpers import require_field, require_mapping
from ..types import JSONType
from . import Endpoint
from .common import FileHashesRequest

# add_file result codes
STATUS_SUCCESS = 1
STATUS_ALREADY_IN_DB = 2
STATUS_PREVIOUSLY_DELETED = 3
STATUS_FAILED = 4
STATUS_VETOED = 7


@dataclass(frozen=True)
class AddFileRequest:
    """Either a path readable by the Hydrus client, or the raw file bytes."""
    path: Optional[str] = None
    data: Optional[bytes] = None

    @classmethod
    def from_path(cls, path: str) -> "AddFileRequest":
        return cls(path=str(path))

    @classmethod
    def from_bytes(cls, data: bytes) -> "AddFileRequest":
        return cls(data=bytes(data))

    def to_json(self) -> Union[Dict[str, JSONType], bytes]:
        if self.data is not None:
            return self.data
        if self.path is None:
            raise ValueError("AddFileRequest needs either a path or file bytes")
        return {"path": self.path}


@dataclass
class AddFileResponse:
    status: int
    hash: str
    note: str = ""

    @classmethod
    def from_json(cls, data: JSONType) -> "AddFileResponse":
        obj = require_mapping(data, "add_file response")
        return cls(
            status=require_field(obj, "status", int),
            hash=require_field(obj, "hash", str),
            note=str(obj.get("note") or ""),
        )

    @property
    def failed(self) -> bool:
        return self.status in (STATUS_FAILED, STATUS_VETOED)


class AddFile(Endpoint):
    path = "add_files/add_file"
    method = "POST"
    response_model = AddFileResponse


class DeleteFiles(Endpoint):
    path = "add_files/delete_files"


class UndeleteFiles(Endpoint):
    path = "add_files/undelete_files"


class ArchiveFiles(Endpoint):
    path = "add_files/archive_files"


class UnarchiveFiles(Endpoint):
    path = "add_files/unarchive_files"


__all__ = [
    "AddFileRequest",
    "AddFileResponse",
    "AddFile",
    "DeleteFiles",
    "UndeleteFiles",
    "ArchiveFiles",
    "UnarchiveFiles",
    "FileHashesRequest",
]
