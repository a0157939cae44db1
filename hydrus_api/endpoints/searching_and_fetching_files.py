"""Endpoints for searching files and reading their metadata."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional

from ..helpers import require_field, require_mapping
from ..types import JSONType
from . import Endpoint


class FileSortType(IntEnum):
    """Sort orders accepted by search_files."""
    FILE_SIZE = 0
    DURATION = 1
    IMPORT_TIME = 2
    FILE_TYPE = 3
    RANDOM = 4
    WIDTH = 5
    HEIGHT = 6
    RATIO = 7
    NUMBER_OF_PIXELS = 8
    NUMBER_OF_TAGS = 9
    NUMBER_OF_MEDIA_VIEWS = 10
    TOTAL_MEDIA_VIEWTIME = 11
    APPROXIMATE_BITRATE = 12
    HAS_AUDIO = 13
    MODIFIED_TIME = 14
    FRAMERATE = 15
    NUMBER_OF_FRAMES = 16


@dataclass(frozen=True)
class SearchFilesRequest:
    """Tag search. Sort options left as None use the client's defaults."""
    tags: List[str]
    file_service_name: Optional[str] = None
    tag_service_name: Optional[str] = None
    file_sort_type: Optional[FileSortType] = None
    file_sort_asc: Optional[bool] = None

    def to_json(self) -> Dict[str, JSONType]:
        return {
            "tags": list(self.tags),
            "file_service_name": self.file_service_name,
            "tag_service_name": self.tag_service_name,
            "file_sort_type": None if self.file_sort_type is None else int(self.file_sort_type),
            "file_sort_asc": self.file_sort_asc,
        }


@dataclass
class SearchFilesResponse:
    file_ids: List[int]

    @classmethod
    def from_json(cls, data: JSONType) -> "SearchFilesResponse":
        obj = require_mapping(data, "search_files response")
        return cls(file_ids=[int(i) for i in require_field(obj, "file_ids", list)])


@dataclass(frozen=True)
class FileMetadataRequest:
    """Look files up either by hash or by file id (exactly one of the two)."""
    hashes: Optional[List[str]] = None
    file_ids: Optional[List[int]] = None
    only_return_identifiers: bool = False

    def to_json(self) -> Dict[str, JSONType]:
        if (self.hashes is None) == (self.file_ids is None):
            raise ValueError("FileMetadataRequest needs either hashes or file_ids")
        data: Dict[str, JSONType] = {}
        if self.hashes is not None:
            data["hashes"] = list(self.hashes)
        else:
            data["file_ids"] = list(self.file_ids)
        if self.only_return_identifiers:
            data["only_return_identifiers"] = True
        return data


@dataclass
class FileMetadataInfo:
    file_id: int
    hash: str
    size: Optional[int] = None
    mime: Optional[str] = None
    ext: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    has_audio: bool = False
    num_frames: Optional[int] = None
    num_words: Optional[int] = None
    is_inbox: bool = False
    is_local: bool = False
    is_trashed: bool = False
    known_urls: List[str] = field(default_factory=list)
    # service name -> tag status (as string, "0" current, "1" pending, ...) -> tags
    service_names_to_statuses_to_tags: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: JSONType) -> "FileMetadataInfo":
        obj = require_mapping(data, "file metadata")
        statuses: Dict[str, Dict[str, List[str]]] = {}
        raw_tags = require_mapping(
            obj.get("service_names_to_statuses_to_tags") or {}, "service_names_to_statuses_to_tags"
        )
        for service, by_status in raw_tags.items():
            by_status = require_mapping(by_status, f"tag statuses of {service}")
            statuses[service] = {str(status): list(tags) for status, tags in by_status.items()}
        return cls(
            file_id=require_field(obj, "file_id", int),
            hash=require_field(obj, "hash", str),
            size=obj.get("size"),
            mime=obj.get("mime"),
            ext=obj.get("ext"),
            width=obj.get("width"),
            height=obj.get("height"),
            duration=obj.get("duration"),
            has_audio=bool(obj.get("has_audio", False)),
            num_frames=obj.get("num_frames"),
            num_words=obj.get("num_words"),
            is_inbox=bool(obj.get("is_inbox", False)),
            is_local=bool(obj.get("is_local", False)),
            is_trashed=bool(obj.get("is_trashed", False)),
            known_urls=list(obj.get("known_urls") or []),
            service_names_to_statuses_to_tags=statuses,
        )


@dataclass
class FileMetadataResponse:
    metadata: List[FileMetadataInfo]

    @classmethod
    def from_json(cls, data: JSONType) -> "FileMetadataResponse":
        obj = require_mapping(data, "file_metadata response")
        return cls(metadata=[FileMetadataInfo.from_json(m) for m in require_field(obj, "metadata", list)])


class SearchFiles(Endpoint):
    path = "get_files/search_files"
    method = "GET"
    response_model = SearchFilesResponse


class FileMetadata(Endpoint):
    path = "get_files/file_metadata"
    method = "GET"
    response_model = FileMetadataResponse
