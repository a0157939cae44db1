"""High-level file handle for the Hydrus client API.

This module provides the HydrusFile class, which wraps HydrusClient with an
object-oriented interface for working with a single file.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from .endpoints.adding_tags import AddTagsRequestBuilder, TagAction
from .endpoints.adding_times import SetTimeRequestBuilder
from .endpoints.searching_and_fetching_files import FileMetadataInfo
from .helpers import tag_list_to_string_list
from .models import FileStatus, ServiceName, Tag

if TYPE_CHECKING:
    from .client import HydrusClient

log = logging.getLogger(__name__)

# url file status codes as reported by add_urls/get_url_files
_RAW_STATUS_NOT_IN_DB = 0
_RAW_STATUS_DELETED = 3


class HydrusFile:
    """Handle to one file known to the Hydrus client.

    A file is identified by its id or its hash. Metadata is fetched on first
    use and cached until update() is called.

    Example:
        file = client.file("9e2c...")
        await file.add_tags(ServiceName.my_tags(), [Tag.from_string("character:megumin")])
        await file.set_time(SetTimeRequestBuilder.for_archived_time().set_timestamp(ts))
    """

    def __init__(self, client: "HydrusClient", file_id: Optional[int] = None,
                 file_hash: Optional[str] = None, status: FileStatus = FileStatus.UNKNOWN,
                 metadata: Optional[FileMetadataInfo] = None):
        if file_id is None and file_hash is None:
            raise ValueError("HydrusFile needs a file id or a file hash")
        self.client = client
        self.file_id = file_id
        self.file_hash = file_hash
        self.status = status
        self._metadata = metadata

    @classmethod
    def from_id(cls, client: "HydrusClient", file_id: int) -> "HydrusFile":
        return cls(client, file_id=file_id)

    @classmethod
    def from_hash(cls, client: "HydrusClient", file_hash: str) -> "HydrusFile":
        return cls(client, file_hash=file_hash)

    @classmethod
    def from_raw_status_and_hash(cls, client: "HydrusClient", status: int, file_hash: str) -> "HydrusFile":
        if status == _RAW_STATUS_DELETED:
            file_status = FileStatus.DELETED
        elif status == _RAW_STATUS_NOT_IN_DB:
            file_status = FileStatus.READY_FOR_IMPORT
        else:
            file_status = FileStatus.IN_DATABASE
        return cls(client, file_hash=file_hash, status=file_status)

    @classmethod
    def from_metadata(cls, client: "HydrusClient", metadata: FileMetadataInfo) -> "HydrusFile":
        status = FileStatus.DELETED if metadata.is_trashed else FileStatus.IN_DATABASE
        return cls(client, file_id=metadata.file_id, file_hash=metadata.hash,
                   status=status, metadata=metadata)

    @property
    def cached_metadata(self) -> Optional[FileMetadataInfo]:
        """Metadata from the last fetch, without making an API request."""
        return self._metadata

    async def update(self) -> None:
        """Drop the cached metadata and fetch it again."""
        self._metadata = None
        await self.metadata()

    async def metadata(self) -> FileMetadataInfo:
        """Return the file's metadata, fetching it if it is not cached yet."""
        if self._metadata is None:
            log.debug(f"Fetching metadata for file {self.file_hash or self.file_id}")
            metadata = await self.client.get_file_metadata_by_identifier(
                file_id=self.file_id, file_hash=self.file_hash
            )
            self.status = FileStatus.DELETED if metadata.is_trashed else FileStatus.IN_DATABASE
            self.file_id = metadata.file_id
            self._metadata = metadata
        return self._metadata

    async def hash(self) -> str:
        """Return the hash of the file, resolving it through metadata for id-only handles."""
        if self.file_hash is None:
            metadata = await self.metadata()
            self.file_hash = metadata.hash
        return self.file_hash

    async def associate_urls(self, urls: Iterable[str]) -> None:
        file_hash = await self.hash()
        await self.client.associate_urls(list(urls), [file_hash])

    async def disassociate_urls(self, urls: Iterable[str]) -> None:
        file_hash = await self.hash()
        await self.client.disassociate_urls(list(urls), [file_hash])

    async def services_with_tags(self) -> Dict[ServiceName, List[Tag]]:
        """Return the file's tags grouped by service, across all tag statuses."""
        metadata = await self.metadata()
        mappings: Dict[ServiceName, List[Tag]] = {}
        for service, statuses_to_tags in metadata.service_names_to_statuses_to_tags.items():
            tags: List[Tag] = []
            for status_tags in statuses_to_tags.values():
                tags.extend(Tag.from_string(t) for t in status_tags)
            mappings[ServiceName(service)] = tags
        return mappings

    async def tags(self) -> List[Tag]:
        """Return all tags of the file from every service."""
        tags: List[Tag] = []
        for service_tags in (await self.services_with_tags()).values():
            tags.extend(service_tags)
        return tags

    async def add_tags(self, service: ServiceName, tags: Iterable[Tag]) -> None:
        file_hash = await self.hash()
        request = (
            AddTagsRequestBuilder()
            .add_hash(file_hash)
            .add_tags(str(service), tag_list_to_string_list(tags))
            .build()
        )
        await self.client.add_tags(request)

    async def modify_tags(self, service: ServiceName, action: TagAction, tags: Iterable[Tag]) -> None:
        """Apply a tag action (delete, pend, petition, ...) to the given tags."""
        file_hash = await self.hash()
        builder = AddTagsRequestBuilder().add_hash(file_hash)
        for tag in tags:
            builder.add_tag_with_action(str(service), str(tag), action)
        await self.client.add_tags(builder.build())

    async def delete(self, reason: Optional[str] = None) -> None:
        await self.client.delete_files([await self.hash()], reason=reason)
        self.status = FileStatus.DELETED

    async def undelete(self) -> None:
        await self.client.undelete_files([await self.hash()])
        self.status = FileStatus.IN_DATABASE

    async def archive(self) -> None:
        await self.client.archive_files([await self.hash()])

    async def unarchive(self) -> None:
        await self.client.unarchive_files([await self.hash()])

    async def set_time(self, builder: SetTimeRequestBuilder) -> None:
        """Add this file to a set_time builder and send the request.

        The builder is consumed.
        """
        file_hash = await self.hash()
        await self.client.set_time(builder.add_hash(file_hash).build())

    def __repr__(self) -> str:
        return f"HydrusFile(id={self.file_id!r}, hash={self.file_hash!r}, status={self.status.name})"
