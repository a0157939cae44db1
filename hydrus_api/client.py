"""Hydrus client API implementation.

This module provides the HydrusClient class that owns the HTTP session,
authenticates every request with the client API access key and dispatches
endpoint descriptors.

 - _make_api_request: aiohttp wrapper (status checking, JSON/text handling)
 - call: generic dispatch of any Endpoint descriptor
 - convenience wrappers: one coroutine per endpoint, plus import_file,
   file, file_by_id and search returning HydrusFile handles, and url and
   import_url returning Url handles
"""
from __future__ import annotations

import asyncio
import json
import logging
import os
import ssl as ssl_module
from typing import Any, Iterable, List, Optional, Type, Union

import aiohttp

from .endpoints import Endpoint, JsonRequest
from .endpoints.access_management import (
    ApiVersion,
    ApiVersionResponse,
    GetServices,
    GetServicesResponse,
    VerifyAccessKey,
    VerifyAccessKeyResponse,
)
from .endpoints.adding_files import (
    AddFile,
    AddFileRequest,
    AddFileResponse,
    ArchiveFiles,
    DeleteFiles,
    UnarchiveFiles,
    UndeleteFiles,
)
from .endpoints.adding_tags import AddTags, AddTagsRequest, CleanTags, CleanTagsRequest
from .endpoints.adding_times import SetTime, SetTimeRequest
from .endpoints.adding_urls import (
    AddUrl,
    AddUrlRequest,
    AddUrlResponse,
    AssociateUrl,
    AssociateUrlRequest,
    GetUrlFiles,
    GetUrlFilesResponse,
    GetUrlInfo,
    GetUrlInfoResponse,
    UrlRequest,
)
from .endpoints.common import FileHashesRequest
from .endpoints.managing_pages import FocusPage, FocusPageRequest, GetPages, PageInformation
from .endpoints.searching_and_fetching_files import (
    FileMetadata,
    FileMetadataInfo,
    FileMetadataRequest,
    FileSortType,
    SearchFiles,
    SearchFilesRequest,
)
from .exceptions import (
    HydrusApiRequestError,
    HydrusAuthenticationError,
    HydrusImportFailedError,
    HydrusInvalidDataError,
)
from .file import HydrusFile
from .helpers import encode_query_params, tag_list_to_string_list
from .url import Url, UrlImportBuilder

DEFAULT_BASE_URL = "http://127.0.0.1:45869"
ACCESS_KEY_HEADER = "Hydrus-Client-API-Access-Key"

log = logging.getLogger(__name__)


class HydrusClient:
    """Client for the Hydrus client API.

    Example:
        async with HydrusClient("http://127.0.0.1:45869", access_key) as client:
            version = await client.api_version()
            request = (
                SetTimeRequestBuilder.for_archived_time()
                .add_hash(file_hash)
                .set_timestamp(1700000000000)
                .build()
            )
            await client.set_time(request)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        access_key: Optional[str] = None,
        *,
        timeout: float = 30.0,
        ssl: Optional[Union[bool, ssl_module.SSLContext]] = None,
        conn_limit: Optional[int] = None,
        conn_limit_per_host: Optional[int] = None,
        keepalive_timeout: Optional[float] = None,
    ):
        """Initialize the client.

        No connection is opened here; the HTTP session is created lazily on the
        first request.

        Args:
            base_url: Base URL of the Hydrus client API
            access_key: Client API access key sent with every request
            timeout: Total timeout per request in seconds
            ssl: Passed to aiohttp.TCPConnector (False disables verification)
            conn_limit: Total connection pool size
            conn_limit_per_host: Connection pool size per host
            keepalive_timeout: Seconds an idle connection is kept open
        """
        self.base_url = base_url.rstrip('/')
        self.access_key = access_key
        self.timeout = timeout

        self._ssl = ssl
        self._conn_limit = conn_limit
        self._conn_limit_per_host = conn_limit_per_host
        self._keepalive_timeout = keepalive_timeout

        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "HydrusClient":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _ensure_session(self) -> None:
        if self._session is None or self._session.closed:
            connector_kwargs: dict = {}
            if self._ssl is not None:
                connector_kwargs["ssl"] = self._ssl
            if self._conn_limit is not None:
                connector_kwargs["limit"] = self._conn_limit
            if self._conn_limit_per_host is not None:
                connector_kwargs["limit_per_host"] = self._conn_limit_per_host
            if self._keepalive_timeout is not None:
                connector_kwargs["keepalive_timeout"] = self._keepalive_timeout
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(**connector_kwargs),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    # -------------------------
    # Transport
    # -------------------------
    async def _make_api_request(self, method: str, endpoint: str, payload: Optional[dict] = None, *,
                                params: Optional[dict] = None, data: Optional[bytes] = None,
                                expect_json: bool = True) -> Any:
        """Make one HTTP request against the Hydrus client API.

        Args:
            method: HTTP method
            endpoint: Path relative to base_url
            payload: JSON body
            params: Query parameters
            data: Raw body, sent as application/octet-stream
            expect_json: If True, parse the body as JSON; otherwise return the text

        Returns:
            Parsed JSON, or the response text when expect_json is False

        Raises:
            HydrusAuthenticationError: On 401/403
            HydrusApiRequestError: On other failing statuses or network errors
            HydrusInvalidDataError: If a JSON body was expected but not returned
        """
        await self._ensure_session()
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        headers = {}
        if self.access_key:
            headers[ACCESS_KEY_HEADER] = self.access_key
        if data is not None:
            headers["Content-Type"] = "application/octet-stream"

        log.debug(f"{method} {endpoint} params={params} json={payload}")
        try:
            async with self._session.request(method, url, json=payload, params=params,
                                             data=data, headers=headers) as resp:
                # non-UTF-8 bytes are replaced, never raised
                text = (await resp.read()).decode("utf-8", errors="replace")
                if resp.status >= 400:
                    message = f"{method} {endpoint} failed with status {resp.status}: {text}"
                    log.error(message)
                    if resp.status in (401, 403):
                        raise HydrusAuthenticationError(message, status=resp.status, body=text)
                    raise HydrusApiRequestError(message, status=resp.status, body=text)
                log.debug(f"{endpoint} response - status: {resp.status}, content-type: {resp.content_type}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.error(f"API request failed for {endpoint}: {e}")
            raise HydrusApiRequestError(f"API request failed for {endpoint}: {e}") from e

        if not expect_json:
            return text
        if not text.strip():
            log.warning(f"{endpoint} returned EMPTY response body")
            raise HydrusInvalidDataError(f"{endpoint} returned an empty response body")
        try:
            return json.loads(text)
        except ValueError as e:
            raise HydrusInvalidDataError(f"{endpoint} did not return JSON: {e}") from e

    async def call(self, endpoint: Type[Endpoint], request: Optional[JsonRequest] = None) -> Any:
        """Dispatch a request to an endpoint and parse the response.

        Args:
            endpoint: Endpoint descriptor class (path, method, response model)
            request: Request object with a to_json() method, or None

        Returns:
            An instance of endpoint.response_model, or None for endpoints
            without a response body

        Raises:
            HydrusApiRequestError: If the transport fails
            HydrusInvalidDataError: If the response does not match the model
        """
        payload = endpoint.serialize(request)
        expect_json = endpoint.expects_body()
        if endpoint.method == "GET":
            raw = await self._make_api_request(endpoint.method, endpoint.path,
                                               params=encode_query_params(payload),
                                               expect_json=expect_json)
        elif isinstance(payload, (bytes, bytearray)):
            raw = await self._make_api_request(endpoint.method, endpoint.path, data=bytes(payload),
                                               expect_json=expect_json)
        else:
            raw = await self._make_api_request(endpoint.method, endpoint.path, payload,
                                               expect_json=expect_json)

        if not expect_json:
            return None
        try:
            return endpoint.parse_response(raw)
        except (KeyError, TypeError, ValueError) as e:
            log.error(f"Failed to parse server response for {endpoint.path}: {e}")
            raise HydrusInvalidDataError(f"Failed to parse server response for {endpoint.path}: {e}") from e

    # -------------------------
    # Access management
    # -------------------------
    async def api_version(self) -> ApiVersionResponse:
        return await self.call(ApiVersion)

    async def verify_access_key(self) -> VerifyAccessKeyResponse:
        return await self.call(VerifyAccessKey)

    async def get_services(self) -> GetServicesResponse:
        return await self.call(GetServices)

    # -------------------------
    # Adding files
    # -------------------------
    async def add_file(self, file: Union[str, os.PathLike, bytes]) -> AddFileResponse:
        """Send a file to the client for import.

        Args:
            file: A path readable by the Hydrus client, or the file contents

        Returns:
            AddFileResponse with the import status and hash
        """
        if isinstance(file, (bytes, bytearray)):
            request = AddFileRequest.from_bytes(file)
            log.info(f"Importing {len(file)} bytes")
        else:
            request = AddFileRequest.from_path(os.fspath(file))
            log.info(f"Importing file {request.path}")
        return await self.call(AddFile, request)

    async def delete_files(self, hashes: Iterable[str], reason: Optional[str] = None) -> None:
        await self.call(DeleteFiles, FileHashesRequest.of(hashes, reason=reason))

    async def undelete_files(self, hashes: Iterable[str]) -> None:
        await self.call(UndeleteFiles, FileHashesRequest.of(hashes))

    async def archive_files(self, hashes: Iterable[str]) -> None:
        await self.call(ArchiveFiles, FileHashesRequest.of(hashes))

    async def unarchive_files(self, hashes: Iterable[str]) -> None:
        await self.call(UnarchiveFiles, FileHashesRequest.of(hashes))

    # -------------------------
    # Adding tags
    # -------------------------
    async def add_tags(self, request: AddTagsRequest) -> None:
        log.info(f"Editing tags of {len(request.hashes)} file(s)")
        await self.call(AddTags, request)

    async def clean_tags(self, tags: Iterable) -> List[str]:
        """Return the tags the way the client would store them (lowercased, trimmed, ...)."""
        response = await self.call(CleanTags, CleanTagsRequest(tags=tag_list_to_string_list(tags)))
        return response.tags

    # -------------------------
    # Adding urls
    # -------------------------
    async def get_url_files(self, url: str) -> GetUrlFilesResponse:
        return await self.call(GetUrlFiles, UrlRequest(url=url))

    async def get_url_info(self, url: str) -> GetUrlInfoResponse:
        return await self.call(GetUrlInfo, UrlRequest(url=url))

    async def add_url(self, request: AddUrlRequest) -> AddUrlResponse:
        log.info(f"Adding url {request.url}")
        return await self.call(AddUrl, request)

    async def associate_urls(self, urls: Iterable[str], hashes: Iterable[str]) -> None:
        await self.call(AssociateUrl, AssociateUrlRequest(hashes=list(hashes), urls_to_add=list(urls)))

    async def disassociate_urls(self, urls: Iterable[str], hashes: Iterable[str]) -> None:
        await self.call(AssociateUrl, AssociateUrlRequest(hashes=list(hashes), urls_to_delete=list(urls)))

    # -------------------------
    # Managing pages
    # -------------------------
    async def get_pages(self) -> PageInformation:
        """Return the root of the client's page tree."""
        response = await self.call(GetPages)
        return response.pages

    async def focus_page(self, page_key: str) -> None:
        await self.call(FocusPage, FocusPageRequest(page_key=page_key))

    # -------------------------
    # Searching and fetching files
    # -------------------------
    async def search_files(self, tags: Iterable, file_service_name: Optional[str] = None,
                           tag_service_name: Optional[str] = None, *,
                           file_sort_type: Optional[FileSortType] = None,
                           file_sort_asc: Optional[bool] = None) -> List[int]:
        """Return the ids of the files matching every tag.

        Args:
            tags: Tags or tag strings, all of which must match
            file_service_name: Restrict the search to one file domain
            tag_service_name: Restrict the search to one tag domain
            file_sort_type: Order of the returned ids
            file_sort_asc: Ascending when True, descending when False
        """
        request = SearchFilesRequest(
            tags=tag_list_to_string_list(tags),
            file_service_name=file_service_name,
            tag_service_name=tag_service_name,
            file_sort_type=file_sort_type,
            file_sort_asc=file_sort_asc,
        )
        response = await self.call(SearchFiles, request)
        return response.file_ids

    async def get_file_metadata(self, hashes: Optional[Iterable[str]] = None,
                                file_ids: Optional[Iterable[int]] = None) -> List[FileMetadataInfo]:
        request = FileMetadataRequest(
            hashes=list(hashes) if hashes is not None else None,
            file_ids=list(file_ids) if file_ids is not None else None,
        )
        response = await self.call(FileMetadata, request)
        return response.metadata

    async def get_file_metadata_by_identifier(self, file_id: Optional[int] = None,
                                              file_hash: Optional[str] = None) -> FileMetadataInfo:
        """Return the metadata of a single file identified by id or hash.

        Raises:
            HydrusInvalidDataError: If the server returns no metadata for it
        """
        if file_hash is not None:
            metadata = await self.get_file_metadata(hashes=[file_hash])
        else:
            metadata = await self.get_file_metadata(file_ids=[file_id])
        if not metadata:
            raise HydrusInvalidDataError(f"No metadata returned for file {file_hash or file_id}")
        return metadata[0]

    # -------------------------
    # Editing times
    # -------------------------
    async def set_time(self, request: SetTimeRequest) -> None:
        log.info(f"Setting {request.timestamp_type.name} of {len(request.hashes)} file(s)")
        await self.call(SetTime, request)

    # -------------------------
    # High-level helpers
    # -------------------------
    async def import_file(self, file: Union[str, os.PathLike, bytes]) -> HydrusFile:
        """Import a file and return a handle to it.

        Raises:
            HydrusImportFailedError: If the client reports the import as failed or vetoed
        """
        response = await self.add_file(file)
        if response.failed:
            log.error(f"Import failed with status {response.status}: {response.note}")
            raise HydrusImportFailedError(
                f"Import failed with status {response.status}: {response.note}",
                status=response.status,
                note=response.note,
            )
        return HydrusFile.from_raw_status_and_hash(self, response.status, response.hash)

    def file(self, file_hash: str) -> HydrusFile:
        return HydrusFile.from_hash(self, file_hash)

    def file_by_id(self, file_id: int) -> HydrusFile:
        return HydrusFile.from_id(self, file_id)

    async def url(self, url: str) -> Url:
        """Look up how the client parses a url and return a handle to it."""
        info = await self.get_url_info(url)
        return Url.from_info(self, url, info)

    def import_url(self, url: str) -> UrlImportBuilder:
        """Start an import of a url without looking it up first. Await run() on the result."""
        return UrlImportBuilder(self, url)

    async def search(self, tags: Iterable, file_service_name: Optional[str] = None,
                     tag_service_name: Optional[str] = None, *,
                     file_sort_type: Optional[FileSortType] = None,
                     file_sort_asc: Optional[bool] = None) -> List[HydrusFile]:
        file_ids = await self.search_files(tags, file_service_name, tag_service_name,
                                           file_sort_type=file_sort_type, file_sort_asc=file_sort_asc)
        log.info(f"Search returned {len(file_ids)} file(s)")
        return [HydrusFile.from_id(self, file_id) for file_id in file_ids]
