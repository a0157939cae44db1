"""Hydrus API Client Package.

This package provides an asyncio Python client for the Hydrus network client
API. It includes a low-level client (HydrusClient) that dispatches typed
endpoint descriptors, request builders for the endpoints with structured
bodies, and a high-level file handle (HydrusFile).

Example Usage:
    from hydrus_api import HydrusClient, SetTimeRequestBuilder, DbTimeRequestType

    async with HydrusClient("http://127.0.0.1:45869", "access-key") as client:
        # Import a file and tag it
        file = await client.import_file("/srv/media/picture.png")
        await file.add_tags(ServiceName.my_tags(), [Tag.from_string("character:megumin")])

        # Backdate its import time
        request = (
            SetTimeRequestBuilder.for_db_time(DbTimeRequestType.FILE_IMPORTED_TIME, service_key)
            .add_hash(await file.hash())
            .set_timestamp(1600000000000)
            .build()
        )
        await client.set_time(request)

        # Low-level dispatch of any endpoint descriptor
        from hydrus_api.endpoints.access_management import ApiVersion
        version = await client.call(ApiVersion)
"""

from ._version import __version__, __version_info__
from .exceptions import (
    HydrusApiException,
    HydrusApiRequestError,
    HydrusAuthenticationError,
    HydrusInvalidDataError,
    HydrusImportFailedError,
    BuilderConsumedError,
)
from .models import (
    Tag,
    ServiceName,
    PageIdentifier,
    UrlType,
    FileStatus,
)
from .endpoints import Endpoint
from .endpoints.adding_tags import AddTagsRequestBuilder, TagAction
from .endpoints.adding_times import (
    DbTimeRequestType,
    SetTimeRequest,
    SetTimeRequestBuilder,
    TimestampType,
)
from .endpoints.adding_urls import AddUrlRequestBuilder
from .endpoints.searching_and_fetching_files import FileSortType
from .client import HydrusClient
from .file import HydrusFile
from .url import Url, UrlImportBuilder

__all__ = [
    # Version
    '__version__',
    '__version_info__',

    # Main classes
    'HydrusClient',
    'HydrusFile',
    'Url',
    'Endpoint',

    # Builders
    'SetTimeRequestBuilder',
    'SetTimeRequest',
    'AddTagsRequestBuilder',
    'AddUrlRequestBuilder',
    'UrlImportBuilder',

    # Exceptions
    'HydrusApiException',
    'HydrusApiRequestError',
    'HydrusAuthenticationError',
    'HydrusInvalidDataError',
    'HydrusImportFailedError',
    'BuilderConsumedError',

    # Types
    'Tag',
    'ServiceName',
    'PageIdentifier',
    'UrlType',
    'FileStatus',
    'TagAction',
    'TimestampType',
    'DbTimeRequestType',
    'FileSortType',
]
