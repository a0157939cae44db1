"""High-level url handle for the Hydrus client API.

This module provides the Url class, the url counterpart of HydrusFile, and
UrlImportBuilder, which sends a url to the client's downloader and returns a
Url for it.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List

from .endpoints.adding_urls import AddUrlRequestBuilder, GetUrlInfoResponse
from .file import HydrusFile
from .models import PageIdentifier, ServiceName, Tag, UrlType

if TYPE_CHECKING:
    from .client import HydrusClient

log = logging.getLogger(__name__)


class Url:
    """Handle to one url and what the Hydrus client knows about it.

    Example:
        url = await client.url("https://www.pixiv.net/member_illust.php?illust_id=83406361")
        if url.url_type is UrlType.POST:
            await url.import_().page(PageIdentifier.name("Imports")).run()
    """

    def __init__(self, client: "HydrusClient", url: str, normalised_url: str,
                 url_type: UrlType = UrlType.UNKNOWN, url_type_string: str = "",
                 match_name: str = "", can_parse: bool = False):
        self.client = client
        self.url = url
        self.normalised_url = normalised_url
        self.url_type = url_type
        self.url_type_string = url_type_string
        self.match_name = match_name
        self.can_parse = can_parse

    @classmethod
    def from_info(cls, client: "HydrusClient", url: str, info: GetUrlInfoResponse) -> "Url":
        return cls(
            client,
            url,
            normalised_url=info.normalised_url,
            url_type=info.url_type,
            url_type_string=info.url_type_string,
            match_name=info.match_name,
            can_parse=info.can_parse,
        )

    def import_(self) -> "UrlImportBuilder":
        """Start an import of this url. Configure the builder, then await run()."""
        return UrlImportBuilder(self.client, self.url)

    async def files(self) -> List[HydrusFile]:
        """Return handles to the files the client associates with this url."""
        response = await self.client.get_url_files(self.url)
        return [
            HydrusFile.from_raw_status_and_hash(self.client, entry["status"], entry["hash"])
            for entry in response.url_file_statuses
        ]

    async def associate(self, files: Iterable[HydrusFile]) -> None:
        hashes = [await f.hash() for f in files]
        await self.client.associate_urls([self.url], hashes)

    async def disassociate(self, files: Iterable[HydrusFile]) -> None:
        hashes = [await f.hash() for f in files]
        await self.client.disassociate_urls([self.url], hashes)

    def __repr__(self) -> str:
        return f"Url({self.normalised_url!r}, type={self.url_type.name})"


class UrlImportBuilder:
    """Import of one url through the client's downloader.

    Wraps AddUrlRequestBuilder, so it can only be run once.
    """

    def __init__(self, client: "HydrusClient", url: str):
        self.client = client
        self._builder = AddUrlRequestBuilder().url(url)

    def page(self, page: PageIdentifier) -> "UrlImportBuilder":
        self._builder.page(page)
        return self

    def show_page(self, show: bool) -> "UrlImportBuilder":
        self._builder.show_page(show)
        return self

    def add_additional_tag(self, service: ServiceName, tag: Tag) -> "UrlImportBuilder":
        self._builder.add_additional_tag(service, tag)
        return self

    def add_additional_tags(self, service: ServiceName, tags: Iterable[Tag]) -> "UrlImportBuilder":
        self._builder.add_additional_tags(service, tags)
        return self

    async def run(self) -> Url:
        """Send the url to the client and return a handle describing it.

        Raises:
            BuilderConsumedError: If run() was already called
            HydrusApiRequestError: If the client rejects the url
        """
        request = self._builder.build()
        response = await self.client.add_url(request)
        log.info(f"Url import queued: {response.human_result_text}")
        info = await self.client.get_url_info(request.url)
        return Url.from_info(self.client, request.url, info)
