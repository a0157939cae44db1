"""Endpoints for looking up, importing and associating URLs."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..helpers import require_field, require_mapping
from ..models import PageIdentifier, UrlType
from ..types import JSONType, UrlFileStatus
from . import Endpoint
from .common import RequestBuilder


@dataclass(frozen=True)
class UrlRequest:
    url: str

    def to_json(self) -> Dict[str, JSONType]:
        return {"url": self.url}


@dataclass
class GetUrlFilesResponse:
    normalised_url: str
    url_file_statuses: List[UrlFileStatus] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JSONType) -> "GetUrlFilesResponse":
        obj = require_mapping(data, "get_url_files response")
        statuses: List[UrlFileStatus] = []
        for entry in require_field(obj, "url_file_statuses", list):
            entry = require_mapping(entry, "url file status")
            statuses.append(UrlFileStatus(
                status=require_field(entry, "status", int),
                hash=require_field(entry, "hash", str),
                note=str(entry.get("note") or ""),
            ))
        return cls(
            normalised_url=require_field(obj, "normalised_url", str),
            url_file_statuses=statuses,
        )


@dataclass
class GetUrlInfoResponse:
    normalised_url: str
    url_type: UrlType
    url_type_string: str
    match_name: str
    can_parse: bool

    @classmethod
    def from_json(cls, data: JSONType) -> "GetUrlInfoResponse":
        obj = require_mapping(data, "get_url_info response")
        return cls(
            normalised_url=require_field(obj, "normalised_url", str),
            url_type=UrlType(require_field(obj, "url_type", int)),
            url_type_string=require_field(obj, "url_type_string", str),
            match_name=require_field(obj, "match_name", str),
            can_parse=bool(require_field(obj, "can_parse")),
        )


@dataclass
class AddUrlRequest:
    url: str
    page: Optional[PageIdentifier] = None
    show_destination_page: bool = False
    service_names_to_additional_tags: Dict[str, List[str]] = field(default_factory=dict)

    def to_json(self) -> Dict[str, JSONType]:
        data: Dict[str, JSONType] = {
            "url": self.url,
            "show_destination_page": self.show_destination_page,
        }
        if self.page is not None:
            data.update(self.page.to_json())
        if self.service_names_to_additional_tags:
            data["service_names_to_additional_tags"] = {
                service: list(tags) for service, tags in self.service_names_to_additional_tags.items()
            }
        return data


@dataclass
class AddUrlResponse:
    human_result_text: str
    normalised_url: str

    @classmethod
    def from_json(cls, data: JSONType) -> "AddUrlResponse":
        obj = require_mapping(data, "add_url response")
        return cls(
            human_result_text=require_field(obj, "human_result_text", str),
            normalised_url=require_field(obj, "normalised_url", str),
        )


class AddUrlRequestBuilder(RequestBuilder[AddUrlRequest]):
    """Fluent builder for AddUrlRequest.

    Example:
        request = (
            AddUrlRequestBuilder()
            .url("https://www.pixiv.net/member_illust.php?illust_id=83406361&mode=medium")
            .page(PageIdentifier.name("Rusty Import"))
            .add_additional_tag(ServiceName.my_tags(), Tag.from_string("character:megumin"))
            .build()
        )
    """

    def __init__(self):
        super().__init__(AddUrlRequest(url=""))

    def url(self, url: str) -> "AddUrlRequestBuilder":
        self._current().url = str(url)
        return self

    def page(self, page: PageIdentifier) -> "AddUrlRequestBuilder":
        self._current().page = page
        return self

    def show_page(self, show: bool) -> "AddUrlRequestBuilder":
        self._current().show_destination_page = show
        return self

    def add_additional_tag(self, service, tag) -> "AddUrlRequestBuilder":
        tags = self._current().service_names_to_additional_tags.setdefault(str(service), [])
        tags.append(str(tag))
        return self

    def add_additional_tags(self, service, tags: Iterable) -> "AddUrlRequestBuilder":
        for tag in tags:
            self.add_additional_tag(service, tag)
        return self

    def build(self) -> AddUrlRequest:
        request = self._current()
        if not request.url:
            raise ValueError("AddUrlRequestBuilder needs a url before build()")
        return self._consume()


@dataclass
class AssociateUrlRequest:
    hashes: List[str]
    urls_to_add: List[str] = field(default_factory=list)
    urls_to_delete: List[str] = field(default_factory=list)

    def to_json(self) -> Dict[str, JSONType]:
        data: Dict[str, JSONType] = {"hashes": list(self.hashes)}
        if self.urls_to_add:
            data["urls_to_add"] = list(self.urls_to_add)
        if self.urls_to_delete:
            data["urls_to_delete"] = list(self.urls_to_delete)
        return data


class GetUrlFiles(Endpoint):
    path = "add_urls/get_url_files"
    method = "GET"
    response_model = GetUrlFilesResponse


class GetUrlInfo(Endpoint):
    path = "add_urls/get_url_info"
    method = "GET"
    response_model = GetUrlInfoResponse


class AddUrl(Endpoint):
    path = "add_urls/add_url"
    method = "POST"
    response_model = AddUrlResponse


class AssociateUrl(Endpoint):
    path = "add_urls/associate_url"
    method = "POST"
    response_model = None
