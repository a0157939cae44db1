"""Endpoints for listing and focusing the client's pages."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from ..helpers import require_field, require_mapping
from ..types import JSONType
from . import Endpoint


@dataclass
class PageInformation:
    name: str
    page_key: str
    page_type: int
    selected: bool = False
    is_media_page: bool = False
    pages: List["PageInformation"] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: JSONType) -> "PageInformation":
        obj = require_mapping(data, "page")
        return cls(
            name=require_field(obj, "name", str),
            page_key=require_field(obj, "page_key", str),
            page_type=require_field(obj, "page_type", int),
            selected=bool(obj.get("selected", False)),
            is_media_page=bool(obj.get("is_media_page", False)),
            pages=[cls.from_json(child) for child in obj.get("pages") or []],
        )

    def walk(self) -> Iterator["PageInformation"]:
        """Yield this page and all nested pages, depth first."""
        yield self
        for child in self.pages:
            yield from child.walk()

    def find_by_name(self, name: str) -> Optional["PageInformation"]:
        for page in self.walk():
            if page.name == name:
                return page
        return None


@dataclass
class GetPagesResponse:
    pages: PageInformation

    @classmethod
    def from_json(cls, data: JSONType) -> "GetPagesResponse":
        obj = require_mapping(data, "get_pages response")
        return cls(pages=PageInformation.from_json(require_field(obj, "pages")))


@dataclass(frozen=True)
class FocusPageRequest:
    page_key: str

    def to_json(self) -> Dict[str, JSONType]:
        return {"page_key": self.page_key}


class GetPages(Endpoint):
    path = "manage_pages/get_pages"
    method = "GET"
    response_model = GetPagesResponse


class FocusPage(Endpoint):
    path = "manage_pages/focus_page"
    method = "POST"
    response_model = None
