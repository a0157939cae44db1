"""Endpoints for adding, removing and normalising tags."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterable, List

from ..helpers import require_field, require_mapping
from ..types import JSONType
from . import Endpoint
from .common import RequestBuilder


class TagAction(IntEnum):
    ADD_TO_LOCAL_TAGS = 0
    DELETE_FROM_LOCAL_TAGS = 1
    PEND_ADD_TO_REMOTE_TAGS = 2
    RESCIND_PEND_FROM_REMOTE_TAGS = 3
    PETITION_DELETE_FROM_REMOTE_TAGS = 4
    RESCIND_PETITION_FROM_REMOTE_TAGS = 5


@dataclass
class AddTagsRequest:
    hashes: List[str] = field(default_factory=list)
    service_names_to_tags: Dict[str, List[str]] = field(default_factory=dict)
    # service name -> action code (as string, the way the client expects it) -> tags
    service_names_to_actions_to_tags: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)

    def to_json(self) -> Dict[str, JSONType]:
        data: Dict[str, JSONType] = {"hashes": list(self.hashes)}
        if self.service_names_to_tags:
            data["service_names_to_tags"] = {
                service: list(tags) for service, tags in self.service_names_to_tags.items()
            }
        if self.service_names_to_actions_to_tags:
            data["service_names_to_actions_to_tags"] = {
                service: {action: list(tags) for action, tags in actions.items()}
                for service, actions in self.service_names_to_actions_to_tags.items()
            }
        return data


class AddTagsRequestBuilder(RequestBuilder[AddTagsRequest]):
    """Fluent builder for AddTagsRequest.

    Example:
        request = (
            AddTagsRequestBuilder()
            .add_hash(file_hash)
            .add_tags("my tags", ["character:megumin", "ark mage"])
            .build()
        )
    """

    def __init__(self):
        super().__init__(AddTagsRequest())

    def add_hash(self, file_hash: str) -> "AddTagsRequestBuilder":
        self._current().hashes.append(str(file_hash))
        return self

    def add_hashes(self, hashes: Iterable[str]) -> "AddTagsRequestBuilder":
        self._current().hashes.extend(str(h) for h in hashes)
        return self

    def add_tag(self, service_name: str, tag: str) -> "AddTagsRequestBuilder":
        """Adds a tag to be added for the given service."""
        return self.add_tags(service_name, [tag])

    def add_tags(self, service_name: str, tags: Iterable[str]) -> "AddTagsRequestBuilder":
        """Adds several tags to be added for the given service."""
        mapping = self._current().service_names_to_tags
        mapping.setdefault(str(service_name), []).extend(str(t) for t in tags)
        return self

    def add_tag_with_action(self, service_name: str, tag: str, action: TagAction) -> "AddTagsRequestBuilder":
        """Adds a tag with an explicit action (delete, pend, petition, ...)."""
        actions = self._current().service_names_to_actions_to_tags.setdefault(str(service_name), {})
        actions.setdefault(str(int(action)), []).append(str(tag))
        return self

    def build(self) -> AddTagsRequest:
        return self._consume()


@dataclass(frozen=True)
class CleanTagsRequest:
    tags: List[str]

    def to_json(self) -> Dict[str, JSONType]:
        return {"tags": list(self.tags)}


@dataclass
class CleanTagsResponse:
    tags: List[str]

    @classmethod
    def from_json(cls, data: JSONType) -> "CleanTagsResponse":
        obj = require_mapping(data, "clean_tags response")
        return cls(tags=[str(t) for t in require_field(obj, "tags", list)])


class AddTags(Endpoint):
    path = "add_tags/add_tags"
    method = "POST"
    response_model = None


class CleanTags(Endpoint):
    path = "add_tags/clean_tags"
    method = "GET"
    response_model = CleanTagsResponse
