"""Value objects shared by the endpoint definitions and the high-level API.

These are plain data holders: tags, service names, page identifiers and the
small enums the Hydrus client uses for file and URL states.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Optional


@dataclass(frozen=True)
class Tag:
    """A (possibly namespaced) tag such as ``character:megumin``."""
    name: str
    namespace: Optional[str] = None

    @classmethod
    def from_string(cls, value: str) -> "Tag":
        """Split a tag string on the first ':' into namespace and name.

        A leading ':' (e.g. ``:)``) is part of the name, not an empty namespace.
        """
        namespace, sep, name = value.partition(":")
        if sep and namespace:
            return cls(name=name, namespace=namespace)
        return cls(name=value)

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.namespace}:{self.name}"
        return self.name


@dataclass(frozen=True)
class ServiceName:
    """Human readable name of a Hydrus service."""
    name: str

    @classmethod
    def my_tags(cls) -> "ServiceName":
        return cls("my tags")

    @classmethod
    def all_known_tags(cls) -> "ServiceName":
        return cls("all known tags")

    @classmethod
    def my_files(cls) -> "ServiceName":
        return cls("my files")

    @classmethod
    def all_local_files(cls) -> "ServiceName":
        return cls("all local files")

    @classmethod
    def public_tag_repository(cls) -> "ServiceName":
        return cls("public tag repository")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PageIdentifier:
    """Identifies a client page either by its name or by its page key."""
    value: str
    is_key: bool = False

    @classmethod
    def name(cls, name: str) -> "PageIdentifier":
        return cls(value=name)

    @classmethod
    def key(cls, key: str) -> "PageIdentifier":
        return cls(value=key, is_key=True)

    def to_json(self) -> Dict[str, str]:
        if self.is_key:
            return {"destination_page_key": self.value}
        return {"destination_page_name": self.value}

    def __str__(self) -> str:
        return self.value


class UrlType(IntEnum):
    """URL classes as reported by add_urls/get_url_info."""
    POST = 0
    FILE = 2
    GALLERY = 3
    WATCHABLE = 4
    UNKNOWN = 5


class FileStatus(Enum):
    READY_FOR_IMPORT = "ready_for_import"
    IN_DATABASE = "in_database"
    DELETED = "deleted"
    UNKNOWN = "unknown"
