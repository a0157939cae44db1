"""Requests for editing file timestamps (``edit_times/set_time``).

A set_time request comes in five shapes. Each shape is a variant class below;
together they form the closed set ``SetTimeVariant``. On the wire every
request is one flat object holding the ``timestamp_type`` code next to the
variant's own fields.

Example:
    request = (
        SetTimeRequestBuilder.for_last_viewed_time(canvas_type=2)
        .add_hash("abc")
        .set_timestamp(1000)
        .build()
    )
    request.to_json()
    # {"timestamp_type": 6, "hashes": ["abc"], "timestamp_ms": "1000", "canvas_type": 2}
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from ..helpers import timestamp_to_string
from ..types import JSONType
from . import Endpoint
from .common import RequestBuilder

log = logging.getLogger(__name__)


class TimestampType(IntEnum):
    """Wire codes for the kinds of timestamps a file carries.

    There is no code 2; the Hydrus client does not accept it here.
    """
    WEB_DOMAIN = 0
    FILE_MODIFIED_TIME = 1
    FILE_IMPORTED_TIME = 3
    FILE_DELETED_TIME = 4
    ARCHIVED_TIME = 5
    LAST_VIEWED = 6
    FILE_ORIGINALLY_IMPORTED_TIME = 7


class DbTimeRequestType(Enum):
    """Database event times that can be set per file service."""
    FILE_IMPORTED_TIME = "FileImportedTime"
    FILE_DELETED_TIME = "FileDeletedTime"
    FILE_ORIGINALLY_IMPORTED_TIME = "FileOriginallyImportedTime"


_DB_TIMESTAMP_TYPES = {
    DbTimeRequestType.FILE_IMPORTED_TIME: TimestampType.FILE_IMPORTED_TIME,
    DbTimeRequestType.FILE_DELETED_TIME: TimestampType.FILE_DELETED_TIME,
    DbTimeRequestType.FILE_ORIGINALLY_IMPORTED_TIME: TimestampType.FILE_ORIGINALLY_IMPORTED_TIME,
}


class _TimeVariantMixin:
    """Behaviour shared by every variant: a tuple of hashes and an optional timestamp.

    Variants are frozen. add_hashes() and set_timestamp() return an updated
    copy and leave the original untouched.
    """

    hashes: Tuple[str, ...]
    timestamp_ms: Optional[str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "hashes", tuple(self.hashes))

    def add_hashes(self, new_hashes: Iterable[str]):
        return replace(self, hashes=self.hashes + tuple(new_hashes))

    def set_timestamp(self, timestamp_ms: Optional[str]):
        return replace(self, timestamp_ms=timestamp_ms)

    def _extra_fields(self) -> Dict[str, JSONType]:
        return {}

    def to_json(self) -> Dict[str, JSONType]:
        data: Dict[str, JSONType] = {"hashes": list(self.hashes)}
        # an unset timestamp is left out entirely, never sent as null
        if self.timestamp_ms is not None:
            data["timestamp_ms"] = self.timestamp_ms
        data.update(self._extra_fields())
        return data


@dataclass(frozen=True)
class WebDomainTime(_TimeVariantMixin):
    """Last time the files were visited on a web domain."""
    domain: str
    hashes: Tuple[str, ...] = ()
    timestamp_ms: Optional[str] = None

    def _extra_fields(self) -> Dict[str, JSONType]:
        return {"domain": self.domain}


@dataclass(frozen=True)
class DiskTime(_TimeVariantMixin):
    """File modified time on disk."""
    hashes: Tuple[str, ...] = ()
    timestamp_ms: Optional[str] = None


@dataclass(frozen=True)
class DbTime(_TimeVariantMixin):
    """Import, deletion or original import time within one file service."""
    request_type: DbTimeRequestType
    file_service_key: str
    hashes: Tuple[str, ...] = ()
    timestamp_ms: Optional[str] = None

    def _extra_fields(self) -> Dict[str, JSONType]:
        return {"file_service_key": self.file_service_key}


@dataclass(frozen=True)
class ArchivedTime(_TimeVariantMixin):
    """Time the files were archived."""
    hashes: Tuple[str, ...] = ()
    timestamp_ms: Optional[str] = None


@dataclass(frozen=True)
class LastViewedTime(_TimeVariantMixin):
    """Last time the files were viewed on a given canvas type."""
    canvas_type: int
    hashes: Tuple[str, ...] = ()
    timestamp_ms: Optional[str] = None

    def _extra_fields(self) -> Dict[str, JSONType]:
        return {"canvas_type": self.canvas_type}


SetTimeVariant = Union[WebDomainTime, DiskTime, DbTime, ArchivedTime, LastViewedTime]


def timestamp_type_of(request: SetTimeVariant) -> TimestampType:
    """Return the wire code that must accompany a variant.

    Raises:
        TypeError: If request is not one of the SetTimeVariant classes
    """
    if isinstance(request, WebDomainTime):
        return TimestampType.WEB_DOMAIN
    if isinstance(request, DiskTime):
        return TimestampType.FILE_MODIFIED_TIME
    if isinstance(request, DbTime):
        return _DB_TIMESTAMP_TYPES[request.request_type]
    if isinstance(request, ArchivedTime):
        return TimestampType.ARCHIVED_TIME
    if isinstance(request, LastViewedTime):
        return TimestampType.LAST_VIEWED
    raise TypeError(f"Not a set_time request variant: {type(request).__name__}")


@dataclass(frozen=True)
class SetTimeRequest:
    """A finished set_time request, ready to be passed to SetTime.

    The request and the variant it wraps are both frozen, so the body and the
    timestamp_type code cannot drift apart after build().
    """
    timestamp_type: TimestampType
    request: SetTimeVariant

    @classmethod
    def from_variant(cls, request: SetTimeVariant) -> "SetTimeRequest":
        return cls(timestamp_type=timestamp_type_of(request), request=request)

    @property
    def hashes(self) -> Tuple[str, ...]:
        return self.request.hashes

    @property
    def timestamp_ms(self) -> Optional[str]:
        return self.request.timestamp_ms

    def to_json(self) -> Dict[str, JSONType]:
        data: Dict[str, JSONType] = {"timestamp_type": int(self.timestamp_type)}
        data.update(self.request.to_json())
        return data


class SetTimeRequestBuilder(RequestBuilder[SetTimeVariant]):
    """Fluent builder for SetTimeRequest.

    Pick the kind of timestamp with one of the ``for_*`` constructors, add
    hashes and a timestamp in any order, then call build(). The builder is
    spent after build(); any further call raises BuilderConsumedError.
    """

    @classmethod
    def for_web_domain(cls, domain: Any) -> "SetTimeRequestBuilder":
        return cls(WebDomainTime(domain=str(domain)))

    @classmethod
    def for_disk_time(cls) -> "SetTimeRequestBuilder":
        return cls(DiskTime())

    @classmethod
    def for_db_time(cls, request_type: DbTimeRequestType, file_service_key: Any) -> "SetTimeRequestBuilder":
        return cls(DbTime(request_type=request_type, file_service_key=str(file_service_key)))

    @classmethod
    def for_archived_time(cls) -> "SetTimeRequestBuilder":
        return cls(ArchivedTime())

    @classmethod
    def for_last_viewed_time(cls, canvas_type: int) -> "SetTimeRequestBuilder":
        return cls(LastViewedTime(canvas_type=canvas_type))

    def add_hash(self, file_hash: str) -> "SetTimeRequestBuilder":
        """Adds a file hash to the request."""
        self._state = self._current().add_hashes([str(file_hash)])
        return self

    def add_hashes(self, hashes: Iterable[str]) -> "SetTimeRequestBuilder":
        """Adds multiple file hashes to the request."""
        self._state = self._current().add_hashes(str(h) for h in hashes)
        return self

    def set_timestamp(self, timestamp_ms: Any) -> "SetTimeRequestBuilder":
        """Sets the timestamp in milliseconds, or clears it when given None.

        Datetimes are converted to milliseconds since the epoch; anything else
        is sent as str(timestamp_ms).
        """
        self._state = self._current().set_timestamp(timestamp_to_string(timestamp_ms))
        return self

    def build(self) -> SetTimeRequest:
        request = SetTimeRequest.from_variant(self._consume())
        log.debug(
            f"Built set_time request type={request.timestamp_type.name} "
            f"hashes={len(request.hashes)}"
        )
        return request


class SetTime(Endpoint):
    path = "edit_times/set_time"
    method = "POST"
    response_model = None


__all__ = [
    "TimestampType",
    "DbTimeRequestType",
    "WebDomainTime",
    "DiskTime",
    "DbTime",
    "ArchivedTime",
    "LastViewedTime",
    "SetTimeVariant",
    "timestamp_type_of",
    "SetTimeRequest",
    "SetTimeRequestBuilder",
    "SetTime",
]
