"""Endpoint descriptors for the Hydrus client API.

Every remote endpoint is described by a subclass of :class:`Endpoint` that
declares its relative path, HTTP method and response model. The descriptor is
all HydrusClient.call() needs; adding an endpoint never requires new dispatch
code.

Example:
    class ApiVersion(Endpoint):
        path = "api_version"
        method = "GET"
        response_model = ApiVersionResponse

    version = await client.call(ApiVersion)
"""
from __future__ import annotations

from typing import Any, ClassVar, Optional, Protocol, Type

from ..types import JSONType, Payload


class JsonRequest(Protocol):
    def to_json(self) -> Payload:
        ...


class JsonResponse(Protocol):
    @classmethod
    def from_json(cls, data: JSONType) -> Any:
        ...


class Endpoint:
    """Static description of one remote endpoint.

    Attributes:
        path: Path relative to the client base URL, e.g. ``edit_times/set_time``
        method: ``GET`` sends the payload as query parameters, ``POST`` as body
        response_model: Class with a ``from_json`` classmethod, or None when
            the endpoint returns nothing of interest
    """

    path: ClassVar[str]
    method: ClassVar[str] = "POST"
    response_model: ClassVar[Optional[Type[JsonResponse]]] = None

    @classmethod
    def serialize(cls, request: Optional[JsonRequest]) -> Payload:
        if request is None:
            return None
        return request.to_json()

    @classmethod
    def parse_response(cls, data: JSONType) -> Any:
        if cls.response_model is None:
            return None
        return cls.response_model.from_json(data)

    @classmethod
    def expects_body(cls) -> bool:
        return cls.response_model is not None


__all__ = ["Endpoint", "JsonRequest", "JsonResponse"]
