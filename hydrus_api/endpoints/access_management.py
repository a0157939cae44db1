"""Endpoints for checking the API version, access key and available services."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..helpers import require_field, require_mapping
from ..models import ServiceName
from ..types import JSONType, ServiceInfo
from . import Endpoint


@dataclass
class ApiVersionResponse:
    version: int
    hydrus_version: int

    @classmethod
    def from_json(cls, data: JSONType) -> "ApiVersionResponse":
        obj = require_mapping(data, "api_version response")
        return cls(
            version=require_field(obj, "version", int),
            hydrus_version=require_field(obj, "hydrus_version", int),
        )


@dataclass
class VerifyAccessKeyResponse:
    basic_permissions: List[int]
    human_description: str

    @classmethod
    def from_json(cls, data: JSONType) -> "VerifyAccessKeyResponse":
        obj = require_mapping(data, "verify_access_key response")
        return cls(
            basic_permissions=list(require_field(obj, "basic_permissions", list)),
            human_description=require_field(obj, "human_description", str),
        )


@dataclass
class GetServicesResponse:
    """Services grouped by category, e.g. ``local_tags`` or ``all_known_files``."""
    services: Dict[str, List[ServiceInfo]] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: JSONType) -> "GetServicesResponse":
        obj = require_mapping(data, "get_services response")
        services: Dict[str, List[ServiceInfo]] = {}
        for category, entries in obj.items():
            # newer clients add non-list keys such as "version"; only lists are service groups
            if not isinstance(entries, list):
                continue
            parsed: List[ServiceInfo] = []
            for entry in entries:
                entry = require_mapping(entry, f"service entry in {category}")
                parsed.append(ServiceInfo(
                    name=require_field(entry, "name", str),
                    service_key=require_field(entry, "service_key", str),
                ))
            services[category] = parsed
        return cls(services=services)

    def key_for(self, service: ServiceName) -> Optional[str]:
        """Return the service key for a service name, or None if unknown."""
        for entries in self.services.values():
            for entry in entries:
                if entry["name"] == service.name:
                    return entry["service_key"]
        return None


class ApiVersion(Endpoint):
    path = "api_version"
    method = "GET"
    response_model = ApiVersionResponse


class VerifyAccessKey(Endpoint):
    path = "verify_access_key"
    method = "GET"
    response_model = VerifyAccessKeyResponse


class GetServices(Endpoint):
    path = "get_services"
    method = "GET"
    response_model = GetServicesResponse
