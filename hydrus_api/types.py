"""Shared typing helpers used across the hydrus_api package.

This module centralizes JSON-like typings and commonly used typed dictionaries so
other modules in the package can import concrete types rather than using
unstructured Any in many places.
"""
from __future__ import annotations

from typing import Dict, List, Union, TypedDict


# Recursive JSON-ish type used for payloads / returned JSON values
JSONType = Union[Dict[str, "JSONType"], List["JSONType"], str, int, float, bool, None]

# A serialized request body: a JSON object, raw file bytes, or nothing at all
Payload = Union[Dict[str, JSONType], bytes, None]


class ServiceInfo(TypedDict):
    name: str
    service_key: str


class UrlFileStatus(TypedDict):
    """One entry of the url_file_statuses list returned by get_url_files."""
    status: int
    hash: str
    note: str
