"""Helper functions for the hydrus_api package.

This module contains utility functions used across the hydrus_api package,
including query-string encoding, timestamp conversion and the small field
accessors used when parsing server responses.
"""

import json
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional


def encode_query_params(payload: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Convert a request payload into Hydrus-style query parameters.

    The Hydrus client expects list and object arguments of GET endpoints to be
    JSON-encoded inside the query string, and booleans as lowercase literals.
    None values are dropped.

    Args:
        payload: Request payload produced by a request's to_json()

    Returns:
        Mapping of parameter names to string values

    Example:
        >>> encode_query_params({"hashes": ["ab"], "only_return_identifiers": True})
        {'hashes': '["ab"]', 'only_return_identifiers': 'true'}
    """
    params: Dict[str, str] = {}
    if not payload:
        return params
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple, dict)):
            params[key] = json.dumps(list(value) if isinstance(value, tuple) else value)
        else:
            params[key] = str(value)
    return params


def timestamp_to_string(value: Any) -> Optional[str]:
    """Stringify a timestamp value for the timestamp_ms field.

    Args:
        value: None, a datetime, or anything convertible with str()

    Returns:
        None when value is None, integer milliseconds since the epoch for
        datetimes, str(value) otherwise

    Example:
        >>> timestamp_to_string(1000)
        '1000'
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return str(int(value.timestamp() * 1000))
    return str(value)


def tag_list_to_string_list(tags: Iterable[Any]) -> List[str]:
    """Convert Tag objects (or plain strings) into their wire strings."""
    return [str(tag) for tag in tags]


def require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    """Ensure a response body is a JSON object.

    Raises:
        TypeError: If data is not a mapping
    """
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def require_field(data: Mapping[str, Any], key: str, expected_type: Any = None) -> Any:
    """Return data[key], raising ValueError if it is missing or mistyped.

    JSON booleans never satisfy an ``int`` expectation, even though bool is a
    subclass of int in Python.
    """
    if key not in data:
        raise ValueError(f"Missing required field '{key}'")
    value = data[key]
    mistyped = expected_type is not None and not isinstance(value, expected_type)
    if expected_type is int and isinstance(value, bool):
        mistyped = True
    if mistyped:
        raise ValueError(
            f"Field '{key}' has type {type(value).__name__}, expected {expected_type}"
        )
    return value
