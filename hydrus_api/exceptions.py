"""Exception classes for the hydrus_api package.

This module defines custom exceptions used throughout the hydrus_api package
for better error handling and debugging.
"""
from typing import Optional


class HydrusApiException(Exception):
    """Base exception for all Hydrus API errors.

    This is the base class for all exceptions raised by the hydrus_api package.
    Catching this exception will catch all hydrus_api-specific errors.
    """
    pass


class HydrusApiRequestError(HydrusApiException):
    """Raised when an API request to the Hydrus client fails.

    This can occur due to:
    - Network connectivity issues
    - Server errors (5xx status codes)
    - Rejected requests (4xx status codes, e.g. unknown hashes)

    Attributes:
        status: HTTP status code, or None if no response was received
        body: Response body text returned alongside the failing status
    """

    def __init__(self, message: str, status: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.body = body


class HydrusAuthenticationError(HydrusApiRequestError):
    """Raised when the Hydrus client rejects the access key.

    This can occur due to:
    - Missing or unknown access key
    - Access key lacking the permission required by the endpoint
    """
    pass


class HydrusInvalidDataError(HydrusApiException):
    """Raised when a response body does not match the expected shape.

    Distinguishes "the server answered unexpectedly" from transport failures.
    """
    pass


class HydrusImportFailedError(HydrusApiException):
    """Raised when a file import is reported as failed or vetoed."""

    def __init__(self, message: str, status: int, note: str = ""):
        super().__init__(message)
        self.status = status
        self.note = note


class BuilderConsumedError(HydrusApiException):
    """Raised when a request builder is used after build() was called."""
    pass
