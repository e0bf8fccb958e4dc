"""Exception types raised while decoding and paging API responses."""

from __future__ import annotations

from typing import Any, Optional


class StackResultsError(Exception):
    """Base class for every error raised by stackresults."""


class TransportError(StackResultsError):
    """Raised when the HTTP exchange failed or returned an unexpected status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        body: Optional[bytes] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
        self.body = body


class MalformedPayload(StackResultsError, ValueError):
    """Raised when a body is not valid JSON or not an object where one is required."""


class TypeMismatch(StackResultsError, TypeError):
    """Raised when a known field holds a JSON type outside its accepted set."""

    def __init__(self, field: str, observed_type: str):
        super().__init__(f"unexpected JSON type for {field!r}: {observed_type}")
        self.field = field
        self.observed_type = observed_type


class TimestampParseError(StackResultsError, ValueError):
    """Raised when a timestamp field is present but cannot be parsed."""

    def __init__(self, field: str, raw_value: Any):
        super().__init__(f"cannot parse timestamp {field!r}: {raw_value!r}")
        self.field = field
        self.raw_value = raw_value


class MissingPaginationMetadata(StackResultsError):
    """Raised when the next-link structure of a page is malformed."""
