"""Result envelopes wrapping one request's raw response.

A result holds the undecoded body of a response together with the transport
error, if the request failed. Nothing is decoded until ``extract()`` (or one
of the ``extract_into`` variants) is called, and every call parses the body
again.
"""

from __future__ import annotations

from typing import (
    Any,
    ClassVar,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Type,
    TypeVar,
)

import requests

from ._core._validators import json_type_name
from .decoding import Entity, EntityT, decode, decode_shape, parse_object
from .errors import MalformedPayload, TransportError, TypeMismatch

ShapeT = TypeVar("ShapeT")


class Result:
    """The raw outcome of one request.

    Attributes:
        body: The response body, as received
        headers: The response headers
        status_code: The HTTP status, if a response was received
        url: The URL the request was sent to
        error: The transport error, if the exchange failed
    """

    def __init__(
        self,
        body: bytes = b"",
        headers: Optional[Mapping[str, str]] = None,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        error: Optional[TransportError] = None,
    ) -> None:
        self.body = body
        self.headers: Mapping[str, str] = headers if headers is not None else {}
        self.status_code = status_code
        self.url = url
        self.error = error

    @classmethod
    def from_response(
        cls, response: requests.Response, error: Optional[TransportError] = None
    ) -> "Result":
        return cls(
            body=response.content,
            headers=response.headers,
            status_code=response.status_code,
            url=response.url,
            error=error,
        )

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the transport error, unchanged, if there is one."""
        if self.error is not None:
            raise self.error

    def _payload(self, label: Optional[str] = None) -> Dict[str, Any]:
        self.raise_for_error()
        payload = parse_object(self.body)
        if label is None:
            return payload
        inner = payload.get(label)
        if not isinstance(inner, dict):
            raise MalformedPayload(
                f"expected an object under {label!r}, got {json_type_name(inner)}"
            )
        return inner

    def extract_into(
        self, shape: Type[ShapeT], label: Optional[str] = None
    ) -> ShapeT:
        """Decode the body, or its *label* member, into *shape*.

        Custom properties are never collected on this path, which makes it
        suitable for projections such as pagination metadata.

        Parameters:
            shape: An entity dataclass, or ``dict`` for the parsed object.
            label: Name of a top-level member to decode instead of the body.

        Returns:
            An instance of *shape*.

        Raises:
            TransportError: if the request failed.
            MalformedPayload: if the body (or member) is not a JSON object.
        """
        payload = self._payload(label)
        if shape is dict:
            return payload  # type: ignore[return-value]
        return decode_shape(payload, shape)  # type: ignore[type-var]

    def extract_into_list(self, shape: Type[EntityT], label: str) -> List[EntityT]:
        """Decode the array held in the *label* member, one element at a time.

        A missing or ``null`` member is an empty list. Any element failing to
        decode fails the whole call.

        Raises:
            TransportError: if the request failed.
            TypeMismatch: if the member is not an array.
        """
        self.raise_for_error()
        return decode_list(parse_object(self.body), label, shape)

    def __repr__(self) -> str:
        state = "ok" if self.ok else f"error={self.error!s}"
        return f"{self.__class__.__name__}(status={self.status_code}, {state})"


def decode_list(
    payload: Mapping[str, Any], label: str, entity_cls: Type[EntityT]
) -> List[EntityT]:
    """Decode every element of the ``payload[label]`` array into *entity_cls*."""
    items = payload.get(label)
    if items is None:
        return []
    if not isinstance(items, list):
        raise TypeMismatch(label, json_type_name(items))
    entities = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise TypeMismatch(f"{label}[{index}]", json_type_name(item))
        entities.append(decode(item, entity_cls))
    return entities


class CommonResult(Result, Generic[EntityT]):
    """A result whose body describes one entity.

    Subclasses set ``entity_cls`` and, when the API wraps the entity in a
    named member (``{"volume": {...}}``), ``label``.
    """

    entity_cls: ClassVar[Type[Entity]]
    label: ClassVar[Optional[str]] = None

    def extract(self) -> EntityT:
        """Decode the body into the result's entity, custom properties included.

        Raises:
            TransportError: if the request failed, before any decoding.
            MalformedPayload: if the body is not a JSON object.
            TypeMismatch: if a known field has an unexpected JSON type.
            TimestampParseError: if a timestamp is present but malformed.
        """
        return decode(self._payload(self.label), self.entity_cls)  # type: ignore[return-value]


class ErrResult(Result):
    """A result for operations that return no useful body, such as deletes."""

    def extract_err(self) -> None:
        self.raise_for_error()


class HeaderResult(Result):
    """A result whose useful content is in the response headers.

    No image or volume operation returns one; request it for calls such as
    ``HEAD`` with ``client.request("HEAD", url, result_cls=HeaderResult)``.
    """

    def extract_headers(self) -> Dict[str, str]:
        self.raise_for_error()
        return dict(self.headers)
