"""Decode raw JSON bodies into typed entity dataclasses.

Entities are plain dataclasses whose fields are declared with :func:`wire`,
which records the field's name on the wire and the :class:`Kind` used to
decode it. The set of wire names an entity models (its known fields) is
derived once per class from those declarations.

Some APIs put caller-defined key/value pairs at the top level of a resource
object instead of grouping them under a sub-object. Entities that name a
``__property_map__`` attribute collect every top-level string value that is
not a known field into that attribute.

Example:
    >>> @dataclass
    ... class Server(Entity):
    ...     id: str = wire("id")
    ...     size: int = wire("size", Integer())
    >>> decode(b'{"id": "abc", "size": 10.0}', Server)
    Server(id='abc', size=10)
"""

from __future__ import annotations

import dataclasses
import json
import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import cache
from typing import (
    Any,
    ClassVar,
    Dict,
    FrozenSet,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from typing_extensions import Self, TypeAlias

from ._core._validators import json_type_name
from .errors import MalformedPayload, TimestampParseError, TypeMismatch

logger = logging.getLogger(__name__)

RawBody: TypeAlias = Union[bytes, bytearray, str, Mapping[str, Any]]
"""A JSON body as received, or an object already parsed from one."""

EntityT = TypeVar("EntityT", bound="Entity")

RFC3339 = "2006-01-02T15:04:05Z07:00"
"""Timestamp layout with a mandatory zone (``Z`` or ``+07:00``)."""

RFC3339_MILLI_NO_Z = "2006-01-02T15:04:05.999999"
"""Timestamp layout without a zone; values are taken to be UTC."""

_STRPTIME_FORMATS: Dict[str, Tuple[str, ...]] = {
    RFC3339: ("%Y-%m-%dT%H:%M:%S%z", "%Y-%m-%dT%H:%M:%S.%f%z"),
    RFC3339_MILLI_NO_Z: ("%Y-%m-%dT%H:%M:%S.%f", "%Y-%m-%dT%H:%M:%S"),
}

# exact wire shapes; strptime alone also takes unpadded fields and +0200 offsets
_LAYOUT_SHAPES: Dict[str, "re.Pattern[str]"] = {
    RFC3339: re.compile(
        r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})"
    ),
    RFC3339_MILLI_NO_Z: re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?"),
}

# strptime's %f takes at most six digits
_LONG_FRACTION = re.compile(r"(\.\d{6})\d+")


def parse_object(raw_body: RawBody) -> Dict[str, Any]:
    """Parse a raw body that must hold a JSON object.

    Parameters:
        raw_body: Bytes or text of a JSON document, or an already parsed mapping.

    Returns:
        A new dictionary with the object's members.

    Raises:
        MalformedPayload: if the body is not valid JSON or not an object.
    """
    if isinstance(raw_body, Mapping):
        return dict(raw_body)
    try:
        payload = json.loads(raw_body)
    except (TypeError, ValueError) as exc:
        raise MalformedPayload(f"body is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedPayload(
            f"expected a JSON object, got {json_type_name(payload)}"
        )
    return payload


def parse_timestamp(field: str, value: str, layout: str) -> datetime:
    """Parse *value* with one of the RFC3339-family layouts."""
    if not _LAYOUT_SHAPES[layout].fullmatch(value):
        raise TimestampParseError(field, value)
    text = _LONG_FRACTION.sub(r"\1", value)
    for fmt in _STRPTIME_FORMATS[layout]:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    raise TimestampParseError(field, value)


def format_timestamp(value: datetime, layout: str) -> str:
    """Format *value* back into its wire layout."""
    if layout == RFC3339_MILLI_NO_Z:
        return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")
    text = value.isoformat()
    if value.utcoffset() is not None and not value.utcoffset():
        text = text[: -len("+00:00")] + "Z"
    return text


# =============================================================================
# Field kinds
# =============================================================================


class Kind:
    """How one field is decoded from, and encoded back to, its wire value."""

    json_types: ClassVar[Tuple[type, ...]] = ()

    def zero(self) -> Any:
        return None

    def check(self, field: str, value: Any) -> Any:
        # bool is an int subclass, never accept it where a number is expected
        if isinstance(value, bool) and bool not in self.json_types:
            raise TypeMismatch(field, "boolean")
        if not isinstance(value, self.json_types):
            raise TypeMismatch(field, json_type_name(value))
        return value

    def decode(self, field: str, value: Any) -> Any:
        return self.check(field, value)

    def encode(self, value: Any) -> Any:
        return value


class String(Kind):
    json_types = (str,)

    def zero(self) -> str:
        return ""


class Boolean(Kind):
    json_types = (bool,)

    def zero(self) -> bool:
        return False


class Integer(Kind):
    """An integer that may arrive as a JSON integer or floating-point number.

    Floating-point values are truncated toward zero.
    """

    json_types = (int, float)

    def zero(self) -> int:
        return 0

    def decode(self, field: str, value: Any) -> int:
        value = self.check(field, value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise TypeMismatch(field, f"non-finite number {value!r}")
            return int(value)
        return value


class Timestamp(Kind):
    """An RFC3339-family timestamp parsed with a fixed layout.

    An empty string is a zero value only for ``RFC3339_MILLI_NO_Z``.
    """

    json_types = (str,)

    def __init__(self, layout: str = RFC3339):
        if layout not in _STRPTIME_FORMATS:
            raise ValueError(f"unknown timestamp layout: {layout!r}")
        self.layout = layout

    def decode(self, field: str, value: Any) -> Optional[datetime]:
        value = self.check(field, value)
        if value == "" and self.layout == RFC3339_MILLI_NO_Z:
            return None
        return parse_timestamp(field, value, self.layout)

    def encode(self, value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        return format_timestamp(value, self.layout)


class StringList(Kind):
    json_types = (list,)

    def zero(self) -> List[str]:
        return []

    def decode(self, field: str, value: Any) -> List[str]:
        items = self.check(field, value)
        for index, item in enumerate(items):
            if not isinstance(item, str):
                raise TypeMismatch(f"{field}[{index}]", json_type_name(item))
        return list(items)

    def encode(self, value: List[str]) -> List[str]:
        return list(value)


class StringMap(Kind):
    json_types = (dict,)

    def zero(self) -> Dict[str, str]:
        return {}

    def decode(self, field: str, value: Any) -> Dict[str, str]:
        members = self.check(field, value)
        for key, item in members.items():
            if not isinstance(item, str):
                raise TypeMismatch(f"{field}.{key}", json_type_name(item))
        return dict(members)

    def encode(self, value: Dict[str, str]) -> Dict[str, str]:
        return dict(value)


class AnyMap(Kind):
    """A JSON object kept as parsed, with arbitrary member values."""

    json_types = (dict,)

    def zero(self) -> Dict[str, Any]:
        return {}

    def decode(self, field: str, value: Any) -> Dict[str, Any]:
        return dict(self.check(field, value))

    def encode(self, value: Dict[str, Any]) -> Dict[str, Any]:
        return dict(value)


class Nested(Kind):
    """A JSON object decoded into another entity type."""

    json_types = (dict,)

    def __init__(self, entity_cls: Type["Entity"]):
        self.entity_cls = entity_cls

    def decode(self, field: str, value: Any) -> "Entity":
        return decode(self.check(field, value), self.entity_cls)

    def encode(self, value: Optional["Entity"]) -> Optional[Dict[str, Any]]:
        return None if value is None else value.to_dict()


class NestedList(Kind):
    """A JSON array of objects, each decoded into another entity type."""

    json_types = (list,)

    def __init__(self, entity_cls: Type["Entity"]):
        self.entity_cls = entity_cls

    def zero(self) -> List["Entity"]:
        return []

    def decode(self, field: str, value: Any) -> List["Entity"]:
        items = self.check(field, value)
        entities = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise TypeMismatch(f"{field}[{index}]", json_type_name(item))
            entities.append(decode(item, self.entity_cls))
        return entities

    def encode(self, value: List["Entity"]) -> List[Dict[str, Any]]:
        return [item.to_dict() for item in value]


def wire(name: str, kind: Optional[Kind] = None) -> Any:
    """Declare a dataclass field decoded from the wire member *name*.

    Parameters:
        name: The member name in the JSON object.
        kind: How the value is decoded; defaults to :class:`String`.

    Returns:
        A ``dataclasses.field`` whose default is the kind's zero value.
    """
    kind = kind if kind is not None else String()
    return dataclasses.field(
        default_factory=kind.zero, metadata={"wire": name, "kind": kind}
    )


# =============================================================================
# Entities
# =============================================================================


class Entity:
    """Base class for decoded resources.

    Subclasses are dataclasses whose fields are declared with :func:`wire`.

    Class attributes:
        __transient_fields__: Wire names consumed while decoding that are not
            stored as attributes; they count as known fields.
        __property_map__: Name of the attribute that receives custom
            top-level properties, or ``None`` to skip that extraction.
    """

    __transient_fields__: ClassVar[Tuple[str, ...]] = ()
    __property_map__: ClassVar[Optional[str]] = None

    @classmethod
    def known_fields(cls) -> FrozenSet[str]:
        return known_fields(cls)

    @classmethod
    def from_json(cls, raw_body: RawBody) -> Self:
        return decode(raw_body, cls)

    def to_dict(self) -> Dict[str, Any]:
        """Encode the modeled attributes back to their wire names.

        Custom properties are emitted as top-level members, the way the API
        sends them. Properties named like a known field are skipped.
        """
        property_map = type(self).__property_map__
        data: Dict[str, Any] = {}
        for f, wire_name, kind in _wire_fields(type(self)):
            if f.name == property_map:
                continue
            data[wire_name] = kind.encode(getattr(self, f.name))
        if property_map is not None:
            known = known_fields(type(self))
            for key, value in getattr(self, property_map).items():
                if key not in known:
                    data[key] = value
        return data


@cache
def _wire_fields(
    entity_cls: Type[Entity],
) -> Tuple[Tuple[dataclasses.Field, str, Kind], ...]:
    if not dataclasses.is_dataclass(entity_cls):
        raise TypeError(f"{entity_cls.__name__} is not a dataclass")
    return tuple(
        (f, f.metadata["wire"], f.metadata["kind"])
        for f in dataclasses.fields(entity_cls)
        if "wire" in f.metadata
    )


@cache
def known_fields(entity_cls: Type[Entity]) -> FrozenSet[str]:
    """Return the wire names modeled by *entity_cls*, including transient ones."""
    names = {wire_name for _, wire_name, _ in _wire_fields(entity_cls)}
    names.update(getattr(entity_cls, "__transient_fields__", ()))
    return frozenset(names)


def custom_properties(
    payload: Mapping[str, Any], entity_cls: Type[Entity]
) -> Dict[str, str]:
    """Collect the top-level string members of *payload* that are not known fields.

    Members with non-string values are dropped.
    """
    known = known_fields(entity_cls)
    properties: Dict[str, str] = {}
    for key, value in payload.items():
        if key in known:
            continue
        if isinstance(value, str):
            properties[key] = value
        else:
            logger.debug(
                "Dropping custom property %r of %s: %s value",
                key,
                entity_cls.__name__,
                json_type_name(value),
            )
    return properties


def decode_shape(raw_body: RawBody, shape: Type[EntityT]) -> EntityT:
    """Decode the modeled attributes of *shape* without custom properties.

    Parameters:
        raw_body: The JSON object to decode.
        shape: An entity dataclass.

    Returns:
        The decoded instance; absent and ``null`` members take zero values.

    Raises:
        MalformedPayload: if the body is not a JSON object.
        TypeMismatch: if a member has a JSON type the field does not accept.
        TimestampParseError: if a timestamp member is present but malformed.
    """
    payload = parse_object(raw_body)
    values: Dict[str, Any] = {}
    for f, wire_name, kind in _wire_fields(shape):
        value = payload.get(wire_name)
        if value is not None:
            values[f.name] = kind.decode(wire_name, value)
    return shape(**values)


def decode(raw_body: RawBody, entity_cls: Type[EntityT]) -> EntityT:
    """Decode *raw_body* into *entity_cls*, including custom properties.

    Raises the same errors as :func:`decode_shape`.
    """
    payload = parse_object(raw_body)
    entity = decode_shape(payload, entity_cls)
    property_map = entity_cls.__property_map__
    if property_map is not None:
        setattr(entity, property_map, custom_properties(payload, entity_cls))
    return entity


__all__ = [
    "RFC3339",
    "RFC3339_MILLI_NO_Z",
    "AnyMap",
    "Boolean",
    "Entity",
    "Integer",
    "Kind",
    "Nested",
    "NestedList",
    "RawBody",
    "String",
    "StringList",
    "StringMap",
    "Timestamp",
    "custom_properties",
    "decode",
    "decode_shape",
    "known_fields",
    "parse_object",
    "parse_timestamp",
    "wire",
]
