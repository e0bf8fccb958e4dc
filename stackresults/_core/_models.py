"""Simple data models shared across the package."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping

from ..errors import MissingPaginationMetadata
from ._validators import json_type_name


@dataclass(frozen=True)
class Link:
    """One ``{rel, href}`` entry of a ``<resource>_links`` array."""

    rel: str
    href: str

    @classmethod
    def from_json(cls, payload: Any) -> "Link":
        if not isinstance(payload, Mapping):
            raise MissingPaginationMetadata(
                f"link entry must be an object, got {json_type_name(payload)}"
            )
        rel = payload.get("rel") or ""
        href = payload.get("href") or ""
        if not isinstance(rel, str) or not isinstance(href, str):
            raise MissingPaginationMetadata(
                f"link entry needs string rel and href, got {dict(payload)!r}"
            )
        return cls(rel=rel, href=href)


def parse_links(payload: Any, label: str) -> List[Link]:
    """Decode a links array, treating an absent or null array as no links."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise MissingPaginationMetadata(
            f"{label!r} must be an array, got {json_type_name(payload)}"
        )
    return [Link.from_json(item) for item in payload]


def extract_next_url(links: List[Link]) -> str:
    """Return the href of the last ``next`` relation, or ``""`` if none."""
    url = ""
    for link in links:
        if link.rel == "next":
            url = link.href
    return url
