"""Image service (v2) resources: images and image list pages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from ..decoding import (
    RFC3339,
    Boolean,
    Entity,
    Integer,
    StringList,
    StringMap,
    Timestamp,
    wire,
)
from ..pagination import LinkedPage, NextMarkerPage
from ..results import CommonResult, ErrResult


class ImageStatus(str, Enum):
    """Lifecycle status of an image."""

    QUEUED = "queued"
    SAVING = "saving"
    ACTIVE = "active"
    KILLED = "killed"
    DELETED = "deleted"
    PENDING_DELETE = "pending_delete"


class ImageVisibility(str, Enum):
    """Who can see and use an image."""

    PUBLIC = "public"
    PRIVATE = "private"
    SHARED = "shared"
    COMMUNITY = "community"


@dataclass
class Image(Entity):
    """Metadata of an image, without the image data itself.

    Custom properties set on the image arrive as top-level members of the
    image object; they are collected into ``properties``.

    Attributes:
        id: The image UUID
        name: Human-readable display name
        status: One of ``ImageStatus``
        tags: Arbitrary strings attached to the image
        container_format: ami, ari, aki, bare or ovf
        disk_format: ami, ari, aki, vhd, vmdk, raw, qcow2, vdi or iso
        min_disk_gigabytes: Disk space in GB required to boot the image
        min_ram_megabytes: RAM in MB required to boot the image
        owner: The project the image belongs to
        protected: Whether the image can be deleted
        visibility: One of ``ImageVisibility``
        checksum: Checksum of the image data
        size_bytes: Size of the image data
        metadata: Metadata definitions associated with the image
        properties: Custom key/value properties
        created_at: When the image was created
        updated_at: When the image or its properties last changed
        file: Path, relative to the service, of the image data
        schema: Path to the JSON schema of the image
        virtual_size: Virtual size of the image
        self_url: URL of the image
        direct_url: URL of the image file in an external store
        locations: Locations of the image data
    """

    id: str = wire("id")
    name: str = wire("name")
    status: str = wire("status")
    tags: List[str] = wire("tags", StringList())
    container_format: str = wire("container_format")
    disk_format: str = wire("disk_format")
    min_disk_gigabytes: int = wire("min_disk", Integer())
    min_ram_megabytes: int = wire("min_ram", Integer())
    owner: str = wire("owner")
    protected: bool = wire("protected", Boolean())
    visibility: str = wire("visibility")
    checksum: str = wire("checksum")
    size_bytes: int = wire("size", Integer())
    metadata: Dict[str, str] = wire("metadata", StringMap())
    properties: Dict[str, str] = wire("properties", StringMap())
    created_at: Optional[datetime] = wire("created_at", Timestamp(RFC3339))
    updated_at: Optional[datetime] = wire("updated_at", Timestamp(RFC3339))
    file: str = wire("file")
    schema: str = wire("schema")
    virtual_size: int = wire("virtual_size", Integer())
    self_url: str = wire("self")
    direct_url: str = wire("direct_url")
    locations: List[str] = wire("locations", StringList())

    __property_map__ = "properties"


class GetResult(CommonResult[Image]):
    """Result of a Get operation."""

    entity_cls = Image


class CreateResult(CommonResult[Image]):
    """Result of a Create operation."""

    entity_cls = Image


class UpdateResult(CommonResult[Image]):
    """Result of an Update operation."""

    entity_cls = Image


class DeleteResult(ErrResult):
    """Result of a Delete operation."""


class ImagePage(NextMarkerPage):
    """One page of an image list; ``next`` is relative to the page URL."""

    entity_cls = Image
    collection_label = "images"


def extract_images(page: LinkedPage) -> List[Image]:
    """Decode the images of one page of a list call."""
    return page.extract()
