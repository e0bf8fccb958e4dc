"""Block storage (v2) resources: volumes, attachments and volume list pages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..decoding import (
    RFC3339_MILLI_NO_Z,
    AnyMap,
    Boolean,
    Entity,
    Integer,
    NestedList,
    StringMap,
    Timestamp,
    wire,
)
from ..pagination import LinkedPage, LinksPage
from ..results import CommonResult, ErrResult


@dataclass
class Attachment(Entity):
    """A server a volume is attached to."""

    attached_at: Optional[datetime] = wire(
        "attached_at", Timestamp(RFC3339_MILLI_NO_Z)
    )
    attachment_id: str = wire("attachment_id")
    device: str = wire("device")
    host_name: str = wire("host_name")
    id: str = wire("id")
    server_id: str = wire("server_id")
    volume_id: str = wire("volume_id")


@dataclass
class Volume(Entity):
    """A block storage volume.

    User-defined key/value pairs live in the nested ``metadata`` object, so
    volumes do not collect top-level custom properties.
    """

    id: str = wire("id")
    status: str = wire("status")
    # GB
    size: int = wire("size", Integer())
    availability_zone: str = wire("availability_zone")
    created_at: Optional[datetime] = wire("created_at", Timestamp(RFC3339_MILLI_NO_Z))
    updated_at: Optional[datetime] = wire("updated_at", Timestamp(RFC3339_MILLI_NO_Z))
    attachments: List[Attachment] = wire("attachments", NestedList(Attachment))
    name: str = wire("name")
    description: str = wire("description")
    volume_type: str = wire("volume_type")
    snapshot_id: str = wire("snapshot_id")
    source_volid: str = wire("source_volid")
    metadata: Dict[str, str] = wire("metadata", StringMap())
    user_id: str = wire("user_id")
    # "true" or "false", as sent by the API
    bootable: str = wire("bootable")
    encrypted: bool = wire("encrypted", Boolean())
    replication_status: str = wire("replication_status")
    consistencygroup_id: str = wire("consistencygroup_id")
    multiattach: bool = wire("multiattach", Boolean())
    volume_image_metadata: Dict[str, Any] = wire("volume_image_metadata", AnyMap())


class _VolumeResult(CommonResult[Volume]):
    entity_cls = Volume
    label = "volume"


class GetResult(_VolumeResult):
    """Result of a Get operation."""


class CreateResult(_VolumeResult):
    """Result of a Create operation."""


class UpdateResult(_VolumeResult):
    """Result of an Update operation."""


class DeleteResult(ErrResult):
    """Result of a Delete operation."""


class VolumePage(LinksPage):
    """One page of a volume list, linked through ``volumes_links``."""

    entity_cls = Volume
    collection_label = "volumes"
    links_label = "volumes_links"


def extract_volumes(page: LinkedPage) -> List[Volume]:
    """Decode the volumes of one page of a list call."""
    return page.extract()
