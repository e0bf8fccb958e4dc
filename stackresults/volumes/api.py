"""Requests against the block storage service (v2)."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import urlencode

from ..client import ServiceClient
from ..pagination import Pager
from .results import CreateResult, DeleteResult, GetResult, UpdateResult, VolumePage


def list(
    client: ServiceClient, detail: bool = True, **query: Any
) -> Pager[VolumePage]:
    """List volumes, one page at a time.

    Parameters:
        client: Client for the block storage endpoint.
        detail: List full volume records (``volumes/detail``) rather than
            ids and names only.
        **query: Query parameters such as ``limit``, ``marker`` or
            ``all_tenants``.

    Returns:
        A pager; no request is sent until it is iterated.
    """
    parts = ("volumes", "detail") if detail else ("volumes",)
    url = client.service_url(*parts)
    params = {key: value for key, value in query.items() if value is not None}
    if params:
        url = f"{url}?{urlencode(params, doseq=True)}"
    return Pager(client.fetch_page(VolumePage), initial_url=url)


def get(client: ServiceClient, volume_id: str) -> GetResult:
    return client.get(client.service_url("volumes", volume_id), result_cls=GetResult)


def create(client: ServiceClient, body: Mapping[str, Any]) -> CreateResult:
    """Create a volume from the members of *body* (``size``, ``name``, ...)."""
    return client.post(
        client.service_url("volumes"),
        json={"volume": dict(body)},
        ok_codes=(202,),
        result_cls=CreateResult,
    )


def update(
    client: ServiceClient, volume_id: str, body: Mapping[str, Any]
) -> UpdateResult:
    return client.put(
        client.service_url("volumes", volume_id),
        json={"volume": dict(body)},
        ok_codes=(200,),
        result_cls=UpdateResult,
    )


def delete(client: ServiceClient, volume_id: str) -> DeleteResult:
    return client.delete(
        client.service_url("volumes", volume_id),
        ok_codes=(202, 204),
        result_cls=DeleteResult,
    )
