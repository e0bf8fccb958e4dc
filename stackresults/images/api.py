"""Requests against the image service (v2)."""

from __future__ import annotations

from typing import Any, Mapping, Sequence
from urllib.parse import urlencode

from ..client import ServiceClient
from ..pagination import Pager
from .results import CreateResult, DeleteResult, GetResult, ImagePage, UpdateResult

JSON_PATCH_CONTENT_TYPE = "application/openstack-images-v2.1-json-patch"


def list(client: ServiceClient, **query: Any) -> Pager[ImagePage]:
    """List images, one page at a time.

    Parameters:
        client: Client for the image service endpoint.
        **query: Query parameters such as ``limit``, ``marker`` or ``status``.

    Returns:
        A pager; no request is sent until it is iterated.
    """
    url = client.service_url("images")
    params = {key: value for key, value in query.items() if value is not None}
    if params:
        url = f"{url}?{urlencode(params, doseq=True)}"
    return Pager(client.fetch_page(ImagePage), initial_url=url)


def get(client: ServiceClient, image_id: str) -> GetResult:
    return client.get(client.service_url("images", image_id), result_cls=GetResult)


def create(client: ServiceClient, body: Mapping[str, Any]) -> CreateResult:
    """Register a new image; custom properties go at the top level of *body*."""
    return client.post(
        client.service_url("images"),
        json=dict(body),
        ok_codes=(201,),
        result_cls=CreateResult,
    )


def update(
    client: ServiceClient, image_id: str, patch: Sequence[Mapping[str, Any]]
) -> UpdateResult:
    """Apply JSON-patch operations, e.g. ``[{"op": "replace", "path": "/name", "value": "x"}]``."""
    return client.patch(
        client.service_url("images", image_id),
        json=[dict(op) for op in patch],
        headers={"Content-Type": JSON_PATCH_CONTENT_TYPE},
        ok_codes=(200,),
        result_cls=UpdateResult,
    )


def delete(client: ServiceClient, image_id: str) -> DeleteResult:
    return client.delete(
        client.service_url("images", image_id),
        ok_codes=(204,),
        result_cls=DeleteResult,
    )
