"""Image service (v2): image entities, results, pages and requests."""

from stackresults.images.api import create, delete, get, list, update
from stackresults.images.results import (
    CreateResult,
    DeleteResult,
    GetResult,
    Image,
    ImagePage,
    ImageStatus,
    ImageVisibility,
    UpdateResult,
    extract_images,
)

__all__ = [
    # api.py
    "list",
    "get",
    "create",
    "update",
    "delete",
    # results.py
    "Image",
    "ImageStatus",
    "ImageVisibility",
    "GetResult",
    "CreateResult",
    "UpdateResult",
    "DeleteResult",
    "ImagePage",
    "extract_images",
]
