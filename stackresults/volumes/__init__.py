"""Block storage (v2): volume entities, results, pages and requests."""

from stackresults.volumes.api import create, delete, get, list, update
from stackresults.volumes.results import (
    Attachment,
    CreateResult,
    DeleteResult,
    GetResult,
    UpdateResult,
    Volume,
    VolumePage,
    extract_volumes,
)

__all__ = [
    # api.py
    "list",
    "get",
    "create",
    "update",
    "delete",
    # results.py
    "Attachment",
    "Volume",
    "GetResult",
    "CreateResult",
    "UpdateResult",
    "DeleteResult",
    "VolumePage",
    "extract_volumes",
]
