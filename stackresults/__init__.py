"""stackresults: typed results and linked pagination for OpenStack-style APIs.

stackresults turns raw JSON response bodies into typed entities and walks
paginated list responses as one lazy sequence.

Quick Start:
    ```python
    from stackresults import ServiceClient, images

    client = ServiceClient("https://image.example.com/v2", token="...")

    # One resource
    image = images.get(client, "1bea47ed-f6a9-463b-b423-14b9cca9ad27").extract()
    print(image.name, image.size_bytes, image.properties)

    # Every resource of every page
    for image in images.list(client, limit=50).entities():
        print(image.id)
    ```

Key Features:
    - **Typed entities**: dataclasses decoded from declared wire names
    - **Custom properties**: top-level key/value pairs gathered into a map
    - **Flexible values**: integer or float sizes, RFC3339 timestamp variants
    - **Linked pagination**: ``next`` strings or ``<resource>_links`` arrays
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from .client import ServiceClient
from .config import ClientConfig
from .decoding import Entity, decode, decode_shape, known_fields, wire
from .errors import (
    MalformedPayload,
    MissingPaginationMetadata,
    StackResultsError,
    TimestampParseError,
    TransportError,
    TypeMismatch,
)
from .pagination import (
    LinkedPage,
    LinksPage,
    NextMarkerPage,
    Pager,
    extract_all,
    extract_collection,
)
from .results import CommonResult, ErrResult, HeaderResult, Result

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    # client.py
    "ServiceClient",
    # config.py
    "ClientConfig",
    # decoding.py
    "Entity",
    "decode",
    "decode_shape",
    "known_fields",
    "wire",
    # errors.py
    "StackResultsError",
    "TransportError",
    "MalformedPayload",
    "TypeMismatch",
    "TimestampParseError",
    "MissingPaginationMetadata",
    # pagination.py
    "LinkedPage",
    "NextMarkerPage",
    "LinksPage",
    "Pager",
    "extract_collection",
    "extract_all",
    # results.py
    "Result",
    "CommonResult",
    "ErrResult",
    "HeaderResult",
]

try:
    __version__ = version("stackresults")
except PackageNotFoundError:
    __version__ = "0.0.0"
