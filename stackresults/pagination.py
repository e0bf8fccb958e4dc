"""Linked pagination over list responses.

A list endpoint returns one page of resources plus a reference to the next
page. :class:`LinkedPage` subclasses know where the resource array lives and
how to read the next reference; :class:`Pager` walks from an initial page to
the last one, fetching lazily.

Example:
    >>> pager = Pager(client.fetch_page(ImagePage), initial_url=url)
    >>> for page in pager.pages():  # doctest: +SKIP
    ...     for image in page.extract():
    ...         print(image.name)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import (
    Any,
    Callable,
    ClassVar,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Type,
    TypeVar,
    Union,
)
from urllib.parse import urljoin

from ._core._models import extract_next_url, parse_links
from ._core._validators import json_type_name
from .decoding import Entity
from .errors import MissingPaginationMetadata
from .results import Result

logger = logging.getLogger(__name__)

PageT = TypeVar("PageT", bound="LinkedPage")


class LinkedPage(ABC):
    """One page of a list response.

    Subclasses set ``entity_cls`` and ``collection_label`` (the member holding
    the resource array) and implement :meth:`next_page_url`.
    """

    entity_cls: ClassVar[Type[Entity]]
    collection_label: ClassVar[str]

    def __init__(self, result: Result) -> None:
        self.result = result

    @property
    def url(self) -> str:
        """The URL this page was requested from."""
        return self.result.url or ""

    def extract(self) -> List[Any]:
        """Decode every resource on this page.

        Raises:
            TransportError: if the page request failed.
            MalformedPayload, TypeMismatch, TimestampParseError: if any
                resource fails to decode.
        """
        return self.result.extract_into_list(self.entity_cls, self.collection_label)

    def is_empty(self) -> bool:
        """Return True if the page holds no resources."""
        return len(self.extract()) == 0

    @abstractmethod
    def next_page_url(self) -> str:
        """Return the absolute URL of the next page, or ``""`` on the last page.

        Raises:
            MissingPaginationMetadata: if the next reference is malformed.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} url={self.url!r}>"


class NextMarkerPage(LinkedPage):
    """A page whose body carries the next page as a string member.

    Relative references are resolved against the page's own URL.
    """

    next_label: ClassVar[str] = "next"

    def next_page_url(self) -> str:
        metadata = self.result.extract_into(dict)
        next_ref = metadata.get(self.next_label)
        if next_ref is None or next_ref == "":
            return ""
        if not isinstance(next_ref, str):
            raise MissingPaginationMetadata(
                f"{self.next_label!r} must be a string, got {json_type_name(next_ref)}"
            )
        return urljoin(self.url, next_ref)


class LinksPage(LinkedPage):
    """A page whose body carries a ``<resource>_links`` array of ``{rel, href}``."""

    links_label: ClassVar[str]

    def next_page_url(self) -> str:
        metadata = self.result.extract_into(dict)
        links = parse_links(metadata.get(self.links_label), self.links_label)
        next_ref = extract_next_url(links)
        return urljoin(self.url, next_ref) if next_ref else ""


class Pager(Generic[PageT]):
    """Lazily walk linked pages, starting over on every iteration.

    Parameters:
        fetch: Callable returning the page at a URL; it raises on failure.
        initial_url: URL of the first page, fetched when iteration starts.
        initial_page: An already fetched first page, used instead of
            ``initial_url``.
    """

    def __init__(
        self,
        fetch: Callable[[str], PageT],
        initial_url: str = "",
        initial_page: Optional[PageT] = None,
    ) -> None:
        if not initial_url and initial_page is None:
            raise ValueError("Pager needs an initial_url or an initial_page")
        self.fetch = fetch
        self.initial_url = initial_url
        self.initial_page = initial_page

    @classmethod
    def from_page(cls, page: PageT, fetch: Callable[[str], PageT]) -> "Pager[PageT]":
        return cls(fetch, initial_url=page.url, initial_page=page)

    def _fetch(self, url: str) -> PageT:
        logger.debug("Fetching page %s", url)
        return self.fetch(url)

    def pages(self) -> Iterator[PageT]:
        """Yield pages in request order.

        Iteration stops at the first empty page, which is not yielded, or
        after a page with no next reference. The next page is only fetched
        once the consumer asks for it.

        Yields:
            Non-empty pages.

        Raises:
            TransportError: if fetching a page fails.
            MissingPaginationMetadata: if a next reference is malformed.
        """
        page = self.initial_page
        if page is None:
            page = self._fetch(self.initial_url)
        while True:
            if page.is_empty():
                logger.debug("Page %s is empty, stopping", page.url)
                return
            yield page
            next_url = page.next_page_url()
            if not next_url:
                logger.debug("Page %s has no next page, stopping", page.url)
                return
            page = self._fetch(next_url)

    def __iter__(self) -> Iterator[PageT]:
        return self.pages()

    def each_page(self, handler: Callable[[PageT], Optional[bool]]) -> None:
        """Call *handler* on every page; returning ``False`` stops the walk."""
        for page in self.pages():
            if handler(page) is False:
                break

    def all_pages(self) -> List[PageT]:
        return list(self.pages())

    def entities(self) -> Iterator[Any]:
        """Yield every resource of every page, in page order."""
        for page in self.pages():
            yield from page.extract()

    def all_entities(self) -> List[Any]:
        return list(self.entities())

    def __repr__(self) -> str:
        return f"Pager(initial_url={self.initial_url!r})"


def extract_collection(page: LinkedPage) -> List[Any]:
    """Decode the resources of a single page."""
    return page.extract()


def extract_all(pages: Union[LinkedPage, Iterable[LinkedPage]]) -> List[Any]:
    """Decode and concatenate the resources of one page or a sequence of pages.

    A ``Pager`` is accepted as a sequence of pages. Any resource failing to
    decode fails the whole call.
    """
    if isinstance(pages, LinkedPage):
        return extract_collection(pages)
    entities: List[Any] = []
    for page in pages:
        entities.extend(extract_collection(page))
    return entities
