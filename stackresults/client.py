"""HTTP client issuing requests against one service endpoint.

``ServiceClient`` is the request/response collaborator of the decoding and
pagination layer: it sends requests and wraps each response in a
:class:`~stackresults.results.Result`. Failures are stored on the result
rather than raised, so callers see them when they extract.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Sequence, Type, TypeVar

import requests

from ._core._request import RequestConfig, request
from .config import ClientConfig
from .errors import TransportError
from .pagination import LinkedPage
from .results import Result

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=Result)
PageT = TypeVar("PageT", bound=LinkedPage)


class ServiceClient:
    """Client for one service endpoint.

    Parameters:
        endpoint: Base URL of the service; overrides ``config.endpoint``.
        token: Token sent as ``X-Auth-Token``; overrides ``config.token``.
        session: Session to reuse; a new one is created otherwise. Headers
            already set on a caller's session are left as they are.
        config: Timeouts, retries and other settings.
    """

    def __init__(
        self,
        endpoint: str = "",
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        config: Optional[ClientConfig] = None,
    ) -> None:
        self.config = config or ClientConfig()
        endpoint = endpoint or self.config.endpoint
        if not endpoint:
            raise ValueError("ServiceClient needs an endpoint")
        self.endpoint = endpoint.rstrip("/") + "/"
        self.token = token if token is not None else self.config.token
        defaults = {
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }
        if session is None:
            self.session = requests.Session()
            self.session.headers.update(defaults)
        else:
            self.session = session
            for name, value in defaults.items():
                self.session.headers.setdefault(name, value)

    @classmethod
    def from_env(cls, prefix: str = "OS_") -> "ServiceClient":
        return cls(config=ClientConfig.from_env(prefix))

    def service_url(self, *parts: str) -> str:
        """Join *parts* onto the endpoint, e.g. ``service_url("images", id)``."""
        return self.endpoint + "/".join(part.strip("/") for part in parts)

    def _headers(self) -> dict:
        return {"X-Auth-Token": self.token} if self.token else {}

    def request(
        self,
        method: str,
        url: str,
        *,
        json: Optional[Any] = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        ok_codes: Optional[Sequence[int]] = None,
        result_cls: Type[ResultT] = Result,  # type: ignore[assignment]
    ) -> ResultT:
        """Send a request and wrap the outcome in *result_cls*.

        Returns:
            A result holding the response, or the ``TransportError`` that
            stopped the exchange.
        """
        config = RequestConfig(
            method=method,
            url=url,
            params=dict(params or {}),
            headers={**self._headers(), **(headers or {})},
            json=json,
            ok_codes=ok_codes,
            timeout=self.config.timeout,
            max_retries=self.config.max_retries,
            backoff_factor=self.config.backoff_factor,
        )
        logger.debug("%s %s", method, url)
        try:
            response = request(self.session, config)
        except TransportError as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            return result_cls(
                body=exc.body or b"",
                status_code=exc.status_code,
                url=exc.url or url,
                error=exc,
            )
        return result_cls.from_response(response)  # type: ignore[return-value]

    def get(self, url: str, **kwargs: Any) -> Any:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, json: Optional[Any] = None, **kwargs: Any) -> Any:
        return self.request("POST", url, json=json, **kwargs)

    def put(self, url: str, json: Optional[Any] = None, **kwargs: Any) -> Any:
        return self.request("PUT", url, json=json, **kwargs)

    def patch(self, url: str, json: Optional[Any] = None, **kwargs: Any) -> Any:
        return self.request("PATCH", url, json=json, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> Any:
        return self.request("DELETE", url, **kwargs)

    def fetch_page(self, page_cls: Type[PageT]) -> Callable[[str], PageT]:
        """Return a ``fetch(url)`` callable for a :class:`~stackresults.pagination.Pager`.

        The callable raises the ``TransportError`` if the page request fails.
        """

        def fetch(url: str) -> PageT:
            result = self.get(url)
            result.raise_for_error()
            return page_cls(result)

        return fetch

    def __repr__(self) -> str:
        return f"ServiceClient(endpoint={self.endpoint!r})"
