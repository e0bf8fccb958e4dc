"""Core HTTP request wrapper used by ``ServiceClient``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping, Optional, Sequence

import requests
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..errors import TransportError

log = logging.getLogger(__name__)

DEFAULT_OK_CODES: Mapping[str, Sequence[int]] = {
    "GET": (200,),
    "POST": (201, 202),
    "PUT": (201, 202),
    "PATCH": (200, 204),
    "DELETE": (202, 204),
}


@dataclass
class RequestConfig:
    """Configuration for a single request."""

    method: str = "GET"
    url: str = ""
    params: Mapping[str, Any] = field(default_factory=dict)
    headers: MutableMapping[str, str] = field(default_factory=dict)
    json: Optional[Any] = None
    ok_codes: Optional[Sequence[int]] = None
    timeout: float = 30
    max_retries: int = 3
    backoff_factor: float = 0.5

    def accepted_codes(self) -> Sequence[int]:
        if self.ok_codes is not None:
            return self.ok_codes
        return DEFAULT_OK_CODES.get(self.method.upper(), (200,))


class _RetryableResponse(Exception):
    def __init__(self, response: requests.Response):
        super().__init__(f"retryable status {response.status_code}")
        self.response = response


def _should_retry(resp: requests.Response) -> bool:
    """Return True for status codes that merit a retry."""
    return resp.status_code >= 500 or resp.status_code == 429


def _status_error(resp: requests.Response, expected: Sequence[int]) -> TransportError:
    return TransportError(
        f"{resp.request.method if resp.request else 'request'} {resp.url} "
        f"returned {resp.status_code}, expected one of {list(expected)}",
        status_code=resp.status_code,
        url=resp.url,
        body=resp.content,
    )


def request(
    session: requests.Session, config: RequestConfig
) -> requests.Response:
    """Perform an HTTP request with retry and status checking.

    Connection errors, timeouts and 5xx/429 responses are retried with
    exponential backoff, ``config.max_retries`` times at most.

    Args:
        session: Session used to send the request.
        config: Fully populated ``RequestConfig`` instance.

    Returns:
        The response, whose status is one of the accepted codes.

    Raises:
        TransportError: if the request could not be sent or returned an
            unexpected status.
    """
    expected = config.accepted_codes()

    def send() -> requests.Response:
        resp = session.request(
            method=config.method,
            url=config.url,
            params=config.params or None,
            headers=dict(config.headers),
            json=config.json,
            timeout=config.timeout,
        )
        if _should_retry(resp) and resp.status_code not in expected:
            raise _RetryableResponse(resp)
        return resp

    retrying = Retrying(
        reraise=True,
        stop=stop_after_attempt(config.max_retries + 1),
        wait=wait_exponential(multiplier=config.backoff_factor),
        retry=retry_if_exception_type(
            (requests.ConnectionError, requests.Timeout, _RetryableResponse)
        ),
        before_sleep=before_sleep_log(log, logging.INFO),
    )
    try:
        resp = retrying(send)
    except _RetryableResponse as exc:
        raise _status_error(exc.response, expected) from exc
    except requests.RequestException as exc:
        log.warning("Request to %s failed: %s", config.url, exc)
        raise TransportError(
            f"{config.method} {config.url} failed: {exc}", url=config.url
        ) from exc

    if resp.status_code not in expected:
        raise _status_error(resp, expected)
    return resp
