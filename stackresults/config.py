"""Client configuration, optionally loaded from ``OS_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ._core._validators import require_non_empty

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "stackresults"


def _number(env: Mapping[str, str], key: str, cast, default):
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc


@dataclass
class ClientConfig:
    """Settings for a ``ServiceClient``.

    Attributes:
        endpoint: Base URL of the service, e.g. ``https://image.example.com/v2``
        token: Token sent as ``X-Auth-Token`` (optional)
        timeout: Per-request timeout in seconds
        max_retries: Retries on connection errors and 5xx/429 responses
        backoff_factor: Base of the exponential backoff between retries
        user_agent: Value of the ``User-Agent`` header
    """

    endpoint: str = ""
    token: Optional[str] = None
    timeout: float = 30
    max_retries: int = 3
    backoff_factor: float = 0.5
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(
        cls, prefix: str = "OS_", environ: Optional[Mapping[str, str]] = None
    ) -> "ClientConfig":
        """Build a config from ``{prefix}ENDPOINT``, ``{prefix}AUTH_TOKEN`` and friends.

        Parameters:
            prefix: Prefix of the environment variable names.
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            A populated ``ClientConfig``.

        Raises:
            ValueError: if the endpoint is missing or a numeric value is invalid.
        """
        env = os.environ if environ is None else environ
        endpoint_key = f"{prefix}ENDPOINT"
        require_non_empty(env, [endpoint_key])
        config = cls(
            endpoint=env[endpoint_key],
            token=env.get(f"{prefix}AUTH_TOKEN") or None,
            timeout=_number(env, f"{prefix}TIMEOUT", float, cls.timeout),
            max_retries=_number(env, f"{prefix}MAX_RETRIES", int, cls.max_retries),
            backoff_factor=_number(
                env, f"{prefix}BACKOFF_FACTOR", float, cls.backoff_factor
            ),
        )
        logger.debug("Loaded client config for %s from environment", config.endpoint)
        return config
