"""HTTP transport for the forecast and analytics endpoints."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pygameday._constants import USER_AGENT
from pygameday._redact import redact_for_log
from pygameday.config import GameDayConfig
from pygameday.exceptions import GameDayTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> dict[str, Any]:
        ...


class HttpTransport:
    """JSON-over-HTTP transport backed by a shared aiohttp session."""

    def __init__(self, config: GameDayConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> dict[str, Any]:
        """GET *endpoint* and return the decoded JSON object."""
        url = f"{self._config.base_url.rstrip('/')}{endpoint}"
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s params=%s", url, dict(params or {}))

        try:
            async with self._http.get(url, params=params, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise GameDayTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except GameDayTransportError:
            raise
        except UnicodeDecodeError as exc:
            raise GameDayTransportError(
                f"Undecodable response body from {endpoint}: {exc}",
                endpoint=endpoint,
            ) from exc
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise GameDayTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise GameDayTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if not isinstance(body, dict):
            raise GameDayTransportError(
                f"Response from {endpoint} is not a JSON object",
                endpoint=endpoint,
            )

        _logger.debug("Response %s body=%s", endpoint, redact_for_log(body, max_string=128))
        return body
