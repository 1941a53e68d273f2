"""Custom exception hierarchy for pygameday."""

from __future__ import annotations


class GameDayError(Exception):
    """Base exception for all pygameday errors."""


class GameDayConfigError(GameDayError):
    """Invalid or missing configuration."""


class GameDayTransportError(GameDayError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class GameDayApiError(GameDayError):
    """Upstream answered, but the response body has an unexpected shape."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class GameDayPayloadError(GameDayError):
    """Realtime event payload failed validation.

    Raised at the ingestion boundary and caught by the bridge, which logs and
    drops the event instead of letting it reach the metric store.
    """

    def __init__(self, message: str, *, event: str = "") -> None:
        self.event = event
        super().__init__(message)
