"""Client configuration for pygameday."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pygameday._constants import BASE_URL, DEFAULT_HISTORY_WINDOW_DAYS
from pygameday.exceptions import GameDayConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class ReconnectPolicy:
    """Exponential backoff applied when the realtime connection drops.

    The delay doubles after every failed attempt, starting at
    ``initial_delay`` and capped at ``max_delay``. This matches the
    schedule paho-mqtt follows once ``reconnect_delay_set`` is applied.

    Parameters
    ----------
    initial_delay : float
        Seconds to wait before the first reconnect attempt.
    max_delay : float
        Upper bound for any single delay.
    max_attempts : int
        Reconnect attempts allowed before the connection is declared
        failed.  ``0`` disables reconnection entirely.
    """

    initial_delay: float = 1.0
    max_delay: float = 30.0
    max_attempts: int = 5

    def __post_init__(self) -> None:
        if self.initial_delay <= 0:
            raise GameDayConfigError("initial_delay must be positive")
        if self.max_delay < self.initial_delay:
            raise GameDayConfigError("max_delay must be >= initial_delay")
        if self.max_attempts < 0:
            raise GameDayConfigError("max_attempts must be >= 0")

    def delay_for(self, attempt: int) -> float:
        """Delay in seconds before reconnect *attempt* (1-based)."""
        if attempt < 1:
            return 0.0
        delay = self.initial_delay * 2 ** (attempt - 1)
        return min(delay, self.max_delay)

    def exhausted(self, attempt: int) -> bool:
        return attempt > self.max_attempts


@dataclasses.dataclass(frozen=True)
class GameDayConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Base URL of the forecast/analytics HTTP API.
    broker_host : str
        Hostname of the realtime event broker.
    broker_port : int
        Broker port.
    topic_prefix : str
        Each realtime event is published on ``<topic_prefix>/<event-name>``.
    client_id : str
        MQTT client identifier. Empty lets the broker assign one.
    mqtt_keepalive : int
        MQTT keepalive in seconds.
    mqtt_tls : bool
        Connect to the broker over TLS.
    history_window_days : int
        Lookback window for the historical series.
    request_timeout : float
        Total timeout in seconds for each HTTP request.
    reconnect : ReconnectPolicy
        Backoff policy for the realtime connection.
    """

    base_url: str = BASE_URL
    broker_host: str = "localhost"
    broker_port: int = 1883
    topic_prefix: str = "gameday"
    client_id: str = ""
    mqtt_keepalive: int = 60
    mqtt_tls: bool = False
    history_window_days: int = DEFAULT_HISTORY_WINDOW_DAYS
    request_timeout: float = 10.0
    reconnect: ReconnectPolicy = dataclasses.field(default_factory=ReconnectPolicy)

    def __post_init__(self) -> None:
        if self.history_window_days <= 0:
            raise GameDayConfigError("history_window_days must be positive")
        if not self.topic_prefix.strip("/"):
            raise GameDayConfigError("topic_prefix must be non-empty")

    def topic_for(self, event: str) -> str:
        return f"{self.topic_prefix.rstrip('/')}/{event}"

    @classmethod
    def from_env(cls, **overrides: Any) -> GameDayConfig:
        """Create configuration from environment variables.

        Reads optional ``GAMEDAY_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        GameDayConfig
            Populated configuration.
        """
        env = os.environ

        reconnect_kwargs: dict[str, Any] = {}
        _ENV_RECONNECT_MAP: dict[str, tuple[str, type]] = {
            "GAMEDAY_RECONNECT_INITIAL_DELAY": ("initial_delay", float),
            "GAMEDAY_RECONNECT_MAX_DELAY": ("max_delay", float),
            "GAMEDAY_RECONNECT_MAX_ATTEMPTS": ("max_attempts", int),
        }
        for env_key, (field_name, cast) in _ENV_RECONNECT_MAP.items():
            val = env.get(env_key)
            if val is not None:
                reconnect_kwargs[field_name] = _parse(env_key, val, cast)

        # Allow overriding reconnect fields via a nested dict
        reconnect_overrides = overrides.pop("reconnect", None)
        if isinstance(reconnect_overrides, dict):
            reconnect_kwargs.update(reconnect_overrides)
        elif isinstance(reconnect_overrides, ReconnectPolicy):
            reconnect_kwargs = dataclasses.asdict(reconnect_overrides)

        config_kwargs: dict[str, Any] = {"reconnect": ReconnectPolicy(**reconnect_kwargs)}

        _ENV_CONFIG_MAP: dict[str, tuple[str, type]] = {
            "GAMEDAY_BASE_URL": ("base_url", str),
            "GAMEDAY_BROKER_HOST": ("broker_host", str),
            "GAMEDAY_BROKER_PORT": ("broker_port", int),
            "GAMEDAY_TOPIC_PREFIX": ("topic_prefix", str),
            "GAMEDAY_CLIENT_ID": ("client_id", str),
            "GAMEDAY_MQTT_KEEPALIVE": ("mqtt_keepalive", int),
            "GAMEDAY_HISTORY_WINDOW_DAYS": ("history_window_days", int),
            "GAMEDAY_REQUEST_TIMEOUT": ("request_timeout", float),
        }
        for env_key, (field_name, cast) in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _parse(env_key, val, cast)

        if "mqtt_tls" not in overrides:
            config_kwargs["mqtt_tls"] = _env_bool(env.get("GAMEDAY_MQTT_TLS"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)


def _parse(env_key: str, value: str, cast: type) -> Any:
    try:
        return cast(value.strip())
    except ValueError as exc:
        raise GameDayConfigError(f"{env_key} has an invalid value: {value!r}") from exc
