"""Client configuration for pycriticalmaps."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pycriticalmaps._constants import (
    DEFAULT_ENDPOINT,
    DEFAULT_GRACE_PERIOD,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
)
from pycriticalmaps.exceptions import ConfigError


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class SyncConfig:
    """Synchronization configuration.

    Parameters
    ----------
    endpoint : str
        API endpoint. Position reports, message batches and state
        fetches all target this single URL.
    poll_interval : float
        Seconds between two poll cycles.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    background_grace_period : float
        Seconds a message submission may run before the execution host
        reclaims it and the pending request is cancelled.
    device_seed : str or None
        Seed for the daily rotating device identifier. A random seed is
        generated when omitted.
    """

    endpoint: str = DEFAULT_ENDPOINT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    background_grace_period: float = DEFAULT_GRACE_PERIOD
    device_seed: str | None = None

    def __post_init__(self) -> None:
        if not self.endpoint.strip():
            raise ConfigError("endpoint must be non-empty")
        if self.poll_interval <= 0:
            raise ConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.request_timeout <= 0:
            raise ConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.background_grace_period < 0:
            raise ConfigError(f"background_grace_period must not be negative, got {self.background_grace_period}")

    @classmethod
    def from_env(cls, **overrides: Any) -> SyncConfig:
        """Create configuration from ``CRITICALMAPS_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        endpoint = env.get("CRITICALMAPS_ENDPOINT")
        if endpoint is not None:
            config_kwargs["endpoint"] = endpoint
        seed = env.get("CRITICALMAPS_DEVICE_SEED")
        if seed is not None:
            config_kwargs["device_seed"] = seed

        _ENV_FLOAT_MAP = {
            "CRITICALMAPS_POLL_INTERVAL": "poll_interval",
            "CRITICALMAPS_REQUEST_TIMEOUT": "request_timeout",
            "CRITICALMAPS_GRACE_PERIOD": "background_grace_period",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
