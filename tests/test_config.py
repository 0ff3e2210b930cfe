from __future__ import annotations

import pytest

from pycriticalmaps._constants import DEFAULT_ENDPOINT
from pycriticalmaps.config import SyncConfig
from pycriticalmaps.exceptions import ConfigError


def test_defaults() -> None:
    config = SyncConfig()
    assert config.endpoint == DEFAULT_ENDPOINT
    assert config.poll_interval == 12.0
    assert config.device_seed is None


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRITICALMAPS_ENDPOINT", "https://example.invalid/api")
    monkeypatch.setenv("CRITICALMAPS_POLL_INTERVAL", "5")
    monkeypatch.setenv("CRITICALMAPS_REQUEST_TIMEOUT", "7.5")
    monkeypatch.setenv("CRITICALMAPS_GRACE_PERIOD", "0")
    monkeypatch.setenv("CRITICALMAPS_DEVICE_SEED", "seed-1")

    config = SyncConfig.from_env()

    assert config.endpoint == "https://example.invalid/api"
    assert config.poll_interval == 5.0
    assert config.request_timeout == 7.5
    assert config.background_grace_period == 0.0
    assert config.device_seed == "seed-1"


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRITICALMAPS_POLL_INTERVAL", "not-a-number")
    monkeypatch.setenv("CRITICALMAPS_ENDPOINT", "https://env.invalid/")

    config = SyncConfig.from_env(poll_interval=3.0, endpoint="https://override.invalid/")

    assert config.poll_interval == 3.0
    assert config.endpoint == "https://override.invalid/"


def test_from_env_rejects_non_numeric(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRITICALMAPS_REQUEST_TIMEOUT", "soon")
    with pytest.raises(ConfigError):
        SyncConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"poll_interval": 0},
        {"request_timeout": -1},
        {"background_grace_period": -0.5},
        {"endpoint": "  "},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        SyncConfig(**kwargs)  # type: ignore[arg-type]
