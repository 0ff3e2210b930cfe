from __future__ import annotations

import hashlib
from datetime import date

import pytest

from pycriticalmaps.identity import DailyRotatingIDProvider, StaticIDProvider, md5_hex
from pycriticalmaps.location_source import StaticLocationProvider
from pycriticalmaps.models.location import Location


def test_md5_hex_is_uppercase() -> None:
    assert md5_hex("abc") == hashlib.md5(b"abc").hexdigest().upper()


def test_daily_id_is_stable_within_a_day_and_rotates() -> None:
    current = {"day": date(2026, 5, 29)}
    provider = DailyRotatingIDProvider("seed", today=lambda: current["day"])

    first = provider.id
    assert first == md5_hex("seed2026-05-29")
    assert provider.id == first

    current["day"] = date(2026, 5, 30)
    assert provider.id == md5_hex("seed2026-05-30")


def test_daily_id_without_seed_is_random_per_instance() -> None:
    today = date(2026, 1, 1)
    assert DailyRotatingIDProvider(today=lambda: today).id != DailyRotatingIDProvider(today=lambda: today).id


def test_static_id_provider() -> None:
    assert StaticIDProvider(" DEV ").id == "DEV"
    with pytest.raises(ValueError):
        StaticIDProvider("")


def test_static_location_provider_update_and_clear() -> None:
    provider = StaticLocationProvider()
    assert provider.current_location is None

    loc = Location(longitude=1, latitude=2, timestamp=3.0)
    provider.update(loc)
    assert provider.current_location == loc

    provider.clear()
    assert provider.current_location is None
