"""Device identity providers.

The service only needs a pseudonymous identifier that is stable within a
ride. :class:`DailyRotatingIDProvider` derives it from a local seed and
the current UTC date, so positions cannot be linked across days.
"""

from __future__ import annotations

import hashlib
import secrets
from collections.abc import Callable
from datetime import UTC, date, datetime


def md5_hex(value: str) -> str:
    """Compute MD5 of a UTF-8 string, returning uppercase hex."""
    return hashlib.md5(value.encode("utf-8")).hexdigest().upper()


def _utc_today() -> date:
    return datetime.now(UTC).date()


class DailyRotatingIDProvider:
    """Identifier = ``MD5(seed + YYYY-MM-DD)`` for the current UTC day.

    Parameters
    ----------
    seed : str or None
        Per-installation secret. A random seed is generated when omitted,
        which makes the identifier stable for this process only.
    today : callable
        Returns the current date. Injected for tests.
    """

    def __init__(self, seed: str | None = None, *, today: Callable[[], date] = _utc_today) -> None:
        self._seed = seed if seed else secrets.token_hex(16)
        self._today = today
        self._cached_day: date | None = None
        self._cached_id = ""

    @property
    def id(self) -> str:
        day = self._today()
        if day != self._cached_day:
            self._cached_id = md5_hex(f"{self._seed}{day.isoformat()}")
            self._cached_day = day
        return self._cached_id


class StaticIDProvider:
    """Fixed identifier."""

    def __init__(self, device_id: str) -> None:
        device_id = device_id.strip()
        if not device_id:
            raise ValueError("device_id must be non-empty")
        self._id = device_id

    @property
    def id(self) -> str:
        return self._id
