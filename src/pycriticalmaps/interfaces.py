"""Structural interfaces consumed by :class:`~pycriticalmaps.controller.SyncController`.

Having protocols here makes it easy to pass test doubles while keeping
the production implementations concrete.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Protocol

from pycriticalmaps.models.api import ApiResponse
from pycriticalmaps.models.location import Location


class LocationSource(Protocol):
    """Current device position, read at poll time only."""

    @property
    def current_location(self) -> Location | None: ...


class IdentityProvider(Protocol):
    """Stable device identifier, read per request."""

    @property
    def id(self) -> str: ...


class Transport(Protocol):
    """Performs the HTTP exchange and decodes the response.

    Implementations may either return ``None`` or raise on failure; the
    controller treats both as a failed request.
    """

    async def get(self, endpoint: str) -> ApiResponse | None: ...

    async def post(self, endpoint: str, body: bytes) -> ApiResponse | None: ...

    def cancel_active_requests_if_needed(self) -> None: ...


class Store(Protocol):
    """Holds the merged application state."""

    def update(self, response: ApiResponse) -> None: ...


class ExtendedExecutionHost(Protocol):
    """Grants a lease so a submission can finish while the app is suspended."""

    def begin(self, expiry_handler: Callable[[], None]) -> Hashable: ...

    def end(self, token: Hashable) -> None: ...
