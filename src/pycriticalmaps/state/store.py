"""In-memory store for the merged world state."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pycriticalmaps.models.api import ApiResponse
from pycriticalmaps.models.chat import ChatMessage
from pycriticalmaps.models.location import Location

_logger = logging.getLogger(__name__)

UpdateListener = Callable[[ApiResponse], None]


class DataStore:
    """Merge API responses into the local view of the world.

    The server always answers with the complete set of active devices,
    so locations are replaced wholesale on every update. Chat messages
    accumulate by identifier; when *max_messages* is set the oldest
    messages (by timestamp) are evicted first.

    All mutation is expected to happen on one event loop. Models are
    frozen, so the shallow dict copies handed out by the accessors are
    safe to keep.
    """

    def __init__(self, *, max_messages: int | None = None) -> None:
        if max_messages is not None and max_messages <= 0:
            raise ValueError(f"max_messages must be positive, got {max_messages}")
        self._max_messages = max_messages
        self._locations: dict[str, Location] = {}
        self._chat_messages: dict[str, ChatMessage] = {}
        self._listeners: list[UpdateListener] = []
        self._update_count = 0

    def update(self, response: ApiResponse) -> None:
        """Merge a decoded response and notify listeners."""
        self._locations = dict(response.locations)
        self._chat_messages.update(response.chat_messages)
        self._evict_old_messages()
        self._update_count += 1

        for listener in list(self._listeners):
            try:
                listener(response)
            except Exception:
                _logger.exception("Store listener %r failed", listener)

    def _evict_old_messages(self) -> None:
        if self._max_messages is None or len(self._chat_messages) <= self._max_messages:
            return
        ordered = sorted(self._chat_messages.items(), key=lambda item: item[1].timestamp)
        self._chat_messages = dict(ordered[-self._max_messages :])

    def add_listener(self, listener: UpdateListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    @property
    def update_count(self) -> int:
        return self._update_count

    @property
    def locations(self) -> dict[str, Location]:
        return dict(self._locations)

    @property
    def chat_messages(self) -> dict[str, ChatMessage]:
        return dict(self._chat_messages)

    def other_locations(self, device_id: str) -> dict[str, Location]:
        """All known locations except the one reported by *device_id*."""
        return {device: loc for device, loc in self._locations.items() if device != device_id}

    def sorted_chat_messages(self) -> list[ChatMessage]:
        """Chat messages ordered oldest first."""
        return sorted(self._chat_messages.values(), key=lambda msg: msg.timestamp)
