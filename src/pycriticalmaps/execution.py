"""Extended-execution hosts.

A host hands out a token that keeps a message submission alive for a
limited grace period. When the period elapses before the token is
released, the host runs the expiry handler registered with the token.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Callable

from pycriticalmaps._constants import DEFAULT_GRACE_PERIOD

_logger = logging.getLogger(__name__)


class GraceTimerHost:
    """Expire tokens after *grace_period* seconds on the running loop."""

    def __init__(self, grace_period: float = DEFAULT_GRACE_PERIOD) -> None:
        if grace_period < 0:
            raise ValueError(f"grace_period must not be negative, got {grace_period}")
        self._grace_period = grace_period
        self._counter = itertools.count(1)
        self._handles: dict[int, asyncio.TimerHandle] = {}

    @property
    def active_tokens(self) -> int:
        return len(self._handles)

    def begin(self, expiry_handler: Callable[[], None]) -> int:
        token = next(self._counter)
        loop = asyncio.get_running_loop()
        self._handles[token] = loop.call_later(self._grace_period, self._expire, token, expiry_handler)
        return token

    def end(self, token: int) -> None:
        handle = self._handles.pop(token, None)
        if handle is not None:
            handle.cancel()

    def _expire(self, token: int, expiry_handler: Callable[[], None]) -> None:
        if self._handles.pop(token, None) is None:
            return
        _logger.info("Extended execution token %d expired", token)
        expiry_handler()


class NullExecutionHost:
    """Host whose tokens never expire."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)

    def begin(self, expiry_handler: Callable[[], None]) -> int:
        return next(self._counter)

    def end(self, token: int) -> None:
        return None
