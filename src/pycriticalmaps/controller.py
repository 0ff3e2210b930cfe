"""Periodic synchronization with the Critical Maps endpoint."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Hashable, Sequence
from typing import Any

import aiohttp

from pycriticalmaps._constants import DEFAULT_POLL_INTERVAL
from pycriticalmaps._transport import HttpTransport
from pycriticalmaps.config import SyncConfig
from pycriticalmaps.exceptions import ConfigError, CriticalMapsError
from pycriticalmaps.execution import GraceTimerHost, NullExecutionHost
from pycriticalmaps.identity import DailyRotatingIDProvider
from pycriticalmaps.interfaces import (
    ExtendedExecutionHost,
    IdentityProvider,
    LocationSource,
    Store,
    Transport,
)
from pycriticalmaps.models._base import CriticalMapsModel
from pycriticalmaps.models.api import ApiResponse, MessageBatch, PositionReport, encode_body
from pycriticalmaps.models.chat import ChatMessage, SendChatMessage

_logger = logging.getLogger(__name__)

SendCompletion = Callable[[dict[str, ChatMessage] | None], None]
Encoder = Callable[[CriticalMapsModel], bytes]

# Anything a transport may raise for a single failed request.
_REQUEST_ERRORS: tuple[type[BaseException], ...] = (
    CriticalMapsError,
    aiohttp.ClientError,
    TimeoutError,
    ValueError,
)


class _OnceCompletion:
    """Deliver a send result to the caller exactly once."""

    def __init__(self, callback: SendCompletion | None) -> None:
        self._callback = callback
        self.done = False

    def __call__(self, result: dict[str, ChatMessage] | None) -> None:
        if self.done:
            return
        self.done = True
        if self._callback is None:
            return
        try:
            self._callback(result)
        except Exception:
            _logger.exception("send() completion callback failed")


class SyncController:
    """Keep a store in sync with the shared location endpoint.

    Every *poll_interval* seconds the controller either posts the
    current device position (when one is known) or fetches the world
    state, and merges the response into *store*. At most one poll is
    outstanding; ticks arriving while it runs are dropped.

    Usage::

        async with SyncController(store, locations, transport, ids, endpoint) as controller:
            await controller.send([SendChatMessage.create("hello")])
    """

    def __init__(
        self,
        store: Store,
        location_provider: LocationSource,
        transport: Transport,
        id_provider: IdentityProvider,
        endpoint: str,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        *,
        execution_host: ExtendedExecutionHost | None = None,
        encoder: Encoder = encode_body,
    ) -> None:
        if poll_interval <= 0:
            raise ConfigError(f"poll_interval must be positive, got {poll_interval}")
        self._endpoint = endpoint
        self._poll_interval = poll_interval
        self._store = store
        self._location_provider = location_provider
        self._transport = transport
        self._id_provider = id_provider
        self._execution_host: ExtendedExecutionHost = execution_host or NullExecutionHost()
        self._encoder = encoder
        self._busy = False
        self._timer_task: asyncio.Task[None] | None = None
        self._pending: set[asyncio.Task[Any]] = set()
        self._owned_transport: HttpTransport | None = None

    @classmethod
    def from_config(
        cls,
        config: SyncConfig,
        store: Store,
        location_provider: LocationSource,
        transport: Transport | None = None,
        *,
        id_provider: IdentityProvider | None = None,
    ) -> SyncController:
        """Build a controller with the defaults described by *config*.

        When *transport* is omitted the controller creates an
        :class:`HttpTransport` and opens/closes it with its own
        ``async with`` block.
        """
        owned: HttpTransport | None = None
        if transport is None:
            owned = HttpTransport(timeout=config.request_timeout)
            transport = owned
        controller = cls(
            store,
            location_provider,
            transport,
            id_provider or DailyRotatingIDProvider(config.device_seed),
            config.endpoint,
            config.poll_interval,
            execution_host=GraceTimerHost(config.background_grace_period),
        )
        controller._owned_transport = owned
        return controller

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def poll_interval(self) -> float:
        return self._poll_interval

    @property
    def busy(self) -> bool:
        """Whether a poll request is outstanding."""
        return self._busy

    @property
    def is_running(self) -> bool:
        return self._timer_task is not None and not self._timer_task.done()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SyncController:
        if self._owned_transport is not None:
            await self._owned_transport.__aenter__()
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()
        if self._owned_transport is not None:
            await self._owned_transport.__aexit__(*exc)

    def start(self) -> None:
        """Start the repeating poll timer on the running loop."""
        if self.is_running:
            return
        self._timer_task = asyncio.get_running_loop().create_task(self._run_timer())

    async def stop(self) -> None:
        """Cancel the poll timer. Requests already in flight still complete."""
        task = self._timer_task
        self._timer_task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run_timer(self) -> None:
        while True:
            await asyncio.sleep(self._poll_interval)
            _logger.info("Timer did update")
            try:
                self.tick()
            except Exception:
                _logger.exception("Poll cycle failed")

    # ------------------------------------------------------------------
    # Poll cycle
    # ------------------------------------------------------------------

    def tick(self) -> asyncio.Task[None] | None:
        """Run one poll cycle.

        Returns the task carrying the request, or ``None`` when the tick
        was dropped because a poll is still outstanding or the request
        could not be built.
        """
        if self._busy:
            _logger.debug("Don't attempt to request new data because a request is still active")
            return None
        self._busy = True

        try:
            location = self._location_provider.current_location
            if location is None:
                request = self._transport.get(self._endpoint)
            else:
                report = PositionReport(device=self._id_provider.id, location=location)
                request = self._transport.post(self._endpoint, self._encoder(report))
        except Exception:
            _logger.warning("Could not build poll request", exc_info=True)
            self._busy = False
            self._on_request_complete(None)
            return None
        return self._spawn(self._complete_poll(request))

    def _spawn(self, coro: Any) -> asyncio.Task[Any]:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _complete_poll(self, request: Any) -> None:
        response = await self._await_response(request)
        self._on_request_complete(response)

    async def _await_response(self, request: Any) -> ApiResponse | None:
        try:
            return await request
        except _REQUEST_ERRORS as exc:
            _logger.debug("Request to %s failed: %s", self._endpoint, exc)
            return None

    def _on_request_complete(self, response: ApiResponse | None, *, owns_busy: bool = True) -> None:
        try:
            self._merge(response)
        finally:
            if owns_busy:
                self._busy = False

    def _merge(self, response: ApiResponse | None) -> None:
        if response is None:
            _logger.error("API update failed")
            return
        try:
            self._store.update(response)
        except Exception:
            _logger.exception("Store rejected API response")
            return
        _logger.info("Successfully finished API update")

    async def fetch(self) -> ApiResponse | None:
        """Fetch and merge the world state now, regardless of the poll cycle."""
        response = await self._await_response(self._transport.get(self._endpoint))
        self._on_request_complete(response, owns_busy=False)
        return response

    # ------------------------------------------------------------------
    # Message submission
    # ------------------------------------------------------------------

    async def send(
        self,
        messages: Sequence[SendChatMessage],
        completion: SendCompletion | None = None,
    ) -> dict[str, ChatMessage] | None:
        """Submit chat messages and merge the server's answer.

        Returns the accepted messages keyed by identifier, or ``None``
        when the submission failed or its execution token expired.
        *completion*, if given, receives the same value exactly once.
        """
        complete = _OnceCompletion(completion)

        def _on_expiry() -> None:
            _logger.warning("Extended execution expired before message submission finished")
            complete(None)
            self._transport.cancel_active_requests_if_needed()

        token: Hashable = self._execution_host.begin(_on_expiry)
        try:
            try:
                batch = MessageBatch(device=self._id_provider.id, messages=list(messages))
                body = self._encoder(batch)
            except _REQUEST_ERRORS:
                _logger.warning("Could not encode message batch", exc_info=True)
                complete(None)
                return None

            response = await self._await_response(self._transport.post(self._endpoint, body))
            self._on_request_complete(response, owns_busy=False)
        except asyncio.CancelledError:
            complete(None)
            raise
        finally:
            self._execution_host.end(token)

        if complete.done:
            return None
        accepted = dict(response.chat_messages) if response is not None else None
        complete(accepted)
        return accepted
