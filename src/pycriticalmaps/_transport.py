"""HTTP transport with response decoding and request cancellation."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from pycriticalmaps._constants import DEFAULT_REQUEST_TIMEOUT, USER_AGENT
from pycriticalmaps._redact import describe_body
from pycriticalmaps.exceptions import DecodeError, TransportError
from pycriticalmaps.models.api import ApiResponse

_logger = logging.getLogger(__name__)


class HttpTransport:
    """aiohttp transport for the Critical Maps endpoint.

    Every request runs in its own task so that
    :meth:`cancel_active_requests_if_needed` can abort it without
    cancelling the caller.

    Usage::

        async with HttpTransport() as transport:
            response = await transport.get("https://api.criticalmaps.net/")
    """

    def __init__(
        self,
        http_session: aiohttp.ClientSession | None = None,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self._external_session = http_session is not None
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._active: set[asyncio.Task[ApiResponse]] = set()

    async def __aenter__(self) -> HttpTransport:
        if self._http is None:
            self._http = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.cancel_active_requests_if_needed()
        if not self._external_session and self._http is not None:
            await self._http.close()
            self._http = None

    @property
    def active_request_count(self) -> int:
        return len(self._active)

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http is None:
            raise TransportError("Transport not initialized. Use 'async with HttpTransport() as transport:'")
        return self._http

    async def get(self, endpoint: str) -> ApiResponse:
        """Fetch the current world state."""
        _logger.debug("GET %s", endpoint)
        return await self._track(self._request("GET", endpoint, None), endpoint)

    async def post(self, endpoint: str, body: bytes) -> ApiResponse:
        """Post an encoded request body and decode the response."""
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug("POST %s body=%s", endpoint, describe_body(body))
        return await self._track(self._request("POST", endpoint, body), endpoint)

    def cancel_active_requests_if_needed(self) -> None:
        """Cancel every in-flight request (best effort)."""
        if not self._active:
            return
        _logger.debug("Cancelling %d active request(s)", len(self._active))
        for task in list(self._active):
            task.cancel()

    async def _track(self, coro: Any, endpoint: str) -> ApiResponse:
        task: asyncio.Task[ApiResponse] = asyncio.ensure_future(coro)
        self._active.add(task)
        task.add_done_callback(self._active.discard)
        try:
            # shield() keeps a caller cancellation from being mistaken for ours
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if task.cancelled():
                current = asyncio.current_task()
                if current is not None and current.cancelling():
                    raise
                raise TransportError(f"Request to {endpoint} cancelled", endpoint=endpoint) from None
            task.cancel()
            raise

    async def _request(self, method: str, endpoint: str, body: bytes | None) -> ApiResponse:
        http = self._require_session()
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if body is not None:
            headers["content-type"] = "application/json; charset=UTF-8"

        try:
            async with http.request(method, endpoint, data=body, headers=headers, timeout=self._timeout) as resp:
                raw = await resp.read()
                if not 200 <= resp.status < 300:
                    raise TransportError(
                        f"HTTP {resp.status} from {endpoint}: {raw[:200].decode('utf-8', errors='replace')}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except TransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise TransportError(
                f"Request to {endpoint} failed: {exc!r}",
                endpoint=endpoint,
            ) from exc

        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(
                f"Invalid JSON from {endpoint}: {raw[:200]!r}",
                endpoint=endpoint,
            ) from exc

        if not isinstance(payload, dict):
            raise DecodeError(f"Unexpected response type from {endpoint}: {type(payload).__name__}", endpoint=endpoint)

        try:
            return ApiResponse.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError(f"Malformed response from {endpoint}: {exc}", endpoint=endpoint) from exc
