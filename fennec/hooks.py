"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Lifecycle Hook Registry.

Provides a registry of hooks that callers can subscribe to in order to
observe or adjust requests without touching the execution engine.

Available hooks:
- on_before_request: Fired before every outbound request; may return a
  modified request
- on_after_response: Fired after every response, before the caller sees it
- on_error: Fired on any transport or cancellation error, and on hook failures
"""

from __future__ import annotations

from typing import Callable, List

from fennec.adapters.base import BaseTransport, OutboundRequest, RawResponse
from fennec.logging_config import get_logger

logger = get_logger(__name__)


BeforeRequestCallback = Callable[[OutboundRequest], OutboundRequest]
AfterResponseCallback = Callable[[OutboundRequest, RawResponse], None]
ErrorCallback = Callable[[Exception], None]


class HookRegistry:
    """
    Manages lifecycle hooks for a client.

    Multiple callbacks per hook are supported and executed in registration
    order. A failing callback is logged and reported to the error hooks; it
    never fails the request it was observing.
    """

    def __init__(self) -> None:
        self._before_request_callbacks: List[BeforeRequestCallback] = []
        self._after_response_callbacks: List[AfterResponseCallback] = []
        self._error_callbacks: List[ErrorCallback] = []

    def __bool__(self) -> bool:
        return bool(
            self._before_request_callbacks
            or self._after_response_callbacks
            or self._error_callbacks
        )

    # -- Registration methods ------------------------------------------------

    def on_before_request(self, callback: BeforeRequestCallback) -> None:
        """Register a callback fired before every outbound request.

        The callback receives the request and **must** return an
        ``OutboundRequest`` (possibly modified).
        """
        self._before_request_callbacks.append(callback)
        logger.debug("Registered on_before_request hook")

    def on_after_response(self, callback: AfterResponseCallback) -> None:
        """Register a callback fired after every response.

        Callbacks must not read the response body; it belongs to the caller.
        """
        self._after_response_callbacks.append(callback)
        logger.debug("Registered on_after_response hook")

    def on_error(self, callback: ErrorCallback) -> None:
        """Register a callback fired on any request error."""
        self._error_callbacks.append(callback)
        logger.debug("Registered on_error hook")

    # -- Firing methods ------------------------------------------------------

    def fire_before_request(self, request: OutboundRequest) -> OutboundRequest:
        """Fire all on_before_request callbacks in order.

        Each callback receives the (possibly mutated) request from the
        previous callback, forming a pipeline.
        """
        current = request
        for cb in self._before_request_callbacks:
            try:
                current = cb(current)
            except Exception as exc:
                logger.error(f"on_before_request hook error: {exc}", exc_info=True)
                self.fire_error(exc)
        return current

    def fire_after_response(self, request: OutboundRequest, response: RawResponse) -> None:
        """Fire all on_after_response callbacks."""
        for cb in self._after_response_callbacks:
            try:
                cb(request, response)
            except Exception as exc:
                logger.error(f"on_after_response hook error: {exc}", exc_info=True)
                self.fire_error(exc)

    def fire_error(self, error: Exception) -> None:
        """Fire all on_error callbacks."""
        for cb in self._error_callbacks:
            try:
                cb(error)
            except Exception:
                # Avoid infinite recursion
                logger.error("on_error hook itself raised an exception", exc_info=True)


class HookedTransport(BaseTransport):
    """Transport wrapper that fires a registry's hooks around each exchange."""

    def __init__(self, inner: BaseTransport, hooks: HookRegistry) -> None:
        self.inner = inner
        self.hooks = hooks

    async def perform(self, request: OutboundRequest) -> RawResponse:
        request = self.hooks.fire_before_request(request)
        try:
            response = await self.inner.perform(request)
        except Exception as exc:
            self.hooks.fire_error(exc)
            raise
        self.hooks.fire_after_response(request, response)
        return response

    async def close(self) -> None:
        await self.inner.close()

    @property
    def is_connected(self) -> bool:
        return self.inner.is_connected
