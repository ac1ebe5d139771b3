"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Mock transport for local testing.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Dict, Mapping, Optional, Tuple

import httpx

from fennec.adapters.base import BaseTransport, BytesBody, OutboundRequest, RawResponse


class MockTransport(BaseTransport):
    """In-memory transport for unit tests.

    Args:
        responses: Mapping from ``(method, path)`` tuples to
            ``RawResponse`` instances. Paths are matched without the query.
        delay: Seconds to wait before answering, to simulate a slow server.
        error: Exception raised by every exchange instead of answering.

    Example::

        transport = MockTransport({
            ("GET", "/logs/_search"): RawResponse(
                status_code=200, body=BytesBody(b'{"hits": {}}')
            ),
        })
    """

    def __init__(
        self,
        responses: Optional[Dict[Tuple[str, str], RawResponse]] = None,
        delay: float = 0.0,
        error: Optional[Exception] = None,
    ) -> None:
        self._responses: Dict[Tuple[str, str], RawResponse] = responses or {}
        self._sent: list[OutboundRequest] = []
        self._closed = False
        self.delay = delay
        self.error = error

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        body: bytes = b"",
        headers: Optional[Mapping[str, str]] = None,
    ) -> MockTransport:
        """Register a canned response and return ``self`` for chaining."""
        self._responses[(method.upper(), path)] = RawResponse(
            status_code=status_code,
            headers=httpx.Headers(headers or {}),
            body=BytesBody(body),
        )
        return self

    async def perform(self, request: OutboundRequest) -> RawResponse:
        if isinstance(request.body, (bytes, type(None))):
            recorded = request
        else:
            content = b"".join([chunk async for chunk in request.body])
            recorded = replace(request, body=content)
        self._sent.append(recorded)

        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error

        key = (request.method.upper(), request.path)
        canned = self._responses.get(key)
        if canned is None:
            return RawResponse(
                status_code=404,
                headers=httpx.Headers({"Content-Type": "application/json"}),
                body=BytesBody(b'{"error":"not mocked"}'),
            )
        # Each exchange gets its own body so one caller closing it does not
        # affect the next.
        content = await canned.body.read()
        return RawResponse(
            status_code=canned.status_code,
            headers=httpx.Headers(canned.headers),
            body=BytesBody(content),
        )

    async def close(self) -> None:
        self._responses.clear()
        self._sent.clear()
        self._closed = True

    @property
    def is_connected(self) -> bool:
        return not self._closed

    @property
    def sent_requests(self) -> list[OutboundRequest]:
        """All requests that have been sent through this transport."""
        return list(self._sent)
