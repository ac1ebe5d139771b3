"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Response envelope.

A :class:`Response` exposes status code, headers and the raw body stream
exactly as the transport received them. It never decodes the body and never
treats a status code as an error: a 404 or 500 is a normal response, and
``is_error()`` exists only as a convenience for callers.

The caller owns the body and must read or close it::

    async with await client.get(index="logs", id="1") as resp:
        if resp.is_error():
            ...
        payload = json.loads(await resp.read())
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, AsyncIterator, List

import httpx

from fennec.adapters.base import BodyStream
from fennec.exceptions import BodyConsumedError


class Response:
    """Read-once wrapper around one completed exchange."""

    def __init__(self, status_code: int, headers: httpx.Headers, body: BodyStream) -> None:
        self.status_code = status_code
        self.headers = headers
        self.body = body
        self._consumed = False

    @property
    def consumed(self) -> bool:
        """True once the body was read, iterated or closed."""
        return self._consumed

    def _claim(self) -> None:
        if self._consumed:
            raise BodyConsumedError("response body was already read or closed")
        self._consumed = True

    async def read(self) -> bytes:
        """Drain and close the body, returning its bytes.

        Raises:
            BodyConsumedError: If the body was already read or closed.
        """
        self._claim()
        try:
            return await self.body.read()
        finally:
            await self.body.close()

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        """Stream the body in chunks, closing it when iteration ends."""
        self._claim()
        try:
            async for chunk in self.body.aiter_bytes():
                yield chunk
        finally:
            await self.body.close()

    async def close(self) -> None:
        """Release the body without reading it. Safe to call twice."""
        if not self._consumed:
            self._consumed = True
            await self.body.close()

    # -- Helpers -----------------------------------------------------------

    def is_error(self) -> bool:
        """True when the status code is above 299."""
        return self.status_code > 299

    def warnings(self) -> List[str]:
        """Values of every ``Warning`` header sent by the server."""
        return self.headers.get_list("Warning")

    def has_warnings(self) -> bool:
        return len(self.warnings()) > 0

    async def __aenter__(self) -> Response:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def __str__(self) -> str:
        try:
            phrase = HTTPStatus(self.status_code).phrase
        except ValueError:
            phrase = "Unknown Status"
        return f"[{self.status_code} {phrase}]"

    def __repr__(self) -> str:
        return f"<Response {self.status_code}>"
