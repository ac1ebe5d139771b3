"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Transport base class and data structures.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, AsyncIterable, AsyncIterator, Optional, Union

import httpx

if TYPE_CHECKING:
    from fennec.request.context import RequestContext

RequestBody = Union[bytes, AsyncIterable[bytes]]


class BodyStream(ABC):
    """Readable response body owned by whoever holds it."""

    @abstractmethod
    def aiter_bytes(self) -> AsyncIterator[bytes]:
        """Yield the body in chunks as they arrive."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection or buffer."""
        ...

    async def read(self) -> bytes:
        chunks = [chunk async for chunk in self.aiter_bytes()]
        return b"".join(chunks)


class BytesBody(BodyStream):
    """In-memory body, used by the mock transport and for empty responses."""

    def __init__(self, content: bytes = b"") -> None:
        self._content = content
        self.closed = False

    async def aiter_bytes(self) -> AsyncIterator[bytes]:
        if self._content:
            yield self._content

    async def close(self) -> None:
        self.closed = True


@dataclass
class OutboundRequest:
    """Outbound HTTP request handed to a transport.

    ``path`` never contains the query string; ``query`` is already encoded
    and empty when there are no parameters.
    """
    method: str
    path: str
    query: str = ""
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: Optional[RequestBody] = None
    context: Optional["RequestContext"] = None

    @property
    def url(self) -> str:
        """Path plus ``?query`` when there is one."""
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path


@dataclass
class RawResponse:
    """Status, headers and unread body exactly as received by a transport."""
    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: BodyStream = field(default_factory=BytesBody)


class BaseTransport(ABC):
    """Abstract base for all transports.

    A transport is created once and shared by every request of a client,
    possibly from many tasks at once; implementations must be safe for
    concurrent use. Errors raised by :meth:`perform` reach the caller
    unchanged.
    """

    @abstractmethod
    async def perform(self, request: OutboundRequest) -> RawResponse:
        """Perform the exchange and return the raw response."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release transport resources."""
        ...

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the transport is in a usable state."""
        ...
