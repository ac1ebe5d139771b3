"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

HTTP transport (default).
"""

from __future__ import annotations

from typing import AsyncIterator, Mapping, Optional

import httpx

from fennec.adapters.base import BaseTransport, BodyStream, OutboundRequest, RawResponse
from fennec.exceptions import ConnectionError, TransportTimeoutError
from fennec.logging_config import get_logger

logger = get_logger(__name__)


class HttpxBody(BodyStream):
    """Streaming body backed by an ``httpx.Response`` opened with ``stream=True``."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    async def aiter_bytes(self) -> AsyncIterator[bytes]:
        async for chunk in self._response.aiter_bytes():
            yield chunk

    async def close(self) -> None:
        await self._response.aclose()


class HttpTransport(BaseTransport):
    """Default HTTP transport using ``httpx.AsyncClient``.

    Connection pooling is left to httpx. Responses are streamed: the body
    stays open until the caller reads or closes it.

    Args:
        base_url: Root URL of the search cluster (e.g. ``http://localhost:9200``).
        api_key: Optional API key added as ``Authorization: Bearer`` header.
        timeout: Request timeout in seconds; a request context with an
            earlier deadline shortens it.
        verify_tls: Whether to verify TLS certificates.
        headers: Headers sent with every request.
        transport: Optional ``httpx`` transport, e.g. ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        verify_tls: bool = True,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._verify_tls = verify_tls
        self._headers = dict(headers or {})
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._connected = False

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = dict(self._headers)
            if self._api_key:
                headers["Authorization"] = f"Bearer {self._api_key}"
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self._timeout,
                verify=self._verify_tls,
                transport=self._transport,
            )
            self._connected = True
        return self._client

    def _timeout_for(self, request: OutboundRequest) -> float:
        if request.context is None:
            return self._timeout
        remaining = request.context.remaining()
        if remaining is None:
            return self._timeout
        return min(remaining, self._timeout)

    async def perform(self, request: OutboundRequest) -> RawResponse:
        client = self._ensure_client()
        outgoing = client.build_request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.body,
            timeout=self._timeout_for(request),
        )

        try:
            resp = await client.send(outgoing, stream=True)
        except httpx.TimeoutException as e:
            logger.warning(f"Request timed out: {request.method} {request.path}", exc_info=True)
            raise TransportTimeoutError(
                f"{request.method} {request.path} timed out: {e}"
            ) from e
        except httpx.TransportError as e:
            logger.warning(f"Transport failure: {request.method} {request.path}", exc_info=True)
            raise ConnectionError(
                f"{request.method} {request.path} failed: {e}"
            ) from e

        return RawResponse(
            status_code=resp.status_code,
            headers=resp.headers,
            body=HttpxBody(resp),
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected
