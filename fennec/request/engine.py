"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Execution engine.

:func:`perform` is the single operation shared by every endpoint. It composes
the path and query string, merges headers, binds the cancellation context and
hands the request to a transport. It holds no state between calls.

Transport errors propagate unchanged. A non-2xx status is a normal response.
"""

from __future__ import annotations

import asyncio
import time
from typing import Mapping, Optional, Union
from urllib.parse import urlencode

import httpx

from fennec.adapters.base import BaseTransport, OutboundRequest, RawResponse
from fennec.logging_config import get_logger, log_request_dispatch
from fennec.request.context import RequestContext
from fennec.request.descriptor import RequestDescriptor
from fennec.request.response import Response

logger = get_logger(__name__)

HEADER_CONTENT_TYPE = "Content-Type"
CONTENT_TYPE_JSON = "application/json"

HeaderInput = Union[httpx.Headers, Mapping[str, str]]


def encode_query(params: Mapping[str, str]) -> str:
    """Encode parameters as ``k=v`` pairs joined by ``&``, sorted by key."""
    return urlencode(sorted(params.items()))


def merge_headers(outbound: httpx.Headers, caller: httpx.Headers) -> httpx.Headers:
    """Merge caller headers into the outbound set without overwriting.

    An empty outbound set adopts the caller's headers wholesale; otherwise
    every caller value is appended after the existing values of that name.
    """
    if not caller:
        return outbound
    if not outbound:
        return httpx.Headers(caller.multi_items())
    return httpx.Headers(outbound.multi_items() + caller.multi_items())


def build_request(
    descriptor: RequestDescriptor,
    default_headers: Optional[HeaderInput] = None,
) -> OutboundRequest:
    """Turn a descriptor into the outbound request a transport receives.

    Args:
        descriptor: Request description.
        default_headers: Headers contributed by the client before the
            caller's own headers are merged in.
    """
    path = descriptor.path()
    query = encode_query(descriptor.query_params())

    headers = httpx.Headers(default_headers or {})
    caller = descriptor.header_set()
    if (
        descriptor.has_body
        and HEADER_CONTENT_TYPE not in caller
        and HEADER_CONTENT_TYPE not in headers
    ):
        headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON
    headers = merge_headers(headers, caller)

    return OutboundRequest(
        method=descriptor.method,
        path=path,
        query=query,
        headers=headers,
        body=descriptor.body,
        context=descriptor.context,
    )


def _discard_abandoned(task: "asyncio.Future[RawResponse]") -> None:
    # The exchange lost the race against cancellation. Retrieve its outcome
    # so it is not reported as unhandled, and release any body it produced.
    if task.cancelled() or task.exception() is not None:
        return
    asyncio.ensure_future(task.result().body.close())


async def _exchange(
    transport: BaseTransport,
    request: OutboundRequest,
    context: Optional[RequestContext],
) -> RawResponse:
    if context is None:
        return await transport.perform(request)

    context.raise_if_done()
    exchange = asyncio.ensure_future(transport.perform(request))
    watcher = asyncio.ensure_future(context.wait())
    try:
        done, _ = await asyncio.wait(
            {exchange, watcher}, return_when=asyncio.FIRST_COMPLETED
        )
    except asyncio.CancelledError:
        exchange.cancel()
        watcher.cancel()
        raise

    if exchange in done:
        watcher.cancel()
        return exchange.result()

    exchange.cancel()
    exchange.add_done_callback(_discard_abandoned)
    raise watcher.result()


async def perform(
    descriptor: RequestDescriptor,
    transport: BaseTransport,
    *,
    default_headers: Optional[HeaderInput] = None,
) -> Response:
    """Execute a request descriptor through a transport.

    Args:
        descriptor: Request description.
        transport: Transport performing the network exchange.
        default_headers: Client-level headers merged before the caller's.

    Returns:
        The response envelope, whatever its status code.

    Raises:
        ContextCancelledError: If the descriptor's context is cancelled
            before the exchange completes.
        DeadlineExceededError: If the context's deadline passes first.
        Exception: Anything the transport raises, unmodified.
    """
    request = build_request(descriptor, default_headers)
    start = time.monotonic()
    try:
        raw = await _exchange(transport, request, descriptor.context)
    except Exception as e:
        log_request_dispatch(
            logger,
            request.method,
            request.url,
            (time.monotonic() - start) * 1000,
            error=e,
            endpoint=descriptor.endpoint.name,
        )
        raise

    log_request_dispatch(
        logger,
        request.method,
        request.url,
        (time.monotonic() - start) * 1000,
        status_code=raw.status_code,
        endpoint=descriptor.endpoint.name,
    )
    return Response(status_code=raw.status_code, headers=raw.headers, body=raw.body)
