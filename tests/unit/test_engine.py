"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Tests for the execution engine.
"""

import asyncio
import time
from datetime import timedelta

import httpx
import pytest

from fennec.adapters.base import BaseTransport, BytesBody, OutboundRequest, RawResponse
from fennec.adapters.mock import MockTransport
from fennec.api import catalog
from fennec.exceptions import (
    ConnectionError,
    ContextCancelledError,
    DeadlineExceededError,
)
from fennec.request.context import RequestContext
from fennec.request.engine import build_request, encode_query, merge_headers, perform


class _BodyTracking(BaseTransport):
    """Answers after a delay and remembers the bodies it handed out."""

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self.bodies = []

    async def perform(self, request: OutboundRequest) -> RawResponse:
        await asyncio.sleep(self.delay)
        body = BytesBody(b"late")
        self.bodies.append(body)
        return RawResponse(status_code=200, body=body)

    async def close(self) -> None:
        pass

    @property
    def is_connected(self) -> bool:
        return True


class TestEncodeQuery:
    def test_empty(self):
        assert encode_query({}) == ""

    def test_sorted_by_key(self):
        assert encode_query({"timeout": "30s", "pretty": "true"}) == "pretty=true&timeout=30s"

    def test_values_escaped(self):
        assert encode_query({"q": "a b&c", "sort": "x,y"}) == "q=a+b%26c&sort=x%2Cy"


class TestMergeHeaders:
    def test_values_appended_not_replaced(self):
        merged = merge_headers(httpx.Headers({"X-Foo": "0"}), httpx.Headers({"X-Foo": "1"}))
        assert merged.get_list("X-Foo") == ["0", "1"]

    def test_empty_outbound_adopts_caller(self):
        merged = merge_headers(httpx.Headers(), httpx.Headers([("A", "1"), ("A", "2")]))
        assert merged.get_list("A") == ["1", "2"]

    def test_empty_caller_keeps_outbound(self):
        outbound = httpx.Headers({"B": "x"})
        assert merge_headers(outbound, httpx.Headers()) is outbound


class TestBuildRequest:
    def test_no_query_means_no_question_mark(self):
        request = build_request(catalog.INFO.request())
        assert request.query == ""
        assert request.url == "/"

    def test_query_and_path(self):
        desc = catalog.SEARCH.request(
            index="logs-2024", timeout=timedelta(seconds=30), pretty=True
        )
        request = build_request(desc)
        assert request.method == "GET"
        assert request.path == "/logs-2024/_search"
        assert request.query == "pretty=true&timeout=30s"
        assert request.url == "/logs-2024/_search?pretty=true&timeout=30s"

    def test_content_type_set_for_body(self):
        request = build_request(catalog.SEARCH.request(body=b'{"query": {}}'))
        assert request.headers["Content-Type"] == "application/json"
        assert request.body == b'{"query": {}}'

    def test_no_content_type_without_body(self):
        assert "Content-Type" not in build_request(catalog.SEARCH.request()).headers

    def test_no_content_type_for_empty_body(self):
        assert "Content-Type" not in build_request(catalog.SEARCH.request(body=b"")).headers

    def test_caller_content_type_wins(self):
        desc = catalog.BULK.request(
            body=b'{"index": {}}\n{}\n',
            headers={"Content-Type": "application/x-ndjson"},
        )
        request = build_request(desc)
        assert request.headers.get_list("Content-Type") == ["application/x-ndjson"]

    def test_default_content_type_wins(self):
        desc = catalog.SEARCH.request(body=b"{}")
        request = build_request(desc, default_headers={"Content-Type": "application/vnd+json"})
        assert request.headers.get_list("Content-Type") == ["application/vnd+json"]

    def test_default_and_caller_headers_both_kept(self):
        desc = catalog.INFO.request().with_header("X-Foo", "1")
        request = build_request(desc, default_headers={"X-Foo": "0"})
        assert request.headers.get_list("X-Foo") == ["0", "1"]

    def test_context_carried(self):
        ctx = RequestContext()
        assert build_request(catalog.INFO.request(context=ctx)).context is ctx


class TestPerform:
    @pytest.mark.asyncio
    async def test_returns_response(self, mock_transport):
        response = await perform(catalog.INFO.request(), mock_transport)
        assert response.status_code == 200
        assert await response.read() == b'{"version": {"number": "6.8.2"}}'

    @pytest.mark.asyncio
    async def test_not_found_is_a_response(self):
        transport = MockTransport().add("GET", "/missing/_doc/1", status_code=404, body=b"{}")
        desc = catalog.GET.request(index="missing", id="1")
        response = await perform(desc, transport)
        assert response.status_code == 404
        assert response.is_error()
        await response.close()

    @pytest.mark.asyncio
    async def test_transport_error_propagates_unchanged(self):
        error = ConnectionError("refused")
        transport = MockTransport(error=error)
        with pytest.raises(ConnectionError) as exc_info:
            await perform(catalog.INFO.request(), transport)
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_default_headers_reach_transport(self):
        transport = MockTransport()
        desc = catalog.INFO.request(headers={"X-Foo": "1"})
        response = await perform(desc, transport, default_headers={"X-Foo": "0"})
        await response.close()
        sent = transport.sent_requests[0]
        assert sent.headers.get_list("X-Foo") == ["0", "1"]

    @pytest.mark.asyncio
    async def test_streaming_body_forwarded(self):
        async def chunks():
            yield b'{"index": {}}\n'
            yield b'{"a": 1}\n'

        transport = MockTransport()
        response = await perform(catalog.BULK.request(body=chunks()), transport)
        await response.close()
        assert transport.sent_requests[0].body == b'{"index": {}}\n{"a": 1}\n'


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancel_returns_promptly(self):
        transport = MockTransport(delay=5.0)
        ctx = RequestContext()
        asyncio.get_running_loop().call_later(0.05, ctx.cancel)

        start = time.monotonic()
        with pytest.raises(ContextCancelledError) as exc_info:
            await perform(catalog.INFO.request(context=ctx), transport)
        assert time.monotonic() - start < 1.0
        assert not isinstance(exc_info.value, DeadlineExceededError)

    @pytest.mark.asyncio
    async def test_deadline_exceeded(self):
        transport = MockTransport(delay=5.0)
        ctx = RequestContext.with_timeout(0.05)

        start = time.monotonic()
        with pytest.raises(DeadlineExceededError):
            await perform(catalog.INFO.request(context=ctx), transport)
        assert time.monotonic() - start < 1.0

    @pytest.mark.asyncio
    async def test_already_cancelled_context_never_reaches_transport(self):
        transport = MockTransport()
        ctx = RequestContext()
        ctx.cancel()
        with pytest.raises(ContextCancelledError):
            await perform(catalog.INFO.request(context=ctx), transport)
        assert transport.sent_requests == []

    @pytest.mark.asyncio
    async def test_parent_cancellation_propagates(self):
        transport = MockTransport(delay=5.0)
        parent = RequestContext()
        child = parent.child()
        asyncio.get_running_loop().call_later(0.05, parent.cancel)
        with pytest.raises(ContextCancelledError):
            await perform(catalog.INFO.request(context=child), transport)

    @pytest.mark.asyncio
    async def test_context_not_triggered(self):
        transport = MockTransport().add("GET", "/", body=b"ok")
        ctx = RequestContext.with_timeout(5.0)
        response = await perform(catalog.INFO.request(context=ctx), transport)
        assert await response.read() == b"ok"

    @pytest.mark.asyncio
    async def test_cancel_from_another_thread(self):
        transport = MockTransport(delay=5.0)
        ctx = RequestContext()
        loop = asyncio.get_running_loop()
        loop.call_later(0.05, lambda: loop.run_in_executor(None, ctx.cancel))
        with pytest.raises(ContextCancelledError):
            await perform(catalog.INFO.request(context=ctx), transport)

    @pytest.mark.asyncio
    async def test_abandoned_exchange_is_cancelled(self):
        transport = _BodyTracking(delay=5.0)
        ctx = RequestContext.with_timeout(0.05)
        with pytest.raises(DeadlineExceededError):
            await perform(catalog.INFO.request(context=ctx), transport)
        await asyncio.sleep(0.01)
        assert transport.bodies == []
