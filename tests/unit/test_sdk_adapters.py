"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Tests for Transport Adapters.
"""

import httpx
import pytest

from fennec.adapters.base import BytesBody, OutboundRequest, RawResponse
from fennec.adapters.http import HttpTransport
from fennec.adapters.mock import MockTransport
from fennec.request.context import RequestContext


class TestOutboundRequest:
    def test_url_without_query(self):
        assert OutboundRequest(method="GET", path="/_search").url == "/_search"

    def test_url_with_query(self):
        req = OutboundRequest(method="GET", path="/_search", query="size=1")
        assert req.url == "/_search?size=1"


class TestMockTransport:
    def test_initial_state(self):
        transport = MockTransport()
        assert transport.is_connected is True
        assert transport.sent_requests == []

    @pytest.mark.asyncio
    async def test_returns_mocked_response(self):
        transport = MockTransport(responses={
            ("GET", "/logs/_search"): RawResponse(
                status_code=200,
                headers=httpx.Headers({"Content-Type": "application/json"}),
                body=BytesBody(b'{"hits": {}}'),
            ),
        })
        req = OutboundRequest(method="GET", path="/logs/_search", query="size=1")
        result = await transport.perform(req)
        assert result.status_code == 200
        assert result.headers["Content-Type"] == "application/json"
        assert await result.body.read() == b'{"hits": {}}'

    @pytest.mark.asyncio
    async def test_returns_404_for_unmocked(self):
        transport = MockTransport()
        result = await transport.perform(OutboundRequest(method="GET", path="/unknown"))
        assert result.status_code == 404
        assert await result.body.read() == b'{"error":"not mocked"}'

    @pytest.mark.asyncio
    async def test_each_exchange_gets_fresh_body(self):
        transport = MockTransport().add("GET", "/", body=b"ok")
        first = await transport.perform(OutboundRequest(method="GET", path="/"))
        await first.body.close()
        second = await transport.perform(OutboundRequest(method="GET", path="/"))
        assert await second.body.read() == b"ok"

    @pytest.mark.asyncio
    async def test_tracks_sent_requests(self):
        transport = MockTransport()
        req = OutboundRequest(
            method="DELETE",
            path="/logs/_doc/1",
            headers=httpx.Headers({"X-Test": "1"}),
        )
        await transport.perform(req)
        assert len(transport.sent_requests) == 1
        assert transport.sent_requests[0].path == "/logs/_doc/1"

    @pytest.mark.asyncio
    async def test_raises_configured_error(self):
        transport = MockTransport(error=RuntimeError("boom"))
        with pytest.raises(RuntimeError, match="boom"):
            await transport.perform(OutboundRequest(method="GET", path="/"))
        assert len(transport.sent_requests) == 1

    @pytest.mark.asyncio
    async def test_close_clears_state(self):
        transport = MockTransport().add("GET", "/x")
        await transport.perform(OutboundRequest(method="GET", path="/x"))
        await transport.close()
        assert transport.is_connected is False
        assert transport.sent_requests == []


class TestHttpTransport:
    def test_initialization(self):
        transport = HttpTransport(base_url="http://localhost:9200", api_key="key_test")
        assert transport.is_connected is False

    def test_initialization_strips_trailing_slash(self):
        transport = HttpTransport(base_url="http://localhost:9200///")
        assert transport._base_url == "http://localhost:9200"

    def test_timeout_without_context(self):
        transport = HttpTransport(base_url="http://localhost:9200", timeout=12.0)
        req = OutboundRequest(method="GET", path="/")
        assert transport._timeout_for(req) == 12.0

    def test_context_deadline_shortens_timeout(self):
        transport = HttpTransport(base_url="http://localhost:9200", timeout=30.0)
        req = OutboundRequest(
            method="GET", path="/", context=RequestContext.with_timeout(2.0)
        )
        assert transport._timeout_for(req) <= 2.0

    @pytest.mark.asyncio
    async def test_close(self):
        transport = HttpTransport(base_url="http://localhost:9200")
        transport._ensure_client()
        assert transport.is_connected is True
        await transport.close()
        assert transport.is_connected is False
