"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Tests for FennecClient and FennecBuilder.
"""

import json
import logging
from datetime import timedelta

import pytest

from fennec.adapters.http import HttpTransport
from fennec.adapters.mock import MockTransport
from fennec.client import FennecBuilder, FennecClient
from fennec.config.settings import (
    FennecConfig,
    LoggingConfig,
    RequestConfig,
    TransportConfig,
)
from fennec.exceptions import (
    ContextCancelledError,
    InvalidPathSegmentError,
    SDKConfigurationError,
    UnknownEndpointError,
)
from fennec.hooks import HookRegistry
from fennec.request.context import RequestContext
from fennec.request.path import PathEscaping


class TestClientInit:
    def test_default_transport(self):
        client = FennecClient()
        assert isinstance(client.transport, HttpTransport)
        assert client.path_escaping is PathEscaping.VALIDATE

    def test_custom_transport(self, mock_transport):
        client = FennecClient(transport=mock_transport)
        assert client.transport is mock_transport

    def test_api_key_with_custom_transport_rejected(self, mock_transport):
        with pytest.raises(SDKConfigurationError):
            FennecClient(transport=mock_transport, api_key="key")

    def test_invalid_path_escaping(self):
        with pytest.raises(SDKConfigurationError):
            FennecClient(path_escaping="sometimes")

    def test_operations_exposed(self, client):
        assert client.search.endpoint.name == "search"
        assert client.indices.refresh.endpoint.name == "indices.refresh"
        assert client.cat.health.endpoint.name == "cat.health"

    def test_unknown_operation(self, client):
        with pytest.raises(AttributeError):
            client.explode
        with pytest.raises(AttributeError):
            client.indices.explode

    def test_from_config(self):
        config = FennecConfig(
            transport=TransportConfig(base_url="http://es:9200", timeout=5.0),
            request=RequestConfig(
                default_headers={"X-Opaque-Id": "batch"},
                path_escaping=PathEscaping.ESCAPE,
            ),
        )
        client = FennecClient.from_config(config)
        assert client.path_escaping is PathEscaping.ESCAPE
        assert client.default_headers["X-Opaque-Id"] == "batch"
        assert client.transport._base_url == "http://es:9200"

    def test_from_config_applies_logging(self, temp_dir):
        log_file = temp_dir / "logs" / "fennec.log"
        config = FennecConfig(
            logging=LoggingConfig(level="DEBUG", file=str(log_file), json_format=True)
        )
        FennecClient.from_config(config)

        assert logging.getLogger().level == logging.DEBUG
        entries = [json.loads(line) for line in log_file.read_text().splitlines() if line]
        assert entries[-1]["event"] == "FennecClient initialized"
        assert entries[-1]["level"] == "info"

    def test_from_config_can_leave_logging_alone(self, temp_dir):
        log_file = temp_dir / "fennec.log"
        handlers = list(logging.getLogger().handlers)
        config = FennecConfig(logging=LoggingConfig(file=str(log_file)))
        FennecClient.from_config(config, configure_logging=False)

        assert logging.getLogger().handlers == handlers
        assert not log_file.exists()


class TestClientRequests:
    @pytest.mark.asyncio
    async def test_search_end_to_end(self, client, mock_transport):
        response = await client.search(
            index="logs-2024", timeout=timedelta(seconds=30), pretty=True
        )
        assert response.status_code == 200
        await response.close()

        sent = mock_transport.sent_requests[0]
        assert sent.method == "GET"
        assert sent.path == "/logs-2024/_search"
        assert sent.query == "pretty=true&timeout=30s"

    @pytest.mark.asyncio
    async def test_get_defaults_document_type(self, client, mock_transport):
        response = await client.get(index="logs", id="1")
        await response.close()
        assert mock_transport.sent_requests[0].path == "/logs/_doc/1"

    @pytest.mark.asyncio
    async def test_not_found_passes_through(self, client):
        response = await client.get(index="logs", id="missing")
        assert response.status_code == 404
        assert response.is_error()
        await response.close()

    @pytest.mark.asyncio
    async def test_request_by_name(self, client, mock_transport):
        descriptor = client.request("indices.clear_cache", index=["idx1", "idx2"])
        response = await client.perform(descriptor)
        await response.close()
        assert mock_transport.sent_requests[0].path == "/idx1,idx2/_cache/clear"

    def test_request_unknown_name(self, client):
        with pytest.raises(UnknownEndpointError):
            client.request("nope")

    def test_client_escaping_applies(self, mock_transport):
        client = FennecClient(transport=mock_transport, path_escaping=PathEscaping.ESCAPE)
        assert client.get.request(index="logs", id="a/b").path() == "/logs/_doc/a%2Fb"

    def test_validation_rejects_reserved_characters(self, client):
        with pytest.raises(InvalidPathSegmentError):
            client.get.request(index="logs", id="a?b")

    @pytest.mark.asyncio
    async def test_default_headers_merged(self, mock_transport):
        client = FennecClient(transport=mock_transport, default_headers={"X-Foo": "0"})
        response = await client.info(headers={"X-Foo": "1"})
        await response.close()
        assert mock_transport.sent_requests[0].headers.get_list("X-Foo") == ["0", "1"]

    @pytest.mark.asyncio
    async def test_cancellation_fires_error_hook(self):
        errors = []
        hooks = HookRegistry()
        hooks.on_error(errors.append)
        client = FennecClient(transport=MockTransport(delay=5.0), hooks=hooks)

        ctx = RequestContext()
        ctx.cancel()
        with pytest.raises(ContextCancelledError):
            await client.info(context=ctx)
        assert isinstance(errors[0], ContextCancelledError)

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, mock_transport):
        async with FennecClient(transport=mock_transport) as client:
            await (await client.info()).close()
        assert mock_transport.is_connected is False


class TestBuilder:
    def test_build_with_transport(self, mock_transport):
        client = (
            FennecBuilder()
            .set_transport(mock_transport)
            .set_default_header("X-Opaque-Id", "reporting")
            .set_path_escaping(PathEscaping.RAW)
            .build()
        )
        assert client.transport is mock_transport
        assert client.default_headers["X-Opaque-Id"] == "reporting"
        assert client.path_escaping is PathEscaping.RAW

    def test_build_http(self):
        client = (
            FennecBuilder()
            .set_base_url("https://search.internal:9200/")
            .set_api_key("key_123")
            .set_timeout(5.0)
            .build()
        )
        assert isinstance(client.transport, HttpTransport)
        assert client.transport._base_url == "https://search.internal:9200"
        assert client.transport._timeout == 5.0

    def test_empty_base_url_without_transport(self):
        with pytest.raises(SDKConfigurationError):
            FennecBuilder().set_base_url("").build()

    def test_hooks(self, mock_transport):
        hooks = HookRegistry()
        client = FennecBuilder().set_transport(mock_transport).use_hooks(hooks).build()
        assert client.hooks is hooks

    def test_from_config(self):
        config = FennecConfig(transport=TransportConfig(base_url="http://es:9200"))
        client = FennecBuilder.from_config(config).set_timeout(2.0).build()
        assert client.transport._base_url == "http://es:9200"
        assert client.transport._timeout == 2.0

    def test_from_config_applies_logging(self, temp_dir):
        log_file = temp_dir / "builder.log"
        config = FennecConfig(logging=LoggingConfig(level="WARNING", file=str(log_file)))
        FennecBuilder.from_config(config)

        assert logging.getLogger().level == logging.WARNING
        assert log_file.exists()
