"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Fennec Client & Builder.

Provides two entry points to initialize a client:
    - ``FennecClient(base_url=...)`` -- quick start with sensible defaults
    - ``FennecBuilder().set_base_url(...).set_transport(...).build()`` -- advanced config

Operations from the endpoint catalog are exposed as awaitable attributes::

    async with FennecClient(base_url="http://localhost:9200") as client:
        resp = await client.search(index="logs-2024", size=10, pretty=True)
        await client.indices.refresh(index="logs-2024")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import httpx

from fennec.adapters.base import BaseTransport
from fennec.adapters.http import HttpTransport
from fennec.api.catalog import get_endpoint, namespaces
from fennec.config.settings import FennecConfig, LoggingConfig
from fennec.exceptions import ContextError, SDKConfigurationError
from fennec.hooks import HookedTransport, HookRegistry
from fennec.logging_config import get_logger, setup_logging
from fennec.request import engine
from fennec.request.descriptor import RequestDescriptor
from fennec.request.endpoint import Endpoint
from fennec.request.path import PathEscaping
from fennec.request.response import Response

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:9200"


def apply_logging_config(config: LoggingConfig) -> None:
    """Configure structured logging from the ``logging`` config section."""
    setup_logging(
        level=config.level,
        log_file=Path(config.file) if config.file else None,
        json_format=config.json_format,
    )


class BoundEndpoint:
    """An endpoint bound to a client; call it to execute the operation."""

    def __init__(self, client: FennecClient, endpoint: Endpoint) -> None:
        self._client = client
        self.endpoint = endpoint

    def request(self, **kwargs: Any) -> RequestDescriptor:
        """Build a descriptor without executing it."""
        return self.endpoint.request(escaping=self._client.path_escaping, **kwargs)

    async def __call__(self, **kwargs: Any) -> Response:
        return await self._client.perform(self.request(**kwargs))

    def __repr__(self) -> str:
        return f"<BoundEndpoint {self.endpoint.name}>"


class Namespace:
    """Group of bound endpoints such as ``client.indices``."""

    def __init__(self, name: str, members: Mapping[str, BoundEndpoint]) -> None:
        self._name = name
        self._members = dict(members)

    def __getattr__(self, item: str) -> BoundEndpoint:
        try:
            return self._members[item]
        except KeyError:
            raise AttributeError(f"'{self._name}' has no operation '{item}'") from None

    def __dir__(self):
        return sorted(self._members)

    def __repr__(self) -> str:
        return f"<Namespace {self._name}: {', '.join(sorted(self._members))}>"


class FennecClient:
    """Client for a search-engine REST API.

    The transport is created once and shared by every operation; the client
    itself holds no per-request state, so it can be used from many tasks.

    Args:
        base_url: Root URL of the cluster. Defaults to ``http://localhost:9200``.
        api_key: API key for the default HTTP transport.
        timeout: Request timeout in seconds for the default HTTP transport.
        verify_tls: Whether the default HTTP transport verifies certificates.
        transport: Optional custom transport (overrides base_url/api_key/timeout).
        default_headers: Headers sent with every request; caller headers are
            added alongside them, never replacing them.
        path_escaping: How caller identifiers are placed into URL paths.
        hooks: Optional lifecycle hook registry.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        verify_tls: bool = True,
        transport: Optional[BaseTransport] = None,
        default_headers: Optional[Mapping[str, str]] = None,
        path_escaping: PathEscaping = PathEscaping.VALIDATE,
        hooks: Optional[HookRegistry] = None,
    ) -> None:
        if transport is not None and api_key is not None:
            raise SDKConfigurationError(
                "api_key only applies to the default HTTP transport; "
                "configure authentication on the custom transport instead."
            )
        if not isinstance(path_escaping, PathEscaping):
            raise SDKConfigurationError(
                f"path_escaping must be a PathEscaping value, got {path_escaping!r}"
            )

        self._hooks = hooks if hooks is not None else HookRegistry()
        self._base_transport = transport or HttpTransport(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
            verify_tls=verify_tls,
        )
        self._transport: BaseTransport = HookedTransport(self._base_transport, self._hooks)
        self._default_headers = httpx.Headers(default_headers or {})
        self.path_escaping = path_escaping

        self._root: Dict[str, BoundEndpoint] = {}
        self._namespaces: Dict[str, Namespace] = {}
        for namespace, members in namespaces().items():
            bound = {short: BoundEndpoint(self, e) for short, e in members.items()}
            if namespace:
                self._namespaces[namespace] = Namespace(namespace, bound)
            else:
                self._root.update(bound)

        logger.info("FennecClient initialized")

    @classmethod
    def from_config(
        cls,
        config: FennecConfig,
        hooks: Optional[HookRegistry] = None,
        configure_logging: bool = True,
    ) -> FennecClient:
        """Create a client from a loaded :class:`FennecConfig`.

        Unless ``configure_logging`` is False, the ``logging`` section is
        applied first so the client's own events follow it.
        """
        if configure_logging:
            apply_logging_config(config.logging)
        return cls(
            base_url=config.transport.base_url,
            api_key=config.transport.api_key or None,
            timeout=config.transport.timeout,
            verify_tls=config.transport.verify_tls,
            default_headers=config.request.default_headers,
            path_escaping=config.request.path_escaping,
            hooks=hooks,
        )

    # -- Operation access --------------------------------------------------

    def __getattr__(self, item: str) -> Any:
        # Only reached for names that are not regular attributes.
        if item.startswith("_"):
            raise AttributeError(item)
        if item in self._root:
            return self._root[item]
        if item in self._namespaces:
            return self._namespaces[item]
        raise AttributeError(f"'FennecClient' has no operation '{item}'")

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def transport(self) -> BaseTransport:
        """The transport passed in or created at construction (without hooks)."""
        return self._base_transport

    @property
    def default_headers(self) -> httpx.Headers:
        return httpx.Headers(self._default_headers)

    def request(self, name: str, **kwargs: Any) -> RequestDescriptor:
        """Build a descriptor for the endpoint with the given dotted name."""
        return get_endpoint(name).request(escaping=self.path_escaping, **kwargs)

    async def perform(self, descriptor: RequestDescriptor) -> Response:
        """Execute a descriptor through this client's transport.

        Non-2xx responses are returned, not raised. Transport errors and
        context cancellation propagate to the caller.
        """
        try:
            return await engine.perform(
                descriptor,
                self._transport,
                default_headers=self._default_headers,
            )
        except ContextError as exc:
            self._hooks.fire_error(exc)
            raise

    # -- Lifecycle ---------------------------------------------------------

    async def close(self) -> None:
        """Release all resources."""
        await self._transport.close()
        logger.info("FennecClient closed")

    async def __aenter__(self) -> FennecClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


# ---------------------------------------------------------------------------
# FennecBuilder (advanced initialization)
# ---------------------------------------------------------------------------

class FennecBuilder:
    """Fluent builder for advanced FennecClient configuration.

    Example::

        client = (
            FennecBuilder()
            .set_base_url("https://search.internal:9200")
            .set_api_key("key_123")
            .set_default_header("X-Opaque-Id", "reporting")
            .set_path_escaping(PathEscaping.ESCAPE)
            .build()
        )
    """

    def __init__(self) -> None:
        self._base_url: str = DEFAULT_BASE_URL
        self._api_key: Optional[str] = None
        self._timeout: float = 30.0
        self._verify_tls: bool = True
        self._transport: Optional[BaseTransport] = None
        self._default_headers: Dict[str, str] = {}
        self._path_escaping: PathEscaping = PathEscaping.VALIDATE
        self._hooks: Optional[HookRegistry] = None

    @classmethod
    def from_config(
        cls, config: FennecConfig, configure_logging: bool = True
    ) -> FennecBuilder:
        """Start from a loaded configuration; later setters override it."""
        if configure_logging:
            apply_logging_config(config.logging)
        builder = cls()
        builder._base_url = config.transport.base_url
        builder._api_key = config.transport.api_key or None
        builder._timeout = config.transport.timeout
        builder._verify_tls = config.transport.verify_tls
        builder._default_headers = dict(config.request.default_headers)
        builder._path_escaping = config.request.path_escaping
        return builder

    def set_base_url(self, url: str) -> FennecBuilder:
        """Set the cluster base URL."""
        self._base_url = url
        return self

    def set_api_key(self, key: str) -> FennecBuilder:
        """Set the API key."""
        self._api_key = key
        return self

    def set_timeout(self, seconds: float) -> FennecBuilder:
        self._timeout = seconds
        return self

    def set_transport(self, transport: BaseTransport) -> FennecBuilder:
        """Override the default HTTP transport with a custom one."""
        self._transport = transport
        return self

    def set_default_header(self, name: str, value: str) -> FennecBuilder:
        self._default_headers[name] = value
        return self

    def set_path_escaping(self, escaping: PathEscaping) -> FennecBuilder:
        self._path_escaping = escaping
        return self

    def use_hooks(self, hooks: HookRegistry) -> FennecBuilder:
        self._hooks = hooks
        return self

    def build(self) -> FennecClient:
        """Construct the FennecClient.

        Raises:
            SDKConfigurationError: If an API key is set together with a
                custom transport, or the base URL is empty without one.
        """
        if self._transport is None and not self._base_url:
            raise SDKConfigurationError(
                "FennecBuilder.build() requires set_base_url() or set_transport()."
            )

        client = FennecClient(
            base_url=self._base_url,
            api_key=self._api_key,
            timeout=self._timeout,
            verify_tls=self._verify_tls,
            transport=self._transport,
            default_headers=self._default_headers,
            path_escaping=self._path_escaping,
            hooks=self._hooks,
        )
        logger.info(
            f"FennecBuilder: built client with {len(self._default_headers)} default header(s)"
        )
        return client
