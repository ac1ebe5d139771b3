"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Request descriptors.

A :class:`RequestDescriptor` is the typed description of one API call: path
identifiers, optional query parameters, an optional body, response-shaping
flags, extra headers and a cancellation context. Descriptors are immutable;
every ``with_*`` method returns a new descriptor, so options can be layered
in any order and the last one applied to a field wins::

    desc = (
        catalog.SEARCH.request(index="logs-2024")
        .with_params(size=10, timeout=timedelta(seconds=30))
        .with_pretty()
        .with_header("X-Opaque-Id", "nightly-report")
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple, Union

import httpx

from fennec.adapters.base import RequestBody
from fennec.exceptions import InvalidParameterError, MissingPathParameterError
from fennec.request.context import RequestContext
from fennec.request.params import check_value, serialize_params
from fennec.request.path import PathEscaping, compose_path, prepare_identifiers
from fennec.request.shaping import ResponseShaping

if TYPE_CHECKING:
    from fennec.request.endpoint import Endpoint

BodyInput = Union[bytes, str, RequestBody]


def normalize_body(body: Optional[BodyInput]) -> Optional[RequestBody]:
    """Encode text bodies as UTF-8 and treat an empty body as absent."""
    if body is None:
        return None
    if isinstance(body, str):
        body = body.encode("utf-8")
    if isinstance(body, (bytes, bytearray)):
        return bytes(body) or None
    if hasattr(body, "__aiter__"):
        return body
    raise InvalidParameterError(
        f"body must be bytes, str or an async iterable of bytes, got {type(body).__name__}"
    )


@dataclass(frozen=True)
class RequestDescriptor:
    """Typed, immutable description of one API call.

    Build descriptors through :meth:`Endpoint.request` rather than directly;
    it validates path identifiers and parameter types.
    """
    endpoint: "Endpoint"
    path_params: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    params: Mapping[str, Any] = field(default_factory=dict)
    body: Optional[RequestBody] = None
    shaping: ResponseShaping = field(default_factory=ResponseShaping)
    headers: Tuple[Tuple[str, str], ...] = ()
    context: Optional[RequestContext] = None
    escaping: PathEscaping = PathEscaping.VALIDATE

    # -- Derived request parts ----------------------------------------------

    @property
    def method(self) -> str:
        return self.endpoint.method

    @property
    def has_body(self) -> bool:
        return self.body is not None

    def path(self) -> str:
        """Compose the URL path from the endpoint template."""
        segments = []
        for part in self.endpoint.path:
            if isinstance(part, str):
                segments.append(part)
            else:
                value = self.path_params.get(part.name, ())
                if not value and part.default:
                    value = part.default
                segments.append(value)
        return compose_path(segments)

    def query_params(self) -> Dict[str, str]:
        """Serialize endpoint parameters and response-shaping flags."""
        params = serialize_params(self.endpoint.params, self.params)
        params.update(self.shaping.to_params())
        return params

    def header_set(self) -> httpx.Headers:
        return httpx.Headers(list(self.headers))

    # -- Option combinators ------------------------------------------------

    def with_path(self, **identifiers: Any) -> RequestDescriptor:
        """Set or replace path identifiers, screened with this descriptor's policy."""
        path_params = dict(self.path_params)
        for name, value in identifiers.items():
            part = self.endpoint.path_part(name)
            if value is None:
                if part.required:
                    raise MissingPathParameterError(self.endpoint.name, name)
                path_params.pop(name, None)
                continue
            prepared = prepare_identifiers(value, self.escaping)
            if not prepared and part.required:
                raise MissingPathParameterError(self.endpoint.name, name)
            path_params[name] = prepared
        return replace(self, path_params=path_params)

    def with_params(self, **values: Any) -> RequestDescriptor:
        """Set query parameters; ``None`` removes a parameter."""
        params = dict(self.params)
        for keyword, value in values.items():
            param = self.endpoint.params.get(keyword)
            if param is None:
                raise InvalidParameterError(
                    f"{self.endpoint.name}: unknown query parameter '{keyword}'"
                )
            checked = check_value(keyword, param, value)
            if checked is None:
                params.pop(keyword, None)
            else:
                params[keyword] = checked
        return replace(self, params=params)

    def with_body(self, body: Optional[BodyInput]) -> RequestDescriptor:
        normalized = normalize_body(body)
        self.endpoint.check_body(normalized)
        return replace(self, body=normalized)

    def with_header(self, name: str, value: str) -> RequestDescriptor:
        """Add one header value; existing values of the same name are kept."""
        return replace(self, headers=self.headers + ((name, value),))

    def with_headers(self, headers: Mapping[str, str]) -> RequestDescriptor:
        return replace(self, headers=self.headers + tuple(headers.items()))

    def with_context(self, context: Optional[RequestContext]) -> RequestDescriptor:
        return replace(self, context=context)

    def with_shaping(self, shaping: ResponseShaping) -> RequestDescriptor:
        return replace(self, shaping=shaping)

    def with_pretty(self, enabled: bool = True) -> RequestDescriptor:
        """Pretty-print the response body."""
        return replace(self, shaping=self.shaping.with_pretty(enabled))

    def with_human(self, enabled: bool = True) -> RequestDescriptor:
        """Render statistics in human-readable units."""
        return replace(self, shaping=self.shaping.with_human(enabled))

    def with_error_trace(self, enabled: bool = True) -> RequestDescriptor:
        """Include the server-side stack trace on errors."""
        return replace(self, shaping=self.shaping.with_error_trace(enabled))

    def with_filter_path(self, *fields: str) -> RequestDescriptor:
        """Restrict which JSON fields the server returns."""
        return replace(self, shaping=self.shaping.with_filter_path(*fields))

    def __repr__(self) -> str:
        return f"<RequestDescriptor {self.endpoint.name} {self.method} {self.path()}>"
