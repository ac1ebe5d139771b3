"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Endpoint declarations.

An :class:`Endpoint` describes one API operation as data: its fixed HTTP
method, its path template and the query parameters it accepts. The same
descriptor-building and execution code serves every endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from fennec.adapters.base import RequestBody
from fennec.exceptions import InvalidParameterError, MissingPathParameterError
from fennec.request.context import RequestContext
from fennec.request.descriptor import RequestDescriptor
from fennec.request.params import Param
from fennec.request.path import PathEscaping
from fennec.request.shaping import (
    SHAPING_KEYWORDS,
    ResponseShaping,
    normalize_filter_path,
)


class BodyUsage(str, Enum):
    """Whether an endpoint accepts a request body."""
    NONE = "none"
    OPTIONAL = "optional"
    REQUIRED = "required"


@dataclass(frozen=True)
class PathPart:
    """Placeholder for a caller-supplied identifier in a path template.

    Attributes:
        name: Keyword the identifier is passed as.
        required: Whether the identifier must be given.
        default: Segment used when an optional identifier is absent, such as
            the ``_doc`` type of single-document operations.
    """
    name: str
    required: bool = False
    default: Optional[str] = None


PathTemplate = Tuple[Union[str, PathPart], ...]

# Keywords consumed by Endpoint.request itself; never query parameters.
RESERVED_KEYWORDS = frozenset({"body", "headers", "context"}) | SHAPING_KEYWORDS


@dataclass(frozen=True)
class Endpoint:
    """Declaration of one API operation.

    Attributes:
        name: Dotted operation name, e.g. ``indices.create``.
        method: HTTP method, fixed per endpoint.
        path: Ordered template of literal keywords and :class:`PathPart` s.
        params: Accepted query parameters keyed by Python keyword.
        body: Whether a request body is accepted.
        description: One-line summary of the operation.
    """
    name: str
    method: str
    path: PathTemplate
    params: Mapping[str, Param] = field(default_factory=dict)
    body: BodyUsage = BodyUsage.NONE
    description: str = ""

    def __post_init__(self) -> None:
        clashes = RESERVED_KEYWORDS.intersection(self.params)
        clashes |= set(self.path_part_names()).intersection(self.params)
        if clashes:
            raise ValueError(f"{self.name}: reserved or duplicate keywords {sorted(clashes)}")

    def path_part_names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.path if isinstance(p, PathPart))

    def path_part(self, name: str) -> PathPart:
        for part in self.path:
            if isinstance(part, PathPart) and part.name == name:
                return part
        raise InvalidParameterError(f"{self.name}: unknown path parameter '{name}'")

    def check_body(self, body: Optional[RequestBody]) -> None:
        if body is not None and self.body is BodyUsage.NONE:
            raise InvalidParameterError(f"{self.name}: this operation does not accept a body")
        if body is None and self.body is BodyUsage.REQUIRED:
            raise InvalidParameterError(f"{self.name}: a request body is required")

    def request(
        self,
        *,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        context: Optional[RequestContext] = None,
        pretty: bool = False,
        human: bool = False,
        error_trace: bool = False,
        filter_path: Any = None,
        escaping: PathEscaping = PathEscaping.VALIDATE,
        **kwargs: Any,
    ) -> RequestDescriptor:
        """Build a descriptor from keyword arguments.

        Path identifiers and query parameters are passed by name; identifier
        lists may be given as a sequence or as one comma-joined string. Under
        ``PathEscaping.ESCAPE`` a single string is one identifier and its
        commas are encoded; pass a sequence to name several.

        Raises:
            MissingPathParameterError: If a required path identifier is absent.
            InvalidPathSegmentError: If an identifier is rejected by ``escaping``.
            InvalidParameterError: For unknown names, wrong types, or a body
                the endpoint does not accept.
        """
        part_names = self.path_part_names()
        identifiers: Dict[str, Any] = {}
        params: Dict[str, Any] = {}
        for keyword, value in kwargs.items():
            if keyword in part_names:
                identifiers[keyword] = value
            else:
                params[keyword] = value

        for part in self.path:
            if isinstance(part, PathPart) and part.required and not identifiers.get(part.name):
                raise MissingPathParameterError(self.name, part.name)

        descriptor = RequestDescriptor(
            endpoint=self,
            shaping=ResponseShaping(
                pretty=pretty,
                human=human,
                error_trace=error_trace,
                filter_path=normalize_filter_path(filter_path),
            ),
            context=context,
            escaping=escaping,
        )
        descriptor = descriptor.with_path(**identifiers).with_params(**params)
        if body is not None or self.body is BodyUsage.REQUIRED:
            descriptor = descriptor.with_body(body)
        if headers:
            descriptor = descriptor.with_headers(headers)
        return descriptor
