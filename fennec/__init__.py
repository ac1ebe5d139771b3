"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Fennec - generic request core for search-engine REST APIs.

Describes each API operation as data and runs every one of them through a
single execution path: path composition, typed query parameters, header
merging, cancellation, and a uniform response envelope over a pluggable
transport.
"""

from fennec._version import __version__
from fennec.client import FennecBuilder, FennecClient
from fennec.request import (
    Endpoint,
    PathEscaping,
    RequestContext,
    RequestDescriptor,
    Response,
)

__all__ = [
    "__version__",
    "FennecBuilder",
    "FennecClient",
    "Endpoint",
    "PathEscaping",
    "RequestContext",
    "RequestDescriptor",
    "Response",
]
