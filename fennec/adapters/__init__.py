"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Transports.
"""

from fennec.adapters.base import (
    BaseTransport,
    BodyStream,
    BytesBody,
    OutboundRequest,
    RawResponse,
)
from fennec.adapters.http import HttpTransport
from fennec.adapters.mock import MockTransport

__all__ = [
    "BaseTransport",
    "BodyStream",
    "BytesBody",
    "OutboundRequest",
    "RawResponse",
    "HttpTransport",
    "MockTransport",
]
