"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Generic request core: parameters, paths, descriptors, execution, responses.
"""

from fennec.request.context import RequestContext
from fennec.request.descriptor import RequestDescriptor
from fennec.request.endpoint import BodyUsage, Endpoint, PathPart
from fennec.request.engine import build_request, perform
from fennec.request.params import Number, Param, ParamKind, Structured, Text, free_form
from fennec.request.path import PathEscaping, compose_path
from fennec.request.response import Response
from fennec.request.shaping import ResponseShaping

__all__ = [
    "RequestContext",
    "RequestDescriptor",
    "BodyUsage",
    "Endpoint",
    "PathPart",
    "build_request",
    "perform",
    "Number",
    "Param",
    "ParamKind",
    "Structured",
    "Text",
    "free_form",
    "PathEscaping",
    "compose_path",
    "Response",
    "ResponseShaping",
]
