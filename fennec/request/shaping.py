"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Response-shaping parameters shared by every operation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Tuple

from fennec.exceptions import InvalidParameterError


def normalize_filter_path(value: Any) -> Tuple[str, ...]:
    """Accept ``None``, one field or a sequence of fields.

    Raises:
        InvalidParameterError: If a field is not a string.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)) or not all(isinstance(f, str) for f in value):
        raise InvalidParameterError("filter_path: expected a str or a list of str")
    return tuple(f for f in value if f)


@dataclass(frozen=True)
class ResponseShaping:
    """The generic ``pretty`` / ``human`` / ``error_trace`` / ``filter_path`` set.

    Flags are only sent when enabled; ``filter_path`` only when non-empty.
    """
    pretty: bool = False
    human: bool = False
    error_trace: bool = False
    filter_path: Tuple[str, ...] = ()

    def with_pretty(self, enabled: bool = True) -> ResponseShaping:
        return replace(self, pretty=enabled)

    def with_human(self, enabled: bool = True) -> ResponseShaping:
        return replace(self, human=enabled)

    def with_error_trace(self, enabled: bool = True) -> ResponseShaping:
        return replace(self, error_trace=enabled)

    def with_filter_path(self, *fields: str) -> ResponseShaping:
        return replace(self, filter_path=normalize_filter_path(fields))

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.pretty:
            params["pretty"] = "true"
        if self.human:
            params["human"] = "true"
        if self.error_trace:
            params["error_trace"] = "true"
        if self.filter_path:
            params["filter_path"] = ",".join(self.filter_path)
        return params


SHAPING_KEYWORDS = frozenset({"pretty", "human", "error_trace", "filter_path"})
