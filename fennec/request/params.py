"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Query parameter declarations and serialization.

Every query parameter is declared with a :class:`ParamKind`. A value of
``None`` means the parameter is absent and is omitted from the query string,
letting the server apply its own default. ``False`` and ``0`` are real values
and are always sent.

Encodings:
    - BOOL      -> ``"true"`` / ``"false"``
    - INT       -> base-10 digits
    - STRING    -> as given (empty string is absent)
    - LIST      -> comma-joined (empty list is absent)
    - DURATION  -> ``<n><unit>`` with the largest exact unit, e.g. ``30s``
    - FREE_FORM -> :class:`Number`, :class:`Text` or :class:`Structured`
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from fennec.exceptions import InvalidParameterError


class ParamKind(str, Enum):
    """Wire type of a query parameter."""
    BOOL = "bool"
    INT = "int"
    STRING = "string"
    LIST = "list"
    DURATION = "duration"
    FREE_FORM = "free_form"


@dataclass(frozen=True)
class Param:
    """Declaration of one optional query parameter.

    Attributes:
        kind: Wire type of the value.
        wire_name: Name sent on the wire, when it differs from the Python
            keyword (``q`` for ``query``, ``_source`` for ``source``).
        description: Short human description, surfaced by the catalog.
    """
    kind: ParamKind
    wire_name: Optional[str] = None
    description: str = ""

    def name_on_wire(self, keyword: str) -> str:
        return self.wire_name or keyword


# ---------------------------------------------------------------------------
# Free-form values
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Number:
    """A numeric free-form value."""
    value: Union[int, float]

    def render(self) -> str:
        if isinstance(self.value, float) and self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


@dataclass(frozen=True)
class Text:
    """A textual free-form value."""
    value: str

    def render(self) -> str:
        return self.value


@dataclass(frozen=True)
class Structured:
    """A structured free-form value, sent as compact JSON."""
    value: Union[Mapping[str, Any], Sequence[Any]]

    def render(self) -> str:
        return json.dumps(self.value, separators=(",", ":"), sort_keys=True)


FreeForm = Union[Number, Text, Structured]


def free_form(value: Any) -> FreeForm:
    """Wrap a raw Python value into the free-form tagged union.

    Structured values are encoded once here, so a value JSON cannot represent
    is rejected while the descriptor is built rather than when it is sent.

    Raises:
        InvalidParameterError: If the value has no free-form representation.
    """
    if isinstance(value, (Number, Text)):
        return value
    # bool is checked before int: it is an int subclass
    if isinstance(value, bool):
        return Text(format_bool(value))
    if isinstance(value, (int, float)):
        return Number(value)
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, Structured):
        structured = value
    elif isinstance(value, (Mapping, list, tuple)):
        structured = Structured(value)
    else:
        raise InvalidParameterError(
            f"unsupported free-form value of type {type(value).__name__}"
        )

    try:
        structured.render()
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"structured value is not JSON-encodable: {e}") from e
    return structured


# ---------------------------------------------------------------------------
# Scalar formatting
# ---------------------------------------------------------------------------

def format_bool(value: bool) -> str:
    return "true" if value else "false"


def format_int(value: int) -> str:
    return str(int(value))


def format_list(values: Sequence[str]) -> str:
    return ",".join(values)


# Largest unit first; every entry is (nanoseconds per unit, suffix).
_DURATION_UNITS: Tuple[Tuple[int, str], ...] = (
    (86_400_000_000_000, "d"),
    (3_600_000_000_000, "h"),
    (60_000_000_000, "m"),
    (1_000_000_000, "s"),
    (1_000_000, "ms"),
    (1_000, "micros"),
    (1, "nanos"),
)


def format_duration(value: timedelta) -> str:
    """Render a duration in the API's compact time-unit form.

    The largest unit that represents the duration exactly is used, so
    ``timedelta(seconds=30)`` becomes ``30s`` and ``timedelta(seconds=1.5)``
    becomes ``1500ms``. A zero duration renders as ``0s``.

    Raises:
        InvalidParameterError: If the duration is negative.
    """
    if value < timedelta(0):
        raise InvalidParameterError(f"duration must not be negative, got {value}")

    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    nanos = micros * 1_000
    if nanos == 0:
        return "0s"

    for size, suffix in _DURATION_UNITS:
        if nanos % size == 0:
            return f"{nanos // size}{suffix}"
    # unreachable: the nanosecond unit always divides
    return f"{nanos}nanos"


# ---------------------------------------------------------------------------
# Validation and serialization
# ---------------------------------------------------------------------------

def check_value(keyword: str, param: Param, value: Any) -> Any:
    """Check that ``value`` matches the declared kind and normalize it.

    Lists are normalized to tuples so a descriptor never shares a mutable
    list with its caller; free-form values are wrapped into the tagged union.

    Raises:
        InvalidParameterError: If the value does not match the declaration.
    """
    if value is None:
        return None

    kind = param.kind
    if kind is ParamKind.BOOL:
        if not isinstance(value, bool):
            raise InvalidParameterError(f"{keyword}: expected bool, got {type(value).__name__}")
        return value
    if kind is ParamKind.INT:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidParameterError(f"{keyword}: expected int, got {type(value).__name__}")
        return value
    if kind is ParamKind.STRING:
        if not isinstance(value, str):
            raise InvalidParameterError(f"{keyword}: expected str, got {type(value).__name__}")
        return value
    if kind is ParamKind.LIST:
        if isinstance(value, str):
            return (value,)
        if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
            raise InvalidParameterError(f"{keyword}: expected a list of str")
        return tuple(value)
    if kind is ParamKind.DURATION:
        if not isinstance(value, timedelta):
            raise InvalidParameterError(
                f"{keyword}: expected datetime.timedelta, got {type(value).__name__}"
            )
        if value < timedelta(0):
            raise InvalidParameterError(f"{keyword}: duration must not be negative")
        return value
    if kind is ParamKind.FREE_FORM:
        try:
            return free_form(value)
        except InvalidParameterError as e:
            raise InvalidParameterError(f"{keyword}: {e}") from e
    raise InvalidParameterError(f"{keyword}: unknown parameter kind {kind!r}")


def encode_value(param: Param, value: Any) -> Optional[str]:
    """Encode one checked value, or return None when it is absent."""
    if value is None:
        return None

    kind = param.kind
    if kind is ParamKind.BOOL:
        return format_bool(value)
    if kind is ParamKind.INT:
        return format_int(value)
    if kind is ParamKind.STRING:
        return value or None
    if kind is ParamKind.LIST:
        return format_list(value) if value else None
    if kind is ParamKind.DURATION:
        return format_duration(value)
    return value.render()


def serialize_params(
    declared: Mapping[str, Param],
    values: Mapping[str, Any],
) -> Dict[str, str]:
    """Serialize query parameter values into wire name/value pairs.

    Args:
        declared: Parameter declarations keyed by Python keyword.
        values: Checked values keyed by Python keyword.

    Returns:
        Mapping of wire name to encoded value, with absent parameters omitted.

    Raises:
        InvalidParameterError: If a value has no declaration.
    """
    params: Dict[str, str] = {}
    for keyword, value in values.items():
        param = declared.get(keyword)
        if param is None:
            raise InvalidParameterError(f"unknown query parameter '{keyword}'")
        encoded = encode_value(param, value)
        if encoded is not None:
            params[param.name_on_wire(keyword)] = encoded
    return params
