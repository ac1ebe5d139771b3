"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

URL path composition.

A path is built from ordered segments. Each segment is a string or a sequence
of strings; sequences are joined with a literal comma, which is never
escaped. Empty segments are skipped so an absent optional identifier never
leaves a doubled or trailing slash.

Caller-supplied identifiers are screened according to a :class:`PathEscaping`
policy before composition. Literal keywords such as ``_search`` are not.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Sequence, Tuple, Union
from urllib.parse import quote

from fennec.exceptions import InvalidPathSegmentError

Segment = Union[str, Sequence[str]]

# Characters that change how a URL is parsed once placed in the path.
_RESERVED = re.compile(r"[/?#%\s\x00-\x1f\x7f]")


class PathEscaping(str, Enum):
    """How caller-supplied identifiers are placed into a path.

    RAW:      inserted verbatim, no checks.
    VALIDATE: rejected with InvalidPathSegmentError when they contain
              ``/ ? # %``, whitespace or control characters.
    ESCAPE:   percent-encoded; list items are encoded one by one so the
              joining comma stays literal.
    """
    RAW = "raw"
    VALIDATE = "validate"
    ESCAPE = "escape"


def _join(segment: Segment) -> str:
    if isinstance(segment, str):
        return segment
    return ",".join(segment)


def compose_path(segments: Sequence[Segment]) -> str:
    """Compose a ``/``-prefixed path from ordered segments.

    Example::

        >>> compose_path(["", "idx1,idx2", "_cache", "clear"])
        '/idx1,idx2/_cache/clear'
        >>> compose_path([["a", "b", "c"], "_search"])
        '/a,b,c/_search'
    """
    parts = [joined for joined in (_join(s) for s in segments) if joined]
    if not parts:
        return "/"
    return "/" + "/".join(parts)


def check_identifier(value: str, escaping: PathEscaping) -> str:
    """Screen a single identifier according to ``escaping``.

    Returns:
        The identifier to place into the path.

    Raises:
        InvalidPathSegmentError: Under VALIDATE, when ``value`` contains a
            reserved character.
    """
    if escaping is PathEscaping.RAW:
        return value
    if escaping is PathEscaping.ESCAPE:
        return quote(value, safe="")

    match = _RESERVED.search(value)
    if match is not None:
        raise InvalidPathSegmentError(
            value, f"contains reserved character {match.group()!r}"
        )
    return value


def prepare_identifiers(
    value: Segment,
    escaping: PathEscaping = PathEscaping.VALIDATE,
) -> Tuple[str, ...]:
    """Screen an identifier or identifier list and return it as a tuple.

    Under VALIDATE a single string may carry a pre-joined comma list such as
    ``"idx1,idx2"``; the comma is allowed. Under ESCAPE a single string is
    treated as one identifier and any comma in it is encoded.
    """
    items = (value,) if isinstance(value, str) else tuple(value)
    return tuple(check_identifier(item, escaping) for item in items if item)
