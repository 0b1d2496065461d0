"""ASGI-URL Utils."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import unquote

from multidict import CIMultiDict

from .constants import BASE_ENCODING, DEFAULT_CHARSET

if TYPE_CHECKING:
    from .types import TASGIHeaders


MALFORMED_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_headers(headers: TASGIHeaders) -> CIMultiDict:
    """Decode the given headers list."""
    return CIMultiDict(
        [(n.decode(BASE_ENCODING), v.decode(BASE_ENCODING)) for n, v in headers],
    )


def strict_unquote(value: str, *, plus: bool = False) -> str:
    """Percent-decode the given value.

    Unlike :py:func:`urllib.parse.unquote` the function does not pass through
    broken escapes: a ``%`` not followed by two hex digits and bytes which are
    not valid UTF-8 raise :py:exc:`ValueError`.
    """
    if plus:
        value = value.replace("+", " ")

    if "%" not in value:
        return value

    match = MALFORMED_ESCAPE_RE.search(value)
    if match:
        raise ValueError(f"Malformed percent-escape at position {match.start()}")  # noqa: TRY003

    return unquote(value, encoding=DEFAULT_CHARSET, errors="strict")
