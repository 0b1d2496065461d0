"""Encode and decode query strings.

The codec understands the bracket notation used by HTML forms and PHP-like
frameworks:

.. code-block:: python

    from asgi_url.query import build_query, parse_query

    assert parse_query("a[]=1&a[]=2&b[c]=3") == {"a": ["1", "2"], "b": {"c": "3"}}
    assert build_query({"a": ["1", "2"]}) == "a[0]=1&a[1]=2"

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping, Optional
from urllib.parse import quote_plus

from .errors import InvalidURLError
from .utils import strict_unquote

if TYPE_CHECKING:
    from .types import TQuery, TQueryValue


NAME_RE = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")

# The deepest nesting of bracketed parameter names
MAX_NESTING = 64


def parse_query(query: str) -> TQuery:
    """Decode the given query string into an ordered dictionary."""
    result: dict[str, Any] = {}
    for chunk in query.split("&"):
        if not chunk:
            continue

        name, sep, value = chunk.partition("=")
        try:
            name = strict_unquote(name, plus=True)
            decoded = strict_unquote(value, plus=True) if sep else None
        except ValueError as exc:
            raise InvalidURLError(query, str(exc)) from exc

        if not name:
            continue

        segments = split_name(name)
        if len(segments) > MAX_NESTING + 1:
            raise InvalidURLError(query, f"Parameter nesting is deeper than {MAX_NESTING}")

        assign(result, segments, decoded)

    return {key: listify(value) for key, value in result.items()}


def split_name(name: str) -> list[Optional[str]]:
    """Split a parameter name into segments.

    ``a[b][]`` becomes ``["a", "b", None]``, where ``None`` stands for an append.
    Names with unbalanced brackets are kept as a single literal segment.
    """
    match = NAME_RE.match(name)
    if match is None:
        return [name]

    base, rest = match.groups()
    return [base, *(segment or None for segment in SEGMENT_RE.findall(rest))]


def assign(container: dict[str, Any], segments: list[Optional[str]], value: Optional[str]):
    """Put the value into the container following the given segments."""
    key, *rest = segments
    if key is None:
        key = next_index(container)

    if not rest:
        container[key] = value
        return

    child = container.get(key)
    if not isinstance(child, dict):
        child = container[key] = {}

    assign(child, rest, value)


def next_index(container: Mapping[str, Any]) -> str:
    """Get the next free integer key for the container."""
    indexes = [int(key) for key in container if is_index(key)]
    return str(max(indexes, default=-1) + 1)


def is_index(key: str) -> bool:
    return key.isascii() and key.isdigit() and (key == "0" or not key.startswith("0"))


def listify(value: Any) -> TQueryValue:
    """Convert containers with the ``0..n-1`` keys (in order) into lists."""
    if not isinstance(value, dict):
        return value

    items = {key: listify(child) for key, child in value.items()}
    if items and list(items) == [str(idx) for idx in range(len(items))]:
        return list(items.values())

    return items


def build_query(query: Mapping[Any, Any]) -> str:
    """Encode the given mapping into a query string."""
    return "&".join(iter_pairs(query.items()))


def iter_pairs(items: Iterable[tuple[Any, Any]], prefix: Optional[str] = None) -> Iterator[str]:
    for key, value in items:
        name = str(key) if prefix is None else f"{prefix}[{key}]"
        if isinstance(value, Mapping):
            yield from iter_pairs(value.items(), name)

        elif isinstance(value, (list, tuple)):
            yield from iter_pairs(enumerate(value), name)

        elif value is None:
            yield quote_plus(name, safe="[]")

        else:
            yield f"{ quote_plus(name, safe='[]') }={ quote_plus(to_str(value)) }"


def to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"

    return str(value)
