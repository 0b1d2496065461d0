from __future__ import annotations

from typing import (
    Any,
    Awaitable,
    Callable,
    Mapping,
    MutableMapping,
    Union,
)

TASGIMessage = Mapping[str, Any]
TASGISend = Callable[[TASGIMessage], Awaitable[None]]
TASGIReceive = Callable[[], Awaitable[TASGIMessage]]
TASGIScope = MutableMapping[str, Any]
TASGIHeaders = list[tuple[bytes, bytes]]
TASGIApp = Callable[[TASGIScope, TASGIReceive, TASGISend], Awaitable[Any]]

TQueryScalar = Union[str, int, float, bool, None]
TQueryValue = Union[TQueryScalar, list["TQueryValue"], dict[str, "TQueryValue"]]
TQuery = dict[str, TQueryValue]

TURLSource = Callable[[str], str]
