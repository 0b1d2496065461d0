""" ASGI-URL -- URL value object for ASGI Applications """
from __future__ import annotations

from .current import CurrentURL
from .errors import IncompleteURLError, InvalidURLError, UndefinedParameterError, URLError
from .middleware import CurrentURLMiddleware
from .query import build_query, parse_query
from .url import URL, Format, parse_url

__all__ = (
    # Errors
    "IncompleteURLError",
    "InvalidURLError",
    "UndefinedParameterError",
    "URLError",
    # URL
    "Format",
    "URL",
    "parse_url",
    # Current URL
    "CurrentURL",
    "CurrentURLMiddleware",
    # Query
    "build_query",
    "parse_query",
)
