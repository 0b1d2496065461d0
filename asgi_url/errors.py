from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .url import URL


class URLError(Exception):
    """Base class for ASGI-URL Errors."""


class InvalidURLError(URLError, ValueError):
    """Raise when the given string cannot be parsed as an URL."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        message = f'The given URL "{url}" is invalid'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class IncompleteURLError(URLError):
    """Raise when an absolute URL is requested but no host can be determined."""

    def __init__(self, url: URL):
        self.url = url
        super().__init__("Cannot build an absolute URL without a host")


class UndefinedParameterError(URLError, KeyError):
    """Raise when an undefined query parameter is requested."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Query parameter {self.key!r} is not defined"
