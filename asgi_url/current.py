"""Determine the current URL from the request metadata.

:class:`CurrentURL` is a single-slot cache: the URL is resolved lazily on the
first access and kept until it's invalidated with :py:meth:`CurrentURL.clear`.

.. code-block:: python

    from asgi_url import CurrentURL, URL

    async def app(scope, receive, send):
        current = CurrentURL.from_scope(scope, default_host="example.com")

        # Build an absolute URL on the current host
        url = URL(path="/login")
        location = url.build_absolute(current)

"""

from __future__ import annotations

import logging
from copy import copy
from functools import partial
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union
from urllib.parse import quote

from yarl import URL as YarlURL

from .constants import BASE_ENCODING, DEFAULT_HOST, DEFAULT_SCHEME
from .logs import logger
from .url import PATH_SAFE, URL
from .utils import parse_headers

if TYPE_CHECKING:
    from .types import TASGIScope, TURLSource


class CurrentURL:
    """Keep the current URL.

    :param source: a callable which gets the default host and returns the current URL
        string. Without a source the current URL is ``http://<default_host>`` unless
        set explicitly.
    :param default_host: a host to use when the request metadata has no host
    :param logger: a custom logger

    The object is not internally synchronized, apply external locking if shared
    between threads.
    """

    __slots__ = ("source", "default_host", "logger", "_url")

    def __init__(
        self,
        source: Optional[TURLSource] = None,
        *,
        default_host: str = DEFAULT_HOST,
        logger: logging.Logger = logger,
    ):
        self.source = source
        self.default_host = default_host
        self.logger = logger
        self._url: Optional[URL] = None

    def __repr__(self) -> str:
        return f"<CurrentURL {self._url!r}>"

    @classmethod
    def from_scope(cls, scope: TASGIScope, **params) -> CurrentURL:
        """Create a current URL from the given ASGI scope."""
        return cls(partial(url_from_scope, scope), **params)

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any], **params) -> CurrentURL:
        """Create a current URL from the given WSGI/CGI environ."""
        return cls(partial(url_from_environ, environ), **params)

    def get(self) -> URL:
        """Get the current URL. Returns a new copy each time."""
        if self._url is None:
            if self.source is None:
                url = f"{DEFAULT_SCHEME}://{self.default_host}"
            else:
                url = self.source(self.default_host)

            self.logger.debug("Resolve current URL: %s", url)
            self._url = URL.parse(url)

        return copy(self._url)

    def set(self, url: Union[URL, str]):
        """Specify the current URL."""
        self._url = URL.parse(url) if isinstance(url, str) else copy(url)

    def set_default_host(self, host: str):
        """Set the default host and clear the cache."""
        self.default_host = host
        self.clear()

    def clear(self):
        """Clear the cached URL. The next access resolves it again."""
        if self._url is not None:
            self.logger.debug("Clear current URL cache")

        self._url = None


def url_from_scope(scope: TASGIScope, default_host: str = DEFAULT_HOST) -> str:
    """Get the current URL string from an ASGI scope."""
    host = parse_headers(scope.get("headers", [])).get("host")
    if host is None:
        if scope.get("server"):
            host, port = scope["server"]
            if port:
                host = f"{host}:{port}"
        else:
            logger.debug("Host is not defined, use default: %s", default_host)
            host = default_host

    path = quote(f"{ scope.get('root_path', '') }{ scope.get('path', '') }", safe=PATH_SAFE)
    query_string = scope.get("query_string", b"")
    if isinstance(query_string, bytes):
        query_string = query_string.decode(encoding="ascii")

    url = YarlURL.build(
        scheme=scope.get("scheme", DEFAULT_SCHEME),
        authority=host,
        path=path,
        query_string=query_string,
        encoded=True,
    )
    return str(url)


def url_from_environ(environ: Mapping[str, Any], default_host: str = DEFAULT_HOST) -> str:
    """Get the current URL string from a WSGI/CGI environ."""
    scheme = "https" if is_secure(environ) else DEFAULT_SCHEME
    host = environ.get("HTTP_HOST")
    if not host:
        logger.debug("Host is not defined, use default: %s", default_host)
        host = default_host

    return f"{scheme}://{host}{get_request_uri(environ)}"


def is_secure(environ: Mapping[str, Any]) -> bool:
    https = environ.get("HTTPS")
    if https and str(https).lower() != "off":
        return True

    return environ.get("wsgi.url_scheme") == "https"


def get_request_uri(environ: Mapping[str, Any]) -> str:
    """Get the request URI (path and query string) from a WSGI/CGI environ.

    The sources are checked in order:

    * ``REQUEST_URI``
    * ``HTTP_X_REWRITE_URL`` (ISAPI_Rewrite 3.x)
    * ``HTTP_REQUEST_URI`` (ISAPI_Rewrite 2.x)
    * ``SCRIPT_NAME`` + ``PATH_INFO`` or ``PHP_SELF``, with ``QUERY_STRING``

    """
    for key in ("REQUEST_URI", "HTTP_X_REWRITE_URL", "HTTP_REQUEST_URI"):
        if key in environ:
            return environ[key]

    if "SCRIPT_NAME" in environ or "PATH_INFO" in environ:
        path = f"{ environ.get('SCRIPT_NAME', '') }{ environ.get('PATH_INFO', '') }"
    else:
        path = environ.get("PHP_SELF", "")

    # WSGI strings are bytes decoded as latin-1
    request_uri = quote(path.encode(BASE_ENCODING), safe=PATH_SAFE)

    query_string = environ.get("QUERY_STRING")
    if query_string:
        request_uri = f"{request_uri}?{query_string}"

    if request_uri and not request_uri.startswith("/"):
        request_uri = f"/{request_uri}"

    return request_uri
