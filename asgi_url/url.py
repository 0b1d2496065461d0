"""ASGI-URL includes a `asgi_url.URL` class: a mutable URL value object.

.. code-block:: python

    from asgi_url import URL

    url = URL.parse("https://example.com/foo?page=1")
    url.set("page", 2)
    url.path = "/bar"
    assert str(url) == "https://example.com/bar?page=2"

The object is not internally synchronized, apply external locking if shared
between threads.
"""

from __future__ import annotations

from copy import deepcopy
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Union
from urllib.parse import quote, urlsplit

from yarl import URL as YarlURL

from .errors import IncompleteURLError, InvalidURLError, UndefinedParameterError
from .query import build_query, parse_query
from .utils import strict_unquote

if TYPE_CHECKING:
    from .current import CurrentURL
    from .types import TQuery, TQueryValue


PATH_SAFE = "/:@!$&'()*+,;="
USER_SAFE = "!$&'()*+,;="
PASSWORD_SAFE = ":!$&'()*+,;="
HOST_SAFE = "[]:!$&'()*+,;="

_MISSING: Any = object()


class Format(Enum):
    """URL output format used by :py:meth:`URL.build`."""

    ABSOLUTE = "absolute"
    RELATIVE = "relative"


class URL:
    """Represent an URL.

    :param scheme: URL scheme (``None`` builds protocol-relative URLs)
    :param host: URL host (``None`` means the URL has no authority)
    :param port: URL port
    :param user: user name
    :param password: user password
    :param path: URL path
    :param query: query parameters
    :param fragment: URL fragment
    :param preferred_format: output format of :py:meth:`build`

    """

    __slots__ = (
        "scheme",
        "host",
        "port",
        "user",
        "password",
        "fragment",
        "preferred_format",
        "_path",
        "_query",
    )

    def __init__(
        self,
        scheme: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        path: Optional[str] = "",
        query: Optional[Mapping[str, TQueryValue]] = None,
        fragment: Optional[str] = None,
        *,
        preferred_format: Format = Format.ABSOLUTE,
    ):
        self.scheme = scheme
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.path = path  # type: ignore[assignment]
        self.query = query  # type: ignore[assignment]
        self.fragment = fragment
        self.preferred_format = preferred_format

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        return f"<URL {self.build()!r}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, URL):
            return NotImplemented

        return self.__components__() == other.__components__()

    __hash__ = None  # type: ignore[assignment]

    def __components__(self) -> tuple:
        return (
            self.scheme,
            self.host,
            self.port,
            self.user,
            self.password,
            self._path,
            self._query,
            self.fragment,
            self.preferred_format,
        )

    def __copy__(self) -> URL:
        return URL(
            self.scheme,
            self.host,
            self.port,
            self.user,
            self.password,
            self._path,
            deepcopy(self._query),
            self.fragment,
            preferred_format=self.preferred_format,
        )

    copy = __copy__

    @classmethod
    def parse(cls, url: str) -> URL:
        """Parse the given string.

        :raises InvalidURLError: if the URL is malformed (e.g. non-numeric port or
            broken percent-escapes)
        """
        try:
            parts = urlsplit(url)
        except ValueError as exc:
            raise InvalidURLError(url, str(exc)) from exc

        host = port = user = password = None
        try:
            if parts.netloc:
                userinfo, at, hostport = parts.netloc.rpartition("@")
                if at:
                    user, colon, password = userinfo.partition(":")
                    user = strict_unquote(user)
                    password = strict_unquote(password) if colon else None

                host, port = split_hostport(hostport)
                host = strict_unquote(host)

            path = strict_unquote(parts.path)
            query = parse_query(parts.query)

        except InvalidURLError as exc:
            raise InvalidURLError(url, exc.reason) from exc

        except ValueError as exc:
            raise InvalidURLError(url, str(exc)) from exc

        return cls(
            parts.scheme or None,
            host,
            port,
            user,
            password,
            path,
            query,
            parts.fragment if "#" in url else None,
        )

    @classmethod
    def from_yarl(cls, url: YarlURL) -> URL:
        """Create an URL from :py:class:`yarl.URL`."""
        return cls.parse(str(url))

    def to_yarl(self) -> YarlURL:
        """Convert the URL into :py:class:`yarl.URL`."""
        if self.host is None:
            return YarlURL(self.build_relative(), encoded=True)

        return YarlURL(self.build_absolute(), encoded=True)

    @property
    def path(self) -> str:
        return self._path

    @path.setter
    def path(self, path: Optional[str]):
        self._path = path or ""

    @property
    def query(self) -> TQuery:
        """Query parameters (an ordered dictionary)."""
        return self._query

    @query.setter
    def query(self, query: Optional[Mapping[str, TQueryValue]]):
        self._query = dict(query) if query else {}

    @property
    def query_string(self) -> str:
        """Encoded query parameters. Assign a string to replace the parameters."""
        return build_query(self._query)

    @query_string.setter
    def query_string(self, query_string: Optional[str]):
        self._query = parse_query(query_string.lstrip("?")) if query_string else {}

    @property
    def full_host(self) -> Optional[str]:
        """Get host name including the port, if defined.

        E.g. ``example.com:8080``
        """
        if self.host is None:
            return None

        if self.port is None:
            return self.host

        return f"{self.host}:{self.port}"

    @property
    def has_scheme(self) -> bool:
        return self.scheme is not None

    @property
    def has_host(self) -> bool:
        return self.host is not None

    @property
    def has_port(self) -> bool:
        return self.port is not None

    @property
    def has_user(self) -> bool:
        return self.user is not None

    @property
    def has_password(self) -> bool:
        return self.password is not None

    @property
    def has_path(self) -> bool:
        return self._path != ""

    @property
    def has_query(self) -> bool:
        return bool(self._query)

    @property
    def has_fragment(self) -> bool:
        return self.fragment is not None

    def has(self, key: str) -> bool:
        """See whether a query parameter is defined (even if its value is ``None``)."""
        return key in self._query

    def get(self, key: str, default: Any = _MISSING) -> TQueryValue:
        """Get a query parameter.

        :param default: the value returned when the parameter is not defined
        :raises UndefinedParameterError: if the parameter is not defined and no
            default is given

        """
        try:
            return self._query[key]
        except KeyError:
            if default is _MISSING:
                raise UndefinedParameterError(key) from None
            return default

    def set(self, key: str, value: TQueryValue):
        """Set a query parameter. Existing parameters keep their position."""
        self._query[key] = value

    def add(self, parameters: Union[Mapping[str, TQueryValue], Iterable[tuple[str, TQueryValue]]]):
        """Set multiple query parameters. Defined parameters are overridden."""
        items = parameters.items() if isinstance(parameters, Mapping) else parameters
        for key, value in items:
            self._query[key] = value

    def remove(self, key: str):
        """Remove a query parameter if it is defined."""
        self._query.pop(key, None)

    def remove_all(self):
        """Remove all query parameters."""
        self._query.clear()

    def build(self) -> str:
        """Build an absolute or a relative URL.

        Absolute URL is built only when the host is defined and the preferred format is
        :py:attr:`Format.ABSOLUTE`.
        """
        if self.host is not None and self.preferred_format is Format.ABSOLUTE:
            return self.build_absolute()

        return self.build_relative()

    def build_absolute(self, current: Optional[CurrentURL] = None) -> str:
        """Build an absolute URL.

        :param current: when the host is not defined, take the host (and the scheme,
            if it is not defined too) from the current URL

        :raises IncompleteURLError: if the host cannot be determined
        """
        host, port, scheme = self.host, self.port, self.scheme
        if host is None:
            fallback = current and current.get()
            if fallback is None or fallback.host is None:
                raise IncompleteURLError(self)

            host, port = fallback.host, fallback.port
            if scheme is None:
                scheme = fallback.scheme

        output = f"{scheme}://" if scheme is not None else "//"

        if self.user is not None or self.password is not None:
            output += quote(self.user or "", safe=USER_SAFE)
            if self.password is not None:
                output += f":{ quote(self.password, safe=PASSWORD_SAFE) }"
            output += "@"

        output += quote(host, safe=HOST_SAFE)
        if port is not None:
            output += f":{port}"

        # a forward slash between the host and a non-empty path
        if self._path and not self._path.startswith("/"):
            output += "/"

        return output + self.build_path(protect=False)

    def build_relative(self) -> str:
        """Build a relative URL (path, query and fragment).

        A path which could be read as a scheme (``a:b``) or an authority (``//a/b``) is
        escaped so that the result parses back into the same path.
        """
        return self.build_path(protect=True)

    def build_path(self, *, protect: bool) -> str:
        output = quote(self._path, safe=PATH_SAFE)
        if protect:
            output = protect_path(output)

        query_string = build_query(self._query)
        if query_string:
            output += f"?{query_string}"

        if self.fragment is not None:
            output += f"#{self.fragment}"

        return output


def split_hostport(hostport: str) -> tuple[str, Optional[int]]:
    """Split ``host[:port]`` keeping IPv6 literals bracketed."""
    if hostport.startswith("["):
        end = hostport.find("]") + 1
        host, rest = hostport[:end], hostport[end:]
        if not end or (rest and not rest.startswith(":")):
            raise ValueError(f"Invalid host: {hostport}")  # noqa: TRY003
        port = rest[1:]

    else:
        host, _, port = hostport.partition(":")

    if not host:
        raise ValueError("Missing host")  # noqa: TRY003

    if not port:
        return host, None

    if not (port.isascii() and port.isdigit()):
        raise ValueError(f"Invalid port: {port}")  # noqa: TRY003

    return host, int(port)


def parse_url(url: str) -> URL:
    """Shortcut for :py:meth:`URL.parse`."""
    return URL.parse(url)


def protect_path(path: str) -> str:
    """Escape an encoded relative path which would be parsed as a scheme or an authority."""
    if path.startswith("//"):
        return f"/%2F{path[2:]}"

    segment, slash, rest = path.partition("/")
    if ":" in segment:
        return f"{ segment.replace(':', '%3A') }{slash}{rest}"

    return path
