"""Test current URL."""
from __future__ import annotations

import pytest


def test_url_from_scope(scope):
    from asgi_url.current import url_from_scope

    assert url_from_scope(scope) == "http://testserver:8000/testurl?a=1%202"

    scope["headers"] = []
    assert url_from_scope(scope) == "http://testserver:8000/testurl?a=1%202"

    scope["server"] = ("testserver", None)
    assert url_from_scope(scope) == "http://testserver/testurl?a=1%202"

    del scope["server"]
    assert url_from_scope(scope) == "http://localhost/testurl?a=1%202"
    assert url_from_scope(scope, "example.com") == "http://example.com/testurl?a=1%202"

    scope["scheme"] = "https"
    scope["root_path"] = "/api"
    scope["path"] = "/users list"
    scope["query_string"] = b""
    assert url_from_scope(scope) == "https://localhost/api/users%20list"


def test_current_url_from_scope(scope):
    from asgi_url import URL, CurrentURL

    current = CurrentURL.from_scope(scope)
    url = current.get()
    assert isinstance(url, URL)
    assert url.scheme == "http"
    assert url.host == "testserver"
    assert url.port == 8000
    assert url.path == "/testurl"
    assert url.query == {"a": "1 2"}

    # Returns a copy each time
    url.set("b", "2")
    assert current.get() is not url
    assert current.get().query == {"a": "1 2"}


def test_current_url_cache():
    from asgi_url import CurrentURL

    calls = []

    def source(default_host):
        calls.append(default_host)
        return f"https://{default_host}/page"

    current = CurrentURL(source, default_host="example.com")
    assert not calls

    assert str(current.get()) == "https://example.com/page"
    assert str(current.get()) == "https://example.com/page"
    assert calls == ["example.com"]

    current.clear()
    assert str(current.get()) == "https://example.com/page"
    assert calls == ["example.com", "example.com"]

    current.set_default_host("example.org")
    assert str(current.get()) == "https://example.org/page"
    assert calls == ["example.com", "example.com", "example.org"]


def test_current_url_set():
    from asgi_url import URL, CurrentURL

    current = CurrentURL()
    assert str(current.get()) == "http://localhost"

    url = URL.parse("https://example.com/foo")
    current.set(url)
    url.path = "/changed"
    assert str(current.get()) == "https://example.com/foo"

    current.set("//example.net")
    assert current.get().host == "example.net"

    current.clear()
    assert str(current.get()) == "http://localhost"

    # Independent instances
    other = CurrentURL(default_host="other.host")
    assert current.get().host == "localhost"
    assert other.get().host == "other.host"


def test_current_url_invalid():
    from asgi_url import CurrentURL, InvalidURLError

    current = CurrentURL(lambda _: "http://example.com:port")
    with pytest.raises(InvalidURLError):
        current.get()


@pytest.mark.parametrize(
    "environ, expected",
    [
        ({}, ""),
        ({"REQUEST_URI": "/a?b", "HTTP_X_REWRITE_URL": "/c", "HTTP_REQUEST_URI": "/d"}, "/a?b"),
        ({"HTTP_X_REWRITE_URL": "/c", "HTTP_REQUEST_URI": "/d", "SCRIPT_NAME": "/e"}, "/c"),
        ({"HTTP_REQUEST_URI": "/d", "SCRIPT_NAME": "/e"}, "/d"),
        ({"SCRIPT_NAME": "/app", "PATH_INFO": "/x", "QUERY_STRING": "q=1"}, "/app/x?q=1"),
        ({"PATH_INFO": "/caf\xe9"}, "/caf%E9"),
        ({"SCRIPT_NAME": "/e", "PHP_SELF": "/f"}, "/e"),
        ({"PHP_SELF": "index.php", "QUERY_STRING": ""}, "/index.php"),
        ({"QUERY_STRING": "q=1"}, "/?q=1"),
    ],
)
def test_get_request_uri(environ, expected):
    from asgi_url.current import get_request_uri

    assert get_request_uri(environ) == expected


@pytest.mark.parametrize(
    "environ, expected",
    [
        ({}, "http://localhost"),
        ({"HTTPS": "on", "HTTP_HOST": "example.com", "REQUEST_URI": "/p"}, "https://example.com/p"),
        ({"HTTPS": "OFF", "HTTP_HOST": "example.com", "REQUEST_URI": "/p"}, "http://example.com/p"),
        ({"HTTPS": "", "HTTP_HOST": "example.com:81"}, "http://example.com:81"),
        ({"wsgi.url_scheme": "https", "PATH_INFO": "/p"}, "https://localhost/p"),
    ],
)
def test_url_from_environ(environ, expected):
    from asgi_url.current import url_from_environ

    assert url_from_environ(environ) == expected


def test_current_url_from_environ():
    from asgi_url import CurrentURL

    environ = {"HTTP_HOST": "example.com", "REQUEST_URI": "/foo?bar[]=baz"}
    current = CurrentURL.from_environ(environ)
    url = current.get()
    assert url.host == "example.com"
    assert url.path == "/foo"
    assert url.query == {"bar": ["baz"]}

    current = CurrentURL.from_environ({}, default_host="fallback.host")
    assert str(current.get()) == "http://fallback.host"
