from __future__ import annotations

import pytest


def test_invalid_url_error():
    from asgi_url import InvalidURLError, URLError

    exc = InvalidURLError("//example.com:xx", "Invalid port: xx")
    assert isinstance(exc, URLError)
    assert isinstance(exc, ValueError)
    assert exc.url == "//example.com:xx"
    assert exc.reason == "Invalid port: xx"
    assert str(exc) == 'The given URL "//example.com:xx" is invalid: Invalid port: xx'
    assert str(InvalidURLError("bad")) == 'The given URL "bad" is invalid'


def test_incomplete_url_error():
    from asgi_url import URL, IncompleteURLError, URLError

    url = URL(path="/foo")
    with pytest.raises(IncompleteURLError) as info:
        url.build_absolute()

    assert isinstance(info.value, URLError)
    assert info.value.url is url


def test_undefined_parameter_error():
    from asgi_url import UndefinedParameterError, URLError

    exc = UndefinedParameterError("page")
    assert isinstance(exc, URLError)
    assert isinstance(exc, KeyError)
    assert exc.key == "page"
    assert str(exc) == "Query parameter 'page' is not defined"
