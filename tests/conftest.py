from __future__ import annotations

import pytest


@pytest.fixture(params=[pytest.param("asyncio", id="asyncio")])
def aiolib(request):
    return request.param


@pytest.fixture(scope="session")
def receive():
    async def receive():
        return {"type": "http.request"}

    return receive


@pytest.fixture()
def messages():
    return []


@pytest.fixture()
def send(messages):
    async def send(message):
        messages.append(message)

    return send


@pytest.fixture()
def scope():
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "headers": [
            (b"host", b"testserver:8000"),
            (b"accept", b"*/*"),
            (b"user-agent", b"python-httpx/0.16.1"),
        ],
        "scheme": "http",
        "path": "/testurl",
        "query_string": b"a=1%202",
        "server": ("testserver", 8000),
        "client": ("127.0.0.1", 123),
        "root_path": "",
    }
