"""ASGI-URL Middlewares."""

from __future__ import annotations

import abc
import logging
from functools import partial
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from .constants import DEFAULT_HOST, SCOPE_KEY
from .current import CurrentURL
from .logs import logger

if TYPE_CHECKING:
    from .types import TASGIApp, TASGIReceive, TASGIScope, TASGISend


async def not_found(scope: TASGIScope, receive: TASGIReceive, send: TASGISend):
    """Answer with HTTP 404."""
    await send(
        {
            "type": "http.response.start",
            "status": 404,
            "headers": [(b"content-type", b"text/plain; charset=utf-8")],
        }
    )
    await send({"type": "http.response.body", "body": b"Not Found"})


class BaseMiddeware(metaclass=abc.ABCMeta):
    """Base class for ASGI-URL middlewares."""

    scopes: tuple[str, ...] = ("http", "websocket")

    def __init__(self, app: Optional[TASGIApp] = None) -> None:
        """Save ASGI App."""
        self.bind(app)

    def __call__(self, scope: TASGIScope, receive: TASGIReceive, send: TASGISend) -> Awaitable:
        """Handle ASGI call."""
        if scope["type"] in self.scopes:
            return self.__process__(scope, receive, send)

        return self.app(scope, receive, send)

    @abc.abstractmethod
    async def __process__(self, scope: TASGIScope, receive: TASGIReceive, send: TASGISend):
        """Do the middleware's logic."""
        raise NotImplementedError()

    @classmethod
    def setup(cls, **params) -> Callable:
        """Setup the middleware without an initialization."""
        return partial(cls, **params)  # type: ignore[abstract]

    def bind(self, app: Optional[TASGIApp] = None):
        """Rebind the middleware to an ASGI application if it has been inited already."""
        self.app = app or not_found
        return self


class CurrentURLMiddleware(BaseMiddeware):
    """Put :class:`asgi_url.CurrentURL` into the scope and pass it to ASGI_ apps.

    :param default_host: a host to use when the request has no ``Host`` header and
        the scope has no server
    :param logger: a custom logger

    .. code-block:: python

        from asgi_url import CurrentURLMiddleware, URL

        async def app(scope, receive, send):
            current = scope["current_url"]
            location = URL(path="/login").build_absolute(current)
            ...

        app = CurrentURLMiddleware(app, default_host="example.com")

    """

    def __init__(
        self,
        app: Optional[TASGIApp] = None,
        *,
        default_host: str = DEFAULT_HOST,
        logger: logging.Logger = logger,
    ) -> None:
        super().__init__(app)
        self.default_host = default_host
        self.logger = logger

    async def __process__(self, scope: TASGIScope, receive: TASGIReceive, send: TASGISend):
        """Bind the current URL to the scope."""
        current = CurrentURL.from_scope(scope, default_host=self.default_host, logger=self.logger)
        self.logger.debug("Bind current URL to %s scope '%s'", scope["type"], scope.get("path"))
        scope[SCOPE_KEY] = current
        return await self.app(scope, receive, send)
