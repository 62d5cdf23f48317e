"""Application core.

:class:`Swerve` is ASGI middleware: it answers the four well-known Swerve
paths itself and hands every other request, untouched, to the wrapped ASGI
application. :class:`SwerveRoutes` holds the same routing for in-process
``Request -> Response`` handlers.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping

from .bootstrap import BootstrapIssuer, RandomSource
from .config import Config, Option, new_config
from .exceptions import HTTPError
from .middleware import apply_middleware
from .requests import Request
from .responses import JavaScriptResponse, JSONResponse, Response, exception_to_response
from .scripts import ScriptBundle, load_scripts

logger = logging.getLogger(__name__)

Handler = Callable[[Request], Awaitable[Response]]
Scope = Mapping[str, Any]
Receive = Callable[[], Awaitable[Mapping[str, Any]]]
Send = Callable[[Mapping[str, Any]], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]

CLIENT_PATH = "/swerve.client.js"
BOOTSTRAP_PATH = "/swerve.bootstrap.js"
CORE_PATH = "/swerve.core.js"
CONFIG_PATH = "/swerve.config.json"


class SwerveRoutes:
    """Exact-path handlers for the Swerve assets and configuration."""

    def __init__(
        self,
        *options: Option,
        base: Config | None = None,
        scripts: ScriptBundle | None = None,
        random_source: RandomSource | None = None,
    ) -> None:
        # The extra copy makes an unserializable config fail here, not per request.
        self._config = new_config(*options, base=base).copy()
        self.scripts = scripts or load_scripts()
        self.issuer = BootstrapIssuer(self.scripts.bootstrap, random_source=random_source)
        self._routes: dict[str, Handler] = {
            CLIENT_PATH: self._serve_client,
            BOOTSTRAP_PATH: self.issuer.issue,
            CORE_PATH: self._serve_core,
            CONFIG_PATH: self._serve_config,
        }
        logger.info(
            "swerve configured with %d imports and %d known hashes",
            len(self._config.imports),
            len(self._config.known_hashes),
        )

    @property
    def config(self) -> Config:
        """A private copy of the configuration; changes to it are never served."""

        return self._config.copy()

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(self._routes)

    def match(self, path: str) -> Handler | None:
        return self._routes.get(path)

    async def dispatch(self, request: Request, fallback: Handler) -> Response:
        handler = self.match(request.path)
        if handler is None:
            return await fallback(request)
        return await handler(request)

    async def __call__(self, request: Request, handler: Handler) -> Response:
        return await self.dispatch(request, handler)

    async def _serve_client(self, request: Request) -> Response:
        return JavaScriptResponse(self.scripts.client)

    async def _serve_core(self, request: Request) -> Response:
        return JavaScriptResponse(self.scripts.core)

    async def _serve_config(self, request: Request) -> Response:
        return JSONResponse(self.config)


def swerve_handler(
    handler: Handler,
    *options: Option,
    base: Config | None = None,
    scripts: ScriptBundle | None = None,
    random_source: RandomSource | None = None,
) -> Handler:
    """Wrap an in-process ``handler`` with the Swerve routes.

    :class:`~swerve.exceptions.HTTPError` raised by ``handler`` is turned into
    a JSON error response.
    """

    routes = SwerveRoutes(*options, base=base, scripts=scripts, random_source=random_source)

    async def endpoint(request: Request) -> Response:
        try:
            return await handler(request)
        except HTTPError as exc:
            return exception_to_response(exc)

    return apply_middleware((routes,), endpoint)


class Swerve:
    """ASGI middleware adding the Swerve routes in front of ``app``."""

    def __init__(
        self,
        app: ASGIApp,
        *options: Option,
        base: Config | None = None,
        scripts: ScriptBundle | None = None,
        random_source: RandomSource | None = None,
    ) -> None:
        self.app = app
        self.routes = SwerveRoutes(*options, base=base, scripts=scripts, random_source=random_source)

    @property
    def config(self) -> Config:
        return self.routes.config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return
        handler = self.routes.match(scope.get("path", ""))
        if handler is None:
            await self.app(scope, receive, send)
            return
        request = Request(
            method=scope.get("method", "GET"),
            path=scope["path"],
            headers=_scope_headers(scope),
        )
        response = await handler(request)
        await send_response(response, send)


def _scope_headers(scope: Scope) -> dict[str, str]:
    """Fold raw ASGI header pairs into a mapping.

    HTTP/2 clients may split ``cookie`` across several fields, so repeated
    cookie values are joined with ``"; "``; other repeats with ``", "``.
    """

    headers: dict[str, str] = {}
    for raw_key, raw_value in scope.get("headers", []):
        key = raw_key.decode("latin-1").lower()
        value = raw_value.decode("latin-1")
        if key in headers:
            separator = "; " if key == "cookie" else ", "
            headers[key] = f"{headers[key]}{separator}{value}"
        else:
            headers[key] = value
    return headers


async def send_response(response: Response, send: Send) -> None:
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": [(k.encode("latin-1"), v.encode("latin-1")) for k, v in response.headers],
        }
    )
    await send({"type": "http.response.body", "body": response.body})


__all__ = [
    "BOOTSTRAP_PATH",
    "CLIENT_PATH",
    "CONFIG_PATH",
    "CORE_PATH",
    "ASGIApp",
    "Handler",
    "Swerve",
    "SwerveRoutes",
    "send_response",
    "swerve_handler",
]
