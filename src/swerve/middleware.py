"""Middleware chaining primitives."""

from __future__ import annotations

from typing import Awaitable, Callable, Iterable

from .requests import Request
from .responses import Response

Handler = Callable[[Request], Awaitable[Response]]
MiddlewareCallable = Callable[[Request, Handler], Awaitable[Response]]

_PipelineKey = tuple[MiddlewareCallable, ...]


def apply_middleware(middlewares: Iterable[MiddlewareCallable], endpoint: Handler) -> Handler:
    """Compose middleware into a single handler.

    The first middleware in ``middlewares`` is the outermost one.
    """

    normalized = tuple(middlewares)
    if not normalized:
        return endpoint
    return _NextHandler(normalized, 0, endpoint)


class _NextHandler:
    __slots__ = ("_endpoint", "_index", "_middlewares")

    def __init__(self, middlewares: _PipelineKey, index: int, endpoint: Handler) -> None:
        self._middlewares = middlewares
        self._index = index
        self._endpoint = endpoint

    async def __call__(self, request: Request) -> Response:
        if self._index >= len(self._middlewares):
            return await self._endpoint(request)
        middleware = self._middlewares[self._index]
        return await middleware(request, _NextHandler(self._middlewares, self._index + 1, self._endpoint))
