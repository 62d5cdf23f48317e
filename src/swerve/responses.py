"""Response primitives."""

from __future__ import annotations

from typing import Any

import msgspec

from .exceptions import HTTPError
from .http import Status
from .serialization import json_encode

JAVASCRIPT_CONTENT_TYPE = "text/javascript"
JSON_CONTENT_TYPE = "application/json"

Headers = tuple[tuple[str, str], ...]


class Response(msgspec.Struct, frozen=True):
    """Immutable response payload."""

    status: int = int(Status.OK)
    headers: Headers = ()
    body: bytes = b""

    def header(self, name: str) -> str | None:
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None


def EmptyResponse(status: int | Status) -> Response:
    """Create a response carrying only a status code."""

    return Response(status=int(status), headers=(("content-length", "0"),), body=b"")


def JavaScriptResponse(script: bytes) -> Response:
    """Create a response serving ``script`` verbatim."""

    return Response(headers=(("content-type", JAVASCRIPT_CONTENT_TYPE),), body=script)


def JSONResponse(data: Any) -> Response:
    """Create a JSON response encoded via :mod:`msgspec`."""

    return Response(headers=(("content-type", JSON_CONTENT_TYPE),), body=json_encode(data))


def exception_to_response(exc: HTTPError) -> Response:
    return Response(
        status=exc.status,
        headers=(("content-type", JSON_CONTENT_TYPE),),
        body=exc.to_response_body(),
    )


__all__ = [
    "JAVASCRIPT_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "EmptyResponse",
    "JSONResponse",
    "JavaScriptResponse",
    "Response",
    "exception_to_response",
]
