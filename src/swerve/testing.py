"""Testing helpers."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import urlencode

from .application import ASGIApp
from .responses import Response
from .serialization import json_decode


class TestClient:
    """Async test client that drives an ASGI application in-process."""

    __test__ = False

    def __init__(self, app: ASGIApp, *, host: str = "testserver") -> None:
        self.app = app
        self.host = host

    async def __aenter__(self) -> "TestClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None

    async def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        cookies: Mapping[str, str] | None = None,
        body: bytes = b"",
    ) -> Response:
        request_headers = {"host": self.host, **{k.lower(): v for k, v in (headers or {}).items()}}
        if cookies:
            request_headers["cookie"] = "; ".join(f"{name}={value}" for name, value in cookies.items())
        scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "scheme": "http",
            "path": path,
            "raw_path": path.encode("latin-1"),
            "query_string": urlencode(query or {}, doseq=True).encode("latin-1"),
            "headers": [(k.encode("latin-1"), v.encode("latin-1")) for k, v in request_headers.items()],
        }
        incoming = [{"type": "http.request", "body": body, "more_body": False}]
        messages: list[Mapping[str, Any]] = []

        async def receive() -> Mapping[str, Any]:
            return incoming.pop(0) if incoming else {"type": "http.disconnect"}

        async def send(message: Mapping[str, Any]) -> None:
            messages.append(dict(message))

        await self.app(scope, receive, send)
        return _collect_response(messages)

    async def get(
        self,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        cookies: Mapping[str, str] | None = None,
    ) -> Response:
        return await self.request("GET", path, query=query, headers=headers, cookies=cookies)

    async def get_json(self, path: str, **kwargs: Any) -> Any:
        response = await self.get(path, **kwargs)
        return json_decode(response.body)


def _collect_response(messages: list[Mapping[str, Any]]) -> Response:
    start = next((message for message in messages if message.get("type") == "http.response.start"), None)
    if start is None:
        raise RuntimeError("application did not start a response")
    body = b"".join(
        message.get("body", b"") for message in messages if message.get("type") == "http.response.body"
    )
    headers = tuple(
        (key.decode("latin-1"), value.decode("latin-1")) for key, value in start.get("headers", [])
    )
    return Response(status=int(start["status"]), headers=headers, body=body)
