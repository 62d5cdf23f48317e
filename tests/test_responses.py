from __future__ import annotations

from swerve.config import Config
from swerve.exceptions import HTTPError
from swerve.http import Status
from swerve.responses import (
    EmptyResponse,
    JavaScriptResponse,
    JSONResponse,
    Response,
    exception_to_response,
)
from swerve.serialization import json_decode, json_encode


def test_javascript_response_serves_bytes_verbatim() -> None:
    response = JavaScriptResponse(b"let x = 1;\n")
    assert response.status == 200
    assert response.body == b"let x = 1;\n"
    assert response.header("Content-Type") == "text/javascript"


def test_json_response_encodes_structs_and_mappings() -> None:
    assert JSONResponse(Config(title="t")).body == b'{"title":"t"}'
    response = JSONResponse({"ok": True})
    assert response.header("content-type") == "application/json"
    assert json_decode(response.body) == {"ok": True}


def test_empty_response_has_no_body() -> None:
    response = EmptyResponse(Status.NOT_FOUND)
    assert response.status == 404
    assert response.body == b""
    assert response.header("content-length") == "0"
    assert response.header("content-type") is None


def test_default_response_is_ok() -> None:
    assert Response() == Response(status=200, headers=(), body=b"")


def test_exception_to_response_serializes() -> None:
    response = exception_to_response(HTTPError(400, "bad request"))
    assert response.status == 400
    assert response.header("content-type") == "application/json"
    assert json_decode(response.body) == {"error": {"status": 400, "detail": "bad request"}}


def test_json_encode_sorts_sets() -> None:
    assert json_encode({"hashes": frozenset({"b", "a"})}) == b'{"hashes":["a","b"]}'
    assert json_decode(b'{"title":"x"}', Config) == Config(title="x")
