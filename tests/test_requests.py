from __future__ import annotations

from swerve.requests import Request


def build_request(**kwargs) -> Request:
    return Request(method="get", path="/", **kwargs)


def test_request_normalizes_method_and_headers() -> None:
    request = build_request(headers={"Content-Type": "text/plain"})
    assert request.method == "GET"
    assert request.header("content-type") == "text/plain"
    assert request.header("missing", "default") == "default"


def test_cookie_parsing_is_lenient() -> None:
    request = build_request(headers={"Cookie": 'a=1; b="quoted"; bare; c=; a=2; =orphan'})
    assert request.cookies == {"a": "1", "b": "quoted", "bare": "", "c": ""}
    assert request.cookie("a") == "1"
    assert request.cookie("missing") is None


def test_cookies_absent_without_header() -> None:
    request = build_request()
    assert request.cookies == {}
    assert request._cookies == {}
