"""Request primitives."""

from __future__ import annotations

from typing import Mapping


class Request:
    """Immutable view of an incoming request.

    Swerve routes never read a request body, so only the method, path and
    headers are kept.
    """

    __slots__ = ("_cookies", "headers", "method", "path")

    def __init__(
        self,
        *,
        method: str,
        path: str,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.method = method.upper()
        self.path = path
        self.headers = {k.lower(): v for k, v in (headers or {}).items()}
        self._cookies: dict[str, str] | None = None

    @staticmethod
    def _parse_cookies(raw: str) -> dict[str, str]:
        # A bare name counts as a cookie with an empty value. First occurrence wins.
        parsed: dict[str, str] = {}
        for part in raw.split(";"):
            name, _, value = part.strip().partition("=")
            name = name.strip()
            if not name:
                continue
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] == '"':
                value = value[1:-1]
            parsed.setdefault(name, value)
        return parsed

    @property
    def cookies(self) -> Mapping[str, str]:
        if self._cookies is None:
            self._cookies = self._parse_cookies(self.headers.get("cookie", ""))
        return self._cookies

    def header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name.lower(), default)

    def cookie(self, name: str) -> str | None:
        return self.cookies.get(name)
