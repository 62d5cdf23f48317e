from __future__ import annotations

from typing import Any, Protocol, TypeVar, cast, overload

import msgspec

T = TypeVar("T")


class _JSONModule(Protocol):
    def encode(self, obj: Any) -> bytes: ...

    def decode(self, data: bytes, *, type: Any = Any) -> Any: ...


_json = cast(_JSONModule, getattr(msgspec, "json"))


def _sanitize_for_json(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(_sanitize_for_json(item) for item in value)
    if isinstance(value, dict):
        return {key: _sanitize_for_json(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize_for_json(item) for item in value]
    return value


def json_encode(value: Any) -> bytes:
    """Serialize ``value`` to JSON bytes using msgspec."""

    if isinstance(value, msgspec.Struct):
        return _json.encode(value)
    return _json.encode(_sanitize_for_json(value))


@overload
def json_decode(data: bytes | str) -> Any: ...


@overload
def json_decode(data: bytes | str, type: type[T]) -> T: ...


def json_decode(data: bytes | str, type: Any = Any) -> Any:
    """Deserialize JSON ``data`` into native Python values or ``type``."""

    return _json.decode(data, type=type)
