"""HTTP status codes emitted by Swerve."""

from __future__ import annotations

from enum import IntEnum


class Status(IntEnum):
    OK = 200
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500


__all__ = ["Status"]
