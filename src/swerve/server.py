"""Granian hosting for Swerve applications.

Browsers only register service workers from a secure context: an HTTPS
origin, or plain HTTP on a loopback host. :class:`ServerConfig` refuses any
other plain-HTTP bind, since the client runtime could never install there.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import msgspec
from granian import Granian

from .application import ASGIApp

logger = logging.getLogger(__name__)

LOOPBACK_HOSTS: frozenset[str] = frozenset({"localhost", "127.0.0.1", "::1"})

_APP: ASGIApp | None = None


class ServerConfig(msgspec.Struct, frozen=True):
    host: str = "127.0.0.1"
    port: int = 8443
    workers: int = 1
    certificate_path: str | None = None
    private_key_path: str | None = None

    def __post_init__(self) -> None:
        if (self.certificate_path is None) != (self.private_key_path is None):
            raise ValueError("certificate_path and private_key_path must be given together")
        if not self.tls and self.host not in LOOPBACK_HOSTS:
            raise ValueError(
                f"service workers require HTTPS; refusing plain HTTP on non-loopback host {self.host!r}"
            )

    @property
    def tls(self) -> bool:
        return self.certificate_path is not None

    @property
    def origin(self) -> str:
        scheme = "https" if self.tls else "http"
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{scheme}://{host}:{self.port}"


def granian_options(config: ServerConfig) -> dict[str, Any]:
    """Translate ``config`` into Granian keyword arguments.

    Raises :class:`FileNotFoundError` when a configured TLS file is missing.
    """

    options: dict[str, Any] = {
        "address": config.host,
        "port": config.port,
        "interface": "asgi",
        "workers": config.workers,
    }
    if config.tls:
        certificate = Path(config.certificate_path or "")
        key = Path(config.private_key_path or "")
        for path in (certificate, key):
            if not path.is_file():
                raise FileNotFoundError(f"TLS file not found: {path}")
        options["ssl_cert"] = certificate
        options["ssl_key"] = key
    return options


def _load_app() -> ASGIApp:
    if _APP is None:
        raise RuntimeError("no Swerve application registered for Granian")
    return _APP


def create_server(app: ASGIApp, config: ServerConfig | None = None) -> Granian:
    global _APP
    cfg = config or ServerConfig()
    options = granian_options(cfg)
    _APP = app
    logger.info("serving Swerve at %s", cfg.origin)
    return Granian("swerve.server:_load_app", **options)


def run(app: ASGIApp, config: ServerConfig | None = None) -> None:
    global _APP
    server = create_server(app, config)
    try:
        server.serve(target_loader=_load_app, wrap_loader=False)
    finally:
        _APP = None


__all__ = ["LOOPBACK_HOSTS", "ServerConfig", "create_server", "granian_options", "run"]
