"""Minimal application wrapped by Swerve.

Install the project, then run ``python example.py`` to boot a local app with
the Swerve routes enabled. Every path other than ``/swerve.*`` is answered by
the small ASGI app below.

``SWERVE_TITLE`` sets the published title and ``SWERVE_TRUSTED_DIR`` points
at a directory of files whose sha384 hashes are published as known hashes.
Service workers require a secure origin, so outside ``localhost`` provide
``SWERVE_TLS_CERT`` and ``SWERVE_TLS_KEY``.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Awaitable, Callable, Mapping

from swerve import Import, Swerve, with_imports, with_known_hashes_from_files, with_title
from swerve.config import Option
from swerve.integrity import HashVariant
from swerve.serialization import json_encode
from swerve.server import ServerConfig, run

PAGE = b"""<!doctype html>
<title>Swerve example</title>
<script src="/swerve.client.js"></script>
<p>Swerve example</p>
"""


async def app(
    scope: Mapping[str, Any],
    receive: Callable[[], Awaitable[Mapping[str, Any]]],
    send: Callable[[Mapping[str, Any]], Awaitable[None]],
) -> None:
    """Serve an HTML page at ``/`` and a JSON echo everywhere else."""

    if scope["type"] != "http":
        return
    if scope["path"] == "/":
        content_type, body = b"text/html; charset=utf-8", PAGE
    else:
        content_type, body = b"application/json", json_encode({"path": scope["path"]})
    await send({"type": "http.response.start", "status": 200, "headers": [(b"content-type", content_type)]})
    await send({"type": "http.response.body", "body": body})


def create_app() -> Swerve:
    """Wrap :func:`app` with Swerve options read from the environment."""

    options: list[Option] = [
        with_title(os.getenv("SWERVE_TITLE", "Swerve example")),
        with_imports(Import(path="/app.js")),
    ]
    trusted = os.getenv("SWERVE_TRUSTED_DIR")
    if trusted:
        options.append(with_known_hashes_from_files(trusted, HashVariant.STANDARD))
    return Swerve(app, *options)


def main() -> None:
    """Boot the Granian development server."""

    logging.basicConfig(level=os.getenv("SWERVE_LOG_LEVEL", "INFO"))
    config = ServerConfig(
        host=os.getenv("SWERVE_HOST", "127.0.0.1"),
        port=int(os.getenv("SWERVE_PORT", "8443")),
        certificate_path=os.getenv("SWERVE_TLS_CERT") or None,
        private_key_path=os.getenv("SWERVE_TLS_KEY") or None,
    )
    print(f"Serving Swerve example on Granian at {config.origin}")
    run(create_app(), config)


if __name__ == "__main__":
    main()
