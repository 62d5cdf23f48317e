"""One-time encryption key issuance.

The bootstrap script is the only payload that carries per-installation
state: each time it is served, a new AES-256-GCM key is generated and spliced
into it as a JSON Web Key. Clients that already completed installation
announce it with the ``swerve.installed`` cookie and are refused, so a key is
normally handed out once per installation.

The cookie is set by the client runtime and is not authenticated. A client
can omit it to obtain another key, or a third party able to set cookies can
block re-installation. The server keeps no record of issued keys.
"""

from __future__ import annotations

import base64
import logging
import secrets
from typing import Callable

import msgspec

from .exceptions import KeyGenerationError
from .http import Status
from .requests import Request
from .responses import EmptyResponse, JavaScriptResponse, Response

logger = logging.getLogger(__name__)

STATUS_COOKIE_NAME = "swerve.installed"
KEY_PLACEHOLDER = b"$$ENCRYPTION_KEY$$"
KEY_SIZE = 32

RandomSource = Callable[[int], bytes]


class KeyObject(msgspec.Struct, frozen=True, kw_only=True):
    """JSON Web Key describing an extractable AES-256-GCM key."""

    alg: str = "A256GCM"
    ext: bool = True
    k: str
    key_ops: tuple[str, ...] = ("encrypt", "decrypt")
    kty: str = "oct"


def is_installed(request: Request) -> bool:
    """Return ``True`` when the request carries the installation cookie."""

    return STATUS_COOKIE_NAME in request.cookies


def encode_key(key: bytes) -> bytes:
    """Return the compact JWK document for ``key``."""

    material = base64.urlsafe_b64encode(key).rstrip(b"=").decode("ascii")
    return msgspec.json.encode(KeyObject(k=material))


class BootstrapIssuer:
    """Serve the bootstrap script with a freshly generated key."""

    __slots__ = ("_random_source", "_template")

    def __init__(self, template: bytes, *, random_source: RandomSource | None = None) -> None:
        if KEY_PLACEHOLDER not in template:
            raise ValueError("bootstrap template does not contain the key placeholder")
        self._template = bytes(template)
        self._random_source = random_source or secrets.token_bytes

    def generate_key(self) -> bytes:
        try:
            key = self._random_source(KEY_SIZE)
        except (OSError, NotImplementedError) as exc:
            raise KeyGenerationError("secure random source failed") from exc
        if len(key) != KEY_SIZE:
            raise KeyGenerationError(f"secure random source returned {len(key)} bytes, expected {KEY_SIZE}")
        return key

    def render(self, key: bytes) -> bytes:
        """Substitute the first key placeholder in the template."""

        return self._template.replace(KEY_PLACEHOLDER, encode_key(key), 1)

    async def issue(self, request: Request) -> Response:
        if is_installed(request):
            logger.debug("refusing bootstrap for installed client on %s", request.path)
            return EmptyResponse(Status.NOT_FOUND)
        try:
            key = self.generate_key()
        except KeyGenerationError:
            logger.exception("bootstrap key generation failed")
            return EmptyResponse(Status.INTERNAL_SERVER_ERROR)
        logger.debug("issued bootstrap key")
        return JavaScriptResponse(self.render(key))


__all__ = [
    "KEY_PLACEHOLDER",
    "KEY_SIZE",
    "STATUS_COOKIE_NAME",
    "BootstrapIssuer",
    "KeyObject",
    "encode_key",
    "is_installed",
]
