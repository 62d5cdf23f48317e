"""Swerve server middleware for installable, integrity-checked web apps."""

from .application import (
    BOOTSTRAP_PATH,
    CLIENT_PATH,
    CONFIG_PATH,
    CORE_PATH,
    Swerve,
    SwerveRoutes,
    swerve_handler,
)
from .bootstrap import STATUS_COOKIE_NAME, BootstrapIssuer, KeyObject
from .config import (
    DEFAULT_CONFIG,
    Config,
    ConfigBuilder,
    Import,
    Option,
    new_config,
    with_claim_on_install,
    with_imports,
    with_known_hashes,
    with_known_hashes_from_files,
    with_no_reload_on_install,
    with_title,
)
from .exceptions import ConfigError, HTTPError, KeyGenerationError, SwerveError
from .integrity import HashVariant, hash_files, integrity_hash, sha256_hash, sha384_hash, sha512_hash
from .requests import Request
from .responses import JavaScriptResponse, JSONResponse, Response
from .scripts import ScriptBundle, load_scripts
from .testing import TestClient

__all__ = [
    "BOOTSTRAP_PATH",
    "CLIENT_PATH",
    "CONFIG_PATH",
    "CORE_PATH",
    "DEFAULT_CONFIG",
    "STATUS_COOKIE_NAME",
    "BootstrapIssuer",
    "Config",
    "ConfigBuilder",
    "ConfigError",
    "HTTPError",
    "HashVariant",
    "Import",
    "JSONResponse",
    "JavaScriptResponse",
    "KeyGenerationError",
    "KeyObject",
    "Option",
    "Request",
    "Response",
    "ScriptBundle",
    "Swerve",
    "SwerveError",
    "SwerveRoutes",
    "TestClient",
    "hash_files",
    "integrity_hash",
    "load_scripts",
    "new_config",
    "sha256_hash",
    "sha384_hash",
    "sha512_hash",
    "swerve_handler",
    "with_claim_on_install",
    "with_imports",
    "with_known_hashes",
    "with_known_hashes_from_files",
    "with_no_reload_on_install",
    "with_title",
]
