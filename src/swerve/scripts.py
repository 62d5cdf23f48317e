"""Script payloads served by Swerve.

The packaged payloads come from the upstream Swerve client build and are
served byte-for-byte; only the bootstrap script is rewritten, per request, to
carry a fresh encryption key.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path

import msgspec

from .integrity import HashFunc, HashVariant, hash_func
from .metadata import SCRIPTS_PACKAGE

CLIENT_SCRIPT = "swerve.client.js"
BOOTSTRAP_SCRIPT = "swerve.bootstrap.js"
CORE_SCRIPT = "swerve.core.js"


class ScriptBundle(msgspec.Struct, frozen=True):
    """The three script payloads exposed over HTTP."""

    client: bytes
    bootstrap: bytes
    core: bytes

    @classmethod
    def from_directory(cls, directory: str | os.PathLike[str]) -> "ScriptBundle":
        root = Path(os.fspath(directory))
        if not root.is_dir():
            raise ValueError(f"Script directory {root!s} does not exist or is not a directory")
        return cls(
            client=(root / CLIENT_SCRIPT).read_bytes(),
            bootstrap=(root / BOOTSTRAP_SCRIPT).read_bytes(),
            core=(root / CORE_SCRIPT).read_bytes(),
        )

    def hashes(self, *variants: HashVariant | str | HashFunc) -> dict[str, tuple[str, ...]]:
        """Return SRI hashes of each payload, keyed by script file name.

        The bootstrap entry hashes the template, not a rendered script.
        """

        funcs = tuple(hash_func(variant) for variant in (variants or (HashVariant.STANDARD,)))
        payloads = {
            CLIENT_SCRIPT: self.client,
            BOOTSTRAP_SCRIPT: self.bootstrap,
            CORE_SCRIPT: self.core,
        }
        return {name: tuple(func(payload) for func in funcs) for name, payload in payloads.items()}


@lru_cache(maxsize=1)
def load_scripts() -> ScriptBundle:
    """Load the payloads shipped inside the package."""

    package = resources.files(SCRIPTS_PACKAGE)
    return ScriptBundle(
        client=package.joinpath(CLIENT_SCRIPT).read_bytes(),
        bootstrap=package.joinpath(BOOTSTRAP_SCRIPT).read_bytes(),
        core=package.joinpath(CORE_SCRIPT).read_bytes(),
    )


__all__ = [
    "BOOTSTRAP_SCRIPT",
    "CLIENT_SCRIPT",
    "CORE_SCRIPT",
    "ScriptBundle",
    "load_scripts",
]
