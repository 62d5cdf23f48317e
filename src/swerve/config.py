"""Published configuration for the Swerve client runtime.

A :class:`Config` is composed once, while the server is being set up, by
folding a sequence of options over a copy of a base configuration. Options
are plain functions from one frozen :class:`Config` to the next, so the base
(``DEFAULT_CONFIG`` unless another is supplied) is never modified.
"""

from __future__ import annotations

from functools import reduce
from typing import Any, Callable, Iterable

import msgspec
from msgspec import structs

from .exceptions import ConfigError
from .integrity import FileCollection, HashFunc, HashVariant, hash_files

KNOWN_HASH_REASON = "config"


class Import(msgspec.Struct, frozen=True, omit_defaults=True):
    """Code the client runtime loads, by ``path``, inline ``code`` or both."""

    path: str = ""
    code: str = ""
    config: dict[str, Any] = {}


class Config(msgspec.Struct, frozen=True, omit_defaults=True, rename="camel"):
    """Configuration document served at ``/swerve.config.json``.

    Empty and false fields are left out of the encoded document.
    """

    title: str = ""
    imports: tuple[Import, ...] = ()
    known_hashes: dict[str, Any] = {}
    no_reload_on_install: bool = False
    claim_on_install: bool = False

    def copy(self) -> "Config":
        """Return a deep copy sharing no mutable state with ``self``."""

        try:
            return msgspec.json.decode(msgspec.json.encode(self), type=Config)
        except (TypeError, msgspec.MsgspecError) as exc:
            raise ConfigError(f"configuration could not be copied: {exc}") from exc

    def to_json(self) -> bytes:
        try:
            return msgspec.json.encode(self)
        except (TypeError, msgspec.MsgspecError) as exc:
            raise ConfigError(f"configuration could not be encoded: {exc}") from exc

    @classmethod
    def from_json(cls, data: bytes | str) -> "Config":
        try:
            return msgspec.json.decode(data, type=cls)
        except msgspec.MsgspecError as exc:
            raise ConfigError(f"configuration could not be decoded: {exc}") from exc


Option = Callable[[Config], Config]

DEFAULT_CONFIG = Config()


def with_title(title: str) -> Option:
    def apply(config: Config) -> Config:
        return structs.replace(config, title=title)

    return apply


def with_imports(*imports: Import) -> Option:
    """Append ``imports`` after any imports already configured.

    Each application appends fresh copies, so configs built from the same
    option never share an ``Import.config`` mapping with each other or with
    the caller.
    """

    added = tuple(imports)

    def apply(config: Config) -> Config:
        return structs.replace(config, imports=config.imports + _copy_imports(added))

    return apply


def _copy_imports(imports: tuple[Import, ...]) -> tuple[Import, ...]:
    try:
        return msgspec.json.decode(msgspec.json.encode(imports), type=tuple[Import, ...])
    except (TypeError, msgspec.MsgspecError) as exc:
        raise ConfigError(f"imports could not be copied: {exc}") from exc


def with_no_reload_on_install(value: bool) -> Option:
    def apply(config: Config) -> Config:
        return structs.replace(config, no_reload_on_install=bool(value))

    return apply


def with_claim_on_install(value: bool) -> Option:
    def apply(config: Config) -> Config:
        return structs.replace(config, claim_on_install=bool(value))

    return apply


def with_known_hashes(*hashes: str) -> Option:
    """Trust ``hashes``; re-adding a hash overwrites its entry."""

    added = tuple(hashes)

    def apply(config: Config) -> Config:
        known = dict(config.known_hashes)
        for value in added:
            known[value] = {"reason": KNOWN_HASH_REASON}
        return structs.replace(config, known_hashes=known)

    return apply


def with_known_hashes_from_files(
    files: FileCollection,
    *variants: HashVariant | str | HashFunc,
) -> Option:
    """Trust every regular file in ``files``, hashed with each of ``variants``.

    Files are read and hashed when the option is created, not per request.
    Without variants the option adds nothing.
    """

    return with_known_hashes(*sorted(hash_files(files, *variants)))


def new_config(*options: Option, base: Config | None = None) -> Config:
    """Apply ``options`` in order to a copy of ``base``."""

    seed = (base if base is not None else DEFAULT_CONFIG).copy()
    return reduce(_apply_option, options, seed)


def _apply_option(config: Config, option: Option) -> Config:
    result = option(config)
    if not isinstance(result, Config):
        raise TypeError(f"option {option!r} returned {type(result).__name__}, expected Config")
    return result


class ConfigBuilder:
    """Ordered collection of options that can be built repeatedly."""

    __slots__ = ("_options",)

    def __init__(self, options: Iterable[Option] = ()) -> None:
        self._options: list[Option] = list(options)

    def add(self, *options: Option) -> "ConfigBuilder":
        self._options.extend(options)
        return self

    @property
    def options(self) -> tuple[Option, ...]:
        return tuple(self._options)

    def build(self, base: Config | None = None) -> Config:
        return new_config(*self._options, base=base)


__all__ = [
    "DEFAULT_CONFIG",
    "KNOWN_HASH_REASON",
    "Config",
    "ConfigBuilder",
    "Import",
    "Option",
    "new_config",
    "with_claim_on_install",
    "with_imports",
    "with_known_hashes",
    "with_known_hashes_from_files",
    "with_no_reload_on_install",
    "with_title",
]
