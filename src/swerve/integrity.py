"""Subresource integrity hashing.

Hashes are formatted exactly like the browser ``integrity`` attribute
(``sha384-<base64 digest>``) so the same string can be used as a known-hash
key in the published configuration and as an SRI attribute in markup.
"""

from __future__ import annotations

import base64
import hashlib
import os
from enum import StrEnum
from pathlib import Path
from typing import Callable, Iterable, Iterator, Mapping, Union

HashFunc = Callable[[bytes], str]
FileCollection = Union[str, os.PathLike, Mapping[str, bytes]]


class HashVariant(StrEnum):
    """Digest strengths accepted by browsers for subresource integrity."""

    WEAK = "sha256"
    STANDARD = "sha384"
    STRONG = "sha512"

    @property
    def prefix(self) -> str:
        return f"{self.value}-"

    @classmethod
    def parse(cls, value: "str | HashVariant") -> "HashVariant":
        """Resolve ``value`` by member name (``standard``) or algorithm (``sha384``)."""

        if isinstance(value, HashVariant):
            return value
        lowered = value.strip().lower()
        for member in cls:
            if lowered in {member.name.lower(), member.value}:
                return member
        raise ValueError(f"Unknown hash variant: {value!r}")


def integrity_hash(variant: HashVariant, data: bytes) -> str:
    """Return the SRI string for ``data`` using ``variant``."""

    digest = hashlib.new(variant.value, data).digest()
    return variant.prefix + base64.b64encode(digest).decode("ascii")


def sha256_hash(data: bytes) -> str:
    return integrity_hash(HashVariant.WEAK, data)


def sha384_hash(data: bytes) -> str:
    return integrity_hash(HashVariant.STANDARD, data)


def sha512_hash(data: bytes) -> str:
    return integrity_hash(HashVariant.STRONG, data)


_HASH_FUNCS: dict[HashVariant, HashFunc] = {
    HashVariant.WEAK: sha256_hash,
    HashVariant.STANDARD: sha384_hash,
    HashVariant.STRONG: sha512_hash,
}


def hash_func(variant: "HashVariant | str | HashFunc") -> HashFunc:
    """Return the hashing callable for ``variant``.

    Callables are passed through unchanged so custom digests can be mixed with
    the built-in variants.
    """

    if callable(variant) and not isinstance(variant, (str, HashVariant)):
        return variant
    return _HASH_FUNCS[HashVariant.parse(variant)]


def iter_files(files: FileCollection) -> Iterator[bytes]:
    """Yield the contents of every regular file in ``files``.

    ``files`` is either a directory, walked recursively in sorted order, or a
    mapping of file names to contents. Directories are never hashed.
    """

    if isinstance(files, Mapping):
        for name in sorted(files):
            yield bytes(files[name])
        return
    root = Path(os.fspath(files))
    if root.is_file():
        yield root.read_bytes()
        return
    if not root.is_dir():
        raise FileNotFoundError(f"No such file or directory: {root!s}")
    for path in sorted(root.rglob("*")):
        if path.is_file():
            yield path.read_bytes()


def hash_files(files: FileCollection, *variants: "HashVariant | str | HashFunc") -> frozenset[str]:
    """Hash every file in ``files`` with each of ``variants``.

    No variants means no hashes; the files are not read.
    """

    funcs = _resolve(variants)
    if not funcs:
        return frozenset()
    hashes: set[str] = set()
    for content in iter_files(files):
        hashes.update(func(content) for func in funcs)
    return frozenset(hashes)


def _resolve(variants: Iterable["HashVariant | str | HashFunc"]) -> tuple[HashFunc, ...]:
    return tuple(hash_func(variant) for variant in variants)


__all__ = [
    "FileCollection",
    "HashFunc",
    "HashVariant",
    "hash_files",
    "hash_func",
    "integrity_hash",
    "iter_files",
    "sha256_hash",
    "sha384_hash",
    "sha512_hash",
]
