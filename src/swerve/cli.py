"""Command line utilities for Swerve."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .config import (
    Import,
    Option,
    new_config,
    with_claim_on_install,
    with_imports,
    with_known_hashes_from_files,
    with_no_reload_on_install,
    with_title,
)
from .integrity import HashVariant, hash_files
from .metadata import PROJECT_NAME

_VARIANT_CHOICES = tuple(member.name.lower() for member in HashVariant)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROJECT_NAME, description="Swerve deployment helpers")
    sub = parser.add_subparsers(dest="command", required=True)

    hashes = sub.add_parser("hash", help="Print subresource integrity hashes for files")
    hashes.add_argument("path", help="File or directory to hash")
    _add_variant_argument(hashes)
    hashes.set_defaults(func=_cmd_hash)

    config = sub.add_parser("config", help="Print the configuration document a server would publish")
    config.add_argument("--title", default=None, help="Title shown by the client runtime")
    config.add_argument(
        "--import",
        dest="imports",
        action="append",
        default=[],
        help="Path of a script the client runtime imports; repeat to keep load order",
    )
    config.add_argument(
        "--known-hashes",
        dest="known_hashes",
        action="append",
        default=[],
        help="File or directory whose contents are trusted",
    )
    _add_variant_argument(config)
    config.add_argument("--no-reload-on-install", action="store_true", help="Do not reload pages after install")
    config.add_argument("--claim-on-install", action="store_true", help="Claim open clients after install")
    config.set_defaults(func=_cmd_config)

    return parser


def _add_variant_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--variant",
        dest="variants",
        action="append",
        choices=_VARIANT_CHOICES,
        default=[],
        help="Digest strength (default: standard); repeat for several",
    )


def _variants(args: argparse.Namespace) -> tuple[HashVariant, ...]:
    return tuple(HashVariant.parse(name) for name in args.variants) or (HashVariant.STANDARD,)


def _cmd_hash(args: argparse.Namespace) -> int:
    try:
        hashes = hash_files(args.path, *_variants(args))
    except FileNotFoundError as exc:
        print(exc, file=sys.stderr)
        return 1
    for value in sorted(hashes):
        print(value)
    return 0


def _cmd_config(args: argparse.Namespace) -> int:
    options: list[Option] = []
    if args.title is not None:
        options.append(with_title(args.title))
    if args.imports:
        options.append(with_imports(*(Import(path=path) for path in args.imports)))
    try:
        for path in args.known_hashes:
            options.append(with_known_hashes_from_files(path, *_variants(args)))
    except FileNotFoundError as exc:
        print(exc, file=sys.stderr)
        return 1
    if args.no_reload_on_install:
        options.append(with_no_reload_on_install(True))
    if args.claim_on_install:
        options.append(with_claim_on_install(True))
    config = new_config(*options)
    print(config.to_json().decode("utf-8"))
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
