from __future__ import annotations

import pathlib

import pytest

import swerve.cli as cli
from swerve.integrity import sha256_hash, sha384_hash, sha512_hash
from swerve.serialization import json_decode


def _write_tree(root: pathlib.Path) -> None:
    (root / "nested").mkdir()
    (root / "app.js").write_bytes(b"app")
    (root / "nested" / "lib.js").write_bytes(b"lib")


def test_hash_prints_sorted_hashes(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_tree(tmp_path)
    assert cli.main(["hash", str(tmp_path)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == sorted([sha384_hash(b"app"), sha384_hash(b"lib")])


def test_hash_accepts_multiple_variants(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "one.js"
    target.write_bytes(b"one")
    assert cli.main(["hash", str(target), "--variant", "weak", "--variant", "strong"]) == 0
    assert capsys.readouterr().out.splitlines() == sorted([sha256_hash(b"one"), sha512_hash(b"one")])


def test_hash_reports_missing_path(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["hash", str(tmp_path / "missing")]) == 1
    assert "missing" in capsys.readouterr().err


def test_hash_rejects_unknown_variant(tmp_path: pathlib.Path) -> None:
    with pytest.raises(SystemExit):
        cli.main(["hash", str(tmp_path), "--variant", "md5"])


def test_config_prints_published_document(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_tree(tmp_path)
    result = cli.main(
        [
            "config",
            "--title",
            "Demo",
            "--import",
            "/a.js",
            "--import",
            "/b.js",
            "--known-hashes",
            str(tmp_path / "app.js"),
            "--claim-on-install",
        ]
    )
    assert result == 0
    document = json_decode(capsys.readouterr().out)
    assert document == {
        "title": "Demo",
        "imports": [{"path": "/a.js"}, {"path": "/b.js"}],
        "knownHashes": {sha384_hash(b"app"): {"reason": "config"}},
        "claimOnInstall": True,
    }


def test_config_defaults_to_empty_document(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["config"]) == 0
    assert capsys.readouterr().out.strip() == "{}"


def test_config_reports_missing_known_hashes(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["config", "--known-hashes", str(tmp_path / "missing")]) == 1
    assert "missing" in capsys.readouterr().err
