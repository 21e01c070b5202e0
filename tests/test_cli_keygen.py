from __future__ import annotations

import io
import json

import pytest

from whitelist_sdk.cli.keys import KeyFileError, load_or_create_signing_key, load_signing_key
from whitelist_sdk.cli.main import _build_parser, main


def test_keygen_creates_then_loads(tmp_path) -> None:
    key_file = tmp_path / "keys" / "root.json"

    first = io.StringIO()
    rc = main(["keygen", "--key-file", str(key_file), "--json"], stdout=first, stderr=io.StringIO())
    assert rc == 0
    created = json.loads(first.getvalue())
    assert created["created"] is True

    second = io.StringIO()
    rc = main(["keygen", "--key-file", str(key_file), "--json"], stdout=second, stderr=io.StringIO())
    assert rc == 0
    loaded = json.loads(second.getvalue())
    assert loaded["created"] is False
    assert loaded["public_key_b64"] == created["public_key_b64"]


def test_keygen_uses_config_key_file(tmp_path) -> None:
    key_file = tmp_path / "configured.json"
    config_path = tmp_path / "config.toml"
    config_path.write_text(f'key_file = "{key_file.as_posix()}"\n', encoding="utf-8")

    out = io.StringIO()
    rc = main(["--config", str(config_path), "keygen"], stdout=out, stderr=io.StringIO())
    assert rc == 0
    assert key_file.exists()
    assert "created signing key" in out.getvalue()


def test_key_file_with_mismatched_keys_rejected(tmp_path) -> None:
    first, _ = load_or_create_signing_key(tmp_path / "a.json")
    second, _ = load_or_create_signing_key(tmp_path / "b.json")
    payload = json.loads((tmp_path / "a.json").read_text(encoding="utf-8"))
    payload["public_key_b64"] = second.public_key_b64
    (tmp_path / "a.json").write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(KeyFileError):
        load_signing_key(tmp_path / "a.json")
    assert first.public_key_b64 != second.public_key_b64


def test_invalid_key_file_is_reported(tmp_path) -> None:
    key_file = tmp_path / "broken.json"
    key_file.write_text("{}", encoding="utf-8")
    err = io.StringIO()
    rc = main(["keygen", "--key-file", str(key_file)], stdout=io.StringIO(), stderr=err)
    assert rc == 1
    assert "key error" in err.getvalue()


def test_root_sign_without_key_file_fails(whitelist_file, tmp_path) -> None:
    err = io.StringIO()
    rc = main(
        ["root", str(whitelist_file), "--sign", "--key-file", str(tmp_path / "missing.json")],
        stdout=io.StringIO(),
        stderr=err,
    )
    assert rc == 1
    assert "key error" in err.getvalue()


def test_keygen_parser_accepts_documented_flags() -> None:
    args = _build_parser().parse_args(["keygen", "--key-file", "k.json", "--json"])
    assert args.key_file == "k.json"
    assert args.json is True
