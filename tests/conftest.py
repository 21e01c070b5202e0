from __future__ import annotations

import pytest


@pytest.fixture
def whitelist_file(tmp_path):
    path = tmp_path / "whitelist.txt"
    path.write_text(
        "jonathan@gmail.com\njonathan@hey.com\njonathan@protonmail.com\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    monkeypatch.delenv("WHITELIST_LOG_LEVEL", raising=False)
    monkeypatch.setattr(
        "whitelist_sdk.cli.config.DEFAULT_CONFIG_PATH", tmp_path / "no-config.toml"
    )
    monkeypatch.setattr(
        "whitelist_sdk.cli.config.DEFAULT_KEY_FILE", tmp_path / "keys" / "ed25519.json"
    )
