from __future__ import annotations

import pytest

from whitelist_sdk.cli.config import ConfigError, load_cli_config


def test_defaults_when_config_missing(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("WHITELIST_LOG_LEVEL", raising=False)
    config = load_cli_config(tmp_path / "missing.toml")
    assert config.normalize_identifiers is False
    assert config.log_level == "WARNING"
    assert config.key_file.endswith("ed25519.json")


def test_cli_table_is_read(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("WHITELIST_LOG_LEVEL", raising=False)
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        '[cli]\nnormalize_identifiers = true\nlog_level = "debug"\nkey_file = "/tmp/k.json"\n',
        encoding="utf-8",
    )
    config = load_cli_config(config_path)
    assert config.normalize_identifiers is True
    assert config.log_level == "DEBUG"
    assert config.key_file == "/tmp/k.json"


def test_top_level_keys_are_read(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("WHITELIST_LOG_LEVEL", raising=False)
    config_path = tmp_path / "config.toml"
    config_path.write_text('normalize_identifiers = "yes"\n', encoding="utf-8")
    assert load_cli_config(config_path).normalize_identifiers is True


def test_env_log_level_overrides_config_file(tmp_path, monkeypatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('log_level = "ERROR"\n', encoding="utf-8")
    monkeypatch.setenv("WHITELIST_LOG_LEVEL", "info")
    assert load_cli_config(config_path).log_level == "INFO"


def test_invalid_log_level_rejected(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("WHITELIST_LOG_LEVEL", raising=False)
    config_path = tmp_path / "config.toml"
    config_path.write_text('log_level = "chatty"\n', encoding="utf-8")
    with pytest.raises(ConfigError):
        load_cli_config(config_path)


def test_invalid_bool_rejected(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('normalize_identifiers = "maybe"\n', encoding="utf-8")
    with pytest.raises(ValueError):
        load_cli_config(config_path)


def test_invalid_toml_rejected(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("normalize_identifiers = \n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_cli_config(config_path)


def test_cli_must_be_a_table(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('cli = "nope"\n', encoding="utf-8")
    with pytest.raises(ConfigError):
        load_cli_config(config_path)
