"""Configuration helpers for the whitelist CLI."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = Path.home() / ".whitelist_sdk" / "config.toml"
DEFAULT_KEY_FILE = Path.home() / ".whitelist_sdk" / "keys" / "ed25519.json"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_ENV_VAR = "WHITELIST_LOG_LEVEL"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class CLIConfig:
    normalize_identifiers: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    key_file: str = str(DEFAULT_KEY_FILE)


class ConfigError(ValueError):
    """Raised when CLI config is invalid."""


def _load_toml(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")

    try:  # Python 3.11+
        import tomllib  # type: ignore[attr-defined]
        try:
            return tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    except ModuleNotFoundError:
        try:
            import tomli
        except ModuleNotFoundError as exc:
            raise ConfigError("toml parser unavailable; install tomli for Python < 3.11") from exc
        try:
            return tomli.loads(raw)
        except tomli.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def _to_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes", "on"}:
            return True
        if lowered in {"false", "0", "no", "off"}:
            return False
    raise ConfigError(f"{field_name} must be a boolean")


def normalize_log_level(value: Any) -> str:
    level = str(value).strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"log_level must be one of: {', '.join(_LOG_LEVELS)}")
    return level


def configure_logging(level: str, stream) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=stream,
        force=True,
    )


def load_cli_config(path: str | Path | None = None) -> CLIConfig:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    parsed = _load_toml(config_path) if config_path.exists() else {}

    section = parsed.get("cli")
    if isinstance(section, dict):
        source = section
    elif section is None:
        source = parsed
    else:
        raise ConfigError("[cli] must be a table")

    normalize_identifiers = _to_bool(
        source.get("normalize_identifiers", False), "normalize_identifiers"
    )

    env_log_level = os.getenv(LOG_LEVEL_ENV_VAR)
    configured_log_level = source.get("log_level", DEFAULT_LOG_LEVEL)
    log_level = normalize_log_level(env_log_level if env_log_level else configured_log_level)

    key_file = str(source.get("key_file", DEFAULT_KEY_FILE)).strip()
    if not key_file:
        raise ConfigError("key_file must not be empty")
    key_file = str(Path(key_file).expanduser())

    return CLIConfig(
        normalize_identifiers=normalize_identifiers,
        log_level=log_level,
        key_file=key_file,
    )
