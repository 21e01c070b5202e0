"""Local root-signing key management for the whitelist CLI."""

from __future__ import annotations

import base64
import json
import os
from dataclasses import dataclass
from pathlib import Path

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)


class KeyFileError(ValueError):
    """Raised when signing key material is invalid or cannot be loaded."""


@dataclass(frozen=True)
class SigningKey:
    private_key_bytes: bytes
    public_key_bytes: bytes

    @property
    def public_key_b64(self) -> str:
        return base64.b64encode(self.public_key_bytes).decode("ascii")


def _chmod_owner_only(path: Path) -> None:
    if os.name != "posix":
        return
    path.chmod(0o600)


def load_signing_key(path: str | Path) -> SigningKey:
    key_path = Path(path)
    try:
        payload = json.loads(key_path.read_text(encoding="utf-8"))
    except Exception as exc:
        raise KeyFileError(f"invalid key file: {key_path}") from exc

    private_key_b64 = payload.get("private_key_b64") if isinstance(payload, dict) else None
    public_key_b64 = payload.get("public_key_b64") if isinstance(payload, dict) else None
    if not isinstance(private_key_b64, str) or not isinstance(public_key_b64, str):
        raise KeyFileError("key file must contain private_key_b64 and public_key_b64")

    try:
        private_key_bytes = base64.b64decode(private_key_b64, validate=True)
        public_key_bytes = base64.b64decode(public_key_b64, validate=True)
    except Exception as exc:
        raise KeyFileError("signing keys must be valid base64") from exc

    if len(private_key_bytes) != 32 or len(public_key_bytes) != 32:
        raise KeyFileError("signing keys must decode to 32 bytes")

    private = Ed25519PrivateKey.from_private_bytes(private_key_bytes)
    expected_public = private.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
    if expected_public != public_key_bytes:
        raise KeyFileError("key file private/public keys do not match")

    return SigningKey(private_key_bytes=private_key_bytes, public_key_bytes=public_key_bytes)


def create_signing_key(path: str | Path) -> SigningKey:
    key_path = Path(path)
    key_path.parent.mkdir(parents=True, exist_ok=True)

    private = Ed25519PrivateKey.generate()
    key = SigningKey(
        private_key_bytes=private.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption()),
        public_key_bytes=private.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw),
    )
    serialized = {
        "private_key_b64": base64.b64encode(key.private_key_bytes).decode("ascii"),
        "public_key_b64": key.public_key_b64,
    }
    key_path.write_text(json.dumps(serialized, indent=2) + "\n", encoding="utf-8")
    _chmod_owner_only(key_path)
    return key


def load_or_create_signing_key(path: str | Path) -> tuple[SigningKey, bool]:
    key_path = Path(path)
    if key_path.exists():
        return load_signing_key(key_path), False
    return create_signing_key(key_path), True
