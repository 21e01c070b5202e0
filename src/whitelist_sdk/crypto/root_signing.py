"""Ed25519 signatures over root commitment documents."""

from __future__ import annotations

import base64
import binascii

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from pydantic import ValidationError

from whitelist_sdk.commitment import canonical_commitment_bytes
from whitelist_sdk.documents import RootCommitment
from whitelist_sdk.errors import SignatureError


def decode_b64(data_b64: str) -> bytes:
    try:
        return base64.b64decode(data_b64, validate=True)
    except (binascii.Error, ValueError, TypeError) as exc:
        raise ValueError("invalid base64") from exc


def _private_key(private_key_bytes: bytes) -> Ed25519PrivateKey:
    if len(private_key_bytes) != 32:
        raise SignatureError("signing key must be 32 bytes")
    return Ed25519PrivateKey.from_private_bytes(private_key_bytes)


def public_key_b64_for(private_key_bytes: bytes) -> str:
    public = _private_key(private_key_bytes).public_key().public_bytes(
        Encoding.Raw, PublicFormat.Raw
    )
    return base64.b64encode(public).decode("ascii")


def sign_root_commitment(commitment: dict, private_key_bytes: bytes) -> dict:
    signed = dict(commitment)
    signed.pop("signature_b64", None)
    signed["signer_public_key_b64"] = public_key_b64_for(private_key_bytes)
    signature = _private_key(private_key_bytes).sign(canonical_commitment_bytes(signed))
    signed["signature_b64"] = base64.b64encode(signature).decode("ascii")
    return signed


def _verify_ed25519(signature: bytes, message: bytes, public_key: bytes) -> bool:
    try:
        Ed25519PublicKey.from_public_bytes(public_key).verify(signature, message)
    except Exception:
        return False
    return True


def verify_root_commitment(
    commitment: dict,
    *,
    public_key_b64: str | None = None,
) -> tuple[bool, str]:
    try:
        model = RootCommitment(**commitment)
    except (ValidationError, TypeError):
        return False, "invalid root commitment"

    if model.signature_b64 is None:
        return False, "missing signature"
    signer_b64 = model.signer_public_key_b64
    if signer_b64 is None and public_key_b64 is None:
        return False, "missing signer public key"
    if public_key_b64 is not None and signer_b64 is not None and signer_b64 != public_key_b64:
        return False, "signer public key does not match pinned key"

    try:
        signature = decode_b64(model.signature_b64)
        public_key = decode_b64(public_key_b64 or signer_b64)
    except ValueError:
        return False, "invalid base64"

    if not _verify_ed25519(signature, canonical_commitment_bytes(commitment), public_key):
        return False, "invalid signature"
    return True, "ok"
