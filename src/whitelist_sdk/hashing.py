"""Leaf and node hashing for whitelist Merkle trees.

Leaves are SHA-256 digests of the raw identifier bytes; internal nodes are
SHA-256 over the concatenation of the two child digests (raw bytes, never
their hex text).
"""

from __future__ import annotations

import hashlib
from typing import Iterable

HASH_ALGORITHM = "sha256"
DIGEST_SIZE = 32


def hash_identifier(identifier: bytes | str) -> bytes:
    if isinstance(identifier, str):
        identifier = identifier.encode("utf-8")
    return hashlib.sha256(identifier).digest()


def hash_identifiers(identifiers: Iterable[bytes | str]) -> list[bytes]:
    return [hash_identifier(item) for item in identifiers]


def hash_pair(left: bytes, right: bytes) -> bytes:
    return hashlib.sha256(left + right).digest()


def is_digest(value: object) -> bool:
    return isinstance(value, bytes) and len(value) == DIGEST_SIZE


# Commitment to the empty whitelist.
EMPTY_ROOT = hash_identifier(b"")
