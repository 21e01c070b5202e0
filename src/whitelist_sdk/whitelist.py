"""Whitelist snapshots: identifier lookup and proof-by-identifier."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from whitelist_sdk.documents import MembershipProofDocument, proof_to_document
from whitelist_sdk.errors import IdentifierNotFoundError
from whitelist_sdk.hashing import hash_identifier
from whitelist_sdk.merkle import MerkleTree, build_tree, prove_index

logger = logging.getLogger(__name__)


def _normalize_email(value: str) -> str:
    # Email addresses compare case-insensitively in practice.
    return value.strip().lower()


def _identifier_text(encoded: bytes) -> str | None:
    try:
        return encoded.decode("utf-8")
    except UnicodeDecodeError:
        return None


def encode_identifier(value: str | bytes, *, normalize: bool = False) -> bytes:
    if isinstance(value, bytes):
        text = _identifier_text(value) if normalize else None
        # Non-UTF-8 bytes stay opaque.
        return value if text is None else _normalize_email(text).encode("utf-8")
    if normalize:
        value = _normalize_email(value)
    return value.encode("utf-8")


@dataclass(frozen=True)
class Whitelist:
    identifiers: tuple[bytes, ...]
    leaves: tuple[bytes, ...]
    tree: MerkleTree
    normalize: bool = False

    @classmethod
    def from_identifiers(
        cls, identifiers: Iterable[str | bytes], *, normalize: bool = False
    ) -> "Whitelist":
        encoded = tuple(encode_identifier(item, normalize=normalize) for item in identifiers)
        leaves = tuple(hash_identifier(item) for item in encoded)
        logger.debug("hashed %d whitelist identifiers", len(leaves))
        return cls(identifiers=encoded, leaves=leaves, tree=build_tree(leaves), normalize=normalize)

    @property
    def root(self) -> bytes:
        return self.tree.root

    def __len__(self) -> int:
        return len(self.identifiers)

    def index_of(self, identifier: str | bytes) -> int:
        encoded = encode_identifier(identifier, normalize=self.normalize)
        try:
            return self.identifiers.index(encoded)
        except ValueError:
            raise IdentifierNotFoundError(
                f"identifier not whitelisted: {encoded.decode('utf-8', errors='replace')}"
            ) from None

    def contains(self, identifier: str | bytes) -> bool:
        encoded = encode_identifier(identifier, normalize=self.normalize)
        return encoded in self.identifiers

    def prove(self, identifier: str | bytes) -> MembershipProofDocument:
        index = self.index_of(identifier)
        proof = prove_index(self.tree, index)
        return proof_to_document(
            proof,
            leaf=self.leaves[index],
            root=self.root,
            leaf_count=self.tree.leaf_count,
            identifier=_identifier_text(self.identifiers[index]),
        )


def generate_merkle_root(identifiers: Iterable[str | bytes], *, normalize: bool = False) -> str:
    return Whitelist.from_identifiers(identifiers, normalize=normalize).root.hex()


def generate_membership_proof(
    identifier: str | bytes,
    identifiers: Iterable[str | bytes],
    *,
    normalize: bool = False,
) -> MembershipProofDocument | None:
    whitelist = Whitelist.from_identifiers(identifiers, normalize=normalize)
    if not whitelist.contains(identifier):
        return None
    return whitelist.prove(identifier)


def load_identifiers(path: str | Path) -> list[str]:
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    identifiers: list[str] = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        identifiers.append(stripped)
    return identifiers
