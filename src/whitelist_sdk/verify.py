"""Offline membership proof verification."""

from __future__ import annotations

import hmac
from typing import Iterable

from pydantic import ValidationError

from whitelist_sdk.documents import MembershipProofDocument, proof_from_document
from whitelist_sdk.errors import SchemaValidationError
from whitelist_sdk.hashing import hash_identifier, hash_pair, is_digest
from whitelist_sdk.merkle import tree_depth
from whitelist_sdk.proof import ALLOWED_SIDES, SIDE_RIGHT, Proof, ProofStep, side_for_index


def _coerce_steps(proof: object) -> list[tuple[bytes, str]] | None:
    if isinstance(proof, Proof):
        raw_steps: object = proof.steps
    else:
        raw_steps = proof
    if isinstance(raw_steps, (str, bytes)) or not isinstance(raw_steps, Iterable):
        return None

    steps: list[tuple[bytes, str]] = []
    for item in raw_steps:
        if isinstance(item, ProofStep):
            sibling, side = item.sibling, item.side
        elif isinstance(item, (tuple, list)) and len(item) == 2:
            sibling, side = item
        else:
            return None
        if not is_digest(sibling) or side not in ALLOWED_SIDES:
            return None
        steps.append((sibling, side))
    return steps


def verify_proof(
    leaf_digest: bytes,
    proof: Proof | Iterable[ProofStep],
    claimed_root: bytes,
) -> bool:
    if not is_digest(leaf_digest) or not is_digest(claimed_root):
        return False
    steps = _coerce_steps(proof)
    if steps is None:
        return False

    current = leaf_digest
    for sibling, side in steps:
        if side == SIDE_RIGHT:
            current = hash_pair(current, sibling)
        else:
            current = hash_pair(sibling, current)
    return hmac.compare_digest(current, claimed_root)


def verify_membership_proof(document: dict) -> bool:
    """Check a JSON membership proof document end to end.

    The identifier (when present) must hash to the stated leaf, the step sides
    must match the stated leaf index, the step count must match the depth of a
    tree with ``leaf_count`` leaves, and the path must reconstruct ``root``.
    """
    if not isinstance(document, dict):
        return False
    try:
        model = MembershipProofDocument(**document)
        proof = proof_from_document(model)
        leaf = bytes.fromhex(model.leaf)
        root = bytes.fromhex(model.root)
    except (ValidationError, SchemaValidationError, ValueError, TypeError):
        return False

    if model.identifier is not None:
        try:
            identifier_leaf = hash_identifier(model.identifier)
        except UnicodeError:
            return False
        if identifier_leaf != leaf:
            return False
    if model.leaf_index >= model.leaf_count:
        return False
    if len(proof.steps) != tree_depth(model.leaf_count):
        return False

    position = model.leaf_index
    for step in proof.steps:
        if step.side != side_for_index(position):
            return False
        position //= 2

    return verify_proof(leaf, proof, root)
