"""Conversions between proof values and their JSON documents."""

from __future__ import annotations

from whitelist_sdk.documents.schemas import MembershipProofDocument, ProofStepDocument
from whitelist_sdk.errors import SchemaValidationError
from whitelist_sdk.proof import Proof, ProofStep


def proof_to_document(
    proof: Proof,
    *,
    leaf: bytes,
    root: bytes,
    leaf_count: int,
    identifier: str | None = None,
) -> MembershipProofDocument:
    return MembershipProofDocument(
        identifier=identifier,
        leaf=leaf.hex(),
        leaf_index=proof.leaf_index,
        leaf_count=leaf_count,
        root=root.hex(),
        proof=[
            ProofStepDocument(sibling=step.sibling.hex(), side=step.side)
            for step in proof.steps
        ],
    )


def proof_from_document(document: MembershipProofDocument | dict) -> Proof:
    if isinstance(document, dict):
        document = MembershipProofDocument(**document)
    try:
        steps = tuple(
            ProofStep(sibling=bytes.fromhex(step.sibling), side=step.side)
            for step in document.proof
        )
    except ValueError as exc:
        raise SchemaValidationError("proof sibling must be hex encoded") from exc
    return Proof(leaf_index=document.leaf_index, steps=steps)


def document_to_dict(document: MembershipProofDocument, *, omit_identifier: bool = False) -> dict:
    payload = document.model_dump(exclude_none=True)
    if omit_identifier:
        payload.pop("identifier", None)
    return payload
