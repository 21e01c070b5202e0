from whitelist_sdk.documents.convert import document_to_dict, proof_from_document, proof_to_document
from whitelist_sdk.documents.schemas import (
    DOCUMENT_VERSION,
    MembershipProofDocument,
    ProofStepDocument,
    RootCommitment,
)

__all__ = [
    "DOCUMENT_VERSION",
    "MembershipProofDocument",
    "ProofStepDocument",
    "RootCommitment",
    "proof_to_document",
    "proof_from_document",
    "document_to_dict",
]
