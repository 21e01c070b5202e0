"""JSON document schemas for root commitments and membership proofs (WLP v0.1)."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DOCUMENT_VERSION = "WLP-0.1"
HEX_DIGEST_PATTERN = r"^[0-9a-f]{64}$"


class ProofStepDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    sibling: str = Field(..., pattern=HEX_DIGEST_PATTERN)
    side: Literal["left", "right"]


class RootCommitment(BaseModel):
    model_config = ConfigDict(extra="forbid")

    document_version: Literal["WLP-0.1"] = DOCUMENT_VERSION
    hash_algorithm: Literal["sha256"] = "sha256"
    root: str = Field(..., pattern=HEX_DIGEST_PATTERN)
    leaf_count: int = Field(..., ge=0)
    depth: int = Field(..., ge=0)
    created_at: str
    signer_public_key_b64: Optional[str] = None
    signature_b64: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None


class MembershipProofDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    document_version: Literal["WLP-0.1"] = DOCUMENT_VERSION
    hash_algorithm: Literal["sha256"] = "sha256"
    identifier: Optional[str] = None
    leaf: str = Field(..., pattern=HEX_DIGEST_PATTERN)
    leaf_index: int = Field(..., ge=0)
    leaf_count: int = Field(..., ge=1)
    root: str = Field(..., pattern=HEX_DIGEST_PATTERN)
    proof: List[ProofStepDocument]
