"""Whitelist SDK public surface."""

from whitelist_sdk.commitment import build_root_commitment, canonical_commitment_bytes
from whitelist_sdk.crypto.root_signing import sign_root_commitment, verify_root_commitment
from whitelist_sdk.documents import (
    MembershipProofDocument,
    RootCommitment,
    proof_from_document,
    proof_to_document,
)
from whitelist_sdk.errors import (
    IdentifierNotFoundError,
    IndexOutOfRangeError,
    ProofFormatError,
    SchemaValidationError,
    SignatureError,
    WhitelistSDKError,
)
from whitelist_sdk.hashing import (
    DIGEST_SIZE,
    EMPTY_ROOT,
    hash_identifier,
    hash_identifiers,
    hash_pair,
)
from whitelist_sdk.merkle import MerkleTree, build_tree, merkle_root, prove_index
from whitelist_sdk.proof import SIDE_LEFT, SIDE_RIGHT, Proof, ProofStep, decode_proof, encode_proof
from whitelist_sdk.verify import verify_membership_proof, verify_proof
from whitelist_sdk.whitelist import (
    Whitelist,
    encode_identifier,
    generate_membership_proof,
    generate_merkle_root,
    load_identifiers,
)

__all__ = [
    "WhitelistSDKError",
    "IndexOutOfRangeError",
    "IdentifierNotFoundError",
    "SchemaValidationError",
    "ProofFormatError",
    "SignatureError",
    "DIGEST_SIZE",
    "EMPTY_ROOT",
    "hash_identifier",
    "hash_identifiers",
    "hash_pair",
    "MerkleTree",
    "build_tree",
    "merkle_root",
    "prove_index",
    "SIDE_LEFT",
    "SIDE_RIGHT",
    "Proof",
    "ProofStep",
    "encode_proof",
    "decode_proof",
    "verify_proof",
    "verify_membership_proof",
    "MembershipProofDocument",
    "RootCommitment",
    "proof_to_document",
    "proof_from_document",
    "Whitelist",
    "encode_identifier",
    "generate_merkle_root",
    "generate_membership_proof",
    "load_identifiers",
    "build_root_commitment",
    "canonical_commitment_bytes",
    "sign_root_commitment",
    "verify_root_commitment",
]
