"""Root commitment documents published alongside a whitelist snapshot."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from whitelist_sdk.documents import RootCommitment
from whitelist_sdk.merkle import MerkleTree


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def build_root_commitment(
    tree: MerkleTree,
    *,
    created_at: str | None = None,
    metadata: dict[str, str] | None = None,
) -> dict:
    commitment = RootCommitment(
        root=tree.root.hex(),
        leaf_count=tree.leaf_count,
        depth=tree.depth,
        created_at=created_at or _utc_now_iso(),
        metadata=metadata,
    )
    return commitment.model_dump(exclude_none=True)


def canonical_commitment_bytes(commitment: dict) -> bytes:
    payload = dict(commitment)
    payload.pop("signature_b64", None)
    return json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")
