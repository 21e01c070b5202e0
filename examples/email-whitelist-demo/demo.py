#!/usr/bin/env python3
"""Minimal whitelist demo: commit a list, prove one member, reject a tampered proof."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from whitelist_sdk import Whitelist, build_root_commitment, verify_membership_proof
from whitelist_sdk.documents import document_to_dict

DEMO_EMAILS = ("jonathan@gmail.com", "jonathan@hey.com", "jonathan@protonmail.com")


def run_demo(workdir: Path, *, email: str = "jonathan@hey.com") -> int:
    workdir.mkdir(parents=True, exist_ok=True)
    (workdir / "whitelist.txt").write_text("\n".join(DEMO_EMAILS) + "\n", encoding="utf-8")

    whitelist = Whitelist.from_identifiers(DEMO_EMAILS)
    commitment = build_root_commitment(whitelist.tree)
    (workdir / "root_commitment.json").write_text(
        json.dumps(commitment, sort_keys=True, indent=2) + "\n", encoding="utf-8"
    )
    print(f"Merkle Root: {commitment['root']}")

    if not whitelist.contains(email):
        print(f"Email {email} is not whitelisted.")
        return 1

    proof = document_to_dict(whitelist.prove(email))
    (workdir / "proof.json").write_text(
        json.dumps(proof, sort_keys=True, indent=2) + "\n", encoding="utf-8"
    )
    print(f"Email {email} is whitelisted.")
    print(f"Proof: {json.dumps(proof['proof'])}")

    if not verify_membership_proof(proof):
        print("unexpected: genuine proof failed verification")
        return 1

    tampered = dict(proof, identifier="mallory@example.com")
    if verify_membership_proof(tampered):
        print("unexpected: tampered proof verified")
        return 1
    print("tampered proof rejected")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--workdir", default="./whitelist-demo")
    parser.add_argument("--email", default="jonathan@hey.com")
    args = parser.parse_args()
    return run_demo(Path(args.workdir), email=args.email)


if __name__ == "__main__":
    raise SystemExit(main())
