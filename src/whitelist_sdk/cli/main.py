"""Command-line interface for whitelist-sdk."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path
from typing import Sequence

from whitelist_sdk.cli.config import (
    CLIConfig,
    ConfigError,
    configure_logging,
    load_cli_config,
    normalize_log_level,
)
from whitelist_sdk.cli.keys import KeyFileError, load_or_create_signing_key, load_signing_key
from whitelist_sdk.commitment import build_root_commitment
from whitelist_sdk.crypto.root_signing import sign_root_commitment, verify_root_commitment
from whitelist_sdk.documents import DOCUMENT_VERSION, document_to_dict
from whitelist_sdk.errors import IdentifierNotFoundError, WhitelistSDKError
from whitelist_sdk.hashing import HASH_ALGORITHM
from whitelist_sdk.verify import verify_membership_proof
from whitelist_sdk.whitelist import Whitelist, load_identifiers

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_NOT_FOUND = 2
EXIT_VERIFICATION_FAILED = 3

logger = logging.getLogger(__name__)


def _sdk_version() -> str:
    try:
        return pkg_version("whitelist-sdk")
    except PackageNotFoundError:
        return "0.0.0+local"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="whitelist")
    parser.add_argument(
        "--version",
        action="version",
        version=f"whitelist-sdk {_sdk_version()}",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to CLI config TOML (default: ~/.whitelist_sdk/config.toml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    parser.add_argument(
        "--normalize",
        action="store_true",
        default=None,
        help="Strip and lower-case identifiers before hashing",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    version = sub.add_parser("version", help="Show SDK and document format version")
    version.add_argument("--json", action="store_true", help="Print version details as JSON")

    root = sub.add_parser("root", help="Compute the Merkle root of a whitelist file")
    root.add_argument("list_file", help="Whitelist file, one identifier per line")
    root.add_argument("--sign", action="store_true", help="Sign the root commitment")
    root.add_argument(
        "--key-file",
        default=None,
        help="Signing key file (default: key_file from config)",
    )
    root.add_argument("--output", default=None, help="Write the root commitment JSON to this path")
    root.add_argument("--json", action="store_true")

    prove = sub.add_parser("prove", help="Produce a membership proof for one identifier")
    prove.add_argument("list_file", help="Whitelist file, one identifier per line")
    prove.add_argument("identifier", help="Identifier (email address) to prove")
    prove.add_argument("--output", default=None, help="Write the proof JSON to this path")
    prove.add_argument(
        "--omit-identifier",
        action="store_true",
        help="Leave the plaintext identifier out of the proof document",
    )
    prove.add_argument("--json", action="store_true")

    verify = sub.add_parser("verify", help="Verify a membership proof document")
    verify.add_argument("proof_file", help="Path to membership proof JSON")
    verify.add_argument("--root", default=None, help="Expected root (hex)")
    verify.add_argument("--commitment", default=None, help="Path to root commitment JSON")
    verify.add_argument(
        "--public-key-b64",
        default=None,
        help="Pinned signer public key for the root commitment",
    )
    verify.add_argument("--json", action="store_true")

    keygen = sub.add_parser("keygen", help="Create or load the local root-signing key")
    keygen.add_argument(
        "--key-file",
        default=None,
        help="Signing key file (default: key_file from config)",
    )
    keygen.add_argument("--json", action="store_true")

    return parser


def _print_error(stderr, prefix: str, message: str, *, code: int) -> int:
    print(f"{prefix}: {message}", file=stderr)
    return code


def _write_json(path: str, payload: dict) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(payload, sort_keys=True, indent=2) + "\n", encoding="utf-8")
    return output_path


def _load_json(path: str) -> dict:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object in {path}")
    return payload


def _load_whitelist(path: str, *, normalize: bool) -> Whitelist:
    identifiers = load_identifiers(path)
    logger.info("loaded %d identifiers from %s", len(identifiers), path)
    return Whitelist.from_identifiers(identifiers, normalize=normalize)


def _run_version(*, as_json: bool, stdout) -> int:
    payload = {
        "cli": "whitelist",
        "sdk_version": _sdk_version(),
        "document_version": DOCUMENT_VERSION,
        "hash_algorithm": HASH_ALGORITHM,
    }
    if as_json:
        print(json.dumps(payload, sort_keys=True), file=stdout)
        return EXIT_SUCCESS
    print(f"whitelist-sdk {payload['sdk_version']}", file=stdout)
    print(f"document_version: {DOCUMENT_VERSION}", file=stdout)
    print(f"hash_algorithm: {HASH_ALGORITHM}", file=stdout)
    return EXIT_SUCCESS


def _run_root(*, args, config: CLIConfig, normalize: bool, stdout, stderr) -> int:
    try:
        whitelist = _load_whitelist(args.list_file, normalize=normalize)
    except (OSError, UnicodeDecodeError) as exc:
        return _print_error(stderr, "input error", str(exc), code=EXIT_VALIDATION_ERROR)

    commitment = build_root_commitment(whitelist.tree)
    if args.sign:
        try:
            key = load_signing_key(args.key_file or config.key_file)
        except KeyFileError as exc:
            return _print_error(stderr, "key error", str(exc), code=EXIT_VALIDATION_ERROR)
        commitment = sign_root_commitment(commitment, key.private_key_bytes)

    output_path = _write_json(args.output, commitment) if args.output else None

    if args.json:
        print(json.dumps(commitment, sort_keys=True), file=stdout)
        return EXIT_SUCCESS
    print(f"Merkle Root: {commitment['root']}", file=stdout)
    print(f"leaf_count: {commitment['leaf_count']}", file=stdout)
    print(f"depth: {commitment['depth']}", file=stdout)
    if "signature_b64" in commitment:
        print(f"signer_public_key_b64: {commitment['signer_public_key_b64']}", file=stdout)
    if output_path is not None:
        print(f"commitment written: {output_path}", file=stdout)
    return EXIT_SUCCESS


def _run_prove(*, args, normalize: bool, stdout, stderr) -> int:
    try:
        whitelist = _load_whitelist(args.list_file, normalize=normalize)
    except (OSError, UnicodeDecodeError) as exc:
        return _print_error(stderr, "input error", str(exc), code=EXIT_VALIDATION_ERROR)

    try:
        document = whitelist.prove(args.identifier)
    except IdentifierNotFoundError:
        if args.json:
            print(json.dumps({"identifier": args.identifier, "whitelisted": False}), file=stdout)
        else:
            print(f"Email {args.identifier} is not whitelisted.", file=stdout)
        return EXIT_NOT_FOUND

    payload = document_to_dict(document, omit_identifier=args.omit_identifier)
    output_path = _write_json(args.output, payload) if args.output else None

    if args.json:
        print(json.dumps(payload, sort_keys=True), file=stdout)
        return EXIT_SUCCESS
    print(f"Email {args.identifier} is whitelisted.", file=stdout)
    print(f"root: {payload['root']}", file=stdout)
    print(f"leaf: {payload['leaf']}", file=stdout)
    print(f"leaf_index: {payload['leaf_index']}", file=stdout)
    for position, step in enumerate(payload["proof"]):
        print(f"  [{position}] {step['side']:<5} {step['sibling']}", file=stdout)
    if output_path is not None:
        print(f"proof written: {output_path}", file=stdout)
    return EXIT_SUCCESS


def _check_proof(*, args, proof_document: dict) -> tuple[bool, str]:
    if not verify_membership_proof(proof_document):
        return False, "proof does not reconstruct root"

    root = proof_document["root"]
    if args.root is not None and args.root.strip().lower() != root:
        return False, "root does not match expected root"

    if args.commitment is not None:
        commitment = _load_json(args.commitment)
        if commitment.get("root") != root:
            return False, "root does not match commitment"
        if commitment.get("leaf_count") != proof_document["leaf_count"]:
            return False, "leaf_count does not match commitment"
        if "signature_b64" in commitment or args.public_key_b64 is not None:
            ok, reason = verify_root_commitment(commitment, public_key_b64=args.public_key_b64)
            if not ok:
                return False, f"commitment {reason}"
    return True, "ok"


def _run_verify(*, args, stdout, stderr) -> int:
    try:
        proof_document = _load_json(args.proof_file)
        ok, reason = _check_proof(args=args, proof_document=proof_document)
    except (OSError, ValueError) as exc:
        return _print_error(stderr, "input error", str(exc), code=EXIT_VALIDATION_ERROR)

    if args.json:
        print(json.dumps({"ok": ok, "reason": reason}, sort_keys=True), file=stdout)
    else:
        print(f"verification: {'ok' if ok else 'failed'} ({reason})", file=stdout)
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED


def _run_keygen(*, args, config: CLIConfig, stdout, stderr) -> int:
    key_path = args.key_file or config.key_file
    try:
        key, created = load_or_create_signing_key(key_path)
    except KeyFileError as exc:
        return _print_error(stderr, "key error", str(exc), code=EXIT_VALIDATION_ERROR)

    payload = {
        "key_file": str(key_path),
        "created": created,
        "public_key_b64": key.public_key_b64,
    }
    if args.json:
        print(json.dumps(payload, sort_keys=True), file=stdout)
        return EXIT_SUCCESS
    print(f"{'created' if created else 'loaded'} signing key: {key_path}", file=stdout)
    print(f"public_key_b64: {key.public_key_b64}", file=stdout)
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None, *, stdout=sys.stdout, stderr=sys.stderr) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_cli_config(args.config)
        log_level = normalize_log_level(args.log_level) if args.log_level else config.log_level
    except ConfigError as exc:
        return _print_error(stderr, "config error", str(exc), code=EXIT_VALIDATION_ERROR)

    configure_logging(log_level, stderr)
    normalize = config.normalize_identifiers if args.normalize is None else args.normalize

    try:
        if args.command == "version":
            return _run_version(as_json=args.json, stdout=stdout)

        if args.command == "root":
            return _run_root(
                args=args, config=config, normalize=normalize, stdout=stdout, stderr=stderr
            )

        if args.command == "prove":
            return _run_prove(args=args, normalize=normalize, stdout=stdout, stderr=stderr)

        if args.command == "verify":
            return _run_verify(args=args, stdout=stdout, stderr=stderr)

        if args.command == "keygen":
            return _run_keygen(args=args, config=config, stdout=stdout, stderr=stderr)
    except WhitelistSDKError as exc:
        return _print_error(stderr, "error", str(exc), code=EXIT_VALIDATION_ERROR)

    print("unknown command", file=stderr)
    return EXIT_VALIDATION_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
