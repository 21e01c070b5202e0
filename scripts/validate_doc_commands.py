#!/usr/bin/env python3
"""Check that every `whitelist ...` snippet in the docs parses with the CLI."""

from __future__ import annotations

import argparse
import contextlib
import io
import re
import shlex
from pathlib import Path

from whitelist_sdk.cli.main import _build_parser

_FENCE = re.compile(r"```(?:bash|sh|console)\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def extract_cli_commands(text: str) -> list[str]:
    commands: list[str] = []
    for block in _FENCE.findall(text):
        for line in block.splitlines():
            stripped = line.strip().removeprefix("$ ")
            if stripped.startswith("whitelist "):
                commands.append(stripped)
    return commands


def _parses(cli_parser: argparse.ArgumentParser, argv: list[str]) -> bool:
    try:
        with contextlib.redirect_stdout(io.StringIO()), contextlib.redirect_stderr(io.StringIO()):
            cli_parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code in (0, None)
    return True


def validate_markdown(paths: list[Path]) -> tuple[int, list[str]]:
    cli_parser = _build_parser()
    errors: list[str] = []
    checked = 0
    for path in paths:
        if not path.exists():
            errors.append(f"{path}: not found")
            continue
        for command in extract_cli_commands(path.read_text(encoding="utf-8")):
            checked += 1
            if not _parses(cli_parser, shlex.split(command)[1:]):
                errors.append(f"{path}: invalid command snippet: {command}")
    return checked, errors


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--paths", nargs="+", default=["README.md"], help="Markdown files to check")
    args = parser.parse_args()

    checked, errors = validate_markdown([Path(raw) for raw in args.paths])
    if errors:
        print("doc command validation failed:")
        for item in errors:
            print(f"- {item}")
        return 1

    print(f"doc command validation passed ({checked} command snippets)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
