"""Membership proof values and their binary encoding.

Wire format:
- u32 big-endian step count
- per step: 32-byte sibling digest followed by one side byte
  (0 = sibling is the left operand, 1 = sibling is the right operand)
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterator, Literal

from whitelist_sdk.errors import ProofFormatError
from whitelist_sdk.hashing import DIGEST_SIZE

Side = Literal["left", "right"]

SIDE_LEFT: Side = "left"
SIDE_RIGHT: Side = "right"
ALLOWED_SIDES: tuple[Side, ...] = (SIDE_LEFT, SIDE_RIGHT)

_COUNT = struct.Struct("!I")
_SIDE_BYTES = {SIDE_LEFT: b"\x00", SIDE_RIGHT: b"\x01"}
_SIDE_FROM_BYTE = {0: SIDE_LEFT, 1: SIDE_RIGHT}
_STEP_SIZE = DIGEST_SIZE + 1


@dataclass(frozen=True)
class ProofStep:
    sibling: bytes
    side: Side


@dataclass(frozen=True)
class Proof:
    leaf_index: int
    steps: tuple[ProofStep, ...]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[ProofStep]:
        return iter(self.steps)


def side_for_index(index: int) -> Side:
    """Side the sibling occupies for a node at ``index`` within its level."""
    return SIDE_RIGHT if index % 2 == 0 else SIDE_LEFT


def encode_proof(proof: Proof) -> bytes:
    chunks = [_COUNT.pack(len(proof.steps))]
    for step in proof.steps:
        if len(step.sibling) != DIGEST_SIZE:
            raise ProofFormatError("sibling digest must be 32 bytes")
        if step.side not in _SIDE_BYTES:
            raise ProofFormatError(f"unknown proof side: {step.side!r}")
        chunks.append(step.sibling)
        chunks.append(_SIDE_BYTES[step.side])
    return b"".join(chunks)


def decode_proof(data: bytes, *, leaf_index: int = 0) -> Proof:
    if len(data) < _COUNT.size:
        raise ProofFormatError("proof is missing its length prefix")
    (count,) = _COUNT.unpack_from(data, 0)
    expected = _COUNT.size + count * _STEP_SIZE
    if len(data) != expected:
        raise ProofFormatError(f"proof length mismatch: expected {expected} bytes, got {len(data)}")

    steps: list[ProofStep] = []
    offset = _COUNT.size
    for _ in range(count):
        sibling = bytes(data[offset : offset + DIGEST_SIZE])
        side_byte = data[offset + DIGEST_SIZE]
        side = _SIDE_FROM_BYTE.get(side_byte)
        if side is None:
            raise ProofFormatError(f"unknown proof side byte: {side_byte}")
        steps.append(ProofStep(sibling=sibling, side=side))
        offset += _STEP_SIZE
    return Proof(leaf_index=leaf_index, steps=tuple(steps))
