"""Whitelist Merkle tree construction and proof extraction.

Levels are built bottom-up by hashing adjacent pairs left to right. When a
level has an odd number of nodes the last node is paired with itself, so
every internal node has exactly two children and a tree of ``n`` leaves has
depth ``ceil(log2(n))``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from whitelist_sdk.errors import IndexOutOfRangeError, SchemaValidationError
from whitelist_sdk.hashing import EMPTY_ROOT, hash_pair, is_digest
from whitelist_sdk.proof import Proof, ProofStep, side_for_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleTree:
    """Immutable tree; ``levels[0]`` holds the leaves, ``levels[-1]`` the root."""

    levels: tuple[tuple[bytes, ...], ...]

    @property
    def root(self) -> bytes:
        if not self.levels:
            return EMPTY_ROOT
        return self.levels[-1][0]

    @property
    def leaf_count(self) -> int:
        if not self.levels:
            return 0
        return len(self.levels[0])

    @property
    def depth(self) -> int:
        return max(len(self.levels) - 1, 0)

    def leaf(self, index: int) -> bytes:
        _check_index(self, index)
        return self.levels[0][index]

    def prove(self, index: int) -> Proof:
        return prove_index(self, index)


def _next_level(level: Sequence[bytes]) -> tuple[bytes, ...]:
    parents: list[bytes] = []
    for i in range(0, len(level), 2):
        left = level[i]
        right = level[i + 1] if i + 1 < len(level) else level[i]
        parents.append(hash_pair(left, right))
    return tuple(parents)


def build_tree(leaf_digests: Sequence[bytes]) -> MerkleTree:
    leaves = tuple(leaf_digests)
    if not leaves:
        logger.debug("built empty tree; root is the empty-set digest")
        return MerkleTree(levels=())

    for position, digest in enumerate(leaves):
        if not is_digest(digest):
            raise SchemaValidationError(f"leaf {position} must be a 32-byte digest")

    levels = [leaves]
    while len(levels[-1]) > 1:
        levels.append(_next_level(levels[-1]))

    tree = MerkleTree(levels=tuple(levels))
    logger.debug("built tree with %d leaves, depth %d", tree.leaf_count, tree.depth)
    return tree


def merkle_root(leaf_digests: Sequence[bytes]) -> bytes:
    return build_tree(leaf_digests).root


def _check_index(tree: MerkleTree, index: object) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise IndexOutOfRangeError(index, tree.leaf_count)
    if index < 0 or index >= tree.leaf_count:
        raise IndexOutOfRangeError(index, tree.leaf_count)


def prove_index(tree: MerkleTree, index: int) -> Proof:
    _check_index(tree, index)

    steps: list[ProofStep] = []
    position = index
    for level in tree.levels[:-1]:
        sibling_position = position ^ 1
        if sibling_position >= len(level):
            sibling_position = position
        steps.append(ProofStep(sibling=level[sibling_position], side=side_for_index(position)))
        position //= 2

    logger.debug("generated %d-step proof for leaf %d", len(steps), index)
    return Proof(leaf_index=index, steps=tuple(steps))


def tree_depth(leaf_count: int) -> int:
    """Depth of a tree holding ``leaf_count`` leaves (0 for zero or one leaf)."""
    depth = 0
    size = leaf_count
    while size > 1:
        size = (size + 1) // 2
        depth += 1
    return depth
