from __future__ import annotations

import pytest

from whitelist_sdk.errors import IndexOutOfRangeError, SchemaValidationError
from whitelist_sdk.hashing import EMPTY_ROOT, hash_identifier, hash_identifiers, hash_pair
from whitelist_sdk.merkle import build_tree, merkle_root, prove_index, tree_depth
from whitelist_sdk.proof import SIDE_LEFT, SIDE_RIGHT


def _leaves(count: int) -> list[bytes]:
    return hash_identifiers([f"user{i}@example.com" for i in range(count)])


def test_root_is_deterministic() -> None:
    leaves = _leaves(7)
    assert build_tree(leaves).root == build_tree(list(leaves)).root


def test_root_is_order_sensitive() -> None:
    leaves = _leaves(4)
    swapped = [leaves[1], leaves[0], leaves[2], leaves[3]]
    assert build_tree(leaves).root != build_tree(swapped).root


def test_single_leaf_root_is_the_leaf() -> None:
    leaf = hash_identifier(b"only@example.com")
    tree = build_tree([leaf])
    assert tree.root == leaf
    assert tree.depth == 0
    assert prove_index(tree, 0).steps == ()


def test_empty_input_yields_empty_set_digest() -> None:
    tree = build_tree([])
    assert tree.root == EMPTY_ROOT
    assert tree.leaf_count == 0
    assert tree.depth == 0
    assert merkle_root([]) == hash_identifier(b"")


def test_odd_level_duplicates_last_node() -> None:
    leaf0, leaf1, leaf2 = hash_identifiers(["a", "b", "c"])
    tree = build_tree([leaf0, leaf1, leaf2])

    node0 = hash_pair(leaf0, leaf1)
    node1 = hash_pair(leaf2, leaf2)
    assert tree.levels[1] == (node0, node1)
    assert tree.root == hash_pair(node0, node1)


def test_prove_odd_leaf_uses_itself_as_sibling() -> None:
    leaf0, leaf1, leaf2 = hash_identifiers(["a", "b", "c"])
    tree = build_tree([leaf0, leaf1, leaf2])

    proof = prove_index(tree, 2)
    assert proof.leaf_index == 2
    assert len(proof) == 2
    assert proof.steps[0].sibling == leaf2
    assert proof.steps[0].side == SIDE_RIGHT
    assert proof.steps[1].sibling == hash_pair(leaf0, leaf1)
    assert proof.steps[1].side == SIDE_LEFT


@pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 8, 9, 17])
def test_depth_and_proof_length_match_ceil_log2(count: int) -> None:
    tree = build_tree(_leaves(count))
    expected_depth = (count - 1).bit_length()
    assert tree.depth == expected_depth
    assert tree_depth(count) == expected_depth
    assert all(len(prove_index(tree, i)) == expected_depth for i in range(count))


def test_level_sizes_halve_rounding_up() -> None:
    tree = build_tree(_leaves(11))
    assert [len(level) for level in tree.levels] == [11, 6, 3, 2, 1]


@pytest.mark.parametrize("index", [5, 3, -1])
def test_prove_index_out_of_range(index: int) -> None:
    tree = build_tree(_leaves(3))
    with pytest.raises(IndexOutOfRangeError):
        prove_index(tree, index)


def test_prove_index_rejects_non_integer_index() -> None:
    tree = build_tree(_leaves(3))
    with pytest.raises(IndexOutOfRangeError):
        prove_index(tree, "1")  # type: ignore[arg-type]
    with pytest.raises(IndexOutOfRangeError):
        prove_index(tree, True)  # type: ignore[arg-type]


def test_prove_index_on_empty_tree_is_out_of_range() -> None:
    with pytest.raises(IndexOutOfRangeError) as exc_info:
        build_tree([]).prove(0)
    assert exc_info.value.leaf_count == 0
    assert isinstance(exc_info.value, IndexError)


def test_build_tree_rejects_non_digest_leaves() -> None:
    with pytest.raises(SchemaValidationError):
        build_tree([b"short"])
    with pytest.raises(SchemaValidationError):
        build_tree([hash_identifier(b"a").hex()])  # type: ignore[list-item]


def test_leaf_accessor() -> None:
    leaves = _leaves(3)
    tree = build_tree(leaves)
    assert tree.leaf(1) == leaves[1]
    with pytest.raises(IndexOutOfRangeError):
        tree.leaf(3)
