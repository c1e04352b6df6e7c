"""Tests for the tree engine: insert, search, traversals and helpers."""

import pytest
from hypothesis import given, strategies as st

from tree import (
    BinarySearchTree,
    Direction,
    FlagStore,
    TraversalOrder,
    attach,
    build,
    clear_flags,
    descend,
    enumerate_all,
    height,
    insert,
    search,
    shape,
    size,
    traverse,
)


distinct_ints = st.lists(st.integers(min_value=-10_000, max_value=10_000), unique=True, max_size=80)


def values_of(nodes):
    return [n.value for n in nodes]


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------
@given(distinct_ints)
def test_inorder_is_sorted(xs):
    root = build(xs)
    assert values_of(traverse(root, TraversalOrder.INORDER)) == sorted(xs)


@given(distinct_ints, st.data())
def test_duplicate_insert_keeps_shape(xs, data):
    if not xs:
        return
    root = build(xs)
    before = shape(root)
    dup = data.draw(st.sampled_from(xs))
    assert insert(root, dup) is root
    assert shape(root) == before


@given(distinct_ints, st.integers(min_value=-10_000, max_value=10_000))
def test_search_finds_exactly_inserted(xs, probe):
    root = build(xs)
    found = search(root, probe)
    if probe in xs:
        assert found is not None and found.value == probe
    else:
        assert found is None


@given(distinct_ints)
def test_bst_order_invariant(xs):
    root = build(xs)
    # every node: all left-subtree values < value < all right-subtree values
    for node in enumerate_all(root):
        left = values_of(enumerate_all(node.left))
        right = values_of(enumerate_all(node.right))
        assert all(v < node.value for v in left)
        assert all(v > node.value for v in right)


@given(distinct_ints)
def test_preorder_rebuilds_same_tree(xs):
    root = build(xs)
    rebuilt = build(values_of(traverse(root, TraversalOrder.PREORDER)))
    assert shape(rebuilt) == shape(root)


# ---------------------------------------------------------------------------
# The sample tree
# ---------------------------------------------------------------------------
def test_sample_traversal_orders(sample_tree):
    assert sample_tree.values(TraversalOrder.INORDER) == [20, 30, 40, 50, 60, 70, 80]
    assert sample_tree.values(TraversalOrder.PREORDER) == [50, 30, 20, 40, 70, 60, 80]
    assert sample_tree.values(TraversalOrder.POSTORDER) == [20, 40, 30, 60, 80, 70, 50]


def test_sample_duplicate_insert(sample_tree):
    before = sample_tree.shape()
    assert sample_tree.insert(30) is False
    assert len(sample_tree) == 7
    assert sample_tree.shape() == before


def test_descend_path_found(sample_tree):
    probes = list(descend(sample_tree.root, 60))
    assert [p.node.value for p in probes] == [50, 70, 60]
    assert [p.direction for p in probes] == [Direction.RIGHT, Direction.LEFT, Direction.FOUND]


def test_descend_path_missing(sample_tree):
    probes = list(descend(sample_tree.root, 65))
    assert [p.node.value for p in probes] == [50, 70, 60]
    assert probes[-1].direction is Direction.RIGHT
    assert probes[-1].is_last


def test_attach_uses_probe_slot(sample_tree):
    last = list(descend(sample_tree.root, 65))[-1]
    leaf = attach(last, 65)
    assert sample_tree.search(60).right is leaf
    assert sample_tree.values() == [20, 30, 40, 50, 60, 65, 70, 80]


def test_attach_rejects_found_probe(sample_tree):
    found = list(descend(sample_tree.root, 40))[-1]
    with pytest.raises(ValueError):
        attach(found, 40)


# ---------------------------------------------------------------------------
# Empty & degenerate trees
# ---------------------------------------------------------------------------
def test_empty_tree_operations():
    assert search(None, 5) is None
    assert traverse(None, TraversalOrder.INORDER) == []
    assert enumerate_all(None) == []
    assert list(descend(None, 5)) == []
    assert size(None) == 0
    assert height(None) == 0
    assert shape(None) is None


def test_insert_into_empty_creates_root():
    root = insert(None, 42)
    assert root.value == 42
    assert root.is_leaf


def test_root_identity_is_stable():
    root = insert(None, 10)
    for v in (5, 15, 3, 12):
        assert insert(root, v) is root


def test_long_chain_does_not_hit_recursion_limit():
    n = 1500
    root = build(range(n))
    assert height(root) == n
    assert values_of(traverse(root, TraversalOrder.INORDER)) == list(range(n))
    assert values_of(traverse(root, TraversalOrder.POSTORDER)) == list(reversed(range(n)))


def test_equal_key_never_goes_right():
    root = build([10, 20])
    insert(root, 10)
    assert root.left is None
    assert root.right.value == 20
    assert root.right.is_leaf


# ---------------------------------------------------------------------------
# Flags, parsing, container
# ---------------------------------------------------------------------------
def test_clear_flags_resets_every_node(sample_tree):
    flags = FlagStore()
    for v in (50, 70, 60):
        flags.highlight(v)
        flags.visit(v)
    flags.mark_result(60)

    clear_flags(sample_tree.root, flags)

    for node in sample_tree.nodes():
        f = flags.peek(node.value)
        assert not f.highlighted and not f.visited and not f.is_search_result
    assert len(flags) == 0


def test_flag_peek_does_not_create_entries():
    flags = FlagStore()
    assert not flags.peek(7).visited
    assert 7 not in flags


@pytest.mark.parametrize("raw, expected", [
    ("inorder", TraversalOrder.INORDER),
    ("PreOrder", TraversalOrder.PREORDER),
    ("post-order", TraversalOrder.POSTORDER),
    (TraversalOrder.INORDER, TraversalOrder.INORDER),
    ("levelorder", None),
    (3, None),
])
def test_traversal_order_parse(raw, expected):
    assert TraversalOrder.parse(raw) is expected


def test_container_basics(sample_tree):
    assert len(sample_tree) == 7
    assert 40 in sample_tree
    assert 45 not in sample_tree
    assert sample_tree.height() == 3
    assert sample_tree.to_dict()["root"] == 50
    sample_tree.clear()
    assert sample_tree.is_empty and len(sample_tree) == 0


def test_plant_root_only_on_empty(sample_tree):
    with pytest.raises(ValueError):
        sample_tree.plant_root(1)
