"""Tests for the layout engine: placement invariants on arbitrary shapes."""

import itertools

import pytest
from hypothesis import given, strategies as st

from tree import BinarySearchTree, build, enumerate_all
from tree.layout import (
    LAYOUT,
    LayoutConfig,
    bounding_box,
    footprints_overlap,
    layout,
    subtree_weights,
    viewport_params,
)


def depths(root):
    out, stack = {}, [(root, 0)]
    while stack:
        node, d = stack.pop()
        if node is None:
            continue
        out[node.value] = d
        stack.append((node.left, d + 1))
        stack.append((node.right, d + 1))
    return out


def assert_layout_invariants(root, center_x, root_y, config=LAYOUT):
    nodes = enumerate_all(root)
    assert (root.x, root.y) == (center_x, root_y)

    level = depths(root)
    for node in nodes:
        assert node.y == pytest.approx(root_y + level[node.value] * config.level_step)
        if node.left is not None:
            assert node.left.x < node.x
            assert all(n.x < node.x for n in enumerate_all(node.left))
        if node.right is not None:
            assert node.right.x > node.x
            assert all(n.x > node.x for n in enumerate_all(node.right))

    for a, b in itertools.combinations(nodes, 2):
        assert not footprints_overlap(a, b, config.node_radius), (a, b)


@given(
    st.lists(st.integers(min_value=-500, max_value=500), unique=True, min_size=1, max_size=60),
    st.floats(min_value=1, max_value=400),
)
def test_layout_invariants_hold_for_any_shape(xs, base_spacing):
    root = build(xs)
    layout(root, 600, 80, base_spacing)
    assert_layout_invariants(root, 600, 80)


def test_single_node_placed_at_root_position():
    root = build([7])
    layout(root, 123.0, 45.0, 100)
    assert (root.x, root.y) == (123.0, 45.0)


@pytest.mark.parametrize("values", [
    list(range(40)),               # right-leaning chain
    list(range(40, 0, -1)),        # left-leaning chain
    [50, 10, 40, 20, 30],          # zig-zag
])
def test_degenerate_chains(values):
    root = build(values)
    layout(root, 600, 80, 150)
    assert_layout_invariants(root, 600, 80)


def test_complete_tree(sample_tree):
    layout(sample_tree.root, 600, 80, 150)
    assert_layout_invariants(sample_tree.root, 600, 80)
    # mirror-symmetric shape → mirror-symmetric placement
    left, right = sample_tree.search(20), sample_tree.search(80)
    assert 600 - left.x == pytest.approx(right.x - 600)


def test_dense_tree_with_tiny_base_spacing():
    tree = BinarySearchTree([64, 32, 96, 16, 48, 80, 112, 8, 24, 40, 56, 72, 88, 104, 120])
    layout(tree.root, 0, 0, 0.5)
    assert_layout_invariants(tree.root, 0, 0)


def test_layout_is_a_pure_function_of_shape(sample_tree):
    layout(sample_tree.root, 600, 80, 150)
    first = [(n.x, n.y) for n in sample_tree.nodes()]
    for node in sample_tree.nodes():
        node.x, node.y = -1.0, -1.0
    layout(sample_tree.root, 600, 80, 150)
    assert [(n.x, n.y) for n in sample_tree.nodes()] == first


def test_empty_tree_is_noop():
    layout(None, 0, 0, 100)
    assert bounding_box(None) is None


def test_subtree_weights_are_sizes(sample_tree):
    weights = subtree_weights(sample_tree.root)
    assert weights[id(sample_tree.root)] == 7
    assert weights[id(sample_tree.search(30))] == 3
    assert weights[id(sample_tree.search(80))] == 1


def test_custom_config_is_respected():
    config = LayoutConfig(node_radius=10, min_spacing=20, level_step=30, decay=0.5)
    root = build(range(10))
    layout(root, 0, 0, 200, config)
    assert_layout_invariants(root, 0, 0, config)


@pytest.mark.parametrize("overrides", [
    {"min_spacing": 40},        # smaller than one diameter (50)
    {"level_step": 50},         # not larger than one diameter
    {"decay": 0},
    {"decay": 1.5},
    {"no_such_option": 1},
    {"spacing": 1},             # method names are not options
    {"validate": 1},
])
def test_invalid_config_rejected(overrides):
    with pytest.raises(ValueError):
        LayoutConfig(**overrides)


def test_viewport_params():
    assert viewport_params(1200) == (600, LAYOUT.root_y, 150)


def test_bounding_box_covers_discs(sample_tree):
    layout(sample_tree.root, 600, 80, 150)
    min_x, min_y, max_x, max_y = bounding_box(sample_tree.root)
    assert min_y == 80 - LAYOUT.node_radius
    assert max_y == 80 + 2 * LAYOUT.level_step + LAYOUT.node_radius
    assert min_x == sample_tree.search(20).x - LAYOUT.node_radius
    assert max_x == sample_tree.search(80).x + LAYOUT.node_radius
