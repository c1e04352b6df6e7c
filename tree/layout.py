"""
layout.py — Tree Layout Engine
===============================
Assigns (x, y) to every node of a tree so that:

  1. the root sits at (center_x, root_y);
  2. y grows by one `level_step` per depth level;
  3. every left-subtree node is strictly left of its ancestor, every
     right-subtree node strictly right;
  4. no two node discs of `node_radius` overlap, whatever the shape.

Two passes:
  - Pass 1 (bottom-up): the weight of each subtree = its node count.
  - Pass 2 (top-down):  a child at depth d is placed
        spacing(d) * (1 + weight(inner subtree))
    away from its parent, where the inner subtree is the one that faces
    the parent (left child → its right subtree, right child → its left
    subtree) and
        spacing(d) = max(min_spacing, base_spacing * decay ** d).

Why it never overlaps: spacing(d) never grows with depth, so a subtree
rooted at depth d reaches at most spacing(d) * weight(inner) toward its
parent.  Every descendant therefore stays at least spacing(d) ≥
min_spacing away from each ancestor horizontally, any two nodes are at
least min_spacing apart in x, and min_spacing ≥ 2 · node_radius.

The constants are cosmetic; the four properties above are not.
"""

from typing import Dict, List, Optional, Tuple

from tree.node import TreeNode
from tree.bst import TraversalOrder, iter_traverse


# ---------------------------------------------------------------------------
# Layout Config — spacing constants (pixels)
# ---------------------------------------------------------------------------
class LayoutConfig:
    node_radius:  float = 25      # footprint of one node disc
    level_step:   float = 80      # vertical distance between depth levels
    min_spacing:  float = 60      # floor of the per-level horizontal unit
    decay:        float = 0.85    # per-level shrink of the horizontal unit

    # default viewport (mirrors the visualizer's starting window)
    width:        float = 1200
    root_y:       float = 80

    OPTIONS = ("node_radius", "level_step", "min_spacing", "decay", "width", "root_y")

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if key not in self.OPTIONS:
                raise ValueError(f"Unknown layout option: {key}")
            setattr(self, key, value)
        self.validate()

    def validate(self) -> None:
        if self.min_spacing < 2 * self.node_radius:
            raise ValueError("min_spacing must be at least one node diameter")
        if self.level_step <= 2 * self.node_radius:
            raise ValueError("level_step must exceed one node diameter")
        if not 0 < self.decay <= 1:
            raise ValueError("decay must lie in (0, 1]")

    def spacing(self, base_spacing: float, depth: int) -> float:
        return max(self.min_spacing, base_spacing * self.decay ** depth)


LAYOUT = LayoutConfig()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------
def layout(
    root: Optional[TreeNode],
    center_x: float,
    root_y: float,
    base_spacing: float,
    config: LayoutConfig = LAYOUT,
) -> None:
    """
    Position every node of `root` in place.

    Args:
        root         : Tree to lay out (None is a no-op).
        center_x     : x of the root.
        root_y       : y of the root.
        base_spacing : Horizontal unit at depth 0 before decay.
        config       : Spacing constants.
    """
    if root is None:
        return

    weights = subtree_weights(root)

    # (node, x, depth) — explicit stack, preorder
    stack: List[Tuple[TreeNode, float, int]] = [(root, center_x, 0)]
    while stack:
        node, x, depth = stack.pop()
        node.x = x
        node.y = root_y + depth * config.level_step

        unit = config.spacing(base_spacing, depth + 1)
        if node.right is not None:
            inner = _weight(weights, node.right.left)
            stack.append((node.right, x + unit * (1 + inner), depth + 1))
        if node.left is not None:
            inner = _weight(weights, node.left.right)
            stack.append((node.left, x - unit * (1 + inner), depth + 1))


def subtree_weights(root: Optional[TreeNode]) -> Dict[int, int]:
    """Pass 1: node count of every subtree, keyed by id(node)."""
    weights: Dict[int, int] = {}
    for node in iter_traverse(root, TraversalOrder.POSTORDER):
        weights[id(node)] = (
            1
            + (weights[id(node.left)] if node.left else 0)
            + (weights[id(node.right)] if node.right else 0)
        )
    return weights


def _weight(weights: Dict[int, int], node: Optional[TreeNode]) -> int:
    return weights[id(node)] if node is not None else 0


# ---------------------------------------------------------------------------
# Viewport helpers
# ---------------------------------------------------------------------------
def viewport_params(width: float, config: LayoutConfig = LAYOUT) -> Tuple[float, float, float]:
    """(center_x, root_y, base_spacing) for a viewport of `width` pixels."""
    return width / 2, config.root_y, width / 8


def bounding_box(
    root: Optional[TreeNode],
    radius: float = LAYOUT.node_radius,
) -> Optional[Tuple[float, float, float, float]]:
    """(min_x, min_y, max_x, max_y) covering every node disc, or None if empty."""
    nodes = list(iter_traverse(root, TraversalOrder.PREORDER))
    if not nodes:
        return None
    return (
        min(n.x for n in nodes) - radius,
        min(n.y for n in nodes) - radius,
        max(n.x for n in nodes) + radius,
        max(n.y for n in nodes) + radius,
    )


def footprints_overlap(a: TreeNode, b: TreeNode, radius: float = LAYOUT.node_radius) -> bool:
    """True if the two node discs intersect (touching does not count)."""
    return ((a.x - b.x) ** 2 + (a.y - b.y) ** 2) ** 0.5 < 2 * radius
