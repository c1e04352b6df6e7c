"""
insert.py — Animated BST Insert
================================
Generator-based insert.  Yields a Step at every meaningful event:
  1. Start                    →  "Inserting value: v"
  2. Each node compared       →  highlight moves there, node VISITED,
                                 log "v < n, go left" / "v > n, go right"
  3. Equal key met            →  "already exists", tree untouched, done
  4. Empty child slot reached →  "Found insertion point", then the leaf
                                 is attached to THAT slot, layout is
                                 recomputed and the new leaf is shown

The walk is tree.descend() itself and the leaf goes in through
BinarySearchTree.attach() on the last probe, so the animated path is
the structural path by construction.
"""

from typing import Generator, List

from animations.context import AnimationContext
from animations.step import Outcome, Step, StepBuilder
from tree import Direction


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def insert(root, v):",                                   # 0
    "    if root is None: return Node(v)",                    # 1
    "    node ← root",                                        # 2
    "    loop:",                                              # 3
    "        if v == node.value: return  # already present",  # 4
    "        if v < node.value:",                             # 5
    "            if node.left is None: node.left ← Node(v)",  # 6
    "            else: node ← node.left",                     # 7
    "        else:",                                          # 8
    "            if node.right is None: node.right ← Node(v)",# 9
    "            else: node ← node.right",                    # 10
]

_GO_LINE   = {Direction.LEFT: 7, Direction.RIGHT: 10}
_SLOT_LINE = {Direction.LEFT: 6, Direction.RIGHT: 9}


def animate_insert(ctx: AnimationContext, value: int) -> Generator[Step, None, None]:
    """
    Yields Step snapshots for inserting `value`.

    Args:
        ctx   : Shared tree, flags and relayout hook.
        value : Key to insert.
    """

    sb = StepBuilder("insert")
    sb.overlay["value"] = value
    sb.overlay["path"]  = []

    yield sb.at(None, f"Inserting value: {value}", line=0).build()

    # --- empty tree: the new node IS the root ---
    if ctx.tree.is_empty:
        ctx.tree.plant_root(value)
        ctx.relayout()
        ctx.focus(value)
        sb.overlay["path"].append(value)
        yield sb.at(value, f"Created root node with value: {value}", line=1).build(Outcome.CREATED_ROOT)
        return

    # --- simulated descent ---
    for probe in ctx.tree.descend(value):
        node = probe.node.value
        ctx.focus(node)
        sb.overlay["path"].append(node)

        if probe.direction is Direction.FOUND:
            yield sb.at(node, f"Value {value} already exists in tree", line=4).build(Outcome.DUPLICATE)
            return

        side = probe.direction.value
        symbol = "<" if probe.direction is Direction.LEFT else ">"
        yield sb.at(node, f"{value} {symbol} {node}, go {side}", line=_GO_LINE[probe.direction]).build()

        if probe.is_last:
            yield sb.at(
                node,
                f"Found insertion point: {side} child of {node}",
                line=_SLOT_LINE[probe.direction],
            ).build()

            # -- the real insert, at the slot the walk stopped at --
            leaf = ctx.tree.attach(probe, value)
            ctx.relayout()
            ctx.focus(leaf.value)
            sb.overlay["path"].append(leaf.value)
            yield sb.at(
                leaf.value,
                f"Inserted {value} as {side} child of {node}",
                line=_SLOT_LINE[probe.direction],
            ).build(Outcome.INSERTED)
            return
