"""
search.py — Animated BST Search
================================
Yields a Step at:
  1. Start              →  "Searching for value: v"
  2. Each node compared →  highlight moves there, node VISITED
  3. Equal key          →  node marked SEARCH RESULT, "Found v!"
  4. Missing child      →  "Value v not found in tree"

Same descent as tree.search(): one comparison per level, O(depth).
"""

from typing import Generator, List

from animations.context import AnimationContext
from animations.step import Outcome, Step, StepBuilder
from tree import Direction


PSEUDOCODE: List[str] = [
    "def search(root, v):",                        # 0
    "    node ← root",                             # 1
    "    while node is not None:",                 # 2
    "        if v == node.value: return node",     # 3
    "        if v < node.value: node ← node.left", # 4
    "        else: node ← node.right",             # 5
    "    return NOT FOUND",                        # 6
]


def animate_search(ctx: AnimationContext, value: int) -> Generator[Step, None, None]:
    sb = StepBuilder("search")
    sb.overlay["value"] = value
    sb.overlay["path"]  = []

    yield sb.at(None, f"Searching for value: {value}", line=1).build()

    for probe in ctx.tree.descend(value):
        node = probe.node.value
        ctx.focus(node)
        sb.overlay["path"].append(node)

        if probe.direction is Direction.FOUND:
            ctx.flags.mark_result(node)
            yield sb.at(node, f"Found {value}!", line=3).build(Outcome.FOUND)
            return

        if probe.direction is Direction.LEFT:
            yield sb.at(node, f"{value} < {node}, go left", line=4).build()
        else:
            yield sb.at(node, f"{value} > {node}, go right", line=5).build()

    yield sb.at(None, f"Value {value} not found in tree", line=6).build(Outcome.NOT_FOUND)
