"""
traversal.py — Animated Depth-First Traversals
===============================================
One generator for all three orders.  Nodes are visited in exactly the
order tree.iter_traverse() yields them; each visit moves the highlight
and marks the node VISITED.  The visit order accumulates in the overlay
and ends up in the completion log line.
"""

from typing import Dict, Generator, List

from animations.context import AnimationContext
from animations.step import Outcome, Step, StepBuilder
from tree import TraversalOrder, iter_traverse


# ---------------------------------------------------------------------------
# Pseudocode per order; VISIT_LINE points at the "visit(node)" line
# ---------------------------------------------------------------------------
PSEUDOCODE: Dict[TraversalOrder, List[str]] = {
    TraversalOrder.INORDER: [
        "def inorder(node):",          # 0
        "    if node is None: return", # 1
        "    inorder(node.left)",      # 2
        "    visit(node)",             # 3
        "    inorder(node.right)",     # 4
    ],
    TraversalOrder.PREORDER: [
        "def preorder(node):",         # 0
        "    if node is None: return", # 1
        "    visit(node)",             # 2
        "    preorder(node.left)",     # 3
        "    preorder(node.right)",    # 4
    ],
    TraversalOrder.POSTORDER: [
        "def postorder(node):",        # 0
        "    if node is None: return", # 1
        "    postorder(node.left)",    # 2
        "    postorder(node.right)",   # 3
        "    visit(node)",             # 4
    ],
}

VISIT_LINE = {
    TraversalOrder.INORDER:   3,
    TraversalOrder.PREORDER:  2,
    TraversalOrder.POSTORDER: 4,
}


def animate_traversal(ctx: AnimationContext, order: TraversalOrder) -> Generator[Step, None, None]:
    sb = StepBuilder(order.value)
    sb.overlay["visited_order"] = []

    yield sb.at(None, f"Starting {order.value} traversal", line=0).build()

    for node in iter_traverse(ctx.tree.root, order):
        ctx.focus(node.value)
        sb.overlay["visited_order"].append(node.value)
        yield sb.at(node.value, line=VISIT_LINE[order]).build()

    result = " → ".join(str(v) for v in sb.overlay["visited_order"])
    yield sb.at(
        ctx.last_node,
        f"{order.value} traversal result: {result}",
        line=0,
    ).build(Outcome.TRAVERSED)
