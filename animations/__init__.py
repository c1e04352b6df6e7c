"""
animations/__init__.py — Animation Registry
============================================
Single source of truth for every animated operation.

    from animations import REGISTRY, get_animation

REGISTRY is a dict:
    {
        "insert": AnimationInfo(key, label, fn, pseudocode, …),
        …
    }

AnimationInfo is a lightweight dataclass.  The sequencer and the web
layer both consume it: adding an animation is write the generator, add
one entry here.
"""

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Optional

from animations.context   import AnimationContext
from animations.step      import Step, StepBuilder, Outcome
from animations.insert    import animate_insert,    PSEUDOCODE as _insert_pc
from animations.search    import animate_search,    PSEUDOCODE as _search_pc
from animations.traversal import animate_traversal, PSEUDOCODE as _traversal_pc
from tree import TraversalOrder


# ---------------------------------------------------------------------------
# AnimationInfo — metadata card for each animation
# ---------------------------------------------------------------------------
@dataclass
class AnimationInfo:
    key:             str              # registry key, e.g. "search"
    label:           str              # human label, e.g. "Search"
    fn:              Callable         # fn(ctx, arg) -> Generator[Step]
    pseudocode:      List[str]        # lines for the side-panel
    takes_value:     bool = True      # argument is a key (insert/search) vs. nothing
    complexity_time: str  = ""
    description:     str  = ""

    def to_dict(self) -> dict:
        return {
            "key":             self.key,
            "label":           self.label,
            "pseudocode":      list(self.pseudocode),
            "takes_value":     self.takes_value,
            "complexity_time": self.complexity_time,
            "description":     self.description,
        }


def _traversal(order: TraversalOrder, ctx: AnimationContext, _arg=None):
    return animate_traversal(ctx, order)


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AnimationInfo] = {

    "insert": AnimationInfo(
        key="insert", label="Insert", fn=animate_insert, pseudocode=_insert_pc,
        complexity_time="O(h)",
        description="Walks the search path down to an empty slot and hangs the new leaf there.",
    ),

    "search": AnimationInfo(
        key="search", label="Search", fn=animate_search, pseudocode=_search_pc,
        complexity_time="O(h)",
        description="One comparison per level: smaller goes left, larger goes right.",
    ),

    "inorder": AnimationInfo(
        key="inorder", label="Inorder Traversal",
        fn=partial(_traversal, TraversalOrder.INORDER),
        pseudocode=_traversal_pc[TraversalOrder.INORDER],
        takes_value=False, complexity_time="O(n)",
        description="Left, node, right. Visits the keys in ascending order.",
    ),

    "preorder": AnimationInfo(
        key="preorder", label="Preorder Traversal",
        fn=partial(_traversal, TraversalOrder.PREORDER),
        pseudocode=_traversal_pc[TraversalOrder.PREORDER],
        takes_value=False, complexity_time="O(n)",
        description="Node, left, right. Reinserting in this order rebuilds the same tree.",
    ),

    "postorder": AnimationInfo(
        key="postorder", label="Postorder Traversal",
        fn=partial(_traversal, TraversalOrder.POSTORDER),
        pseudocode=_traversal_pc[TraversalOrder.POSTORDER],
        takes_value=False, complexity_time="O(n)",
        description="Left, right, node. Children always come before their parent.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_animation(key: str) -> Optional[AnimationInfo]:
    """Return AnimationInfo by key, or None."""
    return REGISTRY.get(key)


def list_animations() -> List[AnimationInfo]:
    """Return all registered animations in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AnimationContext",
    "AnimationInfo",
    "Outcome",
    "REGISTRY",
    "Step",
    "StepBuilder",
    "get_animation",
    "list_animations",
]
