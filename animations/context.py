"""
context.py — What an animation may touch
=========================================
An AnimationContext bundles the shared tree, the flag store and the
relayout hook for one running animation.  The sequencer builds one per
command; the generators never see the sequencer itself.
"""

from typing import Callable, Optional

from tree import BinarySearchTree, FlagStore, clear_flags


class AnimationContext:
    """
    Attributes:
        tree        : The shared tree (shape mutated only by the insert animation).
        flags       : Transient per-node flags.
        relayout    : Callback that recomputes coordinates after a structural change.
        clear_first : True → every flag is reset when the animation starts.
                      False → a node's flags are reset when the animation first
                      reaches it.
        last_node   : Value of the node currently holding the highlight.
    """

    def __init__(
        self,
        tree: BinarySearchTree,
        flags: FlagStore,
        relayout: Callable[[], None],
        clear_first: bool = True,
    ):
        self.tree        = tree
        self.flags       = flags
        self.relayout    = relayout
        self.clear_first = clear_first
        self.last_node:  Optional[int] = None
        self._reached:   set = set()

    def begin(self) -> None:
        """Called by the sequencer when the command is accepted."""
        if self.clear_first:
            clear_flags(self.tree.root, self.flags)

    def focus(self, value: int) -> None:
        """Move the highlight onto `value` and mark it visited."""
        if not self.clear_first and value not in self._reached:
            self.flags.reset(value)
        self._reached.add(value)
        if self.last_node is not None and self.last_node != value:
            self.flags.unhighlight(self.last_node)
        self.flags.highlight(value)
        self.flags.visit(value)
        self.last_node = value

    def release(self) -> None:
        """Drop the highlight from the last-visited node."""
        if self.last_node is not None:
            self.flags.unhighlight(self.last_node)
