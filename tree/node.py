from dataclasses import dataclass
from typing import Dict, Optional


# ---------------------------------------------------------------------------
# TreeNode — owned recursive structure, no parent pointers
# ---------------------------------------------------------------------------
class TreeNode:
    """
    One key of the binary search tree.

    Attributes:
        value : Integer key.  Unique within a tree, so it doubles as the
                node's stable identifier (flags, snapshots and steps all
                address a node by its value).
        left  : Owned left child (smaller keys) or None.
        right : Owned right child (larger keys) or None.
        x, y  : Layout coordinates.  Derived data — only meaningful after
                tree.layout.layout() has run since the last insert.
    """

    __slots__ = ("value", "left", "right", "x", "y")

    def __init__(self, value: int):
        self.value: int                 = value
        self.left:  Optional["TreeNode"] = None
        self.right: Optional["TreeNode"] = None
        self.x:     float               = 0.0
        self.y:     float               = 0.0

    def set_child(self, side: str, node: "TreeNode") -> None:
        if side == "left":
            self.left = node
        else:
            self.right = node

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "left":  self.left.value if self.left else None,
            "right": self.right.value if self.right else None,
            "x":     self.x,
            "y":     self.y,
        }

    def __repr__(self) -> str:
        return f"TreeNode(value={self.value}, pos=({self.x:.1f},{self.y:.1f}))"


# ---------------------------------------------------------------------------
# Transient animation flags — kept OFF the domain node
# ---------------------------------------------------------------------------
@dataclass
class NodeFlags:
    highlighted:      bool = False
    visited:          bool = False
    is_search_result: bool = False

    def reset(self) -> None:
        self.highlighted = False
        self.visited = False
        self.is_search_result = False

    def any(self) -> bool:
        return self.highlighted or self.visited or self.is_search_result

    def to_dict(self) -> dict:
        return {
            "highlighted":      self.highlighted,
            "visited":          self.visited,
            "is_search_result": self.is_search_result,
        }


class FlagStore:
    """
    Mapping node value → NodeFlags.

    Owned by the sequencer; the tree itself never carries animation state.
    Values that were never flagged read as all-false.
    """

    def __init__(self):
        self._flags: Dict[int, NodeFlags] = {}

    def get(self, value: int) -> NodeFlags:
        """Flags for `value`, created on first write access."""
        flags = self._flags.get(value)
        if flags is None:
            flags = self._flags[value] = NodeFlags()
        return flags

    def peek(self, value: int) -> NodeFlags:
        """Read-only view — never creates an entry."""
        return self._flags.get(value) or NodeFlags()

    # -- mutation helpers used by the animations --
    def highlight(self, value: int) -> None:
        self.get(value).highlighted = True

    def unhighlight(self, value: int) -> None:
        if value in self._flags:
            self._flags[value].highlighted = False

    def visit(self, value: int) -> None:
        self.get(value).visited = True

    def mark_result(self, value: int) -> None:
        self.get(value).is_search_result = True

    def reset(self, value: int) -> None:
        if value in self._flags:
            self._flags[value].reset()

    def clear(self) -> None:
        self._flags.clear()

    def __contains__(self, value: int) -> bool:
        return value in self._flags and self._flags[value].any()

    def __len__(self) -> int:
        return sum(1 for f in self._flags.values() if f.any())
