"""
bst.py — Binary Search Tree Operations
=======================================
Pure structural operations on a tree of TreeNodes.  No timing, no
presentation state: the animations in animations/ drive these one
probe at a time and keep their flags in a separate FlagStore.

Responsibilities:
  1. The comparison walk            (descend → Probe per node examined)
  2. Insert / search built on it    (insert, attach, search)
  3. Traversal orders               (inorder, preorder, postorder)
  4. Enumeration & bulk helpers     (enumerate_all, clear_flags, size, …)
  5. A small container class        (BinarySearchTree)

Design decisions:
  - `descend` is the ONLY place a key is compared against the tree.
    insert, search and both animations consume it, and the animated
    insert finishes with `attach(probe, …)` on the very probe it stopped
    at, so the path shown and the path used for the structural insert
    can never diverge.
  - Keys compare with strict <, > and ==.  An equal key always ends the
    walk; duplicates never go right.
  - Traversals use an explicit stack (no Python recursion limit issues
    on long degenerate chains) but yield exactly the recursive orders.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from tree.node import TreeNode, FlagStore


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class Direction(Enum):
    LEFT  = "left"
    RIGHT = "right"
    FOUND = "found"


class TraversalOrder(Enum):
    INORDER   = "inorder"     # left, self, right
    PREORDER  = "preorder"    # self, left, right
    POSTORDER = "postorder"   # left, right, self

    @classmethod
    def parse(cls, name) -> Optional["TraversalOrder"]:
        """Accept an enum member or its name/value in any case; None if unknown."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            return None
        key = name.strip().lower().replace("-", "").replace("_", "")
        for order in cls:
            if order.value == key:
                return order
        return None


# ---------------------------------------------------------------------------
# Probe — one comparison made during a descent
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Probe:
    """
    Attributes:
        node      : The node whose key was compared.
        direction : LEFT / RIGHT (key smaller / larger) or FOUND (equal).
        child     : The child the walk moves to next; None when FOUND or
                    when the chosen slot is empty (walk ends here).
    """

    node:      TreeNode
    direction: Direction
    child:     Optional[TreeNode] = None

    @property
    def is_last(self) -> bool:
        return self.child is None


def descend(root: Optional[TreeNode], value: int) -> Iterator[Probe]:
    """
    Yield one Probe per node examined while looking for `value`.

    The walk stops after a FOUND probe or after the first probe whose
    chosen child slot is empty.  An empty tree yields nothing.
    """
    current = root
    while current is not None:
        if value == current.value:
            yield Probe(current, Direction.FOUND)
            return
        if value < current.value:
            probe = Probe(current, Direction.LEFT, current.left)
        else:
            probe = Probe(current, Direction.RIGHT, current.right)
        yield probe
        current = probe.child


# ---------------------------------------------------------------------------
# Insert / search
# ---------------------------------------------------------------------------
def attach(probe: Probe, value: int) -> TreeNode:
    """Create the leaf for `value` in the empty slot `probe` stopped at."""
    if probe.direction is Direction.FOUND or probe.child is not None:
        raise ValueError(f"probe at {probe.node.value} does not end at an empty slot")
    leaf = TreeNode(value)
    probe.node.set_child(probe.direction.value, leaf)
    return leaf


def insert(root: Optional[TreeNode], value: int) -> TreeNode:
    """
    Insert `value`, returning the root.

    An absent root yields a fresh single node.  If `value` is already
    present the tree is left untouched.  The root never changes identity.
    """
    if root is None:
        return TreeNode(value)
    last = None
    for last in descend(root, value):
        pass
    if last.direction is not Direction.FOUND:
        attach(last, value)
    return root


def search(root: Optional[TreeNode], value: int) -> Optional[TreeNode]:
    for probe in descend(root, value):
        if probe.direction is Direction.FOUND:
            return probe.node
    return None


def contains(root: Optional[TreeNode], value: int) -> bool:
    return search(root, value) is not None


# ---------------------------------------------------------------------------
# Traversals
# ---------------------------------------------------------------------------
def iter_traverse(root: Optional[TreeNode], order: TraversalOrder) -> Iterator[TreeNode]:
    """Lazily yield nodes in `order`.  Fully deterministic for a given shape."""
    if root is None:
        return
    if order is TraversalOrder.INORDER:
        yield from _inorder(root)
    elif order is TraversalOrder.PREORDER:
        yield from _preorder(root)
    elif order is TraversalOrder.POSTORDER:
        yield from _postorder(root)
    else:
        raise ValueError(f"Unknown traversal order: {order!r}")


def traverse(root: Optional[TreeNode], order: TraversalOrder) -> List[TreeNode]:
    return list(iter_traverse(root, order))


def _inorder(root: TreeNode) -> Iterator[TreeNode]:
    stack: List[TreeNode] = []
    current: Optional[TreeNode] = root
    while stack or current is not None:
        while current is not None:
            stack.append(current)
            current = current.left
        current = stack.pop()
        yield current
        current = current.right


def _preorder(root: TreeNode) -> Iterator[TreeNode]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        # right pushed first so left is popped (visited) first
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def _postorder(root: TreeNode) -> Iterator[TreeNode]:
    # (node, children_done) pairs
    stack: List[Tuple[TreeNode, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        if node.right is not None:
            stack.append((node.right, False))
        if node.left is not None:
            stack.append((node.left, False))


# ---------------------------------------------------------------------------
# Enumeration & bulk helpers
# ---------------------------------------------------------------------------
def enumerate_all(root: Optional[TreeNode]) -> List[TreeNode]:
    """Every node, in a fixed (preorder) order.  Used for bulk resets."""
    return traverse(root, TraversalOrder.PREORDER)


def clear_flags(root: Optional[TreeNode], flags: FlagStore) -> None:
    """Reset highlighted / visited / is_search_result on every node of the subtree."""
    for node in enumerate_all(root):
        flags.reset(node.value)


def size(root: Optional[TreeNode]) -> int:
    return sum(1 for _ in iter_traverse(root, TraversalOrder.PREORDER))


def height(root: Optional[TreeNode]) -> int:
    """Number of levels; 0 for an empty tree."""
    if root is None:
        return 0
    best = 0
    stack = [(root, 1)]
    while stack:
        node, depth = stack.pop()
        best = max(best, depth)
        for child in (node.left, node.right):
            if child is not None:
                stack.append((child, depth + 1))
    return best


def shape(root: Optional[TreeNode]):
    """
    Structural fingerprint: nested (value, left, right) tuples, None for
    an empty slot.  Two trees compare equal iff values and shape match.
    """
    if root is None:
        return None
    built = {}
    for node in _postorder(root):
        built[id(node)] = (
            node.value,
            built.pop(id(node.left), None) if node.left else None,
            built.pop(id(node.right), None) if node.right else None,
        )
    return built[id(root)]


def build(values: Iterable[int], root: Optional[TreeNode] = None) -> Optional[TreeNode]:
    """Insert every value in order (duplicates dropped)."""
    for v in values:
        root = insert(root, v)
    return root


# ---------------------------------------------------------------------------
# Container
# ---------------------------------------------------------------------------
class BinarySearchTree:
    """
    Holds the single optional root.

    Attributes:
        root : TreeNode or None (empty tree).
    """

    def __init__(self, values: Iterable[int] = ()):
        self.root: Optional[TreeNode] = None
        self._size: int = 0
        for v in values:
            self.insert(v)

    def insert(self, value: int) -> bool:
        """Insert `value`; False (tree unchanged) if it was already present."""
        if self.root is not None and contains(self.root, value):
            return False
        self.root = insert(self.root, value)
        self._size += 1
        return True

    def attach(self, probe: Probe, value: int) -> TreeNode:
        leaf = attach(probe, value)
        self._size += 1
        return leaf

    def plant_root(self, value: int) -> TreeNode:
        """Create the root of an empty tree."""
        if self.root is not None:
            raise ValueError("tree already has a root")
        self.root = TreeNode(value)
        self._size = 1
        return self.root

    def search(self, value: int) -> Optional[TreeNode]:
        return search(self.root, value)

    def descend(self, value: int) -> Iterator[Probe]:
        return descend(self.root, value)

    def traverse(self, order: TraversalOrder) -> List[TreeNode]:
        return traverse(self.root, order)

    def values(self, order: TraversalOrder = TraversalOrder.INORDER) -> List[int]:
        return [n.value for n in iter_traverse(self.root, order)]

    def nodes(self) -> List[TreeNode]:
        return enumerate_all(self.root)

    def height(self) -> int:
        return height(self.root)

    def shape(self):
        return shape(self.root)

    def clear(self) -> None:
        self.root = None
        self._size = 0

    @property
    def is_empty(self) -> bool:
        return self.root is None

    def to_dict(self) -> dict:
        return {
            "root":  self.root.value if self.root else None,
            "nodes": [n.to_dict() for n in self.nodes()],
        }

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: int) -> bool:
        return contains(self.root, value)

    def __repr__(self) -> str:
        return f"BinarySearchTree(size={self._size}, height={self.height()})"
