"""
tree/
-----
Core data layer.  Public API:

    from tree import BinarySearchTree, TreeNode, TraversalOrder
    from tree import FlagStore, NodeFlags
    from tree.layout import layout, LayoutConfig
"""

from tree.node   import TreeNode, NodeFlags, FlagStore
from tree.bst    import (
    BinarySearchTree,
    Direction,
    Probe,
    TraversalOrder,
    attach,
    build,
    clear_flags,
    contains,
    descend,
    enumerate_all,
    height,
    insert,
    iter_traverse,
    search,
    shape,
    size,
    traverse,
)
from tree.layout import LayoutConfig, LAYOUT, viewport_params

__all__ = [
    "TreeNode",  "NodeFlags",  "FlagStore",
    "BinarySearchTree", "Direction", "Probe", "TraversalOrder",
    "attach", "build", "clear_flags", "contains", "descend",
    "enumerate_all", "height", "insert", "iter_traverse",
    "search", "shape", "size", "traverse",
    "LayoutConfig", "LAYOUT", "viewport_params",
]
