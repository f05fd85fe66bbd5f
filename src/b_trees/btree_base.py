"""B-tree base implementation"""

from __future__ import annotations
import logging
from bisect import bisect_left, bisect_right, insort_right
from typing import Any, List, Optional, Type
from dataclasses import dataclass

from b_trees.base import (
    AbstractSearchTree,
    InvalidArgumentError,
    SearchResult,
    check_min_degree,
)
from b_trees.node import BTreeNodeBase, NodeArena
from b_trees.storage import NodeStorage, NullNodeStorage
from b_trees.profiling import track_performance

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)


class BTreeBase(AbstractSearchTree):
    """
    A B-tree of minimum degree t over comparable keys.

    Every node but the root holds between t-1 and 2t-1 keys, the root between
    0 and 2t-1, and all leaves sit at the same depth. Nodes live in a
    NodeArena and refer to their children by handle.

    Attributes:
        arena (NodeArena): Owner of all nodes of this tree.
        storage (NodeStorage): Read/write hooks invoked as nodes are visited and finalised.
    """
    __slots__ = ("arena", "storage", "_root", "_size")

    # Will be set by the factory
    NodeClass: Type[BTreeNodeBase]
    MIN_DEGREE: Optional[int] = None

    def __init__(self, storage: Optional[NodeStorage] = None) -> None:
        min_degree = check_min_degree(self.MIN_DEGREE)
        node_class = getattr(type(self), "NodeClass", None)
        if node_class is None or node_class.MIN_DEGREE != min_degree:
            raise InvalidArgumentError(
                f"{type(self).__name__} has no node class for minimum degree {min_degree}"
            )
        self.arena = NodeArena(node_class)
        self.storage = storage if storage is not None else NullNodeStorage()
        root = self.arena.allocate(leaf=True)
        self._root = root.handle
        self._size = 0
        self.storage.write_node(root)

    @property
    def min_degree(self) -> int:
        return self.MIN_DEGREE

    @property
    def max_keys(self) -> int:
        return 2 * self.MIN_DEGREE - 1

    @property
    def root_handle(self) -> int:
        return self._root

    @property
    def root(self) -> BTreeNodeBase:
        return self.arena.get(self._root)

    def node(self, handle: int) -> BTreeNodeBase:
        return self.arena.get(handle)

    def is_empty(self) -> bool:
        return self.root.key_count == 0

    def __len__(self) -> int:
        return self._size

    def height(self) -> int:
        """Number of edges between the root and the leaves."""
        height = 0
        node = self.root
        while not node.leaf:
            node = self.arena.get(node.children[0])
            height += 1
        return height

    # Public API
    @track_performance(tag="BTree.search")
    def search(self, key: Any) -> Optional[SearchResult]:
        """
        Find the first occurrence of `key` met on the way down from the root.

        Args:
            key: The key to search for.

        Returns:
            SearchResult: (node, index) with node.keys[index] == key, or None if
                the key is not in the tree.
        """
        node = self._read(self._root)
        while True:
            keys = node.keys
            i = bisect_left(keys, key)
            if i < len(keys) and keys[i] == key:
                return SearchResult(node, i)
            if node.leaf:
                return None
            node = self._read(node.children[i])

    @track_performance(tag="BTree.insert")
    def insert(self, key: Any) -> None:
        """
        Insert `key` in a single top-down pass.

        A full root is split first, growing the tree by one level. On the way
        down every full child is split before it is entered, so the leaf that
        finally receives the key always has room. Equal keys are kept; the new
        one lands to the right of the existing occurrence.

        Args:
            key: The key to insert. Must be comparable with the stored keys.

        Raises:
            TypeError: If key cannot be compared with the stored keys. No key
                is added and a full root is not split.
        """
        root = self._read(self._root)
        if root.key_count == self.max_keys:
            # Compare before growing so a key that cannot be ordered leaves the tree untouched
            bisect_right(root.keys, key)
            root = self._grow_root(root)

        node = root
        while not node.leaf:
            i = bisect_right(node.keys, key)
            child = self._read(node.children[i])
            if child.key_count == self.max_keys:
                self.split_child(node, i, child)
                if not key < node.keys[i]:
                    i += 1
                child = self._read(node.children[i])
            node = child

        insort_right(node.keys, key)
        self._size += 1
        self._write(node)

    @track_performance(tag="BTree.split_child")
    def split_child(
        self,
        parent: BTreeNodeBase,
        index: int,
        full_child: BTreeNodeBase
    ) -> BTreeNodeBase:
        """
        Split the full child at parent.children[index] around its median.

        The new sibling receives the lower t-1 keys (and lower t children), the
        full child keeps the upper t-1 keys (and upper t children), and the
        median moves up into parent.keys[index]. The sibling takes the child's
        old slot; the shrunk child moves one slot to the right.

        Args:
            parent: A node with room for one more key.
            index: Position of full_child among parent's children.
            full_child: A node holding exactly 2t-1 keys.

        Returns:
            BTreeNodeBase: The newly allocated sibling.

        Raises:
            ValueError: If any of the preconditions above does not hold.
        """
        t = self.MIN_DEGREE
        if full_child.key_count != self.max_keys:
            raise ValueError(
                f"split_child(): node {full_child.handle} holds {full_child.key_count} keys, "
                f"expected {self.max_keys}"
            )
        if index < 0 or index >= len(parent.children) or parent.children[index] != full_child.handle:
            raise ValueError(
                f"split_child(): node {full_child.handle} is not child {index} of node {parent.handle}"
            )
        if parent.key_count >= self.max_keys:
            raise ValueError(f"split_child(): parent node {parent.handle} is full")

        median = full_child.keys[t - 1]
        sibling = self.arena.allocate(leaf=full_child.leaf)

        sibling.keys = full_child.keys[:t - 1]
        del full_child.keys[:t]
        if not full_child.leaf:
            sibling.children = full_child.children[:t]
            del full_child.children[:t]

        parent.keys.insert(index, median)
        parent.children.insert(index, sibling.handle)
        parent.leaf = False

        logger.debug(
            "Split node %d at median %r: lower half -> node %d, median -> node %d",
            full_child.handle, median, sibling.handle, parent.handle
        )
        self._write(sibling)
        self._write(full_child)
        self._write(parent)
        return sibling

    # Private Methods
    def _grow_root(self, old_root: BTreeNodeBase) -> BTreeNodeBase:
        """Put a new root above the full old root and split it."""
        new_root = self.arena.allocate(leaf=False)
        new_root.children.append(old_root.handle)
        self._root = new_root.handle
        self.split_child(new_root, 0, old_root)
        logger.debug(f"Root split: new root {new_root.handle}, height now {self.height()}")
        return new_root

    def _read(self, handle: int) -> BTreeNodeBase:
        node = self.arena.get(handle)
        self.storage.read_node(node)
        return node

    def _write(self, node: BTreeNodeBase) -> None:
        self.storage.write_node(node)

    def _subtree_equal(self, handle: int, other: BTreeBase, other_handle: int) -> bool:
        a = self.arena.get(handle)
        b = other.arena.get(other_handle)
        if a != b or a.leaf != b.leaf or len(a.children) != len(b.children):
            return False
        return all(
            self._subtree_equal(x, other, y)
            for x, y in zip(a.children, b.children)
        )

    def __eq__(self, other: object) -> bool:
        """Two trees are equal when their node shapes and keys match position by position."""
        if not isinstance(other, BTreeBase):
            return NotImplemented
        return self._subtree_equal(self._root, other, other._root)

    __hash__ = None

    def _render(self, handle: int) -> str:
        node = self.arena.get(handle)
        if node.leaf:
            return str(node)
        children = ",".join(self._render(h) for h in node.children)
        return f"({node}, ({children}))"

    def __str__(self):
        return self._render(self._root)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self._size}, height={self.height()})"

    def print_structure(self, indent: int = 0, max_depth: Optional[int] = None) -> str:
        """Multi-line view of the tree, one node per line, children indented below their parent."""
        result = []

        def _collect(handle: int, depth: int) -> None:
            prefix = ' ' * (indent + 4 * depth)
            if max_depth is not None and depth > max_depth:
                result.append(f"{prefix}... (max depth reached)")
                return
            node = self.arena.get(handle)
            result.append(f"{prefix}{node!r}")
            for child in node.children:
                _collect(child, depth + 1)

        _collect(self._root, 0)
        return "\n".join(result)


@dataclass
class Stats:
    height: int
    node_count: int
    key_count: int
    leaf_count: int
    least_key: Optional[Any]
    greatest_key: Optional[Any]
    is_search_tree: bool
    keys_ascending: bool
    key_counts_in_bounds: bool
    leaves_same_depth: bool
    child_counts_match: bool
    leaf_flags_consistent: bool


def btree_stats_(t: BTreeBase,
                 _handle: Optional[int] = None,
                 _is_root: bool = True,
                 ) -> Stats:
    """
    Returns aggregated statistics and invariant flags for a B-tree in O(n) time.

    Walks the arena directly, so storage read hooks are not triggered.
    """
    handle = t.root_handle if _handle is None else _handle
    node = t.node(handle)
    keys = node.keys
    n = len(keys)
    min_degree = t.min_degree
    non_decreasing = all(not b < a for a, b in zip(keys, keys[1:]))

    stats = Stats(
        height=0,
        node_count=1,
        key_count=n,
        leaf_count=0,
        least_key=keys[0] if keys else None,
        greatest_key=keys[-1] if keys else None,
        is_search_tree=non_decreasing,
        keys_ascending=all(a < b for a, b in zip(keys, keys[1:])),
        key_counts_in_bounds=(n <= 2 * min_degree - 1 and (_is_root or n >= min_degree - 1)),
        leaves_same_depth=True,
        child_counts_match=True,
        leaf_flags_consistent=True,
    )

    # ---------- leaf: base values ---------------------------------
    if node.leaf:
        stats.leaf_count = 1
        stats.child_counts_match = not node.children
        stats.leaf_flags_consistent = not node.children
        return stats

    stats.child_counts_match = len(node.children) == n + 1
    stats.leaf_flags_consistent = len(node.children) > 0
    if not node.children:
        return stats

    child_stats = [btree_stats_(t, h, False) for h in node.children]

    # ---------- aggregate ----------------------------------
    heights = set()
    for i, cs in enumerate(child_stats):
        heights.add(cs.height)
        stats.node_count += cs.node_count
        stats.key_count += cs.key_count
        stats.leaf_count += cs.leaf_count

        stats.is_search_tree &= cs.is_search_tree
        stats.keys_ascending &= cs.keys_ascending
        stats.key_counts_in_bounds &= cs.key_counts_in_bounds
        stats.leaves_same_depth &= cs.leaves_same_depth
        stats.child_counts_match &= cs.child_counts_match
        stats.leaf_flags_consistent &= cs.leaf_flags_consistent

        # Subtree i must lie between keys[i-1] and keys[i]
        if i < n and cs.greatest_key is not None and keys[i] < cs.greatest_key:
            stats.is_search_tree = False
        if 0 < i <= n and cs.least_key is not None and cs.least_key < keys[i - 1]:
            stats.is_search_tree = False

    stats.leaves_same_depth &= len(heights) == 1
    stats.height = 1 + max(heights)

    # ----- LEAST / GREATEST -----
    if child_stats[0].least_key is not None:
        stats.least_key = child_stats[0].least_key
    if child_stats[-1].greatest_key is not None:
        stats.greatest_key = child_stats[-1].greatest_key

    return stats


def collect_keys(tree: BTreeBase) -> List[Any]:
    """All keys of the tree in in-order sequence."""
    out = []

    def _walk(handle: int) -> None:
        node = tree.node(handle)
        if node.leaf:
            out.extend(node.keys)
            return
        for i, key in enumerate(node.keys):
            _walk(node.children[i])
            out.append(key)
        _walk(node.children[-1])

    _walk(tree.root_handle)
    return out
