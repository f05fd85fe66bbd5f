"""B-tree nodes and the arena that owns them"""

from typing import Any, Iterator, List, Optional, Type


class BTreeNodeBase:
    """
    A node in a B-tree.

    Keys live in an exactly-sized, ascending list. Children are referenced by
    their arena handle; an internal node has len(keys) + 1 of them, a leaf none.
    The factory sets MIN_DEGREE on degree-specialised subclasses.
    """
    __slots__ = ("handle", "keys", "children", "leaf")

    MIN_DEGREE: int = 2

    def __init__(self, handle: int, leaf: bool = True) -> None:
        self.handle = handle
        self.keys: List[Any] = []
        self.children: List[int] = []
        self.leaf = leaf

    @classmethod
    def max_keys(cls) -> int:
        return 2 * cls.MIN_DEGREE - 1

    @classmethod
    def max_children(cls) -> int:
        return 2 * cls.MIN_DEGREE

    @property
    def key_count(self) -> int:
        return len(self.keys)

    @key_count.setter
    def key_count(self, count: int) -> None:
        """Shrink the node to its first `count` keys."""
        if count < 0 or count > len(self.keys):
            raise IndexError(
                f"key count {count} outside [0, {len(self.keys)}] for node {self.handle}"
            )
        del self.keys[count:]

    def is_full(self) -> bool:
        return len(self.keys) >= self.max_keys()

    def get_key(self, i: int) -> Any:
        if i < 0 or i >= len(self.keys):
            raise IndexError(f"key index {i} out of range for node {self.handle}")
        return self.keys[i]

    def set_key(self, i: int, key: Any) -> None:
        """
        Overwrite the key at `i`, or append when `i` equals the key count.
        """
        if i < 0 or i > len(self.keys) or i >= self.max_keys():
            raise IndexError(f"key index {i} out of range for node {self.handle}")
        if i == len(self.keys):
            self.keys.append(key)
        else:
            self.keys[i] = key

    def get_child(self, i: int) -> int:
        if i < 0 or i >= len(self.children):
            raise IndexError(f"child index {i} out of range for node {self.handle}")
        return self.children[i]

    def set_child(self, i: int, handle: int) -> None:
        """
        Overwrite the child handle at `i`, or append when `i` equals the child count.
        """
        if i < 0 or i > len(self.children) or i >= self.max_children():
            raise IndexError(f"child index {i} out of range for node {self.handle}")
        if i == len(self.children):
            self.children.append(handle)
        else:
            self.children[i] = handle

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BTreeNodeBase):
            return NotImplemented
        return self.keys == other.keys

    __hash__ = None

    def __str__(self):
        return "[" + " ".join(str(k) for k in self.keys) + "]"

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}(handle={self.handle}, keys={self.keys!r}, leaf={self.leaf})"


class NodeArena:
    """
    Owns every node of one tree. Handles are list offsets handed out in
    allocation order and are never reused.
    """
    __slots__ = ("NodeClass", "_nodes")

    def __init__(self, node_class: Type[BTreeNodeBase]) -> None:
        self.NodeClass = node_class
        self._nodes: List[BTreeNodeBase] = []

    def allocate(self, leaf: bool = True) -> BTreeNodeBase:
        node = self.NodeClass(len(self._nodes), leaf)
        self._nodes.append(node)
        return node

    def get(self, handle: int) -> BTreeNodeBase:
        if handle < 0 or handle >= len(self._nodes):
            raise IndexError(f"unknown node handle {handle}")
        return self._nodes[handle]

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, int) and 0 <= handle < len(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[BTreeNodeBase]:
        return iter(self._nodes)
