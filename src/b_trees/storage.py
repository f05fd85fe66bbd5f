"""Node read/write hooks for a storage layer under the B-tree"""

from abc import ABC, abstractmethod
from collections import Counter

from b_trees.node import BTreeNodeBase


class NodeStorage(ABC):
    """
    Strategy injected into a tree to page nodes in and out.

    read_node() is called before a node's contents are trusted; write_node()
    once a node's shape is final for the current step.
    """

    @abstractmethod
    def read_node(self, node: BTreeNodeBase) -> None:
        pass

    @abstractmethod
    def write_node(self, node: BTreeNodeBase) -> None:
        pass


class NullNodeStorage(NodeStorage):
    """The whole tree stays resident, so there is nothing to do."""

    def read_node(self, node: BTreeNodeBase) -> None:
        pass

    def write_node(self, node: BTreeNodeBase) -> None:
        pass


class CountingNodeStorage(NodeStorage):
    """Counts reads and writes per node handle."""

    def __init__(self):
        self.reads: Counter = Counter()
        self.writes: Counter = Counter()

    def read_node(self, node: BTreeNodeBase) -> None:
        self.reads[node.handle] += 1

    def write_node(self, node: BTreeNodeBase) -> None:
        self.writes[node.handle] += 1

    @property
    def total_reads(self) -> int:
        return sum(self.reads.values())

    @property
    def total_writes(self) -> int:
        return sum(self.writes.values())

    def reset(self) -> None:
        self.reads.clear()
        self.writes.clear()
