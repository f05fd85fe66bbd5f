"""
B-trees - in-memory B-trees of configurable minimum degree.

Trees are built through the factory, which specialises the tree and node
classes for a given minimum degree t.
"""

from b_trees.base import (
    InvalidArgumentError,
    SearchResult,
)
from b_trees.btree_base import (
    BTreeBase,
    Stats,
    btree_stats_,
    collect_keys,
)
from b_trees.factory import (
    make_btree_classes,
    create_btree,
)
from b_trees.node import BTreeNodeBase, NodeArena
from b_trees.storage import (
    NodeStorage,
    NullNodeStorage,
    CountingNodeStorage,
)

__all__ = [
    'InvalidArgumentError',
    'SearchResult',
    'BTreeBase',
    'BTreeNodeBase',
    'NodeArena',
    'Stats',
    'btree_stats_',
    'collect_keys',
    'make_btree_classes',
    'create_btree',
    'NodeStorage',
    'NullNodeStorage',
    'CountingNodeStorage',
]
