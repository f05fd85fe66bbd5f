"""Factory for degree-specialised B-tree classes"""

from typing import Type, Tuple, Dict, Optional
import logging

from b_trees.base import check_min_degree
from b_trees.btree_base import BTreeBase
from b_trees.node import BTreeNodeBase
from b_trees.storage import NodeStorage

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

# Cache for previously created classes to avoid recreating them
_class_cache: Dict[int, Tuple[Type[BTreeBase], Type[BTreeNodeBase]]] = {}


def make_btree_classes(t: int) -> Tuple[
    Type[BTreeBase],
    Type[BTreeNodeBase],
]:
    """
    Factory function to generate B-tree classes specialised for minimum degree t.

    Returns:
        BTreeT      – subclass of BTreeBase with MIN_DEGREE=t and NodeClass=BTreeNodeT.
        BTreeNodeT  – subclass of BTreeNodeBase with MIN_DEGREE=t.

    Raises:
        InvalidArgumentError: If t is not an int or is smaller than 2.
    """
    t = check_min_degree(t)
    if t in _class_cache:
        logger.debug(f"Using cached classes for t={t}")
        return _class_cache[t]

    logger.debug(f"Creating new classes for t={t}")

    BTreeNodeT = type(
        f"BTreeNode_T{t}",
        (BTreeNodeBase,),
        {
            "MIN_DEGREE": t,
            "__slots__": (),
        }
    )

    BTreeT = type(
        f"BTree_T{t}",
        (BTreeBase,),
        {
            "MIN_DEGREE": t,
            "NodeClass": BTreeNodeT,
            "__slots__": (),
        }
    )
    logger.debug(f"Created {BTreeT.__name__} with NodeClass={BTreeNodeT.__name__}")

    _class_cache[t] = (BTreeT, BTreeNodeT)
    return BTreeT, BTreeNodeT


def create_btree(t: int, storage: Optional[NodeStorage] = None) -> BTreeBase:
    """
    Create a new, empty B-tree with minimum degree t.

    Args:
        t (int): The minimum degree; nodes hold up to 2t-1 keys.
        storage (NodeStorage): Optional node read/write hooks. Defaults to no-op hooks.

    Returns:
        An empty tree whose root is a leaf with no keys.

    Raises:
        InvalidArgumentError: If t is not an int or is smaller than 2.
    """
    BTreeT, _ = make_btree_classes(t)
    tree = BTreeT(storage)
    logger.debug(f"Created tree instance of type {type(tree).__name__}")
    return tree
