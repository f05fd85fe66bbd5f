from abc import ABC, abstractmethod
from numbers import Integral

from typing import TYPE_CHECKING, Any, NamedTuple, Optional, TypeVar, Generic

if TYPE_CHECKING:
    from b_trees.node import BTreeNodeBase


class InvalidArgumentError(ValueError):
    """Raised when a tree is configured with an unusable minimum degree."""
    pass


def check_min_degree(min_degree: Any) -> int:
    """
    Validate a B-tree minimum degree.

    Parameters:
        min_degree (int): The requested minimum degree t.

    Returns:
        int: The validated minimum degree.

    Raises:
        InvalidArgumentError: If min_degree is not an integer or is smaller than 2.
    """
    if not isinstance(min_degree, Integral) or isinstance(min_degree, bool):
        raise InvalidArgumentError(
            f"minimum degree must be an int, got {type(min_degree).__name__}"
        )
    if min_degree < 2:
        raise InvalidArgumentError(f"minimum degree must be >= 2, got {min_degree}")
    return int(min_degree)


class SearchResult(NamedTuple):
    """
    The location of a key found in a B-tree.

    Attributes:
        node (BTreeNodeBase): The node holding the key.
        index (int): The key's offset inside node.keys.
    """
    node: "BTreeNodeBase"
    index: int

    @property
    def key(self) -> Any:
        return self.node.keys[self.index]

    def __str__(self):
        return f"({self.node}, {self.index})"


T = TypeVar("T", bound="AbstractSearchTree")

class AbstractSearchTree(ABC, Generic[T]):
    """
    Abstract base class for an ordered search tree over comparable keys.
    """

    @abstractmethod
    def insert(self, key: Any) -> None:
        """
        Insert a key into the tree.

        Parameters:
            key: The key to insert. Must be comparable with the keys already stored.
        """
        pass

    @abstractmethod
    def search(self, key: Any) -> Optional[SearchResult]:
        """
        Look up a key.

        Parameters:
            key: The key to search for.

        Returns:
            SearchResult: The node and offset holding the key, or None if absent.
        """
        pass
