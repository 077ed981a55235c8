"""Ordered binary search tree with consuming traversals."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterable, List, Optional, Tuple, TypeVar

from traversal import InOrderTraversal, PostOrderTraversal, PreOrderTraversal

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Node(Generic[T]):
    """A single element plus the two subtrees it exclusively owns."""

    __slots__ = ("value", "left", "right")

    def __init__(self, value: T) -> None:
        self.value = value
        self.left: Optional[Node[T]] = None
        self.right: Optional[Node[T]] = None


class ValueRef(Generic[T]):
    """
    Writable handle onto the element stored in one node of a tree.
    Replacing the element with one that orders differently is allowed,
    but later lookups for the old or new element may then miss.
    """

    __slots__ = ("_tree", "_node", "_generation")

    def __init__(self, tree: OrderedTree[T], node: Node[T]) -> None:
        self._tree = tree
        self._node = node
        self._generation = tree._generation

    @property
    def value(self) -> T:
        self._ensure_live()
        return self._node.value

    @value.setter
    def value(self, new_value: T) -> None:
        self._ensure_live()
        self._node.value = new_value

    def _ensure_live(self) -> None:
        self._tree._ensure_usable()
        if self._generation != self._tree._generation:
            raise RuntimeError("ValueRef outlived a clear() of its OrderedTree")

    def __repr__(self) -> str:
        return f"ValueRef({self._node.value!r})"


class OrderedTree(Generic[T]):
    """Binary search tree that keeps one copy of every distinct element."""

 ######### construction #############
    def __init__(self, key: Optional[Callable[[T], Any]] = None) -> None:
        if key is not None and not callable(key):
            raise TypeError("key must be callable")

        self._key = key
        self._root: Optional[Node[T]] = None
        self._size = 0
        self._consumed = False
        # bumped by clear() so handles onto released nodes go stale
        self._generation = 0

    @classmethod
    def empty(cls, key: Optional[Callable[[T], Any]] = None) -> OrderedTree[T]:
        return cls(key=key)

    @classmethod
    def with_value(
        cls, value: T, key: Optional[Callable[[T], Any]] = None
    ) -> OrderedTree[T]:
        tree = cls(key=key)
        tree._root = Node(value)
        tree._size = 1
        return tree

    @classmethod
    def from_iterable(
        cls, values: Iterable[T], key: Optional[Callable[[T], Any]] = None
    ) -> OrderedTree[T]:
        tree = cls(key=key)
        for value in values:
            tree.insert(value)
        return tree

 ######### mutation #############
    def insert(self, value: T) -> None:
        """Adds value unless an equal element is already stored."""
        self._ensure_usable()

        if self._root is None:
            self._root = Node(value)
            self._size = 1
            return

        probe = self._sort_key(value)
        node = self._root
        while True:
            current = self._sort_key(node.value)
            if probe < current:
                if node.left is None:
                    node.left = Node(value)
                    self._size += 1
                    return
                node = node.left
            elif current < probe:
                if node.right is None:
                    node.right = Node(value)
                    self._size += 1
                    return
                node = node.right
            else:
                logger.debug("ignoring duplicate element %r", value)
                return

    def clear(self) -> None:
        """Tears down every node without recursing, leaving an empty tree."""
        self._ensure_usable()

        released = 0
        stack: List[Node[T]] = [self._root] if self._root is not None else []
        self._root = None
        while stack:
            node = stack.pop()
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
            node.left = node.right = None
            released += 1

        self._size = 0
        self._generation += 1
        logger.debug("cleared tree, released %d nodes", released)

 ######### lookup #############
    def has_element(self, value: T) -> bool:
        return self._find(value) is not None

    def retrieve(self, value: T) -> Optional[T]:
        """Returns the stored element equal to value, or None."""
        node = self._find(value)
        if node is None:
            return None
        return node.value

    def retrieve_mut(self, value: T) -> Optional[ValueRef[T]]:
        """
        Returns a handle that can replace the stored element equal to value,
        or None when no such element exists. The tree is not re-checked
        after a replacement.
        """
        node = self._find(value)
        if node is None:
            return None
        return ValueRef(self, node)

 ######### consuming traversals #############
    def into_pre_order(self) -> PreOrderTraversal[T]:
        return PreOrderTraversal(*self._take("pre-order"))

    def into_in_order(self) -> InOrderTraversal[T]:
        return InOrderTraversal(*self._take("in-order"))

    def into_post_order(self) -> PostOrderTraversal[T]:
        return PostOrderTraversal(*self._take("post-order"))

 ######### helpers #############
    def _sort_key(self, value: T) -> Any:
        if self._key is None:
            return value
        return self._key(value)

    def _find(self, value: T) -> Optional[Node[T]]:
        self._ensure_usable()

        probe = self._sort_key(value)
        node = self._root
        while node is not None:
            current = self._sort_key(node.value)
            if probe < current:
                node = node.left
            elif current < probe:
                node = node.right
            else:
                return node
        return None

    def _take(self, order: str) -> Tuple[Optional[Node[T]], int]:
        self._ensure_usable()

        root, size = self._root, self._size
        self._root = None
        self._size = 0
        self._consumed = True
        logger.debug("consumed tree into %s traversal of %d elements", order, size)
        return root, size

    def _ensure_usable(self) -> None:
        if self._consumed:
            raise RuntimeError("OrderedTree has been consumed")

    def __contains__(self, value: T) -> bool:
        return self.has_element(value)

    def __len__(self) -> int:
        self._ensure_usable()
        return self._size

    def __str__(self) -> str:
        self._ensure_usable()

        parts: List[str] = []
        # entries are nodes, None for empty subtrees, or literal text
        stack: List[Any] = [self._root]
        while stack:
            entry = stack.pop()
            if entry is None:
                parts.append("*")
            elif isinstance(entry, str):
                parts.append(entry)
            else:
                stack.extend(
                    ["]", entry.right, ", ", str(entry.value), ", ", entry.left, "["]
                )
        return "".join(parts)

    def __repr__(self) -> str:
        if self._consumed:
            return "OrderedTree(<consumed>)"
        return f"OrderedTree({self})"
