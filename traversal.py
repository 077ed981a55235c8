"""Consuming traversals over the nodes of an ordered tree."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, List, Optional, Tuple, TypeVar

if TYPE_CHECKING:
    from ordered_tree import Node

T = TypeVar("T")


def count_nodes(root: Optional[Node[T]]) -> int:
    count = 0
    stack: List[Node[T]] = [root] if root is not None else []
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(child for child in (node.left, node.right) if child is not None)
    return count


class _ConsumingTraversal(Generic[T]):
    """
    One-shot iterator that owns a detached root node.
    Nodes are unlinked from their parents as they are visited, so every
    element leaves the structure exactly once. When size is not given the
    nodes are counted up front.
    """

    def __init__(self, root: Optional[Node[T]], size: Optional[int] = None) -> None:
        if root is None:
            self._remaining = 0
        elif size is None:
            self._remaining = count_nodes(root)
        else:
            self._remaining = size

    def __iter__(self) -> _ConsumingTraversal[T]:
        return self

    def __next__(self) -> T:
        node = self._advance()
        if node is None:
            self._remaining = 0
            raise StopIteration
        self._remaining -= 1
        return node.value

    def __length_hint__(self) -> int:
        return max(self._remaining, 0)

    def _advance(self) -> Optional[Node[T]]:
        raise NotImplementedError


class PreOrderTraversal(_ConsumingTraversal[T]):
    """Yields node, then left subtree, then right subtree."""

    def __init__(self, root: Optional[Node[T]], size: Optional[int] = None) -> None:
        super().__init__(root, size)
        self._stack: List[Node[T]] = [root] if root is not None else []

    def _advance(self) -> Optional[Node[T]]:
        if not self._stack:
            return None

        node = self._stack.pop()
        # right goes under left so the left subtree is drained first
        if node.right is not None:
            self._stack.append(node.right)
        if node.left is not None:
            self._stack.append(node.left)
        node.left = node.right = None
        return node


class InOrderTraversal(_ConsumingTraversal[T]):
    """Yields left subtree, then node, then right subtree (ascending)."""

    def __init__(self, root: Optional[Node[T]], size: Optional[int] = None) -> None:
        super().__init__(root, size)
        self._stack: List[Node[T]] = []
        self._pending = root

    def _advance(self) -> Optional[Node[T]]:
        node = self._pending
        while node is not None:
            self._stack.append(node)
            node = node.left

        if not self._stack:
            self._pending = None
            return None

        node = self._stack.pop()
        self._pending = node.right
        node.left = node.right = None
        return node


class PostOrderTraversal(_ConsumingTraversal[T]):
    """Yields left subtree, then right subtree, then node."""

    def __init__(self, root: Optional[Node[T]], size: Optional[int] = None) -> None:
        super().__init__(root, size)
        # (node, children already scheduled)
        self._stack: List[Tuple[Node[T], bool]] = (
            [(root, False)] if root is not None else []
        )

    def _advance(self) -> Optional[Node[T]]:
        while self._stack:
            node, expanded = self._stack.pop()
            if expanded or (node.left is None and node.right is None):
                return node

            self._stack.append((node, True))
            if node.right is not None:
                self._stack.append((node.right, False))
            if node.left is not None:
                self._stack.append((node.left, False))
            node.left = node.right = None
        return None
