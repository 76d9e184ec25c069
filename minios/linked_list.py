"""Doubly linked list with caller-owned nodes."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class ListNode:
    """A list node; ``value`` carries whatever the owner attaches to it."""

    value: Any = None
    prev: ListNode | None = field(default=None, repr=False)
    next: ListNode | None = field(default=None, repr=False)


class LinkedList:
    """A doubly linked list of :class:`ListNode` objects."""

    def __init__(self) -> None:
        self._first: ListNode | None = None
        self._last: ListNode | None = None
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[ListNode]:
        node = self._first
        while node is not None:
            nxt = node.next
            yield node
            node = nxt

    def first(self) -> ListNode | None:
        return self._first

    def last(self) -> ListNode | None:
        return self._last

    def is_empty(self) -> bool:
        return self._count == 0

    def insert_first(self, node: ListNode) -> None:
        node.next = self._first
        node.prev = None
        if self.is_empty():
            self._first = self._last = node
        else:
            self._first.prev = node
            self._first = node
        self._count += 1

    def insert_last(self, node: ListNode) -> None:
        node.prev = self._last
        node.next = None
        if self.is_empty():
            self._first = self._last = node
        else:
            self._last.next = node
            self._last = node
        self._count += 1

    def remove_first(self) -> ListNode | None:
        """Detach and return the first node, or None if the list is empty."""
        if self.is_empty():
            return None
        node = self._first
        self._first = node.next
        if self._first is None:
            self._last = None
        else:
            self._first.prev = None
        node.next = node.prev = None
        self._count -= 1
        return node

    def remove_last(self) -> ListNode | None:
        """Detach and return the last node, or None if the list is empty."""
        if self.is_empty():
            return None
        node = self._last
        self._last = node.prev
        if self._last is None:
            self._first = None
        else:
            self._last.next = None
        node.next = node.prev = None
        self._count -= 1
        return node

    def remove(self, node: ListNode) -> ListNode:
        """Detach ``node``, which must belong to this list, and return it."""
        if node is self._first:
            self._first = node.next
        if node is self._last:
            self._last = node.prev
        if node.prev is not None:
            node.prev.next = node.next
        if node.next is not None:
            node.next.prev = node.prev
        node.prev = node.next = None
        self._count -= 1
        return node