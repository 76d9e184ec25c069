"""Red-black tree with caller-owned nodes.

The tree only keeps the nodes balanced; placing a new node is either done by
the caller (:meth:`RBTree.link_node` followed by :meth:`RBTree.insert_color`)
or by :meth:`RBTree.insert`, which orders nodes by their ``key``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class Color(IntEnum):
    """Node colour."""

    RED = 0
    BLACK = 1


@dataclass(eq=False)
class RBNode:
    """A tree node; ``key`` orders it and ``value`` is free for the owner."""

    key: Any = None
    value: Any = None
    color: Color = Color.RED
    parent: RBNode | None = field(default=None, repr=False)
    left: RBNode | None = field(default=None, repr=False)
    right: RBNode | None = field(default=None, repr=False)


def _is_red(node: RBNode | None) -> bool:
    return node is not None and node.color is Color.RED


def _is_black(node: RBNode | None) -> bool:
    return node is None or node.color is Color.BLACK


def rb_next(node: RBNode) -> RBNode | None:
    """Return the in-order successor of ``node``, or None."""
    if node.right is not None:
        node = node.right
        while node.left is not None:
            node = node.left
        return node
    while node.parent is not None and node is node.parent.right:
        node = node.parent
    return node.parent


def rb_prev(node: RBNode) -> RBNode | None:
    """Return the in-order predecessor of ``node``, or None."""
    if node.left is not None:
        node = node.left
        while node.right is not None:
            node = node.right
        return node
    while node.parent is not None and node is node.parent.left:
        node = node.parent
    return node.parent


class RBTree:
    """A red-black tree; ``root`` is its top node or None when empty."""

    def __init__(self) -> None:
        self.root: RBNode | None = None

    def __iter__(self) -> Iterator[RBNode]:
        node = self.first()
        while node is not None:
            nxt = rb_next(node)
            yield node
            node = nxt

    def first(self) -> RBNode | None:
        """Return the leftmost node, or None if the tree is empty."""
        node = self.root
        if node is None:
            return None
        while node.left is not None:
            node = node.left
        return node

    def link_node(self, node: RBNode, parent: RBNode | None, is_left: bool) -> None:
        """Attach ``node`` as a red leaf under ``parent`` (or as the root)."""
        node.color = Color.RED
        node.parent = parent
        node.left = node.right = None
        if parent is None:
            self.root = node
        elif is_left:
            parent.left = node
        else:
            parent.right = node

    def _replace_child(self, old: RBNode, new: RBNode | None, parent: RBNode | None) -> None:
        if parent is None:
            self.root = new
        elif old is parent.left:
            parent.left = new
        else:
            parent.right = new

    def rotate_left(self, node: RBNode) -> None:
        """Rotate the subtree at ``node`` left; its right child becomes the top."""
        right = node.right
        node.right = right.left
        if node.right is not None:
            node.right.parent = node
        right.left = node
        right.parent = node.parent
        self._replace_child(node, right, right.parent)
        node.parent = right

    def rotate_right(self, node: RBNode) -> None:
        """Rotate the subtree at ``node`` right; its left child becomes the top."""
        left = node.left
        node.left = left.right
        if node.left is not None:
            node.left.parent = node
        left.right = node
        left.parent = node.parent
        self._replace_child(node, left, left.parent)
        node.parent = left

    def insert_color(self, node: RBNode) -> None:
        """Restore the red-black properties after ``node`` has been linked."""
        while (parent := node.parent) is not None and _is_red(parent):
            gparent = parent.parent
            if parent is gparent.left:
                uncle = gparent.right
                if _is_red(uncle):
                    parent.color = Color.BLACK
                    uncle.color = Color.BLACK
                    gparent.color = Color.RED
                    node = gparent
                    continue
                if node is parent.right:
                    self.rotate_left(parent)
                    parent, node = node, parent
                gparent.color = Color.RED
                parent.color = Color.BLACK
                self.rotate_right(gparent)
            else:
                uncle = gparent.left
                if _is_red(uncle):
                    parent.color = Color.BLACK
                    uncle.color = Color.BLACK
                    gparent.color = Color.RED
                    node = gparent
                    continue
                if node is parent.left:
                    self.rotate_right(parent)
                    parent, node = node, parent
                gparent.color = Color.RED
                parent.color = Color.BLACK
                self.rotate_left(gparent)
        self.root.color = Color.BLACK

    def insert(self, node: RBNode) -> RBNode:
        """Insert ``node`` ordered by key; equal keys go after existing ones."""
        parent = None
        is_left = False
        cur = self.root
        while cur is not None:
            parent = cur
            is_left = node.key < cur.key
            cur = cur.left if is_left else cur.right
        self.link_node(node, parent, is_left)
        self.insert_color(node)
        return node

    def _splice_two_children(self, old: RBNode, node: RBNode, replace: RBNode | None):
        """Put ``node`` (old's successor or predecessor) in ``old``'s place."""
        parent = node.parent
        color = node.color
        if replace is not None:
            replace.parent = parent
        self._replace_child(node, replace, parent)
        if node.parent is old:
            parent = node
        node.parent = old.parent
        node.color = old.color
        node.right = old.right
        node.left = old.left
        self._replace_child(old, node, old.parent)
        if old.left is not None:
            old.left.parent = node
        if old.right is not None:
            old.right.parent = node
        return parent, color

    def _erase(self, node: RBNode, use_successor: bool) -> None:
        if node.left is None or node.right is None:
            replace = node.right if node.left is None else node.left
            parent = node.parent
            color = node.color
            if replace is not None:
                replace.parent = parent
            self._replace_child(node, replace, parent)
        else:
            old = node
            if use_successor:
                node = node.right
                while node.left is not None:
                    node = node.left
                replace = node.right
            else:
                node = node.left
                while node.right is not None:
                    node = node.right
                replace = node.left
            parent, color = self._splice_two_children(old, node, replace)
        if color is Color.BLACK:
            self._erase_color(replace, parent)

    def erase_next(self, node: RBNode) -> None:
        """Remove ``node``; with two children, its successor takes its place."""
        self._erase(node, use_successor=True)

    def erase_prev(self, node: RBNode) -> None:
        """Remove ``node``; with two children, its predecessor takes its place."""
        self._erase(node, use_successor=False)

    def _erase_color(self, node: RBNode | None, parent: RBNode | None) -> None:
        while _is_black(node) and node is not self.root:
            if node is parent.left:
                other = parent.right
                if _is_red(other):
                    parent.color = Color.RED
                    other.color = Color.BLACK
                    self.rotate_left(parent)
                    other = parent.right
                if _is_black(other.left) and _is_black(other.right):
                    other.color = Color.RED
                    node = parent
                    parent = node.parent
                else:
                    if _is_black(other.right):
                        other.color = Color.RED
                        if other.left is not None:
                            other.left.color = Color.BLACK
                        self.rotate_right(other)
                        other = parent.right
                    other.color = parent.color
                    parent.color = Color.BLACK
                    if other.right is not None:
                        other.right.color = Color.BLACK
                    self.rotate_left(parent)
                    node = self.root
                    break
            else:
                other = parent.left
                if _is_red(other):
                    parent.color = Color.RED
                    other.color = Color.BLACK
                    self.rotate_right(parent)
                    other = parent.left
                if _is_black(other.left) and _is_black(other.right):
                    other.color = Color.RED
                    node = parent
                    parent = node.parent
                else:
                    if _is_black(other.left):
                        other.color = Color.RED
                        if other.right is not None:
                            other.right.color = Color.BLACK
                        self.rotate_left(other)
                        other = parent.left
                    other.color = parent.color
                    parent.color = Color.BLACK
                    if other.left is not None:
                        other.left.color = Color.BLACK
                    self.rotate_right(parent)
                    node = self.root
                    break
        if node is not None:
            node.color = Color.BLACK