"""Syntax tree of a command line: commands made of words, joined by pipes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import IntEnum


class NodeType(IntEnum):
    """Kind of a tree node; a lower value binds looser and sits higher in the tree."""

    PIPE = 0
    REDIRECTION = 1
    WORD = 2


@dataclass
class Node:
    """One token placed in the tree."""

    token: str
    kind: NodeType
    left: Node | None = None
    right: Node | None = None

    def _chain(self) -> Iterator[Node]:
        node: Node | None = self
        while node is not None and node.kind is NodeType.WORD:
            yield node
            node = node.right

    def words(self) -> list[str]:
        """The command's words: this node and the word nodes to its right."""
        return [node.token for node in self._chain()]


def make_node(token: str) -> Node:
    """Create the node for ``token``: a lone ``|`` is a pipe, anything else a word."""
    kind = NodeType.PIPE if token == "|" else NodeType.WORD
    return Node(token, kind)


def insert(root: Node | None, node: Node) -> Node:
    """Add ``node`` to the tree at ``root`` and return the tree's new root.

    A pipe always becomes the root, with what came before it on its right.
    Words extend the command to the right; a word after a pipe starts the
    command on the pipe's left.
    """
    if root is None:
        return node
    if root.kind > node.kind:
        node.right = root
        return node
    if root.kind == node.kind:
        if node.kind is NodeType.PIPE:
            node.right = root
            return node
        root.right = insert(root.right, node)
        return root
    if root.kind is NodeType.PIPE:
        if root.right is None:
            root.right = node
        else:
            root.left = insert(root.left, node)
    return root


def build_tree(tokens: Iterable[str]) -> Node | None:
    """Build the tree for ``tokens``; None if there are none."""
    root: Node | None = None
    for token in tokens:
        root = insert(root, make_node(token))
    return root


def is_valid(root: Node | None) -> bool:
    """Check that every pipe in the tree has a command on its left."""
    if root is None:
        return True
    if root.kind is NodeType.PIPE and root.left is None:
        return False
    return is_valid(root.right) and is_valid(root.left)


def format_tree(root: Node | None) -> str:
    """Describe the tree one node per line, left branches before right ones."""
    if root is None:
        return ""
    text = f"{root.token}\n"
    if root.left is not None:
        text += f"left of {root.token}: " + format_tree(root.left)
    if root.right is not None:
        text += f"right of {root.token}: " + format_tree(root.right)
    return text