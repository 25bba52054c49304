"""Generation of deeply nested YAML mappings from a random tree."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TextIO

_ID_DIGITS = "_abcdefghijklmnopqrstuvwxyz"


def id_for_number(n: int) -> str:
    """Return a valid YAML identifier for the given number."""
    n += 1
    digits = []
    while n > 0:
        n, remainder = divmod(n, len(_ID_DIGITS))
        digits.append(_ID_DIGITS[remainder])
    return "".join(digits)


@dataclass(eq=False)
class Node:
    """A node of an n-ary tree."""

    children: list[Node] = field(default_factory=list)

    def write_to(self, writer: TextIO, indent: int = 0) -> None:
        """Write the YAML representation of this subtree to `writer`."""
        if not self.children:
            writer.write(" " * indent + "a: 1\n")
            return
        stack = [(iter(enumerate(self.children)), indent)]
        while stack:
            children, level = stack[-1]
            item = next(children, None)
            if item is None:
                stack.pop()
                continue
            number, child = item
            writer.write(" " * level + id_for_number(number) + ":\n")
            if child.children:
                stack.append((iter(enumerate(child.children)), level + 2))
            else:
                writer.write(" " * (level + 2) + "a: 1\n")


class Tree:
    """A tree grown one node at a time under a random existing node."""

    def __init__(self, seed: int = 42) -> None:
        self.root = Node()
        self.nodes: list[Node] = [self.root]
        self.rng = random.Random(seed)

    def push_node(self) -> None:
        """Add a new node as a child of a random node, biased towards recent ones."""
        node = Node()
        count = len(self.nodes)
        parent = self.nodes[self.rng.randrange(3 * count // 4, count)]
        parent.children.append(node)
        self.nodes.append(node)

    def write_to(self, writer: TextIO) -> None:
        """Write the YAML representation of the whole tree to `writer`."""
        self.root.write_to(writer, 0)


def create_deep_object(writer: TextIO, n_nodes: int) -> None:
    """Write a deep YAML object with `n_nodes` nodes besides the root."""
    tree = Tree()
    for _ in range(n_nodes):
        tree.push_node()
    tree.write_to(writer)