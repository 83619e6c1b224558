# aad_numerics/aad/core/node.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Tuple

from ...exceptions import PreconditionNotSatisfied


@dataclass(frozen=True)
class ChildNode:
    """
    One edge of the computation graph, stored in the parent node.

    Attributes
    ----------
    node        : Node
        The child node (the quantity the parent was computed from).
    sensitivity : Any
        Partial derivative of the parent's output by the child's output,
        as a numpy scalar of the working precision.
    """
    node: "Node"
    sensitivity: Any

    def __post_init__(self):
        if self.node is None:
            raise PreconditionNotSatisfied("A child node must not be None.")


@dataclass(frozen=True, eq=False)
class Node:
    """
    Immutable vertex of the computation graph.

    A node without children is a leaf, i.e. an independent variable.
    Nodes compare and hash by identity, so a differentiator can key its
    bookkeeping on them even when two nodes have equal edge lists.

    Attributes
    ----------
    children : Tuple[ChildNode, ...]
        Edges to the nodes this one was computed from, in creation order.
    """
    children: Tuple[ChildNode, ...] = ()

    def __repr__(self):
        return f"Node(id=0x{id(self):x}, children={len(self.children)})"


def create_node(*args) -> Node:
    """
    Create a node from alternating ``(child_node, sensitivity)`` arguments.

        create_node()                    -> leaf
        create_node(a, 2.0)              -> one child
        create_node(a, 1.0, b, -1.0)     -> two children
    """
    if len(args) % 2 != 0:
        raise PreconditionNotSatisfied(
            "create_node expects (child_node, sensitivity) pairs, "
            f"but got {len(args)} arguments."
        )
    children = tuple(
        ChildNode(args[i], args[i + 1]) for i in range(0, len(args), 2)
    )
    return Node(children)
