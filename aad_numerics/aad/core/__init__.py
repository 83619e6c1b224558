# aad_numerics/aad/core/__init__.py

"""
Core of backward-mode automatic differentiation.

Exports:
    Node, ChildNode, create_node : immutable computation-graph vertices and edges.
    Variable                     : value plus optional graph node.
    constant_tag, variable_tag   : construction tags of Variable.
    NodeDifferentiator           : two-sweep reverse pass over a graph.
    create_diff_variable(_vector): new independent variables.
    differentiate                : scalar, matrix and Jacobian entry points.
    value                        : extract primal values.
"""

from .node import ChildNode, Node, create_node
from .var import Variable, constant_tag, variable_tag
from .engine import NodeDifferentiator
from .seeds import create_diff_variable, create_diff_variable_vector, differentiate, value

__all__ = [
    "ChildNode", "Node", "create_node",
    "Variable", "constant_tag", "variable_tag",
    "NodeDifferentiator",
    "create_diff_variable", "create_diff_variable_vector", "differentiate", "value",
]
