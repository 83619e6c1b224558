# aad_numerics/aad/__init__.py
# Automatic differentiation: backward (graph) mode and forward mode

from .core.node import ChildNode, Node, create_node
from .core.var import Variable, constant_tag, variable_tag
from .core.engine import NodeDifferentiator
from .core.seeds import (
    create_diff_variable,
    create_diff_variable_vector,
    differentiate,
    value,
)
from .ops import exp, log, sqrt

# Forward mode
from . import forward
from .forward import FVar, create_forward_variable, make_jacobian

__all__ = [
    # Graph
    'ChildNode',
    'Node',
    'create_node',
    'NodeDifferentiator',
    # Backward mode
    'Variable',
    'constant_tag',
    'variable_tag',
    'create_diff_variable',
    'create_diff_variable_vector',
    'differentiate',
    'value',
    'exp',
    'log',
    'sqrt',
    # Forward mode
    'forward',
    'FVar',
    'create_forward_variable',
    'make_jacobian',
]
