# aad_numerics/aad/core/var.py
from __future__ import annotations
import numpy as np
from typing import Any, Optional

from .node import Node, create_node


class _Tag:
    """Sentinel passed as the second constructor argument of Variable."""
    __slots__ = ("_name",)

    def __init__(self, name: str):
        self._name = name

    def __repr__(self):
        return self._name


# Variable(value, constant_tag) -> no node; Variable(value, variable_tag) -> fresh leaf
constant_tag = _Tag("constant_tag")
variable_tag = _Tag("variable_tag")


def as_scalar(value: Any):
    """
    Convert a plain number to the numpy scalar type used for values.

    numpy floating scalars keep their precision (float32 stays float32).
    Python int/float and numpy integer/bool scalars become float64, so
    partials never truncate and division by zero gives inf/nan instead
    of raising ZeroDivisionError.
    """
    if isinstance(value, np.floating):
        return value
    if isinstance(value, (int, float, np.integer, np.bool_)):
        return np.float64(value)
    raise TypeError(
        f"Variable only accepts real scalars (int, float, numpy scalar), "
        f"but got {type(value)}"
    )


def _apply(op, x, y):
    """Apply a binary primitive, elementwise when one operand is an ndarray."""
    # a Variable must not reach a ufunc directly (__array_ufunc__ is None)
    if isinstance(y, np.ndarray):
        return np.frompyfunc(lambda elem: op(x, elem), 1, 1)(y)
    if isinstance(x, np.ndarray):
        return np.frompyfunc(lambda elem: op(elem, y), 1, 1)(x)
    return op(x, y)


class Variable:
    """
    Value for backward-mode automatic differentiation.

    Attributes
    ----------
    value : numpy scalar
        Forward (primal) value.
    node  : Optional[Node]
        Node of the computation graph. ``None`` means this variable is a
        constant and adds no graph structure to expressions built from it.

    Construction
    ------------
    Variable(value, node)          : explicit node (or None)
    Variable(value, constant_tag)  : constant
    Variable(value, variable_tag)  : new independent variable (leaf node)
    Variable(value)                : constant
    Variable()                     : constant zero
    """
    __slots__ = ("value", "node")

    # Let numpy scalars/arrays defer to the reflected operators below
    # (e.g. np.float64(2.0) * Variable -> Variable.__rmul__).
    __array_ufunc__ = None

    def __init__(self, value: Any = 0.0, node: Any = None):
        self.value = as_scalar(value)
        if node is constant_tag:
            node = None
        elif node is variable_tag:
            node = create_node()
        elif node is not None and not isinstance(node, Node):
            raise TypeError(f"node must be a Node, a tag, or None, but got {type(node)}")
        self.node: Optional[Node] = node

    def __repr__(self):
        kind = "var" if self.node is not None else "const"
        return f"Variable({self.value!r}, {kind})"

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return _apply(add, self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return _apply(add, other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return _apply(sub, self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return _apply(sub, other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return _apply(mul, self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return _apply(mul, other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return _apply(div, self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return _apply(div, other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pos__(self):
        return self

    # numpy calls these methods for ufuncs on object arrays, e.g. np.exp(vars)
    def exp(self):
        from ..ops.transcendental import exp
        return exp(self)

    def log(self):
        from ..ops.transcendental import log
        return log(self)

    def sqrt(self):
        from ..ops.transcendental import sqrt
        return sqrt(self)
