# aad_numerics/aad/ops/arithmetic.py
import numpy as np

from ..core.node import create_node
from ..core.var import Variable


def _as_var(x, like) -> Variable:
    """Ensure x is a Variable; plain numbers become constants in the precision of `like`."""
    if isinstance(x, Variable):
        return x
    if isinstance(like, Variable) and isinstance(like.value, np.floating):
        return Variable(type(like.value)(x))
    return Variable(x)


def _one(value):
    return type(value)(1)


def _binary(x, y, f, dfdx, dfdy, dfself):
    """
    Generic binary primitive:
      - computes out.value = f(x.value, y.value)
      - builds a node whose children are the operands carrying nodes,
        each with its local partial (dfdx / dfdy)
      - when both operands share one node, records the total derivative
        dfself(value) on a single edge; dfself returning None means the
        operation cancels exactly and the result is a constant
    """
    x, y = _as_var(x, y), _as_var(y, x)
    xv, yv = x.value, y.value
    value = f(xv, yv)

    if x.node is None and y.node is None:
        node = None
    elif x.node is y.node:
        d = dfself(xv)
        node = None if d is None else create_node(x.node, d)
    elif y.node is None:
        node = create_node(x.node, dfdx(xv, yv))
    elif x.node is None:
        node = create_node(y.node, dfdy(xv, yv))
    else:
        node = create_node(x.node, dfdx(xv, yv), y.node, dfdy(xv, yv))
    return Variable(value, node)


def add(x, y):
    return _binary(x, y, lambda a, b: a + b,
                   lambda a, b: _one(a), lambda a, b: _one(b),
                   lambda a: 2 * _one(a))


def sub(x, y):
    return _binary(x, y, lambda a, b: a - b,
                   lambda a, b: _one(a), lambda a, b: -_one(b),
                   lambda a: None)


def mul(x, y):
    return _binary(x, y, lambda a, b: a * b,
                   lambda a, b: b, lambda a, b: a,
                   lambda a: 2 * a)


def div(x, y):
    return _binary(x, y, lambda a, b: a / b,
                   lambda a, b: _one(b) / b, lambda a, b: -a / (b * b),
                   lambda a: None)


def neg(x):
    """
    Unary negation:
      out.value = -x.value
      partial   : -1
    """
    if x.node is None:
        return Variable(-x.value)
    return Variable(-x.value, create_node(x.node, -_one(x.value)))
