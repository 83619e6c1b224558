# aad_numerics/aad/ops/transcendental.py
import numpy as np

from ..core.node import create_node
from ..core.var import Variable


def _as_var(x):
    return x if isinstance(x, Variable) else Variable(x)


def exp(x):
    x = _as_var(x)
    ex = np.exp(x.value)
    if x.node is None:
        return Variable(ex)
    # d/dx exp(x) = exp(x): reuse the value
    return Variable(ex, create_node(x.node, ex))


def log(x):
    x = _as_var(x)
    out = np.log(x.value)
    if x.node is None:
        return Variable(out)
    return Variable(out, create_node(x.node, type(x.value)(1) / x.value))


def sqrt(x):
    x = _as_var(x)
    s = np.sqrt(x.value)
    if x.node is None:
        return Variable(s)
    return Variable(s, create_node(x.node, type(s)(0.5) / s))
