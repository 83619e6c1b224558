# aad_numerics/aad/forward.py
# Forward-mode engine (independent from the graph / NodeDifferentiator)

import numpy as np
from typing import Any, Optional, Sequence

from ..exceptions import InvalidArgument, log_and_raise
from .core.var import as_scalar


class FVar:
    """
    Forward-mode variable:
    v = value + diff * t
    diff = derivative along one direction (scalar), or along several
           directions at once (1-D numpy array, one entry per input)
    """
    __slots__ = ("value", "diff")
    __array_ufunc__ = None

    def __init__(self, value, diff: Any = 0.0):
        self.value = as_scalar(value)
        self.diff = diff

    def __repr__(self):
        return f"FVar({self.value!r}, diff={self.diff!r})"

    def __add__(a, b):
        if not isinstance(b, FVar):
            return FVar(a.value + b, a.diff)
        return FVar(a.value + b.value, a.diff + b.diff)
    __radd__ = __add__

    def __sub__(a, b):
        if not isinstance(b, FVar):
            return FVar(a.value - b, a.diff)
        return FVar(a.value - b.value, a.diff - b.diff)

    def __rsub__(b, a):
        return FVar(a - b.value, -b.diff)

    def __mul__(a, b):
        if not isinstance(b, FVar):
            return FVar(a.value * b, a.diff * b)
        return FVar(a.value * b.value, b.value * a.diff + a.value * b.diff)
    __rmul__ = __mul__

    def __truediv__(a, b):
        if not isinstance(b, FVar):
            return FVar(a.value / b, a.diff / b)
        v0 = a.value / b.value
        return FVar(v0, (a.diff - b.diff * v0) / b.value)

    def __rtruediv__(b, a):
        v0 = a / b.value
        return FVar(v0, -v0 / b.value * b.diff)

    def __neg__(a):
        return FVar(-a.value, -a.diff)

    def __pos__(a):
        return a

    # numpy calls these methods for ufuncs on object arrays
    def exp(self):
        return fexp(self)

    def log(self):
        return flog(self)

    def sqrt(self):
        return fsqrt(self)


# ----- Elementary functions -----
def fexp(x: FVar):
    """Exponential function with forward propagation."""
    e = np.exp(x.value)
    return FVar(e, e * x.diff)


def flog(x: FVar):
    """Natural logarithm with forward propagation."""
    return FVar(np.log(x.value), x.diff / x.value)


def fsqrt(x: FVar):
    """Square root with forward propagation."""
    r = np.sqrt(x.value)
    return FVar(r, 0.5 * x.diff / r)


# Alias names for convenience
exp = fexp
log = flog
sqrt = fsqrt


# ----- Seeds and Jacobian -----
def create_forward_variable(value, size: Optional[int] = None,
                            index: Optional[int] = None) -> FVar:
    """
    Create a variable to differentiate by.

    create_forward_variable(x)          -> diff = 1
    create_forward_variable(x, n, i)    -> diff = i-th unit vector of length n
    """
    value = as_scalar(value)
    if size is None:
        return FVar(value, type(value)(1))
    if index is None or not 0 <= index < size:
        log_and_raise(
            InvalidArgument,
            f"Index of a forward variable must be in [0, {size}), but got {index}.",
        )
    diff = np.zeros(size, dtype=type(value))
    diff[index] = 1
    return FVar(value, diff)


def create_forward_variable_vector(values: Sequence) -> np.ndarray:
    """One forward variable per element; their diffs form the identity matrix."""
    arr = np.asarray(values).reshape(-1)
    n = arr.size
    out = np.empty(n, dtype=object)
    for i in range(n):
        out[i] = create_forward_variable(arr[i], n, i)
    return out


def make_jacobian(vector: Sequence[FVar]) -> np.ndarray:
    """
    Stack the diffs of a vector of forward variables into a Jacobian,
    shape (len(vector), number of directions).
    """
    arr = np.asarray(vector, dtype=object)
    if not (arr.ndim == 1 or (arr.ndim == 2 and arr.shape[1] == 1)):
        log_and_raise(
            InvalidArgument,
            "make_jacobian requires a vector as the argument, "
            f"but got an array of shape {arr.shape}.",
        )
    arr = arr.reshape(-1)
    if arr.size < 2:
        log_and_raise(
            InvalidArgument,
            "make_jacobian requires a vector with at least two elements.",
        )
    diffs = [np.asarray(v.diff) for v in arr]
    cols = diffs[0].size
    if any(d.ndim != 1 or d.size != cols for d in diffs):
        log_and_raise(
            InvalidArgument,
            "All elements given to make_jacobian must carry 1-D diffs of the same size.",
        )
    jac = np.empty((arr.size, cols), dtype=type(arr[0].value))
    for i, d in enumerate(diffs):
        jac[i, :] = d
    return jac
