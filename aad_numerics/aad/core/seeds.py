# aad_numerics/aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the node of the output and let the
# adjoints flow backwards through the graph to the requested variables.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, List, Union

import numpy as np

from ...exceptions import InvalidArgument, log_and_raise
from .engine import NodeDifferentiator
from .var import Variable, variable_tag


def create_diff_variable(value: Any) -> Variable:
    """Create a new independent variable (a leaf of the graph) with the given value."""
    return Variable(value, variable_tag)


def create_diff_variable_vector(values: Any) -> np.ndarray:
    """
    Create one independent variable per element of a vector.

    `values` must be a 1-D array-like or a column, shape (n, 1); the result
    is an object ndarray of Variables with the same shape.
    """
    arr = np.asarray(values)
    if not _is_column_shape(arr.shape):
        log_and_raise(
            InvalidArgument,
            "create_diff_variable_vector requires a vector (1-D or one column), "
            f"but got an array of shape {arr.shape}.",
        )
    out = np.empty(arr.shape, dtype=object)
    for idx in np.ndindex(arr.shape):
        out[idx] = Variable(arr[idx], variable_tag)
    return out


def value(x: Any) -> Any:
    """Return the value of a Variable (elementwise for arrays); pass plain numbers through."""
    if isinstance(x, Variable):
        return x.value
    if isinstance(x, np.ndarray) and x.dtype == object:
        return np.array([value(v) for v in x.flat]).reshape(x.shape)
    return x


# ----------------------------- differentiate ----------------------------- #
def differentiate(output: Union[Variable, np.ndarray, List[Variable]],
                  target: Union[Variable, np.ndarray, List[Variable]]):
    """
    Differential coefficients of `output` by `target`.

    Shapes
    ------
    Variable, Variable          -> scalar d(output)/d(target)
    Variable, array of Variable -> array of the same shape as `target`
                                   (one reverse pass serves every element)
    vector,   vector            -> Jacobian of shape (len(output), len(target)),
                                   one reverse pass per output element

    Vectors are 1-D arrays/lists or (n, 1) columns; anything else raises
    InvalidArgument. Constant outputs (no node) give zeros.
    """
    if isinstance(output, Variable):
        if isinstance(target, Variable):
            return _differentiate_scalar(output, target)
        return _differentiate_matrix(output, target)
    return _differentiate_vector(output, target)


def _differentiate_scalar(output: Variable, target: Variable):
    scalar_type = type(output.value)
    if output.node is None:
        return scalar_type(0)
    diff = NodeDifferentiator(scalar_type)
    diff.compute(output.node)
    return diff.coeff(target.node)


def _differentiate_matrix(output: Variable, target) -> np.ndarray:
    targets = np.asarray(target, dtype=object)
    scalar_type = type(output.value)
    result = np.zeros(targets.shape, dtype=scalar_type)
    if output.node is None:
        return result
    diff = NodeDifferentiator(scalar_type)
    diff.compute(output.node)
    for idx in np.ndindex(targets.shape):
        result[idx] = diff.coeff(_node_of(targets[idx]))
    return result


def _differentiate_vector(output, target) -> np.ndarray:
    outputs = _as_vector(output, "output")
    targets = _as_vector(target, "target")
    scalar_type = _scalar_type_of(outputs)

    differentiators: List[NodeDifferentiator] = []
    for out in outputs:
        diff = NodeDifferentiator(scalar_type)
        node = _node_of(out)
        if node is not None:
            diff.compute(node)
        differentiators.append(diff)

    jacobian = np.zeros((outputs.size, targets.size), dtype=scalar_type)
    for i, diff in enumerate(differentiators):
        for j, tgt in enumerate(targets):
            jacobian[i, j] = diff.coeff(_node_of(tgt))
    return jacobian


# ----------------------------- helpers ----------------------------- #
def _is_column_shape(shape) -> bool:
    return len(shape) == 1 or (len(shape) == 2 and shape[1] == 1)


def _as_vector(x, name: str) -> np.ndarray:
    arr = np.asarray(x, dtype=object)
    if not _is_column_shape(arr.shape):
        log_and_raise(
            InvalidArgument,
            f"differentiate requires a column vector as {name}, "
            f"but got an array of shape {arr.shape}.",
        )
    return arr.reshape(-1)


def _node_of(x):
    # plain numbers inside arrays are constants
    return x.node if isinstance(x, Variable) else None


def _scalar_type_of(outputs: np.ndarray):
    for out in outputs:
        if isinstance(out, Variable):
            return type(out.value)
    return np.float64
