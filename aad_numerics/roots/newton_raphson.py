# aad_numerics/roots/newton_raphson.py
"""
Newton-Raphson method for roots of scalar and vector functions.

The function to solve is a callable ``function(x) -> (value, jacobian)``:

- scalar problems: ``x``, ``value`` and ``jacobian`` are real scalars;
- vector problems: ``x`` and ``value`` are 1-D arrays of length n and
  ``jacobian`` is an (n, n) array.

``backward_jacobian_function`` builds such a callable from a plain function
written with backward-mode ``Variable`` arithmetic.
"""
from __future__ import annotations
import math
from typing import Any, Callable, Tuple

import numpy as np
from scipy.linalg import lu_factor, lu_solve

from ..aad.core.seeds import create_diff_variable, create_diff_variable_vector, differentiate, value
from ..aad.core.var import Variable
from ..exceptions import InvalidArgument, PreconditionNotSatisfied, log_and_raise
from ..logger import aad_numerics_logger

DEFAULT_MAX_ITERATIONS = 1000
DEFAULT_TOL_LAST_CHANGE = 1e-6
DEFAULT_TOL_VALUE_NORM = 1e-6


class NewtonRaphson:
    """
    Newton-Raphson iteration

        x_{k+1} = x_k - J(x_k)^{-1} f(x_k)

    stopped when the iteration count exceeds ``max_iterations``, the norm of
    the last change falls below ``tol_last_change``, or the norm of the
    function value falls below ``tol_value_norm``.

    Example
    -------
    >>> solver = NewtonRaphson(lambda x: (x * x - 2.0, 2.0 * x))
    >>> solver.solve(1.0)   # ~ 1.41421356
    """

    def __init__(self, function: Callable[[Any], Tuple[Any, Any]], *,
                 max_iterations: int = DEFAULT_MAX_ITERATIONS,
                 tol_last_change: float = DEFAULT_TOL_LAST_CHANGE,
                 tol_value_norm: float = DEFAULT_TOL_VALUE_NORM):
        self.function = function
        self.max_iterations = max_iterations
        self.tol_last_change = tol_last_change
        self.tol_value_norm = tol_value_norm

        self._variable = None
        self._value = None
        self._jacobian = None
        self._is_vector = False
        self._iterations = 0
        self._evaluations = 0
        self._last_change = math.inf
        self._value_norm = math.inf

    # ----------------------------- settings ----------------------------- #
    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    @max_iterations.setter
    def max_iterations(self, val: int):
        if val <= 0:
            log_and_raise(InvalidArgument, "max_iterations must be a positive integer.")
        self._max_iterations = int(val)

    @property
    def tol_last_change(self) -> float:
        return self._tol_last_change

    @tol_last_change.setter
    def tol_last_change(self, val: float):
        if val < 0:
            log_and_raise(InvalidArgument, "tol_last_change must be a non-negative value.")
        self._tol_last_change = val

    @property
    def tol_value_norm(self) -> float:
        return self._tol_value_norm

    @tol_value_norm.setter
    def tol_value_norm(self, val: float):
        if val < 0:
            log_and_raise(InvalidArgument, "tol_value_norm must be a non-negative value.")
        self._tol_value_norm = val

    # ----------------------------- iteration ----------------------------- #
    def init(self, variable) -> None:
        """Set the initial guess and evaluate the function on it."""
        self._is_vector = np.ndim(variable) > 0
        if self._is_vector:
            self._variable = np.array(variable, dtype=float).reshape(-1)
        else:
            self._variable = np.float64(variable)
        self._iterations = 0
        self._evaluations = 0
        self._last_change = math.inf
        self._evaluate()

    def iterate(self) -> None:
        if self._variable is None:
            raise PreconditionNotSatisfied("NewtonRaphson.init must be called before iterate.")
        if self._is_vector:
            lu = lu_factor(np.atleast_2d(self._jacobian))
            change = -lu_solve(lu, self._value)
        else:
            change = -self._value / self._jacobian
        self._variable = self._variable + change
        self._evaluate()
        self._iterations += 1
        self._last_change = self._norm(change)

    def is_stop_criteria_satisfied(self) -> bool:
        return (self._iterations > self._max_iterations
                or self._last_change < self._tol_last_change
                or self._value_norm < self._tol_value_norm)

    def solve(self, variable=None):
        """
        Iterate until a stop criterion holds and return the solution.
        `variable`, when given, is passed to ``init`` first.
        """
        if variable is not None:
            self.init(variable)
        if self._variable is None:
            raise PreconditionNotSatisfied("NewtonRaphson.init must be called before solve.")
        while not self.is_stop_criteria_satisfied():
            self.iterate()
            aad_numerics_logger.debug(
                "newton_raphson: Iter. %d, Eval. %d, Value %.3e, Change %.3e",
                self._iterations, self._evaluations, self._value_norm, self._last_change,
            )
        if self._iterations > self._max_iterations:
            aad_numerics_logger.warning(
                "newton_raphson: stopped by the iteration limit (%d) with value norm %.3e.",
                self._max_iterations, self._value_norm,
            )
        return self._variable

    def _evaluate(self) -> None:
        val, jac = self.function(self._variable)
        if self._is_vector:
            self._value = np.asarray(val, dtype=float).reshape(-1)
            self._jacobian = np.asarray(jac, dtype=float)
        else:
            self._value = np.float64(val)
            self._jacobian = np.float64(jac)
        self._evaluations += 1
        self._value_norm = self._norm(self._value)

    @staticmethod
    def _norm(x) -> float:
        if np.ndim(x) > 0:
            return float(np.linalg.norm(x))
        return abs(float(x))

    # ----------------------------- results ----------------------------- #
    @property
    def variable(self):
        return self._variable

    @property
    def value(self):
        return self._value

    @property
    def jacobian(self):
        return self._jacobian

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def evaluations(self) -> int:
        return self._evaluations

    @property
    def last_change(self) -> float:
        return self._last_change

    @property
    def value_norm(self) -> float:
        return self._value_norm


def backward_jacobian_function(func: Callable[[Any], Any]) -> Callable[[Any], Tuple[Any, Any]]:
    """
    Adapt ``func`` written over backward-mode Variables to the
    ``(value, jacobian)`` form used by NewtonRaphson.

    For a scalar argument ``func`` receives one Variable and returns one;
    for a vector argument it receives an object array of Variables and
    returns a sequence of Variables of the same length.
    """
    def evaluate(x):
        if np.ndim(x) == 0:
            var = create_diff_variable(np.float64(x))
            out = func(var)
            if not isinstance(out, Variable):
                out = Variable(out)
            return out.value, differentiate(out, var)
        variables = create_diff_variable_vector(np.asarray(x, dtype=float).reshape(-1))
        outputs = np.asarray(func(variables), dtype=object).reshape(-1)
        return value(outputs), differentiate(outputs, variables)

    return evaluate
