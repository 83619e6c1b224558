# aad_numerics/ode/tolerances.py
"""
Error tolerances and step-size limits of adaptive ODE solvers.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..exceptions import InvalidArgument, log_and_raise

DEFAULT_TOL_REL_ERROR = 1e-4
DEFAULT_TOL_ABS_ERROR = 1e-4


class ErrorTolerances:
    """
    Element-wise tolerances  |error_i| <= rel_i * |variable_i| + abs_i .

    ``reference`` fixes the number of elements n (1 for scalar problems);
    ``calc_norm`` is the weighted RMS  sqrt(1/n) * || error / (rel |v| + abs) || ,
    which is at most 1 when ``check`` passes.
    """

    def __init__(self, reference: Any,
                 tol_rel_error: Any = DEFAULT_TOL_REL_ERROR,
                 tol_abs_error: Any = DEFAULT_TOL_ABS_ERROR):
        self._size = int(np.size(reference))
        self._norm_weight = math.sqrt(1.0 / self._size)
        self.tol_rel_error = tol_rel_error
        self.tol_abs_error = tol_abs_error

    @property
    def tol_rel_error(self) -> np.ndarray:
        return self._tol_rel_error

    @tol_rel_error.setter
    def tol_rel_error(self, val: Any):
        self._tol_rel_error = self._as_tolerance(val, "relative")

    @property
    def tol_abs_error(self) -> np.ndarray:
        return self._tol_abs_error

    @tol_abs_error.setter
    def tol_abs_error(self, val: Any):
        self._tol_abs_error = self._as_tolerance(val, "absolute")

    def _as_tolerance(self, val: Any, kind: str) -> np.ndarray:
        arr = np.broadcast_to(np.asarray(val, dtype=float), (self._size,)).copy()
        if np.any(arr < 0):
            log_and_raise(InvalidArgument, f"Tolerance of {kind} error must be non-negative.")
        return arr

    def _scale(self, variable: Any) -> np.ndarray:
        return self._tol_rel_error * np.abs(np.atleast_1d(variable)) + self._tol_abs_error

    def check(self, variable: Any, error: Any) -> bool:
        return bool(np.all(np.abs(np.atleast_1d(error)) <= self._scale(variable)))

    def calc_norm(self, variable: Any, error: Any) -> float:
        return self._norm_weight * float(np.linalg.norm(np.atleast_1d(error) / self._scale(variable)))


@dataclass(frozen=True)
class StepSizeLimits:
    """Lower and upper bounds of step sizes."""
    upper_limit: float = 1.0
    lower_limit: float = math.sqrt(np.finfo(float).eps)

    def __post_init__(self):
        if not 0 < self.lower_limit <= self.upper_limit:
            log_and_raise(
                InvalidArgument,
                "Step size limits must satisfy 0 < lower_limit <= upper_limit, "
                f"got lower={self.lower_limit}, upper={self.upper_limit}.",
            )

    def apply(self, step_size: float) -> float:
        """Clamp `step_size` into [lower_limit, upper_limit]."""
        return min(max(step_size, self.lower_limit), self.upper_limit)
