# aad_numerics/integration/de_semi_infinite.py
from __future__ import annotations
import math
from typing import Any, Callable

import numpy as np

from .finite_rule import ChangedVariableRule
from .kahan import KahanAdder

DEFAULT_MAX_POINT = 4.0
DEFAULT_POINTS = 20


class DESemiInfiniteIntegrator(ChangedVariableRule):
    """
    Double-exponential rule on [0, inf):  x = exp(pi sinh t).

    dx/dt = pi exp(pi sinh t) cosh t; t and -t map to x and 1/x, and the
    center point x = 1 has weight pi.
    """

    def __init__(self, max_point: float = DEFAULT_MAX_POINT, points: int = DEFAULT_POINTS):
        super().__init__(max_point, points)

    def _prepare(self, changed):
        changed = changed[:-1]
        pi_sinh = math.pi * np.sinh(changed)
        pi_cosh = math.pi * np.cosh(changed)
        self._large_variables = np.exp(pi_sinh)
        self._large_weights = pi_cosh * self._large_variables
        self._small_variables = np.exp(-pi_sinh)
        self._small_weights = pi_cosh * self._small_variables

    def integrate(self, function: Callable[[float], Any]) -> Any:
        total = KahanAdder(function(1.0) * math.pi)
        for large, large_weight, small, small_weight in zip(
            self._large_variables, self._large_weights,
            self._small_variables, self._small_weights,
        ):
            total += function(large) * large_weight + function(small) * small_weight
        return total.sum * self._interval

    def __call__(self, function: Callable[[float], Any]) -> Any:
        return self.integrate(function)
