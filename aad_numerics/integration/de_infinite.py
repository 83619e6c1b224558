# aad_numerics/integration/de_infinite.py
from __future__ import annotations
import math
from typing import Any, Callable

import numpy as np

from .finite_rule import ChangedVariableRule
from .kahan import KahanAdder

DEFAULT_MAX_POINT = 4.0
DEFAULT_POINTS = 20


class DEInfiniteIntegrator(ChangedVariableRule):
    """
    Double-exponential (sinh-sinh) rule on (-inf, inf):  x = sinh(pi/2 sinh t).

    dx/dt = pi/2 cosh(pi/2 sinh t) cosh t, so the center point has weight pi/2.
    """

    def __init__(self, max_point: float = DEFAULT_MAX_POINT, points: int = DEFAULT_POINTS):
        super().__init__(max_point, points)

    def _prepare(self, changed):
        # t = max_point itself is not used
        changed = changed[:-1]
        half_pi_sinh = 0.5 * math.pi * np.sinh(changed)
        self._variables = np.sinh(half_pi_sinh)
        self._weights = 0.5 * math.pi * np.cosh(half_pi_sinh) * np.cosh(changed)

    def integrate(self, function: Callable[[float], Any]) -> Any:
        total = KahanAdder(function(0.0) * (0.5 * math.pi))
        for var, weight in zip(self._variables, self._weights):
            total += (function(var) + function(-var)) * weight
        return total.sum * self._interval

    def __call__(self, function: Callable[[float], Any]) -> Any:
        return self.integrate(function)
