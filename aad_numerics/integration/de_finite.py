# aad_numerics/integration/de_finite.py
from __future__ import annotations
import math
from typing import Any, Callable

import numpy as np

from ..logger import aad_numerics_logger
from .finite_rule import FiniteRuleIntegrator
from .kahan import KahanAdder

DEFAULT_MAX_POINT = 4.0
DEFAULT_POINTS = 20


class DEFiniteIntegrator(FiniteRuleIntegrator):
    """
    Double-exponential (tanh-sinh) rule:  x = center + width/2 * tanh(pi/2 sinh t).

    With e = exp(-pi sinh t) a point lies at distance width * e / (1 + e)
    from an end and dx/dt = width * pi cosh(t) e / (1 + e)^2.

    Integrands with end-point singularities can be given as functions of the
    distance from each end, see ``integrate_with_boundaries``.
    """

    center_weight_rate = math.pi / 4.0

    def __init__(self, max_point: float = DEFAULT_MAX_POINT, points: int = DEFAULT_POINTS):
        super().__init__(max_point, points)

    def _rates(self, changed):
        e = np.exp(-math.pi * np.sinh(changed))
        denominator = 1.0 + e
        return e / denominator, math.pi * np.cosh(changed) * e / (denominator * denominator)

    def integrate_with_boundaries(self, left_boundary_function: Callable[[float], Any],
                                  right_boundary_function: Callable[[float], Any],
                                  left: float, right: float) -> Any:
        """
        Integrate f on [left, right] given

            left_boundary_function(d)  = f(left + d),   d > 0
            right_boundary_function(d) = f(right + d),  d < 0

        which avoids the cancellation in ``right - distance`` near the ends.
        """
        width = right - left
        total = KahanAdder(left_boundary_function(0.5 * width) * (width * self.center_weight_rate))
        for var_rate, weight_rate in zip(self._variable_rates, self._weight_rates):
            distance = width * var_rate
            values = left_boundary_function(distance) + right_boundary_function(-distance)
            if not np.all(np.isfinite(values)):
                aad_numerics_logger.warning(
                    "A function value was not a finite value. Stopped numerical integration."
                )
                break
            total += values * (width * weight_rate)
        return total.sum * self._interval
