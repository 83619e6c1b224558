# aad_numerics/integration/tanh_finite.py
from __future__ import annotations

import numpy as np

from .finite_rule import FiniteRuleIntegrator

DEFAULT_MAX_POINT = 16.0
DEFAULT_POINTS = 50


class TanhFiniteIntegrator(FiniteRuleIntegrator):
    """
    tanh rule:  x = center + width/2 * tanh(t).

    With e = exp(-2t) a point lies at distance width * e / (1 + e) from an
    end and dx/dt = width * 2e / (1 + e)^2.
    """

    center_weight_rate = 0.5

    def __init__(self, max_point: float = DEFAULT_MAX_POINT, points: int = DEFAULT_POINTS):
        super().__init__(max_point, points)

    def _rates(self, changed):
        e = np.exp(-2.0 * changed)
        denominator = 1.0 + e
        return e / denominator, 2.0 * e / (denominator * denominator)
