# aad_numerics/integration/gauss_legendre.py
from __future__ import annotations
from typing import Any, Callable

import numpy as np

from ..exceptions import InvalidArgument, log_and_raise
from ..functions.legendre import LegendreRoots, legendre

DEFAULT_ORDER = 20


class GaussLegendreIntegrator:
    """
    Gauss-Legendre quadrature on [left, right].

    Nodes are the roots x_i of P_n and the weights are

        w_i = 2 (1 - x_i^2) / (n P_{n-1}(x_i))^2 .

    The rule is exact for polynomials up to degree 2n - 1.
    """

    def __init__(self, order: int = DEFAULT_ORDER):
        self._roots = LegendreRoots()
        self._weights = np.zeros(0)
        self.prepare(order)

    def prepare(self, order: int) -> None:
        """Compute nodes and weights of the given order."""
        if order <= 0:
            log_and_raise(InvalidArgument, f"Order of Gauss-Legendre integration must be positive, got {order}.")
        roots = self._roots.compute(order)
        temp = order * np.array([legendre(x, order - 1) for x in roots])
        self._weights = 2.0 * (1.0 - roots * roots) / (temp * temp)

    @property
    def order(self) -> int:
        return self._roots.order

    @property
    def roots(self) -> np.ndarray:
        return self._roots.roots

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    def integrate(self, function: Callable[[float], Any], left: float, right: float) -> Any:
        mean = 0.5 * (left + right)
        half_width = 0.5 * (right - left)
        total = function(mean) * 0.0
        for x, weight in zip(self._roots.roots, self._weights):
            total = total + weight * function(mean + half_width * x)
        return total * half_width

    def __call__(self, function: Callable[[float], Any], left: float, right: float) -> Any:
        return self.integrate(function, left, right)
