# aad_numerics/functions/legendre.py
"""
Legendre polynomials P_n(x) by Bonnet's recursion

    (k + 1) P_{k+1}(x) = (2k + 1) x P_k(x) - k P_{k-1}(x),

their derivatives, and their roots (the Gauss-Legendre nodes).
"""
from __future__ import annotations
import math
from typing import Tuple

import numpy as np

from ..exceptions import InvalidArgument, log_and_raise
from ..roots.newton_raphson import NewtonRaphson


def legendre(x: float, n: int) -> float:
    """P_n(x); NaN for negative orders."""
    if n < 0:
        return math.nan
    if n == 0:
        return 1.0
    p0, p1 = 1.0, x
    for k in range(1, n):
        p0, p1 = p1, ((2 * k + 1) * x * p1 - k * p0) / (k + 1)
    return p1


def legendre_with_diff(x: float, n: int) -> Tuple[float, float]:
    """
    (P_n(x), P_n'(x)).

    The derivative uses  (x^2 - 1) P_n'(x) = n (x P_n(x) - P_{n-1}(x)),
    which is singular at x = +-1, where P_n'(+-1) = (+-1)^(n+1) n (n + 1) / 2.
    """
    if n < 0:
        return math.nan, math.nan
    if n == 0:
        return 1.0, 0.0
    p0, p1 = 1.0, x
    for k in range(1, n):
        p0, p1 = p1, ((2 * k + 1) * x * p1 - k * p0) / (k + 1)
    if x == 1.0:
        return p1, 0.5 * n * (n + 1)
    if x == -1.0:
        sign = 1.0 if n % 2 == 1 else -1.0
        return p1, sign * 0.5 * n * (n + 1)
    return p1, n * (x * p1 - p0) / (x * x - 1.0)


class LegendreRoots:
    """
    Roots of P_n, in descending order.

    Newton-Raphson refines the estimate cos(pi (i + 3/4) / (n + 1/2)) for
    each positive root; the negative ones follow by symmetry and an odd
    order has 0 in the centre.
    """

    def __init__(self, order: int = 0):
        self._roots = np.zeros(0)
        self._order = 0
        self.compute(order)

    def compute(self, order: int) -> np.ndarray:
        if order < 0:
            log_and_raise(InvalidArgument, f"Order of Legendre roots must be non-negative, got {order}.")
        self._order = order
        roots = np.zeros(order)
        tol = 100 * np.finfo(float).eps
        solver = NewtonRaphson(lambda x: legendre_with_diff(x, order),
                               tol_last_change=tol, tol_value_norm=tol)
        for i in range(order // 2):
            roots[i] = solver.solve(math.cos(math.pi * (i + 0.75) / (order + 0.5)))
        center = (order - 1) // 2
        if order % 2 == 1:
            roots[center] = 0.0
        for i in range(center + 1, order):
            roots[i] = -roots[order - 1 - i]
        self._roots = roots
        return roots

    @property
    def order(self) -> int:
        return self._order

    @property
    def roots(self) -> np.ndarray:
        return self._roots

    def __len__(self) -> int:
        return self._order

    def __getitem__(self, i):
        return self._roots[i]

    def __iter__(self):
        return iter(self._roots)
