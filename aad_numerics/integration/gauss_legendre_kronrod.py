# aad_numerics/integration/gauss_legendre_kronrod.py
#-----------------------------------------------------------------------------
# Adaptive Gauss-Legendre-Kronrod quadrature.
#
# An n-point Gauss rule is extended with n + 1 Kronrod nodes; the difference
# of the two estimates is the error estimate, and intervals whose estimate
# is too large are bisected.  Nodes and weights come from the eigenvalues of
# the Jacobi matrix of the Legendre recurrence, extended to the Kronrod rule
# by Laurie's algorithm (D. P. Laurie, "Calculation of Gauss-Kronrod
# quadrature rules", Math. Comp. 66 (1997)).
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Tuple

import numpy as np
from scipy.linalg import eigh_tridiagonal

from ..exceptions import InvalidArgument, PreconditionNotSatisfied, log_and_raise

DEFAULT_ORDER = 5
DEFAULT_TOL_ERROR = float(np.finfo(np.float64).eps) * 1e4
DEFAULT_MIN_DIV_RATE = float(np.finfo(np.float64).eps) * 1e4


def _jacobi_to_gauss(a: np.ndarray, b: np.ndarray, size: int) -> Tuple[np.ndarray, np.ndarray]:
    """Nodes (ascending) and weights of the rule of a symmetric tridiagonal Jacobi matrix."""
    nodes, vectors = eigh_tridiagonal(a[:size], np.sqrt(b[1:size]))
    return nodes, b[0] * vectors[0, :] ** 2


def _extend_jacobi_matrix(a: np.ndarray, b: np.ndarray, n: int) -> None:
    """Fill a[n+1:], b[n+1:] with the Jacobi-Kronrod matrix of an n-point Gauss rule."""
    s = np.zeros(n // 2 + 2)
    t = np.zeros(n // 2 + 2)
    t[1] = b[n + 1]
    for m in range(n - 1):
        u = 0.0
        for k in range((m + 1) // 2, -1, -1):
            l = m - k
            u += (a[k + n + 1] - a[l]) * t[k + 1] + b[k + n + 1] * s[k] - b[l] * s[k + 1]
            s[k + 1] = u
        s, t = t, s
    for j in range(n // 2, 0, -1):
        s[j + 1] = s[j]
    s[1] = s[0]
    for m in range(n - 1, 2 * n - 2):
        u = 0.0
        j = 0
        for k in range(m + 1 - n, (m - 1) // 2 + 1):
            l = m - k
            j = n - 1 - l
            u += -(a[k + n + 1] - a[l]) * t[j + 1] - b[k + n + 1] * s[j + 1] + b[l] * s[j + 2]
            s[j + 1] = u
        if m % 2 == 0:
            k = m // 2
            a[k + n + 1] = a[k] + (s[j + 1] - b[k + n + 1] * s[j + 2]) / t[j + 2]
        else:
            k = (m + 1) // 2
            b[k + n + 1] = s[j + 1] / s[j + 2]
        s, t = t, s
    a[2 * n] = a[n - 1] - b[2 * n] * s[1] * t[1]


class GaussLegendreKronrodIntegrator:
    """
    Adaptive Gauss-Legendre-Kronrod quadrature on [left, right].

    A sub-interval is accepted when the difference of its Gauss and Kronrod
    estimates is below ``tol_abs_error`` (scaled by the sub-interval's share
    of the whole width) or below ``tol_rel_error`` times the Kronrod
    estimate, or when the sub-interval is narrower than ``min_div_rate`` of
    the whole width.
    """

    def __init__(self, order: int = DEFAULT_ORDER):
        self._tol_abs_error = DEFAULT_TOL_ERROR
        self._tol_rel_error = DEFAULT_TOL_ERROR
        self._min_div_rate = DEFAULT_MIN_DIV_RATE
        self.prepare(order)

    def prepare(self, order: int) -> None:
        """Compute nodes and weights for an ``order``-point Gauss rule and its Kronrod extension."""
        if order <= 0:
            log_and_raise(
                InvalidArgument,
                f"Order of Gauss-Legendre-Kronrod integration must be positive, got {order}.",
            )
        n = int(order)
        extended_size = 2 * n + 1

        # recurrence coefficients of the Legendre polynomials
        a = np.zeros(extended_size)
        b = np.zeros(extended_size)
        b[0] = 2.0
        i = np.arange(1, (3 * n + 1) // 2 + 1, dtype=float)
        b[1:(3 * n + 1) // 2 + 1] = i * i / ((2.0 * i + 1.0) * (2.0 * i - 1.0))

        nodes_gauss, weights_gauss = _jacobi_to_gauss(a, b, n)
        _extend_jacobi_matrix(a, b, n)
        nodes_all, weights_all = _jacobi_to_gauss(a, b, extended_size)
        if not (np.all(np.isfinite(nodes_all)) and np.all(np.isfinite(weights_all))):
            log_and_raise(
                PreconditionNotSatisfied,
                f"Failed to compute the Kronrod extension of order {n}.",
            )

        # Kronrod weights of the Gauss nodes; the remaining n + 1 nodes are the additional ones
        is_gauss = np.zeros(extended_size, dtype=bool)
        weights_gauss_for_kronrod = np.zeros(n)
        for idx, node in enumerate(nodes_gauss):
            nearest = int(np.argmin(np.abs(nodes_all - node)))
            weights_gauss_for_kronrod[idx] = weights_all[nearest]
            is_gauss[nearest] = True

        self._order = n
        self._nodes_gauss = nodes_gauss
        self._weights_gauss = weights_gauss
        self._weights_gauss_for_kronrod = weights_gauss_for_kronrod
        self._nodes_kronrod = nodes_all[~is_gauss]
        self._weights_kronrod = weights_all[~is_gauss]

    # ----------------------------- settings ----------------------------- #
    @property
    def order(self) -> int:
        return self._order

    @property
    def tol_abs_error(self) -> float:
        return self._tol_abs_error

    @tol_abs_error.setter
    def tol_abs_error(self, val: float):
        if val <= 0:
            log_and_raise(InvalidArgument, "Tolerance of absolute error must be a positive value.")
        self._tol_abs_error = val

    @property
    def tol_rel_error(self) -> float:
        return self._tol_rel_error

    @tol_rel_error.setter
    def tol_rel_error(self, val: float):
        if val <= 0:
            log_and_raise(InvalidArgument, "Tolerance of relative error must be a positive value.")
        self._tol_rel_error = val

    @property
    def min_div_rate(self) -> float:
        """Minimum width of a sub-interval, as a fraction of the whole width."""
        return self._min_div_rate

    @min_div_rate.setter
    def min_div_rate(self, val: float):
        if val <= 0:
            log_and_raise(InvalidArgument, "Minimum rate of division must be a positive value.")
        self._min_div_rate = val

    # ----------------------------- nodes ----------------------------- #
    @property
    def nodes(self) -> np.ndarray:
        """All 2n + 1 nodes of the Kronrod rule on [-1, 1], ascending."""
        return np.sort(np.concatenate([self._nodes_gauss, self._nodes_kronrod]))

    # ----------------------------- integration ----------------------------- #
    def integrate_once(self, function: Callable[[float], Any], left: float, right: float) -> Tuple[Any, Any]:
        """(Gauss estimate, Kronrod estimate) of the integral without subdivision."""
        center = 0.5 * (left + right)
        half_width = 0.5 * (right - left)
        sum_gauss = function(center) * 0.0
        sum_kronrod = sum_gauss
        for x, weight, weight_for_kronrod in zip(
            self._nodes_gauss, self._weights_gauss, self._weights_gauss_for_kronrod
        ):
            val = function(center + half_width * x)
            sum_gauss = sum_gauss + val * weight
            sum_kronrod = sum_kronrod + val * weight_for_kronrod
        for x, weight in zip(self._nodes_kronrod, self._weights_kronrod):
            sum_kronrod = sum_kronrod + function(center + half_width * x) * weight
        return sum_gauss * half_width, sum_kronrod * half_width

    def integrate(self, function: Callable[[float], Any], left: float, right: float) -> Any:
        if not left < right:
            log_and_raise(
                InvalidArgument,
                f"Left end must be less than right end, but got [{left}, {right}].",
            )
        inv_width = 1.0 / (right - left)
        total = function(0.5 * (left + right)) * 0.0
        remaining_right = []
        cur_left, cur_right = left, right
        while True:
            val_gauss, val_kronrod = self.integrate_once(function, cur_left, cur_right)
            val_norm = np.linalg.norm(val_kronrod)
            error_norm = np.linalg.norm(val_gauss - val_kronrod)
            div_rate = (cur_right - cur_left) * inv_width
            if (error_norm < self._tol_abs_error * div_rate
                    or error_norm < self._tol_rel_error * val_norm
                    or div_rate < self._min_div_rate):
                total = total + val_kronrod
                if not remaining_right:
                    break
                cur_left, cur_right = cur_right, remaining_right.pop()
            else:
                remaining_right.append(cur_right)
                cur_right = 0.5 * (cur_left + cur_right)
        return total

    def __call__(self, function: Callable[[float], Any], left: float, right: float) -> Any:
        return self.integrate(function, left, right)
