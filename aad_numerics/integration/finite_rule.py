# aad_numerics/integration/finite_rule.py
#-----------------------------------------------------------------------------
# Common part of the tanh and double-exponential rules.
#
# Each rule changes the variable to t, truncates t to [-max_point, max_point]
# and uses the trapezoidal rule with `points` steps on each side of t = 0.
#
# On a finite interval both rules map [left, right] to the real line by
# x = center + width/2 * phi(t).  What differs is phi, i.e. the tables
#   variable_rate[i]: distance of the i-th point from an end, over width
#   weight_rate[i]  : dx/dt at that point, over width
# and the weight of the center point.
#-----------------------------------------------------------------------------
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable, Tuple

import numpy as np

from ..exceptions import InvalidArgument, log_and_raise
from ..logger import aad_numerics_logger
from .kahan import KahanAdder


class ChangedVariableRule(ABC):
    """Trapezoidal rule in a changed variable; subclasses build tables in ``_prepare``."""

    def __init__(self, max_point: float, points: int):
        self._max_point = None
        self._points = None
        self._set(max_point, points)

    # ----------------------------- settings ----------------------------- #
    @property
    def max_point(self) -> float:
        """Maximum point in the changed variable t."""
        return self._max_point

    @max_point.setter
    def max_point(self, val: float):
        self._set(val, self._points)

    @property
    def points(self) -> int:
        """Number of points on each side of the center."""
        return self._points

    @points.setter
    def points(self, val: int):
        self._set(self._max_point, val)

    def _set(self, max_point, points) -> None:
        if max_point <= 0:
            log_and_raise(InvalidArgument, "Maximum point must be a positive value.")
        if points <= 0:
            log_and_raise(InvalidArgument, "Number of points must be a positive integer.")
        self._max_point = float(max_point)
        self._points = int(points)
        self._interval = self._max_point / self._points
        self._prepare(self._interval * np.arange(1, self._points + 1))

    @abstractmethod
    def _prepare(self, changed: np.ndarray) -> None:
        """Compute the tables at the changed-variable points `changed` (t > 0)."""
        pass


class FiniteRuleIntegrator(ChangedVariableRule):
    """Base class; subclasses provide ``_rates`` and ``center_weight_rate``."""

    center_weight_rate: float = 0.5

    def _prepare(self, changed: np.ndarray) -> None:
        self._variable_rates, self._weight_rates = self._rates(changed)

    @abstractmethod
    def _rates(self, changed: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """(variable rates, weight rates) at the changed-variable points `changed`."""
        pass

    # ----------------------------- integration ----------------------------- #
    def integrate(self, function: Callable[[float], Any], left: float, right: float) -> Any:
        center = 0.5 * (left + right)
        width = right - left
        total = KahanAdder(function(center) * (width * self.center_weight_rate))
        for var_rate, weight_rate in zip(self._variable_rates, self._weight_rates):
            distance = width * var_rate
            values = function(right - distance) + function(left + distance)
            if not np.all(np.isfinite(values)):
                aad_numerics_logger.warning(
                    "A function value was not a finite value. Stopped numerical integration."
                )
                break
            total += values * (width * weight_rate)
        return total.sum * self._interval

    def __call__(self, function: Callable[[float], Any], left: float, right: float) -> Any:
        return self.integrate(function, left, right)
