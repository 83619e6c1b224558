# aad_numerics/ode/formulas.py
#-----------------------------------------------------------------------------
# Explicit embedded Runge-Kutta formulas given by their Butcher tableaus.
#
#   k_i = rhs(t + c_i h, y + h * sum_j a_ij k_j)
#   y_next  = y + h * sum_i w_i k_i          (order `order`)
#   y_check = y + h * sum_i w'_i k_i         (order `lesser_order`)
#   error   = y_next - y_check
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, List, Sequence, Tuple

RHS = Callable[[float, Any], Any]


class EmbeddedRungeKuttaFormula:
    """Base class; subclasses set the class-level tableau."""

    stages: int = 0
    order: int = 0
    lesser_order: int = 0
    nodes: Sequence[float] = ()
    matrix: Sequence[Sequence[float]] = ()
    weights: Sequence[float] = ()
    lesser_weights: Sequence[float] = ()

    def __init__(self, rhs: RHS):
        self.rhs = rhs
        self.evaluations = 0

    def _slopes(self, time: float, step_size: float, current: Any) -> List[Any]:
        slopes: List[Any] = []
        for c, row in zip(self.nodes, self.matrix):
            stage_var = current
            for a, k in zip(row, slopes):
                if a != 0.0:
                    stage_var = stage_var + (step_size * a) * k
            slopes.append(self.rhs(time + c * step_size, stage_var))
            self.evaluations += 1
        return slopes

    @staticmethod
    def _combine(coeffs: Sequence[float], slopes: List[Any]) -> Any:
        total = 0.0
        for w, k in zip(coeffs, slopes):
            if w != 0.0:
                total = total + w * k
        return total

    def step(self, time: float, step_size: float, current: Any) -> Any:
        """One step without error estimate."""
        slopes = self._slopes(time, step_size, current)
        return current + step_size * self._combine(self.weights, slopes)

    def step_embedded(self, time: float, step_size: float, current: Any) -> Tuple[Any, Any]:
        """One step; returns (estimate, estimated error)."""
        slopes = self._slopes(time, step_size, current)
        estimate = current + step_size * self._combine(self.weights, slopes)
        error_weights = [w - lw for w, lw in zip(self.weights, self.lesser_weights)]
        error = step_size * self._combine(error_weights, slopes)
        return estimate, error


class RKF45Formula(EmbeddedRungeKuttaFormula):
    """Runge-Kutta-Fehlberg 4(5)."""

    stages = 6
    order = 5
    lesser_order = 4
    nodes = (0.0, 1 / 4, 3 / 8, 12 / 13, 1.0, 1 / 2)
    matrix = (
        (),
        (1 / 4,),
        (3 / 32, 9 / 32),
        (1932 / 2197, -7200 / 2197, 7296 / 2197),
        (439 / 216, -8.0, 3680 / 513, -845 / 4104),
        (-8 / 27, 2.0, -3544 / 2565, 1859 / 4104, -11 / 40),
    )
    weights = (16 / 135, 0.0, 6656 / 12825, 28561 / 56430, -9 / 50, 2 / 55)
    lesser_weights = (25 / 216, 0.0, 1408 / 2565, 2197 / 4104, -1 / 5, 0.0)


class DOPRI5Formula(EmbeddedRungeKuttaFormula):
    """Dormand-Prince 5(4)."""

    stages = 7
    order = 5
    lesser_order = 4
    nodes = (0.0, 1 / 5, 3 / 10, 4 / 5, 8 / 9, 1.0, 1.0)
    matrix = (
        (),
        (1 / 5,),
        (3 / 40, 9 / 40),
        (44 / 45, -56 / 15, 32 / 9),
        (19372 / 6561, -25360 / 2187, 64448 / 6561, -212 / 729),
        (9017 / 3168, -355 / 33, 46732 / 5247, 49 / 176, -5103 / 18656),
        (35 / 384, 0.0, 500 / 1113, 125 / 192, -2187 / 6784, 11 / 84),
    )
    weights = (35 / 384, 0.0, 500 / 1113, 125 / 192, -2187 / 6784, 11 / 84, 0.0)
    lesser_weights = (5179 / 57600, 0.0, 7571 / 16695, 393 / 640,
                      -92097 / 339200, 187 / 2100, 1 / 40)
