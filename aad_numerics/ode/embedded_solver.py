# aad_numerics/ode/embedded_solver.py
"""
Adaptive ODE solver driving an embedded Runge-Kutta formula.

Example
-------
>>> solver = dopri5_solver(lambda t, y: -y)
>>> solver.init(0.0, 1.0)
>>> solver.solve_till(1.0)
>>> solver.variable          # ~ exp(-1)
"""
from __future__ import annotations
import math
from typing import Any, Optional

import numpy as np

from ..exceptions import InvalidArgument, PreconditionNotSatisfied, log_and_raise
from ..logger import aad_numerics_logger
from .formulas import DOPRI5Formula, EmbeddedRungeKuttaFormula, RHS, RKF45Formula
from .step_size_controller import BasicStepSizeController, InitialStepSizeCalculator
from .tolerances import ErrorTolerances

MAX_RETRY = 10000


class EmbeddedSolver:
    """
    Adaptive solver driving an embedded Runge-Kutta formula.

    Call ``init(time, variable)`` once, then ``step()`` to advance by one
    accepted step or ``solve_till(end_time)`` to advance up to a time
    exactly. Each step is retried with a smaller step size until the
    controller accepts its error estimate.
    """

    def __init__(self, formula: EmbeddedRungeKuttaFormula,
                 controller: Optional[BasicStepSizeController] = None):
        self.formula = formula
        self.controller = (controller if controller is not None
                           else BasicStepSizeController(formula.lesser_order))
        self._time = 0.0
        self._variable = None
        self._error = None
        self._step_size: Optional[float] = None
        self._last_step_size = math.nan
        self._steps = 0

    def init(self, time: float, variable: Any) -> None:
        """Set the initial condition; chooses the initial step size unless one was set."""
        self._time = float(time)
        self._variable = np.copy(variable) if np.ndim(variable) > 0 else float(variable)
        self._error = self._variable * 0.0
        self._steps = 0
        self.controller.init(self._variable)
        if self._step_size is not None:
            aad_numerics_logger.debug("Using user-specified initial step size %g.", self._step_size)
        else:
            self._step_size = InitialStepSizeCalculator(self.formula.lesser_order).calculate(
                self.formula.rhs, self._time, self._variable,
                self.controller.limits, self.controller.tolerances,
            )
            aad_numerics_logger.debug("Automatically selected initial step size %g.", self._step_size)

    def step(self) -> None:
        """Advance one accepted step, retrying with smaller steps as the controller asks."""
        if self._variable is None or self._step_size is None:
            raise PreconditionNotSatisfied(
                "Step size is not set yet. You may forget to call init function.")
        previous = self._variable
        estimate, error = self.formula.step_embedded(self._time, self._step_size, previous)
        for _ in range(MAX_RETRY):
            step_size = self._step_size
            accepted, self._step_size = self.controller.check_and_calc_next(step_size, estimate, error)
            if accepted:
                self._time += step_size
                self._variable = estimate
                self._error = error
                self._last_step_size = step_size
                self._steps += 1
                aad_numerics_logger.debug(
                    "embedded_solver: Steps %d, Time %.6g, StepSize %.3e, EstError %.3e",
                    self._steps, self._time, step_size, self.error_norm,
                )
                return
            estimate, error = self.formula.step_embedded(self._time, self._step_size, previous)
        aad_numerics_logger.warning(
            "embedded_solver: no step accepted after %d retries at time %g.", MAX_RETRY, self._time)

    def solve_till(self, end_time: float) -> None:
        """Step until `end_time` without stepping past it."""
        while self.time < end_time:
            max_step_size = end_time - self.time
            current_step_size = self.step_size
            rewrite_step_size = current_step_size > max_step_size
            if rewrite_step_size:
                self.step_size = max_step_size
            self.step()
            if rewrite_step_size and self.step_size >= max_step_size:
                self.step_size = current_step_size

    # ----------------------------- state ----------------------------- #
    @property
    def time(self) -> float:
        return self._time

    @property
    def variable(self) -> Any:
        return self._variable

    @property
    def step_size(self) -> float:
        """Step size of the next step (NaN before it is chosen)."""
        return math.nan if self._step_size is None else self._step_size

    @step_size.setter
    def step_size(self, val: float):
        if not val > 0:
            log_and_raise(InvalidArgument, f"Step size must be a positive value, got {val}.")
        self._step_size = float(val)

    @property
    def last_step_size(self) -> float:
        return self._last_step_size

    @property
    def error_norm(self) -> float:
        if self._error is None:
            return math.nan
        if np.ndim(self._error) > 0:
            return float(np.linalg.norm(self._error))
        return abs(float(self._error))

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def tolerances(self) -> ErrorTolerances:
        return self.controller.tolerances

    @tolerances.setter
    def tolerances(self, val: ErrorTolerances):
        self.controller.tolerances = val


def rkf45_solver(rhs: RHS, controller: Optional[BasicStepSizeController] = None) -> EmbeddedSolver:
    return EmbeddedSolver(RKF45Formula(rhs), controller)


def dopri5_solver(rhs: RHS, controller: Optional[BasicStepSizeController] = None) -> EmbeddedSolver:
    return EmbeddedSolver(DOPRI5Formula(rhs), controller)
