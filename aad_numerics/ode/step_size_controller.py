# aad_numerics/ode/step_size_controller.py
from __future__ import annotations
import math
from typing import Any, Callable, Optional, Tuple

from ..exceptions import InvalidArgument, PreconditionNotSatisfied, log_and_raise
from ..logger import aad_numerics_logger
from .tolerances import ErrorTolerances, StepSizeLimits

DEFAULT_REDUCTION_RATE = 0.5
DEFAULT_SAFETY_COEFF = 0.8
DEFAULT_MAX_STEP_SIZE_FACTOR = 2.0


class BasicStepSizeController:
    """
    Accept a step when the estimated error is within the tolerances and scale
    the next step size by

        factor = min(safety * err^(-1 / (lesser_order + 1)), max_factor)

    otherwise retry with the step size multiplied by ``reduction_rate``.
    A step at the lower limit is accepted anyway (with a warning).
    """

    def __init__(self, lesser_order: int, *,
                 limits: Optional[StepSizeLimits] = None,
                 tolerances: Optional[ErrorTolerances] = None,
                 reduction_rate: float = DEFAULT_REDUCTION_RATE,
                 safety_coeff: float = DEFAULT_SAFETY_COEFF,
                 max_step_size_factor: float = DEFAULT_MAX_STEP_SIZE_FACTOR):
        for name, val in (("reduction_rate", reduction_rate),
                          ("safety_coeff", safety_coeff),
                          ("max_step_size_factor", max_step_size_factor)):
            if val <= 0:
                log_and_raise(InvalidArgument, f"{name} must be a positive value, got {val}.")
        self.lesser_order = lesser_order
        self.limits = limits if limits is not None else StepSizeLimits()
        self._tolerances = tolerances
        self.reduction_rate = reduction_rate
        self.safety_coeff = safety_coeff
        self.max_step_size_factor = max_step_size_factor

    def init(self, reference: Any) -> None:
        """Create default tolerances sized like `reference` unless already set."""
        if self._tolerances is None:
            self._tolerances = ErrorTolerances(reference)

    @property
    def tolerances(self) -> ErrorTolerances:
        if self._tolerances is None:
            raise PreconditionNotSatisfied("Error tolerance is not set yet.")
        return self._tolerances

    @tolerances.setter
    def tolerances(self, val: ErrorTolerances):
        self._tolerances = val

    def check_and_calc_next(self, step_size: float, variable: Any, error: Any) -> Tuple[bool, float]:
        """Return (accepted, next step size)."""
        tolerances = self.tolerances
        if not tolerances.check(variable, error):
            if step_size > self.limits.lower_limit:
                aad_numerics_logger.debug(
                    "Error tolerance not satisfied with step size %g.", step_size)
                return False, self.limits.apply(step_size * self.reduction_rate)
            aad_numerics_logger.warning(
                "Error tolerance not satisfied even with the lowest step size %g.", step_size)

        error_norm = tolerances.calc_norm(variable, error)
        exponent = -1.0 / (self.lesser_order + 1)
        try:
            factor = self.safety_coeff * error_norm ** exponent
        except ZeroDivisionError:
            factor = math.inf
        if not math.isfinite(factor) or factor > self.max_step_size_factor:
            factor = self.max_step_size_factor
        return True, self.limits.apply(step_size * factor)


class InitialStepSizeCalculator:
    """
    Initial step size by the heuristic of Hairer, Norsett and Wanner
    (Solving Ordinary Differential Equations I, II.4).
    """

    def __init__(self, lesser_order: int):
        self.lesser_order = lesser_order

    def calculate(self, rhs: Callable[[float, Any], Any], time: float, variable: Any,
                  limits: StepSizeLimits, tolerances: ErrorTolerances) -> float:
        initial_diff = rhs(time, variable)

        variable_norm = tolerances.calc_norm(variable, variable)
        diff_norm = tolerances.calc_norm(variable, initial_diff)
        if variable_norm >= 1e-5 and diff_norm >= 1e-5:
            step_from_diff = 1e-2 * variable_norm / diff_norm
        else:
            step_from_diff = 1e-6

        euler_diff = rhs(time + step_from_diff, variable + step_from_diff * initial_diff)
        second_diff_norm = tolerances.calc_norm(variable, euler_diff - initial_diff) / step_from_diff
        larger_norm = max(diff_norm, second_diff_norm)
        if larger_norm > 1e-15:
            step_from_second_diff = (1e-2 / larger_norm) ** (1.0 / (self.lesser_order + 1))
        else:
            step_from_second_diff = max(1e-6, 1e-3 * step_from_diff)

        step_size = limits.apply(min(1e2 * step_from_diff, step_from_second_diff))
        aad_numerics_logger.debug(
            "Initial step size: from diff %g, from second diff %g, selected %g.",
            step_from_diff, step_from_second_diff, step_size,
        )
        return step_size
