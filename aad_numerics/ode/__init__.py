from .embedded_solver import EmbeddedSolver, dopri5_solver, rkf45_solver
from .formulas import DOPRI5Formula, EmbeddedRungeKuttaFormula, RKF45Formula
from .step_size_controller import BasicStepSizeController, InitialStepSizeCalculator
from .tolerances import ErrorTolerances, StepSizeLimits

__all__ = [
    "BasicStepSizeController",
    "DOPRI5Formula",
    "EmbeddedRungeKuttaFormula",
    "EmbeddedSolver",
    "ErrorTolerances",
    "InitialStepSizeCalculator",
    "RKF45Formula",
    "StepSizeLimits",
    "dopri5_solver",
    "rkf45_solver",
]
