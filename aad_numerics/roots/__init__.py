from .newton_raphson import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOL_LAST_CHANGE,
    DEFAULT_TOL_VALUE_NORM,
    NewtonRaphson,
    backward_jacobian_function,
)

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_TOL_LAST_CHANGE",
    "DEFAULT_TOL_VALUE_NORM",
    "NewtonRaphson",
    "backward_jacobian_function",
]
