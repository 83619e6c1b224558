"""
aad_numerics: graph-based automatic differentiation and the numerical
algorithms built on it (root finding, quadrature, adaptive ODE solvers).
"""

from . import aad, functions, integration, ode, roots
from .aad import (
    Variable,
    create_diff_variable,
    create_diff_variable_vector,
    differentiate,
    value,
)
from .exceptions import AADNumericsError, InvalidArgument, PreconditionNotSatisfied

__version__ = "0.1.0"

__all__ = [
    "aad",
    "functions",
    "integration",
    "ode",
    "roots",
    "Variable",
    "create_diff_variable",
    "create_diff_variable_vector",
    "differentiate",
    "value",
    "AADNumericsError",
    "InvalidArgument",
    "PreconditionNotSatisfied",
]
