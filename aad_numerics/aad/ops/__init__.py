# aad_numerics/aad/ops/__init__.py

# Convenience re-exports so users can do: from aad_numerics.aad.ops import mul, exp, ...
from .arithmetic import add, sub, mul, div, neg
from .transcendental import exp, log, sqrt

__all__ = [
    "add", "sub", "mul", "div", "neg",
    "exp", "log", "sqrt",
]
