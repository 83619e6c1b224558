from .de_finite import DEFiniteIntegrator
from .de_infinite import DEInfiniteIntegrator
from .de_semi_infinite import DESemiInfiniteIntegrator
from .gauss_legendre import GaussLegendreIntegrator
from .gauss_legendre_kronrod import GaussLegendreKronrodIntegrator
from .kahan import KahanAdder
from .tanh_finite import TanhFiniteIntegrator

__all__ = [
    "DEFiniteIntegrator",
    "DEInfiniteIntegrator",
    "DESemiInfiniteIntegrator",
    "GaussLegendreIntegrator",
    "GaussLegendreKronrodIntegrator",
    "KahanAdder",
    "TanhFiniteIntegrator",
]
