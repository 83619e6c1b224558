from .legendre import LegendreRoots, legendre, legendre_with_diff

__all__ = ["LegendreRoots", "legendre", "legendre_with_diff"]
