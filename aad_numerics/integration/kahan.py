# aad_numerics/integration/kahan.py
from __future__ import annotations
from typing import Any


class KahanAdder:
    """
    Compensated (Kahan) summation.

    Works with scalars and numpy arrays alike; the running compensation keeps
    the low-order bits that plain ``+=`` drops when adding many small terms
    to a large sum.
    """

    def __init__(self, initial: Any = 0.0):
        self._sum = initial
        self._remainder = initial * 0

    def add(self, value: Any) -> "KahanAdder":
        y = value - self._remainder
        t = self._sum + y
        self._remainder = (t - self._sum) - y
        self._sum = t
        return self

    def __iadd__(self, value: Any) -> "KahanAdder":
        return self.add(value)

    @property
    def sum(self) -> Any:
        return self._sum
