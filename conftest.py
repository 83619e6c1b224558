"""Pytest configuration: shared fixtures for the aad_numerics test modules."""

import numpy as np
import pytest

__all__ = ["scalar_type"]


@pytest.fixture(params=[np.float32, np.float64], ids=["float32", "float64"])
def scalar_type(request):
    """numpy scalar type the automatic-differentiation tests run in."""
    return request.param


@pytest.fixture
def rel(scalar_type):
    """Relative tolerance matching the precision of `scalar_type`."""
    return 1e-5 if scalar_type is np.float32 else 1e-12
