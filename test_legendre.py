"""Unit tests for functions/legendre.py."""

import math

import numpy as np
import pytest
from scipy.special import eval_legendre, roots_legendre

from aad_numerics.exceptions import InvalidArgument
from aad_numerics.functions import LegendreRoots, legendre, legendre_with_diff


@pytest.mark.parametrize("n", [0, 1, 2, 3, 7, 20])
@pytest.mark.parametrize("x", [-1.0, -0.3, 0.0, 0.45, 1.0])
def test_legendre_matches_scipy(n, x):
    assert legendre(x, n) == pytest.approx(eval_legendre(n, x), abs=1e-12)
    assert legendre_with_diff(x, n)[0] == pytest.approx(eval_legendre(n, x), abs=1e-12)


def test_low_orders():
    assert legendre(0.3, 0) == 1.0
    assert legendre(0.3, 1) == 0.3
    assert legendre(0.3, 2) == pytest.approx(0.5 * (3 * 0.09 - 1))


def test_negative_order_is_nan():
    assert math.isnan(legendre(0.5, -1))
    assert all(math.isnan(v) for v in legendre_with_diff(0.5, -1))


@pytest.mark.parametrize("x", [-1.0, -0.6, 0.2, 1.0])
def test_derivative_of_p3(x):
    # P3 = (5x^3 - 3x) / 2,  P3' = (15x^2 - 3) / 2
    _, diff = legendre_with_diff(x, 3)
    assert diff == pytest.approx((15 * x * x - 3) / 2)


@pytest.mark.parametrize("x", [-1.0, 1.0])
def test_derivative_of_p2_at_end_points(x):
    # P2' = 3x
    assert legendre_with_diff(x, 2)[1] == pytest.approx(3 * x)


def test_derivative_of_p0():
    assert legendre_with_diff(0.7, 0) == (1.0, 0.0)


@pytest.mark.parametrize("order", [1, 2, 3, 4, 5, 10, 21])
def test_roots_match_scipy(order):
    roots = LegendreRoots(order)
    assert roots.order == order
    assert len(roots) == order
    expected, _ = roots_legendre(order)
    np.testing.assert_allclose(np.sort(roots.roots), np.sort(expected), atol=1e-12)


def test_roots_are_descending_and_symmetric():
    roots = LegendreRoots(6)
    values = list(roots)
    assert values == sorted(values, reverse=True)
    np.testing.assert_allclose(roots.roots, -roots.roots[::-1], atol=1e-15)
    assert roots[0] > 0


def test_odd_order_has_zero_at_center():
    roots = LegendreRoots(5)
    assert roots[2] == 0.0


def test_recompute_changes_order():
    roots = LegendreRoots(3)
    roots.compute(4)
    assert len(roots) == 4


def test_negative_order_raises():
    with pytest.raises(InvalidArgument):
        LegendreRoots(-1)
