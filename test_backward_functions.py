"""Unit tests for aad/ops/transcendental.py."""

import numpy as np
import pytest

from aad_numerics.aad import Variable, create_diff_variable, differentiate, exp, log, sqrt


@pytest.mark.parametrize(
    "func, np_func, deriv",
    [
        (exp, np.exp, np.exp),
        (log, np.log, lambda x: 1.0 / x),
        (sqrt, np.sqrt, lambda x: 0.5 / np.sqrt(x)),
    ],
    ids=["exp", "log", "sqrt"],
)
def test_value_and_derivative(scalar_type, rel, func, np_func, deriv):
    x = create_diff_variable(scalar_type(1.7))
    y = func(x)
    assert isinstance(y.value, scalar_type)
    assert y.value == pytest.approx(np_func(1.7), rel=rel)
    assert differentiate(y, x) == pytest.approx(deriv(1.7), rel=rel)


@pytest.mark.parametrize("func", [exp, log, sqrt], ids=["exp", "log", "sqrt"])
def test_constant_argument_gives_constant(func):
    y = func(Variable(2.0))
    assert y.node is None


def test_plain_number_argument():
    y = exp(0.0)
    assert isinstance(y, Variable)
    assert y.value == 1.0
    assert y.node is None


def test_composite_expression(rel, scalar_type):
    # d/dx sqrt(exp(x) * log(x)) at x = 2
    x = create_diff_variable(scalar_type(2.0))
    y = sqrt(exp(x) * log(x))
    ex, lx = np.exp(2.0), np.log(2.0)
    expected = 0.5 / np.sqrt(ex * lx) * (ex * lx + ex / 2.0)
    assert differentiate(y, x) == pytest.approx(expected, rel=rel)


def test_numpy_ufuncs_on_object_arrays():
    xs = np.array([create_diff_variable(1.0), create_diff_variable(4.0)], dtype=object)
    ys = np.sqrt(xs)
    assert all(isinstance(y, Variable) for y in ys)
    assert ys[1].value == pytest.approx(2.0)
    assert differentiate(ys[1], xs[1]) == pytest.approx(0.25)


def test_log_of_zero_follows_floating_point():
    x = create_diff_variable(0.0)
    with np.errstate(divide="ignore"):
        y = log(x)
        d = differentiate(y, x)
    assert np.isneginf(y.value)
    assert np.isinf(d)
