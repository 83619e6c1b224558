"""Unit tests for aad/core/var.py and aad/ops/arithmetic.py."""

import numpy as np
import pytest

from aad_numerics.aad import (
    Node,
    Variable,
    constant_tag,
    create_diff_variable,
    create_diff_variable_vector,
    create_node,
    differentiate,
    value,
    variable_tag,
)


def sensitivities(var):
    return [float(child.sensitivity) for child in var.node.children]


def child_nodes(var):
    return [child.node for child in var.node.children]


# ----------------------------- construction ----------------------------- #
def test_default_is_constant_zero():
    v = Variable()
    assert v.value == 0
    assert v.node is None


def test_value_only_is_constant():
    v = Variable(1.5)
    assert v.value == 1.5
    assert v.node is None


def test_constant_tag():
    v = Variable(2.0, constant_tag)
    assert v.node is None


def test_variable_tag_creates_leaf():
    v = Variable(2.0, variable_tag)
    assert isinstance(v.node, Node)
    assert v.node.children == ()


def test_explicit_node():
    node = create_node()
    v = Variable(3.0, node)
    assert v.node is node


def test_invalid_node_is_rejected():
    with pytest.raises(TypeError):
        Variable(1.0, "node")


def test_non_scalar_value_is_rejected():
    with pytest.raises(TypeError):
        Variable("1.0")


def test_python_numbers_become_float64():
    assert isinstance(Variable(1).value, np.float64)
    assert isinstance(Variable(1.0).value, np.float64)


def test_numpy_scalars_keep_precision(scalar_type):
    assert isinstance(Variable(scalar_type(1.0)).value, scalar_type)


# ----------------------------- addition ----------------------------- #
def test_add_two_variables(scalar_type):
    x = create_diff_variable(scalar_type(1.25))
    y = create_diff_variable(scalar_type(2.5))
    z = x + y
    assert z.value == pytest.approx(3.75)
    assert child_nodes(z) == [x.node, y.node]
    assert sensitivities(z) == [1.0, 1.0]


def test_add_constant(scalar_type):
    x = create_diff_variable(scalar_type(1.25))
    for z in (x + 2.0, 2.0 + x, x + Variable(scalar_type(2.0))):
        assert z.value == pytest.approx(3.25)
        assert child_nodes(z) == [x.node]
        assert sensitivities(z) == [1.0]


def test_add_self_records_total_derivative(scalar_type):
    x = create_diff_variable(scalar_type(1.25))
    z = x + x
    assert z.value == pytest.approx(2.5)
    assert child_nodes(z) == [x.node]
    assert sensitivities(z) == [2.0]


def test_add_constants_gives_constant(scalar_type):
    z = Variable(scalar_type(1.0)) + Variable(scalar_type(2.0))
    assert z.value == pytest.approx(3.0)
    assert z.node is None


# ----------------------------- subtraction ----------------------------- #
def test_sub_two_variables(scalar_type):
    x = create_diff_variable(scalar_type(1.25))
    y = create_diff_variable(scalar_type(2.5))
    z = x - y
    assert z.value == pytest.approx(-1.25)
    assert child_nodes(z) == [x.node, y.node]
    assert sensitivities(z) == [1.0, -1.0]


def test_sub_constant(scalar_type):
    x = create_diff_variable(scalar_type(1.25))
    z = x - 2.0
    assert z.value == pytest.approx(-0.75)
    assert sensitivities(z) == [1.0]
    z = 2.0 - x
    assert z.value == pytest.approx(0.75)
    assert sensitivities(z) == [-1.0]


def test_sub_self_is_constant(scalar_type):
    x = create_diff_variable(scalar_type(1.25))
    z = x - x
    assert z.value == 0
    assert z.node is None


# ----------------------------- multiplication ----------------------------- #
def test_mul_two_variables(scalar_type):
    x = create_diff_variable(scalar_type(1.5))
    y = create_diff_variable(scalar_type(-2.0))
    z = x * y
    assert z.value == pytest.approx(-3.0)
    assert child_nodes(z) == [x.node, y.node]
    assert sensitivities(z) == [-2.0, 1.5]


def test_mul_constant(scalar_type):
    x = create_diff_variable(scalar_type(1.5))
    for z in (x * 4.0, 4.0 * x):
        assert z.value == pytest.approx(6.0)
        assert sensitivities(z) == [4.0]


def test_mul_self_records_total_derivative(scalar_type):
    x = create_diff_variable(scalar_type(1.5))
    z = x * x
    assert z.value == pytest.approx(2.25)
    assert child_nodes(z) == [x.node]
    assert sensitivities(z) == [3.0]


# ----------------------------- division ----------------------------- #
def test_div_two_variables(scalar_type):
    x = create_diff_variable(scalar_type(3.0))
    y = create_diff_variable(scalar_type(2.0))
    z = x / y
    assert z.value == pytest.approx(1.5)
    assert child_nodes(z) == [x.node, y.node]
    assert sensitivities(z) == pytest.approx([0.5, -0.75])


def test_div_by_constant(scalar_type):
    x = create_diff_variable(scalar_type(3.0))
    z = x / 2.0
    assert z.value == pytest.approx(1.5)
    assert sensitivities(z) == [0.5]


def test_constant_divided_by_variable(scalar_type):
    x = create_diff_variable(scalar_type(2.0))
    z = 1.0 / x
    assert z.value == pytest.approx(0.5)
    assert sensitivities(z) == pytest.approx([-0.25])


def test_div_self_is_constant(scalar_type):
    x = create_diff_variable(scalar_type(3.0))
    z = x / x
    assert z.value == 1
    assert z.node is None


def test_division_by_zero_follows_floating_point():
    x = create_diff_variable(1.0)
    with np.errstate(divide="ignore"):
        z = x / Variable(0.0)
    assert np.isinf(z.value)


# ----------------------------- negation ----------------------------- #
def test_negation(scalar_type):
    x = create_diff_variable(scalar_type(1.5))
    z = -x
    assert z.value == pytest.approx(-1.5)
    assert child_nodes(z) == [x.node]
    assert sensitivities(z) == [-1.0]
    assert +x is x


def test_negation_of_constant():
    z = -Variable(1.5)
    assert z.value == -1.5
    assert z.node is None


# ----------------------------- precision ----------------------------- #
def test_plain_scalars_follow_variable_precision(scalar_type):
    x = create_diff_variable(scalar_type(1.5))
    for z in (x + 1.0, 1.0 - x, x * 2, 3 / x, np.float64(2.0) * x):
        assert isinstance(z, Variable)
        assert isinstance(z.value, scalar_type)


def test_numpy_scalar_on_left_defers_to_variable():
    x = create_diff_variable(1.5)
    z = np.float64(2.0) * x
    assert isinstance(z, Variable)
    assert sensitivities(z) == [2.0]


def test_numpy_integer_scalars_become_float64():
    for v in (np.int64(3), np.int32(3), np.bool_(True)):
        assert isinstance(Variable(v).value, np.float64)
    x = create_diff_variable(np.int64(2))
    z = x * 0.5
    assert z.value == 1.0
    assert sensitivities(z) == [0.5]


# ----------------------------- arrays ----------------------------- #
def test_variable_with_variable_array(scalar_type):
    x = create_diff_variable(scalar_type(2.0))
    vec = create_diff_variable_vector(np.array([1.0, 3.0], dtype=scalar_type))
    for z in (x * vec, vec * x):
        assert isinstance(z, np.ndarray)
        assert z.dtype == object
        assert z.shape == (2,)
        np.testing.assert_allclose(value(z).astype(float), [2.0, 6.0])
        assert differentiate(z[1], x) == pytest.approx(3.0)
        assert differentiate(z[1], vec[1]) == pytest.approx(2.0)


def test_variable_with_float_array(scalar_type):
    x = create_diff_variable(scalar_type(2.0))
    arr = np.array([1.0, 4.0])
    for z, expected, slope in (
        (x * arr, [2.0, 8.0], [1.0, 4.0]),
        (arr * x, [2.0, 8.0], [1.0, 4.0]),
        (x + arr, [3.0, 6.0], [1.0, 1.0]),
        (arr - x, [-1.0, 2.0], [-1.0, -1.0]),
        (x / arr, [2.0, 0.5], [1.0, 0.25]),
        (arr / x, [0.5, 2.0], [-0.25, -1.0]),
    ):
        assert z.dtype == object
        assert all(isinstance(elem, Variable) for elem in z)
        assert all(isinstance(elem.value, scalar_type) for elem in z)
        np.testing.assert_allclose(value(z).astype(float), expected)
        np.testing.assert_allclose(
            [float(differentiate(elem, x)) for elem in z], slope
        )


def test_variable_with_array_keeps_shape():
    x = create_diff_variable(1.5)
    z = x - np.ones((2, 3))
    assert z.shape == (2, 3)
    assert z[1, 2].value == 0.5
