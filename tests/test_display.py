import math

import pytest

from symbolic_math import AddNode, number, var, add, sub, mul, div, pow, simplify, to_string

x, y, z = var("x"), var("y"), var("z")


@pytest.mark.parametrize("value, text", [
    (5, "5"),
    (2.5, "2.5"),
    (-3, "-3"),
    (0.1, "0.1"),
    (-0.0, "0"),
    (1e20, "1e+20"),
    (math.inf, "inf"),
    (math.nan, "nan"),
])
def test_numbers(value, text):
    assert str(number(value)) == text


def test_variable_renders_its_name():
    assert str(var("theta")) == "theta"
    assert to_string(var("x")) == "x"


def test_sum_order_is_canonical():
    assert str(add(x, y)) == "x + y"
    assert str(add(y, x)) == "x + y"
    assert str(add(number(3), x)) == "x + 3"
    assert str(add(x, pow(y, number(2)))) == "y^2 + x"


def test_negative_terms_render_as_subtraction():
    assert str(add(x, number(-3))) == "x - 3"
    assert str(add(x, number(-0.5))) == "x - 0.5"
    assert str(add(x, mul(number(-2), y))) == "x - 2y"
    assert str(add(y, mul(number(-2), x))) == "-2x + y"
    assert str(add(y, mul(number(-1), x))) == "-x + y"
    assert "+ -" not in str(simplify(add(sub(number(-2), y), x)))


def test_products():
    assert str(mul(number(2), x)) == "2x"
    assert str(mul(x, number(2))) == "2x"
    assert str(mul(number(-1), x)) == "-x"
    assert str(mul(x, y)) == "xy"
    assert str(mul(y, x)) == "xy"
    assert str(mul(x, pow(y, number(2)))) == "xy^2"
    assert str(mul(pow(x, number(2)), y)) == "x^2*y"
    assert str(mul(var("ab"), var("c"))) == "ab*c"
    assert str(mul(number(2), add(x, y))) == "2(x + y)"
    assert str(mul(add(x, number(2)), add(x, number(1)))) == "(x + 1)*(x + 2)"
    assert str(mul(number(2), div(x, y))) == "2*x/y"
    assert str(mul(number(3), pow(x, number(2)))) == "3x^2"


def test_exponent_notation_coefficient_is_not_juxtaposed():
    assert str(mul(number(1e-5), x)) == "1e-05*x"
    assert str(mul(number(1e20), x)) == "1e+20*x"
    assert str(mul(number(2.5e-7), pow(x, number(2)))) == "2.5e-07*x^2"
    assert str(mul(number(0.5), x)) == "0.5x"


def test_subtraction():
    assert str(sub(x, y)) == "x - y"
    assert str(sub(sub(x, y), z)) == "x - y - z"
    assert str(sub(x, sub(y, z))) == "x - (y - z)"
    assert str(sub(x, add(y, z))) == "x - (y + z)"
    assert str(sub(x, number(-2))) == "x - (-2)"


def test_division():
    assert str(div(x, y)) == "x/y"
    assert str(div(add(x, number(1)), y)) == "(x + 1)/y"
    assert str(div(x, sub(y, z))) == "x/(y - z)"
    assert str(div(x, mul(number(2), y))) == "x/(2y)"
    assert str(div(x, div(y, z))) == "x/(y/z)"
    assert str(div(div(x, y), z)) == "x/y/z"


def test_powers():
    assert str(pow(x, number(2))) == "x^2"
    assert str(pow(add(x, y), number(2))) == "(x + y)^2"
    assert str(pow(sub(x, y), number(2))) == "(x - y)^2"
    assert str(pow(div(x, y), number(2))) == "(x/y)^2"
    assert str(pow(mul(x, y), number(2))) == "(xy)^2"
    assert str(pow(pow(x, number(2)), number(3))) == "(x^2)^3"
    assert str(pow(x, add(y, number(1)))) == "x^(y + 1)"
    assert str(pow(x, number(-1))) == "x^(-1)"
    assert str(pow(number(-2), x)) == "(-2)^x"


def test_degenerate_nodes_render():
    assert str(AddNode([])) == "0"


def test_structurally_equal_trees_render_identically():
    first = add(add(mul(number(3), y), pow(x, number(2))), number(1))
    second = add(number(1), add(pow(x, number(2)), mul(y, number(3))))
    assert first == second
    assert str(first) == str(second)
    assert str(simplify(first)) == str(simplify(second)) == "x^2 + 3y + 1"


def test_rendering_is_repeatable():
    expr = simplify(add(mul(x, y), add(mul(y, x), z)))
    assert str(expr) == str(expr.copy()) == "2xy + z"
