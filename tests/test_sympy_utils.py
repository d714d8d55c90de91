import sympy as sp
import pytest

from symbolic_math import number, var, add, sub, mul, div, pow, simplify, to_sympy, from_sympy

x, y = var("x"), var("y")
X, Y = sp.symbols("x y")


def test_to_sympy():
    assert to_sympy(add(mul(number(2), x), pow(y, number(2)))) == 2 * X + Y ** 2
    assert to_sympy(sub(x, y)) == X - Y
    assert to_sympy(div(x, y)) == X / Y
    assert to_sympy(number(0.5)) == sp.Float(0.5)


def test_from_sympy():
    tree = from_sympy(X ** 2 + 2 * X * Y)
    assert simplify(tree) == simplify(add(pow(x, number(2)), mul(number(2), mul(x, y))))


def test_from_sympy_accepts_strings_and_constants():
    assert simplify(from_sympy("x + 1")) == add(x, number(1))
    assert from_sympy(sp.Rational(1, 4)) == number(0.25)
    assert from_sympy(sp.pi).value == pytest.approx(3.141592653589793)


def test_from_sympy_rejects_functions():
    with pytest.raises(ValueError):
        from_sympy(sp.sin(X))


def test_round_trip_through_sympy_keeps_value():
    expr = pow(add(x, mul(number(3), y)), number(2))
    back = from_sympy(to_sympy(expr))
    bindings = {"x": 1.25, "y": -0.5}
    assert back.evaluate(bindings) == pytest.approx(expr.evaluate(bindings))
