import math

import pytest

from symbolic_math import (
    Symbol, NodeType, AddNode, MulNode, ConstantNode,
    number, var, add, sub, mul, div, pow
)


def test_symbol_equality_and_ordering():
    assert Symbol("x") == Symbol("x")
    assert Symbol("x") != Symbol("y")
    assert hash(Symbol("x")) == hash(Symbol("x"))
    assert sorted([Symbol("b"), Symbol("a"), Symbol("c")]) == [Symbol("a"), Symbol("b"), Symbol("c")]
    assert str(Symbol("alpha")) == "alpha"


def test_symbol_rejects_non_string_name():
    with pytest.raises(TypeError):
        Symbol(3)


def test_leaf_constructors():
    assert number(2).node_type == NodeType.NUMBER
    assert number(2).value == 2.0
    assert var("x").node_type == NodeType.VARIABLE
    assert var(Symbol("x")) == var("x")
    assert var("x").symbol == Symbol("x")


def test_add_and_mul_flatten_one_level():
    x, y, z, w = var("x"), var("y"), var("z"), var("w")
    assert len(add(add(x, y), z).operands) == 3
    assert len(add(x, add(y, z)).operands) == 3
    assert len(add(add(add(x, y), z), w).operands) == 4
    assert len(mul(mul(x, y), mul(z, w)).operands) == 4
    # sums are not flattened into products
    assert len(mul(add(x, y), z).operands) == 2


def test_constructors_reject_non_expressions():
    with pytest.raises(TypeError):
        add(var("x"), "y")
    with pytest.raises(TypeError):
        var(3)
    with pytest.raises(TypeError):
        pow(var("x"), None)


def test_add_and_mul_equality_ignores_operand_order():
    x, y, z = var("x"), var("y"), var("z")
    assert add(x, y) == add(y, x)
    assert hash(add(x, y)) == hash(add(y, x))
    assert mul(x, add(y, z)) == mul(add(z, y), x)
    assert add(x, x) != add(x, y)
    assert AddNode([x, x, y]) != AddNode([x, y, y])


def test_positional_variants_compare_in_order():
    x, y = var("x"), var("y")
    assert sub(x, y) != sub(y, x)
    assert div(x, y) != div(y, x)
    assert pow(x, y) != pow(y, x)
    assert sub(x, y) == sub(x, y)


def test_different_variants_are_not_equal():
    x, y = var("x"), var("y")
    assert add(x, y) != mul(x, y)
    assert number(1) != var("x")
    assert var("x") != "x"


def test_nan_constants_compare_equal():
    assert number(math.nan) == number(math.nan)
    assert hash(number(math.nan)) == hash(number(float("nan")))
    assert number(0.0) == number(-0.0)


def test_nodes_are_usable_as_dict_keys():
    x, y = var("x"), var("y")
    table = {add(x, y): "sum"}
    assert table[add(y, x)] == "sum"


def test_operator_sugar_maps_onto_constructors():
    x, y = var("x"), var("y")
    assert x + y == add(x, y)
    assert x + 1 == add(x, number(1))
    assert 1 + x == add(number(1), x)
    assert x - y == sub(x, y)
    assert 2 - x == sub(number(2), x)
    assert 2 * x == mul(number(2), x)
    assert x * y == mul(x, y)
    assert x / 2 == div(x, number(2))
    assert 1 / x == div(number(1), x)
    assert x ** 2 == pow(x, number(2))
    assert 2 ** x == pow(number(2), x)
    assert x.pow(y) == pow(x, y)
    assert -x == mul(number(-1), x)


def test_copy_is_deep():
    x, y = var("x"), var("y")
    original = add(mul(number(2), x), pow(y, number(2)))
    clone = original.copy()
    assert clone == original
    assert clone is not original
    assert clone.operands[0] is not original.operands[0]
    assert clone.operands[1].base is not original.operands[1].base


def test_size_counts_nodes():
    x, y = var("x"), var("y")
    assert number(1).size() == 1
    assert add(x, mul(number(2), y)).size() == 5
    assert pow(sub(x, y), number(2)).size() == 5


def test_hand_built_nodes():
    x = var("x")
    node = MulNode([ConstantNode(3), x])
    assert node == mul(number(3), x)
    assert node.children() == (ConstantNode(3), x)
