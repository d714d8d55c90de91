from symbolic_math import AddNode, MulNode, Symbol, number, var, add, mul, pow
from symbolic_math.expression_tree.utils import (
    get_all_nodes, calculate_tree_depth, get_variables, validate_tree_structure
)

x, y = var("x"), var("y")


def test_traversal_orders():
    expr = add(mul(number(2), x), y)
    breadth = get_all_nodes(expr)
    depth = get_all_nodes(expr, traversal_order='depth_first')
    assert len(breadth) == len(depth) == expr.size() == 5
    assert breadth[0] is expr and depth[0] is expr
    assert breadth[1:3] == [expr.operands[0], y]
    assert depth[1:4] == [expr.operands[0], number(2), x]


def test_invalid_traversal_order():
    import pytest
    with pytest.raises(ValueError):
        get_all_nodes(x, traversal_order='sideways')


def test_tree_depth():
    assert calculate_tree_depth(x) == 1
    assert calculate_tree_depth(pow(add(x, y), number(2))) == 3


def test_get_variables():
    assert get_variables(add(mul(x, y), pow(x, number(2)))) == {Symbol("x"), Symbol("y")}
    assert get_variables(number(3)) == set()


def test_validate_tree_structure():
    assert validate_tree_structure(add(mul(x, y), number(1)))
    assert not validate_tree_structure(AddNode([]))
    assert not validate_tree_structure(add(x, MulNode([])))
