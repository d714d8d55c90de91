"""Expression Tree Module

Immutable expression trees with simplify, expand, evaluate and rendering.
"""

from .core import (
    Symbol,
    Node, ConstantNode, VariableNode, AddNode, SubNode, MulNode, DivNode, PowNode,
    number, var, add, sub, mul, div, pow,
    NodeType, OpType
)
from .errors import EvalError, UnboundSymbolError, DivisionByZeroError
from .utils import (
    simplify, expand, evaluate, evaluate_batch, to_string,
    to_sympy, from_sympy,
    get_all_nodes, calculate_tree_depth, get_variables, validate_tree_structure
)

__all__ = [
    "Symbol",
    "Node", "ConstantNode", "VariableNode", "AddNode", "SubNode", "MulNode", "DivNode", "PowNode",
    "number", "var", "add", "sub", "mul", "div", "pow",
    "NodeType", "OpType",
    "EvalError", "UnboundSymbolError", "DivisionByZeroError",
    "simplify", "expand", "evaluate", "evaluate_batch", "to_string",
    "to_sympy", "from_sympy",
    "get_all_nodes", "calculate_tree_depth", "get_variables", "validate_tree_structure"
]
