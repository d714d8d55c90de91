"""Core expression tree components."""

from .symbol import Symbol
from .node import (
    Node, ConstantNode, VariableNode, AddNode, SubNode, MulNode, DivNode, PowNode,
    number, var, add, sub, mul, div, pow
)
from .operators import NodeType, OpType, BINARY_OP_MAP, MAX_SIMPLIFY_PASSES, MAX_EXPANSION_POWER

__all__ = [
    'Symbol',
    'Node', 'ConstantNode', 'VariableNode', 'AddNode', 'SubNode', 'MulNode', 'DivNode', 'PowNode',
    'number', 'var', 'add', 'sub', 'mul', 'div', 'pow',
    'NodeType', 'OpType', 'BINARY_OP_MAP', 'MAX_SIMPLIFY_PASSES', 'MAX_EXPANSION_POWER'
]
