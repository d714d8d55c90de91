# Python

"""Symbolic Math Package

Build algebraic expressions as trees, simplify and expand them, and
evaluate them numerically.
"""

from .expression_tree import (
  Symbol,
  Node, ConstantNode, VariableNode, AddNode, SubNode, MulNode, DivNode, PowNode,
  number, var, add, sub, mul, div, pow,
  NodeType,
  EvalError, UnboundSymbolError, DivisionByZeroError,
  simplify, expand, evaluate, evaluate_batch, to_string,
  to_sympy, from_sympy
)
from .logging_system import LogLevel, configure_logging, set_log_level, get_logger

__version__ = "0.1.0"
__all__ = [
  "Symbol",
  "Node", "ConstantNode", "VariableNode", "AddNode", "SubNode", "MulNode", "DivNode", "PowNode",
  "number", "var", "add", "sub", "mul", "div", "pow",
  "NodeType",
  "EvalError", "UnboundSymbolError", "DivisionByZeroError",
  "simplify", "expand", "evaluate", "evaluate_batch", "to_string",
  "to_sympy", "from_sympy",
  "LogLevel", "configure_logging", "set_log_level", "get_logger"
]
