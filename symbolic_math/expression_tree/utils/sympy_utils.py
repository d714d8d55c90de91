import sympy as sp

from ..core.node import Node, ConstantNode, VariableNode, AddNode, MulNode, PowNode
from ..core.operators import NodeType, check_exhaustive, is_integer_value
from ..core.symbol import Symbol


def _number_to_sympy(node: ConstantNode) -> sp.Expr:
  if is_integer_value(node.value):
    return sp.Integer(int(node.value))
  return sp.Float(node.value)


_TO_SYMPY = {
  NodeType.NUMBER: _number_to_sympy,
  NodeType.VARIABLE: lambda node: sp.Symbol(node.name),
  NodeType.ADD: lambda node: sp.Add(*(to_sympy(op) for op in node.operands)),
  NodeType.SUB: lambda node: sp.Add(to_sympy(node.left), sp.Mul(-1, to_sympy(node.right))),
  NodeType.MUL: lambda node: sp.Mul(*(to_sympy(op) for op in node.operands)),
  NodeType.DIV: lambda node: sp.Mul(to_sympy(node.left), sp.Pow(to_sympy(node.right), -1)),
  NodeType.POW: lambda node: sp.Pow(to_sympy(node.base), to_sympy(node.exponent)),
}
check_exhaustive(_TO_SYMPY, "to_sympy")


def to_sympy(node: Node) -> sp.Expr:
  """Convert a tree to an equivalent SymPy expression"""
  return _TO_SYMPY[node.node_type](node)


def from_sympy(sympy_expr) -> Node:
  """Convert a SymPy expression built from +, *, ** to a tree.

  ``a*b**-1`` stays a product with a negative power; SymPy does not keep
  subtraction or division apart from addition and multiplication.
  """
  sympy_expr = sp.sympify(sympy_expr)

  if sympy_expr.is_Symbol:
    return VariableNode(Symbol(sympy_expr.name))

  if sympy_expr.is_Number:
    return ConstantNode(float(sympy_expr))

  if isinstance(sympy_expr, sp.Add):
    return AddNode(from_sympy(arg) for arg in sympy_expr.args)

  if isinstance(sympy_expr, sp.Mul):
    return MulNode(from_sympy(arg) for arg in sympy_expr.args)

  if isinstance(sympy_expr, sp.Pow):
    base, exponent = sympy_expr.args
    return PowNode(from_sympy(base), from_sympy(exponent))

  if sympy_expr.is_number:
    # exact constants such as pi
    return ConstantNode(float(sympy_expr))

  raise ValueError(f"Cannot convert {type(sympy_expr).__name__} to an expression tree: {sympy_expr}")
