"""
Deterministic rendering of expression trees.

Add and Mul operands are logically unordered, so the renderer sorts them with
the canonical keys below before printing. Two structurally equal trees
therefore always print the same string, whatever order their operands were
built in. simplify uses the same keys to order its output.

Ordering:
  * Add terms: numeric constants last; symbolic terms by descending total
    degree, then by the text of the term without its numeric coefficient,
    then by the full text.
  * Mul factors: numeric factors first, then by the text of the factor's base
    (``x`` for ``x^2``), then by the full text.
"""

import math
from typing import List, Optional, Tuple

from ..core.node import Node, MulNode
from ..core.operators import NodeType, PRECEDENCE, NEGATION_PRECEDENCE, check_exhaustive


def format_number(value: float) -> str:
  """Shortest round-trip text, without a trailing ``.0`` for whole numbers"""
  if math.isnan(value):
    return "nan"
  if math.isinf(value):
    return "inf" if value > 0 else "-inf"
  if value.is_integer() and abs(value) < 1e16:
    return str(int(value))
  return repr(value)


# Degree

def _degree_operands_max(node) -> float:
  return max((degree(op) for op in node.children()), default=0.0)


def _degree_pow(node) -> float:
  base_degree = degree(node.base)
  if node.exponent.node_type == NodeType.NUMBER:
    return base_degree * node.exponent.value
  return base_degree


_DEGREE = {
  NodeType.NUMBER: lambda node: 0.0,
  NodeType.VARIABLE: lambda node: 1.0,
  NodeType.ADD: _degree_operands_max,
  NodeType.SUB: _degree_operands_max,
  NodeType.MUL: lambda node: sum(degree(op) for op in node.operands),
  NodeType.DIV: lambda node: degree(node.left) - degree(node.right),
  NodeType.POW: _degree_pow,
}
check_exhaustive(_DEGREE, "degree")


def degree(node: Node) -> float:
  """Total polynomial degree, used only to order Add terms"""
  return _DEGREE[node.node_type](node)


def _sortable_degree(node: Node) -> float:
  value = degree(node)
  return 0.0 if math.isnan(value) else value


# Canonical keys

def split_coefficient(node: Node) -> Tuple[Optional[float], Tuple[Node, ...]]:
  """Split a Mul into its single numeric coefficient and remaining factors.

  Returns ``(None, factors)`` when there is not exactly one numeric factor.
  Non-Mul nodes are returned as a one-factor residual.
  """
  if node.node_type != NodeType.MUL:
    return None, (node,)
  numbers = [op for op in node.operands if op.node_type == NodeType.NUMBER]
  rest = tuple(op for op in node.operands if op.node_type != NodeType.NUMBER)
  if len(numbers) == 1 and rest:
    return numbers[0].value, rest
  return None, node.operands


def _residual_text(node: Node) -> str:
  coefficient, rest = split_coefficient(node)
  if coefficient is None:
    return node.to_string()
  if len(rest) == 1:
    return rest[0].to_string()
  return MulNode(rest).to_string()


def add_term_key(node: Node) -> tuple:
  if node.node_type == NodeType.NUMBER:
    return (1, 0.0, "", node.to_string())
  return (0, -_sortable_degree(node), _residual_text(node), node.to_string())


def mul_factor_key(node: Node) -> tuple:
  if node.node_type == NodeType.NUMBER:
    return (0, "", node.to_string())
  base = node.base if node.node_type == NodeType.POW else node
  return (1, base.to_string(), node.to_string())


# Rendering

def precedence(node: Node) -> int:
  """Binding strength of the node's top operator as it is printed"""
  if node.node_type == NodeType.NUMBER and node.value < 0:
    return NEGATION_PRECEDENCE
  if node.node_type == NodeType.MUL:
    coefficient, _ = split_coefficient(node)
    if coefficient is not None and coefficient < 0:
      return NEGATION_PRECEDENCE
  return PRECEDENCE[node.node_type]


def _wrap(node: Node, parenthesize: bool) -> str:
  text = node.to_string()
  return f"({text})" if parenthesize else text


def _is_short_variable(node: Node) -> bool:
  return node.node_type == NodeType.VARIABLE and len(node.name) == 1


def _starts_with_letter_power(node: Node) -> bool:
  return node.node_type == NodeType.POW and _is_short_variable(node.base)


def _render_factors(factors: List[Node]) -> str:
  pieces = []
  previous = None
  for factor in factors:
    text = _wrap(factor, precedence(factor) < PRECEDENCE[NodeType.MUL])
    if previous is not None:
      juxtapose = (_is_short_variable(previous) and
                   (_is_short_variable(factor) or _starts_with_letter_power(factor)))
      pieces.append("" if juxtapose else "*")
    pieces.append(text)
    previous = factor
  return "".join(pieces)


def _render_scaled(coefficient: float, factors: List[Node]) -> str:
  body = _render_factors(factors)
  if coefficient == 1:
    return body
  if coefficient == -1:
    return f"-{body}"
  first = factors[0]
  text = format_number(coefficient)
  # 1e-05x would read as a sum
  juxtapose = math.isfinite(coefficient) and "e" not in text and (
    first.node_type == NodeType.VARIABLE or
    (first.node_type == NodeType.POW and first.base.node_type == NodeType.VARIABLE) or
    precedence(first) < PRECEDENCE[NodeType.MUL])
  return text + ("" if juxtapose else "*") + body


def _render_mul(node: MulNode) -> str:
  if not node.operands:
    return "1"
  factors = sorted(node.operands, key=mul_factor_key)
  coefficient, _ = split_coefficient(node)
  if coefficient is not None:
    return _render_scaled(coefficient, factors[1:])
  return _render_factors(factors)


def _signed_term(node: Node) -> Tuple[bool, str]:
  """Sign and magnitude text of an Add operand"""
  if node.node_type == NodeType.NUMBER and node.value < 0:
    return True, format_number(-node.value)
  if node.node_type == NodeType.MUL:
    coefficient, _ = split_coefficient(node)
    if coefficient is not None and coefficient < 0:
      factors = sorted(node.operands, key=mul_factor_key)[1:]
      return True, _render_scaled(-coefficient, factors)
  return False, node.to_string()


def _render_add(node) -> str:
  if not node.operands:
    return "0"
  pieces = []
  for i, term in enumerate(sorted(node.operands, key=add_term_key)):
    negative, text = _signed_term(term)
    if i == 0:
      pieces.append(f"-{text}" if negative else text)
      continue
    if text.startswith("-"):
      text = f"({text})"
    pieces.append(f" - {text}" if negative else f" + {text}")
  return "".join(pieces)


def _render_sub(node) -> str:
  level = PRECEDENCE[NodeType.SUB]
  left = _wrap(node.left, precedence(node.left) < level)
  right = _wrap(node.right, precedence(node.right) <= level)
  return f"{left} - {right}"


def _render_div(node) -> str:
  level = PRECEDENCE[NodeType.DIV]
  left = _wrap(node.left, precedence(node.left) < level)
  right = _wrap(node.right, precedence(node.right) <= level)
  return f"{left}/{right}"


def _render_pow(node) -> str:
  level = PRECEDENCE[NodeType.POW]
  base = _wrap(node.base, precedence(node.base) <= level)
  exponent = _wrap(node.exponent, precedence(node.exponent) <= level)
  return f"{base}^{exponent}"


_RENDERERS = {
  NodeType.NUMBER: lambda node: format_number(node.value),
  NodeType.VARIABLE: lambda node: node.name,
  NodeType.ADD: _render_add,
  NodeType.SUB: _render_sub,
  NodeType.MUL: _render_mul,
  NodeType.DIV: _render_div,
  NodeType.POW: _render_pow,
}
check_exhaustive(_RENDERERS, "to_string")


def to_string(node: Node) -> str:
  return _RENDERERS[node.node_type](node)
