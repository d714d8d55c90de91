from itertools import product
from typing import List

from ..core.node import Node, ConstantNode, AddNode, SubNode, MulNode, DivNode, PowNode
from ..core.operators import (
  NodeType, MAX_EXPANSION_POWER, MAX_SIMPLIFY_PASSES, check_exhaustive, is_integer_value
)
from .simplifier import simplify
from ...logging_system import log_debug, log_warning


def _summands(node: Node) -> List[Node]:
  """Operands a factor contributes to the distribution.

  A Sub factor a - b distributes as a + (-1)b.
  """
  if node.node_type == NodeType.ADD:
    return list(node.operands)
  if node.node_type == NodeType.SUB:
    return _summands(node.left) + [MulNode((ConstantNode(-1.0), node.right))]
  return [node]


def _distribute(factors: List[Node]) -> Node:
  """Multiply out a list of expanded factors"""
  flat = []
  for factor in factors:
    if factor.node_type == NodeType.MUL:
      flat.extend(factor.operands)
    else:
      flat.append(factor)

  if not any(f.node_type in (NodeType.ADD, NodeType.SUB) for f in flat):
    return MulNode(flat)

  terms = []
  for combination in product(*(_summands(f) for f in flat)):
    terms.append(_distribute(list(combination)))
  return AddNode(terms)


def _multiply_out(factors: List[Node]) -> Node:
  """Distribute one factor at a time, collecting like terms after each step.

  Keeps (a + b)^n at n + 1 terms between steps instead of building all 2^n
  products first.
  """
  if not factors:
    return MulNode(())
  result = factors[0]
  for factor in factors[1:]:
    result = simplify(_distribute([result, factor]))
  return result


def _expand_add(node: AddNode) -> Node:
  operands = []
  for operand in node.operands:
    expanded = _expand(operand)
    if expanded.node_type == NodeType.ADD:
      operands.extend(expanded.operands)
    else:
      operands.append(expanded)
  return AddNode(operands)


def _expand_pow(node: PowNode) -> Node:
  base = _expand(node.base)
  exponent = _expand(node.exponent)
  if base.node_type not in (NodeType.ADD, NodeType.SUB) or exponent.node_type != NodeType.NUMBER:
    return PowNode(base, exponent)
  n = exponent.value
  if not is_integer_value(n) or n < 0:
    return PowNode(base, exponent)
  if n > MAX_EXPANSION_POWER:
    log_debug(f"expand left {base}^{exponent}: exponent above {MAX_EXPANSION_POWER}")
    return PowNode(base, exponent)
  if n == 0:
    return ConstantNode(1.0)
  return _multiply_out([base] * int(n))


_EXPANDERS = {
  NodeType.NUMBER: lambda node: node,
  NodeType.VARIABLE: lambda node: node,
  NodeType.ADD: _expand_add,
  NodeType.SUB: lambda node: SubNode(_expand(node.left), _expand(node.right)),
  NodeType.MUL: lambda node: _multiply_out([_expand(op) for op in node.operands]),
  NodeType.DIV: lambda node: DivNode(_expand(node.left), _expand(node.right)),
  NodeType.POW: _expand_pow,
}
check_exhaustive(_EXPANDERS, "expand")


def _expand(node: Node) -> Node:
  return _EXPANDERS[node.node_type](node)


def expand(node: Node) -> Node:
  """Distribute products over sums, then simplify the result.

  Literal non-negative integer powers of a sum are multiplied out first;
  symbolic or fractional exponents are left alone. Division is not
  distributed.

  Simplifying can expose new products of sums, e.g. 2*((x + y)/1), so the
  two steps repeat until the result stops changing.
  """
  current = node
  for _ in range(MAX_SIMPLIFY_PASSES):
    result = simplify(_expand(current))
    if result == current:
      return result
    current = result
  log_warning(f"expand stopped after {MAX_SIMPLIFY_PASSES} passes without reaching a fixpoint: {current}")
  return current
