from functools import reduce
from typing import Dict, Iterable, List, Sequence, Tuple

from ..core.node import Node, ConstantNode, AddNode, SubNode, MulNode, DivNode, PowNode
from ..core.operators import (
  NodeType, MAX_SIMPLIFY_PASSES, check_exhaustive,
  add_values, sub_values, mul_values, div_values, pow_values
)
from .display import add_term_key, mul_factor_key, split_coefficient
from ...logging_system import log_debug, log_warning


def _is_number(node: Node, value: float = None) -> bool:
  if node.node_type != NodeType.NUMBER:
    return False
  return value is None or node.value == value


def _sum_values(values: Iterable[float]) -> float:
  """Sum in ascending order so the result does not depend on operand order"""
  return reduce(add_values, sorted(values), 0.0)


def _product_values(values: Iterable[float]) -> float:
  return reduce(mul_values, sorted(values), 1.0)


class ExpressionSimplifier:
  """Constant folding and like-term / like-factor collection"""

  @staticmethod
  def simplify_expression(node: Node) -> Node:
    """Repeat the bottom-up pass until the tree is a fixpoint"""
    current = node
    for pass_index in range(MAX_SIMPLIFY_PASSES):
      result = ExpressionSimplifier.simplify_once(current)
      if result == current:
        return result
      if pass_index > 0:
        log_debug(f"simplify pass {pass_index + 1} rewrote {current} -> {result}")
      current = result
    log_warning(f"simplify stopped after {MAX_SIMPLIFY_PASSES} passes without reaching a fixpoint: {current}")
    return current

  @staticmethod
  def simplify_once(node: Node) -> Node:
    return _RULES[node.node_type](node)

  @staticmethod
  def _flatten(operands: Sequence[Node], node_type: NodeType) -> List[Node]:
    flat = []
    for operand in operands:
      if operand.node_type == node_type:
        flat.extend(ExpressionSimplifier._flatten(operand.operands, node_type))
      else:
        flat.append(operand)
    return flat

  @staticmethod
  def _as_term(node: Node) -> Tuple[float, Node]:
    """Split a simplified Add operand into (coefficient, residual)"""
    coefficient, rest = split_coefficient(node)
    if coefficient is None:
      return 1.0, node
    residual = rest[0] if len(rest) == 1 else MulNode(rest)
    return coefficient, residual

  @staticmethod
  def combine_sum(operands: Sequence[Node]) -> Node:
    """Fold and collect already simplified summands"""
    constants: List[float] = []
    terms: Dict[Node, List[float]] = {}
    for operand in ExpressionSimplifier._flatten(operands, NodeType.ADD):
      if _is_number(operand):
        constants.append(operand.value)
        continue
      coefficient, residual = ExpressionSimplifier._as_term(operand)
      terms.setdefault(residual, []).append(coefficient)

    constant = _sum_values(constants)
    result = []
    for residual, coefficients in terms.items():
      coefficient = _sum_values(coefficients)
      if coefficient == 0:
        continue
      if coefficient == 1:
        result.append(residual)
        continue
      factors = residual.operands if residual.node_type == NodeType.MUL else (residual,)
      result.append(ExpressionSimplifier.combine_product([ConstantNode(coefficient), *factors]))

    if constant != 0 or not result:
      result.append(ConstantNode(constant))
    if len(result) == 1:
      return result[0]
    return AddNode(sorted(result, key=add_term_key))

  @staticmethod
  def combine_product(operands: Sequence[Node]) -> Node:
    """Fold and collect already simplified factors"""
    constants: List[float] = []
    powers: Dict[Node, List[Node]] = {}
    for operand in ExpressionSimplifier._flatten(operands, NodeType.MUL):
      if _is_number(operand):
        constants.append(operand.value)
        continue
      if operand.node_type == NodeType.POW:
        base, exponent = operand.base, operand.exponent
      else:
        base, exponent = operand, None
      powers.setdefault(base, []).append(exponent)

    # a zero keeps its sign, so (0*-2)^-1 still folds to -inf
    constant = _product_values(constants)
    if constant == 0:
      return ConstantNode(constant)

    factors = []
    for base, exponents in powers.items():
      if exponents == [None]:
        factors.append(base)
        continue
      exponent = ExpressionSimplifier.combine_sum(
        [ConstantNode(1.0) if e is None else e for e in exponents])
      factor = ExpressionSimplifier.combine_power(base, exponent)
      if _is_number(factor):
        constants.append(factor.value)
      elif factor.node_type == NodeType.MUL:
        for inner in factor.operands:
          if _is_number(inner):
            constants.append(inner.value)
          else:
            factors.append(inner)
      else:
        factors.append(factor)

    constant = _product_values(constants)
    if constant == 0 or not factors:
      return ConstantNode(constant)
    factors.sort(key=mul_factor_key)
    if constant != 1:
      factors.insert(0, ConstantNode(constant))
    if len(factors) == 1:
      return factors[0]
    return MulNode(factors)

  @staticmethod
  def combine_power(base: Node, exponent: Node) -> Node:
    if _is_number(base) and _is_number(exponent):
      return ConstantNode(pow_values(base.value, exponent.value))
    if _is_number(exponent, 0):
      # 0^0 is 1 by convention
      return ConstantNode(1.0)
    if _is_number(exponent, 1):
      return base
    if _is_number(base, 1):
      return ConstantNode(1.0)
    return PowNode(base, exponent)

  @staticmethod
  def _simplify_sub(node: SubNode) -> Node:
    left = ExpressionSimplifier.simplify_once(node.left)
    right = ExpressionSimplifier.simplify_once(node.right)
    if _is_number(left) and _is_number(right):
      return ConstantNode(sub_values(left.value, right.value))
    if _is_number(right, 0):
      return left
    return SubNode(left, right)

  @staticmethod
  def _simplify_div(node: DivNode) -> Node:
    left = ExpressionSimplifier.simplify_once(node.left)
    right = ExpressionSimplifier.simplify_once(node.right)
    # x/0 stays literal; evaluate reports it
    if _is_number(right, 0):
      return DivNode(left, right)
    if _is_number(left) and _is_number(right):
      return ConstantNode(div_values(left.value, right.value))
    if _is_number(right, 1):
      return left
    return DivNode(left, right)

  @staticmethod
  def _simplify_pow(node: PowNode) -> Node:
    return ExpressionSimplifier.combine_power(
      ExpressionSimplifier.simplify_once(node.base),
      ExpressionSimplifier.simplify_once(node.exponent))


_RULES = {
  NodeType.NUMBER: lambda node: node,
  NodeType.VARIABLE: lambda node: node,
  NodeType.ADD: lambda node: ExpressionSimplifier.combine_sum(
    [ExpressionSimplifier.simplify_once(op) for op in node.operands]),
  NodeType.SUB: ExpressionSimplifier._simplify_sub,
  NodeType.MUL: lambda node: ExpressionSimplifier.combine_product(
    [ExpressionSimplifier.simplify_once(op) for op in node.operands]),
  NodeType.DIV: ExpressionSimplifier._simplify_div,
  NodeType.POW: ExpressionSimplifier._simplify_pow,
}
check_exhaustive(_RULES, "simplify")


def simplify(node: Node) -> Node:
  return ExpressionSimplifier.simplify_expression(node)
