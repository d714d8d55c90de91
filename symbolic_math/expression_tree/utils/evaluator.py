import numpy as np
from functools import reduce
from typing import Dict, Mapping, Union

from ..core.node import Node
from ..core.symbol import Symbol
from ..core.operators import (
  NodeType, OpType, check_exhaustive,
  add_values, sub_values, mul_values, div_values, pow_values,
  evaluate_constant, evaluate_binary_op_fast
)
from ..errors import UnboundSymbolError, DivisionByZeroError
from ...logging_system import log_debug


def _normalize_bindings(bindings: Mapping[Union[Symbol, str], object], convert) -> Dict[Symbol, object]:
  normalized = {}
  for key, value in bindings.items():
    symbol = Symbol(key) if isinstance(key, str) else key
    if not isinstance(symbol, Symbol):
      raise TypeError(f"binding keys must be Symbol or str, got {type(key).__name__}")
    normalized[symbol] = convert(value)
  return normalized


def _lookup(node: Node, env: Dict[Symbol, object]):
  try:
    return env[node.symbol]
  except KeyError:
    raise UnboundSymbolError(node.symbol) from None


# Scalar evaluation

def _scalar_div(node: Node, env: Dict[Symbol, float]) -> float:
  numerator = _evaluate(node.left, env)
  denominator = _evaluate(node.right, env)
  if denominator == 0.0:
    raise DivisionByZeroError(node)
  return div_values(numerator, denominator)


_SCALAR = {
  NodeType.NUMBER: lambda node, env: node.value,
  NodeType.VARIABLE: _lookup,
  NodeType.ADD: lambda node, env: reduce(
    add_values, (_evaluate(op, env) for op in node.operands), 0.0),
  NodeType.SUB: lambda node, env: sub_values(_evaluate(node.left, env), _evaluate(node.right, env)),
  NodeType.MUL: lambda node, env: reduce(
    mul_values, (_evaluate(op, env) for op in node.operands), 1.0),
  NodeType.DIV: _scalar_div,
  NodeType.POW: lambda node, env: pow_values(_evaluate(node.base, env), _evaluate(node.exponent, env)),
}
check_exhaustive(_SCALAR, "evaluate")


def _evaluate(node: Node, env: Dict[Symbol, float]) -> float:
  return _SCALAR[node.node_type](node, env)


def evaluate(node: Node, bindings: Mapping[Union[Symbol, str], float]) -> float:
  """Evaluate ``node`` with the given symbol values.

  Operands are evaluated left to right and the first failure propagates.

  Raises:
      UnboundSymbolError: a variable is missing from ``bindings``.
      DivisionByZeroError: a denominator evaluated to exactly 0.0.

  A negative base with a fractional exponent gives nan, which is returned
  rather than raised.
  """
  return _evaluate(node, _normalize_bindings(bindings, float))


# Batch evaluation

def _batch_binary(op_type: OpType, left: np.ndarray, right: np.ndarray) -> np.ndarray:
  return evaluate_binary_op_fast(left, right, int(op_type))


def _batch_reduce(node: Node, env, n: int, op_type: OpType, identity: float) -> np.ndarray:
  if not node.operands:
    return evaluate_constant(n, identity)
  values = [_evaluate_batch(op, env, n) for op in node.operands]
  return reduce(lambda acc, value: _batch_binary(op_type, acc, value), values)


def _batch_div(node: Node, env, n: int) -> np.ndarray:
  numerator = _evaluate_batch(node.left, env, n)
  denominator = _evaluate_batch(node.right, env, n)
  if np.any(denominator == 0.0):
    raise DivisionByZeroError(node)
  return _batch_binary(OpType.DIV, numerator, denominator)


_BATCH = {
  NodeType.NUMBER: lambda node, env, n: evaluate_constant(n, node.value),
  NodeType.VARIABLE: lambda node, env, n: _lookup(node, env).copy(),
  NodeType.ADD: lambda node, env, n: _batch_reduce(node, env, n, OpType.ADD, 0.0),
  NodeType.SUB: lambda node, env, n: _batch_binary(
    OpType.SUB, _evaluate_batch(node.left, env, n), _evaluate_batch(node.right, env, n)),
  NodeType.MUL: lambda node, env, n: _batch_reduce(node, env, n, OpType.MUL, 1.0),
  NodeType.DIV: _batch_div,
  NodeType.POW: lambda node, env, n: _batch_binary(
    OpType.POW, _evaluate_batch(node.base, env, n), _evaluate_batch(node.exponent, env, n)),
}
check_exhaustive(_BATCH, "evaluate_batch")


def _evaluate_batch(node: Node, env: Dict[Symbol, np.ndarray], n: int) -> np.ndarray:
  return _BATCH[node.node_type](node, env, n)


def evaluate_batch(node: Node, bindings: Mapping[Union[Symbol, str], np.ndarray]) -> np.ndarray:
  """Vectorised evaluate: every binding is an array, broadcast together.

  Same failures as evaluate; a single zero element in any denominator
  raises DivisionByZeroError.
  """
  arrays = _normalize_bindings(bindings, lambda value: np.asarray(value, dtype=np.float64))
  shape = np.broadcast_shapes(*(a.shape for a in arrays.values())) if arrays else ()
  n = int(np.prod(shape, dtype=np.int64))
  env = {
    symbol: np.ascontiguousarray(np.broadcast_to(array, shape)).reshape(n)
    for symbol, array in arrays.items()
  }
  log_debug(f"evaluate_batch on {n} samples, shape {shape}")
  return _evaluate_batch(node, env, n).reshape(shape)
