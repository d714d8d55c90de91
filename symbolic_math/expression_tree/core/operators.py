import math
import numpy as np
import numba
from enum import IntEnum

# simplify repeats its bottom-up pass until the tree stops changing
MAX_SIMPLIFY_PASSES = 8

# Largest literal exponent that expand multiplies out
MAX_EXPANSION_POWER = 32


class NodeType(IntEnum):
  NUMBER = 0
  VARIABLE = 1
  ADD = 2
  SUB = 3
  MUL = 4
  DIV = 5
  POW = 6


class OpType(IntEnum):
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  POW = 4


BINARY_OP_MAP = {
  NodeType.ADD: OpType.ADD,
  NodeType.SUB: OpType.SUB,
  NodeType.MUL: OpType.MUL,
  NodeType.DIV: OpType.DIV,
  NodeType.POW: OpType.POW,
}

# Binding strength used by the renderer; atoms never need parentheses
PRECEDENCE = {
  NodeType.ADD: 1,
  NodeType.SUB: 1,
  NodeType.MUL: 2,
  NodeType.DIV: 2,
  NodeType.POW: 3,
  NodeType.NUMBER: 4,
  NodeType.VARIABLE: 4,
}
NEGATION_PRECEDENCE = 1


def check_exhaustive(table: dict, consumer: str):
  """Fail at import time if a dispatch table misses a node type"""
  missing = [t.name for t in NodeType if t not in table]
  if missing:
    raise NotImplementedError(f"{consumer} does not handle node types: {', '.join(missing)}")


def add_values(a: float, b: float) -> float:
  with np.errstate(all='ignore'):
    return float(np.float64(a) + np.float64(b))


def mul_values(a: float, b: float) -> float:
  with np.errstate(all='ignore'):
    return float(np.float64(a) * np.float64(b))


def sub_values(a: float, b: float) -> float:
  with np.errstate(all='ignore'):
    return float(np.float64(a) - np.float64(b))


def div_values(a: float, b: float) -> float:
  """Quotient of two floats; callers must rule out a zero denominator"""
  with np.errstate(all='ignore'):
    return float(np.float64(a) / np.float64(b))


def pow_values(a: float, b: float) -> float:
  """Real power: domain errors give nan, overflow gives inf"""
  with np.errstate(all='ignore'):
    return float(np.power(np.float64(a), np.float64(b)))


def is_integer_value(value: float) -> bool:
  return math.isfinite(value) and float(value).is_integer()


@numba.njit(cache=True, inline='always')
def evaluate_constant(n_samples, value):
  return np.full(n_samples, value, dtype=np.float64)


@numba.njit(cache=True)
def evaluate_binary_op_fast(left_val, right_val, op_type):
  if op_type == OpType.ADD:
    return left_val + right_val
  elif op_type == OpType.SUB:
    return left_val - right_val
  elif op_type == OpType.MUL:
    return left_val * right_val
  elif op_type == OpType.DIV:
    # zero denominators are rejected before the kernel is called
    return left_val / right_val
  elif op_type == OpType.POW:
    return np.power(left_val, right_val)
  return np.zeros_like(left_val)
