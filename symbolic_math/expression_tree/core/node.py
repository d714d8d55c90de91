import math
import numbers
import numpy as np
from abc import ABC, abstractmethod
from collections import Counter
from typing import Iterable, Mapping, Optional, Tuple, Union

from .operators import NodeType
from .symbol import Symbol


def _same_multiset(left: Tuple['Node', ...], right: Tuple['Node', ...]) -> bool:
  """Order-independent operand comparison for Add/Mul"""
  if len(left) != len(right):
    return False
  remaining = list(right)
  for item in left:
    for i, candidate in enumerate(remaining):
      if item == candidate:
        del remaining[i]
        break
    else:
      return False
  return True


def _multiset_hash(node_type: NodeType, operands: Tuple['Node', ...]) -> int:
  return hash((node_type, frozenset(Counter(hash(op) for op in operands).items())))


class Node(ABC):
  """Immutable expression tree node.

  The set of subclasses is closed: one per NodeType member. Transformations
  dispatch on ``node_type`` and check their tables cover every member.
  """

  __slots__ = ('_hash_cache', '_size_cache', '_string_cache')

  node_type: NodeType

  def __init__(self):
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None
    self._string_cache: Optional[str] = None

  @abstractmethod
  def children(self) -> Tuple['Node', ...]:
    pass

  @abstractmethod
  def copy(self) -> 'Node':
    pass

  @abstractmethod
  def _compute_hash(self) -> int:
    pass

  @abstractmethod
  def _structurally_equal(self, other: 'Node') -> bool:
    pass

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      self._size_cache = 1 + sum(child.size() for child in self.children())
    return self._size_cache

  def __hash__(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = self._compute_hash()
    return self._hash_cache

  def __eq__(self, other) -> bool:
    if not isinstance(other, Node):
      return NotImplemented
    if self is other:
      return True
    if self.node_type != other.node_type or hash(self) != hash(other):
      return False
    return self._structurally_equal(other)

  # Transformations

  def simplify(self) -> 'Node':
    from ..utils.simplifier import simplify
    return simplify(self)

  def expand(self) -> 'Node':
    from ..utils.expander import expand
    return expand(self)

  def evaluate(self, bindings: Mapping[Union[Symbol, str], float]) -> float:
    from ..utils.evaluator import evaluate
    return evaluate(self, bindings)

  def evaluate_batch(self, bindings: Mapping[Union[Symbol, str], np.ndarray]) -> np.ndarray:
    from ..utils.evaluator import evaluate_batch
    return evaluate_batch(self, bindings)

  def to_string(self) -> str:
    if self._string_cache is None:
      from ..utils.display import to_string
      self._string_cache = to_string(self)
    return self._string_cache

  def to_sympy(self):
    from ..utils.sympy_utils import to_sympy
    return to_sympy(self)

  def __str__(self) -> str:
    return self.to_string()

  # Operator sugar, 1:1 onto the constructors

  def pow(self, exponent) -> 'PowNode':
    return PowNode(self, _as_node(exponent))

  def __add__(self, other):
    other = _coerce(other)
    return NotImplemented if other is None else add(self, other)

  def __radd__(self, other):
    other = _coerce(other)
    return NotImplemented if other is None else add(other, self)

  def __sub__(self, other):
    other = _coerce(other)
    return NotImplemented if other is None else sub(self, other)

  def __rsub__(self, other):
    other = _coerce(other)
    return NotImplemented if other is None else sub(other, self)

  def __mul__(self, other):
    other = _coerce(other)
    return NotImplemented if other is None else mul(self, other)

  def __rmul__(self, other):
    other = _coerce(other)
    return NotImplemented if other is None else mul(other, self)

  def __truediv__(self, other):
    other = _coerce(other)
    return NotImplemented if other is None else div(self, other)

  def __rtruediv__(self, other):
    other = _coerce(other)
    return NotImplemented if other is None else div(other, self)

  def __pow__(self, other):
    other = _coerce(other)
    return NotImplemented if other is None else PowNode(self, other)

  def __rpow__(self, other):
    other = _coerce(other)
    return NotImplemented if other is None else PowNode(other, self)

  def __neg__(self):
    return mul(ConstantNode(-1.0), self)


class ConstantNode(Node):
  __slots__ = ('value',)

  node_type = NodeType.NUMBER

  def __init__(self, value: float):
    super().__init__()
    self.value = float(value)

  def children(self) -> Tuple[Node, ...]:
    return ()

  def copy(self) -> 'ConstantNode':
    return ConstantNode(self.value)

  def _compute_hash(self) -> int:
    # nan hashes by identity in Python, but all nan constants compare equal here
    if math.isnan(self.value):
      return hash((NodeType.NUMBER, 'nan'))
    return hash((NodeType.NUMBER, self.value))

  def _structurally_equal(self, other: 'ConstantNode') -> bool:
    if math.isnan(self.value) and math.isnan(other.value):
      return True
    return self.value == other.value

  def __repr__(self) -> str:
    return f"ConstantNode({self.value!r})"


class VariableNode(Node):
  __slots__ = ('symbol',)

  node_type = NodeType.VARIABLE

  def __init__(self, symbol: Symbol):
    super().__init__()
    self.symbol = symbol

  @property
  def name(self) -> str:
    return self.symbol.name

  def children(self) -> Tuple[Node, ...]:
    return ()

  def copy(self) -> 'VariableNode':
    return VariableNode(self.symbol)

  def _compute_hash(self) -> int:
    return hash((NodeType.VARIABLE, self.symbol))

  def _structurally_equal(self, other: 'VariableNode') -> bool:
    return self.symbol == other.symbol

  def __repr__(self) -> str:
    return f"VariableNode({self.symbol.name!r})"


class _NaryOpNode(Node):
  """Commutative, associative operator stored as an operand sequence"""

  __slots__ = ('operands',)

  def __init__(self, operands: Iterable[Node]):
    super().__init__()
    self.operands: Tuple[Node, ...] = tuple(operands)

  def children(self) -> Tuple[Node, ...]:
    return self.operands

  def copy(self):
    return type(self)(op.copy() for op in self.operands)

  def _compute_hash(self) -> int:
    return _multiset_hash(self.node_type, self.operands)

  def _structurally_equal(self, other: '_NaryOpNode') -> bool:
    return _same_multiset(self.operands, other.operands)

  def __repr__(self) -> str:
    return f"{type(self).__name__}({', '.join(repr(op) for op in self.operands)})"


class _BinaryOpNode(Node):
  __slots__ = ('left', 'right')

  def __init__(self, left: Node, right: Node):
    super().__init__()
    self.left = left
    self.right = right

  def children(self) -> Tuple[Node, ...]:
    return (self.left, self.right)

  def copy(self):
    return type(self)(self.left.copy(), self.right.copy())

  def _compute_hash(self) -> int:
    return hash((self.node_type, hash(self.left), hash(self.right)))

  def _structurally_equal(self, other: '_BinaryOpNode') -> bool:
    return self.left == other.left and self.right == other.right

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.left!r}, {self.right!r})"


class AddNode(_NaryOpNode):
  __slots__ = ()
  node_type = NodeType.ADD


class MulNode(_NaryOpNode):
  __slots__ = ()
  node_type = NodeType.MUL


class SubNode(_BinaryOpNode):
  __slots__ = ()
  node_type = NodeType.SUB


class DivNode(_BinaryOpNode):
  __slots__ = ()
  node_type = NodeType.DIV


class PowNode(_BinaryOpNode):
  __slots__ = ()
  node_type = NodeType.POW

  @property
  def base(self) -> Node:
    return self.left

  @property
  def exponent(self) -> Node:
    return self.right


def _coerce(value) -> Optional[Node]:
  if isinstance(value, Node):
    return value
  if isinstance(value, numbers.Real) and not isinstance(value, bool):
    return ConstantNode(float(value))
  return None


def _as_node(value) -> Node:
  node = _coerce(value)
  if node is None:
    raise TypeError(f"Cannot build an expression from {type(value).__name__}")
  return node


def _flatten_one_level(node_class, a: Node, b: Node) -> Tuple[Node, ...]:
  operands = []
  for operand in (a, b):
    if isinstance(operand, node_class):
      operands.extend(operand.operands)
    else:
      operands.append(operand)
  return tuple(operands)


# Constructors

def number(value: float) -> ConstantNode:
  return ConstantNode(value)


def var(symbol: Union[Symbol, str]) -> VariableNode:
  if isinstance(symbol, str):
    symbol = Symbol(symbol)
  if not isinstance(symbol, Symbol):
    raise TypeError(f"var() expects a Symbol or a name, got {type(symbol).__name__}")
  return VariableNode(symbol)


def add(a, b) -> AddNode:
  return AddNode(_flatten_one_level(AddNode, _as_node(a), _as_node(b)))


def sub(a, b) -> SubNode:
  return SubNode(_as_node(a), _as_node(b))


def mul(a, b) -> MulNode:
  return MulNode(_flatten_one_level(MulNode, _as_node(a), _as_node(b)))


def div(a, b) -> DivNode:
  return DivNode(_as_node(a), _as_node(b))


def pow(a, b) -> PowNode:
  return PowNode(_as_node(a), _as_node(b))
