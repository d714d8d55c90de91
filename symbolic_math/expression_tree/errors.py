"""Evaluation failures. Construction, simplify and expand never raise these."""


class EvalError(Exception):
  """Base class for failures reported by evaluate"""


class UnboundSymbolError(EvalError, KeyError):
  """A variable has no value in the bindings"""

  def __init__(self, symbol):
    self.symbol = symbol
    super().__init__(f"unbound symbol: {symbol.name}")

  def __str__(self) -> str:
    return f"unbound symbol: {self.symbol.name}"


class DivisionByZeroError(EvalError, ZeroDivisionError):
  """A denominator evaluated to exactly zero"""

  def __init__(self, node=None):
    self.node = node
    if node is None:
      super().__init__("division by zero")
    else:
      super().__init__(f"division by zero in {node}")
