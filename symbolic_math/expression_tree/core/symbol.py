from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Symbol:
  """Named variable. Equality, hashing and ordering go by name."""

  name: str

  def __post_init__(self):
    if not isinstance(self.name, str):
      raise TypeError(f"Symbol name must be a string, got {type(self.name).__name__}")

  def __str__(self) -> str:
    return self.name
