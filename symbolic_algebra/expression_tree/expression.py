import numpy as np
import sympy as sp
from typing import List, Optional
from .core.node import Node
from .core.operators import VARIABLE_MAP
from .utils.tree_utils import calculate_tree_depth, get_variables
from .utils.validator import ExpressionValidator


class Expression:
  """Expression class holding an immutable tree with a cached postfix string"""

  __slots__ = ('root', '_string_cache')

  def __init__(self, root: Node):
    if not isinstance(root, Node):
      raise TypeError(f"Expression root must be a Node, got {type(root).__name__}")
    self.root = root
    self._string_cache: Optional[str] = None

  def evaluate(self, x=0.0, y=0.0, z=0.0):
    return self.root.evaluate(x, y, z)

  def evaluate_batch(self, X: np.ndarray) -> np.ndarray:
    """Evaluate on every row of an (n_samples, 3) matrix of (x, y, z) bindings."""
    X = np.asarray(X, dtype=np.float64)
    if X.ndim != 2 or X.shape[1] != len(VARIABLE_MAP):
      raise ValueError(f"Expected an (n_samples, {len(VARIABLE_MAP)}) matrix, got shape {X.shape}")
    with np.errstate(all='ignore'):
      return self.root.evaluate_batch(np.ascontiguousarray(X))

  def diff(self, variable: str) -> 'Expression':
    return Expression(self.root.differentiate(variable))

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def prefix(self) -> str:
    return self.root.prefix()

  def postfix(self) -> str:
    return self.root.postfix()

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def depth(self) -> int:
    return calculate_tree_depth(self.root)

  def variables(self) -> List[str]:
    return get_variables(self.root)

  def is_valid(self, X: Optional[np.ndarray] = None) -> bool:
    return ExpressionValidator.is_valid_expression(self.root, X)

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.prefix()!r})"

  def __hash__(self) -> int:
    return hash(self.root)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return self.root == other.root

  @classmethod
  def from_prefix(cls, text: str) -> 'Expression':
    from ..parsing.parser import parse_prefix
    return cls(parse_prefix(text))

  @classmethod
  def from_postfix(cls, text: str) -> 'Expression':
    from ..parsing.parser import parse_postfix
    return cls(parse_postfix(text))

  @classmethod
  def from_rpn(cls, text: str) -> 'Expression':
    from ..parsing.parser import parse_rpn
    return cls(parse_rpn(text))
