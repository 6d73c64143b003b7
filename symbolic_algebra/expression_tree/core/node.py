import math

import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Iterable, Tuple
from .operators import (
  NodeType, OpType, OPERATOR_ARITY, OPERATOR_SYMBOLS, VARIABLE_MAP, SUMSQ_OPS, DISTANCE_OPS,
  accepts_operand_count, evaluate_variable, evaluate_constant, evaluate_operator
)


def bindings_matrix(x, y, z) -> Tuple[np.ndarray, Tuple[int, ...]]:
  """Broadcast (x, y, z) bindings into an (n_samples, 3) float64 matrix.

  Returns the matrix together with the broadcast shape so that results can be
  folded back into the caller's shape.
  """
  xs, ys, zs = np.broadcast_arrays(
    np.asarray(x, dtype=np.float64),
    np.asarray(y, dtype=np.float64),
    np.asarray(z, dtype=np.float64)
  )
  X = np.column_stack([xs.ravel(), ys.ravel(), zs.ravel()])
  return np.ascontiguousarray(X), xs.shape


def format_constant(value: float) -> str:
  if value == 0:
    return "-0" if math.copysign(1.0, value) < 0 else "0"
  # beyond 1e16 the exponent form is shorter than the digits
  if value.is_integer() and abs(value) < 1e16:
    return str(int(value))
  return repr(value)


class Node(ABC):
  """Immutable expression tree node with cached hash and size"""

  __slots__ = ('_hash_cache', '_size_cache')

  def __init__(self):
    object.__setattr__(self, '_hash_cache', None)
    object.__setattr__(self, '_size_cache', None)

  def __setattr__(self, name, value):
    raise AttributeError(f"{type(self).__name__} is immutable")

  def __delattr__(self, name):
    raise AttributeError(f"{type(self).__name__} is immutable")

  @property
  def children(self) -> Tuple['Node', ...]:
    return ()

  def evaluate(self, x=0.0, y=0.0, z=0.0):
    """Evaluate with scalar or broadcastable array bindings for x, y and z."""
    X, shape = bindings_matrix(x, y, z)
    with np.errstate(all='ignore'):
      result = self.evaluate_batch(X).reshape(shape)
    if result.ndim == 0:
      return float(result)
    return result

  @abstractmethod
  def evaluate_batch(self, X: np.ndarray) -> np.ndarray:
    pass

  def differentiate(self, variable: str) -> 'Node':
    from .differentiation import differentiate
    return differentiate(self, variable)

  diff = differentiate

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def prefix(self) -> str:
    pass

  @abstractmethod
  def postfix(self) -> str:
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      object.__setattr__(self, '_size_cache', 1 + sum(child.size() for child in self.children))
    return self._size_cache

  @abstractmethod
  def _signature(self) -> tuple:
    pass

  def __hash__(self) -> int:
    if self._hash_cache is None:
      object.__setattr__(self, '_hash_cache', hash(self._signature()))
    return self._hash_cache

  def __eq__(self, other) -> bool:
    if not isinstance(other, Node):
      return NotImplemented
    return type(self) is type(other) and self._signature() == other._signature()

  def __str__(self) -> str:
    return self.to_string()


class VariableNode(Node):
  __slots__ = ('name', 'index')

  def __init__(self, name: str):
    if name not in VARIABLE_MAP:
      raise ValueError(f"Unknown variable '{name}', expected one of {', '.join(VARIABLE_MAP)}")
    super().__init__()
    object.__setattr__(self, 'name', name)
    object.__setattr__(self, 'index', VARIABLE_MAP[name])

  def evaluate_batch(self, X: np.ndarray) -> np.ndarray:
    return evaluate_variable(X, self.index)

  def to_string(self) -> str:
    return self.name

  def prefix(self) -> str:
    return self.name

  def postfix(self) -> str:
    return self.name

  def to_sympy(self) -> sp.Expr:
    return sp.Symbol(self.name)

  def _signature(self) -> tuple:
    return (NodeType.VARIABLE, self.name)

  def __repr__(self) -> str:
    return f"VariableNode({self.name!r})"


class ConstantNode(Node):
  __slots__ = ('value',)

  def __init__(self, value: float):
    super().__init__()
    object.__setattr__(self, 'value', float(value))

  def evaluate_batch(self, X: np.ndarray) -> np.ndarray:
    return evaluate_constant(X.shape[0], self.value)

  def to_string(self) -> str:
    return format_constant(self.value)

  def prefix(self) -> str:
    return self.to_string()

  def postfix(self) -> str:
    return self.to_string()

  def to_sympy(self) -> sp.Expr:
    if self.value.is_integer():
      return sp.Integer(int(self.value))
    return sp.Float(self.value)

  def _signature(self) -> tuple:
    # repr keeps -0.0 apart from 0.0
    return (NodeType.CONSTANT, repr(self.value))

  def __repr__(self) -> str:
    return f"ConstantNode({self.value!r})"


class OperatorNode(Node):
  __slots__ = ('op_type', '_children')

  def __init__(self, op_type: OpType, children: Iterable[Node] = ()):
    op_type = OpType(op_type)
    children = tuple(children)
    for child in children:
      if not isinstance(child, Node):
        raise TypeError(f"Operands must be nodes, got {type(child).__name__}")
    if not accepts_operand_count(op_type, len(children)):
      raise ValueError(
        f"'{OPERATOR_SYMBOLS[op_type]}' takes {OPERATOR_ARITY[op_type]} operands, got {len(children)}"
      )
    super().__init__()
    object.__setattr__(self, 'op_type', op_type)
    object.__setattr__(self, '_children', children)

  @property
  def children(self) -> Tuple[Node, ...]:
    return self._children

  @property
  def symbol(self) -> str:
    return OPERATOR_SYMBOLS[self.op_type]

  def evaluate_batch(self, X: np.ndarray) -> np.ndarray:
    operand_vals = [child.evaluate_batch(X) for child in self._children]
    return evaluate_operator(self.op_type, operand_vals, X.shape[0])

  def to_string(self) -> str:
    return " ".join([child.to_string() for child in self._children] + [self.symbol])

  def prefix(self) -> str:
    return "(" + " ".join([self.symbol] + [child.prefix() for child in self._children]) + ")"

  def postfix(self) -> str:
    return "(" + " ".join([child.postfix() for child in self._children] + [self.symbol]) + ")"

  def to_sympy(self) -> sp.Expr:
    args = [child.to_sympy() for child in self._children]
    op_type = self.op_type
    if op_type == OpType.ADD:
      return sp.Add(args[0], args[1])
    elif op_type == OpType.SUB:
      return sp.Add(args[0], sp.Mul(-1, args[1]))
    elif op_type == OpType.MUL:
      return sp.Mul(args[0], args[1])
    elif op_type == OpType.DIV:
      return sp.Mul(args[0], sp.Pow(args[1], -1))
    elif op_type == OpType.NEG:
      return -args[0]
    elif op_type == OpType.SUMEXP:
      return sp.Add(*[sp.exp(arg) for arg in args])
    elif op_type == OpType.LSE:
      return sp.log(sp.Add(*[sp.exp(arg) for arg in args]))
    elif op_type in SUMSQ_OPS:
      return sp.Add(*[arg**2 for arg in args])
    elif op_type in DISTANCE_OPS:
      return sp.sqrt(sp.Add(*[arg**2 for arg in args]))
    raise ValueError(f"to_sympy reached unexpected operation: {self.symbol}")

  def _signature(self) -> tuple:
    return (NodeType.OPERATOR, self.op_type, self._children)

  def __repr__(self) -> str:
    return f"OperatorNode({self.symbol!r}, {list(self._children)!r})"
