import numpy as np
import numba
from enum import IntEnum
from typing import Dict, List

class NodeType(IntEnum):
  VARIABLE = 0
  CONSTANT = 1
  OPERATOR = 2

class OpType(IntEnum):
  # Binary ops
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  # Unary ops
  NEG = 4
  # Variadic ops
  SUMEXP = 5
  LSE = 6
  # Fixed n-ary ops
  SUMSQ2 = 7
  SUMSQ3 = 8
  SUMSQ4 = 9
  SUMSQ5 = 10
  DISTANCE2 = 11
  DISTANCE3 = 12
  DISTANCE4 = 13
  DISTANCE5 = 14

# Arity marker for operators accepting any number of operands (including none)
VARIADIC = -1

# Mapping dictionaries
OPERATOR_MAP: Dict[str, OpType] = {
    '+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV,
    'negate': OpType.NEG,
    'sumexp': OpType.SUMEXP, 'lse': OpType.LSE,
    'sumsq2': OpType.SUMSQ2, 'sumsq3': OpType.SUMSQ3,
    'sumsq4': OpType.SUMSQ4, 'sumsq5': OpType.SUMSQ5,
    'distance2': OpType.DISTANCE2, 'distance3': OpType.DISTANCE3,
    'distance4': OpType.DISTANCE4, 'distance5': OpType.DISTANCE5
}

OPERATOR_SYMBOLS: Dict[OpType, str] = {op_type: token for token, op_type in OPERATOR_MAP.items()}

OPERATOR_ARITY: Dict[OpType, int] = {
    OpType.ADD: 2, OpType.SUB: 2, OpType.MUL: 2, OpType.DIV: 2,
    OpType.NEG: 1,
    OpType.SUMEXP: VARIADIC, OpType.LSE: VARIADIC,
    OpType.SUMSQ2: 2, OpType.SUMSQ3: 3, OpType.SUMSQ4: 4, OpType.SUMSQ5: 5,
    OpType.DISTANCE2: 2, OpType.DISTANCE3: 3, OpType.DISTANCE4: 4, OpType.DISTANCE5: 5
}

BINARY_OPS = frozenset({OpType.ADD, OpType.SUB, OpType.MUL, OpType.DIV})
UNARY_OPS = frozenset({OpType.NEG})
SUMSQ_OPS = frozenset({OpType.SUMSQ2, OpType.SUMSQ3, OpType.SUMSQ4, OpType.SUMSQ5})
DISTANCE_OPS = frozenset({OpType.DISTANCE2, OpType.DISTANCE3, OpType.DISTANCE4, OpType.DISTANCE5})

# Column of each variable in the (n_samples, 3) binding matrix
VARIABLE_MAP: Dict[str, int] = {'x': 0, 'y': 1, 'z': 2}


def accepts_operand_count(op_type: OpType, count: int) -> bool:
  arity = OPERATOR_ARITY[op_type]
  return arity == VARIADIC or arity == count


@numba.njit(cache=True, inline='always')
def evaluate_variable(X, index):
  return X[:, index].astype(np.float64)

@numba.njit(cache=True, inline='always')
def evaluate_constant(n_samples, value):
  return np.full(n_samples, value, dtype=np.float64)

# error_model='numpy' keeps IEEE results (inf/nan) on division by zero
@numba.njit(cache=True, error_model='numpy')
def evaluate_binary_op(left_val, right_val, operator):
  if operator == '+':
    return left_val + right_val
  elif operator == '-':
    return left_val - right_val
  elif operator == '*':
    return left_val * right_val
  elif operator == '/':
    return left_val / right_val
  return np.zeros_like(left_val)

@numba.njit(cache=True, error_model='numpy')
def evaluate_unary_op(operand_val, operator):
  if operator == 'negate':
    return -operand_val
  return np.zeros_like(operand_val)

@numba.njit(cache=True, error_model='numpy')
def evaluate_nary_op(operand_vals, operator):
  """Fold a (n_operands, n_samples) matrix of operand values into one row."""
  out = np.zeros(operand_vals.shape[1], dtype=np.float64)
  if operator == 'sumexp' or operator == 'lse':
    for i in range(operand_vals.shape[0]):
      out += np.exp(operand_vals[i])
    if operator == 'lse':
      out = np.log(out)
    return out
  for i in range(operand_vals.shape[0]):
    out += operand_vals[i] * operand_vals[i]
  if operator.startswith('distance'):
    out = np.sqrt(out)
  return out


def evaluate_operator(op_type: OpType, operand_vals: List[np.ndarray], n_samples: int) -> np.ndarray:
  """Route already evaluated operands to the kernel of ``op_type``."""
  symbol = OPERATOR_SYMBOLS[op_type]
  if op_type in BINARY_OPS:
    return evaluate_binary_op(operand_vals[0], operand_vals[1], symbol)
  if op_type in UNARY_OPS:
    return evaluate_unary_op(operand_vals[0], symbol)
  stacked = np.empty((len(operand_vals), n_samples), dtype=np.float64)
  for i, val in enumerate(operand_vals):
    stacked[i] = val
  return evaluate_nary_op(stacked, symbol)
