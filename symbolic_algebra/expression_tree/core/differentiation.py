"""Symbolic differentiation rules.

Each rule receives the original operator node and the already differentiated
operands, and builds a new tree. Rules may reuse the original operands (product,
quotient and distance rules) but never modify them.
"""

from functools import reduce
from typing import Callable, Dict, List, Sequence

from .node import Node, ConstantNode, VariableNode, OperatorNode
from .operators import OpType, VARIABLE_MAP
from ...logging_system import is_verbose, log_debug

DerivativeRule = Callable[[OperatorNode, List[Node]], Node]


def _add(left: Node, right: Node) -> OperatorNode:
  return OperatorNode(OpType.ADD, (left, right))

def _sub(left: Node, right: Node) -> OperatorNode:
  return OperatorNode(OpType.SUB, (left, right))

def _mul(left: Node, right: Node) -> OperatorNode:
  return OperatorNode(OpType.MUL, (left, right))

def _div(left: Node, right: Node) -> OperatorNode:
  return OperatorNode(OpType.DIV, (left, right))


def _sum_exp_derivative(operands: Sequence[Node], diffed: Sequence[Node]) -> Node:
  # d/dv sum(exp(a_i)) = sum(exp(a_i) * a_i')
  terms = [_mul(OperatorNode(OpType.SUMEXP, (operand,)), d_operand)
           for operand, d_operand in zip(operands, diffed)]
  if not terms:
    return ConstantNode(0)
  return reduce(_add, terms)

def _sum_sq_derivative(operands: Sequence[Node], diffed: Sequence[Node]) -> Node:
  # d/dv sum(a_i^2) = 2 * sum(a_i * a_i')
  terms = [_mul(operand, d_operand) for operand, d_operand in zip(operands, diffed)]
  return _mul(ConstantNode(2), reduce(_add, terms))


def _diff_neg(node, diffed):
  return OperatorNode(OpType.NEG, diffed)

def _diff_add(node, diffed):
  return _add(diffed[0], diffed[1])

def _diff_sub(node, diffed):
  return _sub(diffed[0], diffed[1])

def _diff_mul(node, diffed):
  left, right = node.children
  d_left, d_right = diffed
  return _add(_mul(left, d_right), _mul(d_left, right))

def _diff_div(node, diffed):
  left, right = node.children
  d_left, d_right = diffed
  return _div(_sub(_mul(d_left, right), _mul(left, d_right)), _mul(right, right))

def _diff_sumexp(node, diffed):
  return _sum_exp_derivative(node.children, diffed)

def _diff_lse(node, diffed):
  return _div(_sum_exp_derivative(node.children, diffed),
              OperatorNode(OpType.SUMEXP, node.children))

def _diff_sumsq(node, diffed):
  return _sum_sq_derivative(node.children, diffed)

def _diff_distance(node, diffed):
  # sqrt(s)' = s' / (2 * sqrt(s)), with the original node as sqrt(s)
  return _div(_sum_sq_derivative(node.children, diffed), _mul(ConstantNode(2), node))


DERIVATIVE_RULES: Dict[OpType, DerivativeRule] = {
  OpType.NEG: _diff_neg,
  OpType.ADD: _diff_add,
  OpType.SUB: _diff_sub,
  OpType.MUL: _diff_mul,
  OpType.DIV: _diff_div,
  OpType.SUMEXP: _diff_sumexp,
  OpType.LSE: _diff_lse,
  OpType.SUMSQ2: _diff_sumsq,
  OpType.SUMSQ3: _diff_sumsq,
  OpType.SUMSQ4: _diff_sumsq,
  OpType.SUMSQ5: _diff_sumsq,
  OpType.DISTANCE2: _diff_distance,
  OpType.DISTANCE3: _diff_distance,
  OpType.DISTANCE4: _diff_distance,
  OpType.DISTANCE5: _diff_distance,
}


def _differentiate(node: Node, variable: str) -> Node:
  if isinstance(node, ConstantNode):
    return ConstantNode(0)
  if isinstance(node, VariableNode):
    return ConstantNode(1 if node.name == variable else 0)
  diffed = [_differentiate(child, variable) for child in node.children]
  return DERIVATIVE_RULES[node.op_type](node, diffed)


def differentiate(node: Node, variable: str) -> Node:
  """Return a new tree for the partial derivative of ``node`` w.r.t. ``variable``."""
  if variable not in VARIABLE_MAP:
    raise ValueError(f"Cannot differentiate with respect to '{variable}', "
                     f"expected one of {', '.join(VARIABLE_MAP)}")
  result = _differentiate(node, variable)
  if is_verbose():
    log_debug(f"d/d{variable} {node.prefix()} -> {result.prefix()}")
  return result
