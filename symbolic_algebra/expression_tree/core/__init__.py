"""Core expression tree components."""

from .node import Node, VariableNode, ConstantNode, OperatorNode
from .operators import (
    NodeType, OpType, VARIADIC, OPERATOR_MAP, OPERATOR_SYMBOLS, OPERATOR_ARITY, VARIABLE_MAP,
    evaluate_variable, evaluate_constant, evaluate_binary_op, evaluate_unary_op,
    evaluate_nary_op, evaluate_operator
)
from .differentiation import differentiate, DERIVATIVE_RULES

__all__ = [
    'Node', 'VariableNode', 'ConstantNode', 'OperatorNode',
    'NodeType', 'OpType', 'VARIADIC', 'OPERATOR_MAP', 'OPERATOR_SYMBOLS', 'OPERATOR_ARITY',
    'VARIABLE_MAP',
    'evaluate_variable', 'evaluate_constant', 'evaluate_binary_op', 'evaluate_unary_op',
    'evaluate_nary_op', 'evaluate_operator',
    'differentiate', 'DERIVATIVE_RULES'
]
