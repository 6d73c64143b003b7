"""Expression Tree Module

Immutable expression trees over the variables x, y and z: evaluation,
differentiation and prefix/postfix serialization.
"""

from .expression import Expression
from .core.node import (
    Node,
    VariableNode,
    ConstantNode,
    OperatorNode
)
from .core.operators import (
    NodeType,
    OpType,
    VARIADIC,
    OPERATOR_MAP,
    OPERATOR_SYMBOLS,
    OPERATOR_ARITY,
    VARIABLE_MAP,
    evaluate_variable,
    evaluate_constant,
    evaluate_binary_op,
    evaluate_unary_op,
    evaluate_nary_op
)
from .core.differentiation import differentiate
from .utils import ExpressionValidator

__all__ = [
    "Expression",
    "Node", "VariableNode", "ConstantNode", "OperatorNode",
    "NodeType", "OpType", "VARIADIC",
    "OPERATOR_MAP", "OPERATOR_SYMBOLS", "OPERATOR_ARITY", "VARIABLE_MAP",
    "evaluate_variable", "evaluate_constant", "evaluate_binary_op", "evaluate_unary_op",
    "evaluate_nary_op",
    "differentiate",
    "ExpressionValidator"
]
