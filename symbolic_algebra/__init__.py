# Python

"""Symbolic Algebra Package

Parse, evaluate, serialize and differentiate expressions over x, y and z.
"""

from .expression_tree import (
  Expression, Node, VariableNode, ConstantNode, OperatorNode,
  OpType, OPERATOR_MAP, VARIABLE_MAP, differentiate
)
from .parsing import (
  ParsingError, UnexpectedEndOfExpressionError, AnotherTokenExpectedError,
  UnexpectedTokenError, WrongNumberOfArgumentsError,
  tokenize, parse_prefix, parse_postfix, parse_rpn
)
from .logging_system import LogLevel, configure_logging, get_logger, set_log_level

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "VariableNode", "ConstantNode", "OperatorNode",
  "OpType", "OPERATOR_MAP", "VARIABLE_MAP", "differentiate",
  "ParsingError", "UnexpectedEndOfExpressionError", "AnotherTokenExpectedError",
  "UnexpectedTokenError", "WrongNumberOfArgumentsError",
  "tokenize", "parse_prefix", "parse_postfix", "parse_rpn",
  "LogLevel", "configure_logging", "get_logger", "set_log_level"
]
