"""Recursive-descent parsers for bracketed prefix and postfix notation.

Prefix::

    expr := number | variable | "(" operator expr* ")"

Postfix::

    expr := number | variable | "(" expr* operator ")"

Fixed-arity operators take exactly their arity in operands; ``sumexp`` and
``lse`` take any number. A bracket-free reverse Polish reader is provided too.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..expression_tree.core.node import Node, ConstantNode, VariableNode, OperatorNode
from ..expression_tree.core.operators import OPERATOR_ARITY, OPERATOR_MAP, VARIABLE_MAP, VARIADIC
from ..logging_system import LogLevel, is_verbose, log_debug, log_info
from .errors import (
  ParsingError, UnexpectedEndOfExpressionError, UnexpectedTokenError, WrongNumberOfArgumentsError
)
from .tokenizer import CLOSE_BRACKET, OPEN_BRACKET, TokenStream


def parse_number(token: str) -> Optional[float]:
  try:
    return float(token)
  except ValueError:
    return None


def parse_operand(token: str) -> Optional[Node]:
  """Build the leaf for a variable name or a number literal, or None."""
  if token in VARIABLE_MAP:
    return VariableNode(token)
  value = parse_number(token)
  if value is not None:
    return ConstantNode(value)
  return None


class ExpressionParser(ABC):
  """Shared driver: tokenize, parse one element, require the input to be used up."""

  notation = ''

  def parse(self, text: str) -> Node:
    stream = TokenStream.from_text(text)
    try:
      node = self._parse_nested(stream)
    except ParsingError as e:
      log_info(f"Failed to parse {self.notation} expression {text!r}: {e}", LogLevel.DETAILED)
      raise
    if is_verbose():
      log_debug(f"Parsed {self.notation} expression {text!r} -> {node.prefix()}")
    return node

  def _parse_nested(self, stream: TokenStream) -> Node:
    try:
      return self._parse_document(stream)
    except RecursionError:
      raise ParsingError("expression is nested too deeply", stream.remaining()) from None

  def _parse_document(self, stream: TokenStream) -> Node:
    node = self._parse_element(stream)
    if not stream.exhausted:
      raise ParsingError("expression isn't wrapped with external brackets", stream.remaining())
    return node

  def _parse_element(self, stream: TokenStream) -> Node:
    token = stream.advance(expected='expression')
    if token == OPEN_BRACKET:
      return self._parse_brackets(stream)
    node = parse_operand(token)
    if node is None:
      raise UnexpectedTokenError(token, stream.remaining())
    return node

  @abstractmethod
  def _parse_brackets(self, stream: TokenStream) -> Node:
    """Parse the rest of a bracketed expression, after its opening bracket."""


class PrefixParser(ExpressionParser):
  notation = 'prefix'

  def _parse_brackets(self, stream: TokenStream) -> Node:
    token = stream.advance(expected='operator')
    op_type = OPERATOR_MAP.get(token)
    if op_type is None:
      raise UnexpectedTokenError(token, stream.remaining())

    arity = OPERATOR_ARITY[op_type]
    operands: List[Node] = []
    if arity == VARIADIC:
      while not stream.exhausted and stream.peek() != CLOSE_BRACKET:
        operands.append(self._parse_element(stream))
    else:
      for _ in range(arity):
        operands.append(self._parse_element(stream))

    stream.expect(CLOSE_BRACKET)
    return OperatorNode(op_type, operands)


class PostfixParser(ExpressionParser):
  notation = 'postfix'

  def _parse_brackets(self, stream: TokenStream) -> Node:
    operands: List[Node] = []
    while not stream.exhausted and stream.peek() not in OPERATOR_MAP:
      operands.append(self._parse_element(stream))

    if stream.exhausted:
      raise UnexpectedEndOfExpressionError('operator')
    op_type = OPERATOR_MAP[stream.peek()]
    arity = OPERATOR_ARITY[op_type]
    if arity != VARIADIC and len(operands) != arity:
      raise WrongNumberOfArgumentsError(arity, len(operands), stream.remaining())

    stream.advance()
    stream.expect(CLOSE_BRACKET)
    return OperatorNode(op_type, operands)


class RpnParser(ExpressionParser):
  """Bracket-free postfix: every operator pops its operands off a stack.

  Variadic operators cannot be read this way, since nothing marks where their
  operand list starts.
  """

  notation = 'rpn'

  def _parse_document(self, stream: TokenStream) -> Node:
    stack: List[Node] = []
    while not stream.exhausted:
      op_type = OPERATOR_MAP.get(stream.peek())
      if op_type is None:
        stack.append(self._parse_element(stream))
        continue

      token = stream.advance()
      arity = OPERATOR_ARITY[op_type]
      if arity == VARIADIC:
        raise UnexpectedTokenError(token, stream.remaining())
      if len(stack) < arity:
        raise WrongNumberOfArgumentsError(arity, len(stack), (token,) + stream.remaining())
      operands = stack[len(stack) - arity:]
      del stack[len(stack) - arity:]
      stack.append(OperatorNode(op_type, operands))

    if not stack:
      raise UnexpectedEndOfExpressionError('expression')
    if len(stack) > 1:
      raise ParsingError(f"{len(stack) - 1} operand(s) left without an operator",
                         [node.to_string() for node in stack[:-1]])
    return stack[0]

  def _parse_brackets(self, stream: TokenStream) -> Node:
    # brackets never group operands here
    raise UnexpectedTokenError(OPEN_BRACKET, stream.remaining())


_PREFIX_PARSER = PrefixParser()
_POSTFIX_PARSER = PostfixParser()
_RPN_PARSER = RpnParser()


def parse_prefix(text: str) -> Node:
  """Parse a fully bracketed prefix expression such as ``(* (- x 1) (- x 1))``."""
  return _PREFIX_PARSER.parse(text)


def parse_postfix(text: str) -> Node:
  """Parse a fully bracketed postfix expression such as ``((x 1 -) (x 1 -) *)``."""
  return _POSTFIX_PARSER.parse(text)


def parse_rpn(text: str) -> Node:
  """Parse a bracket-free postfix expression such as ``x 1 - x 1 - *``."""
  return _RPN_PARSER.parse(text)
