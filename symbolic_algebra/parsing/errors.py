"""Parsing errors.

Every error keeps the structured facts about the failure (expected and actual
tokens, argument counts, unconsumed input) and formats its message from them.
"""

from typing import Iterable, Tuple

# Number of unconsumed tokens shown in error messages
PREVIEW_TOKENS = 7


class ParsingError(ValueError):
  """Base class for every failure to parse an expression."""

  def __init__(self, reason: str = "", remaining: Iterable[str] = ()):
    self.reason = reason
    self.remaining: Tuple[str, ...] = tuple(remaining)
    super().__init__(self.format_message())

  def preview(self) -> str:
    return " ".join(self.remaining[:PREVIEW_TOKENS])

  def describe(self) -> str:
    if self.remaining:
      return f"{self.reason}. In: -> {self.preview()}"
    return self.reason

  def format_message(self) -> str:
    return f"Parsing error occurred: {self.describe()}."


class UnexpectedEndOfExpressionError(ParsingError):
  """Input ran out while ``expected`` was still required."""

  def __init__(self, expected: str):
    self.expected = expected
    super().__init__()

  def describe(self) -> str:
    return f"expected '{self.expected}', got end of expression"


class AnotherTokenExpectedError(ParsingError):
  """The next token exists but is not the single token required here."""

  def __init__(self, expected: str, actual: str, remaining: Iterable[str]):
    self.expected = expected
    self.actual = actual
    super().__init__(remaining=remaining)

  def describe(self) -> str:
    return f"expected '{self.expected}', got '{self.actual}'. In: -> {self.preview()}"


class UnexpectedTokenError(ParsingError):
  """A token is neither a number, a variable, an opening bracket nor a known operator."""

  def __init__(self, token: str, remaining: Iterable[str]):
    self.token = token
    super().__init__(remaining=remaining)

  def describe(self) -> str:
    return f"unexpected token '{self.token}'. In: -> {' '.join([self.token, self.preview()]).rstrip()}"


class WrongNumberOfArgumentsError(ParsingError):
  """A fixed-arity operator was given the wrong number of operands."""

  def __init__(self, expected: int, actual: int, remaining: Iterable[str]):
    self.expected = expected
    self.actual = actual
    super().__init__(remaining=remaining)

  def describe(self) -> str:
    return (f"wrong number of arguments: expected {self.expected}, got {self.actual}. "
            f"In: -> {self.preview()}")
