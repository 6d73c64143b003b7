from typing import Iterable, List, Optional, Tuple

from .errors import AnotherTokenExpectedError, UnexpectedEndOfExpressionError

OPEN_BRACKET = '('
CLOSE_BRACKET = ')'


def tokenize(text: str) -> List[str]:
  """Split ``text`` on whitespace, with every bracket as a token of its own."""
  spaced = text.replace(OPEN_BRACKET, f" {OPEN_BRACKET} ").replace(CLOSE_BRACKET, f" {CLOSE_BRACKET} ")
  return spaced.split()


class TokenStream:
  """Read cursor over an immutable token sequence"""

  __slots__ = ('_tokens', '_position')

  def __init__(self, tokens: Iterable[str]):
    self._tokens: Tuple[str, ...] = tuple(tokens)
    self._position = 0

  @classmethod
  def from_text(cls, text: str) -> 'TokenStream':
    return cls(tokenize(text))

  @property
  def exhausted(self) -> bool:
    return self._position >= len(self._tokens)

  def __len__(self) -> int:
    return len(self._tokens) - self._position

  def peek(self) -> Optional[str]:
    if self.exhausted:
      return None
    return self._tokens[self._position]

  def advance(self, expected: str = 'token') -> str:
    """Consume and return the next token.

    Raises UnexpectedEndOfExpressionError naming ``expected`` when the input is
    exhausted.
    """
    if self.exhausted:
      raise UnexpectedEndOfExpressionError(expected)
    token = self._tokens[self._position]
    self._position += 1
    return token

  def expect(self, token: str) -> str:
    if self.exhausted:
      raise UnexpectedEndOfExpressionError(token)
    if self._tokens[self._position] != token:
      raise AnotherTokenExpectedError(token, self._tokens[self._position], self.remaining())
    return self.advance()

  def remaining(self) -> Tuple[str, ...]:
    return self._tokens[self._position:]
