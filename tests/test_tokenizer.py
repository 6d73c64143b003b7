import pytest

from symbolic_algebra.parsing import (
  TokenStream, tokenize, AnotherTokenExpectedError, UnexpectedEndOfExpressionError
)


def test_brackets_are_separate_tokens():
  assert tokenize("(+ x(* y 2))") == ['(', '+', 'x', '(', '*', 'y', '2', ')', ')']


def test_whitespace_runs_are_discarded():
  assert tokenize("  \t(x\n 2   +)  ") == ['(', 'x', '2', '+', ')']
  assert tokenize("") == []
  assert tokenize("   ") == []


def test_token_content_is_not_validated():
  assert tokenize("(foo 1.2.3 @)") == ['(', 'foo', '1.2.3', '@', ')']


def test_token_stream_cursor():
  stream = TokenStream.from_text("(+ x 1)")
  assert len(stream) == 5
  assert stream.peek() == '('
  assert stream.advance() == '('
  assert stream.remaining() == ('+', 'x', '1', ')')
  stream.advance()
  stream.advance()
  stream.advance()
  assert stream.expect(')') == ')'
  assert stream.exhausted
  assert stream.peek() is None


def test_token_stream_errors():
  stream = TokenStream(['x'])
  with pytest.raises(AnotherTokenExpectedError) as excinfo:
    stream.expect(')')
  assert excinfo.value.actual == 'x'
  assert stream.peek() == 'x'

  stream.advance()
  with pytest.raises(UnexpectedEndOfExpressionError) as excinfo:
    stream.advance(expected='operator')
  assert excinfo.value.expected == 'operator'
  with pytest.raises(UnexpectedEndOfExpressionError):
    stream.expect(')')
