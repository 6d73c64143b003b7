"""Tokenizer and parsers for bracketed prefix/postfix expressions."""

from .errors import (
    PREVIEW_TOKENS,
    ParsingError,
    UnexpectedEndOfExpressionError,
    AnotherTokenExpectedError,
    UnexpectedTokenError,
    WrongNumberOfArgumentsError
)
from .tokenizer import tokenize, TokenStream
from .parser import (
    ExpressionParser, PrefixParser, PostfixParser, RpnParser,
    parse_prefix, parse_postfix, parse_rpn
)

__all__ = [
    'PREVIEW_TOKENS',
    'ParsingError', 'UnexpectedEndOfExpressionError', 'AnotherTokenExpectedError',
    'UnexpectedTokenError', 'WrongNumberOfArgumentsError',
    'tokenize', 'TokenStream',
    'ExpressionParser', 'PrefixParser', 'PostfixParser', 'RpnParser',
    'parse_prefix', 'parse_postfix', 'parse_rpn'
]
