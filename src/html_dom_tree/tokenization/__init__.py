"""Tokenization for the line-oriented markup format.

Key Components:
    LineTokenizer: Splits a document into one token per line
    LineTokenSource: Closeable token source over a text stream
    Token: A classified line with its line number
    TokenType: Opening tag, closing tag or text
"""

from .tokenizer import (
    LineTokenizer,
    LineTokenSource,
    Token,
    TokenType,
    classify_token,
    make_token,
)

__all__ = [
    "LineTokenizer",
    "LineTokenSource",
    "Token",
    "TokenType",
    "classify_token",
    "make_token",
]
