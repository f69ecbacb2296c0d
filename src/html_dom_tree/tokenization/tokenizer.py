"""Line tokenization for the simplified markup format.

The markup is already split one token per line: an opening tag ``<name>``,
a closing tag ``</name>``, or a line of literal text. This module classifies
those lines into tokens and exposes a closeable token source over a text
stream for the tree builder to consume.
"""

import io
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, TextIO

from html_dom_tree.shared.config import TokenizationConfig

OPEN_MARKER = "<"
CLOSE_MARKER = ">"
END_TAG_PREFIX = "</"

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types of the line format."""

    OPEN_TAG = auto()   # <name>
    CLOSE_TAG = auto()  # </name>
    TEXT = auto()       # anything else


@dataclass(frozen=True)
class Token:
    """A single line token."""

    type: TokenType
    value: str
    line: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate token values."""
        if self.line is not None and self.line < 1:
            raise ValueError("Line number must be >= 1")

    @property
    def is_opening(self) -> bool:
        return self.type is TokenType.OPEN_TAG

    @property
    def is_closing(self) -> bool:
        return self.type is TokenType.CLOSE_TAG

    @property
    def name(self) -> Optional[str]:
        """Tag name without its brackets, or None for text tokens."""
        if self.type is TokenType.OPEN_TAG:
            return self.value[1:-1]
        if self.type is TokenType.CLOSE_TAG:
            return self.value[2:-1]
        return None


def classify_token(value: str) -> TokenType:
    """Classify a raw line as an opening tag, a closing tag or text."""
    if not value.startswith(OPEN_MARKER) or not value.endswith(CLOSE_MARKER):
        return TokenType.TEXT
    if value.startswith(END_TAG_PREFIX):
        return TokenType.CLOSE_TAG
    return TokenType.OPEN_TAG


def make_token(value: str, line: Optional[int] = None) -> Token:
    """Build a token from a raw line."""
    return Token(classify_token(value), value, line)


class LineTokenizer:
    """Tokenizer that turns newline-separated markup into tokens."""

    def __init__(self, config: Optional[TokenizationConfig] = None) -> None:
        self.config = config or TokenizationConfig()

    def normalize_line(self, raw_line: str) -> str:
        """Drop the line terminator from a raw line."""
        line = raw_line[:-1] if raw_line.endswith("\n") else raw_line
        if self.config.strip_carriage_returns and line.endswith("\r"):
            line = line[:-1]
        return line

    def tokenize_lines(self, lines: Iterator[str]) -> Iterator[Token]:
        """Yield tokens for an iterator of raw lines."""
        for line_number, raw_line in enumerate(lines, start=1):
            line = self.normalize_line(raw_line)
            if self.config.skip_blank_lines and not line.strip():
                continue
            yield make_token(line, line_number)

    def tokenize(self, text: str) -> Iterator[Token]:
        """Yield tokens for a whole document held in a string."""
        return self.tokenize_lines(iter(io.StringIO(text)))


class LineTokenSource:
    """Closeable, non-restartable token source over a text stream.

    Closing the source closes the underlying stream. The tree builder closes
    its source as soon as construction finishes.
    """

    def __init__(
        self,
        stream: TextIO,
        config: Optional[TokenizationConfig] = None
    ) -> None:
        self._stream = stream
        self._tokens = LineTokenizer(config).tokenize_lines(iter(stream))
        self.closed = False
        self.tokens_read = 0

    def __iter__(self) -> "LineTokenSource":
        return self

    def __next__(self) -> Token:
        if self.closed:
            raise StopIteration
        token = next(self._tokens)
        self.tokens_read += 1
        return token

    def close(self) -> None:
        """Release the underlying stream."""
        if self.closed:
            return
        self.closed = True
        self._stream.close()
        logger.debug("Token source closed after %d tokens", self.tokens_read)

    def __enter__(self) -> "LineTokenSource":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
