"""Tests for line tokenization."""

import io

import pytest

from html_dom_tree.shared import TokenizationConfig
from html_dom_tree.tokenization import (
    LineTokenizer,
    LineTokenSource,
    Token,
    TokenType,
    classify_token,
    make_token,
)


class TestClassifyToken:
    """Test classification of raw lines."""

    @pytest.mark.parametrize("value,expected", [
        ("<p>", TokenType.OPEN_TAG),
        ("<table>", TokenType.OPEN_TAG),
        ("</p>", TokenType.CLOSE_TAG),
        ("hello", TokenType.TEXT),
        ("", TokenType.TEXT),
        ("<", TokenType.TEXT),
        ("a < b", TokenType.TEXT),
        ("<p", TokenType.TEXT),
        ("p>", TokenType.TEXT),
        (" <p>", TokenType.TEXT),
    ])
    def test_classification(self, value, expected) -> None:
        """Only bracketed lines are tags."""
        assert classify_token(value) is expected


class TestToken:
    """Test Token properties."""

    def test_opening_name(self) -> None:
        """An opening tag's name drops the brackets."""
        token = make_token("<div>")

        assert token.is_opening
        assert not token.is_closing
        assert token.name == "div"

    def test_closing_name(self) -> None:
        """A closing tag's name drops the slash and brackets."""
        token = make_token("</div>")

        assert token.is_closing
        assert token.name == "div"

    def test_text_has_no_name(self) -> None:
        """Text tokens carry no tag name."""
        assert make_token("words").name is None

    def test_line_number_must_be_positive(self) -> None:
        """Line numbers start at 1."""
        with pytest.raises(ValueError, match="Line number"):
            Token(TokenType.TEXT, "x", line=0)


class TestLineTokenizer:
    """Test tokenizing whole documents."""

    def test_tokenize(self) -> None:
        """Each line becomes one token with its line number."""
        tokens = list(LineTokenizer().tokenize("<p>\nhello\n</p>\n"))

        assert [token.value for token in tokens] == ["<p>", "hello", "</p>"]
        assert [token.type for token in tokens] == [
            TokenType.OPEN_TAG, TokenType.TEXT, TokenType.CLOSE_TAG,
        ]
        assert [token.line for token in tokens] == [1, 2, 3]

    def test_missing_final_newline(self) -> None:
        """The last line needs no terminator."""
        tokens = list(LineTokenizer().tokenize("<p>\nhi\n</p>"))

        assert tokens[-1].value == "</p>"

    def test_empty_document(self) -> None:
        """No text means no tokens."""
        assert list(LineTokenizer().tokenize("")) == []

    def test_text_whitespace_preserved(self) -> None:
        """Leading and trailing spaces belong to the text."""
        tokens = list(LineTokenizer().tokenize("  spaced  \n"))

        assert tokens[0].value == "  spaced  "

    def test_carriage_returns_stripped(self) -> None:
        """CRLF line endings are normalized by default."""
        tokens = list(LineTokenizer().tokenize("<p>\r\nx\r\n</p>\r\n"))

        assert [token.value for token in tokens] == ["<p>", "x", "</p>"]
        assert tokens[0].is_opening

    def test_carriage_returns_kept(self) -> None:
        """Stripping carriage returns can be turned off."""
        config = TokenizationConfig(strip_carriage_returns=False)

        tokens = list(LineTokenizer(config).tokenize("x\r\n"))

        assert tokens[0].value == "x\r"

    def test_blank_lines_kept_by_default(self) -> None:
        """Blank lines are text tokens unless skipping is enabled."""
        tokens = list(LineTokenizer().tokenize("a\n\nb\n"))

        assert [token.value for token in tokens] == ["a", "", "b"]

    def test_skip_blank_lines(self) -> None:
        """Blank lines can be skipped; line numbers still count them."""
        config = TokenizationConfig(skip_blank_lines=True)

        tokens = list(LineTokenizer(config).tokenize("a\n   \nb\n"))

        assert [token.value for token in tokens] == ["a", "b"]
        assert [token.line for token in tokens] == [1, 3]

    def test_only_newline_splits(self) -> None:
        """Other line-break characters stay inside the text."""
        tokens = list(LineTokenizer().tokenize("a\x0bb c\n"))

        assert [token.value for token in tokens] == ["a\x0bb c"]


class TestLineTokenSource:
    """Test the closeable stream source."""

    def test_iterates_tokens(self) -> None:
        """The source yields tokens and counts them."""
        source = LineTokenSource(io.StringIO("<p>\nx\n</p>\n"))

        values = [token.value for token in source]

        assert values == ["<p>", "x", "</p>"]
        assert source.tokens_read == 3

    def test_close_closes_stream(self) -> None:
        """Closing the source closes the stream."""
        stream = io.StringIO("x\n")
        source = LineTokenSource(stream)

        source.close()

        assert source.closed
        assert stream.closed

    def test_close_is_idempotent(self) -> None:
        """Closing twice is harmless."""
        source = LineTokenSource(io.StringIO("x\n"))

        source.close()
        source.close()

        assert source.closed

    def test_closed_source_yields_nothing(self) -> None:
        """Iteration stops once the source is closed."""
        source = LineTokenSource(io.StringIO("a\nb\n"))
        next(source)

        source.close()

        assert list(source) == []

    def test_context_manager(self) -> None:
        """Leaving the with block closes the source."""
        stream = io.StringIO("x\n")

        with LineTokenSource(stream) as source:
            assert next(source).value == "x"

        assert stream.closed
