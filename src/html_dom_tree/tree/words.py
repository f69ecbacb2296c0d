"""Whole-word matching inside text leaves.

A candidate occurrence of the word is found case-insensitively, may absorb a
single trailing punctuation character, and is accepted only when it is
bounded by spaces or by the ends of the text. A rejected candidate moves the
search past its end and the next candidate is tried.
"""

import re
from typing import Iterator, NamedTuple, Optional

DEFAULT_PUNCTUATION = ".,?!:;"
WORD_SEPARATOR = " "


class WordSpan(NamedTuple):
    """Half-open character range of an accepted match."""

    start: int
    end: int


def _is_bounded(text: str, start: int, end: int) -> bool:
    before_ok = start == 0 or text[start - 1] == WORD_SEPARATOR
    after_ok = end == len(text) or text[end] == WORD_SEPARATOR
    return before_ok and after_ok


def iter_whole_words(
    text: str,
    word: str,
    punctuation: str = DEFAULT_PUNCTUATION,
    start: int = 0
) -> Iterator[WordSpan]:
    """Yield every whole-word occurrence of word in text, left to right.

    Args:
        text: Text to search
        word: Word to look for; matched case-insensitively
        punctuation: Characters allowed to trail the word (at most one)
        start: Offset to begin searching from

    Yields:
        WordSpan covering the word plus any absorbed punctuation character
    """
    if not word:
        return

    pattern = re.compile(re.escape(word), re.IGNORECASE)
    position = start
    while True:
        candidate = pattern.search(text, position)
        if candidate is None:
            return

        span_start, span_end = candidate.span()
        if span_end < len(text) and text[span_end] in punctuation:
            span_end += 1

        if _is_bounded(text, span_start, span_end):
            yield WordSpan(span_start, span_end)

        position = span_end


def find_whole_word(
    text: str,
    word: str,
    punctuation: str = DEFAULT_PUNCTUATION
) -> Optional[WordSpan]:
    """Find the first whole-word occurrence of word in text, or None."""
    return next(iter_whole_words(text, word, punctuation), None)
