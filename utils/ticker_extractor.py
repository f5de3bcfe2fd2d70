"""Extract explicit ticker-like tokens from post titles."""
from typing import List


# Explicit tickers are 2-5 uppercase letters
MIN_TICKER_LENGTH = 2
MAX_TICKER_LENGTH = 5


def is_upper_ascii(char: str) -> bool:
    return "A" <= char <= "Z"


def is_lower_ascii(char: str) -> bool:
    return "a" <= char <= "z"


def is_word_char(char: str) -> bool:
    """ASCII letters, digits and underscore."""
    return is_upper_ascii(char) or is_lower_ascii(char) or "0" <= char <= "9" or char == "_"


# Whitespace as used for tokenizing titles: tab, line breaks, vertical tab,
# form feed, space and the Unicode space separators
WHITESPACE = frozenset(
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def is_space(char: str) -> bool:
    return char in WHITESPACE


def split_word_runs(text: str) -> List[str]:
    """Split text into maximal runs of word characters, in order."""
    runs = []
    current = []
    for char in text:
        if is_word_char(char):
            current.append(char)
        elif current:
            runs.append("".join(current))
            current = []
    if current:
        runs.append("".join(current))
    return runs


def looks_like_ticker(token: str) -> bool:
    """
    Check if a whole word looks like a ticker symbol.

    Args:
        token: A maximal run of word characters

    Returns:
        True if the token is 2-5 uppercase ASCII letters
    """
    if not MIN_TICKER_LENGTH <= len(token) <= MAX_TICKER_LENGTH:
        return False
    return all(is_upper_ascii(char) for char in token)


def extract_ticker_symbols(title: str) -> List[str]:
    """
    Extract explicit ticker symbols from a title.

    A ticker is a word-bounded run of 2-5 uppercase letters. Acronyms such
    as "CEO" are kept; no validation against a symbol list happens here.

    Args:
        title: Post title

    Returns:
        Tickers in order of appearance, duplicates included
    """
    if not title:
        return []

    return [token for token in split_word_runs(title) if looks_like_ticker(token)]
