"""Infer tickers from company names mentioned in post titles."""
from typing import Iterable, List, Optional

from utils.company_directory import Directory
from utils.ticker_extractor import (
    extract_ticker_symbols,
    is_lower_ascii,
    is_upper_ascii,
    is_space,
    is_word_char,
    split_word_runs,
)


# Never part of a company-name phrase, even when capitalized
STOP_WORDS = frozenset({
    'the', 'this', 'that', 'why', 'what', 'when', 'how', 'who',
    'if', 'all', 'in', 'on', 'of', 'for', 'and', 'but', 'a', 'i', 'we', 'you',
    'my', 'your', 'it', 'its', 'to', 'with', 'at', 'by', 'be', 'or', 'as', 'is',
    'are', 'was', 'were', 'from', 'up', 'down', 'over', 'under', 'more', 'less',
    'bear', 'bull',
})


def normalize(text: str) -> str:
    """Lowercase and keep only a-z and 0-9."""
    return "".join(char for char in text.lower() if "a" <= char <= "z" or "0" <= char <= "9")


def is_capitalized(word: str) -> bool:
    """True for words starting like 'Tesla': an uppercase then a lowercase letter."""
    return len(word) >= 2 and is_upper_ascii(word[0]) and is_lower_ascii(word[1])


def _strip_punctuation(title: str) -> str:
    return "".join(char for char in title if is_word_char(char) or is_space(char))


def extract_name_phrases(title: str) -> List[str]:
    """
    Extract candidate company-name phrases from a title.

    Every capitalized non-stop word is a phrase on its own, and every
    maximal run of such words is also a phrase (joined with spaces). A run
    of one word therefore shows up twice.

    Args:
        title: Post title

    Returns:
        Phrases in order of first appearance
    """
    if not title:
        return []

    phrases = []
    buffer = []

    # Only word characters and whitespace are left, so the word runs are the tokens
    for word in split_word_runs(_strip_punctuation(title)):
        if is_capitalized(word) and word.lower() not in STOP_WORDS:
            buffer.append(word)
            phrases.append(word)
        elif buffer:
            phrases.append(" ".join(buffer))
            buffer = []

    if buffer:
        phrases.append(" ".join(buffer))

    return phrases


def _name_words(normalized_name: str) -> List[str]:
    # Normalization already removed spaces and hyphens, so this is normally
    # the whole name as a single word
    words = [normalized_name]
    for separator in (" ", "-"):
        words = [part for word in words for part in word.split(separator)]
    return words


def infer_ticker(title: str, directory: Directory) -> Optional[str]:
    """
    Infer a single ticker from company names in a title.

    Longer phrases are tried first; for each phrase the directory is scanned
    in order and the first company whose normalized name equals or contains
    the phrase wins.

    Args:
        title: Post title
        directory: Companies to match against

    Returns:
        Matched symbol or None
    """
    phrases = sorted(
        (normalize(phrase) for phrase in extract_name_phrases(title)),
        key=len,
        reverse=True,
    )

    for phrase in phrases:
        if not phrase:
            continue
        for company in directory:
            normalized_name = normalize(company.name)
            if phrase in _name_words(normalized_name):
                return company.symbol
            if phrase in normalized_name:
                return company.symbol

    return None


def combine_tickers(explicit: List[str], inferred: Optional[str]) -> List[str]:
    """Append the inferred ticker to the explicit ones unless already present."""
    tickers = list(explicit)
    if inferred and inferred not in tickers:
        tickers.append(inferred)
    return tickers


def resolve_tickers(title: str, directory: Directory) -> List[str]:
    """
    Explicit tickers followed by the inferred one, when it is new.

    An empty list means no ticker was found.
    """
    return combine_tickers(extract_ticker_symbols(title), infer_ticker(title, directory))


class TickerResolver:
    """Resolve tickers for titles against a fixed company directory."""

    def __init__(self, directory: Directory):
        self.directory = directory

    def explicit(self, title: str) -> List[str]:
        return extract_ticker_symbols(title)

    def infer(self, title: str) -> Optional[str]:
        return infer_ticker(title, self.directory)

    def resolve(self, title: str) -> List[str]:
        return resolve_tickers(title, self.directory)

    def resolve_many(self, titles: Iterable[str]) -> List[List[str]]:
        return [self.resolve(title) for title in titles]
