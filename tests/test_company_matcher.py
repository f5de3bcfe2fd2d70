"""Tests for company-name phrase extraction and ticker inference."""
import pytest

from utils.company_directory import Directory, load_directory
from utils.company_matcher import (
    STOP_WORDS,
    TickerResolver,
    combine_tickers,
    extract_name_phrases,
    infer_ticker,
    is_capitalized,
    normalize,
    resolve_tickers,
)


@pytest.fixture
def directory():
    return load_directory([
        ("AAPL", "Apple Inc."),
        ("TSLA", "Tesla Inc"),
        ("NVDA", "NVIDIA Corporation"),
        ("KO", "Coca-Cola Co"),
    ])


class TestPhraseExtraction:
    def test_words_and_runs(self):
        phrases = extract_name_phrases("Why Tesla Motors is surging today")

        assert phrases == ["Tesla", "Motors", "Tesla Motors"]
        assert "Why" not in phrases
        assert "is" not in phrases

    def test_single_word_run_appears_twice(self):
        assert extract_name_phrases("Tesla is mooning") == ["Tesla", "Tesla"]

    def test_stop_words_break_runs_even_when_capitalized(self):
        assert extract_name_phrases("The Bull case for Nvidia.") == ["Nvidia", "Nvidia"]

    def test_all_caps_and_single_letters_do_not_qualify(self):
        assert extract_name_phrases("I think GME is great") == []

    def test_punctuation_is_removed_before_splitting(self):
        phrases = extract_name_phrases("Apple's new iPhone, Meta-Verse")

        assert phrases == ["Apples", "Apples", "MetaVerse", "MetaVerse"]

    def test_multiple_runs(self):
        phrases = extract_name_phrases("General Motors beats Ford")

        assert phrases == ["General", "Motors", "General Motors", "Ford", "Ford"]

    def test_control_characters_are_not_whitespace(self):
        assert extract_name_phrases("Tesla\x1fMotors") == ["TeslaMotors", "TeslaMotors"]

    def test_byte_order_mark_and_nbsp_are_whitespace(self):
        assert extract_name_phrases("Tesla\ufeffMotors") == ["Tesla", "Motors", "Tesla Motors"]
        assert extract_name_phrases("Tesla\xa0Motors") == ["Tesla", "Motors", "Tesla Motors"]

    def test_empty_title(self):
        assert extract_name_phrases("") == []
        assert extract_name_phrases("   ") == []

    def test_stop_words(self):
        assert {"the", "bear", "bull", "i"} <= STOP_WORDS
        assert "tesla" not in STOP_WORDS


class TestNormalize:
    @pytest.mark.parametrize("text,expected", [
        ("Tesla, Inc.", "teslainc"),
        ("Coca-Cola Co", "cocacolaco"),
        ("3M Company", "3mcompany"),
        ("Café", "caf"),
        ("", ""),
    ])
    def test_normalize(self, text, expected):
        assert normalize(text) == expected


def test_is_capitalized():
    assert is_capitalized("Tesla")
    assert not is_capitalized("TSLA")
    assert not is_capitalized("I")
    assert not is_capitalized("tesla")


class TestInferTicker:
    def test_infers_from_name(self, directory):
        assert infer_ticker("Tesla is mooning", directory) == "TSLA"

    def test_no_match(self):
        directory = load_directory([("GME", "GameStop Corp")])

        assert infer_ticker("Random unrelated post", directory) is None

    def test_longest_phrase_first(self):
        directory = load_directory([("AA", "Alcoa"), ("AAB", "Alcoa Brasil")])

        assert infer_ticker("Alcoa Brasil news", directory) == "AAB"

    def test_longest_phrase_across_runs(self):
        directory = load_directory([("F", "Ford Motor Company"), ("GM", "General Motors")])

        assert infer_ticker("General Motors beats Ford", directory) == "GM"

    def test_equal_length_phrases_keep_title_order(self):
        directory = load_directory([("TSLA", "Tesla Inc"), ("AAPL", "Apple Inc")])

        assert infer_ticker("Apple beats, Tesla lags", directory) == "AAPL"
        assert infer_ticker("Tesla beats, Apple lags", directory) == "TSLA"

    def test_directory_order_breaks_ties(self):
        directory = load_directory([("XTSL", "Tesla Holdings"), ("TSLA", "Tesla Inc")])

        assert infer_ticker("Tesla rocks", directory) == "XTSL"

    def test_hyphenated_names_match_after_normalization(self, directory):
        assert infer_ticker("Is CocaCola a buy", directory) == "KO"
        assert infer_ticker("Buying Coca Cola here", directory) == "KO"

    def test_case_insensitive_name_match(self, directory):
        assert infer_ticker("Nvidia earnings thread", directory) == "NVDA"

    def test_empty_inputs(self, directory):
        assert infer_ticker("", directory) is None
        assert infer_ticker("Tesla is mooning", Directory()) is None

    def test_idempotent(self, directory):
        title = "Why Tesla and Apple are moving"

        assert infer_ticker(title, directory) == infer_ticker(title, directory)


class TestResolveTickers:
    def test_inferred_not_duplicated(self, directory):
        assert resolve_tickers("TSLA: Tesla rockets", directory) == ["TSLA"]

    def test_inferred_appended_after_explicit(self, directory):
        assert resolve_tickers("Why AMD beats Tesla", directory) == ["AMD", "TSLA"]

    def test_explicit_duplicates_kept(self, directory):
        assert resolve_tickers("GME GME", directory) == ["GME", "GME"]

    def test_nothing_found(self, directory):
        assert resolve_tickers("random lowercase title", directory) == []

    def test_inference_runs_even_with_explicit_tickers(self, directory):
        assert resolve_tickers("CEO says Nvidia is cheap", directory) == ["CEO", "NVDA"]

    def test_idempotent(self, directory):
        title = "AAPL vs Tesla"

        assert resolve_tickers(title, directory) == resolve_tickers(title, directory)


def test_combine_tickers():
    explicit = ["GME"]

    assert combine_tickers(explicit, "TSLA") == ["GME", "TSLA"]
    assert combine_tickers(explicit, "GME") == ["GME"]
    assert combine_tickers(explicit, None) == ["GME"]
    assert combine_tickers([], None) == []
    assert explicit == ["GME"]


class TestTickerResolver:
    def test_resolve(self, directory):
        resolver = TickerResolver(directory)

        assert resolver.explicit("TSLA: Tesla rockets") == ["TSLA"]
        assert resolver.infer("TSLA: Tesla rockets") == "TSLA"
        assert resolver.resolve("Apple earnings") == ["AAPL"]

    def test_resolve_many(self, directory):
        resolver = TickerResolver(directory)

        assert resolver.resolve_many(["GME GME", "Nvidia run", "nope"]) == [
            ["GME", "GME"],
            ["NVDA"],
            [],
        ]
