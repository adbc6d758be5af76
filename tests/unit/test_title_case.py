"""
Unit tests for the title case helpers.

Covers the upper-case classifier, first-letter capitalization, the merged
lower-case word set and the word-by-word title casing.
"""

import pytest

from rules.structure_and_format.services.heading_config_service import HeadingConfigService
from rules.structure_and_format.title_case import (
    LowerCaseWordSet, capitalize_word, case_title, is_fully_upper_case
)


@pytest.fixture(scope="module")
def default_words():
    return HeadingConfigService().get_default_lower_case_words()


@pytest.fixture
def words(default_words):
    return LowerCaseWordSet(default_words)


class TestIsFullyUpperCase:

    @pytest.mark.parametrize("text", ["A", "GPU", "2FA", "H2O", "À", "Я", "ÉTÉ", "R&D"])
    def test_upper_case_tokens(self, text):
        assert is_fully_upper_case(text)

    @pytest.mark.parametrize("text", ["a", "GitHub", "Apple", "я", "é", "iPhone"])
    def test_tokens_with_lower_case_letters(self, text):
        assert not is_fully_upper_case(text)

    @pytest.mark.parametrize("text", ["", "2", "-", "!", "`", "123", "…"])
    def test_tokens_without_cased_characters(self, text):
        """Punctuation and digits alone are never upper case."""
        assert not is_fully_upper_case(text)


class TestCapitalizeWord:

    def test_capitalizes_first_letter_only(self):
        assert capitalize_word("questions") == "Questions"

    def test_keeps_inner_casing(self):
        assert capitalize_word("iPhone") == "IPhone"
        assert capitalize_word("camelCase") == "CamelCase"

    def test_non_latin_scripts(self):
        assert capitalize_word("яблоко") == "Яблоко"
        assert capitalize_word("été") == "Été"

    def test_empty_and_uncased(self):
        assert capitalize_word("") == ""
        assert capitalize_word("`cats`") == "`cats`"


class TestLowerCaseWordSet:

    def test_defaults_are_members(self, words):
        for word in ["a", "an", "the", "and", "or", "to", "on", "with"]:
            assert word in words

    def test_membership_ignores_case(self, words):
        assert "The" in words
        assert "ON" in words

    def test_custom_words_are_tracked_separately(self, default_words):
        words = LowerCaseWordSet(default_words, ["Der", "und"])
        assert "der" in words
        assert words.is_custom("der")
        assert words.is_custom("UND")
        assert not words.is_custom("the")

    def test_default_word_listed_by_caller_is_custom(self, default_words):
        words = LowerCaseWordSet(default_words, ["the"])
        assert words.is_custom("the")
        assert len(words) == len(set(default_words))


class TestCaseTitle:

    @pytest.mark.parametrize("title, expected", [
        ("Where To Ask questions", "Where to Ask Questions"),
        ("an Apple", "An Apple"),
        ("яблоко", "Яблоко"),
        ("À la carte", "À La Carte"),
        ("Enable 2FA On GitHub", "Enable 2FA on GitHub"),
        ("Flight-Or-fight", "Flight-or-Fight"),
        ("the cat in the hat", "The Cat in the Hat"),
        ("Is It True", "Is It True"),
        ("on or off", "On or off"),
    ])
    def test_default_options(self, words, title, expected):
        assert case_title(title, words) == expected

    def test_correct_titles_are_unchanged(self, words):
        for title in ["Where to Ask Questions", "How to Use Our `awesome` Library", "API Reference"]:
            assert case_title(title, words) == title

    def test_acronyms_are_never_changed(self, default_words):
        words = LowerCaseWordSet(default_words, ["api"])
        assert case_title("Using the API", words) == "Using the API"
        assert case_title("OR Gates", words) == "OR Gates"

    def test_separators_are_preserved(self, words):
        assert case_title("  hello   world! ", words) == "  Hello   World! "
        assert case_title("state-of-the-art", words) == "State-of-the-Art"
        assert case_title("one\ttwo", words) == "One\tTwo"

    def test_empty_and_uncased_titles(self, words):
        assert case_title("", words) == ""
        assert case_title("  ", words) == "  "
        assert case_title("123 - 456", words) == "123 - 456"

    def test_first_default_word_is_capitalized_even_when_allowed(self, words):
        assert case_title("the quick brown fox", words, allow_first_word_lower_case=True) == (
            "The Quick Brown Fox"
        )

    def test_first_custom_word_needs_opt_in(self, default_words):
        words = LowerCaseWordSet(default_words, ["the", "fox"])
        assert case_title("the Quick Brown fox", words) == "The Quick Brown fox"
        assert case_title("the Quick Brown fox", words, allow_first_word_lower_case=True) == (
            "the Quick Brown fox"
        )

    def test_only_listed_first_word_is_exempt(self, default_words):
        words = LowerCaseWordSet(default_words, ["cats"])
        assert case_title("cats or dogs or both", words, allow_first_word_lower_case=True) == (
            "cats or Dogs or Both"
        )

        words = LowerCaseWordSet(default_words, ["cats", "dogs", "both"])
        assert case_title("cats or dogs or both", words, allow_first_word_lower_case=True) == (
            "cats or dogs or both"
        )

    def test_custom_words_stay_lower_after_first_word(self, default_words):
        words = LowerCaseWordSet(default_words, ["die", "der", "und"])
        assert case_title("Der Wolf Und Die Sieben Ziegen", words) == "Der Wolf und die Sieben Ziegen"

    def test_hyphen_splits_words_but_first_offset_only_counts_once(self, words):
        # "of" after a hyphen is not at offset 0, so it is lowered.
        assert case_title("Of-Of", words) == "Of-of"

    @pytest.mark.parametrize("title", [
        "where To ask questions",
        "ßtraße and more",
        "the-END of it",
        "iPhone vs android",
        "  a  b  c ",
    ])
    def test_idempotent(self, words, title):
        once = case_title(title, words)
        assert case_title(once, words) == once
