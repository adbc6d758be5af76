"""
Title Case Helpers
Word-level decision logic used by the heading capitalization rule.
Acronyms are kept as written. Function words are lower-cased after the first
word and other words get a capital first letter.
"""
import re
from typing import Iterable, Optional, Set

# A word is a maximal run of characters that are neither whitespace nor a hyphen.
_WORD_PATTERN = re.compile(r'[^\s-]+')


def is_fully_upper_case(text: str) -> bool:
    """
    Check whether the text is already in its upper-case form.

    Both sides are tested so strings without cased characters ("2", "-", "")
    are never reported as upper case, while "2FA" or "H2O" are.
    """
    return text.upper() == text and text.lower() != text


def capitalize_word(word: str) -> str:
    """Upper-case the first character and leave the rest of the word alone."""
    if not word:
        return word
    return word[0].upper() + word[1:]


class LowerCaseWordSet:
    """
    Function words that stay lower case inside a title.

    The built-in defaults are always active. Words supplied by the caller are
    tracked separately because only those may stay lower case when they open
    a title.
    """

    def __init__(self, default_words: Iterable[str], custom_words: Optional[Iterable[str]] = None):
        self.default_words = frozenset(word.lower() for word in default_words)
        self.custom_words = frozenset(word.lower() for word in (custom_words or []))
        self._all_words: Set[str] = set(self.default_words) | set(self.custom_words)

    def __contains__(self, word: str) -> bool:
        return word.lower() in self._all_words

    def __len__(self) -> int:
        return len(self._all_words)

    def is_custom(self, word: str) -> bool:
        return word.lower() in self.custom_words


def _case_word(word: str, index: int, lower_case_words: LowerCaseWordSet,
               allow_first_word_lower_case: bool) -> str:
    if is_fully_upper_case(word):
        return word

    lower_word = word.lower()
    if lower_word in lower_case_words:
        if index != 0:
            return lower_word
        # Default words are capitalized at the start of a title unless the
        # caller listed them explicitly and opted in.
        if allow_first_word_lower_case and lower_case_words.is_custom(lower_word):
            return lower_word

    if not is_fully_upper_case(word[0]):
        return capitalize_word(word)

    return word


def case_title(title: str, lower_case_words: LowerCaseWordSet,
               allow_first_word_lower_case: bool = False) -> str:
    """
    Produce the title-cased form of a heading.

    Words are judged independently and in order; whitespace, hyphens and any
    other separators are copied through at their original positions, so
    "Flight-Or-fight" becomes "Flight-or-Fight".

    Args:
        title: Heading text after ignore patterns have been removed
        lower_case_words: Merged default and caller-supplied function words
        allow_first_word_lower_case: Let caller-supplied words stay lower
            case when they open the title

    Returns:
        The corrected title. Equal to ``title`` when nothing needs fixing.
    """
    return _WORD_PATTERN.sub(
        lambda match: _case_word(match.group(0), match.start(), lower_case_words,
                                 allow_first_word_lower_case),
        title
    )
