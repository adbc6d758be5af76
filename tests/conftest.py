"""Shared fixtures for the heading capitalization tests."""

import pytest

from rules.structure_and_format.heading_capitalization_rule import HeadingCapitalizationRule
from rules.structure_and_format.title_cache import TitleCache
from structural_parsing.markdown.parser import MarkdownParser


@pytest.fixture
def title_cache():
    """Fresh cache per test so results do not leak between tests."""
    return TitleCache()


@pytest.fixture
def rule(title_cache):
    return HeadingCapitalizationRule(cache=title_cache)


@pytest.fixture(scope="module")
def parser():
    return MarkdownParser()


@pytest.fixture
def check(rule, parser):
    """Parse Markdown and run the rule, returning the error messages."""
    def _check(markdown, options=None):
        result = parser.parse(markdown)
        assert result.success, result.error
        return [error['message'] for error in rule.analyze(result.document, options)]
    return _check
