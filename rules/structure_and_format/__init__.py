"""
Structure and Format Rules Package

This package provides:
- HeadingCapitalizationRule: Checks that headings use title case
- TitleCache: Remembers headings already checked during a run
"""

from .heading_capitalization_rule import HeadingCapitalizationRule, extract_heading_text
from .title_cache import TitleCache

__all__ = [
    'HeadingCapitalizationRule',
    'TitleCache',
    'extract_heading_text',
]
