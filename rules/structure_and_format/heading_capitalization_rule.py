"""
Heading Capitalization Rule
Checks that headings use title case and reports the expected correction.
Repeated headings are checked once per run through a shared TitleCache.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from ..base_rule import BaseRule
from .services.heading_config_service import HeadingCapitalizationOptions, HeadingConfigService
from .title_cache import TitleCache
from .title_case import case_title
from structural_parsing.markdown.types import MarkdownBlock, MarkdownBlockType

logger = logging.getLogger(__name__)


def extract_heading_text(heading: MarkdownBlock) -> str:
    """
    Concatenate the inline children of a heading.

    The parser drops code span delimiters, so inline code is wrapped in
    backticks again. Other children already hold flattened text.
    """
    parts = []
    for child in heading.children:
        if child.block_type == MarkdownBlockType.INLINE_CODE:
            parts.append(f"`{child.content}`")
        else:
            parts.append(child.content)
    return "".join(parts)


class HeadingCapitalizationRule(BaseRule):
    """
    Flags headings whose text differs from its title-cased form.

    Options (per document):
    - lowerCaseWords: extra words kept lower case after the first word
    - allowFirstWordLowerCase: let lowerCaseWords entries open a title in lower case
    - ignorePattern: pattern or list of patterns removed before checking

    A title is checked at most once per cache. Later headings with the same
    processed text are never reported, even under different options.
    """

    def __init__(self, cache: Optional[TitleCache] = None) -> None:
        super().__init__()
        self.cache = cache if cache is not None else TitleCache()
        self.config_service = HeadingConfigService()

    def _get_rule_type(self) -> str:
        """Returns the unique identifier for this rule."""
        return 'heading_capitalization'

    def analyze(self, document: MarkdownBlock,
                options: Union[HeadingCapitalizationOptions, Mapping[str, Any], None] = None) -> List[Dict[str, Any]]:
        """
        Check every heading of a document in document order.

        Options are validated and their patterns compiled before the first
        heading is visited, so a ConfigurationError leaves the cache untouched.

        Raises:
            ConfigurationError: If the options cannot be used
        """
        if not isinstance(options, HeadingCapitalizationOptions):
            options = self.config_service.build_options(options)

        errors = []
        for index, heading in enumerate(document.iter_blocks(MarkdownBlockType.HEADING)):
            error = self.check_heading(heading, options, index)
            if error is not None:
                errors.append(error)
        return errors

    def check_heading(self, heading: MarkdownBlock, options: HeadingCapitalizationOptions,
                      heading_index: int = 0) -> Optional[Dict[str, Any]]:
        """Check a single heading and return an error, or None when it passes or was seen before."""
        processed_title = options.strip_ignored(extract_heading_text(heading))

        if processed_title in self.cache:
            logger.debug(f"Skipping cached heading '{processed_title}' at line {heading.start_line}")
            return None

        corrected_title = case_title(
            processed_title,
            options.lower_case_words,
            options.allow_first_word_lower_case
        )
        self.cache.set(processed_title, corrected_title)

        if corrected_title == processed_title:
            return None

        logger.debug(f"Heading at line {heading.start_line} should read '{corrected_title}'")
        return self._create_error(
            sentence=processed_title,
            sentence_index=heading_index,
            message=f"Heading capitalization error. Expected: '{corrected_title}' found: '{processed_title}'",
            suggestions=[corrected_title],
            severity='low',
            line=heading.start_line,
            level=heading.level,
            flagged_text=processed_title,
            node=heading
        )
