"""Heading Capitalization Checker - Entry Point"""

import os
import sys
import logging
import argparse
from typing import Any, Dict, List, Optional, Sequence

from config import Config
from rules.structure_and_format.heading_capitalization_rule import HeadingCapitalizationRule
from rules.structure_and_format.services.heading_config_service import ConfigurationError, HeadingConfigService
from rules.structure_and_format.title_cache import TitleCache
from structural_parsing.markdown.parser import MarkdownParser

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_CONFIG_ERROR = 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='heading-capitalization',
        description='Check that Markdown headings use title case.'
    )
    parser.add_argument('paths', nargs='+', help='Markdown files or directories to check')
    parser.add_argument('--config', dest='config_file', default=None,
                        help='YAML file with rule options (default: $HEADING_RULE_CONFIG)')
    parser.add_argument('--lower-case-word', dest='lower_case_words', action='append', default=None,
                        metavar='WORD', help='Word to keep lower case; may be repeated')
    parser.add_argument('--allow-first-word-lower-case', action='store_true', default=None,
                        help='Let --lower-case-word entries open a heading in lower case')
    parser.add_argument('--ignore-pattern', dest='ignore_patterns', action='append', default=None,
                        metavar='REGEX', help='Pattern removed from headings before checking; may be repeated')
    parser.add_argument('--log-level', default=None, help='Logging level (default: $LOG_LEVEL or WARNING)')
    return parser


def collect_files(paths: Sequence[str], config=Config) -> List[str]:
    """Expand directories into the Markdown files below them, in sorted order."""
    files = []
    for path in paths:
        if os.path.isdir(path):
            for root, dirs, filenames in os.walk(path):
                dirs.sort()
                for filename in sorted(filenames):
                    if config.allowed_file(filename):
                        files.append(os.path.join(root, filename))
        else:
            files.append(path)
    return files


def merge_options(file_options: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Overlay command-line flags on options read from a file."""
    options = dict(file_options)
    if args.lower_case_words is not None:
        options['lowerCaseWords'] = args.lower_case_words
    if args.allow_first_word_lower_case:
        options['allowFirstWordLowerCase'] = True
    if args.ignore_patterns is not None:
        options['ignorePattern'] = args.ignore_patterns
    return options


def lint_file(path: str, parser: MarkdownParser, rule: HeadingCapitalizationRule, options) -> List[Dict[str, Any]]:
    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    result = parser.parse(content, path)
    if not result.success:
        raise ValueError(result.error)
    return rule.analyze(result.document, options)


def main(argv: Optional[Sequence[str]] = None, config=Config) -> int:
    args = build_arg_parser().parse_args(argv)
    config.init_logging(args.log_level)

    config_service = HeadingConfigService()
    options_file = args.config_file or config.HEADING_RULE_CONFIG
    try:
        file_options = config_service.load_options_file(options_file) if options_file else {}
        options = config_service.build_options(merge_options(file_options, args))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    # One cache per run: a heading repeated across files is reported once.
    cache = TitleCache()
    rule = HeadingCapitalizationRule(cache=cache)
    parser = MarkdownParser()

    error_count = 0
    failed_files = 0
    files = collect_files(args.paths, config)
    for path in files:
        try:
            errors = lint_file(path, parser, rule, options)
        except (IOError, ValueError) as e:
            logger.error(f"Could not check {path}: {e}")
            failed_files += 1
            continue

        for error in errors:
            print(f"{path}:{error['line']}: {error['message']}")
        error_count += len(errors)

    logger.info(f"Checked {len(files)} files, {len(cache)} distinct headings, {error_count} errors")
    if error_count or failed_files:
        return EXIT_ERRORS
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
