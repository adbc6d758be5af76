"""
Heading Capitalization Configuration Service
Loads the built-in function word list from YAML and turns caller options into
validated, precompiled rule options.
"""

import os
import re
import yaml
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..title_case import LowerCaseWordSet

logger = logging.getLogger(__name__)

# Used when heading_capitalization.yaml is missing or unreadable.
_FALLBACK_LOWER_CASE_WORDS = [
    'a', 'an', 'the',
    'and', 'but', 'for', 'nor', 'or', 'so', 'yet',
    'as', 'at', 'by', 'in', 'of', 'off', 'on', 'per', 'to', 'up', 'via', 'vs', 'with',
]

# Option names as written in lint configuration, with snake_case aliases.
_OPTION_ALIASES = {
    'lowerCaseWords': 'lower_case_words',
    'lower_case_words': 'lower_case_words',
    'allowFirstWordLowerCase': 'allow_first_word_lower_case',
    'allow_first_word_lower_case': 'allow_first_word_lower_case',
    'ignorePattern': 'ignore_pattern',
    'ignore_pattern': 'ignore_pattern',
}


class ConfigurationError(ValueError):
    """Raised when heading capitalization options cannot be used."""


@dataclass(frozen=True)
class HeadingCapitalizationOptions:
    """Validated options for one document. Patterns are compiled once."""
    lower_case_words: LowerCaseWordSet
    allow_first_word_lower_case: bool = False
    ignore_patterns: Tuple[re.Pattern, ...] = ()

    def strip_ignored(self, text: str) -> str:
        """
        Remove every match of every ignore pattern from the text.
        Patterns run in the configured order, each on the previous result.
        """
        for pattern in self.ignore_patterns:
            text = pattern.sub('', text)
        return text


def compile_ignore_patterns(ignore_pattern: Any) -> Tuple[re.Pattern, ...]:
    """
    Normalize the ignorePattern option to a tuple of compiled expressions.

    Args:
        ignore_pattern: None, a single pattern string, or a list of them

    Raises:
        ConfigurationError: If any entry is not a string or does not compile.
            Nothing is returned for a partially valid list.
    """
    if ignore_pattern is None or ignore_pattern == '':
        return ()
    if isinstance(ignore_pattern, str):
        sources = [ignore_pattern]
    elif isinstance(ignore_pattern, (list, tuple)):
        sources = list(ignore_pattern)
    else:
        raise ConfigurationError(
            f"ignorePattern must be a string or a list of strings, got {type(ignore_pattern).__name__}"
        )

    compiled = []
    for source in sources:
        if not isinstance(source, str):
            raise ConfigurationError(f"ignorePattern entries must be strings, got {source!r}")
        try:
            compiled.append(re.compile(source))
        except re.error as e:
            raise ConfigurationError(f"Invalid ignorePattern {source!r}: {e}") from e
    return tuple(compiled)


class HeadingConfigService:
    """
    Service for the heading capitalization rule configuration.
    Caches the YAML word list so it is read once per process.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        """Singleton pattern for configuration service."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(HeadingConfigService, cls).__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not getattr(self, '_initialized', False):
            self._config_dir = os.path.join(os.path.dirname(__file__), '..', 'config')
            self._config_cache: Dict[str, Dict[str, Any]] = {}
            self._initialized = True

    def _load_yaml_config(self, config_name: str) -> Dict[str, Any]:
        if config_name in self._config_cache:
            return self._config_cache[config_name]

        config_path = os.path.join(self._config_dir, f"{config_name}.yaml")
        config: Dict[str, Any] = {}
        if os.path.exists(config_path):
            try:
                with open(config_path, 'r', encoding='utf-8') as file:
                    loaded = yaml.safe_load(file) or {}
                if isinstance(loaded, dict):
                    config = loaded
                else:
                    logger.warning(f"{config_path} is not a mapping, using built-in defaults")
            except (yaml.YAMLError, IOError) as e:
                logger.warning(f"Could not load {config_name}.yaml: {e}")
        else:
            logger.warning(f"{config_path} not found, using built-in defaults")

        self._config_cache[config_name] = config
        return config

    def get_default_lower_case_words(self) -> List[str]:
        """Get the function words that stay lower case after the first word."""
        config = self._load_yaml_config('heading_capitalization')
        words = config.get('default_lower_case_words')
        if not words:
            return list(_FALLBACK_LOWER_CASE_WORDS)
        # Unquoted on/off/yes/no load as booleans under YAML 1.1.
        if not isinstance(words, list) or not all(isinstance(word, str) for word in words):
            logger.warning(f"default_lower_case_words must be a list of quoted strings, got {words!r}; "
                           f"using built-in defaults")
            return list(_FALLBACK_LOWER_CASE_WORDS)
        return list(words)

    def build_options(self, raw_options: Optional[Mapping[str, Any]] = None) -> HeadingCapitalizationOptions:
        """
        Validate caller options and compile their ignore patterns.

        Args:
            raw_options: Mapping with lowerCaseWords, allowFirstWordLowerCase
                and ignorePattern (snake_case names are accepted too)

        Returns:
            HeadingCapitalizationOptions ready to be shared by every heading
            of a document

        Raises:
            ConfigurationError: On wrongly typed options or bad patterns
        """
        if raw_options is None:
            raw_options = {}
        if not isinstance(raw_options, Mapping):
            raise ConfigurationError(f"Rule options must be a mapping, got {type(raw_options).__name__}")

        options: Dict[str, Any] = {}
        for key, value in raw_options.items():
            name = _OPTION_ALIASES.get(key)
            if name is None:
                logger.warning(f"Ignoring unknown heading capitalization option '{key}'")
                continue
            options[name] = value

        custom_words = options.get('lower_case_words') or []
        if not isinstance(custom_words, (list, tuple, set, frozenset)):
            raise ConfigurationError("lowerCaseWords must be a list of strings")
        for word in custom_words:
            if not isinstance(word, str):
                raise ConfigurationError(
                    f"lowerCaseWords entries must be strings, got {word!r}; "
                    f"quote words such as 'on', 'off', 'yes' and 'no' in YAML"
                )

        allow_first_word_lower_case = options.get('allow_first_word_lower_case', False)
        if allow_first_word_lower_case is None:
            allow_first_word_lower_case = False
        if not isinstance(allow_first_word_lower_case, bool):
            raise ConfigurationError("allowFirstWordLowerCase must be true or false")

        return HeadingCapitalizationOptions(
            lower_case_words=LowerCaseWordSet(self.get_default_lower_case_words(), custom_words),
            allow_first_word_lower_case=allow_first_word_lower_case,
            ignore_patterns=compile_ignore_patterns(options.get('ignore_pattern')),
        )

    def load_options_file(self, path: str) -> Dict[str, Any]:
        """
        Read rule options from a YAML file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed, or its
                top level is not a mapping
        """
        try:
            with open(path, 'r', encoding='utf-8') as file:
                loaded = yaml.safe_load(file)
        except (yaml.YAMLError, IOError) as e:
            raise ConfigurationError(f"Could not load options file {path}: {e}") from e

        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Options file {path} must contain a mapping")
        logger.debug(f"Loaded heading capitalization options from {path}: {sorted(loaded)}")
        return loaded
