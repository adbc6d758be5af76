"""
Base Rule Class - Abstract interface for all document rules.
All rules must inherit from this class and implement the required methods.
Provides the standardized error dictionary every rule reports with.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)


class BaseRule(ABC):
    """
    Abstract base class for all document rules.
    """

    def __init__(self) -> None:
        self.rule_type = self._get_rule_type()
        self.severity_levels = ['low', 'medium', 'high']

    @abstractmethod
    def _get_rule_type(self) -> str:
        """Returns the unique identifier for this rule."""

    @abstractmethod
    def analyze(self, document: Any, options: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Analyze a parsed document and return rule errors.

        Args:
            document: Parsed document tree
            options: Rule options supplied by the caller

        Returns:
            List of error dictionaries created with _create_error
        """

    def _create_error(self, sentence: str, sentence_index: int, message: str,
                      suggestions: List[str], severity: str = 'medium',
                      **extra_data) -> Dict[str, Any]:
        """
        Create standardized error dictionary.

        Args:
            sentence: The text containing the error
            sentence_index: Index of the text within the document
            message: Error message
            suggestions: List of suggestions for fixing the error
            severity: Error severity level ('low', 'medium', 'high')
            **extra_data: Additional error data to include

        Returns:
            Error dictionary
        """
        if severity not in self.severity_levels:
            logger.warning(f"Unknown severity '{severity}' for rule {self.rule_type}, using 'medium'")
            severity = 'medium'

        error = {
            'type': self.rule_type,
            'message': str(message),
            'suggestions': [str(s) for s in suggestions],
            'sentence': str(sentence),
            'sentence_index': int(sentence_index),
            'severity': severity
        }
        error.update(extra_data)
        return error
