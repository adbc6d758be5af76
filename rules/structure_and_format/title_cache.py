"""
Title Cache
Memoizes corrected heading titles for the lifetime of a lint run.
"""
import logging
from typing import Dict, KeysView, Optional

logger = logging.getLogger(__name__)


class TitleCache:
    """
    Maps a processed heading title to its corrected form.

    A title that has been seen once is settled for the rest of the run, whatever
    options produced the entry. Keys do not include the rule options.

    The cache is not synchronized. Hosts that lint documents concurrently must
    serialize access or give each worker its own instance.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    def get(self, title: str) -> Optional[str]:
        return self._entries.get(title)

    def set(self, title: str, corrected_title: str) -> None:
        self._entries[title] = corrected_title

    def keys(self) -> KeysView[str]:
        return self._entries.keys()

    def clear(self) -> None:
        """Forget every title. Meant for test isolation and independent runs."""
        logger.debug(f"Clearing title cache with {len(self._entries)} entries")
        self._entries.clear()

    def __contains__(self, title: object) -> bool:
        return title in self._entries

    def __len__(self) -> int:
        return len(self._entries)
