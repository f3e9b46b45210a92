"""
Completed-day tracking for the 50-day program.

The set of completed day numbers is persisted as a JSON array under a
single storage key and rewritten on every change.
"""

import json
import logging
from typing import FrozenSet, Set

from src.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)

PROGRESS_KEY = "job-search-progress"
TOTAL_DAYS = 50


class ProgressStore:
    """
    Set of completed day numbers (1..total_days) over a KeyValueStorage.

    Example:
        store = ProgressStore(MemoryStorage())
        store.toggle_day(5)      # True, day 5 now completed
        store.toggle_day(5)      # False, back to the original set
        store.reset_progress()   # empty set, key removed
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = PROGRESS_KEY,
        total_days: int = TOTAL_DAYS,
    ):
        """
        Load progress from storage.

        Args:
            storage: Backing key-value storage
            key: Storage key holding the JSON array
            total_days: Number of days in the program
        """
        self.storage = storage
        self.key = key
        self.total_days = total_days
        self._completed: Set[int] = self._load()

    def _is_valid_day(self, day) -> bool:
        return isinstance(day, int) and not isinstance(day, bool) and 1 <= day <= self.total_days

    def _load(self) -> Set[int]:
        """
        Read the stored array.

        Returns:
            Completed days; empty if nothing is stored or the value is invalid
        """
        raw = self.storage.get(self.key)
        if raw is None:
            return set()

        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Stored progress under '{self.key}' is not valid JSON, starting empty: {e}")
            return set()

        if not isinstance(parsed, list):
            logger.warning(f"Stored progress under '{self.key}' is not a list, starting empty")
            return set()

        days = {day for day in parsed if self._is_valid_day(day)}
        dropped = len(parsed) - len(days)
        if dropped:
            logger.warning(f"Dropped {dropped} invalid or duplicate day entries from stored progress")
        return days

    def _persist(self, days: Set[int]) -> None:
        self.storage.set(self.key, json.dumps(sorted(days)))

    @property
    def completed_days(self) -> FrozenSet[int]:
        return frozenset(self._completed)

    @property
    def completion_count(self) -> int:
        return len(self._completed)

    def is_completed(self, day: int) -> bool:
        return day in self._completed

    def toggle_day(self, day: int) -> bool:
        """
        Flip a day between completed and not completed.

        Args:
            day: Day number, 1..total_days

        Returns:
            True if the day is now completed, False if it was un-marked

        Raises:
            ValueError: If day is not an integer within range
            StorageError: If the new set cannot be written (in-memory set unchanged)
        """
        if not self._is_valid_day(day):
            raise ValueError(f"day must be an integer between 1 and {self.total_days}, got {day!r}")

        completed = day not in self._completed
        days = self._completed | {day} if completed else self._completed - {day}

        self._persist(days)
        self._completed = days
        logger.debug(f"Day {day} marked {'complete' if completed else 'incomplete'}")
        return completed

    def reset_progress(self) -> None:
        """
        Clear all progress and remove the stored key.

        Raises:
            StorageError: If the key cannot be removed (in-memory set unchanged)
        """
        self.storage.remove(self.key)
        self._completed = set()
        logger.info("Progress reset")
