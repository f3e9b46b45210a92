"""Day progress tracking for the 50-day job search program."""

from .store import PROGRESS_KEY, TOTAL_DAYS, ProgressStore

__all__ = ["ProgressStore", "PROGRESS_KEY", "TOTAL_DAYS"]
