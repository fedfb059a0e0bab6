"""Streak window: the last N calendar days with 0/1 completion flags."""
from datetime import date, timedelta
from typing import Iterable

DEFAULT_STREAK_DAYS = 14
MAX_STREAK_DAYS = 365


def window(today: date, days: int) -> list[date]:
    """Return `days` consecutive dates ending at today, oldest first."""
    if days < 1:
        raise ValueError("days must be at least 1")
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def completion_flags(dates: list[date], done: Iterable[date]) -> list[int]:
    done_set = set(done)
    return [1 if d in done_set else 0 for d in dates]
