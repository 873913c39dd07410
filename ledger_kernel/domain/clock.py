"""
Clock -- injectable source of "now" for reporting and reconciliation.

Aging schedules and report metadata depend on the current time.  Services
receive a Clock so that the same inputs always produce the same report;
pure builders take the reference time as an explicit argument instead.

Architecture position:
    Kernel > Domain.  ``SystemClock`` is the only place the package reads
    the wall clock.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone


class Clock(ABC):
    """
    Source of the current time.

    Guarantees:
        - ``now()`` is timezone-aware.
        - ``today()`` is the calendar date of ``now()``.
    """

    @abstractmethod
    def now(self) -> datetime:
        ...

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Clock pinned to a chosen instant.

    The instant only moves when the test moves it with ``advance``,
    ``advance_days`` or ``set_time``.  Naive datetimes are read as UTC.
    """

    DEFAULT_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __init__(self, fixed_time: datetime | None = None):
        self._current = self._aware(fixed_time or self.DEFAULT_TIME)

    @staticmethod
    def _aware(moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment.replace(tzinfo=timezone.utc)
        return moment

    def now(self) -> datetime:
        return self._current

    def set_time(self, moment: datetime) -> None:
        self._current = self._aware(moment)

    def advance(self, seconds: int = 1) -> None:
        self._current += timedelta(seconds=seconds)

    def advance_days(self, days: int) -> None:
        self._current += timedelta(days=days)
