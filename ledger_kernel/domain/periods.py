"""
Report periods.

A trial balance is requested as ``(period_type, reference_month)``.
``period_bounds`` turns that into an inclusive ``ReportPeriod``:

    monthly    first to last calendar day of the reference month
    quarterly  the calendar quarter (Jan-Mar, Apr-Jun, ...) containing it
    yearly     Jan 1 to Dec 31 of the reference year
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum

from ledger_kernel.exceptions import InvalidPeriodError

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


class PeriodType(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class ReportPeriod:
    """Inclusive date range.  ``None`` on either side means unbounded."""

    start: date | None = None
    end: date | None = None

    def __post_init__(self) -> None:
        if self.start and self.end and self.start > self.end:
            raise InvalidPeriodError(
                f"start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


def parse_reference_month(reference: date | str) -> date:
    """Accept a ``date`` or a ``"YYYY-MM"`` string; return the month's first day."""
    if isinstance(reference, date):
        return reference.replace(day=1)
    match = _MONTH_PATTERN.match(str(reference).strip())
    if match is None:
        raise InvalidPeriodError(f"reference month {reference!r} is not YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidPeriodError(f"month {month} out of range")
    return date(year, month, 1)


def _last_day(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def period_bounds(
    period_type: PeriodType | str,
    reference_month: date | str,
) -> ReportPeriod:
    """Inclusive bounds of the period containing ``reference_month``."""
    try:
        period_type = PeriodType(period_type)
    except ValueError:
        raise InvalidPeriodError(f"unknown period type {period_type!r}") from None

    ref = parse_reference_month(reference_month)

    if period_type == PeriodType.MONTHLY:
        return ReportPeriod(ref, _last_day(ref.year, ref.month))
    if period_type == PeriodType.QUARTERLY:
        first_month = 3 * ((ref.month - 1) // 3) + 1
        return ReportPeriod(
            date(ref.year, first_month, 1),
            _last_day(ref.year, first_month + 2),
        )
    return ReportPeriod(date(ref.year, 1, 1), date(ref.year, 12, 31))
