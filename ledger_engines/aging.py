"""
Module: ledger_engines.aging
Responsibility:
    Calculate days overdue for open bills and invoices, classify them into
    aging buckets, and assign a collection/payment priority.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  "Now" is always passed in.

Invariants enforced:
    - ``days_overdue = max(0, ceil((as_of - due_date) / 1 day))``.  A
      ``datetime`` as_of counts a partial day as a whole day.
    - Bucketing is a total, non-overlapping partition of the non-negative
      integers (checked by ``validate_buckets``), and bucket order is
      monotonic in days overdue.
    - Only Unpaid documents are aged.
    - Decimal-only arithmetic for all monetary amounts.

Failure modes:
    - ValueError from AgeBucket / validate_buckets for malformed bucket sets.

Usage:
    from ledger_engines.aging import AgingCalculator
    from datetime import date

    calculator = AgingCalculator()
    days = calculator.calculate_days_overdue(
        due_date=date(2024, 1, 15),
        as_of=date(2024, 2, 29),
    )  # Returns 45

    bucket = calculator.classify(days)  # AgeBucket("31–60 Days", 31, 60)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum

from ledger_engines.tracer import traced_engine
from ledger_kernel.domain.accounts import UNKNOWN_ACCOUNT_NAME
from ledger_kernel.domain.entities import DocumentKind, OpenDocument
from ledger_kernel.logging_config import get_logger

logger = get_logger("engines.aging")

_ONE_DAY_US = 86_400 * 1_000_000


@dataclass(frozen=True)
class AgeBucket:
    """
    A contiguous range of days overdue.

    Guarantees:
        - min_days >= 0.
        - max_days >= min_days (when bounded).
    """

    name: str
    min_days: int
    max_days: int | None  # None = unbounded (e.g., 90+)

    def __post_init__(self) -> None:
        if self.min_days < 0:
            raise ValueError("min_days cannot be negative")
        if self.max_days is not None and self.max_days < self.min_days:
            raise ValueError("max_days cannot be less than min_days")

    def contains(self, days: int) -> bool:
        """Check if a days-overdue count falls within this bucket."""
        if days < self.min_days:
            return False
        if self.max_days is None:
            return True
        return days <= self.max_days

    @property
    def is_unbounded(self) -> bool:
        return self.max_days is None


STANDARD_BUCKETS: tuple[AgeBucket, ...] = (
    AgeBucket("Current", 0, 0),
    AgeBucket("1–30 Days", 1, 30),
    AgeBucket("31–60 Days", 31, 60),
    AgeBucket("61–90 Days", 61, 90),
    AgeBucket("90+ Days", 91, None),
)


def validate_buckets(buckets: Sequence[AgeBucket]) -> None:
    """
    Check that buckets partition [0, infinity) in ascending order.

    Raises:
        ValueError: On gaps, overlaps, a non-zero start, or a bounded tail.
    """
    if not buckets:
        raise ValueError("at least one aging bucket is required")
    if buckets[0].min_days != 0:
        raise ValueError("first aging bucket must start at 0 days")
    for previous, current in zip(buckets, buckets[1:]):
        if previous.max_days is None:
            raise ValueError(f"bucket {previous.name!r} is unbounded but not last")
        if current.min_days != previous.max_days + 1:
            raise ValueError(
                f"bucket {current.name!r} must start at {previous.max_days + 1} days"
            )
    if not buckets[-1].is_unbounded:
        raise ValueError("last aging bucket must be unbounded")


class Priority(str, Enum):
    """Follow-up priority of an overdue document."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class PriorityThresholds:
    """Days-overdue thresholds; each priority applies strictly above its value."""

    critical_over: int = 90
    high_over: int = 60
    medium_over: int = 30

    def __post_init__(self) -> None:
        if not 0 <= self.medium_over <= self.high_over <= self.critical_over:
            raise ValueError(
                "priority thresholds must satisfy 0 <= medium <= high <= critical"
            )

    def priority_for(self, days_overdue: int) -> Priority:
        if days_overdue > self.critical_over:
            return Priority.CRITICAL
        if days_overdue > self.high_over:
            return Priority.HIGH
        if days_overdue > self.medium_over:
            return Priority.MEDIUM
        return Priority.LOW


@dataclass(frozen=True)
class AgedItem:
    """An open document with its aging classification."""

    document_id: str
    kind: DocumentKind
    counterparty_id: str
    counterparty_name: str
    document_date: date
    due_date: date
    amount: Decimal
    days_overdue: int
    bucket: AgeBucket
    priority: Priority

    @property
    def is_overdue(self) -> bool:
        return self.days_overdue > 0


@dataclass(frozen=True)
class AgingReport:
    """
    Aging snapshot for one document kind.

    Guarantees:
        - ``total_amount()`` equals the sum of all item amounts and the sum
          of ``total_by_bucket()``.
        - ``total_by_bucket()`` covers every bucket, zero where empty.
    """

    as_of: date | datetime
    kind: DocumentKind
    buckets: tuple[AgeBucket, ...]
    items: tuple[AgedItem, ...]

    @property
    def item_count(self) -> int:
        return len(self.items)

    def total_amount(self) -> Decimal:
        return sum((i.amount for i in self.items), Decimal("0"))

    def total_by_bucket(self) -> dict[str, Decimal]:
        result = {b.name: Decimal("0") for b in self.buckets}
        for item in self.items:
            result[item.bucket.name] += item.amount
        return result

    def count_by_bucket(self) -> dict[str, int]:
        result = {b.name: 0 for b in self.buckets}
        for item in self.items:
            result[item.bucket.name] += 1
        return result

    def items_in_bucket(self, bucket_name: str) -> tuple[AgedItem, ...]:
        return tuple(i for i in self.items if i.bucket.name == bucket_name)

    def total_by_counterparty(self) -> dict[str, Decimal]:
        result: dict[str, Decimal] = {}
        for item in self.items:
            result[item.counterparty_id] = (
                result.get(item.counterparty_id, Decimal("0")) + item.amount
            )
        return result

    def overdue_amount(self) -> Decimal:
        return sum((i.amount for i in self.items if i.is_overdue), Decimal("0"))


class AgingCalculator:
    """
    Age open bills and invoices.

    Contract:
        Pure functions -- no I/O, no clock access.  The reference time is a
        parameter.
    Guarantees:
        - ``calculate_days_overdue`` is non-negative and deterministic.
        - ``classify`` maps every non-negative count to exactly one bucket.
    """

    DEFAULT_BUCKETS = STANDARD_BUCKETS

    def __init__(
        self,
        buckets: Sequence[AgeBucket] | None = None,
        thresholds: PriorityThresholds | None = None,
    ):
        self.buckets = tuple(buckets) if buckets is not None else self.DEFAULT_BUCKETS
        validate_buckets(self.buckets)
        self.thresholds = thresholds or PriorityThresholds()

    @staticmethod
    def calculate_days_overdue(due_date: date, as_of: date | datetime) -> int:
        """
        Whole days past due, rounded up, never negative.

        A date ``as_of`` gives the plain day difference.  A datetime
        ``as_of`` is measured from midnight of the due date in the same
        timezone, and any partial day counts as a full day.
        """
        if isinstance(as_of, datetime):
            due_start = datetime.combine(due_date, time.min, tzinfo=as_of.tzinfo)
            delta: timedelta = as_of - due_start
            micros = (
                delta.days * _ONE_DAY_US
                + delta.seconds * 1_000_000
                + delta.microseconds
            )
            days = -(-micros // _ONE_DAY_US)
        else:
            days = (as_of - due_date).days
        return max(0, days)

    def classify(self, days_overdue: int) -> AgeBucket:
        """
        Classify a days-overdue count into a bucket.

        Raises:
            ValueError: If the count doesn't fit any bucket.
        """
        for bucket in self.buckets:
            if bucket.contains(days_overdue):
                return bucket

        logger.warning("age_classification_no_bucket", extra={
            "days_overdue": days_overdue,
            "bucket_count": len(self.buckets),
        })
        raise ValueError(f"{days_overdue} days overdue does not fit any bucket")

    def prioritize(self, days_overdue: int) -> Priority:
        return self.thresholds.priority_for(days_overdue)

    def age_document(
        self,
        document: OpenDocument,
        kind: DocumentKind,
        as_of: date | datetime,
        counterparty_name: str = UNKNOWN_ACCOUNT_NAME,
    ) -> AgedItem:
        """Combine calculate_days_overdue, classify and prioritize."""
        days = self.calculate_days_overdue(document.due_date, as_of)
        return AgedItem(
            document_id=document.id,
            kind=kind,
            counterparty_id=document.counterparty_id,
            counterparty_name=counterparty_name,
            document_date=document.date,
            due_date=document.due_date,
            amount=document.amount,
            days_overdue=days,
            bucket=self.classify(days),
            priority=self.prioritize(days),
        )

    @traced_engine(
        "aging", "1.0", fingerprint_fields=("as_of", "kind"), size_field="documents",
    )
    def generate_report(
        self,
        documents: Sequence[OpenDocument],
        as_of: date | datetime,
        kind: DocumentKind,
        counterparty_names: Mapping[str, str] | None = None,
    ) -> AgingReport:
        """
        Age every Unpaid document.  Paid documents are ignored.

        Counterparties missing from ``counterparty_names`` are shown as
        "Unknown".
        """
        names = counterparty_names or {}
        kind = DocumentKind(kind)

        items = tuple(
            self.age_document(
                doc,
                kind,
                as_of,
                names.get(doc.counterparty_id, UNKNOWN_ACCOUNT_NAME),
            )
            for doc in documents
            if doc.is_open
        )

        logger.info("aging_report_generated", extra={
            "as_of": as_of.isoformat(),
            "kind": kind.value,
            "document_count": len(documents),
            "item_count": len(items),
            "bucket_count": len(self.buckets),
        })

        return AgingReport(
            as_of=as_of,
            kind=kind,
            buckets=self.buckets,
            items=items,
        )
