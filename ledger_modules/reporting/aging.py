"""
Receivables and payables aging schedules.

Thin presentation layer over ``ledger_engines.aging.AgingCalculator``:
ages every Unpaid invoice or bill as of a supplied reference time and
flattens the result into an ``AgingScheduleReport`` with per-bucket
counts and totals.  Pure, no clock access.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime

from ledger_engines.aging import AgeBucket, AgingCalculator, PriorityThresholds
from ledger_kernel.domain.entities import Counterparty, DocumentKind, OpenDocument
from ledger_modules.reporting.models import (
    AgingBucketSummary,
    AgingScheduleReport,
    AgingScheduleRow,
    ReportMetadata,
)


def build_aging_schedule(
    documents: Sequence[OpenDocument],
    as_of: date | datetime,
    kind: DocumentKind | str,
    counterparties: Iterable[Counterparty] = (),
    buckets: Sequence[AgeBucket] | None = None,
    thresholds: PriorityThresholds | None = None,
    metadata: ReportMetadata | None = None,
) -> AgingScheduleReport:
    """
    Age open documents into buckets.

    Paid documents are ignored.  Every open document lands in exactly one
    bucket; bucket summaries are listed in bucket order, including empty
    ones.  Counterparties not supplied are named "Unknown".
    """
    calculator = AgingCalculator(buckets=buckets, thresholds=thresholds)
    names = {c.id: c.name for c in counterparties}
    report = calculator.generate_report(
        documents, as_of, DocumentKind(kind), counterparty_names=names,
    )

    rows = tuple(
        AgingScheduleRow(
            document_id=item.document_id,
            counterparty_id=item.counterparty_id,
            counterparty_name=item.counterparty_name,
            document_date=item.document_date,
            due_date=item.due_date,
            amount=item.amount,
            days_overdue=item.days_overdue,
            bucket=item.bucket.name,
            priority=item.priority.value,
        )
        for item in report.items
    )

    totals = report.total_by_bucket()
    counts = report.count_by_bucket()
    summaries = tuple(
        AgingBucketSummary(
            name=bucket.name,
            min_days=bucket.min_days,
            max_days=bucket.max_days,
            item_count=counts[bucket.name],
            total=totals[bucket.name],
        )
        for bucket in report.buckets
    )

    return AgingScheduleReport(
        kind=report.kind.value,
        as_of=as_of,
        rows=rows,
        buckets=summaries,
        total_amount=report.total_amount(),
        overdue_amount=report.overdue_amount(),
        item_count=report.item_count,
        metadata=metadata,
    )
