"""
Tests for the aging calculator.

Covers:
- Days overdue from dates and from timezone-aware datetimes
- Bucket classification and custom bucket validation
- Priority thresholds
- Aging report generation over open documents
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ledger_engines.aging import (
    STANDARD_BUCKETS,
    AgeBucket,
    AgingCalculator,
    Priority,
    PriorityThresholds,
    validate_buckets,
)
from ledger_kernel.domain.entities import Bill, DocumentKind, DocumentStatus, Invoice


class TestDaysOverdue:

    def test_date_difference(self):
        days = AgingCalculator.calculate_days_overdue(date(2024, 1, 1), date(2024, 2, 15))
        assert days == 45

    def test_not_yet_due_is_zero(self):
        days = AgingCalculator.calculate_days_overdue(date(2024, 3, 1), date(2024, 2, 1))
        assert days == 0

    def test_due_today_is_zero(self):
        assert AgingCalculator.calculate_days_overdue(date(2024, 3, 1), date(2024, 3, 1)) == 0

    def test_partial_day_rounds_up(self):
        as_of = datetime(2024, 3, 1, 0, 0, 1, tzinfo=timezone.utc)
        assert AgingCalculator.calculate_days_overdue(date(2024, 3, 1), as_of) == 1

    def test_midnight_datetime_is_whole_days(self):
        as_of = datetime(2024, 3, 11, 0, 0, 0, tzinfo=timezone.utc)
        assert AgingCalculator.calculate_days_overdue(date(2024, 3, 1), as_of) == 10

    def test_datetime_before_due_is_zero(self):
        as_of = datetime(2024, 2, 28, 23, 0, tzinfo=timezone.utc)
        assert AgingCalculator.calculate_days_overdue(date(2024, 3, 1), as_of) == 0


class TestClassification:

    def setup_method(self):
        self.calculator = AgingCalculator()

    @pytest.mark.parametrize(
        "days, bucket",
        [
            (0, "Current"),
            (1, "1–30 Days"),
            (30, "1–30 Days"),
            (31, "31–60 Days"),
            (60, "31–60 Days"),
            (61, "61–90 Days"),
            (90, "61–90 Days"),
            (91, "90+ Days"),
            (5000, "90+ Days"),
        ],
    )
    def test_standard_bucket_boundaries(self, days, bucket):
        assert self.calculator.classify(days).name == bucket

    @pytest.mark.parametrize(
        "days, priority",
        [
            (0, Priority.LOW),
            (30, Priority.LOW),
            (31, Priority.MEDIUM),
            (60, Priority.MEDIUM),
            (61, Priority.HIGH),
            (90, Priority.HIGH),
            (91, Priority.CRITICAL),
        ],
    )
    def test_priority_thresholds_are_strict(self, days, priority):
        assert self.calculator.prioritize(days) == priority

    def test_custom_thresholds(self):
        calculator = AgingCalculator(thresholds=PriorityThresholds(10, 5, 1))
        assert calculator.prioritize(2) == Priority.MEDIUM
        assert calculator.prioritize(11) == Priority.CRITICAL

    def test_threshold_order_validated(self):
        with pytest.raises(ValueError):
            PriorityThresholds(critical_over=10, high_over=20, medium_over=5)

    @given(days=st.integers(min_value=0, max_value=100_000))
    @settings(max_examples=100, deadline=None)
    def test_every_count_lands_in_exactly_one_bucket(self, days):
        matches = [b for b in STANDARD_BUCKETS if b.contains(days)]
        assert len(matches) == 1
        assert AgingCalculator().classify(days) == matches[0]

    @given(
        due_offset=st.integers(min_value=-400, max_value=400),
        step=st.integers(min_value=0, max_value=400),
    )
    @settings(max_examples=100, deadline=None)
    def test_days_overdue_is_monotonic_in_as_of(self, due_offset, step):
        due = date(2024, 6, 1) + timedelta(days=due_offset)
        earlier = date(2024, 6, 1)
        later = earlier + timedelta(days=step)
        assert (
            AgingCalculator.calculate_days_overdue(due, earlier)
            <= AgingCalculator.calculate_days_overdue(due, later)
        )


class TestBucketValidation:

    def test_negative_min_rejected(self):
        with pytest.raises(ValueError):
            AgeBucket("bad", -1, 5)

    def test_max_below_min_rejected(self):
        with pytest.raises(ValueError):
            AgeBucket("bad", 10, 5)

    def test_standard_buckets_are_valid(self):
        validate_buckets(STANDARD_BUCKETS)

    def test_gap_rejected(self):
        with pytest.raises(ValueError):
            validate_buckets((AgeBucket("a", 0, 10), AgeBucket("b", 12, None)))

    def test_bounded_tail_rejected(self):
        with pytest.raises(ValueError):
            AgingCalculator(buckets=(AgeBucket("a", 0, 10), AgeBucket("b", 11, 20)))

    def test_must_start_at_zero(self):
        with pytest.raises(ValueError):
            validate_buckets((AgeBucket("a", 1, None),))

    def test_weekly_custom_buckets(self):
        weekly = (
            AgeBucket("This week", 0, 7),
            AgeBucket("Last week", 8, 14),
            AgeBucket("Older", 15, None),
        )
        assert AgingCalculator(buckets=weekly).classify(9).name == "Last week"


class TestAgingReport:

    def setup_method(self):
        self.calculator = AgingCalculator()
        self.as_of = date(2024, 6, 30)
        self.bills = [
            Bill("b1", "v1", date(2024, 5, 1), date(2024, 5, 16), Decimal("5000")),
            Bill("b2", "v2", date(2024, 6, 1), date(2024, 7, 1), Decimal("200")),
            Bill("b3", "v1", date(2024, 1, 1), date(2024, 2, 1), Decimal("75")),
            Bill("b4", "v2", date(2024, 1, 1), date(2024, 2, 1), Decimal("999"),
                 DocumentStatus.PAID),
        ]

    def test_paid_documents_are_ignored(self):
        report = self.calculator.generate_report(self.bills, self.as_of, DocumentKind.PAYABLE)
        assert report.item_count == 3
        assert {i.document_id for i in report.items} == {"b1", "b2", "b3"}

    def test_totals(self):
        report = self.calculator.generate_report(self.bills, self.as_of, DocumentKind.PAYABLE)
        assert report.total_amount() == Decimal("5275")
        assert report.overdue_amount() == Decimal("5075")
        by_bucket = report.total_by_bucket()
        assert by_bucket["Current"] == Decimal("200")
        assert by_bucket["31–60 Days"] == Decimal("5000")
        assert by_bucket["90+ Days"] == Decimal("75")
        assert by_bucket["1–30 Days"] == Decimal("0")
        assert sum(by_bucket.values()) == report.total_amount()

    def test_item_fields(self):
        report = self.calculator.generate_report(
            self.bills, self.as_of, DocumentKind.PAYABLE,
            counterparty_names={"v1": "Acme Supplies"},
        )
        b1 = next(i for i in report.items if i.document_id == "b1")
        assert b1.days_overdue == 45
        assert b1.priority == Priority.MEDIUM
        assert b1.counterparty_name == "Acme Supplies"
        b2 = next(i for i in report.items if i.document_id == "b2")
        assert b2.counterparty_name == "Unknown"
        assert not b2.is_overdue

    def test_counterparty_totals_and_bucket_items(self):
        report = self.calculator.generate_report(self.bills, self.as_of, "payable")
        assert report.total_by_counterparty() == {
            "v1": Decimal("5075"), "v2": Decimal("200"),
        }
        assert [i.document_id for i in report.items_in_bucket("90+ Days")] == ["b3"]
        assert report.count_by_bucket()["Current"] == 1

    def test_receivables_kind(self):
        invoices = [Invoice("i1", "c1", date(2024, 6, 1), date(2024, 6, 20), Decimal("10"))]
        report = self.calculator.generate_report(invoices, self.as_of, DocumentKind.RECEIVABLE)
        assert report.kind == DocumentKind.RECEIVABLE
        assert report.items[0].days_overdue == 10

    def test_report_logged(self, captured_logs):
        self.calculator.generate_report(self.bills, self.as_of, DocumentKind.PAYABLE)
        records = captured_logs()
        generated = [r for r in records if r["message"] == "aging_report_generated"]
        assert generated and generated[0]["item_count"] == 3
        assert any(
            r["message"] == "LEDGER_ENGINE_TRACE" and r["engine_name"] == "aging"
            for r in records
        )

    def test_trace_measures_documents(self, captured_logs):
        self.calculator.generate_report(self.bills, self.as_of, DocumentKind.PAYABLE)
        trace = [
            r for r in captured_logs()
            if r["message"] == "LEDGER_ENGINE_TRACE" and r["engine_name"] == "aging"
        ][-1]
        assert trace["input_size"] == 4
