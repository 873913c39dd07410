"""
Aging schedule and dashboard summary tests.
"""

from datetime import date
from decimal import Decimal

from ledger_engines.aging import AgeBucket
from ledger_kernel.domain.entities import (
    Bill,
    Counterparty,
    DocumentKind,
    DocumentStatus,
    Invoice,
)
from ledger_modules.reporting.aging import build_aging_schedule
from ledger_modules.reporting.dashboard import summarize_dashboard


class TestBillDueFortyFiveDaysAgo:

    def test_bucket_and_priority(self):
        as_of = date(2024, 6, 30)
        bill = Bill("b1", "v1", date(2024, 4, 16), date(2024, 5, 16), Decimal("5000"),
                    DocumentStatus.UNPAID)

        report = build_aging_schedule([bill], as_of, DocumentKind.PAYABLE)

        row = report.rows[0]
        assert row.days_overdue == 45
        assert row.bucket == "31–60 Days"
        assert row.priority == "Medium"
        assert row.amount == Decimal("5000")


class TestAgingSchedule:

    def setup_method(self):
        self.as_of = date(2024, 6, 30)
        self.bills = [
            Bill("b1", "v1", date(2024, 3, 20), date(2024, 4, 19), Decimal("400")),
            Bill("b2", "v2", date(2024, 1, 1), date(2024, 1, 31), Decimal("100")),
            Bill("b3", "v1", date(2024, 6, 1), date(2024, 7, 1), Decimal("60")),
            Bill("b4", "v1", date(2024, 1, 1), date(2024, 1, 31), Decimal("999"),
                 DocumentStatus.PAID),
        ]
        self.counterparties = [Counterparty("v1", "City Properties")]

    def test_rows_for_open_documents_only(self):
        report = build_aging_schedule(self.bills, self.as_of, "payable", self.counterparties)
        assert report.kind == "payable"
        assert report.item_count == 3
        assert [row.document_id for row in report.rows] == ["b1", "b2", "b3"]

    def test_row_classification(self):
        report = build_aging_schedule(self.bills, self.as_of, "payable", self.counterparties)
        rows = {row.document_id: row for row in report.rows}
        assert (rows["b1"].days_overdue, rows["b1"].bucket, rows["b1"].priority) == (
            72, "61–90 Days", "High",
        )
        assert (rows["b2"].days_overdue, rows["b2"].bucket, rows["b2"].priority) == (
            151, "90+ Days", "Critical",
        )
        assert (rows["b3"].days_overdue, rows["b3"].bucket, rows["b3"].priority) == (
            0, "Current", "Low",
        )
        assert rows["b1"].counterparty_name == "City Properties"
        assert rows["b2"].counterparty_name == "Unknown"

    def test_bucket_summaries_cover_every_bucket(self):
        report = build_aging_schedule(self.bills, self.as_of, "payable")
        assert [b.name for b in report.buckets] == [
            "Current", "1–30 Days", "31–60 Days", "61–90 Days", "90+ Days",
        ]
        totals = {b.name: b.total for b in report.buckets}
        assert totals["1–30 Days"] == Decimal("0")
        assert totals["61–90 Days"] == Decimal("400")
        assert sum(totals.values()) == report.total_amount == Decimal("560")
        assert report.overdue_amount == Decimal("500")
        assert report.buckets[-1].max_days is None

    def test_custom_buckets(self):
        buckets = (AgeBucket("Fresh", 0, 100), AgeBucket("Stale", 101, None))
        report = build_aging_schedule(self.bills, self.as_of, "payable", buckets=buckets)
        assert {b.name: b.item_count for b in report.buckets} == {"Fresh": 2, "Stale": 1}


class TestDashboard:

    def test_headline_figures(self, entries, registry):
        invoices = [
            Invoice("i1", "c1", date(2024, 2, 5), date(2024, 3, 6), Decimal("2500")),
            Invoice("i2", "c2", date(2024, 1, 5), date(2024, 2, 4), Decimal("300"),
                    DocumentStatus.PAID),
        ]
        bills = [
            Bill("b1", "v1", date(2024, 3, 20), date(2024, 4, 19), Decimal("400")),
            Bill("b2", "v2", date(2024, 1, 1), date(2024, 1, 31), Decimal("100")),
        ]
        summary = summarize_dashboard(entries, registry, invoices, bills)

        assert summary.total_revenue == Decimal("3200")
        assert summary.total_expenses == Decimal("2400")
        assert summary.profit == Decimal("800")
        assert summary.cash_balance == Decimal("9200")
        assert summary.pending_invoice_count == 1
        assert summary.pending_invoice_total == Decimal("2500")
        assert summary.open_bill_count == 2
        assert summary.open_bill_total == Decimal("500")

    def test_as_of_cutoff(self, entries, registry):
        summary = summarize_dashboard(entries, registry, [], [], as_of=date(2024, 1, 31))
        assert summary.profit == Decimal("0")
        assert summary.cash_balance == Decimal("9000")
        assert summary.pending_invoice_count == 0
