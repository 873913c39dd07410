"""
Trial balance tests.

Unsigned debit and credit totals per account over a month, quarter or
year, with imbalance reported rather than raised.
"""

from datetime import date
from decimal import Decimal

import pytest

from ledger_config.schema import ReportingSettings
from ledger_kernel.domain.accounts import Account, AccountRegistry, AccountType
from ledger_kernel.domain.entities import JournalEntry
from ledger_kernel.exceptions import InvalidAmountError, InvalidPeriodError
from ledger_modules.reporting.statements import build_trial_balance


class TestSingleSale:
    """One cash sale of 1000."""

    def setup_method(self):
        self.registry = AccountRegistry([
            Account("cash", "Cash", AccountType.ASSET, code="1000", is_cash=True),
            Account("revenue", "Revenue", AccountType.REVENUE, code="4000"),
        ])
        self.entries = [
            JournalEntry("e1", date(2024, 1, 15), "Sale", "cash", "revenue", Decimal("1000")),
        ]

    def test_cash_debit_and_revenue_credit(self):
        report = build_trial_balance(self.entries, self.registry, "monthly", "2024-01")
        lines = {line.account_id: line for line in report.lines}

        assert lines["cash"].debit_total == Decimal("1000")
        assert lines["cash"].credit_total == Decimal("0")
        assert lines["revenue"].debit_total == Decimal("0")
        assert lines["revenue"].credit_total == Decimal("1000")
        assert report.is_balanced is True
        assert report.difference == Decimal("0")

    def test_entry_outside_month_excluded(self):
        report = build_trial_balance(self.entries, self.registry, "monthly", "2024-02")
        assert report.lines == ()
        assert report.total_debits == report.total_credits == Decimal("0")
        assert report.is_balanced


class TestQuarterTrialBalance:

    def test_monthly_lines_ordered_by_code(self, entries, registry):
        report = build_trial_balance(entries, registry, "monthly", "2024-03")

        assert [line.account_id for line in report.lines] == [
            "cash", "ap", "sales", "rent", "wages",
        ]
        cash = report.lines[0]
        assert (cash.debit_total, cash.credit_total) == (Decimal("700"), Decimal("1200"))
        assert cash.account_name == "Cash"
        assert cash.account_type == "asset"
        assert report.total_debits == Decimal("2300")
        assert report.total_credits == Decimal("2300")
        assert (report.period_start, report.period_end) == (date(2024, 3, 1), date(2024, 3, 31))

    def test_quarterly_totals(self, entries, registry):
        report = build_trial_balance(entries, registry, "quarterly", date(2024, 2, 14))
        assert report.period_type == "quarterly"
        assert report.total_debits == Decimal("24100")
        assert report.total_credits == Decimal("24100")

    def test_yearly_matches_quarter_here(self, entries, registry):
        yearly = build_trial_balance(entries, registry, "yearly", "2024-11")
        assert yearly.total_debits == Decimal("24100")
        assert yearly.period_start == date(2024, 1, 1)

    def test_include_zero_balances_lists_every_account(self, entries, registry):
        report = build_trial_balance(
            entries, registry, "monthly", "2024-03",
            config=ReportingSettings(include_zero_balances=True),
        )
        assert len(report.lines) == len(registry)
        bank = next(line for line in report.lines if line.account_id == "bank")
        assert bank.debit_total == bank.credit_total == Decimal("0")


class TestTrialBalanceEdgeCases:

    def setup_method(self):
        self.registry = AccountRegistry([
            Account("cash", "Cash", AccountType.ASSET, code="1000"),
        ])

    def test_unknown_account_is_listed_as_unknown(self):
        entries = [JournalEntry("e1", date(2024, 1, 1), "x", "cash", "ghost", Decimal("5"))]
        report = build_trial_balance(entries, self.registry, "monthly", "2024-01")
        ghost = report.lines[-1]
        assert ghost.account_id == "ghost"
        assert ghost.account_name == "Unknown"
        assert ghost.account_type is None
        assert report.is_balanced

    def test_invalid_period_type(self):
        with pytest.raises(InvalidPeriodError):
            build_trial_balance([], self.registry, "fortnightly", "2024-01")

    def test_invalid_entry_rejected(self):
        entries = [JournalEntry("bad", date(2024, 1, 1), "x", "cash", "ghost", Decimal("-1"))]
        with pytest.raises(InvalidAmountError):
            build_trial_balance(entries, self.registry, "monthly", "2024-01")

    def test_trace_logged(self, captured_logs):
        build_trial_balance([], self.registry, "monthly", "2024-01")
        traces = [
            r for r in captured_logs()
            if r["message"] == "LEDGER_ENGINE_TRACE" and r["engine_name"] == "trial_balance"
        ]
        assert len(traces) == 1
