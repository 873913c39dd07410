"""
Financial Reporting Domain Models (``ledger_modules.reporting.models``).

Responsibility
--------------
Frozen dataclass value objects representing report outputs: trial
balance, balance sheet, profit & loss, cash flow, aging schedules, general
ledger, budget vs. actual, and the dashboard summary.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Built by
``ledger_modules.reporting.statements`` and returned by
``ReportingService``.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* Imbalance is data: ``is_balanced`` and ``difference`` fields, never an
  exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


# =========================================================================
# Enums
# =========================================================================


class ReportType(str, Enum):
    """Types of financial reports."""

    TRIAL_BALANCE = "trial_balance"
    BALANCE_SHEET = "balance_sheet"
    PROFIT_AND_LOSS = "profit_and_loss"
    CASH_FLOW = "cash_flow"
    RECEIVABLES_AGING = "receivables_aging"
    PAYABLES_AGING = "payables_aging"
    GENERAL_LEDGER = "general_ledger"
    BUDGET_VS_ACTUAL = "budget_vs_actual"
    DASHBOARD = "dashboard"


class CashFlowDirection(str, Enum):
    INFLOW = "inflow"
    OUTFLOW = "outflow"


# =========================================================================
# Report Metadata (common to all reports)
# =========================================================================


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata attached to every report produced by ReportingService."""

    report_type: ReportType
    entity_name: str
    currency: str
    generated_at: str  # ISO format timestamp from injected clock
    as_of_date: date | None = None
    period_start: date | None = None
    period_end: date | None = None


# =========================================================================
# Shared line and section shapes
# =========================================================================


@dataclass(frozen=True)
class AccountLineItem:
    """One account's amount within a statement section.

    ``account_id`` is None for synthetic lines such as current year earnings.
    """

    account_id: str | None
    account_code: str | None
    account_name: str
    amount: Decimal
    is_synthetic: bool = False


@dataclass(frozen=True)
class ReportSection:
    label: str
    lines: tuple[AccountLineItem, ...]
    total: Decimal


# =========================================================================
# Trial Balance
# =========================================================================


@dataclass(frozen=True)
class TrialBalanceLineItem:
    """Unsigned debit and credit totals for one account in the period."""

    account_id: str
    account_code: str | None
    account_name: str
    account_type: str | None  # None when the account is not registered
    debit_total: Decimal
    credit_total: Decimal


@dataclass(frozen=True)
class TrialBalanceReport:
    period_type: str
    period_start: date
    period_end: date
    lines: tuple[TrialBalanceLineItem, ...]
    total_debits: Decimal
    total_credits: Decimal
    difference: Decimal  # total_debits - total_credits
    is_balanced: bool  # |difference| < tolerance
    metadata: ReportMetadata | None = None


# =========================================================================
# Balance Sheet
# =========================================================================


@dataclass(frozen=True)
class BalanceSheetReport:
    """
    Point-in-time balance sheet.

    Net income is folded into equity as a synthetic line, so a complete
    double-entry ledger always yields ``is_balanced``.
    """

    as_of_date: date | None
    assets: ReportSection
    liabilities: ReportSection
    equity: ReportSection
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal  # includes net income
    net_income: Decimal
    total_liabilities_and_equity: Decimal
    difference: Decimal  # total_assets - total_liabilities_and_equity
    is_balanced: bool
    metadata: ReportMetadata | None = None


# =========================================================================
# Profit & Loss
# =========================================================================


@dataclass(frozen=True)
class ProfitAndLossReport:
    period_start: date | None
    period_end: date | None
    revenue: ReportSection
    expenses: ReportSection
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal  # total_revenue - total_expenses
    metadata: ReportMetadata | None = None


# =========================================================================
# Cash Flow
# =========================================================================


@dataclass(frozen=True)
class CashFlowLineItem:
    """Net movement of one non-cash account.  Positive is an inflow."""

    account_id: str
    account_name: str
    category: str
    amount: Decimal
    direction: CashFlowDirection


@dataclass(frozen=True)
class CashFlowSection:
    category: str
    label: str
    lines: tuple[CashFlowLineItem, ...]
    total: Decimal


@dataclass(frozen=True)
class CashFlowReport:
    period_start: date | None
    period_end: date | None
    operating: CashFlowSection
    investing: CashFlowSection
    financing: CashFlowSection
    net_cash_flow: Decimal  # operating + investing + financing
    metadata: ReportMetadata | None = None


# =========================================================================
# Aging Schedules
# =========================================================================


@dataclass(frozen=True)
class AgingScheduleRow:
    document_id: str
    counterparty_id: str
    counterparty_name: str
    document_date: date
    due_date: date
    amount: Decimal
    days_overdue: int
    bucket: str
    priority: str


@dataclass(frozen=True)
class AgingBucketSummary:
    name: str
    min_days: int
    max_days: int | None
    item_count: int
    total: Decimal


@dataclass(frozen=True)
class AgingScheduleReport:
    kind: str  # "receivable" | "payable"
    as_of: date | datetime
    rows: tuple[AgingScheduleRow, ...]
    buckets: tuple[AgingBucketSummary, ...]
    total_amount: Decimal
    overdue_amount: Decimal
    item_count: int
    metadata: ReportMetadata | None = None


# =========================================================================
# General Ledger
# =========================================================================


@dataclass(frozen=True)
class GeneralLedgerLine:
    """One side of a journal entry.  Exactly one of debit/credit is non-zero."""

    entry_id: str
    entry_date: date
    description: str
    account_id: str
    account_name: str
    debit: Decimal
    credit: Decimal
    running_balance: Decimal


@dataclass(frozen=True)
class GeneralLedgerReport:
    period_start: date | None
    period_end: date | None
    account_id: str | None
    lines: tuple[GeneralLedgerLine, ...]
    total_debits: Decimal
    total_credits: Decimal
    metadata: ReportMetadata | None = None


# =========================================================================
# Budget vs Actual
# =========================================================================


@dataclass(frozen=True)
class BudgetLineItem:
    account_id: str
    account_code: str | None
    account_name: str
    budget: Decimal
    actual: Decimal
    variance: Decimal  # budget - actual; positive is under budget
    utilisation_percent: Decimal | None  # None when budget is zero

    @property
    def is_over_budget(self) -> bool:
        return self.variance < 0


@dataclass(frozen=True)
class BudgetVsActualReport:
    period_start: date | None
    period_end: date | None
    lines: tuple[BudgetLineItem, ...]
    total_budget: Decimal
    total_actual: Decimal
    total_variance: Decimal
    metadata: ReportMetadata | None = None


# =========================================================================
# Dashboard
# =========================================================================


@dataclass(frozen=True)
class DashboardSummary:
    total_revenue: Decimal
    total_expenses: Decimal
    profit: Decimal
    cash_balance: Decimal
    pending_invoice_count: int
    pending_invoice_total: Decimal
    open_bill_count: int
    open_bill_total: Decimal
    metadata: ReportMetadata | None = None
