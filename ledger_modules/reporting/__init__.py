"""
Ledger reporting (``ledger_modules.reporting``).

Responsibility
--------------
Read-only module that derives reports from a journal store: trial balance,
balance sheet, profit and loss, direct cash flow, general ledger, budget
versus actual, receivables and payables aging schedules, and the dashboard
summary.  Statement arithmetic lives in pure functions; ``ReportingService``
loads data and stamps metadata.

Invariants enforced
-------------------
* Nothing here writes to the journal.
* Reports derive entirely from journal entries; no stored balances.
"""

from ledger_modules.reporting.aging import build_aging_schedule
from ledger_modules.reporting.dashboard import summarize_dashboard
from ledger_modules.reporting.models import (
    AccountLineItem,
    AgingBucketSummary,
    AgingScheduleReport,
    AgingScheduleRow,
    BalanceSheetReport,
    BudgetLineItem,
    BudgetVsActualReport,
    CashFlowDirection,
    CashFlowLineItem,
    CashFlowReport,
    CashFlowSection,
    DashboardSummary,
    GeneralLedgerLine,
    GeneralLedgerReport,
    ProfitAndLossReport,
    ReportMetadata,
    ReportSection,
    ReportType,
    TrialBalanceLineItem,
    TrialBalanceReport,
)
from ledger_modules.reporting.service import ReportingService
from ledger_modules.reporting.statements import (
    assemble_balance_sheet,
    build_balance_sheet,
    build_budget_vs_actual,
    build_cash_flow,
    build_general_ledger,
    build_profit_and_loss,
    build_trial_balance,
    render_to_dict,
)

__all__ = [
    # Service
    "ReportingService",
    # Builders
    "assemble_balance_sheet",
    "build_aging_schedule",
    "build_balance_sheet",
    "build_budget_vs_actual",
    "build_cash_flow",
    "build_general_ledger",
    "build_profit_and_loss",
    "build_trial_balance",
    "render_to_dict",
    "summarize_dashboard",
    # Models
    "AccountLineItem",
    "AgingBucketSummary",
    "AgingScheduleReport",
    "AgingScheduleRow",
    "BalanceSheetReport",
    "BudgetLineItem",
    "BudgetVsActualReport",
    "CashFlowDirection",
    "CashFlowLineItem",
    "CashFlowReport",
    "CashFlowSection",
    "DashboardSummary",
    "GeneralLedgerLine",
    "GeneralLedgerReport",
    "ProfitAndLossReport",
    "ReportMetadata",
    "ReportSection",
    "ReportType",
    "TrialBalanceLineItem",
    "TrialBalanceReport",
]
