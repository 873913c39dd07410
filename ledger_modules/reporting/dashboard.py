"""
Dashboard summarizer.

Headline figures for the landing page, computed with the same accumulator
as the statements so the dashboard's profit always equals the profit and
loss net profit over the same entries.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from ledger_config.schema import ReportingSettings
from ledger_engines.accumulator import signed_balances
from ledger_engines.tracer import traced_engine
from ledger_kernel.domain.accounts import AccountRegistry, AccountType
from ledger_kernel.domain.entities import Bill, Invoice, JournalEntry
from ledger_modules.reporting.models import DashboardSummary, ReportMetadata

_ZERO = Decimal("0")


@traced_engine("dashboard", "1.0", fingerprint_fields=("as_of",))
def summarize_dashboard(
    entries: Sequence[JournalEntry],
    registry: AccountRegistry,
    invoices: Iterable[Invoice],
    bills: Iterable[Bill],
    as_of: date | None = None,
    config: ReportingSettings | None = None,
    metadata: ReportMetadata | None = None,
) -> DashboardSummary:
    """
    Revenue, expenses, profit and cash over entries up to ``as_of``, plus
    the count and total of Unpaid invoices and bills.
    """
    settings = config if config is not None else ReportingSettings()
    balances = signed_balances(
        entries, registry, end=as_of, strict_accounts=settings.strict_accounts,
    )

    revenue = _ZERO
    expenses = _ZERO
    cash = _ZERO
    for account_id, balance in balances.items():
        account = registry.get(account_id)
        if account is None:
            continue
        if account.account_type == AccountType.REVENUE:
            revenue += balance
        elif account.account_type == AccountType.EXPENSE:
            expenses += balance
        if account.is_cash:
            cash += balance

    pending_invoices = [i for i in invoices if i.is_open]
    open_bills = [b for b in bills if b.is_open]

    return DashboardSummary(
        total_revenue=revenue,
        total_expenses=expenses,
        profit=revenue - expenses,
        cash_balance=cash,
        pending_invoice_count=len(pending_invoices),
        pending_invoice_total=sum((i.amount for i in pending_invoices), _ZERO),
        open_bill_count=len(open_bills),
        open_bill_total=sum((b.amount for b in open_bills), _ZERO),
        metadata=metadata,
    )
