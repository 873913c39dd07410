"""
Pure financial statement builders.

These functions turn journal entries and the account registry into the
report DTOs of ``ledger_modules.reporting.models``.  ZERO I/O.  ZERO side
effects.  No clock access: reference dates are parameters.

Sign conventions are never decided here.  Unsigned views come from
``side_totals`` and signed views from ``signed_balances``, both in
``ledger_engines.accumulator``, which in turn take the natural side of
every account from the registry.

All monetary values are Decimal.  Every builder validates the entries it
consumes (amount > 0, distinct accounts) and raises ValidationError
subclasses on bad input.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal
from enum import Enum

from ledger_config.schema import ReportingSettings
from ledger_engines.accumulator import (
    SideTotals,
    filter_by_date,
    lookup_account,
    net_income,
    side_totals,
    signed_balances,
    validate_entries,
)
from ledger_engines.tracer import traced_engine
from ledger_kernel.domain.accounts import (
    AccountRegistry,
    AccountType,
    CashFlowCategory,
)
from ledger_kernel.domain.entities import Budget, JournalEntry
from ledger_kernel.domain.periods import PeriodType, period_bounds
from ledger_kernel.logging_config import get_logger
from ledger_modules.reporting.models import (
    AccountLineItem,
    BalanceSheetReport,
    BudgetLineItem,
    BudgetVsActualReport,
    CashFlowDirection,
    CashFlowLineItem,
    CashFlowReport,
    CashFlowSection,
    GeneralLedgerLine,
    GeneralLedgerReport,
    ProfitAndLossReport,
    ReportMetadata,
    ReportSection,
    TrialBalanceLineItem,
    TrialBalanceReport,
)

logger = get_logger("modules.reporting.statements")

_ZERO = Decimal("0")

_CASH_FLOW_LABELS: dict[CashFlowCategory, str] = {
    CashFlowCategory.OPERATING: "Operating Activities",
    CashFlowCategory.INVESTING: "Investing Activities",
    CashFlowCategory.FINANCING: "Financing Activities",
}


# =========================================================================
# Helpers
# =========================================================================


def _settings(config: ReportingSettings | None) -> ReportingSettings:
    return config if config is not None else ReportingSettings()


def _account_order(registry: AccountRegistry, account_id: str) -> tuple:
    """Registered accounts by code then name; unknown accounts last."""
    account = registry.get(account_id)
    if account is None:
        return (1, "", "", account_id)
    return (0, account.code or "", account.name, account_id)


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, _ZERO)


def _account_section(
    account_type: AccountType,
    balances: dict[str, Decimal],
    registry: AccountRegistry,
    include_zero: bool,
) -> list[AccountLineItem]:
    accounts = registry.accounts_of_type(account_type)
    if not include_zero:
        accounts = tuple(a for a in accounts if balances.get(a.id, _ZERO) != _ZERO)

    ordered = sorted(accounts, key=lambda a: _account_order(registry, a.id))
    return [
        AccountLineItem(
            account_id=a.id,
            account_code=a.code,
            account_name=a.name,
            amount=balances.get(a.id, _ZERO),
        )
        for a in ordered
    ]


def _make_section(label: str, lines: Sequence[AccountLineItem]) -> ReportSection:
    return ReportSection(
        label=label,
        lines=tuple(lines),
        total=_sum(line.amount for line in lines),
    )


# =========================================================================
# 1. TRIAL BALANCE
# =========================================================================


@traced_engine(
    "trial_balance", "1.0", fingerprint_fields=("period_type", "reference_month"),
)
def build_trial_balance(
    entries: Sequence[JournalEntry],
    registry: AccountRegistry,
    period_type: PeriodType | str,
    reference_month: date | str,
    config: ReportingSettings | None = None,
    metadata: ReportMetadata | None = None,
) -> TrialBalanceReport:
    """
    Unsigned debit and credit totals per account for one period.

    Accounts with no activity in the period are omitted (unless
    ``include_zero_balances``); entries against unregistered accounts are
    listed under the name "Unknown".
    """
    settings = _settings(config)
    period = period_bounds(period_type, reference_month)
    totals = side_totals(entries, period.start, period.end)

    if settings.include_zero_balances:
        for account in registry:
            totals.setdefault(account.id, SideTotals())

    lines: list[TrialBalanceLineItem] = []
    for account_id in sorted(totals, key=lambda a: _account_order(registry, a)):
        account = registry.get(account_id)
        side = totals[account_id]
        lines.append(
            TrialBalanceLineItem(
                account_id=account_id,
                account_code=account.code if account else None,
                account_name=registry.name_for(account_id),
                account_type=account.account_type.value if account else None,
                debit_total=side.debit,
                credit_total=side.credit,
            )
        )

    total_debits = _sum(line.debit_total for line in lines)
    total_credits = _sum(line.credit_total for line in lines)
    difference = total_debits - total_credits
    is_balanced = abs(difference) < settings.balance_tolerance

    if not is_balanced:
        logger.warning("trial_balance_out_of_balance", extra={
            "period_start": period.start,
            "period_end": period.end,
            "difference": difference,
        })

    return TrialBalanceReport(
        period_type=PeriodType(period_type).value,
        period_start=period.start,
        period_end=period.end,
        lines=tuple(lines),
        total_debits=total_debits,
        total_credits=total_credits,
        difference=difference,
        is_balanced=is_balanced,
        metadata=metadata,
    )


# =========================================================================
# 2. BALANCE SHEET
# =========================================================================


def assemble_balance_sheet(
    balances: dict[str, Decimal],
    registry: AccountRegistry,
    as_of: date | None = None,
    config: ReportingSettings | None = None,
    metadata: ReportMetadata | None = None,
) -> BalanceSheetReport:
    """
    Build a balance sheet from precomputed natural-side balances.

    Revenue and expense accounts are not listed; their net feeds a
    synthetic equity line (``net_income_label``) when non-zero.  An
    imbalance is reported through ``is_balanced`` and ``difference``.
    """
    settings = _settings(config)
    include_zero = settings.include_zero_balances

    asset_lines = _account_section(AccountType.ASSET, balances, registry, include_zero)
    liability_lines = _account_section(
        AccountType.LIABILITY, balances, registry, include_zero,
    )
    equity_lines = _account_section(AccountType.EQUITY, balances, registry, include_zero)

    income = net_income(balances, registry)
    if income != _ZERO:
        equity_lines.append(
            AccountLineItem(
                account_id=None,
                account_code=None,
                account_name=settings.net_income_label,
                amount=income,
                is_synthetic=True,
            )
        )

    assets = _make_section("Assets", asset_lines)
    liabilities = _make_section("Liabilities", liability_lines)
    equity = _make_section("Equity", equity_lines)

    total_le = liabilities.total + equity.total
    difference = assets.total - total_le
    is_balanced = abs(difference) < settings.balance_tolerance

    if not is_balanced:
        logger.warning("balance_sheet_out_of_balance", extra={
            "as_of": as_of,
            "total_assets": assets.total,
            "total_liabilities_and_equity": total_le,
            "difference": difference,
        })

    return BalanceSheetReport(
        as_of_date=as_of,
        assets=assets,
        liabilities=liabilities,
        equity=equity,
        total_assets=assets.total,
        total_liabilities=liabilities.total,
        total_equity=equity.total,
        net_income=income,
        total_liabilities_and_equity=total_le,
        difference=difference,
        is_balanced=is_balanced,
        metadata=metadata,
    )


@traced_engine("balance_sheet", "1.0", fingerprint_fields=("as_of",))
def build_balance_sheet(
    entries: Sequence[JournalEntry],
    registry: AccountRegistry,
    as_of: date | None = None,
    config: ReportingSettings | None = None,
    metadata: ReportMetadata | None = None,
) -> BalanceSheetReport:
    """Point-in-time balance sheet over every entry dated on or before ``as_of``."""
    settings = _settings(config)
    balances = signed_balances(
        entries, registry, end=as_of, strict_accounts=settings.strict_accounts,
    )
    return assemble_balance_sheet(
        balances, registry, as_of=as_of, config=settings, metadata=metadata,
    )


# =========================================================================
# 3. PROFIT & LOSS
# =========================================================================


@traced_engine("profit_and_loss", "1.0", fingerprint_fields=("start", "end"))
def build_profit_and_loss(
    entries: Sequence[JournalEntry],
    registry: AccountRegistry,
    start: date | None = None,
    end: date | None = None,
    config: ReportingSettings | None = None,
    metadata: ReportMetadata | None = None,
) -> ProfitAndLossReport:
    """
    Revenue and expenses over [start, end].

    Revenue accounts report credits minus debits and expense accounts
    debits minus credits, so returns and refunds reduce their totals.
    """
    settings = _settings(config)
    balances = signed_balances(
        entries, registry, start, end, strict_accounts=settings.strict_accounts,
    )
    include_zero = settings.include_zero_balances

    revenue = _make_section(
        "Revenue",
        _account_section(AccountType.REVENUE, balances, registry, include_zero),
    )
    expenses = _make_section(
        "Expenses",
        _account_section(AccountType.EXPENSE, balances, registry, include_zero),
    )

    return ProfitAndLossReport(
        period_start=start,
        period_end=end,
        revenue=revenue,
        expenses=expenses,
        total_revenue=revenue.total,
        total_expenses=expenses.total,
        net_profit=revenue.total - expenses.total,
        metadata=metadata,
    )


# =========================================================================
# 4. CASH FLOW
# =========================================================================


@traced_engine("cash_flow", "1.0", fingerprint_fields=("start", "end"))
def build_cash_flow(
    entries: Sequence[JournalEntry],
    registry: AccountRegistry,
    start: date | None = None,
    end: date | None = None,
    config: ReportingSettings | None = None,
    metadata: ReportMetadata | None = None,
) -> CashFlowReport:
    """
    Direct movement of every non-cash account over [start, end].

    A debit to a non-cash account is an outflow (movement decreases by the
    amount) and a credit is an inflow (movement increases).  Cash and bank
    accounts are the other side of those flows and are not listed.  Each
    account lands in the section given by ``registry.cash_flow_category``.
    """
    settings = _settings(config)
    in_range = filter_by_date(entries, start, end)
    validate_entries(in_range)

    movements: dict[str, Decimal] = {}
    for entry in in_range:
        for account_id, delta in (
            (entry.debit_account_id, -entry.amount),
            (entry.credit_account_id, entry.amount),
        ):
            account = lookup_account(
                registry, account_id, entry.id, settings.strict_accounts,
            )
            if account is None or account.is_cash:
                continue
            movements[account_id] = movements.get(account_id, _ZERO) + delta

    by_category: dict[CashFlowCategory, list[CashFlowLineItem]] = {
        category: [] for category in CashFlowCategory
    }
    for account_id in sorted(movements, key=lambda a: _account_order(registry, a)):
        amount = movements[account_id]
        if amount == _ZERO:
            continue
        account = registry.resolve(account_id)
        category = registry.cash_flow_category(account)
        by_category[category].append(
            CashFlowLineItem(
                account_id=account_id,
                account_name=account.name,
                category=category.value,
                amount=amount,
                direction=(
                    CashFlowDirection.INFLOW if amount >= _ZERO
                    else CashFlowDirection.OUTFLOW
                ),
            )
        )

    sections = {
        category: CashFlowSection(
            category=category.value,
            label=_CASH_FLOW_LABELS[category],
            lines=tuple(lines),
            total=_sum(line.amount for line in lines),
        )
        for category, lines in by_category.items()
    }
    operating = sections[CashFlowCategory.OPERATING]
    investing = sections[CashFlowCategory.INVESTING]
    financing = sections[CashFlowCategory.FINANCING]

    return CashFlowReport(
        period_start=start,
        period_end=end,
        operating=operating,
        investing=investing,
        financing=financing,
        net_cash_flow=operating.total + investing.total + financing.total,
        metadata=metadata,
    )


# =========================================================================
# 5. GENERAL LEDGER
# =========================================================================


@traced_engine(
    "general_ledger", "1.0", fingerprint_fields=("start", "end", "account_id"),
)
def build_general_ledger(
    entries: Sequence[JournalEntry],
    registry: AccountRegistry,
    start: date | None = None,
    end: date | None = None,
    account_id: str | None = None,
    metadata: ReportMetadata | None = None,
) -> GeneralLedgerReport:
    """
    Two derived lines per entry, debit side first, ordered by date.

    Entries sharing a date keep their input order.  ``running_balance``
    adds debits and subtracts credits over the emitted lines; with
    ``account_id`` only that account's lines are emitted, so the running
    balance is that account's debit-minus-credit balance.
    """
    in_range = filter_by_date(entries, start, end)
    validate_entries(in_range)

    running = _ZERO
    lines: list[GeneralLedgerLine] = []
    for entry in sorted(in_range, key=lambda e: e.date):
        for side_account, debit, credit in (
            (entry.debit_account_id, entry.amount, _ZERO),
            (entry.credit_account_id, _ZERO, entry.amount),
        ):
            if account_id is not None and side_account != account_id:
                continue
            running += debit - credit
            lines.append(
                GeneralLedgerLine(
                    entry_id=entry.id,
                    entry_date=entry.date,
                    description=entry.description,
                    account_id=side_account,
                    account_name=registry.name_for(side_account),
                    debit=debit,
                    credit=credit,
                    running_balance=running,
                )
            )

    return GeneralLedgerReport(
        period_start=start,
        period_end=end,
        account_id=account_id,
        lines=tuple(lines),
        total_debits=_sum(line.debit for line in lines),
        total_credits=_sum(line.credit for line in lines),
        metadata=metadata,
    )


# =========================================================================
# 6. BUDGET VS ACTUAL
# =========================================================================


@traced_engine(
    "budget_vs_actual", "1.0", fingerprint_fields=("start", "end", "budget_period"),
)
def build_budget_vs_actual(
    entries: Sequence[JournalEntry],
    registry: AccountRegistry,
    budgets: Iterable[Budget],
    start: date | None = None,
    end: date | None = None,
    budget_period: str | None = None,
    config: ReportingSettings | None = None,
    metadata: ReportMetadata | None = None,
) -> BudgetVsActualReport:
    """
    Compare budgeted and actual spending on expense accounts.

    ``actual`` is debits minus credits over [start, end].  Budgets are
    summed per account, optionally restricted to one ``budget_period``
    label.  ``variance = budget - actual``: positive means under budget.
    """
    settings = _settings(config)
    totals = side_totals(entries, start, end)

    budget_by_account: dict[str, Decimal] = {}
    for budget in budgets:
        if budget_period is not None and budget.period != budget_period:
            continue
        account = registry.get(budget.account_id)
        if account is None or account.account_type != AccountType.EXPENSE:
            logger.debug("budget_skipped", extra={
                "budget_id": budget.id,
                "account_id": budget.account_id,
            })
            continue
        budget_by_account[budget.account_id] = (
            budget_by_account.get(budget.account_id, _ZERO) + budget.amount
        )

    lines: list[BudgetLineItem] = []
    expense_accounts = sorted(
        registry.accounts_of_type(AccountType.EXPENSE),
        key=lambda a: _account_order(registry, a.id),
    )
    for account in expense_accounts:
        actual = totals.get(account.id, SideTotals()).net
        budgeted = budget_by_account.get(account.id, _ZERO)
        if (
            budgeted == _ZERO
            and actual == _ZERO
            and not settings.include_zero_balances
        ):
            continue
        utilisation = None
        if budgeted != _ZERO:
            utilisation = (actual * Decimal("100") / budgeted).quantize(Decimal("0.01"))
        lines.append(
            BudgetLineItem(
                account_id=account.id,
                account_code=account.code,
                account_name=account.name,
                budget=budgeted,
                actual=actual,
                variance=budgeted - actual,
                utilisation_percent=utilisation,
            )
        )

    total_budget = _sum(line.budget for line in lines)
    total_actual = _sum(line.actual for line in lines)

    return BudgetVsActualReport(
        period_start=start,
        period_end=end,
        lines=tuple(lines),
        total_budget=total_budget,
        total_actual=total_actual,
        total_variance=total_budget - total_actual,
        metadata=metadata,
    )


# =========================================================================
# Serialization helper
# =========================================================================


def render_to_dict(obj: object) -> dict | list | str | int | float | bool | None:
    """
    Convert any report dataclass to plain data for JSON serialization.

    Handles:
    - Decimal -> str (preserving precision)
    - date / datetime -> ISO format string
    - Enum -> .value
    - Nested frozen dataclasses -> nested dicts
    - Tuples -> lists
    - None preserved
    """
    if obj is None:
        return None
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [render_to_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): render_to_dict(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: render_to_dict(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)
