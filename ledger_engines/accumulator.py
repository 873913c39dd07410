"""
ledger_engines.accumulator -- Balance accumulator over double-entry journals.

Responsibility:
    Fold journal entries into per-account totals.  Two views are produced
    and they must never be confused:

    * ``side_totals``: UNSIGNED debit and credit totals per account.  This is
      what the trial balance and general ledger present.
    * ``signed_balances``: natural-side balances per account, positive when
      the account has grown on its natural side.  This is what the balance
      sheet, profit & loss and dashboard present.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - For any list of entries and any date-filtered sub-list,
      sum(debit contributions) == sum(credit contributions) == sum(amount),
      exactly, in Decimal.
    - Sign conventions come only from ``natural_increase_side`` via the
      AccountRegistry.

Failure modes:
    - InvalidAmountError if an entry amount is not strictly positive.
    - SameAccountEntryError if an entry debits and credits one account.
    - AccountNotFoundError from ``signed_balances`` when ``strict_accounts``
      is set and an entry references an unregistered account.  Otherwise
      that side is skipped and an ``unknown_account_skipped`` warning logged.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ledger_engines.tracer import traced_engine
from ledger_kernel.domain.accounts import (
    Account,
    AccountRegistry,
    AccountType,
    NormalBalance,
    natural_increase_side,
)
from ledger_kernel.domain.entities import JournalEntry
from ledger_kernel.exceptions import (
    AccountNotFoundError,
    InvalidAmountError,
    SameAccountEntryError,
)
from ledger_kernel.logging_config import get_logger

logger = get_logger("engines.accumulator")

ZERO = Decimal("0")


@dataclass(frozen=True)
class SideTotals:
    """Unsigned debit and credit totals for one account."""

    debit: Decimal = ZERO
    credit: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        """Debits minus credits."""
        return self.debit - self.credit

    @property
    def has_activity(self) -> bool:
        return self.debit != ZERO or self.credit != ZERO

    def add_debit(self, amount: Decimal) -> SideTotals:
        return SideTotals(self.debit + amount, self.credit)

    def add_credit(self, amount: Decimal) -> SideTotals:
        return SideTotals(self.debit, self.credit + amount)


def validate_entries(entries: Iterable[JournalEntry]) -> None:
    """Reject entries with a non-positive amount or a single account."""
    for entry in entries:
        if entry.amount <= ZERO:
            raise InvalidAmountError(entry.id, str(entry.amount))
        if entry.debit_account_id == entry.credit_account_id:
            raise SameAccountEntryError(entry.id, entry.debit_account_id)


def filter_by_date(
    entries: Iterable[JournalEntry],
    start: date | None = None,
    end: date | None = None,
) -> list[JournalEntry]:
    """Entries dated within [start, end].  A ``None`` bound is open."""
    result = []
    for entry in entries:
        if start is not None and entry.date < start:
            continue
        if end is not None and entry.date > end:
            continue
        result.append(entry)
    return result


@traced_engine("side_totals", "1.0", fingerprint_fields=("start", "end"))
def side_totals(
    entries: Sequence[JournalEntry],
    start: date | None = None,
    end: date | None = None,
) -> dict[str, SideTotals]:
    """Unsigned per-account debit and credit totals within the date range."""
    in_range = filter_by_date(entries, start, end)
    validate_entries(in_range)

    totals: dict[str, SideTotals] = {}
    for entry in in_range:
        debit_side = totals.get(entry.debit_account_id, SideTotals())
        totals[entry.debit_account_id] = debit_side.add_debit(entry.amount)
        credit_side = totals.get(entry.credit_account_id, SideTotals())
        totals[entry.credit_account_id] = credit_side.add_credit(entry.amount)
    return totals


def contribution_totals(entries: Iterable[JournalEntry]) -> tuple[Decimal, Decimal]:
    """(sum of debit contributions, sum of credit contributions).

    Each entry contributes its amount once to each side, so the two totals
    are always equal.
    """
    entries = list(entries)
    validate_entries(entries)
    debit_total = sum((e.amount for e in entries), ZERO)
    credit_total = sum((e.amount for e in entries), ZERO)
    return debit_total, credit_total


def lookup_account(
    registry: AccountRegistry,
    account_id: str,
    entry_id: str,
    strict_accounts: bool = False,
) -> Account | None:
    """
    Registry lookup for balance-producing reports.

    Returns None (after an ``unknown_account_skipped`` warning) for an
    unregistered account, or raises AccountNotFoundError when
    ``strict_accounts`` is set.
    """
    account = registry.get(account_id)
    if account is None:
        if strict_accounts:
            raise AccountNotFoundError(account_id)
        logger.warning(
            "unknown_account_skipped",
            extra={"account_id": account_id, "entry_id": entry_id},
        )
    return account


def _apply(
    balances: dict[str, Decimal],
    registry: AccountRegistry,
    account_id: str,
    side: NormalBalance,
    amount: Decimal,
    entry_id: str,
    strict_accounts: bool,
) -> None:
    account = lookup_account(registry, account_id, entry_id, strict_accounts)
    if account is None:
        return

    if natural_increase_side(account.account_type) == side:
        delta = amount
    else:
        delta = -amount
    balances[account_id] = balances.get(account_id, ZERO) + delta


@traced_engine(
    "signed_balances", "1.0", fingerprint_fields=("start", "end", "strict_accounts")
)
def signed_balances(
    entries: Sequence[JournalEntry],
    registry: AccountRegistry,
    start: date | None = None,
    end: date | None = None,
    strict_accounts: bool = False,
) -> dict[str, Decimal]:
    """
    Natural-side balance per account within the date range.

    For each entry, the debit account grows by ``amount`` when its natural
    side is DEBIT and shrinks otherwise; the credit account grows by
    ``amount`` when its natural side is CREDIT and shrinks otherwise.
    Every account touched by an in-range entry appears, even at zero.
    """
    in_range = filter_by_date(entries, start, end)
    validate_entries(in_range)

    balances: dict[str, Decimal] = {}
    for entry in in_range:
        _apply(
            balances, registry, entry.debit_account_id,
            NormalBalance.DEBIT, entry.amount, entry.id, strict_accounts,
        )
        _apply(
            balances, registry, entry.credit_account_id,
            NormalBalance.CREDIT, entry.amount, entry.id, strict_accounts,
        )
    return balances


def net_income(balances: dict[str, Decimal], registry: AccountRegistry) -> Decimal:
    """Sum of revenue balances minus sum of expense balances."""
    revenue = ZERO
    expenses = ZERO
    for account_id, balance in balances.items():
        account = registry.get(account_id)
        if account is None:
            continue
        if account.account_type == AccountType.REVENUE:
            revenue += balance
        elif account.account_type == AccountType.EXPENSE:
            expenses += balance
    return revenue - expenses
