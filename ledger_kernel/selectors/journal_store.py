"""
Module: ledger_kernel.selectors.journal_store
Responsibility: Read-only journal store contract and its implementations.
    Every report and reconciliation session is fed from a JournalStore; the
    store decides where the collections come from.
Architecture position: Kernel > Selectors.  May import from models/,
    domain/, and selectors/base.py.

Invariants enforced:
    - Read-only.  No store method mutates its backing data.
    - DTO return convention: domain value objects are returned, never ORM
      rows.  Amounts are Decimal.
    - Account type labels are translated exactly once, here, by
      ``parse_legacy_account_type``.
    - Reconciliation lines are returned as fresh ``ReconLine`` objects on
      every call, so a session never mutates another session's flags.

Failure modes:
    - InvalidAccountTypeError if a stored account type label is unknown.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Protocol, runtime_checkable

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.accounts import Account, parse_legacy_account_type
from ledger_kernel.domain.entities import (
    Bill,
    Budget,
    Counterparty,
    DocumentStatus,
    Invoice,
    JournalEntry,
    ReconLine,
    to_decimal,
)
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models import (
    AccountRecord,
    BillRecord,
    BudgetRecord,
    CounterpartyRecord,
    InvoiceRecord,
    JournalEntryRecord,
    StatementLineRecord,
    StatementSource,
)
from ledger_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.journal_store")


@runtime_checkable
class JournalStore(Protocol):
    """Read-only source of ledger collections."""

    def list_accounts(self) -> list[Account]: ...

    def list_journal_entries(
        self,
        start: date | None = None,
        end: date | None = None,
    ) -> list[JournalEntry]: ...

    def list_bills(self, status: DocumentStatus | None = None) -> list[Bill]: ...

    def list_invoices(
        self, status: DocumentStatus | None = None
    ) -> list[Invoice]: ...

    def list_bank_lines(self) -> list[ReconLine]: ...

    def list_book_lines(self) -> list[ReconLine]: ...

    def list_budgets(self) -> list[Budget]: ...

    def list_counterparties(self) -> list[Counterparty]: ...


def _in_range(day: date, start: date | None, end: date | None) -> bool:
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def _copy_line(line: ReconLine) -> ReconLine:
    return ReconLine(
        id=line.id,
        date=line.date,
        description=line.description,
        amount=line.amount,
        matched=line.matched,
    )


class InMemoryJournalStore:
    """JournalStore over caller-supplied collections."""

    def __init__(
        self,
        accounts: Iterable[Account] = (),
        entries: Iterable[JournalEntry] = (),
        bills: Iterable[Bill] = (),
        invoices: Iterable[Invoice] = (),
        bank_lines: Iterable[ReconLine] = (),
        book_lines: Iterable[ReconLine] = (),
        budgets: Iterable[Budget] = (),
        counterparties: Iterable[Counterparty] = (),
    ):
        self._accounts = list(accounts)
        self._entries = list(entries)
        self._bills = list(bills)
        self._invoices = list(invoices)
        self._bank_lines = list(bank_lines)
        self._book_lines = list(book_lines)
        self._budgets = list(budgets)
        self._counterparties = list(counterparties)

    def list_accounts(self) -> list[Account]:
        return list(self._accounts)

    def list_journal_entries(
        self,
        start: date | None = None,
        end: date | None = None,
    ) -> list[JournalEntry]:
        return [e for e in self._entries if _in_range(e.date, start, end)]

    def list_bills(self, status: DocumentStatus | None = None) -> list[Bill]:
        return [b for b in self._bills if status is None or b.status == status]

    def list_invoices(self, status: DocumentStatus | None = None) -> list[Invoice]:
        return [i for i in self._invoices if status is None or i.status == status]

    def list_bank_lines(self) -> list[ReconLine]:
        return [_copy_line(line) for line in self._bank_lines]

    def list_book_lines(self) -> list[ReconLine]:
        return [_copy_line(line) for line in self._book_lines]

    def list_budgets(self) -> list[Budget]:
        return list(self._budgets)

    def list_counterparties(self) -> list[Counterparty]:
        return list(self._counterparties)


class SqlJournalStore(BaseSelector[JournalEntryRecord]):
    """
    JournalStore backed by SQLAlchemy ORM records.

    Contract:
        The caller owns the session.  Each call issues fresh queries; nothing
        is cached between calls.

    Guarantees:
        - Journal entries come back ordered by date, then id.
        - Amounts come back as Decimal.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    def list_accounts(self) -> list[Account]:
        rows = self.session.execute(
            select(AccountRecord).order_by(AccountRecord.id)
        ).scalars()

        accounts = []
        for row in rows:
            legacy = parse_legacy_account_type(row.account_type)
            accounts.append(
                Account(
                    id=row.id,
                    name=row.name,
                    account_type=legacy.account_type,
                    code=row.code,
                    is_cash=legacy.is_cash,
                    cash_flow_category=legacy.cash_flow_category,
                )
            )

        logger.debug("accounts_loaded", extra={"account_count": len(accounts)})
        return accounts

    def list_journal_entries(
        self,
        start: date | None = None,
        end: date | None = None,
    ) -> list[JournalEntry]:
        query = select(JournalEntryRecord)
        if start is not None:
            query = query.where(JournalEntryRecord.entry_date >= start)
        if end is not None:
            query = query.where(JournalEntryRecord.entry_date <= end)
        query = query.order_by(JournalEntryRecord.entry_date, JournalEntryRecord.id)

        entries = [
            JournalEntry(
                id=row.id,
                date=row.entry_date,
                description=row.description or "",
                debit_account_id=row.debit_account_id,
                credit_account_id=row.credit_account_id,
                amount=to_decimal(row.amount),
            )
            for row in self.session.execute(query).scalars()
        ]

        logger.debug(
            "journal_entries_loaded",
            extra={
                "entry_count": len(entries),
                "start": start,
                "end": end,
            },
        )
        return entries

    def list_bills(self, status: DocumentStatus | None = None) -> list[Bill]:
        query = select(BillRecord).order_by(BillRecord.due_date, BillRecord.id)
        if status is not None:
            query = query.where(BillRecord.status == DocumentStatus(status).value)
        return [
            Bill(
                id=row.id,
                counterparty_id=row.counterparty_id,
                date=row.issue_date,
                due_date=row.due_date,
                amount=to_decimal(row.amount),
                status=DocumentStatus(row.status),
            )
            for row in self.session.execute(query).scalars()
        ]

    def list_invoices(self, status: DocumentStatus | None = None) -> list[Invoice]:
        query = select(InvoiceRecord).order_by(InvoiceRecord.due_date, InvoiceRecord.id)
        if status is not None:
            query = query.where(InvoiceRecord.status == DocumentStatus(status).value)
        return [
            Invoice(
                id=row.id,
                counterparty_id=row.counterparty_id,
                date=row.issue_date,
                due_date=row.due_date,
                amount=to_decimal(row.amount),
                status=DocumentStatus(row.status),
            )
            for row in self.session.execute(query).scalars()
        ]

    def _statement_lines(self, source: StatementSource) -> list[ReconLine]:
        query = (
            select(StatementLineRecord)
            .where(StatementLineRecord.source == source.value)
            .order_by(StatementLineRecord.line_date, StatementLineRecord.id)
        )
        return [
            ReconLine(
                id=row.id,
                date=row.line_date,
                description=row.description or "",
                amount=to_decimal(row.amount),
                matched=bool(row.matched),
            )
            for row in self.session.execute(query).scalars()
        ]

    def list_bank_lines(self) -> list[ReconLine]:
        return self._statement_lines(StatementSource.BANK)

    def list_book_lines(self) -> list[ReconLine]:
        return self._statement_lines(StatementSource.BOOK)

    def list_budgets(self) -> list[Budget]:
        query = select(BudgetRecord).order_by(BudgetRecord.period, BudgetRecord.id)
        return [
            Budget(
                id=row.id,
                account_id=row.account_id,
                amount=to_decimal(row.amount),
                period=row.period,
            )
            for row in self.session.execute(query).scalars()
        ]

    def list_counterparties(self) -> list[Counterparty]:
        query = select(CounterpartyRecord).order_by(CounterpartyRecord.id)
        return [
            Counterparty(id=row.id, name=row.name)
            for row in self.session.execute(query).scalars()
        ]
