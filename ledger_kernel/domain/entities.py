"""
Module: ledger_kernel.domain.entities
Responsibility: Immutable value objects for journal entries, payables,
    receivables, counterparties, budgets and reconciliation lines.
Architecture position: Kernel > Domain.  Pure, zero I/O.

Invariants:
    - All monetary fields are ``Decimal``.  Floats and strings arriving from a
      store are coerced with ``to_decimal`` (``Decimal(str(value))``), never
      ``Decimal(float)``.
    - JournalEntry invariants (amount > 0, distinct accounts) are checked by
      the accumulator per request, not here, so that raw store data can be
      loaded and rejected by the report that consumes it.
    - ``ReconLine.matched`` is the only mutable field in this module.  It is
      changed by the reconciliation session and nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Coerce a numeric value to Decimal via its string form."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class JournalEntry:
    """
    Atomic double-entry unit.

    Debits ``debit_account_id`` and credits ``credit_account_id`` by the same
    ``amount``.  Immutable after posting.
    """

    id: str
    date: date
    description: str
    debit_account_id: str
    credit_account_id: str
    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", to_decimal(self.amount))


class DocumentStatus(str, Enum):
    """Payment status of a bill or invoice.  Transitions Unpaid -> Paid only."""

    UNPAID = "Unpaid"
    PAID = "Paid"


class DocumentKind(str, Enum):
    """Which side of the business an open document sits on."""

    RECEIVABLE = "receivable"
    PAYABLE = "payable"


@dataclass(frozen=True)
class OpenDocument:
    """Common shape of bills and invoices."""

    id: str
    counterparty_id: str
    date: date
    due_date: date
    amount: Decimal
    status: DocumentStatus = DocumentStatus.UNPAID

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", to_decimal(self.amount))
        if not isinstance(self.status, DocumentStatus):
            object.__setattr__(self, "status", DocumentStatus(self.status))

    @property
    def is_open(self) -> bool:
        return self.status == DocumentStatus.UNPAID


@dataclass(frozen=True)
class Bill(OpenDocument):
    """Vendor bill (payable)."""


@dataclass(frozen=True)
class Invoice(OpenDocument):
    """Customer invoice (receivable)."""


@dataclass(frozen=True)
class Counterparty:
    """Vendor or customer, used for display in aging schedules."""

    id: str
    name: str


@dataclass(frozen=True)
class Budget:
    """Budgeted amount for an account over a labelled period (e.g. "2024-03")."""

    id: str
    account_id: str
    amount: Decimal
    period: str

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", to_decimal(self.amount))


@dataclass
class ReconLine:
    """
    A bank statement line or a book line awaiting reconciliation.

    ``amount`` is signed: negative is an outflow, positive an inflow.
    """

    id: str
    date: date
    description: str
    amount: Decimal
    matched: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            self.amount = to_decimal(self.amount)
