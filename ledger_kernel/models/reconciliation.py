"""
Module: ledger_kernel.models.reconciliation
Responsibility: ORM persistence for reconciliation inputs (bank statement
    lines and book lines) and account budgets.
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import Base


class StatementSource(str, Enum):
    """Which side of a reconciliation a line comes from."""

    BANK = "bank"
    BOOK = "book"


class StatementLineRecord(Base):
    """Signed line: negative is an outflow, positive an inflow."""

    __tablename__ = "statement_lines"

    __table_args__ = (Index("idx_statement_line_source", "source"),)

    source: Mapped[str] = mapped_column(String(10), nullable=False)

    line_date: Mapped[date] = mapped_column(nullable=False)

    description: Mapped[str] = mapped_column(String(500), default="", nullable=False)

    amount: Mapped[Decimal] = mapped_column(nullable=False)

    matched: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class BudgetRecord(Base):
    """Budgeted amount for one account over a labelled period."""

    __tablename__ = "budgets"

    account_id: Mapped[str] = mapped_column(String(64), nullable=False)

    amount: Mapped[Decimal] = mapped_column(nullable=False)

    period: Mapped[str] = mapped_column(String(20), nullable=False)
