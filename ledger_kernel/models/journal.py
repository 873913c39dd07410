"""
Module: ledger_kernel.models.journal
Responsibility: ORM persistence for double-entry journal entries.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants (checked when reports consume the rows, not on insert):
    - amount > 0
    - debit_account_id != credit_account_id

Account ids are plain strings without foreign keys: rows imported from a
document store may reference accounts that were never loaded.  Reports show
those as "Unknown".
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import Base


class JournalEntryRecord(Base):
    """One debit/credit pair of equal amount."""

    __tablename__ = "journal_entries"

    __table_args__ = (
        Index("idx_journal_entry_date", "entry_date"),
        Index("idx_journal_debit_account", "debit_account_id"),
        Index("idx_journal_credit_account", "credit_account_id"),
    )

    entry_date: Mapped[date] = mapped_column(nullable=False)

    description: Mapped[str] = mapped_column(String(500), default="", nullable=False)

    debit_account_id: Mapped[str] = mapped_column(String(64), nullable=False)

    credit_account_id: Mapped[str] = mapped_column(String(64), nullable=False)

    amount: Mapped[Decimal] = mapped_column(nullable=False)

    def __repr__(self) -> str:
        return (
            f"<JournalEntryRecord {self.id}: {self.debit_account_id} / "
            f"{self.credit_account_id} {self.amount}>"
        )
