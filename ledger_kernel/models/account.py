"""
Module: ledger_kernel.models.account
Responsibility: ORM persistence for the chart of accounts and counterparties.
Architecture position: Kernel > Models.  May import from db/base.py only.

``account_type`` holds the label as stored by the bookkeeping front end
("Current Asset", "Fixed Asset", "Bank", "Income", ...).  It is translated
into a typed AccountType by the SQL journal store at load time.
"""

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import Base


class AccountRecord(Base):
    """Chart of accounts row."""

    __tablename__ = "accounts"

    __table_args__ = (
        UniqueConstraint("code", name="uq_account_code"),
        Index("idx_account_type", "account_type"),
    )

    code: Mapped[str | None] = mapped_column(String(50), nullable=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    account_type: Mapped[str] = mapped_column(String(50), nullable=False)

    def __repr__(self) -> str:
        return f"<AccountRecord {self.id}: {self.name} ({self.account_type})>"


class CounterpartyRecord(Base):
    """Vendor or customer row."""

    __tablename__ = "counterparties"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<CounterpartyRecord {self.id}: {self.name}>"
