"""
Module: ledger_kernel.models.documents
Responsibility: ORM persistence for payables (bills) and receivables
    (invoices).
Architecture position: Kernel > Models.  May import from db/base.py only.

``status`` moves Unpaid -> Paid when a payment is recorded elsewhere; this
package only reads it.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import Base


class _DocumentColumns:
    counterparty_id: Mapped[str] = mapped_column(String(64), nullable=False)

    issue_date: Mapped[date] = mapped_column(nullable=False)

    due_date: Mapped[date] = mapped_column(nullable=False)

    amount: Mapped[Decimal] = mapped_column(nullable=False)

    status: Mapped[str] = mapped_column(String(20), default="Unpaid", nullable=False)


class BillRecord(_DocumentColumns, Base):
    """Vendor bill."""

    __tablename__ = "bills"

    __table_args__ = (Index("idx_bill_status", "status"),)


class InvoiceRecord(_DocumentColumns, Base):
    """Customer invoice."""

    __tablename__ = "invoices"

    __table_args__ = (Index("idx_invoice_status", "status"),)
