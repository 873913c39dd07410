"""ORM records read by the SQL journal store."""

from ledger_kernel.models.account import AccountRecord, CounterpartyRecord
from ledger_kernel.models.documents import BillRecord, InvoiceRecord
from ledger_kernel.models.journal import JournalEntryRecord
from ledger_kernel.models.reconciliation import (
    BudgetRecord,
    StatementLineRecord,
    StatementSource,
)

__all__ = [
    "AccountRecord",
    "CounterpartyRecord",
    "JournalEntryRecord",
    "BillRecord",
    "InvoiceRecord",
    "StatementLineRecord",
    "StatementSource",
    "BudgetRecord",
]
