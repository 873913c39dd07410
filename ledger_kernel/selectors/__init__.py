"""Read-only selectors and journal store adapters."""

from ledger_kernel.selectors.base import BaseSelector
from ledger_kernel.selectors.journal_store import (
    InMemoryJournalStore,
    JournalStore,
    SqlJournalStore,
)

__all__ = [
    "BaseSelector",
    "JournalStore",
    "InMemoryJournalStore",
    "SqlJournalStore",
]
