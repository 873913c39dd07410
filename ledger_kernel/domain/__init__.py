"""
Pure domain layer.

This module contains immutable value objects and domain rules with NO
dependencies on:
- ORM (SQLAlchemy)
- Database
- I/O

Time enters only through the injectable Clock.
"""

from ledger_kernel.domain.accounts import (
    UNKNOWN_ACCOUNT_NAME,
    Account,
    AccountRegistry,
    AccountType,
    CashFlowCategory,
    LegacyAccountType,
    NormalBalance,
    natural_increase_side,
    parse_legacy_account_type,
)
from ledger_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from ledger_kernel.domain.entities import (
    Bill,
    Budget,
    Counterparty,
    DocumentKind,
    DocumentStatus,
    Invoice,
    JournalEntry,
    OpenDocument,
    ReconLine,
    to_decimal,
)
from ledger_kernel.domain.periods import (
    PeriodType,
    ReportPeriod,
    parse_reference_month,
    period_bounds,
)

__all__ = [
    # Accounts
    "Account",
    "AccountRegistry",
    "AccountType",
    "CashFlowCategory",
    "LegacyAccountType",
    "NormalBalance",
    "UNKNOWN_ACCOUNT_NAME",
    "natural_increase_side",
    "parse_legacy_account_type",
    # Clock
    "Clock",
    "DeterministicClock",
    "SystemClock",
    # Entities
    "Bill",
    "Budget",
    "Counterparty",
    "DocumentKind",
    "DocumentStatus",
    "Invoice",
    "JournalEntry",
    "OpenDocument",
    "ReconLine",
    "to_decimal",
    # Periods
    "PeriodType",
    "ReportPeriod",
    "parse_reference_month",
    "period_bounds",
]
