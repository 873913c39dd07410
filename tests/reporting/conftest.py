"""
Reporting-specific test fixtures.

Provides:
- A small chart of accounts covering every account type and cash flow
  category
- One quarter of journal entries against it, plus bills, invoices and budgets
- An InMemoryJournalStore and ReportingService wired to a deterministic clock

Quarter totals (Jan-Mar 2024):
    cash 9200, equipment 4000, receivables 1000          -> assets 14200
    payables 400, loan 3000                               -> liabilities 3400
    capital 10000, net income 800 (sales 3200 - 2400)     -> equity 10800
"""

from datetime import date
from decimal import Decimal

import pytest

from ledger_config import LedgerConfig
from ledger_kernel.domain.accounts import (
    Account,
    AccountRegistry,
    AccountType,
    CashFlowCategory,
)
from ledger_kernel.domain.entities import (
    Bill,
    Budget,
    Counterparty,
    DocumentStatus,
    Invoice,
    JournalEntry,
    ReconLine,
)
from ledger_kernel.selectors import InMemoryJournalStore
from ledger_modules.reporting.service import ReportingService

CHART = (
    Account("cash", "Cash", AccountType.ASSET, code="1000", is_cash=True),
    Account("bank", "Bank", AccountType.ASSET, code="1010", is_cash=True),
    Account("ar", "Accounts Receivable", AccountType.ASSET, code="1100"),
    Account(
        "equip", "Equipment", AccountType.ASSET, code="1500",
        cash_flow_category=CashFlowCategory.INVESTING,
    ),
    Account(
        "ap", "Accounts Payable", AccountType.LIABILITY, code="2000",
        cash_flow_category=CashFlowCategory.OPERATING,
    ),
    Account("loan", "Bank Loan", AccountType.LIABILITY, code="2500"),
    Account("capital", "Owner Capital", AccountType.EQUITY, code="3000"),
    Account("sales", "Sales", AccountType.REVENUE, code="4000"),
    Account("rent", "Rent", AccountType.EXPENSE, code="6000"),
    Account("wages", "Wages", AccountType.EXPENSE, code="6100"),
)


def _je(entry_id, day, debit, credit, amount, description=""):
    return JournalEntry(
        entry_id, day, description or entry_id, debit, credit, Decimal(amount),
    )


QUARTER_ENTRIES = (
    _je("e1", date(2024, 1, 2), "cash", "capital", "10000", "Owner investment"),
    _je("e2", date(2024, 1, 10), "equip", "cash", "4000", "Buy equipment"),
    _je("e3", date(2024, 1, 15), "cash", "loan", "3000", "Loan drawdown"),
    _je("e4", date(2024, 2, 5), "ar", "sales", "2500", "Invoice customer"),
    _je("e5", date(2024, 2, 20), "cash", "ar", "1500", "Customer payment"),
    _je("e6", date(2024, 2, 28), "rent", "cash", "800", "February rent"),
    _je("e7", date(2024, 3, 10), "wages", "cash", "1200", "Payroll"),
    _je("e8", date(2024, 3, 15), "cash", "sales", "700", "Cash sale"),
    _je("e9", date(2024, 3, 20), "rent", "ap", "400", "Accrued rent"),
)

INVOICES = (
    Invoice("i1", "c1", date(2024, 2, 5), date(2024, 3, 6), Decimal("2500")),
    Invoice("i2", "c2", date(2024, 1, 5), date(2024, 2, 4), Decimal("300"),
            DocumentStatus.PAID),
)

BILLS = (
    Bill("b1", "v1", date(2024, 3, 20), date(2024, 4, 19), Decimal("400")),
    Bill("b2", "v2", date(2024, 1, 1), date(2024, 1, 31), Decimal("100")),
)

BUDGETS = (
    Budget("bg1", "rent", Decimal("1000"), "monthly"),
    Budget("bg2", "wages", Decimal("1000"), "monthly"),
    Budget("bg3", "rent", Decimal("3000"), "quarterly"),
    Budget("bg4", "sales", Decimal("5000"), "monthly"),
)

COUNTERPARTIES = (
    Counterparty("c1", "Northwind Traders"),
    Counterparty("v1", "City Properties"),
)


@pytest.fixture
def registry() -> AccountRegistry:
    return AccountRegistry(CHART)


@pytest.fixture
def entries() -> list[JournalEntry]:
    return list(QUARTER_ENTRIES)


@pytest.fixture
def journal_store() -> InMemoryJournalStore:
    """In-memory store holding the quarter's data and two statement lines each side."""
    return InMemoryJournalStore(
        accounts=CHART,
        entries=QUARTER_ENTRIES,
        bills=BILLS,
        invoices=INVOICES,
        bank_lines=[
            ReconLine("bank-1", date(2024, 2, 21), "Deposit", Decimal("1500")),
            ReconLine("bank-2", date(2024, 3, 1), "Rent", Decimal("-800")),
        ],
        book_lines=[
            ReconLine("book-1", date(2024, 2, 20), "Customer payment", Decimal("1500")),
            ReconLine("book-2", date(2024, 2, 28), "February rent", Decimal("-850")),
        ],
        budgets=BUDGETS,
        counterparties=COUNTERPARTIES,
    )


@pytest.fixture
def reporting_config() -> LedgerConfig:
    """Standard configuration for tests."""
    return LedgerConfig.with_defaults()


@pytest.fixture
def reporting_service(journal_store, deterministic_clock, reporting_config) -> ReportingService:
    """ReportingService wired to the in-memory store."""
    return ReportingService(
        journal_store,
        clock=deterministic_clock,
        config=reporting_config,
    )
