"""
Module: ledger_kernel.domain.accounts
Responsibility: Typed chart of accounts and the Account Registry -- the single
    source of truth for sign conventions and cash-flow classification.
Architecture position: Kernel > Domain.  Pure, zero I/O.  May import from
    kernel exceptions and logging only.

Invariants enforced:
    - Natural increase side is derived from AccountType in exactly one place
      (``natural_increase_side``).  Every report generator obtains signs via
      the accumulator, which calls this function.
    - Account type is immutable once an account exists (frozen dataclass).
    - ``revenue`` is the canonical name of the income type.  The legacy
      label ``Income`` is accepted only at parse time.

Failure modes:
    - AccountNotFoundError from ``AccountRegistry.resolve`` on a miss.
    - InvalidAccountTypeError from ``AccountType.parse`` and
      ``parse_legacy_account_type`` for unrecognized labels.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from ledger_kernel.exceptions import AccountNotFoundError, InvalidAccountTypeError
from ledger_kernel.logging_config import get_logger

logger = get_logger("domain.accounts")

UNKNOWN_ACCOUNT_NAME = "Unknown"


class AccountType(str, Enum):
    """Types of accounts in the chart of accounts."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"

    @classmethod
    def parse(cls, label: str | AccountType) -> AccountType:
        """
        Parse a canonical account type label, case-insensitively.

        ``Income`` is accepted as an alias for REVENUE.

        Raises:
            InvalidAccountTypeError: If the label is not a known type.
        """
        if isinstance(label, AccountType):
            return label
        key = str(label).strip().lower()
        if key == "income":
            return cls.REVENUE
        try:
            return cls(key)
        except ValueError:
            raise InvalidAccountTypeError(str(label)) from None


class NormalBalance(str, Enum):
    """Side on which an account's balance naturally increases."""

    DEBIT = "debit"
    CREDIT = "credit"


class CashFlowCategory(str, Enum):
    """Cash flow statement section an account's movement belongs to."""

    OPERATING = "operating"
    INVESTING = "investing"
    FINANCING = "financing"


_NATURAL_SIDE: dict[AccountType, NormalBalance] = {
    AccountType.ASSET: NormalBalance.DEBIT,
    AccountType.EXPENSE: NormalBalance.DEBIT,
    AccountType.LIABILITY: NormalBalance.CREDIT,
    AccountType.EQUITY: NormalBalance.CREDIT,
    AccountType.REVENUE: NormalBalance.CREDIT,
}

_DEFAULT_CASH_FLOW_CATEGORY: dict[AccountType, CashFlowCategory] = {
    AccountType.ASSET: CashFlowCategory.OPERATING,
    AccountType.LIABILITY: CashFlowCategory.FINANCING,
    AccountType.EQUITY: CashFlowCategory.FINANCING,
    AccountType.REVENUE: CashFlowCategory.OPERATING,
    AccountType.EXPENSE: CashFlowCategory.OPERATING,
}


def natural_increase_side(account_type: AccountType) -> NormalBalance:
    """
    Return the side on which an account type's balance increases.

    ASSET and EXPENSE increase on the debit side; LIABILITY, EQUITY and
    REVENUE increase on the credit side.
    """
    return _NATURAL_SIDE[AccountType.parse(account_type)]


@dataclass(frozen=True)
class Account:
    """
    Chart of accounts entry.

    Contract:
        ``account_type`` never changes once entries reference the account;
        only ``name`` may be changed, by replacing the record upstream.

    ``is_cash`` marks cash and bank accounts, which are excluded from the
    cash flow statement's movement lines.  ``cash_flow_category`` overrides
    the type default (e.g. fixed assets are INVESTING, current liabilities
    are OPERATING).
    """

    id: str
    name: str
    account_type: AccountType
    code: str | None = None
    is_cash: bool = False
    cash_flow_category: CashFlowCategory | None = None

    @property
    def normal_balance(self) -> NormalBalance:
        return natural_increase_side(self.account_type)


@dataclass(frozen=True)
class LegacyAccountType:
    """Result of translating a free-text account type label."""

    account_type: AccountType
    cash_flow_category: CashFlowCategory | None = None
    is_cash: bool = False


# Ordered: the first matching substring wins.  Liability labels come first
# so that "Bank Loan" or "Cash Advance Liability" is never read as cash.
_LEGACY_RULES: tuple[tuple[str, LegacyAccountType], ...] = (
    ("current liability", LegacyAccountType(AccountType.LIABILITY, CashFlowCategory.OPERATING)),
    ("loan", LegacyAccountType(AccountType.LIABILITY, CashFlowCategory.FINANCING)),
    ("liability", LegacyAccountType(AccountType.LIABILITY, CashFlowCategory.FINANCING)),
    ("cash", LegacyAccountType(AccountType.ASSET, CashFlowCategory.OPERATING, True)),
    ("bank", LegacyAccountType(AccountType.ASSET, CashFlowCategory.OPERATING, True)),
    ("income", LegacyAccountType(AccountType.REVENUE, CashFlowCategory.OPERATING)),
    ("revenue", LegacyAccountType(AccountType.REVENUE, CashFlowCategory.OPERATING)),
    ("expense", LegacyAccountType(AccountType.EXPENSE, CashFlowCategory.OPERATING)),
    ("current", LegacyAccountType(AccountType.ASSET, CashFlowCategory.OPERATING)),
    ("fixed asset", LegacyAccountType(AccountType.ASSET, CashFlowCategory.INVESTING)),
    ("investing", LegacyAccountType(AccountType.ASSET, CashFlowCategory.INVESTING)),
    ("equity", LegacyAccountType(AccountType.EQUITY, CashFlowCategory.FINANCING)),
    ("asset", LegacyAccountType(AccountType.ASSET, CashFlowCategory.OPERATING)),
)


def parse_legacy_account_type(label: str) -> LegacyAccountType:
    """
    Translate a free-text account type label from stored documents.

    Stored charts of accounts carry labels like "Current Asset",
    "Fixed Asset", "Bank" or "Income".  This runs once, when accounts are
    loaded, so that no report generator ever inspects type names.

    Raises:
        InvalidAccountTypeError: If no rule matches the label.
    """
    key = (label or "").strip().lower()
    for needle, result in _LEGACY_RULES:
        if needle in key:
            return result
    raise InvalidAccountTypeError(label)


class AccountRegistry:
    """
    Read-only lookup over a chart of accounts.

    Contract:
        ``resolve`` raises on a miss; ``get`` and ``name_for`` never raise so
        display-oriented reports stay resilient to partially loaded data.
    """

    def __init__(self, accounts: Iterable[Account] = ()):
        self._accounts: dict[str, Account] = {}
        for account in accounts:
            self._accounts[account.id] = account

        logger.debug(
            "account_registry_built",
            extra={"account_count": len(self._accounts)},
        )

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts.values())

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts

    def resolve(self, account_id: str) -> Account:
        """Return the account or raise AccountNotFoundError."""
        account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def get(self, account_id: str) -> Account | None:
        return self._accounts.get(account_id)

    def name_for(self, account_id: str) -> str:
        """Display name, or "Unknown" when the account is not loaded."""
        account = self._accounts.get(account_id)
        return account.name if account is not None else UNKNOWN_ACCOUNT_NAME

    def natural_increase_side(self, account_id: str) -> NormalBalance:
        return natural_increase_side(self.resolve(account_id).account_type)

    def cash_flow_category(self, account: Account) -> CashFlowCategory:
        """Explicit per-account category, else the account type default."""
        if account.cash_flow_category is not None:
            return account.cash_flow_category
        return _DEFAULT_CASH_FLOW_CATEGORY[account.account_type]

    def accounts_of_type(self, account_type: AccountType) -> tuple[Account, ...]:
        account_type = AccountType.parse(account_type)
        return tuple(
            a for a in self._accounts.values() if a.account_type == account_type
        )
