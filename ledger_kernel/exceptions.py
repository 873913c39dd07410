"""
Typed Exception Hierarchy for the Ledger Kernel.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from LedgerError:

    LedgerError (base)
    |
    +-- ValidationError
    |   +-- InvalidAmountError
    |   +-- SameAccountEntryError
    |   +-- AccountNotFoundError
    |   +-- InvalidAccountTypeError
    |   +-- InvalidPeriodError
    |   +-- DuplicateLineIdError
    |
    +-- ReconciliationError
    |   +-- EmptySelectionError
    |   +-- LineNotFoundError
    |   +-- LineAlreadyMatchedError
    |   +-- MatchConfirmationRequiredError
    |   +-- ReconciliationRejectedError
    |
    +-- ConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Validation      | INVALID_AMOUNT              | Journal entry amount <= 0
                | SAME_ACCOUNT_ENTRY          | Debit account == credit account
                | ACCOUNT_NOT_FOUND           | Account ID has no registry record
                | INVALID_ACCOUNT_TYPE        | Unknown account type label
                | INVALID_PERIOD              | Bad period type / reference month / range
                | DUPLICATE_LINE_ID           | Two reconciliation lines on one side share an ID
----------------|-----------------------------|-----------------------------------------
Reconciliation  | EMPTY_SELECTION             | Nothing selected / nothing to match
                | LINE_NOT_FOUND              | Selected line ID does not exist
                | LINE_ALREADY_MATCHED        | Selected line was matched earlier
                | MATCH_CONFIRMATION_REQUIRED | Amounts differ and no confirmation given
                | RECONCILIATION_REJECTED     | Finalize attempted with variance != 0
----------------|-----------------------------|-----------------------------------------
Config          | CONFIGURATION_ERROR         | Invalid configuration value

===============================================================================
HANDLING PATTERNS
===============================================================================

Every failure at this layer is local to a single request and recoverable by
re-invoking with corrected input.  There is no retry policy: computations
are deterministic.

    try:
        report = build_trial_balance(entries, registry, "monthly", "2024-03")
    except ValidationError as e:
        return {"error": e.code, "message": str(e)}

    try:
        session.finalize()
    except ReconciliationRejectedError as e:
        notify_user(f"Variance of {e.variance} remains")

Imbalance is NOT an exception: trial balance and balance sheet reports carry
``is_balanced`` and ``difference`` fields, and the caller decides how to
present them.  Missing reference data in display-oriented output is shown as
"Unknown" rather than raised.
"""


class LedgerError(Exception):
    """
    Base exception for all ledger errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_ERROR"


# Validation exceptions


class ValidationError(LedgerError):
    """Malformed input to a report or engine operation."""

    code: str = "VALIDATION_ERROR"


class InvalidAmountError(ValidationError):
    """Journal entry amount is not strictly positive."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, entry_id: str, amount: str):
        self.entry_id = entry_id
        self.amount = amount
        super().__init__(
            f"Journal entry {entry_id} has non-positive amount {amount}"
        )


class SameAccountEntryError(ValidationError):
    """Journal entry debits and credits the same account."""

    code: str = "SAME_ACCOUNT_ENTRY"

    def __init__(self, entry_id: str, account_id: str):
        self.entry_id = entry_id
        self.account_id = account_id
        super().__init__(
            f"Journal entry {entry_id} debits and credits the same "
            f"account {account_id}"
        )


class AccountNotFoundError(ValidationError):
    """Account with given ID was not found in the registry."""

    code: str = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class InvalidAccountTypeError(ValidationError):
    """Account type label cannot be mapped to a known account type."""

    code: str = "INVALID_ACCOUNT_TYPE"

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Unknown account type: {label!r}")


class InvalidPeriodError(ValidationError):
    """Report period parameters are invalid."""

    code: str = "INVALID_PERIOD"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid period: {reason}")


class DuplicateLineIdError(ValidationError):
    """Two reconciliation lines on the same side carry the same ID."""

    code: str = "DUPLICATE_LINE_ID"

    def __init__(self, line_id: str, side: str):
        self.line_id = line_id
        self.side = side
        super().__init__(f"Duplicate {side} line ID: {line_id}")


# Reconciliation exceptions


class ReconciliationError(LedgerError):
    """Base exception for recoverable reconciliation errors."""

    code: str = "RECONCILIATION_ERROR"


class EmptySelectionError(ReconciliationError):
    """Match requested with no selection or nothing to match against."""

    code: str = "EMPTY_SELECTION"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Nothing to match: {reason}")


class LineNotFoundError(ReconciliationError):
    """Selected reconciliation line does not exist in the session."""

    code: str = "LINE_NOT_FOUND"

    def __init__(self, line_id: str, side: str):
        self.line_id = line_id
        self.side = side
        super().__init__(f"{side} line not found: {line_id}")


class LineAlreadyMatchedError(ReconciliationError):
    """Selected reconciliation line has already been matched."""

    code: str = "LINE_ALREADY_MATCHED"

    def __init__(self, line_id: str, side: str):
        self.line_id = line_id
        self.side = side
        super().__init__(f"{side} line {line_id} is already matched")


class MatchConfirmationRequiredError(ReconciliationError):
    """Manual match with differing amounts needs explicit confirmation."""

    code: str = "MATCH_CONFIRMATION_REQUIRED"

    def __init__(
        self,
        bank_line_id: str,
        book_line_id: str,
        bank_amount: str,
        book_amount: str,
    ):
        self.bank_line_id = bank_line_id
        self.book_line_id = book_line_id
        self.bank_amount = bank_amount
        self.book_amount = book_amount
        super().__init__(
            f"Amounts differ for bank line {bank_line_id} ({bank_amount}) "
            f"and book line {book_line_id} ({book_amount}); "
            "confirmation required"
        )


class ReconciliationRejectedError(ReconciliationError):
    """Finalization blocked while statement totals disagree."""

    code: str = "RECONCILIATION_REJECTED"

    def __init__(self, variance: str, bank_total: str, book_total: str):
        self.variance = variance
        self.bank_total = bank_total
        self.book_total = book_total
        super().__init__(
            f"Cannot finalize reconciliation: variance {variance} "
            f"(bank {bank_total}, books {book_total})"
        )


# Configuration exceptions


class ConfigurationError(LedgerError):
    """Configuration value is missing or invalid."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration for {key}: {reason}")
