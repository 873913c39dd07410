"""
Bank reconciliation matching types.

Pure frozen dataclasses shared by the matching algorithms in
``ledger_engines.reconciliation.matcher`` and the stateful
``BankReconciliationSession`` in ``ledger_services``.

Architecture: ledger_engines/reconciliation -- pure domain, zero I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class MatchStrategy(str, Enum):
    """How auto-match pairs lines of equal amount.

    FIRST_FIT walks bank lines in order and takes the first unmatched book
    line of exactly equal amount.  MAXIMUM pairs as many lines as the
    equal-amount graph allows.
    """

    FIRST_FIT = "first_fit"
    MAXIMUM = "maximum"


class MatchMethod(str, Enum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"


@dataclass(frozen=True)
class MatchPair:
    """One bank line paired with one book line."""

    bank_line_id: str
    book_line_id: str
    bank_amount: Decimal
    book_amount: Decimal
    method: MatchMethod = MatchMethod.AUTOMATIC

    @property
    def is_exact(self) -> bool:
        return self.bank_amount == self.book_amount


@dataclass(frozen=True)
class AutoMatchResult:
    """Outcome of one auto-match pass."""

    matches_found: int
    pairs: tuple[MatchPair, ...] = ()
    strategy: MatchStrategy = MatchStrategy.FIRST_FIT

    @classmethod
    def from_pairs(
        cls,
        pairs: tuple[MatchPair, ...],
        strategy: MatchStrategy,
    ) -> AutoMatchResult:
        return cls(matches_found=len(pairs), pairs=pairs, strategy=strategy)


@dataclass(frozen=True)
class ReconciliationSummary:
    """Counts and totals for a reconciliation session."""

    bank_line_count: int
    book_line_count: int
    matched_bank_count: int
    matched_book_count: int
    bank_total: Decimal
    book_total: Decimal
    variance: Decimal

    @property
    def unmatched_bank_count(self) -> int:
        return self.bank_line_count - self.matched_bank_count

    @property
    def unmatched_book_count(self) -> int:
        return self.book_line_count - self.matched_book_count

    @property
    def match_rate(self) -> Decimal:
        """Share of bank lines matched, as a percentage (0 when empty)."""
        if self.bank_line_count == 0:
            return Decimal("0")
        return (
            Decimal(self.matched_bank_count) * Decimal("100")
            / Decimal(self.bank_line_count)
        ).quantize(Decimal("0.01"))

    @property
    def can_finalize(self) -> bool:
        return self.variance == 0
