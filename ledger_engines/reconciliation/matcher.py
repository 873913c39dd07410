"""
Bank reconciliation matching algorithms.

Pure functions over bank lines and book lines.  They read the ``matched``
flag to skip lines already paired, and return the pairs they propose; they
never set the flag themselves.  ``BankReconciliationSession`` applies the
result.

Both strategies only pair lines whose amounts are exactly equal (Decimal
equality, sign included).

    first_fit_pairs  For each unmatched bank line in collection order, take
                     the first unmatched book line of equal amount.  Single
                     pass, no backtracking.
    maximum_pairs    Maximum-cardinality matching on the equal-amount graph.
                     That graph is a disjoint union of complete bipartite
                     groups (one per amount), so the maximum is
                     sum(min(bank count, book count)) over amounts.  Within
                     a group lines pair in collection order.

Variance is a statement-level check: sum of ALL bank amounts minus sum of
ALL book amounts, matched or not.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from ledger_engines.reconciliation.types import MatchPair, MatchStrategy
from ledger_engines.tracer import traced_engine
from ledger_kernel.domain.entities import ReconLine
from ledger_kernel.logging_config import get_logger

logger = get_logger("engines.reconciliation.matcher")


def first_fit_pairs(
    bank_lines: Sequence[ReconLine],
    book_lines: Sequence[ReconLine],
) -> tuple[MatchPair, ...]:
    """Greedy first-fit pairing by exactly equal amount."""
    taken: set[int] = set()
    pairs: list[MatchPair] = []

    for bank in bank_lines:
        if bank.matched:
            continue
        for index, book in enumerate(book_lines):
            if book.matched or index in taken:
                continue
            if book.amount == bank.amount:
                taken.add(index)
                pairs.append(MatchPair(bank.id, book.id, bank.amount, book.amount))
                break

    return tuple(pairs)


def maximum_pairs(
    bank_lines: Sequence[ReconLine],
    book_lines: Sequence[ReconLine],
) -> tuple[MatchPair, ...]:
    """Maximum-cardinality pairing by exactly equal amount."""
    books_by_amount: dict[Decimal, list[ReconLine]] = {}
    for book in book_lines:
        if not book.matched:
            books_by_amount.setdefault(book.amount, []).append(book)

    pairs: list[MatchPair] = []
    for bank in bank_lines:
        if bank.matched:
            continue
        candidates = books_by_amount.get(bank.amount)
        if candidates:
            book = candidates.pop(0)
            pairs.append(MatchPair(bank.id, book.id, bank.amount, book.amount))

    return tuple(pairs)


_STRATEGIES = {
    MatchStrategy.FIRST_FIT: first_fit_pairs,
    MatchStrategy.MAXIMUM: maximum_pairs,
}


@traced_engine("auto_match", "1.0", fingerprint_fields=("strategy",))
def propose_matches(
    bank_lines: Sequence[ReconLine],
    book_lines: Sequence[ReconLine],
    strategy: MatchStrategy = MatchStrategy.FIRST_FIT,
) -> tuple[MatchPair, ...]:
    """Run the chosen strategy and log how many pairs it found."""
    strategy = MatchStrategy(strategy)
    pairs = _STRATEGIES[strategy](bank_lines, book_lines)

    logger.info("auto_match_proposed", extra={
        "strategy": strategy.value,
        "bank_line_count": len(bank_lines),
        "book_line_count": len(book_lines),
        "pair_count": len(pairs),
    })
    return pairs


def compute_variance(
    bank_lines: Sequence[ReconLine],
    book_lines: Sequence[ReconLine],
) -> Decimal:
    """Sum of all bank amounts minus sum of all book amounts."""
    bank_total = sum((line.amount for line in bank_lines), Decimal("0"))
    book_total = sum((line.amount for line in book_lines), Decimal("0"))
    return bank_total - book_total
