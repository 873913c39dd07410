"""
ledger_services.reconciliation_service -- Bank statement reconciliation session.

Responsibility:
    Holds one bank reconciliation in progress: a collection of bank
    statement lines and a collection of book lines, each with a mutable
    ``matched`` flag.  Auto-match proposes pairs with the pure algorithms in
    ``ledger_engines.reconciliation`` and applies them; manual match pairs
    one operator-selected line from each side; finalize accepts the
    reconciliation when statement totals agree.

Architecture position:
    Services -- stateful orchestration over engines + kernel.

Invariants enforced:
    - ``matched`` flags change only through ``auto_match`` and
      ``manual_match``, and only from False to True.  There is no unmatch.
    - Every failed operation leaves all flags unchanged.
    - Auto-match is idempotent: a second run finds nothing new.
    - Finalization is a totals-only check: sum of ALL bank amounts must
      equal sum of ALL book amounts.  Unmatched lines do not block it.

Failure modes:
    - DuplicateLineIdError: two lines on one side share an id (raised by
      the constructor).
    - EmptySelectionError: nothing selected, or a side has no lines.
    - LineNotFoundError: a selected id is not in the session.
    - LineAlreadyMatchedError: a selected line was matched earlier.
    - MatchConfirmationRequiredError: manual match of different absolute
      amounts without ``confirm_mismatch=True``.
    - ReconciliationRejectedError: finalize with non-zero variance.

Concurrency:
    A session is single-writer.  Callers serialize auto_match and
    manual_match on the same session.

Usage:
    from ledger_services.reconciliation_service import BankReconciliationSession

    session = BankReconciliationSession(bank_lines, book_lines)
    result = session.auto_match()
    session.manual_match("bank-7", "book-9", confirm_mismatch=True)
    summary = session.finalize()
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from uuid import uuid4

from ledger_engines.reconciliation import (
    AutoMatchResult,
    MatchMethod,
    MatchPair,
    MatchStrategy,
    ReconciliationSummary,
    compute_variance,
    propose_matches,
)
from ledger_kernel.domain.entities import ReconLine
from ledger_kernel.exceptions import (
    DuplicateLineIdError,
    EmptySelectionError,
    LineAlreadyMatchedError,
    LineNotFoundError,
    MatchConfirmationRequiredError,
    ReconciliationRejectedError,
)
from ledger_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.reconciliation")

BANK_SIDE = "bank"
BOOK_SIDE = "book"


def _index_by_id(lines: list[ReconLine], side: str) -> dict[str, ReconLine]:
    by_id: dict[str, ReconLine] = {}
    for line in lines:
        if line.id in by_id:
            raise DuplicateLineIdError(line.id, side)
        by_id[line.id] = line
    return by_id


class BankReconciliationSession:
    """
    One bank reconciliation over two line collections.

    Contract:
        The session works on the ReconLine objects it is given and mutates
        their ``matched`` flags in place.  Line ids must be unique within
        each side.

    Guarantees:
        - ``pairs`` records every match made in this session, in order.
        - ``variance()`` always covers every line, matched or not.
    """

    def __init__(
        self,
        bank_lines: Iterable[ReconLine],
        book_lines: Iterable[ReconLine],
        default_strategy: MatchStrategy = MatchStrategy.FIRST_FIT,
        require_mismatch_confirmation: bool = True,
        session_id: str | None = None,
    ):
        self.bank_lines: list[ReconLine] = list(bank_lines)
        self.book_lines: list[ReconLine] = list(book_lines)
        self.default_strategy = MatchStrategy(default_strategy)
        self.require_mismatch_confirmation = require_mismatch_confirmation
        self.session_id = session_id or str(uuid4())
        self._pairs: list[MatchPair] = []
        self._finalized = False

        self._bank_by_id = _index_by_id(self.bank_lines, BANK_SIDE)
        self._book_by_id = _index_by_id(self.book_lines, BOOK_SIDE)

        logger.info("reconciliation_session_started", extra={
            "session_id": self.session_id,
            "bank_line_count": len(self.bank_lines),
            "book_line_count": len(self.book_lines),
            "default_strategy": self.default_strategy.value,
        })

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def pairs(self) -> tuple[MatchPair, ...]:
        return tuple(self._pairs)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def unmatched_bank_lines(self) -> tuple[ReconLine, ...]:
        return tuple(line for line in self.bank_lines if not line.matched)

    def unmatched_book_lines(self) -> tuple[ReconLine, ...]:
        return tuple(line for line in self.book_lines if not line.matched)

    def variance(self) -> Decimal:
        """Sum of all bank amounts minus sum of all book amounts."""
        return compute_variance(self.bank_lines, self.book_lines)

    def summary(self) -> ReconciliationSummary:
        bank_total = sum((line.amount for line in self.bank_lines), Decimal("0"))
        book_total = sum((line.amount for line in self.book_lines), Decimal("0"))
        return ReconciliationSummary(
            bank_line_count=len(self.bank_lines),
            book_line_count=len(self.book_lines),
            matched_bank_count=sum(1 for line in self.bank_lines if line.matched),
            matched_book_count=sum(1 for line in self.book_lines if line.matched),
            bank_total=bank_total,
            book_total=book_total,
            variance=bank_total - book_total,
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def auto_match(self, strategy: MatchStrategy | None = None) -> AutoMatchResult:
        """
        Pair unmatched lines of exactly equal amount and mark them matched.

        Raises:
            EmptySelectionError: If either side has no lines at all.
        """
        strategy = MatchStrategy(strategy or self.default_strategy)

        with LogContext.bind(session_id=self.session_id):
            if not self.bank_lines or not self.book_lines:
                logger.warning("auto_match_rejected_empty", extra={
                    "bank_line_count": len(self.bank_lines),
                    "book_line_count": len(self.book_lines),
                })
                raise EmptySelectionError(
                    "auto-match needs at least one bank line and one book line"
                )

            pairs = propose_matches(self.bank_lines, self.book_lines, strategy)
            for pair in pairs:
                self._bank_by_id[pair.bank_line_id].matched = True
                self._book_by_id[pair.book_line_id].matched = True
            self._pairs.extend(pairs)

            logger.info("auto_match_completed", extra={
                "strategy": strategy.value,
                "matches_found": len(pairs),
                "unmatched_bank_count": len(self.unmatched_bank_lines()),
                "unmatched_book_count": len(self.unmatched_book_lines()),
            })

        return AutoMatchResult.from_pairs(pairs, strategy)

    def manual_match(
        self,
        bank_line_id: str | None,
        book_line_id: str | None,
        confirm_mismatch: bool = False,
    ) -> MatchPair:
        """
        Pair one selected bank line with one selected book line.

        When the absolute amounts differ the operator must pass
        ``confirm_mismatch=True`` (unless the session was created with
        ``require_mismatch_confirmation=False``).
        """
        with LogContext.bind(session_id=self.session_id):
            if not bank_line_id or not book_line_id:
                raise EmptySelectionError(
                    "select one bank line and one book line"
                )

            bank = self._bank_by_id.get(bank_line_id)
            if bank is None:
                raise LineNotFoundError(bank_line_id, BANK_SIDE)
            book = self._book_by_id.get(book_line_id)
            if book is None:
                raise LineNotFoundError(book_line_id, BOOK_SIDE)

            if bank.matched:
                raise LineAlreadyMatchedError(bank_line_id, BANK_SIDE)
            if book.matched:
                raise LineAlreadyMatchedError(book_line_id, BOOK_SIDE)

            mismatch = abs(bank.amount) != abs(book.amount)
            if mismatch and self.require_mismatch_confirmation and not confirm_mismatch:
                logger.info("manual_match_confirmation_required", extra={
                    "bank_line_id": bank_line_id,
                    "book_line_id": book_line_id,
                    "bank_amount": bank.amount,
                    "book_amount": book.amount,
                })
                raise MatchConfirmationRequiredError(
                    bank_line_id, book_line_id, str(bank.amount), str(book.amount),
                )

            bank.matched = True
            book.matched = True
            pair = MatchPair(
                bank_line_id=bank.id,
                book_line_id=book.id,
                bank_amount=bank.amount,
                book_amount=book.amount,
                method=MatchMethod.MANUAL,
            )
            self._pairs.append(pair)

            logger.info("manual_match_completed", extra={
                "bank_line_id": bank_line_id,
                "book_line_id": book_line_id,
                "amount_mismatch": mismatch,
            })

        return pair

    def finalize(self) -> ReconciliationSummary:
        """
        Accept the reconciliation if statement totals agree.

        Raises:
            ReconciliationRejectedError: If variance is not exactly zero.
        """
        summary = self.summary()

        with LogContext.bind(session_id=self.session_id):
            if summary.variance != 0:
                logger.warning("reconciliation_finalize_rejected", extra={
                    "variance": summary.variance,
                    "bank_total": summary.bank_total,
                    "book_total": summary.book_total,
                })
                raise ReconciliationRejectedError(
                    str(summary.variance),
                    str(summary.bank_total),
                    str(summary.book_total),
                )

            self._finalized = True
            logger.info("reconciliation_finalized", extra={
                "matched_bank_count": summary.matched_bank_count,
                "unmatched_bank_count": summary.unmatched_bank_count,
                "unmatched_book_count": summary.unmatched_book_count,
            })

        return summary
