"""Tests for the pure reconciliation matching algorithms."""

from datetime import date
from decimal import Decimal

import pytest

from ledger_engines.reconciliation import (
    AutoMatchResult,
    MatchMethod,
    MatchPair,
    MatchStrategy,
    ReconciliationSummary,
    compute_variance,
    first_fit_pairs,
    maximum_pairs,
    propose_matches,
)
from ledger_kernel.domain.entities import ReconLine


def _line(line_id, amount, matched=False):
    return ReconLine(line_id, date(2024, 1, 10), line_id, Decimal(amount), matched)


class TestFirstFit:

    def test_pairs_equal_amounts_in_order(self):
        bank = [_line("b1", "-500"), _line("b2", "120")]
        book = [_line("k1", "120"), _line("k2", "-500")]
        pairs = first_fit_pairs(bank, book)
        assert [(p.bank_line_id, p.book_line_id) for p in pairs] == [
            ("b1", "k2"), ("b2", "k1"),
        ]

    def test_sign_matters(self):
        assert first_fit_pairs([_line("b1", "500")], [_line("k1", "-500")]) == ()

    def test_book_line_used_once(self):
        bank = [_line("b1", "50"), _line("b2", "50")]
        book = [_line("k1", "50")]
        pairs = first_fit_pairs(bank, book)
        assert len(pairs) == 1
        assert pairs[0].bank_line_id == "b1"

    def test_matched_lines_are_skipped(self):
        bank = [_line("b1", "50", matched=True), _line("b2", "50")]
        book = [_line("k1", "50", matched=True), _line("k2", "50")]
        pairs = first_fit_pairs(bank, book)
        assert [(p.bank_line_id, p.book_line_id) for p in pairs] == [("b2", "k2")]

    def test_flags_are_not_mutated(self):
        bank = [_line("b1", "10")]
        book = [_line("k1", "10")]
        first_fit_pairs(bank, book)
        assert not bank[0].matched and not book[0].matched

    def test_decimal_scale_does_not_matter(self):
        pairs = first_fit_pairs([_line("b1", "10.5")], [_line("k1", "10.50")])
        assert len(pairs) == 1


class TestMaximum:

    def test_groups_pair_up_to_the_smaller_side(self):
        bank = [_line("b1", "5"), _line("b2", "5"), _line("b3", "5"), _line("b4", "9")]
        book = [_line("k1", "5"), _line("k2", "9"), _line("k3", "5"), _line("k4", "9")]
        pairs = maximum_pairs(bank, book)
        assert len(pairs) == 3
        assert ("b1", "k1") in [(p.bank_line_id, p.book_line_id) for p in pairs]
        assert ("b4", "k2") in [(p.bank_line_id, p.book_line_id) for p in pairs]

    def test_same_cardinality_as_first_fit(self):
        bank = [_line(f"b{i}", str(i % 3 + 1)) for i in range(9)]
        book = [_line(f"k{i}", str(i % 4 + 1)) for i in range(8)]
        assert len(maximum_pairs(bank, book)) == len(first_fit_pairs(bank, book))


class TestProposeMatches:

    def test_strategy_by_value(self):
        pairs = propose_matches([_line("b1", "1")], [_line("k1", "1")], "maximum")
        assert pairs == (MatchPair("b1", "k1", Decimal("1"), Decimal("1")),)

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValueError):
            propose_matches([], [], "best_guess")

    def test_logs_pair_count(self, captured_logs):
        propose_matches([_line("b1", "1")], [_line("k1", "1")])
        proposed = [r for r in captured_logs() if r["message"] == "auto_match_proposed"]
        assert proposed[0]["pair_count"] == 1
        assert proposed[0]["strategy"] == "first_fit"


class TestTypes:

    def test_variance_covers_all_lines(self):
        bank = [_line("b1", "100", matched=True), _line("b2", "50")]
        book = [_line("k1", "100", matched=True), _line("k2", "20")]
        assert compute_variance(bank, book) == Decimal("30")

    def test_pair_exactness(self):
        assert MatchPair("b", "k", Decimal("5"), Decimal("5")).is_exact
        manual = MatchPair("b", "k", Decimal("5"), Decimal("7"), MatchMethod.MANUAL)
        assert not manual.is_exact

    def test_auto_match_result_from_pairs(self):
        pair = MatchPair("b", "k", Decimal("5"), Decimal("5"))
        result = AutoMatchResult.from_pairs((pair,), MatchStrategy.MAXIMUM)
        assert result.matches_found == 1
        assert result.strategy == MatchStrategy.MAXIMUM

    def test_summary_derived_fields(self):
        summary = ReconciliationSummary(
            bank_line_count=3, book_line_count=4,
            matched_bank_count=2, matched_book_count=2,
            bank_total=Decimal("10"), book_total=Decimal("10"),
            variance=Decimal("0"),
        )
        assert summary.unmatched_bank_count == 1
        assert summary.unmatched_book_count == 2
        assert summary.match_rate == Decimal("66.67")
        assert summary.can_finalize

    def test_empty_summary_match_rate(self):
        summary = ReconciliationSummary(0, 0, 0, 0, Decimal("0"), Decimal("0"), Decimal("0"))
        assert summary.match_rate == Decimal("0")
