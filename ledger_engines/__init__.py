"""
Module: ledger_engines
Responsibility:
    Package entrypoint re-exporting the pure calculation engines: the
    balance accumulator, the aging calculator, and the reconciliation
    matching algorithms.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import ledger_kernel (domain, exceptions, logging).
    MUST NOT import ledger_services or ledger_modules.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      Reference dates are explicit parameters.
    - Decimal-only arithmetic for all monetary amounts.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from ledger_engines.accumulator import signed_balances, side_totals
    from ledger_engines.aging import AgingCalculator
    from ledger_engines.reconciliation import first_fit_pairs, compute_variance
"""

from ledger_engines.accumulator import (
    SideTotals,
    contribution_totals,
    filter_by_date,
    lookup_account,
    net_income,
    side_totals,
    signed_balances,
    validate_entries,
)
from ledger_engines.aging import (
    STANDARD_BUCKETS,
    AgeBucket,
    AgedItem,
    AgingCalculator,
    AgingReport,
    Priority,
    PriorityThresholds,
    validate_buckets,
)
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
from ledger_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    # Accumulator
    "SideTotals",
    "contribution_totals",
    "filter_by_date",
    "lookup_account",
    "net_income",
    "side_totals",
    "signed_balances",
    "validate_entries",
    # Aging
    "STANDARD_BUCKETS",
    "AgeBucket",
    "AgedItem",
    "AgingCalculator",
    "AgingReport",
    "Priority",
    "PriorityThresholds",
    "validate_buckets",
    # Reconciliation
    "AutoMatchResult",
    "MatchMethod",
    "MatchPair",
    "MatchStrategy",
    "ReconciliationSummary",
    "compute_variance",
    "first_fit_pairs",
    "maximum_pairs",
    "propose_matches",
    # Tracer
    "compute_input_fingerprint",
    "traced_engine",
]
