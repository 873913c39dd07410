"""
Reconciliation - pure matching algorithms and result types.

The stateful BankReconciliationSession lives in
ledger_services.reconciliation_service.
"""

from ledger_engines.reconciliation.matcher import (
    compute_variance,
    first_fit_pairs,
    maximum_pairs,
    propose_matches,
)
from ledger_engines.reconciliation.types import (
    AutoMatchResult,
    MatchMethod,
    MatchPair,
    MatchStrategy,
    ReconciliationSummary,
)

__all__ = [
    "AutoMatchResult",
    "MatchMethod",
    "MatchPair",
    "MatchStrategy",
    "ReconciliationSummary",
    "compute_variance",
    "first_fit_pairs",
    "maximum_pairs",
    "propose_matches",
]
