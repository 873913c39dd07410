"""
Configuration schema (``ledger_config.schema``).

Frozen dataclasses describing every tunable of the reporting and
reconciliation layers.  Instances are produced by
``ledger_config.loader.parse_config`` and handed to services; nothing in
the kernel or engines reads configuration directly.

Defaults reproduce the standard behaviour: a 0.01 balance tolerance, zero
balances hidden, net income shown as "Current Year Earnings", five aging
buckets (Current, 1–30, 31–60, 61–90, 90+ days), and greedy first-fit
reconciliation with confirmation required for mismatched manual matches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from ledger_engines.aging import STANDARD_BUCKETS, AgeBucket, PriorityThresholds
from ledger_engines.reconciliation.types import MatchStrategy


@dataclass(frozen=True)
class ReportingSettings:
    """Options shared by every financial statement."""

    entity_name: str = "Company"
    currency: str = "USD"
    balance_tolerance: Decimal = Decimal("0.01")
    include_zero_balances: bool = False
    net_income_label: str = "Current Year Earnings"
    strict_accounts: bool = False


@dataclass(frozen=True)
class AgingSettings:
    """Aging buckets and priority thresholds for receivables and payables."""

    buckets: tuple[AgeBucket, ...] = STANDARD_BUCKETS
    thresholds: PriorityThresholds = field(default_factory=PriorityThresholds)


@dataclass(frozen=True)
class ReconciliationSettings:
    """Bank reconciliation behaviour."""

    default_strategy: MatchStrategy = MatchStrategy.FIRST_FIT
    require_mismatch_confirmation: bool = True


@dataclass(frozen=True)
class LedgerConfig:
    """The complete runtime configuration."""

    reporting: ReportingSettings = field(default_factory=ReportingSettings)
    aging: AgingSettings = field(default_factory=AgingSettings)
    reconciliation: ReconciliationSettings = field(
        default_factory=ReconciliationSettings,
    )
    source: str | None = None
    checksum: str = ""

    @classmethod
    def with_defaults(cls) -> LedgerConfig:
        """Create config with standard defaults."""
        return cls()
