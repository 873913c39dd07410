"""
Reporting service (``ledger_modules.reporting.service``).

Responsibility
--------------
Bridges a ``JournalStore`` to the pure builders in ``statements.py``,
``aging.py`` and ``dashboard.py``.  Every call loads fresh collections from
the store, builds the ``AccountRegistry``, delegates, and stamps
``ReportMetadata`` from the injected clock.  Also opens bank reconciliation
sessions over the store's statement lines.

Architecture position
---------------------
**Modules layer** -- thin glue.  Constructor: ``store`` + ``clock`` +
``config``.

Invariants enforced
-------------------
* Read-only -- the store is never written.
* No balances are cached between calls; a report always reflects the
  store's current contents.
* All monetary amounts use ``Decimal``.

Failure modes
-------------
* Store failures propagate unchanged.
* ``InvalidPeriodError`` for a bad trial balance period or a start date
  after the end date.
* ``AccountNotFoundError`` when ``strict_accounts`` is configured and an
  entry references an unregistered account.
"""

from __future__ import annotations

from datetime import date, datetime

from ledger_config import LedgerConfig, get_active_config
from ledger_engines.reconciliation import MatchStrategy
from ledger_kernel.domain.accounts import AccountRegistry
from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.entities import DocumentKind, DocumentStatus
from ledger_kernel.domain.periods import PeriodType, ReportPeriod, period_bounds
from ledger_kernel.logging_config import get_logger
from ledger_kernel.selectors.journal_store import JournalStore
from ledger_modules.reporting.aging import build_aging_schedule
from ledger_modules.reporting.dashboard import summarize_dashboard
from ledger_modules.reporting.models import (
    AgingScheduleReport,
    BalanceSheetReport,
    BudgetVsActualReport,
    CashFlowReport,
    DashboardSummary,
    GeneralLedgerReport,
    ProfitAndLossReport,
    ReportMetadata,
    ReportType,
    TrialBalanceReport,
)
from ledger_modules.reporting.statements import (
    build_balance_sheet,
    build_budget_vs_actual,
    build_cash_flow,
    build_general_ledger,
    build_profit_and_loss,
    build_trial_balance,
)
from ledger_services.reconciliation_service import BankReconciliationSession

logger = get_logger("modules.reporting.service")


class ReportingService:
    """
    Report generation over a journal store.

    Contract
    --------
    * Every public report method returns a typed report DTO.
    * ``start_reconciliation`` returns a new session working on fresh
      copies of the store's bank and book lines.

    Guarantees
    ----------
    * No financial logic lives here; builders do the arithmetic.
    * Clock is injectable for deterministic testing.
    """

    def __init__(
        self,
        store: JournalStore,
        clock: Clock | None = None,
        config: LedgerConfig | None = None,
    ):
        self._store = store
        self._clock = clock or SystemClock()
        self._config = config or get_active_config()

        logger.info(
            "reporting_service_initialized",
            extra={
                "entity_name": self._config.reporting.entity_name,
                "currency": self._config.reporting.currency,
            },
        )

    @property
    def config(self) -> LedgerConfig:
        return self._config

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _load_registry(self) -> AccountRegistry:
        return AccountRegistry(self._store.list_accounts())

    def _build_metadata(
        self,
        report_type: ReportType,
        as_of_date: date | None = None,
        period_start: date | None = None,
        period_end: date | None = None,
    ) -> ReportMetadata:
        """Build report metadata with injected clock timestamp."""
        return ReportMetadata(
            report_type=report_type,
            entity_name=self._config.reporting.entity_name,
            currency=self._config.reporting.currency,
            generated_at=self._clock.now().isoformat(),
            as_of_date=as_of_date,
            period_start=period_start,
            period_end=period_end,
        )

    # =========================================================================
    # Statements
    # =========================================================================

    def trial_balance(
        self,
        period_type: PeriodType | str,
        reference_month: date | str,
    ) -> TrialBalanceReport:
        """Debit and credit totals per account for one month, quarter or year."""
        period = period_bounds(period_type, reference_month)
        registry = self._load_registry()
        entries = self._store.list_journal_entries(period.start, period.end)

        metadata = self._build_metadata(
            ReportType.TRIAL_BALANCE,
            period_start=period.start,
            period_end=period.end,
        )
        report = build_trial_balance(
            entries, registry, period_type, reference_month,
            config=self._config.reporting, metadata=metadata,
        )

        logger.info(
            "trial_balance_generated",
            extra={
                "period_type": report.period_type,
                "period_start": period.start.isoformat(),
                "line_count": len(report.lines),
                "is_balanced": report.is_balanced,
            },
        )
        return report

    def balance_sheet(self, as_of: date | None = None) -> BalanceSheetReport:
        """Assets against liabilities plus equity, cumulative to ``as_of``."""
        registry = self._load_registry()
        entries = self._store.list_journal_entries(end=as_of)

        metadata = self._build_metadata(ReportType.BALANCE_SHEET, as_of_date=as_of)
        report = build_balance_sheet(
            entries, registry, as_of,
            config=self._config.reporting, metadata=metadata,
        )

        logger.info(
            "balance_sheet_generated",
            extra={
                "as_of_date": as_of.isoformat() if as_of else None,
                "total_assets": str(report.total_assets),
                "total_l_and_e": str(report.total_liabilities_and_equity),
                "is_balanced": report.is_balanced,
            },
        )
        return report

    def profit_and_loss(
        self,
        start: date | None = None,
        end: date | None = None,
    ) -> ProfitAndLossReport:
        ReportPeriod(start, end)
        registry = self._load_registry()
        entries = self._store.list_journal_entries(start, end)

        metadata = self._build_metadata(
            ReportType.PROFIT_AND_LOSS, period_start=start, period_end=end,
        )
        report = build_profit_and_loss(
            entries, registry, start, end,
            config=self._config.reporting, metadata=metadata,
        )

        logger.info(
            "profit_and_loss_generated",
            extra={
                "period_start": start.isoformat() if start else None,
                "period_end": end.isoformat() if end else None,
                "net_profit": str(report.net_profit),
            },
        )
        return report

    def cash_flow(
        self,
        start: date | None = None,
        end: date | None = None,
    ) -> CashFlowReport:
        ReportPeriod(start, end)
        registry = self._load_registry()
        entries = self._store.list_journal_entries(start, end)

        metadata = self._build_metadata(
            ReportType.CASH_FLOW, period_start=start, period_end=end,
        )
        report = build_cash_flow(
            entries, registry, start, end,
            config=self._config.reporting, metadata=metadata,
        )

        logger.info(
            "cash_flow_generated",
            extra={"net_cash_flow": str(report.net_cash_flow)},
        )
        return report

    def general_ledger(
        self,
        start: date | None = None,
        end: date | None = None,
        account_id: str | None = None,
    ) -> GeneralLedgerReport:
        ReportPeriod(start, end)
        registry = self._load_registry()
        entries = self._store.list_journal_entries(start, end)

        metadata = self._build_metadata(
            ReportType.GENERAL_LEDGER, period_start=start, period_end=end,
        )
        report = build_general_ledger(
            entries, registry, start, end, account_id, metadata=metadata,
        )

        logger.info(
            "general_ledger_generated",
            extra={"account_id": account_id, "line_count": len(report.lines)},
        )
        return report

    def budget_vs_actual(
        self,
        start: date | None = None,
        end: date | None = None,
        budget_period: str | None = None,
    ) -> BudgetVsActualReport:
        """Budgeted against actual spend per expense account."""
        ReportPeriod(start, end)
        registry = self._load_registry()
        entries = self._store.list_journal_entries(start, end)
        budgets = self._store.list_budgets()

        metadata = self._build_metadata(
            ReportType.BUDGET_VS_ACTUAL, period_start=start, period_end=end,
        )
        report = build_budget_vs_actual(
            entries, registry, budgets, start, end, budget_period,
            config=self._config.reporting, metadata=metadata,
        )

        logger.info(
            "budget_vs_actual_generated",
            extra={
                "budget_period": budget_period,
                "line_count": len(report.lines),
                "total_variance": str(report.total_variance),
            },
        )
        return report

    # =========================================================================
    # Aging
    # =========================================================================

    def _aging(
        self,
        kind: DocumentKind,
        report_type: ReportType,
        as_of: date | datetime | None,
    ) -> AgingScheduleReport:
        reference = as_of if as_of is not None else self._clock.now()
        if kind == DocumentKind.RECEIVABLE:
            documents = self._store.list_invoices(DocumentStatus.UNPAID)
        else:
            documents = self._store.list_bills(DocumentStatus.UNPAID)

        as_of_date = reference.date() if isinstance(reference, datetime) else reference
        metadata = self._build_metadata(report_type, as_of_date=as_of_date)
        report = build_aging_schedule(
            documents,
            reference,
            kind,
            counterparties=self._store.list_counterparties(),
            buckets=self._config.aging.buckets,
            thresholds=self._config.aging.thresholds,
            metadata=metadata,
        )

        logger.info(
            f"{report_type.value}_generated",
            extra={
                "as_of": reference.isoformat(),
                "item_count": report.item_count,
                "total_amount": str(report.total_amount),
            },
        )
        return report

    def receivables_aging(
        self, as_of: date | datetime | None = None,
    ) -> AgingScheduleReport:
        """Age Unpaid invoices.  ``as_of`` defaults to the clock's now."""
        return self._aging(
            DocumentKind.RECEIVABLE, ReportType.RECEIVABLES_AGING, as_of,
        )

    def payables_aging(
        self, as_of: date | datetime | None = None,
    ) -> AgingScheduleReport:
        """Age Unpaid bills.  ``as_of`` defaults to the clock's now."""
        return self._aging(
            DocumentKind.PAYABLE, ReportType.PAYABLES_AGING, as_of,
        )

    # =========================================================================
    # Dashboard and reconciliation
    # =========================================================================

    def dashboard(self, as_of: date | None = None) -> DashboardSummary:
        registry = self._load_registry()
        entries = self._store.list_journal_entries(end=as_of)

        metadata = self._build_metadata(ReportType.DASHBOARD, as_of_date=as_of)
        summary = summarize_dashboard(
            entries,
            registry,
            self._store.list_invoices(),
            self._store.list_bills(),
            as_of,
            config=self._config.reporting,
            metadata=metadata,
        )

        logger.info(
            "dashboard_generated",
            extra={
                "profit": str(summary.profit),
                "cash_balance": str(summary.cash_balance),
            },
        )
        return summary

    def start_reconciliation(
        self,
        strategy: MatchStrategy | str | None = None,
    ) -> BankReconciliationSession:
        """Open a reconciliation session over the store's statement lines."""
        settings = self._config.reconciliation
        return BankReconciliationSession(
            self._store.list_bank_lines(),
            self._store.list_book_lines(),
            default_strategy=MatchStrategy(strategy or settings.default_strategy),
            require_mismatch_confirmation=settings.require_mismatch_confirmation,
        )
