"""
ledger_services -- stateful orchestration over engines and kernel.

Dependency direction:
    ledger_services/ -> ledger_engines/  (allowed)
    ledger_services/ -> ledger_kernel/   (allowed)
    ledger_engines/  -> ledger_services/ (FORBIDDEN)
    ledger_kernel/   -> ledger_services/ (FORBIDDEN)
"""

from ledger_services.reconciliation_service import BankReconciliationSession

__all__ = ["BankReconciliationSession"]
