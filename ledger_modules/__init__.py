"""
Ledger modules.

Thin orchestration layers over the ledger kernel and engines.

Modules:
- Reporting: statements, aging schedules, dashboard, ReportingService
"""
