"""
Ledger Kernel

Foundation layer for the ledger aggregation engine:
- Typed chart of accounts with a single sign-convention rule
- Double-entry journal entries and receivable/payable documents
- Structured JSON logging and typed exceptions
- Read-only store adapters (in-memory and SQLAlchemy)
"""

__version__ = "0.1.0"
