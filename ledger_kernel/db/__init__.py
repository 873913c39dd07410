"""Database layer - engine, base class and session utilities."""

from ledger_kernel.db.base import Base, new_id
from ledger_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    reset_engine,
    session_scope,
)

__all__ = [
    "Base",
    "new_id",
    "init_engine_from_url",
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "drop_tables",
    "reset_engine",
]
