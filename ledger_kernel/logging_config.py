"""
Module: ledger_kernel.logging_config
Responsibility: Structured JSON logging for every ledger layer.  Reports,
    engines and reconciliation sessions log through loggers returned by
    ``get_logger`` so that a single handler on ``ledger_kernel`` sees them all.
Architecture position: Kernel.  Imported by every layer; imports nothing
    from the ledger packages.

Invariants enforced:
    - One JSON object per line, always carrying ``ts``, ``level``,
      ``logger`` and ``message``.
    - Values bound through ``LogContext`` are merged into every record
      emitted while they are bound.
    - Decimal amounts are rendered as strings, never floats.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

_LOGGER_PREFIX = "ledger_kernel"

_CONTEXT_FIELDS = ("correlation_id", "entity_name", "report_id", "session_id")

_context_vars: dict[str, ContextVar[str | None]] = {
    name: ContextVar(f"ledger_log_{name}", default=None) for name in _CONTEXT_FIELDS
}


class LogContext:
    """
    Contextvar-backed fields merged into every log record.

    Fields: correlation_id, entity_name, report_id, session_id.  Unknown
    field names raise ``KeyError`` so a typo never silently drops context.
    """

    @staticmethod
    def set(**fields: str | None) -> None:
        """Set fields for the rest of the current context.  None is ignored."""
        for name, value in fields.items():
            if value is not None:
                _context_vars[name].set(value)

    @staticmethod
    def get_all() -> dict[str, str]:
        values = {}
        for name, var in _context_vars.items():
            value = var.get()
            if value is not None:
                values[name] = value
        return values

    @staticmethod
    def clear() -> None:
        for var in _context_vars.values():
            var.set(None)

    @staticmethod
    @contextmanager
    def bind(**fields: str | None) -> Iterator[None]:
        """Set fields on entry and restore the previous values on exit."""
        tokens = [
            (_context_vars[name], _context_vars[name].set(value))
            for name, value in fields.items()
            if value is not None
        ]
        try:
            yield
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# Attributes every LogRecord carries; anything else on a record came from extra=.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _json_default(value: Any) -> Any:
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)


class StructuredFormatter(logging.Formatter):
    """Render a LogRecord as one JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(LogContext.get_all())
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in payload
        )
        if record.exc_info and record.exc_info[1] is not None:
            payload.update(self._exception_fields(record))
        return json.dumps(payload, default=_json_default)

    def _exception_fields(self, record: logging.LogRecord) -> dict[str, Any]:
        exc = record.exc_info[1]
        fields: dict[str, Any] = {
            "exc_type": type(exc).__name__,
            "exc_message": str(exc),
        }
        code = getattr(exc, "code", None)
        if code is not None:
            fields["exc_code"] = code
        # LedgerError subclasses keep their structured attributes in __dict__.
        for key, value in vars(exc).items():
            if not key.startswith("_") and key != "code":
                fields[f"exc_{key}"] = value
        fields["traceback"] = self.formatException(record.exc_info)
        return fields


def get_logger(name: str) -> logging.Logger:
    """Return ``ledger_kernel.<name>``."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach a JSON handler to the ``ledger_kernel`` logger.

    Only the first call has an effect until ``reset_logging`` runs.  ``level``
    accepts a logging constant or a level name such as ``"DEBUG"``.
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    ledger_logger = logging.getLogger(_LOGGER_PREFIX)
    ledger_logger.setLevel(level)
    ledger_logger.propagate = False

    target = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    target.setFormatter(StructuredFormatter())
    ledger_logger.addHandler(target)


def reset_logging() -> None:
    """Drop configured handlers so ``configure_logging`` runs again. Tests only."""
    global _configured
    with _lock:
        _configured = False
    ledger_logger = logging.getLogger(_LOGGER_PREFIX)
    ledger_logger.handlers.clear()
    ledger_logger.setLevel(logging.WARNING)
