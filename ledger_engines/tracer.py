"""
ledger_engines.tracer -- LEDGER_ENGINE_TRACE records for pure calculations.

Every balance, aging, matching and report builder is wrapped with
``@traced_engine``.  Each call logs one record naming the calculation, its
version, a fingerprint of the arguments that decide its output, the size
of its primary input and how long it took.  Two calls with the same
fingerprint over the same data produce the same report.

Invariants enforced:
    - The fingerprint is the first 16 hex chars of SHA-256 over a canonical
      JSON document (sorted keys, Decimal and dates as strings, enums as
      their values).
    - Arguments are bound to parameter names first, so positional and
      keyword calls fingerprint identically.
    - A call that raises still logs its trace (``outcome="error"``) and the
      exception propagates unchanged.

Usage:
    @traced_engine("trial_balance", "1.0", fingerprint_fields=("period_type",))
    def build_trial_balance(entries, registry, period_type, reference_month):
        ...
"""

from __future__ import annotations

import functools
import hashlib
import inspect
import json
import time
from collections.abc import Callable, Sized
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from ledger_kernel.logging_config import get_logger

_logger = get_logger("engines.tracer")

TRACE_TYPE = "LEDGER_ENGINE_TRACE"


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return _plain(value.value)
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, (Decimal, float)):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    # Frozen dataclasses have a stable repr.
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: dict[str, Any],
) -> str:
    """
    Fingerprint the named arguments.

    Fields absent from ``arguments`` count as None, so leaving out an
    optional argument and passing None for it fingerprint the same.
    """
    document = {field: _plain(arguments.get(field)) for field in fingerprint_fields}
    canonical = json.dumps(document, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
    size_field: str | None = None,
) -> Callable:
    """
    Wrap a pure calculation so each call emits LEDGER_ENGINE_TRACE.

    Args:
        engine_name: Name logged as ``engine_name`` (e.g. "trial_balance").
        engine_version: Bumped whenever the calculation's output changes.
        fingerprint_fields: Parameter names that decide the output besides
            the data itself.
        size_field: Parameter whose length is logged as ``input_size``.
            Defaults to the first parameter other than ``self``/``cls``.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)
        measured = size_field or next(
            (name for name in signature.parameters if name not in ("self", "cls")),
            None,
        )

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            bound = signature.bind_partial(*args, **kwargs)
            bound.apply_defaults()
            fingerprint = (
                compute_input_fingerprint(fingerprint_fields, bound.arguments)
                if fingerprint_fields
                else ""
            )
            primary = bound.arguments.get(measured) if measured else None

            outcome = "error"
            started = time.monotonic()
            try:
                result = func(*args, **kwargs)
                outcome = "ok"
                return result
            finally:
                _logger.info(
                    TRACE_TYPE,
                    extra={
                        "trace_type": TRACE_TYPE,
                        "engine_name": engine_name,
                        "engine_version": engine_version,
                        "input_fingerprint": fingerprint,
                        "input_size": len(primary) if isinstance(primary, Sized) else None,
                        "outcome": outcome,
                        "duration_ms": round((time.monotonic() - started) * 1000, 2),
                        "function": func.__qualname__,
                    },
                )

        return wrapper

    return decorator
