"""
ledger_config -- single public entrypoint for ledger configuration.

Responsibility:
    Provides the way to obtain configuration at runtime through
    ``get_active_config()``.  Services receive the returned ``LedgerConfig``
    by injection; no other component reads configuration files.

Architecture position:
    Configuration -- sits above ``ledger_kernel`` and ``ledger_engines`` and
    below ``ledger_services`` / ``ledger_modules``.  The kernel MUST NEVER
    import from ``ledger_config``.

Failure modes:
    - ``FileNotFoundError`` -- the requested file does not exist.
    - ``ConfigurationError`` -- unknown keys or invalid values.

Every successful ``get_active_config()`` call emits a ``LEDGER_CONFIG_TRACE``
log entry with the source path and checksum.
"""

from __future__ import annotations

from pathlib import Path

from ledger_config.loader import load_yaml_file, parse_config
from ledger_config.schema import (
    AgingSettings,
    LedgerConfig,
    ReconciliationSettings,
    ReportingSettings,
)
from ledger_kernel.logging_config import get_logger

_logger = get_logger("config")


def get_active_config(path: Path | str | None = None) -> LedgerConfig:
    """The public configuration entrypoint.

    Args:
        path: YAML file to load.  ``None`` returns the built-in defaults.

    Returns:
        A frozen, validated ``LedgerConfig``.
    """
    if path is None:
        config = parse_config({})
    else:
        path = Path(path)
        config = parse_config(load_yaml_file(path), source=str(path))

    _logger.info(
        "LEDGER_CONFIG_TRACE",
        extra={
            "trace_type": "LEDGER_CONFIG_TRACE",
            "source": config.source,
            "checksum": config.checksum,
            "entity_name": config.reporting.entity_name,
            "currency": config.reporting.currency,
            "default_strategy": config.reconciliation.default_strategy.value,
            "bucket_count": len(config.aging.buckets),
        },
    )
    return config


__all__ = [
    "AgingSettings",
    "LedgerConfig",
    "ReconciliationSettings",
    "ReportingSettings",
    "get_active_config",
    "load_yaml_file",
    "parse_config",
]
