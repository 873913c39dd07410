"""
Configuration Loader (``ledger_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the frozen
``ledger_config.schema`` dataclasses.  The runtime entry point is
``ledger_config.get_active_config()``.

Expected document shape (every key optional)::

    reporting:
      entity_name: Acme Ltd
      currency: GBP
      balance_tolerance: "0.01"
      include_zero_balances: false
      net_income_label: Current Year Earnings
      strict_accounts: false
    aging:
      buckets:
        - {name: Current, min_days: 0, max_days: 0}
        - {name: 1-30 Days, min_days: 1, max_days: 30}
        - {name: Over 30, min_days: 31, max_days: null}
      priority:
        critical_over: 90
        high_over: 60
        medium_over: 30
    reconciliation:
      default_strategy: first_fit      # or: maximum
      require_mismatch_confirmation: true

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys or invalid values  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from ledger_config.schema import (
    AgingSettings,
    LedgerConfig,
    ReconciliationSettings,
    ReportingSettings,
)
from ledger_engines.aging import AgeBucket, PriorityThresholds, validate_buckets
from ledger_engines.reconciliation.types import MatchStrategy
from ledger_kernel.exceptions import ConfigurationError

_SECTIONS = ("reporting", "aging", "reconciliation")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigurationError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(str(path), "top level must be a mapping")
    return data


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def _section(data: dict[str, Any], name: str, allowed: tuple[str, ...]) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(name, "must be a mapping")
    unknown = sorted(set(section) - set(allowed))
    if unknown:
        raise ConfigurationError(name, f"unknown keys {unknown}")
    return section


def _bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(key, f"expected true/false, got {value!r}")
    return value


def _str(key: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(key, f"expected a non-empty string, got {value!r}")
    return value


def _int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(key, f"expected an integer, got {value!r}")
    return value


def parse_reporting(data: dict[str, Any]) -> ReportingSettings:
    defaults = ReportingSettings()
    section = _section(data, "reporting", (
        "entity_name", "currency", "balance_tolerance",
        "include_zero_balances", "net_income_label", "strict_accounts",
    ))

    raw_tolerance = section.get("balance_tolerance", defaults.balance_tolerance)
    if isinstance(raw_tolerance, bool):
        raise ConfigurationError("reporting.balance_tolerance", "must be a number")
    try:
        tolerance = Decimal(str(raw_tolerance))
    except InvalidOperation:
        raise ConfigurationError(
            "reporting.balance_tolerance", f"not a number: {raw_tolerance!r}"
        ) from None
    if not tolerance.is_finite() or tolerance < 0:
        raise ConfigurationError(
            "reporting.balance_tolerance", "must be a non-negative number"
        )

    currency = _str("reporting.currency", section.get("currency", defaults.currency))
    if len(currency) != 3:
        raise ConfigurationError(
            "reporting.currency", "must be a 3-letter ISO 4217 code"
        )

    return ReportingSettings(
        entity_name=_str(
            "reporting.entity_name", section.get("entity_name", defaults.entity_name)
        ),
        currency=currency.upper(),
        balance_tolerance=tolerance,
        include_zero_balances=_bool(
            "reporting.include_zero_balances",
            section.get("include_zero_balances", defaults.include_zero_balances),
        ),
        net_income_label=_str(
            "reporting.net_income_label",
            section.get("net_income_label", defaults.net_income_label),
        ),
        strict_accounts=_bool(
            "reporting.strict_accounts",
            section.get("strict_accounts", defaults.strict_accounts),
        ),
    )


def parse_aging(data: dict[str, Any]) -> AgingSettings:
    defaults = AgingSettings()
    section = _section(data, "aging", ("buckets", "priority"))

    buckets = defaults.buckets
    if "buckets" in section:
        raw_buckets = section["buckets"]
        if not isinstance(raw_buckets, list):
            raise ConfigurationError("aging.buckets", "must be a list")
        try:
            buckets = tuple(
                AgeBucket(
                    name=_str("aging.buckets.name", raw["name"]),
                    min_days=_int("aging.buckets.min_days", raw["min_days"]),
                    max_days=(
                        None if raw.get("max_days") is None
                        else _int("aging.buckets.max_days", raw["max_days"])
                    ),
                )
                for raw in raw_buckets
            )
            validate_buckets(buckets)
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError("aging.buckets", str(exc)) from exc

    thresholds = defaults.thresholds
    if "priority" in section:
        raw_priority = section["priority"]
        if not isinstance(raw_priority, dict):
            raise ConfigurationError("aging.priority", "must be a mapping")
        try:
            thresholds = PriorityThresholds(**{
                key: _int(f"aging.priority.{key}", value)
                for key, value in raw_priority.items()
            })
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("aging.priority", str(exc)) from exc

    return AgingSettings(buckets=buckets, thresholds=thresholds)


def parse_reconciliation(data: dict[str, Any]) -> ReconciliationSettings:
    defaults = ReconciliationSettings()
    section = _section(data, "reconciliation", (
        "default_strategy", "require_mismatch_confirmation",
    ))

    raw_strategy = section.get("default_strategy", defaults.default_strategy)
    try:
        strategy = MatchStrategy(raw_strategy)
    except ValueError:
        raise ConfigurationError(
            "reconciliation.default_strategy",
            f"expected one of {[s.value for s in MatchStrategy]}, got {raw_strategy!r}",
        ) from None

    return ReconciliationSettings(
        default_strategy=strategy,
        require_mismatch_confirmation=_bool(
            "reconciliation.require_mismatch_confirmation",
            section.get(
                "require_mismatch_confirmation",
                defaults.require_mismatch_confirmation,
            ),
        ),
    )


def parse_config(data: dict[str, Any], source: str | None = None) -> LedgerConfig:
    """
    Parse a configuration mapping into a LedgerConfig.

    Raises:
        ConfigurationError: on unknown sections, unknown keys, or invalid
            values.
    """
    unknown = sorted(set(data) - set(_SECTIONS))
    if unknown:
        raise ConfigurationError("<root>", f"unknown sections {unknown}")

    return LedgerConfig(
        reporting=parse_reporting(data),
        aging=parse_aging(data),
        reconciliation=parse_reconciliation(data),
        source=source,
        checksum=compute_checksum(data),
    )
