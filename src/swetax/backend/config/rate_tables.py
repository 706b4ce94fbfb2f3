"""Configuration loader wrapping the rate table schema models."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    AVERAGE_MUNICIPALITY,
    AllowanceSegment,
    BasicAllowanceConfig,
    ConfigurationError,
    ConstantAllowance,
    LinearAllowance,
    PhaseOutAllowance,
    ProportionalAllowance,
    RateTables,
    SolverConfig,
    StateTaxConfig,
    TaxBracket,
    TaxConstants,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
RATES_FILE = CONFIG_DIRECTORY / "rates.yaml"

_LOGGER = logging.getLogger(__name__)


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


@lru_cache(maxsize=1)
def load_rate_tables() -> RateTables:
    """Load and cache the packaged rate tables."""

    if not RATES_FILE.exists():
        raise FileNotFoundError(f"Rate table configuration missing: {RATES_FILE.name}")

    raw_tables = _load_yaml(RATES_FILE)

    try:
        tables = RateTables.model_validate(raw_tables)
    except ValidationError as error:
        raise ConfigurationError(f"Rate table validation failed: {error}") from error

    _LOGGER.debug(
        "Loaded rate tables for %s with %d municipalities",
        tables.year,
        len(tables.municipalities),
    )
    return tables


def rate_for(municipality: str | None = None) -> float:
    """Return the flat municipal rate, falling back to the average rate."""

    tables = load_rate_tables()
    if not municipality:
        return tables.average_rate

    rate = tables.municipalities.get(municipality)
    if rate is None:
        _LOGGER.debug(
            "Unknown municipality %r; using the %s rate", municipality, AVERAGE_MUNICIPALITY
        )
        return tables.average_rate
    return rate


def list_municipalities() -> list[str]:
    """Return the configured municipality names in sorted order."""

    return load_rate_tables().municipality_names()


def get_tax_constants() -> dict[str, float]:
    """Return a snapshot copy of the global tax constants."""

    return load_rate_tables().constants.model_dump()


__all__ = [
    "AVERAGE_MUNICIPALITY",
    "AllowanceSegment",
    "BasicAllowanceConfig",
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "ConstantAllowance",
    "LinearAllowance",
    "PhaseOutAllowance",
    "ProportionalAllowance",
    "RATES_FILE",
    "RateTables",
    "SolverConfig",
    "StateTaxConfig",
    "TaxBracket",
    "TaxConstants",
    "get_tax_constants",
    "list_municipalities",
    "load_rate_tables",
    "rate_for",
]
