"""Taxable income, municipal tax and state tax helpers."""

from __future__ import annotations

from swetax.backend.config.rate_tables import (
    BasicAllowanceConfig,
    StateTaxConfig,
    load_rate_tables,
)

from .allowance import calculate_basic_allowance
from .utils import calculate_progressive_tax


def calculate_taxable_income(
    gross_income: float,
    has_deductions: bool = False,
    deduction_amount: float = 0.0,
    allowance_config: BasicAllowanceConfig | None = None,
) -> float:
    """Return gross income less the basic allowance and applied deductions."""

    taxable = gross_income - calculate_basic_allowance(gross_income, allowance_config)
    if has_deductions and deduction_amount > 0:
        taxable -= deduction_amount
    return taxable if taxable > 0 else 0.0


def calculate_municipal_tax(taxable_income: float, rate: float) -> float:
    """Flat municipal tax (kommunalskatt) on ``taxable_income``."""

    if taxable_income <= 0:
        return 0.0
    return taxable_income * rate


def calculate_state_tax(
    taxable_income: float, config: StateTaxConfig | None = None
) -> float:
    """State tax (statlig skatt) on the slice of income above the threshold."""

    if config is None:
        config = load_rate_tables().state_tax
    return calculate_progressive_tax(taxable_income, config.brackets)
