"""Validate caller input and assemble the income tax breakdown.

The calculation service resolves the rate tables, runs the allowance and tax
calculators on taxable income, and then restates the result against gross
income. Amounts are rounded only once the unrounded figures are final so that
the monthly breakdown is derived from the same values as the annual one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from swetax.backend.app.models import (
    DeductionSummary,
    MonthlyBreakdown,
    TaxableBasis,
    TaxBreakdown,
    TaxInput,
    TaxResult,
    format_validation_error,
)
from swetax.backend.config.rate_tables import RateTables, load_rate_tables, rate_for

from .calculators import (
    calculate_basic_allowance,
    calculate_municipal_tax,
    calculate_state_tax,
    calculate_taxable_income,
    round_currency,
    round_rate,
)

_LOGGER = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


class TaxInputError(ValueError):
    """Raised when income details cannot be used for a calculation."""

    error_code = "validation_error"


class NegativeIncomeError(TaxInputError):
    """Raised when the gross income is below zero."""

    error_code = "negative_income"

    def __init__(self, gross_income: float) -> None:
        super().__init__("Gross income cannot be negative")
        self.gross_income = gross_income


class NegativeDeductionError(TaxInputError):
    """Raised when an applied deduction amount is below zero."""

    error_code = "negative_deduction"

    def __init__(self, deduction_amount: float) -> None:
        super().__init__("Deduction amount cannot be negative")
        self.deduction_amount = deduction_amount


def _coerce_input(payload: Mapping[str, Any] | TaxInput) -> TaxInput:
    if isinstance(payload, TaxInput):
        return payload
    if not isinstance(payload, Mapping):
        raise ValueError("Payload must be a mapping")
    try:
        return TaxInput.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc


def _validate_amounts(tax_input: TaxInput) -> None:
    if tax_input.gross_income < 0:
        raise NegativeIncomeError(tax_input.gross_income)
    if tax_input.has_deductions and tax_input.deduction_amount < 0:
        raise NegativeDeductionError(tax_input.deduction_amount)


def _build_taxable_basis(tax_input: TaxInput, tables: RateTables) -> TaxableBasis:
    gross_income = tax_input.gross_income
    taxable_income = calculate_taxable_income(
        gross_income,
        tax_input.has_deductions,
        tax_input.deduction_amount,
        tables.basic_allowance,
    )
    municipal_rate = rate_for(tax_input.municipality)

    return TaxableBasis(
        gross_income=gross_income,
        basic_allowance=calculate_basic_allowance(gross_income, tables.basic_allowance),
        taxable_income=taxable_income,
        municipal_rate=municipal_rate,
        municipal_tax=calculate_municipal_tax(taxable_income, municipal_rate),
        state_tax=calculate_state_tax(taxable_income, tables.state_tax),
    )


def _restate_against_gross(basis: TaxableBasis) -> TaxBreakdown:
    """Round the tax amounts and express net income and rate against gross income."""

    total_tax = round_currency(basis.total_tax)
    gross_income = basis.gross_income
    effective_rate = total_tax / gross_income * 100 if gross_income > 0 else 0.0

    return TaxBreakdown(
        municipal_tax=round_currency(basis.municipal_tax),
        state_tax=round_currency(basis.state_tax),
        total_tax=total_tax,
        net_income=round_currency(gross_income - total_tax),
        effective_tax_rate=round_rate(effective_rate),
    )


def _monthly_breakdown(gross_income: float, total_tax: int) -> MonthlyBreakdown:
    return MonthlyBreakdown(
        gross_monthly=round_currency(gross_income / MONTHS_PER_YEAR),
        tax_monthly=round_currency(total_tax / MONTHS_PER_YEAR),
        net_monthly=round_currency((gross_income - total_tax) / MONTHS_PER_YEAR),
    )


def calculate_tax(payload: Mapping[str, Any] | TaxInput) -> TaxResult:
    """Compute the annual and monthly tax breakdown for ``payload``."""

    tax_input = _coerce_input(payload)
    _validate_amounts(tax_input)

    tables = load_rate_tables()
    basis = _build_taxable_basis(tax_input, tables)
    breakdown = _restate_against_gross(basis)

    deductions: DeductionSummary | None = None
    if tax_input.has_deductions and tax_input.deduction_amount > 0:
        deductions = DeductionSummary(
            amount=round_currency(tax_input.deduction_amount),
            taxable_income=round_currency(basis.taxable_income),
        )

    _LOGGER.debug(
        "Calculated tax for gross %.2f at rate %.4f: taxable %.2f, total %d",
        basis.gross_income,
        basis.municipal_rate,
        basis.taxable_income,
        breakdown.total_tax,
    )

    return TaxResult(
        gross_income=round_currency(basis.gross_income),
        breakdown=breakdown,
        monthly_breakdown=_monthly_breakdown(basis.gross_income, breakdown.total_tax),
        deductions=deductions,
    )


def calculate_tax_from_monthly(
    monthly_income: float,
    municipality: str | None = None,
    has_deductions: bool = False,
    deduction_amount: float | None = None,
) -> TaxResult:
    """Compute the tax breakdown for a monthly income and monthly deduction."""

    annual_deduction = deduction_amount * MONTHS_PER_YEAR if deduction_amount else 0.0

    return calculate_tax(
        TaxInput(
            gross_income=monthly_income * MONTHS_PER_YEAR,
            municipality=municipality,
            has_deductions=has_deductions,
            deduction_amount=annual_deduction,
        )
    )


__all__ = [
    "MONTHS_PER_YEAR",
    "NegativeDeductionError",
    "NegativeIncomeError",
    "TaxInputError",
    "calculate_tax",
    "calculate_tax_from_monthly",
]
