"""Typed request/response models shared across the calculation services.

Inputs and results are frozen Pydantic models so that callers can share them
freely. Intermediate figures produced while assembling a result live in
lightweight dataclasses that never leave the service layer.
"""

from __future__ import annotations

from dataclasses import dataclass

from .api import (
    DeductionSummary,
    MonthlyBreakdown,
    MonthlyTaxInput,
    ReverseSolution,
    ReverseTaxInput,
    TaxBreakdown,
    TaxInput,
    TaxResult,
    format_validation_error,
)

__all__ = [
    "DeductionSummary",
    "MonthlyBreakdown",
    "MonthlyTaxInput",
    "ReverseSolution",
    "ReverseTaxInput",
    "TaxBreakdown",
    "TaxInput",
    "TaxResult",
    "TaxableBasis",
    "format_validation_error",
]


@dataclass(frozen=True, slots=True)
class TaxableBasis:
    """Unrounded tax figures computed on taxable income.

    The final breakdown is derived from this record, restating net income and
    the effective rate against gross income.
    """

    gross_income: float
    basic_allowance: float
    taxable_income: float
    municipal_rate: float
    municipal_tax: float
    state_tax: float

    @property
    def total_tax(self) -> float:
        return self.municipal_tax + self.state_tax
