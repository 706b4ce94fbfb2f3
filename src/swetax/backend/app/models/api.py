"""Pydantic models describing the public API surface."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

__all__ = [
    "TaxInput",
    "MonthlyTaxInput",
    "ReverseTaxInput",
    "TaxBreakdown",
    "MonthlyBreakdown",
    "DeductionSummary",
    "TaxResult",
    "ReverseSolution",
    "format_validation_error",
]


class TaxInput(BaseModel):
    """Annual income details supplied by the caller.

    Negative amounts are accepted here and rejected by the calculation
    service, which reports them as dedicated input errors.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    gross_income: float = Field(strict=True)
    municipality: str | None = None
    age: int | None = None
    has_deductions: bool = False
    deduction_amount: float = Field(default=0.0, strict=True)


class MonthlyTaxInput(BaseModel):
    """Monthly income details converted to annual figures before calculation."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    monthly_income: float = Field(strict=True)
    municipality: str | None = None
    has_deductions: bool = False
    deduction_amount: float | None = Field(default=None, strict=True)


class ReverseTaxInput(BaseModel):
    """Target net income for the gross-from-net solver."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    net_income: float = Field(strict=True)
    municipality: str | None = None


class TaxBreakdown(BaseModel):
    """Annual tax amounts in whole SEK with the effective rate in percent."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    municipal_tax: int
    state_tax: int
    total_tax: int
    net_income: int
    effective_tax_rate: float


class MonthlyBreakdown(BaseModel):
    """Annual figures spread over twelve months."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_monthly: int
    tax_monthly: int
    net_monthly: int


class DeductionSummary(BaseModel):
    """Deductions applied to the calculation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: int
    taxable_income: int


class TaxResult(BaseModel):
    """Full result produced by the calculation service."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_income: int
    breakdown: TaxBreakdown
    monthly_breakdown: MonthlyBreakdown
    deductions: DeductionSummary | None = None


class ReverseSolution(BaseModel):
    """Outcome of the gross-from-net solver."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_income: int
    net_income: int
    iterations: int
    converged: bool


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation payload: {details}"
