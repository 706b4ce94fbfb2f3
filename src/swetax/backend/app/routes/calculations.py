"""REST endpoints for tax calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request
from pydantic import ValidationError

from swetax.backend.app.models import (
    MonthlyTaxInput,
    ReverseTaxInput,
    format_validation_error,
)
from swetax.backend.services import (
    build_calculation_response,
    build_reverse_response,
    calculate_tax,
    calculate_tax_from_monthly,
    parse_calculation_payload,
    solve_gross_from_net,
)

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1")


@blueprint.post("/calculations")
def create_calculation() -> tuple[Any, int]:
    """Create a tax calculation using the submitted JSON payload."""

    payload = parse_calculation_payload(request)
    result = calculate_tax(payload)

    return build_calculation_response(result)


@blueprint.post("/calculations/monthly")
def create_monthly_calculation() -> tuple[Any, int]:
    """Calculate tax for monthly income and deduction figures."""

    payload = parse_calculation_payload(request)
    try:
        monthly = MonthlyTaxInput.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc

    result = calculate_tax_from_monthly(
        monthly.monthly_income,
        monthly.municipality,
        monthly.has_deductions,
        monthly.deduction_amount,
    )
    return build_calculation_response(result)


@blueprint.post("/calculations/reverse")
def create_reverse_calculation() -> tuple[Any, int]:
    """Estimate the gross income required for a target net income."""

    payload = parse_calculation_payload(request)
    try:
        target = ReverseTaxInput.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc

    solution = solve_gross_from_net(target.net_income, target.municipality)
    return build_reverse_response(solution)
