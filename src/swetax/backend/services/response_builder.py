"""Utilities for serialising calculation responses."""

from __future__ import annotations

from typing import Any, Tuple

from flask import jsonify

from swetax.backend.app.models import ReverseSolution, TaxResult
from swetax.backend.app.services.calculators import format_currency, format_percentage

ResponseTuple = Tuple[Any, int]


def _formatted_summary(result: TaxResult) -> dict[str, str]:
    breakdown = result.breakdown
    monthly = result.monthly_breakdown
    return {
        "gross_income": format_currency(result.gross_income),
        "total_tax": format_currency(breakdown.total_tax),
        "net_income": format_currency(breakdown.net_income),
        "net_monthly": format_currency(monthly.net_monthly),
        "effective_tax_rate": format_percentage(breakdown.effective_tax_rate),
    }


def build_calculation_response(result: TaxResult) -> ResponseTuple:
    """Return a Flask JSON response for the calculation ``result``."""

    payload = result.model_dump(mode="json", exclude_none=True)
    payload["formatted"] = _formatted_summary(result)
    return jsonify(payload), 200


def build_reverse_response(solution: ReverseSolution) -> ResponseTuple:
    """Return a Flask JSON response for a gross-from-net ``solution``."""

    payload = solution.model_dump(mode="json")
    payload["formatted"] = {"gross_income": format_currency(solution.gross_income)}
    return jsonify(payload), 200
