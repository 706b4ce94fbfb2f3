"""Unit tests for response formatting helpers."""

from __future__ import annotations

from flask import Flask

from swetax.backend.app.models import ReverseSolution
from swetax.backend.app.services.calculation_service import calculate_tax
from swetax.backend.services.response_builder import (
    build_calculation_response,
    build_reverse_response,
)


def test_build_calculation_response_returns_json(app: Flask) -> None:
    result = calculate_tax({"gross_income": 500_000, "municipality": "Stockholm"})

    with app.app_context():
        response, status = build_calculation_response(result)

    assert status == 200
    payload = response.get_json()
    assert payload["breakdown"]["total_tax"] == 145_148
    assert "deductions" not in payload
    assert payload["formatted"] == {
        "gross_income": "500\u00a0000\u00a0kr",
        "total_tax": "145\u00a0148\u00a0kr",
        "net_income": "354\u00a0852\u00a0kr",
        "net_monthly": "29\u00a0571\u00a0kr",
        "effective_tax_rate": "29.03%",
    }


def test_build_reverse_response_includes_convergence(app: Flask) -> None:
    solution = ReverseSolution(
        gross_income=25_456, net_income=20_035, iterations=4, converged=True
    )

    with app.app_context():
        response, status = build_reverse_response(solution)

    assert status == 200
    assert response.get_json() == {
        "gross_income": 25_456,
        "net_income": 20_035,
        "iterations": 4,
        "converged": True,
        "formatted": {"gross_income": "25\u00a0456\u00a0kr"},
    }
