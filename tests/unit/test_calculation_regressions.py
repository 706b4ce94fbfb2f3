"""Regression coverage ensuring calculator outputs stay stable."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from swetax.backend.app.services.calculation_service import calculate_tax

_DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "regression_scenarios.json"


@pytest.mark.parametrize(
    "scenario",
    json.loads(_DATA_PATH.read_text("utf-8")),
    ids=lambda item: item["name"],
)
def test_calculate_tax_matches_regression_scenario(scenario: dict[str, object]) -> None:
    """The calculation service returns the expected results for known payloads."""

    expectations = scenario["expectations"]

    result = calculate_tax(scenario["payload"]).model_dump()

    assert result["gross_income"] == expectations["gross_income"]
    for section in ("breakdown", "monthly_breakdown"):
        for field, value in expectations[section].items():
            assert result[section][field] == pytest.approx(value), f"{section}.{field}"

    if "deductions" in expectations:
        assert result["deductions"] == expectations["deductions"]
    else:
        assert result["deductions"] is None
