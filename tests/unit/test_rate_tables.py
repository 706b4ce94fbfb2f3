"""Unit coverage for rate table loading and lookups."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from swetax.backend.config import rate_tables
from swetax.backend.config.rate_tables import (
    AVERAGE_MUNICIPALITY,
    ConfigurationError,
    RateTables,
    get_tax_constants,
    list_municipalities,
    load_rate_tables,
    rate_for,
)


def _raw_tables() -> dict:
    return yaml.safe_load(rate_tables.RATES_FILE.read_text("utf-8"))


def test_load_rate_tables_is_cached() -> None:
    assert load_rate_tables() is load_rate_tables()


def test_rate_tables_expose_packaged_year() -> None:
    tables = load_rate_tables()

    assert tables.year == 2024
    assert tables.state_tax.threshold == 598_500
    assert tables.solver.max_iterations == 20


@pytest.mark.parametrize(
    ("municipality", "expected"),
    [
        ("Stockholm", 0.3012),
        ("Göteborg", 0.3212),
        ("Gävle", 0.3412),
        (AVERAGE_MUNICIPALITY, 0.32),
    ],
)
def test_rate_for_known_municipalities(municipality: str, expected: float) -> None:
    assert rate_for(municipality) == pytest.approx(expected)


@pytest.mark.parametrize("municipality", [None, "", "Nonexistent", "stockholm"])
def test_rate_for_falls_back_to_average(municipality: str | None) -> None:
    assert rate_for(municipality) == pytest.approx(0.32)


def test_list_municipalities_is_sorted_and_includes_average() -> None:
    names = list_municipalities()

    assert names == sorted(names)
    assert AVERAGE_MUNICIPALITY in names
    assert len(names) == 16


def test_get_tax_constants_returns_snapshot() -> None:
    constants = get_tax_constants()
    assert constants == {
        "basic_allowance": 14_000,
        "state_tax_threshold": 598_500,
        "state_tax_rate": 0.20,
        "average_municipal_rate": 0.32,
        "pension_contribution_rate": 0.07,
    }

    constants["state_tax_rate"] = 0.99

    assert get_tax_constants()["state_tax_rate"] == pytest.approx(0.20)
    assert load_rate_tables().constants.state_tax_rate == pytest.approx(0.20)


def test_rate_tables_are_frozen() -> None:
    tables = load_rate_tables()

    with pytest.raises(ValidationError):
        tables.constants.state_tax_rate = 0.5  # type: ignore[misc]


def test_schema_requires_average_entry() -> None:
    raw = _raw_tables()
    del raw["municipalities"][AVERAGE_MUNICIPALITY]

    with pytest.raises(ValidationError, match="Average"):
        RateTables.model_validate(raw)


def test_schema_requires_average_to_match_constant() -> None:
    raw = _raw_tables()
    raw["municipalities"][AVERAGE_MUNICIPALITY] = 0.31

    with pytest.raises(ValidationError, match="average_municipal_rate"):
        RateTables.model_validate(raw)


def test_schema_requires_open_final_bracket() -> None:
    raw = _raw_tables()
    raw["state_tax"]["brackets"][-1]["upper"] = 1_000_000

    with pytest.raises(ValidationError, match="open upper bound"):
        RateTables.model_validate(raw)


def test_schema_rejects_unknown_allowance_kind() -> None:
    raw = _raw_tables()
    raw["basic_allowance"]["segments"][0]["kind"] = "stepped"

    with pytest.raises(ValidationError):
        RateTables.model_validate(raw)


def test_loader_wraps_validation_errors(isolated_rates_file: Path) -> None:
    raw = yaml.safe_load(isolated_rates_file.read_text("utf-8"))
    raw["solver"]["max_iterations"] = 0
    isolated_rates_file.write_text(yaml.safe_dump(raw, allow_unicode=True), "utf-8")

    with pytest.raises(ConfigurationError, match="Rate table validation failed"):
        load_rate_tables()


def test_loader_rejects_non_mapping_documents(isolated_rates_file: Path) -> None:
    isolated_rates_file.write_text("- just\n- a list\n", "utf-8")

    with pytest.raises(ConfigurationError, match="mapping"):
        load_rate_tables()


def test_loader_reports_missing_file(isolated_rates_file: Path) -> None:
    isolated_rates_file.unlink()

    with pytest.raises(FileNotFoundError):
        load_rate_tables()


def test_loader_picks_up_new_municipalities(isolated_rates_file: Path) -> None:
    raw = yaml.safe_load(isolated_rates_file.read_text("utf-8"))
    raw["municipalities"]["Kiruna"] = 0.3405
    isolated_rates_file.write_text(yaml.safe_dump(raw, allow_unicode=True), "utf-8")

    assert rate_for("Kiruna") == pytest.approx(0.3405)
    assert "Kiruna" in list_municipalities()
