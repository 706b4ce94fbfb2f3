from swetax.backend.config.rate_tables import load_rate_tables
from swetax.backend.config.validator import main, validate_rate_tables


def test_packaged_rate_tables_are_valid() -> None:
    assert validate_rate_tables(load_rate_tables()) == []


def test_validator_flags_rate_outside_unit_interval() -> None:
    tables = load_rate_tables()
    municipalities = dict(tables.municipalities)
    municipalities["Stockholm"] = 30.12
    broken = tables.model_copy(update={"municipalities": municipalities})

    errors = validate_rate_tables(broken)

    assert any("municipalities.Stockholm" in error for error in errors)


def test_validator_flags_threshold_mismatch() -> None:
    tables = load_rate_tables()
    constants = tables.constants.model_copy(update={"state_tax_threshold": 600_000})
    broken = tables.model_copy(update={"constants": constants})

    errors = validate_rate_tables(broken)

    assert any("state_tax_threshold" in error for error in errors)
    assert any("phase-out start" in error for error in errors)


def test_validator_flags_state_rate_mismatch() -> None:
    tables = load_rate_tables()
    constants = tables.constants.model_copy(update={"state_tax_rate": 0.25})
    broken = tables.model_copy(update={"constants": constants})

    errors = validate_rate_tables(broken)

    assert any("state_tax_rate" in error and "top bracket" in error for error in errors)


def test_validator_flags_low_seed_multiplier() -> None:
    tables = load_rate_tables()
    solver = tables.solver.model_copy(update={"seed_multiplier": 0.5})
    broken = tables.model_copy(update={"solver": solver})

    errors = validate_rate_tables(broken)

    assert any(error.startswith("solver:") for error in errors)


def test_validator_cli_reports_success(capsys) -> None:
    exit_code = main([])

    assert exit_code == 0
    assert "[2024] OK" in capsys.readouterr().out
