"""Utilities for validating rate table data and surfacing issues."""

from __future__ import annotations

import argparse
from typing import Mapping, Sequence

from .rate_tables import (
    BasicAllowanceConfig,
    ConfigurationError,
    RateTables,
    SolverConfig,
    StateTaxConfig,
    TaxConstants,
    load_rate_tables,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_fraction(scope: str, label: str, value: float) -> list[str]:
    if value < 0 or value > 1:
        return [_format_scope(scope, f"{label} {value} must be between 0 and 1")]
    return []


def _validate_municipalities(rates: Mapping[str, float]) -> list[str]:
    errors: list[str] = []

    for name, rate in rates.items():
        if not name.strip():
            errors.append(_format_scope("municipalities", "names must be non-empty strings"))
            continue
        if name != name.strip():
            errors.append(
                _format_scope(
                    "municipalities",
                    f"name '{name}' has leading or trailing whitespace",
                )
            )
        errors.extend(_validate_fraction(f"municipalities.{name}", "rate", rate))

    return errors


def _validate_state_tax(state_tax: StateTaxConfig, constants: TaxConstants) -> list[str]:
    errors: list[str] = []

    for index, bracket in enumerate(state_tax.brackets):
        errors.extend(_validate_fraction(f"state_tax.brackets[{index}]", "rate", bracket.rate))

    threshold = state_tax.threshold
    if threshold != constants.state_tax_threshold:
        errors.append(
            _format_scope(
                "constants",
                (
                    f"state_tax_threshold {constants.state_tax_threshold} does not match "
                    f"the bracket threshold {threshold}"
                ),
            )
        )

    top_rate = state_tax.brackets[-1].rate
    if top_rate != constants.state_tax_rate:
        errors.append(
            _format_scope(
                "constants",
                (
                    f"state_tax_rate {constants.state_tax_rate} does not match "
                    f"the top bracket rate {top_rate}"
                ),
            )
        )

    return errors


def _validate_allowance(
    allowance: BasicAllowanceConfig, constants: TaxConstants
) -> list[str]:
    errors: list[str] = []

    for index, segment in enumerate(allowance.segments):
        rate = getattr(segment, "rate", None)
        if rate is not None:
            errors.extend(
                _validate_fraction(f"basic_allowance.segments[{index}]", "rate", rate)
            )

    phase_out_starts = [
        segment.start for segment in allowance.segments if segment.kind == "phase_out"
    ]
    for start in phase_out_starts:
        if start != constants.state_tax_threshold:
            errors.append(
                _format_scope(
                    "basic_allowance",
                    (
                        f"phase-out start {start} should align with the state tax "
                        f"threshold {constants.state_tax_threshold}"
                    ),
                )
            )

    linear_bases = [
        segment.base for segment in allowance.segments if segment.kind == "linear"
    ]
    if linear_bases and linear_bases[0] != constants.basic_allowance:
        errors.append(
            _format_scope(
                "basic_allowance",
                (
                    f"linear segment base {linear_bases[0]} does not match the "
                    f"basic_allowance constant {constants.basic_allowance}"
                ),
            )
        )

    return errors


def _validate_solver(solver: SolverConfig) -> list[str]:
    errors: list[str] = []

    if solver.seed_multiplier < 1:
        errors.append(
            _format_scope(
                "solver",
                "seed_multiplier below 1 starts the search under the target net income",
            )
        )
    if solver.max_iterations > 1000:
        errors.append(_format_scope("solver", "max_iterations should not exceed 1000"))

    return errors


def validate_rate_tables(tables: RateTables) -> list[str]:
    """Return a list of validation issues for the provided rate tables."""

    errors: list[str] = []

    constants = tables.constants
    errors.extend(
        _validate_fraction("constants", "average_municipal_rate", constants.average_municipal_rate)
    )
    errors.extend(
        _validate_fraction(
            "constants", "pension_contribution_rate", constants.pension_contribution_rate
        )
    )
    errors.extend(_validate_municipalities(tables.municipalities))
    errors.extend(_validate_state_tax(tables.state_tax, constants))
    errors.extend(_validate_allowance(tables.basic_allowance, constants))
    errors.extend(_validate_solver(tables.solver))

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        description="Validate the packaged rate tables and report issues helpful to contributors."
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    parser.parse_args(argv)

    try:
        tables = load_rate_tables()
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"failed to load rate tables: {error}")
        return 1

    issues = validate_rate_tables(tables)
    label = tables.year or "rates"
    if issues:
        print(f"[{label}] {len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print(f"[{label}] OK")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
