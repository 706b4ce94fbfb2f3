"""Expose rate table metadata consumed by the decoupled front-end.

These endpoints bridge the YAML-backed rate tables and the UI so that forms
can populate the municipality selector and explain the tax rules without
duplicating them.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from swetax.backend.config.rate_tables import (
    AVERAGE_MUNICIPALITY,
    AllowanceSegment,
    TaxBracket,
    get_tax_constants,
    list_municipalities,
    load_rate_tables,
)
from swetax.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the rate tables."""

    tables = load_rate_tables()
    return {
        "version": get_project_version(),
        "tax_year": tables.year,
        "currency": tables.meta.get("currency", "SEK"),
    }


def _serialise_bracket(bracket: TaxBracket) -> dict[str, Any]:
    return {
        "name": bracket.name,
        "upper": bracket.upper_bound,
        "rate": bracket.rate,
    }


def _serialise_segment(segment: AllowanceSegment) -> dict[str, Any]:
    payload = segment.model_dump(mode="json", by_alias=True)
    payload.setdefault("upper", None)
    return payload


@blueprint.get("/meta")
def get_application_metadata() -> tuple[Any, int]:
    """Expose lightweight application metadata such as the version identifier."""

    return jsonify(get_configuration_metadata()), 200


@blueprint.get("/municipalities")
def get_municipalities() -> tuple[Any, int]:
    """Return the selectable municipalities with their flat rates."""

    tables = load_rate_tables()
    municipalities = [
        {"name": name, "rate": tables.municipalities[name]}
        for name in list_municipalities()
    ]
    payload = {
        "municipalities": municipalities,
        "default": AVERAGE_MUNICIPALITY,
    }
    return jsonify(payload), 200


@blueprint.get("/constants")
def get_constants() -> tuple[Any, int]:
    """Return the global tax constants."""

    return jsonify(get_tax_constants()), 200


@blueprint.get("/rates")
def get_rate_tables() -> tuple[Any, int]:
    """Return the state tax brackets and basic allowance segments."""

    tables = load_rate_tables()
    payload = {
        "tax_year": tables.year,
        "state_tax": {
            "threshold": tables.state_tax.threshold,
            "brackets": [_serialise_bracket(entry) for entry in tables.state_tax.brackets],
        },
        "basic_allowance": {
            "segments": [
                _serialise_segment(segment) for segment in tables.basic_allowance.segments
            ],
        },
        "constants": get_tax_constants(),
    }
    return jsonify(payload), 200
