"""Helpers for normalising incoming calculation requests."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _to_snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Accept camelCase field names, preferring snake_case when both are sent."""

    payload: dict[str, Any] = {}
    for key, value in data.items():
        normalised = _to_snake_case(str(key))
        if normalised != key and normalised in data:
            continue
        payload[normalised] = value
    return payload


def _resolve_municipality(req: Request, payload: dict[str, Any]) -> None:
    """Populate ``municipality`` from the query string when the body omits it."""

    municipality = payload.get("municipality")
    if isinstance(municipality, str) and municipality.strip():
        payload["municipality"] = municipality.strip()
        return

    municipality_param = req.args.get("municipality")
    if municipality_param and municipality_param.strip():
        payload["municipality"] = municipality_param.strip()


def parse_calculation_payload(req: Request) -> dict[str, Any]:
    """Extract and validate a JSON payload from ``req``."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    payload = _normalise_keys(data)
    _resolve_municipality(req, payload)

    return payload
