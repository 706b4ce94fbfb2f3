"""Service-layer helpers for the SweTax backend."""

from swetax.backend.app.services.calculation_service import (
    calculate_tax,
    calculate_tax_from_monthly,
)
from swetax.backend.app.services.reverse_solver import solve_gross_from_net

from .request_parser import parse_calculation_payload
from .response_builder import build_calculation_response, build_reverse_response

__all__ = [
    "calculate_tax",
    "calculate_tax_from_monthly",
    "solve_gross_from_net",
    "parse_calculation_payload",
    "build_calculation_response",
    "build_reverse_response",
]
