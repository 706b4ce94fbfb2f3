"""Domain-specific calculation helpers."""

from .allowance import calculate_basic_allowance
from .income_tax import (
    calculate_municipal_tax,
    calculate_state_tax,
    calculate_taxable_income,
)
from .utils import (
    calculate_progressive_tax,
    format_currency,
    format_percentage,
    round_currency,
    round_rate,
)

__all__ = [
    "calculate_basic_allowance",
    "calculate_municipal_tax",
    "calculate_progressive_tax",
    "calculate_state_tax",
    "calculate_taxable_income",
    "format_currency",
    "format_percentage",
    "round_currency",
    "round_rate",
]
