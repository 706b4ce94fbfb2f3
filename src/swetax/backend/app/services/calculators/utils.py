"""Utility helpers for calculator modules."""

from __future__ import annotations

import math
from collections.abc import Sequence

from swetax.backend.config.rate_tables import TaxBracket

_GROUP_SEPARATOR = "\u00a0"
_MINUS_SIGN = "\u2212"


def calculate_progressive_tax(amount: float, brackets: Sequence[TaxBracket]) -> float:
    """Calculate progressive tax for ``amount`` using ``brackets``.

    Each bracket taxes only the slice of ``amount`` between the previous
    bracket's upper bound and its own.
    """

    if amount <= 0:
        return 0.0

    total = 0.0
    lower_bound = 0.0

    for bracket in brackets:
        upper = bracket.upper_bound
        if upper is None or amount < upper:
            total += (amount - lower_bound) * bracket.rate
            break

        total += (upper - lower_bound) * bracket.rate
        lower_bound = upper

    return total


def round_currency(value: float) -> int:
    """Round monetary amounts to whole SEK, with halves rounding up."""

    return math.floor(value + 0.5)


def round_rate(value: float) -> float:
    """Round percentage values to two decimals, with halves rounding up."""

    return math.floor(value * 100 + 0.5) / 100


def format_currency(amount: float) -> str:
    """Return ``amount`` as whole kronor using Swedish digit grouping."""

    rounded = round_currency(abs(amount))
    digits = f"{rounded:,}".replace(",", _GROUP_SEPARATOR)
    sign = _MINUS_SIGN if amount < 0 and rounded else ""
    return f"{sign}{digits}{_GROUP_SEPARATOR}kr"


def format_percentage(value: float) -> str:
    """Return a percentage label with two decimals for ``value`` (0-100 scale)."""

    return f"{value:.2f}%"
