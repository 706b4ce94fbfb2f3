"""Basic allowance (grundavdrag) calculation."""

from __future__ import annotations

from swetax.backend.config.rate_tables import BasicAllowanceConfig, load_rate_tables


def calculate_basic_allowance(
    gross_income: float, config: BasicAllowanceConfig | None = None
) -> float:
    """Return the basic allowance for an annual ``gross_income``.

    The first configured segment whose upper bound lies above the income
    supplies the formula. Boundaries between segments are not smoothed.
    """

    if gross_income <= 0:
        return 0.0

    if config is None:
        config = load_rate_tables().basic_allowance

    segment = config.segment_for(gross_income)
    return segment.amount_for(gross_income)
