"""Infer the gross income that yields a desired net income.

The forward calculation is monotone but piecewise, so the solver walks the
gross estimate towards the target by subtracting the net income error on each
step. Marginal tax rates stay well below 100%, which keeps the steps
contracting for ordinary inputs.
"""

from __future__ import annotations

import logging
import math

from swetax.backend.app.models import ReverseSolution, TaxInput
from swetax.backend.config.rate_tables import load_rate_tables

from .calculation_service import calculate_tax
from .calculators import round_currency

_LOGGER = logging.getLogger(__name__)


def solve_gross_from_net(
    desired_net: float,
    municipality: str | None = None,
    *,
    max_iterations: int | None = None,
    tolerance: float | None = None,
) -> ReverseSolution:
    """Estimate the gross income for ``desired_net`` and report convergence.

    When the iteration limit is reached the last estimate is returned with
    ``converged`` set to ``False``. ``net_income`` is the net income of the
    last estimate that was evaluated.
    """

    if not math.isfinite(desired_net):
        raise ValueError("Desired net income must be a finite number")

    settings = load_rate_tables().solver
    limit = settings.max_iterations if max_iterations is None else max_iterations
    tolerance = settings.tolerance if tolerance is None else tolerance
    if limit <= 0:
        raise ValueError("max_iterations must be positive")
    if tolerance <= 0:
        raise ValueError("tolerance must be positive")

    estimate = max(desired_net * settings.seed_multiplier, 0.0)
    net_income = 0

    for iteration in range(1, limit + 1):
        result = calculate_tax(TaxInput(gross_income=estimate, municipality=municipality))
        net_income = result.breakdown.net_income
        difference = net_income - desired_net

        if abs(difference) < tolerance:
            _LOGGER.debug(
                "Reverse solver converged after %d iteration(s) at gross %.2f",
                iteration,
                estimate,
            )
            return ReverseSolution(
                gross_income=round_currency(estimate),
                net_income=net_income,
                iterations=iteration,
                converged=True,
            )

        estimate = max(estimate - difference, 0.0)

    _LOGGER.warning(
        "Reverse solver did not reach %.0f SEK tolerance for net %.2f after %d iterations",
        tolerance,
        desired_net,
        limit,
    )
    return ReverseSolution(
        gross_income=round_currency(estimate),
        net_income=net_income,
        iterations=limit,
        converged=False,
    )


def gross_from_net(desired_net: float, municipality: str | None = None) -> int:
    """Return the estimated gross income producing ``desired_net``.

    The estimate is best effort: it is returned whether or not the solver
    converged.
    """

    return solve_gross_from_net(desired_net, municipality).gross_income


__all__ = ["gross_from_net", "solve_gross_from_net"]
