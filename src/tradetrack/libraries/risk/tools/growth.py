"""Compound growth projection.

Projects capital under a constant periodic return (e.g. a fixed monthly
percentage), with a per-period itemized breakdown for display.
"""

import math

from tradetrack.libraries.errors import InvalidParameterError
from tradetrack.libraries.risk.models import CompoundProjection, GrowthPeriod

DEFAULT_BREAKDOWN_LIMIT = 24


def project_compound_growth(
    *,
    starting_capital: float,
    periodic_return: float,
    num_periods: int,
    max_breakdown_periods: int = DEFAULT_BREAKDOWN_LIMIT,
) -> CompoundProjection:
    """Project compound growth of capital.

    Formula:
        final_capital = starting_capital * (1 + periodic_return) ** num_periods

    The breakdown lists the first ``min(num_periods, max_breakdown_periods)``
    periods only; headline figures always cover all ``num_periods``.

    Args:
        starting_capital: Initial capital (must be positive)
        periodic_return: Return per period as a fraction (0.05 = 5%), must be positive
        num_periods: Number of compounding periods (must be positive)
        max_breakdown_periods: Cap on itemized periods (default 24)

    Returns:
        CompoundProjection

    Raises:
        InvalidParameterError: If any of the inputs is not positive, or the
            projection is too large to represent as a float

    Example:
        >>> projection = project_compound_growth(starting_capital=10000, periodic_return=0.05, num_periods=12)
        >>> round(projection.final_capital, 2), len(projection.breakdown)
        (17958.56, 12)
    """
    if starting_capital <= 0:
        raise InvalidParameterError(f"starting_capital must be positive, got {starting_capital}")

    if periodic_return <= 0:
        raise InvalidParameterError(f"periodic_return must be positive, got {periodic_return}")

    if num_periods <= 0:
        raise InvalidParameterError(f"num_periods must be positive, got {num_periods}")

    if max_breakdown_periods < 0:
        raise InvalidParameterError(f"max_breakdown_periods must be non-negative, got {max_breakdown_periods}")

    overflow_message = f"Projection overflows: {periodic_return:.2%} over {num_periods} periods is too large to compute"
    try:
        final_capital = starting_capital * (1 + periodic_return) ** num_periods
    except OverflowError as e:
        raise InvalidParameterError(overflow_message) from e

    total_profit = final_capital - starting_capital
    total_return_percent = total_profit / starting_capital * 100
    # Float multiplication saturates to inf instead of raising
    if math.isinf(total_return_percent):
        raise InvalidParameterError(overflow_message)

    breakdown: list[GrowthPeriod] = []
    capital = starting_capital
    for period in range(1, min(num_periods, max_breakdown_periods) + 1):
        capital *= 1 + periodic_return
        breakdown.append(GrowthPeriod(period=period, capital=capital, profit=capital - starting_capital))

    return CompoundProjection(
        starting_capital=starting_capital,
        periodic_return=periodic_return,
        num_periods=num_periods,
        final_capital=final_capital,
        total_profit=total_profit,
        total_return_percent=total_return_percent,
        breakdown=tuple(breakdown),
    )
