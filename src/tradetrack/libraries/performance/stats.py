"""Descriptive statistics primitives shared by the estimators.

Pure functions over plain float sequences. Functions that need a minimum
number of values raise ``InsufficientDataError``; callers that must not
raise (the estimators) catch it and report a reason instead.
"""

import math
from typing import Sequence

from tradetrack.libraries.errors import InsufficientDataError
from tradetrack.libraries.performance.models import DailyPnLEntry, EquityPoint

# Dispersion below this (relative to the series mean) is float noise, not volatility
ZERO_DISPERSION_TOLERANCE = 1e-9


def mean(values: Sequence[float]) -> float:
    """
    Arithmetic mean.

    Raises:
        InsufficientDataError: If values is empty

    Example:
        >>> mean([1.0, 2.0, 3.0])
        2.0
    """
    if not values:
        raise InsufficientDataError("mean", 1, 0)

    return sum(values) / len(values)


def sample_std_dev(values: Sequence[float]) -> float:
    """
    Sample standard deviation (n-1 denominator).

    Raises:
        InsufficientDataError: If fewer than 2 values

    Example:
        >>> round(sample_std_dev([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]), 6)
        2.13809
    """
    if len(values) < 2:
        raise InsufficientDataError("sample_std_dev", 2, len(values))

    avg = mean(values)
    variance = sum((v - avg) ** 2 for v in values) / (len(values) - 1)

    return math.sqrt(variance)


def has_zero_dispersion(std_dev: float, center: float) -> bool:
    """
    Check whether a standard deviation is zero for practical purposes.

    A geometric series such as 100, 110, 121, 133.1 has constant 10% steps,
    but float rounding leaves a standard deviation around 1e-15 rather than
    exactly 0. Dividing by it would produce an absurd ratio.

    Example:
        >>> has_zero_dispersion(0.0, 2.5)
        True
        >>> has_zero_dispersion(1.8e-15, 10.0)
        True
        >>> has_zero_dispersion(0.5, 10.0)
        False
    """
    return std_dev <= ZERO_DISPERSION_TOLERANCE * max(1.0, abs(center))


def percent_changes(values: Sequence[float]) -> list[float]:
    """
    Simple period-over-period returns in percentage points.

    Steps whose previous value is zero or negative are skipped, since a
    percentage change from a non-positive base is meaningless.

    Example:
        >>> percent_changes([100.0, 110.0, 99.0])
        [10.0, -10.0]
    """
    changes: list[float] = []
    for prev, curr in zip(values, values[1:]):
        if prev > 0:
            changes.append((curr - prev) / prev * 100)
    return changes


def sort_equity_curve(points: Sequence[EquityPoint]) -> list[EquityPoint]:
    """Return points in ascending date order (stable; duplicates are kept).

    Dates are naive UTC by construction (see EquityPoint), so curves mixing
    aware and naive timestamps sort without error.
    """
    return sorted(points, key=lambda p: p.date)


def equity_differences(points: Sequence[EquityPoint]) -> list[DailyPnLEntry]:
    """
    Derive per-step currency P&L from an equity curve.

    Points are sorted by date first. Each entry is dated with the later of
    the two points it spans.

    Example:
        >>> from datetime import datetime
        >>> curve = [
        ...     EquityPoint(date=datetime(2025, 1, 2), equity=10100),
        ...     EquityPoint(date=datetime(2025, 1, 1), equity=10000),
        ... ]
        >>> equity_differences(curve)
        [DailyPnLEntry(date='2025-01-02', pnl=100.0)]
    """
    ordered = sort_equity_curve(points)
    return [
        DailyPnLEntry(date=curr.date.date().isoformat(), pnl=curr.equity - prev.equity)
        for prev, curr in zip(ordered, ordered[1:])
    ]
