"""Profit consistency rule evaluation.

Models the proprietary-trading-firm compliance rule:

    best_day_profit / total_profit * 100 <= threshold

i.e. no single day (or trade) may account for more than ``threshold`` percent
of the total profit. Typical firm thresholds are 20-50%.

Entry points (all return ConsistencyResult):
- evaluate_from_daily: Raw daily P&L series (manual entry or CSV import)
- evaluate_from_equity_curve: Daily P&L derived from equity changes
- evaluate_from_stats: Estimate from win/loss counts, risk % and RR
- evaluate_best: Daily P&L first, equity curve second

A series that cannot be evaluated (too short, zero or negative total) is
not an error: the result carries ``consistency_percent=None``, a reason,
and a message suitable for direct display.
"""

import math
from typing import Sequence

import structlog

from tradetrack.libraries.errors import InvalidParameterError
from tradetrack.libraries.performance.models import (
    BacktestStatsSummary,
    ConsistencyMethod,
    ConsistencyResult,
    DailyPnLEntry,
    EquityPoint,
    UnavailableReason,
)
from tradetrack.libraries.performance.stats import equity_differences

logger = structlog.get_logger(__name__)

DEFAULT_THRESHOLD_PERCENT = 20.0
MIN_DAILY_ENTRIES = 2
MIN_TRADES = 2


def evaluate_from_daily(
    entries: Sequence[DailyPnLEntry],
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT,
) -> ConsistencyResult:
    """
    Evaluate the consistency rule on a daily P&L series.

    The best day is the largest non-negative entry; if every entry is a
    loss the best day is 0 with no date. Zero-P&L days count as neither
    profitable nor losing.

    Args:
        entries: Daily P&L entries (order does not matter)
        threshold_percent: Maximum allowed best-day share of total profit

    Returns:
        ConsistencyResult with method DAILY_PNL

    Raises:
        InvalidParameterError: If threshold_percent is not positive

    Example:
        >>> result = evaluate_from_daily(
        ...     [
        ...         DailyPnLEntry(date="2025-01-01", pnl=100),
        ...         DailyPnLEntry(date="2025-01-02", pnl=50),
        ...         DailyPnLEntry(date="2025-01-03", pnl=-30),
        ...     ],
        ...     threshold_percent=50,
        ... )
        >>> round(result.consistency_percent, 2), result.passed
        (83.33, False)
    """
    _validate_threshold(threshold_percent)
    return _evaluate_series(entries, threshold_percent, ConsistencyMethod.DAILY_PNL)


def evaluate_from_equity_curve(
    points: Sequence[EquityPoint],
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT,
) -> ConsistencyResult:
    """
    Evaluate the consistency rule on P&L derived from an equity curve.

    Points are sorted by date; each consecutive pair becomes one daily entry.
    """
    _validate_threshold(threshold_percent)

    if len(points) < MIN_DAILY_ENTRIES:
        return _unavailable(
            threshold_percent,
            ConsistencyMethod.EQUITY_CURVE,
            UnavailableReason.INSUFFICIENT_DATA,
            f"Equity curve needs at least {MIN_DAILY_ENTRIES} points, got {len(points)}",
        )

    return _evaluate_series(equity_differences(points), threshold_percent, ConsistencyMethod.EQUITY_CURVE)


def evaluate_from_stats(
    summary: BacktestStatsSummary,
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT,
) -> ConsistencyResult:
    """
    Estimate the consistency rule from aggregate backtest statistics.

    ESTIMATE ONLY. Assumes every winning trade nets exactly
    ``risk_percent * rr_ratio`` and every losing trade costs exactly
    ``risk_percent``, and that the best day is a single winning trade:

        best_day = risk_percent * rr_ratio
        total = wins * risk_percent * rr_ratio - losses * risk_percent

    Real per-trade outcomes vary (partial exits, slippage, several wins on
    one day), so the true figure can differ materially. Amounts are in
    percent of account, not currency.

    Args:
        summary: Win/loss counts with risk per trade and RR ratio
        threshold_percent: Maximum allowed best-day share of total profit

    Returns:
        ConsistencyResult with method BACKTEST_STATS

    Raises:
        InvalidParameterError: If risk_percent, rr_ratio or threshold is not positive

    Example:
        >>> summary = BacktestStatsSummary(
        ...     winning_trades=30, losing_trades=20, total_trades=50, risk_percent=1.0, rr_ratio=2.0
        ... )
        >>> evaluate_from_stats(summary).consistency_percent  # 2 / (60 - 20) * 100
        5.0
    """
    _validate_threshold(threshold_percent)

    if summary.risk_percent <= 0:
        raise InvalidParameterError(f"risk_percent must be positive, got {summary.risk_percent}")

    if summary.rr_ratio <= 0:
        raise InvalidParameterError(f"rr_ratio must be positive, got {summary.rr_ratio}")

    method = ConsistencyMethod.BACKTEST_STATS
    wins = summary.winning_trades
    losses = summary.losing_trades

    if summary.total_trades < MIN_TRADES:
        return _unavailable(
            threshold_percent,
            method,
            UnavailableReason.INSUFFICIENT_DATA,
            f"At least {MIN_TRADES} trades required (have {summary.total_trades})",
            profitable_days=wins,
            losing_days=losses,
        )

    win_amount = summary.risk_percent * summary.rr_ratio
    best_day_profit = win_amount
    total_profit = wins * win_amount - losses * summary.risk_percent

    if total_profit <= 0:
        logger.debug("consistency.indeterminate", method=method.value, total_profit=total_profit)
        return _unavailable(
            threshold_percent,
            method,
            UnavailableReason.NON_POSITIVE_TOTAL,
            _non_positive_total_message(total_profit, has_profitable_day=wins > 0),
            best_day_profit=best_day_profit,
            total_profit=total_profit,
            profitable_days=wins,
            losing_days=losses,
        )

    consistency_percent = (best_day_profit / total_profit) * 100
    passed = consistency_percent <= threshold_percent

    if passed:
        message = _passed_message(threshold_percent, consistency_percent)
    else:
        needed_total = (best_day_profit * 100) / threshold_percent
        needed_extra_wins = math.ceil((needed_total - total_profit) / win_amount)
        message = (
            f"Failed {threshold_percent:g}% rule ({consistency_percent:.1f}%): "
            f"about {needed_extra_wins} more winning trade(s) needed to pass"
        )

    return ConsistencyResult(
        consistency_percent=consistency_percent,
        passed=passed,
        best_day_profit=best_day_profit,
        total_profit=total_profit,
        profitable_days=wins,
        losing_days=losses,
        threshold=threshold_percent,
        message=message,
        method=method,
    )


def evaluate_best(
    daily_pnl: Sequence[DailyPnLEntry] | None = None,
    equity_curve: Sequence[EquityPoint] | None = None,
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT,
) -> ConsistencyResult:
    """
    Evaluate using the most accurate data available.

    Priority:
    1. Direct daily P&L (>= 2 entries)
    2. Daily P&L derived from the equity curve (>= 2 points)

    A source is used only if it yields a consistency percentage; otherwise
    the next one is tried. Returns a NONE-method result if neither works.
    """
    _validate_threshold(threshold_percent)

    if daily_pnl and len(daily_pnl) >= MIN_DAILY_ENTRIES:
        result = evaluate_from_daily(daily_pnl, threshold_percent)
        if result.is_available:
            return result

    if equity_curve and len(equity_curve) >= MIN_DAILY_ENTRIES:
        result = evaluate_from_equity_curve(equity_curve, threshold_percent)
        if result.is_available:
            return result

    return _unavailable(
        threshold_percent,
        ConsistencyMethod.NONE,
        UnavailableReason.INSUFFICIENT_DATA,
        "Not enough profitable daily P&L or equity data to evaluate consistency",
    )


def r_multiple_pnl(
    rows: Sequence[tuple[str, float]],
    risk_per_trade: float,
) -> list[DailyPnLEntry]:
    """
    Convert journal R-multiples into currency P&L entries.

    Args:
        rows: (date, r_multiple) pairs, e.g. ("2025-01-02", 2.5)
        risk_per_trade: Currency amount risked per trade (1R)

    Returns:
        One DailyPnLEntry per row with ``pnl = r_multiple * risk_per_trade``

    Raises:
        InvalidParameterError: If risk_per_trade is not positive

    Example:
        >>> r_multiple_pnl([("2025-01-02", 2.0), ("2025-01-03", -1.0)], 100)
        [DailyPnLEntry(date='2025-01-02', pnl=200.0), DailyPnLEntry(date='2025-01-03', pnl=-100.0)]
    """
    if risk_per_trade <= 0:
        raise InvalidParameterError(f"risk_per_trade must be positive, got {risk_per_trade}")

    return [DailyPnLEntry(date=date, pnl=r_multiple * risk_per_trade) for date, r_multiple in rows]


def _evaluate_series(
    entries: Sequence[DailyPnLEntry],
    threshold_percent: float,
    method: ConsistencyMethod,
) -> ConsistencyResult:
    """Core rule over a P&L series, attributed to ``method``."""
    if len(entries) < MIN_DAILY_ENTRIES:
        return _unavailable(
            threshold_percent,
            method,
            UnavailableReason.INSUFFICIENT_DATA,
            f"At least {MIN_DAILY_ENTRIES} days of P&L required to evaluate consistency (have {len(entries)})",
        )

    total_profit = sum(e.pnl for e in entries)
    profitable_days = sum(1 for e in entries if e.pnl > 0)
    losing_days = sum(1 for e in entries if e.pnl < 0)

    candidates = [e for e in entries if e.pnl >= 0]
    best_day = max(candidates, key=lambda e: e.pnl) if candidates else None
    best_day_profit = best_day.pnl if best_day is not None else 0.0
    best_day_date = best_day.date if best_day is not None else None

    if total_profit <= 0:
        logger.debug("consistency.indeterminate", method=method.value, total_profit=total_profit)
        return _unavailable(
            threshold_percent,
            method,
            UnavailableReason.NON_POSITIVE_TOTAL,
            _non_positive_total_message(total_profit, has_profitable_day=profitable_days > 0),
            best_day_profit=best_day_profit,
            best_day_date=best_day_date,
            total_profit=total_profit,
            profitable_days=profitable_days,
            losing_days=losing_days,
        )

    consistency_percent = (best_day_profit / total_profit) * 100
    passed = consistency_percent <= threshold_percent

    if passed:
        message = _passed_message(threshold_percent, consistency_percent)
    else:
        needed_profit = best_day_profit / (threshold_percent / 100) - total_profit
        message = (
            f"Failed {threshold_percent:g}% rule ({consistency_percent:.1f}%): "
            f"best day {best_day_date} is too large; ${needed_profit:,.0f} more profit needed to pass"
        )

    return ConsistencyResult(
        consistency_percent=consistency_percent,
        passed=passed,
        best_day_profit=best_day_profit,
        best_day_date=best_day_date,
        total_profit=total_profit,
        profitable_days=profitable_days,
        losing_days=losing_days,
        threshold=threshold_percent,
        message=message,
        method=method,
    )


def _unavailable(
    threshold_percent: float,
    method: ConsistencyMethod,
    reason: UnavailableReason,
    message: str,
    *,
    best_day_profit: float = 0.0,
    best_day_date: str | None = None,
    total_profit: float = 0.0,
    profitable_days: int = 0,
    losing_days: int = 0,
) -> ConsistencyResult:
    return ConsistencyResult(
        consistency_percent=None,
        passed=False,
        best_day_profit=best_day_profit,
        best_day_date=best_day_date,
        total_profit=total_profit,
        profitable_days=profitable_days,
        losing_days=losing_days,
        threshold=threshold_percent,
        message=message,
        method=method,
        reason=reason,
    )


def _non_positive_total_message(total_profit: float, *, has_profitable_day: bool) -> str:
    if not has_profitable_day:
        return "No profitable days: consistency cannot be evaluated and the rule cannot be passed"
    if total_profit == 0:
        return "Total profit is zero: consistency cannot be calculated"
    return f"Total profit is negative ({total_profit:,.2f}): a losing record cannot pass the consistency rule"


def _passed_message(threshold_percent: float, consistency_percent: float) -> str:
    return f"Passed {threshold_percent:g}% rule ({consistency_percent:.1f}%)"


def _validate_threshold(threshold_percent: float) -> None:
    if threshold_percent <= 0:
        raise InvalidParameterError(f"threshold_percent must be positive, got {threshold_percent}")
