"""Tests for the profit consistency rule."""

from datetime import datetime, timedelta

import pytest

from tradetrack.libraries.errors import InvalidParameterError
from tradetrack.libraries.performance.consistency import (
    evaluate_best,
    evaluate_from_daily,
    evaluate_from_equity_curve,
    evaluate_from_stats,
    r_multiple_pnl,
)
from tradetrack.libraries.performance.models import (
    BacktestStatsSummary,
    ConsistencyMethod,
    DailyPnLEntry,
    EquityPoint,
    UnavailableReason,
)


def _daily(*pairs):
    return [DailyPnLEntry(date=date, pnl=pnl) for date, pnl in pairs]


def _curve(equities):
    start = datetime(2025, 1, 1)
    return [EquityPoint(date=start + timedelta(days=i), equity=e) for i, e in enumerate(equities)]


def _stats(wins, losses, total=None, risk=1.0, rr=2.0):
    return BacktestStatsSummary(
        winning_trades=wins,
        losing_trades=losses,
        total_trades=wins + losses if total is None else total,
        risk_percent=risk,
        rr_ratio=rr,
    )


class TestEvaluateFromDaily:
    """Test the rule on raw daily P&L."""

    def test_failing_series(self):
        """Test 100 / 50 / -30 at 50%: total 120, best 100, 83.33%, failed."""
        # Arrange
        entries = _daily(("2025-01-01", 100), ("2025-01-02", 50), ("2025-01-03", -30))

        # Act
        result = evaluate_from_daily(entries, threshold_percent=50)

        # Assert
        assert result.total_profit == pytest.approx(120)
        assert result.best_day_profit == pytest.approx(100)
        assert result.best_day_date == "2025-01-01"
        assert result.consistency_percent == pytest.approx(83.333, rel=1e-4)
        assert result.passed is False
        assert result.profitable_days == 2
        assert result.losing_days == 1
        assert result.method == ConsistencyMethod.DAILY_PNL
        # 100 / 0.5 - 120 = 80 more profit needed
        assert "$80 more profit needed" in result.message

    def test_passing_series(self):
        entries = _daily(*[(f"2025-01-{d:02d}", 100) for d in range(1, 11)])

        result = evaluate_from_daily(entries, threshold_percent=20)

        assert result.consistency_percent == pytest.approx(10.0)
        assert result.passed is True
        assert result.message == "Passed 20% rule (10.0%)"

    def test_boundary_equal_to_threshold_passes(self):
        entries = _daily(("2025-01-01", 50), ("2025-01-02", 50))

        result = evaluate_from_daily(entries, threshold_percent=50)

        assert result.consistency_percent == pytest.approx(50.0)
        assert result.passed is True

    def test_first_best_day_wins_ties(self):
        entries = _daily(("2025-01-05", 80), ("2025-01-02", 80), ("2025-01-03", 40))

        result = evaluate_from_daily(entries)

        assert result.best_day_date == "2025-01-05"

    def test_zero_pnl_days_counted_as_neither(self):
        entries = _daily(("2025-01-01", 100), ("2025-01-02", 0), ("2025-01-03", -20))

        result = evaluate_from_daily(entries)

        assert result.profitable_days == 1
        assert result.losing_days == 1

    def test_negative_total_is_null_with_message(self):
        """Test a losing record cannot be evaluated and cannot pass."""
        entries = _daily(("2025-01-01", 50), ("2025-01-02", -80))

        result = evaluate_from_daily(entries)

        assert result.consistency_percent is None
        assert result.passed is False
        assert result.reason == UnavailableReason.NON_POSITIVE_TOTAL
        assert result.total_profit == pytest.approx(-30)
        assert "negative" in result.message

    def test_zero_total_is_null(self):
        entries = _daily(("2025-01-01", 50), ("2025-01-02", -50))

        result = evaluate_from_daily(entries)

        assert result.consistency_percent is None
        assert result.reason == UnavailableReason.NON_POSITIVE_TOTAL
        assert "zero" in result.message

    def test_all_losses(self):
        """Test an all-loss series: best day 0, no date, indeterminate."""
        entries = _daily(("2025-01-01", -10), ("2025-01-02", -20))

        result = evaluate_from_daily(entries)

        assert result.consistency_percent is None
        assert result.passed is False
        assert result.best_day_profit == 0.0
        assert result.best_day_date is None
        assert result.losing_days == 2
        assert result.message.startswith("No profitable days")

    def test_single_entry_insufficient(self):
        result = evaluate_from_daily(_daily(("2025-01-01", 500)))

        assert result.consistency_percent is None
        assert result.reason == UnavailableReason.INSUFFICIENT_DATA

    def test_non_positive_threshold_rejected(self):
        with pytest.raises(InvalidParameterError, match="threshold_percent"):
            evaluate_from_daily(_daily(("2025-01-01", 1), ("2025-01-02", 2)), threshold_percent=0)

    def test_idempotent(self):
        entries = _daily(("2025-01-01", 100), ("2025-01-02", 50), ("2025-01-03", -30))

        assert evaluate_from_daily(entries, 50) == evaluate_from_daily(entries, 50)


class TestEvaluateFromEquityCurve:
    """Test the rule on P&L derived from equity changes."""

    def test_derives_daily_pnl(self):
        # Differences: +100, +50, -30
        result = evaluate_from_equity_curve(_curve([10000, 10100, 10150, 10120]), threshold_percent=50)

        assert result.total_profit == pytest.approx(120)
        assert result.best_day_profit == pytest.approx(100)
        assert result.best_day_date == "2025-01-02"
        assert result.passed is False
        assert result.method == ConsistencyMethod.EQUITY_CURVE

    def test_unsorted_points(self):
        points = list(reversed(_curve([10000, 10100, 10150, 10120])))

        result = evaluate_from_equity_curve(points, threshold_percent=50)

        assert result.total_profit == pytest.approx(120)

    def test_single_point_insufficient(self):
        result = evaluate_from_equity_curve(_curve([10000]))

        assert result.reason == UnavailableReason.INSUFFICIENT_DATA
        assert result.method == ConsistencyMethod.EQUITY_CURVE

    def test_two_points_one_difference_insufficient(self):
        """Test two points give a single daily entry, below the minimum of two."""
        result = evaluate_from_equity_curve(_curve([10000, 10100]))

        assert result.consistency_percent is None
        assert result.reason == UnavailableReason.INSUFFICIENT_DATA


class TestEvaluateFromStats:
    """Test the estimate from aggregate win/loss statistics."""

    def test_passing_estimate(self):
        """Test 30W/20L at 1% risk, 1:2: best 2, total 40, 5%."""
        result = evaluate_from_stats(_stats(30, 20))

        assert result.best_day_profit == pytest.approx(2.0)
        assert result.total_profit == pytest.approx(40.0)
        assert result.consistency_percent == pytest.approx(5.0)
        assert result.passed is True
        assert result.method == ConsistencyMethod.BACKTEST_STATS
        assert result.best_day_date is None

    def test_failing_estimate_reports_extra_wins(self):
        """Test 3W/1L at 1% risk, 1:2, 20%: total 5, 40%, needs 3 more wins."""
        result = evaluate_from_stats(_stats(3, 1), threshold_percent=20)

        assert result.consistency_percent == pytest.approx(40.0)
        assert result.passed is False
        # needed total 2 * 100 / 20 = 10; (10 - 5) / 2 = 2.5 -> 3
        assert "about 3 more winning trade(s)" in result.message

    def test_losing_record_is_null(self):
        result = evaluate_from_stats(_stats(5, 20, rr=1.0))

        assert result.consistency_percent is None
        assert result.reason == UnavailableReason.NON_POSITIVE_TOTAL
        assert result.total_profit == pytest.approx(-15.0)

    def test_too_few_trades(self):
        result = evaluate_from_stats(_stats(1, 0))

        assert result.consistency_percent is None
        assert result.reason == UnavailableReason.INSUFFICIENT_DATA
        assert result.profitable_days == 1

    @pytest.mark.parametrize("risk,rr", [(0, 2.0), (1.0, 0), (-1.0, 2.0)])
    def test_invalid_parameters_rejected(self, risk, rr):
        with pytest.raises(InvalidParameterError):
            evaluate_from_stats(_stats(10, 5, risk=risk, rr=rr))


class TestEvaluateBest:
    """Test best-source selection."""

    def test_prefers_daily_pnl(self):
        daily = _daily(("2025-01-01", 100), ("2025-01-02", 100))

        result = evaluate_best(daily_pnl=daily, equity_curve=_curve([100, 200, 250]))

        assert result.method == ConsistencyMethod.DAILY_PNL

    def test_falls_back_to_equity_when_daily_unprofitable(self):
        daily = _daily(("2025-01-01", -100), ("2025-01-02", 20))

        result = evaluate_best(daily_pnl=daily, equity_curve=_curve([100, 200, 250]), threshold_percent=70)

        assert result.method == ConsistencyMethod.EQUITY_CURVE
        assert result.consistency_percent == pytest.approx(100 / 150 * 100)

    def test_nothing_usable(self):
        result = evaluate_best()

        assert result.method == ConsistencyMethod.NONE
        assert result.reason == UnavailableReason.INSUFFICIENT_DATA
        assert result.message


class TestRMultiplePnl:
    """Test journal R-multiple conversion."""

    def test_converts_r_to_currency(self):
        entries = r_multiple_pnl([("2025-01-02", 2.5), ("2025-01-03", -1.0)], risk_per_trade=100)

        assert entries == _daily(("2025-01-02", 250.0), ("2025-01-03", -100.0))

    def test_feeds_consistency_rule(self):
        entries = r_multiple_pnl([("2025-01-02", 3.0), ("2025-01-03", 1.0), ("2025-01-04", -1.0)], 50)

        result = evaluate_from_daily(entries, threshold_percent=50)

        # best 150 of total 150
        assert result.consistency_percent == pytest.approx(100.0)

    def test_non_positive_risk_rejected(self):
        with pytest.raises(InvalidParameterError):
            r_multiple_pnl([("2025-01-02", 1.0)], risk_per_trade=0)
