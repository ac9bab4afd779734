"""Unit tests for CLI UI formatters.

Tests the Rich table builders for each calculator result.
"""

from rich.table import Table

from tradetrack.cli.ui.formatters import (
    create_consistency_table,
    create_growth_breakdown_table,
    create_growth_summary_table,
    create_kelly_table,
    create_position_size_table,
    create_risk_reward_table,
    create_sharpe_table,
)
from tradetrack.libraries.performance import (
    ConsistencyMethod,
    ConsistencyResult,
    SharpeMethod,
    SharpeResult,
    UnavailableReason,
)
from tradetrack.libraries.risk.tools.growth import project_compound_growth
from tradetrack.libraries.risk.tools.kelly import calculate_kelly
from tradetrack.libraries.risk.tools.sizing import calculate_position_size, calculate_risk_reward


class TestSharpeTable:
    """Test Sharpe result table."""

    def test_available_result(self):
        table = create_sharpe_table(SharpeResult(sharpe_ratio=1.5, method=SharpeMethod.MONTHLY_RETURNS))

        assert isinstance(table, Table)
        assert table.title == "Sharpe Ratio"
        assert len(table.columns) == 2
        # Ratio, rating, method
        assert table.row_count == 3

    def test_unavailable_result_adds_reason_and_note(self):
        result = SharpeResult(
            sharpe_ratio=None,
            method=SharpeMethod.NONE,
            reason=UnavailableReason.INSUFFICIENT_DATA,
            message="Add data",
        )

        table = create_sharpe_table(result)

        assert table.row_count == 5


class TestConsistencyTable:
    """Test consistency result table."""

    def test_title_includes_threshold(self):
        result = ConsistencyResult(
            consistency_percent=83.33,
            passed=False,
            best_day_profit=100,
            best_day_date="2025-01-01",
            total_profit=120,
            profitable_days=2,
            losing_days=1,
            threshold=50,
            message="Failed",
            method=ConsistencyMethod.DAILY_PNL,
        )

        table = create_consistency_table(result)

        assert table.title == "Profit Consistency (50% rule)"
        assert table.row_count == 8


class TestRiskTables:
    """Test risk tool tables."""

    def test_kelly_table(self):
        table = create_kelly_table(calculate_kelly(win_rate=0.55, avg_win=100, avg_loss=50))

        assert table.title == "Kelly Criterion"
        assert table.row_count == 6

    def test_growth_tables(self):
        projection = project_compound_growth(
            starting_capital=10000, periodic_return=0.05, num_periods=30, max_breakdown_periods=24
        )

        summary = create_growth_summary_table(projection)
        breakdown = create_growth_breakdown_table(projection)

        assert summary.row_count == 6
        assert breakdown.row_count == 24
        assert breakdown.caption == "First 24 of 30 periods shown"

    def test_growth_breakdown_without_truncation_has_no_caption(self):
        projection = project_compound_growth(starting_capital=10000, periodic_return=0.05, num_periods=12)

        assert create_growth_breakdown_table(projection).caption is None

    def test_position_size_table(self):
        size = calculate_position_size(
            account_balance=10000, risk_percent=1, entry_price=1.1, stop_loss_price=1.095, pip_value=10
        )

        table = create_position_size_table(size, "EUR/USD", 10)

        assert table.title == "Position Size - EUR/USD"
        assert table.row_count == 7

    def test_risk_reward_table(self):
        result = calculate_risk_reward(entry_price=1.1, stop_loss_price=1.095, take_profit_price=1.11)

        assert create_risk_reward_table(result).row_count == 4
