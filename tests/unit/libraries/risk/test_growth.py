"""Unit tests for compound growth projection."""

import pytest

from tradetrack.libraries.errors import InvalidParameterError
from tradetrack.libraries.risk.tools.growth import project_compound_growth


class TestProjectCompoundGrowth:
    """Test suite for project_compound_growth function."""

    def test_twelve_months_at_five_percent(self):
        # Act
        projection = project_compound_growth(starting_capital=10000, periodic_return=0.05, num_periods=12)

        # Assert
        assert projection.final_capital == pytest.approx(17958.56, abs=0.01)
        assert projection.total_profit == pytest.approx(7958.56, abs=0.01)
        assert projection.total_return_percent == pytest.approx(79.5856, abs=1e-3)
        assert len(projection.breakdown) == 12

    def test_breakdown_rows(self):
        projection = project_compound_growth(starting_capital=1000, periodic_return=0.1, num_periods=3)

        rows = projection.breakdown
        assert [r.period for r in rows] == [1, 2, 3]
        assert rows[0].capital == pytest.approx(1100)
        assert rows[0].profit == pytest.approx(100)
        assert rows[2].capital == pytest.approx(1331)
        # Last itemized period matches the headline figure
        assert rows[-1].capital == pytest.approx(projection.final_capital)

    def test_breakdown_truncated_but_totals_complete(self):
        """Test only the first 24 periods are itemized by default."""
        projection = project_compound_growth(starting_capital=1000, periodic_return=0.01, num_periods=60)

        assert len(projection.breakdown) == 24
        assert projection.final_capital == pytest.approx(1000 * 1.01**60)

    def test_custom_breakdown_limit(self):
        projection = project_compound_growth(
            starting_capital=1000, periodic_return=0.01, num_periods=10, max_breakdown_periods=3
        )

        assert len(projection.breakdown) == 3

    def test_zero_breakdown_limit(self):
        projection = project_compound_growth(
            starting_capital=1000, periodic_return=0.01, num_periods=10, max_breakdown_periods=0
        )

        assert projection.breakdown == ()

    @pytest.mark.parametrize(
        "capital,rate,periods",
        [(0, 0.05, 12), (-100, 0.05, 12), (1000, 0, 12), (1000, -0.05, 12), (1000, 0.05, 0)],
    )
    def test_invalid_inputs(self, capital, rate, periods):
        with pytest.raises(InvalidParameterError):
            project_compound_growth(starting_capital=capital, periodic_return=rate, num_periods=periods)

    def test_negative_breakdown_limit_rejected(self):
        with pytest.raises(InvalidParameterError, match="max_breakdown_periods"):
            project_compound_growth(
                starting_capital=1000, periodic_return=0.01, num_periods=10, max_breakdown_periods=-1
            )

    def test_power_overflow_is_invalid_parameter(self):
        """Test 100% per period over 2000 periods reports an error instead of OverflowError."""
        with pytest.raises(InvalidParameterError, match="overflows"):
            project_compound_growth(starting_capital=10000, periodic_return=1.0, num_periods=2000)

    def test_capital_multiplication_overflow_is_invalid_parameter(self):
        # 2 ** 1020 is finite but times 10000 saturates to inf
        with pytest.raises(InvalidParameterError, match="overflows"):
            project_compound_growth(starting_capital=10000, periodic_return=1.0, num_periods=1020)
