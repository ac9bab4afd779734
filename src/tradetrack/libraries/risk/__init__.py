"""
Risk Management Library.

Pure function-based risk tools for position sizing, Kelly sizing and
growth projection. All tools are stateless, composable, and easy to test.

Architecture:
- tools/sizing.py: Fixed-risk position sizing, pip values, risk/reward
- tools/kelly.py: Kelly criterion fractions and expectancy
- tools/growth.py: Compound growth projection
- models.py: Result dataclasses

Usage:
    >>> from tradetrack.libraries.risk.tools import kelly, sizing
    >>>
    >>> size = sizing.calculate_position_size(
    ...     account_balance=10000,
    ...     risk_percent=1,
    ...     entry_price=1.1000,
    ...     stop_loss_price=1.0950,
    ...     pip_value=sizing.pip_value_for("EUR/USD"),
    ... )
    >>> edge = kelly.calculate_kelly(win_rate=0.55, avg_win=100, avg_loss=50)
"""

from tradetrack.libraries.risk.models import CompoundProjection, GrowthPeriod, KellyResult, PositionSize, RiskReward

__all__ = [
    "KellyResult",
    "CompoundProjection",
    "GrowthPeriod",
    "PositionSize",
    "RiskReward",
]
