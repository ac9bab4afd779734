"""CLI UI components - table formatters."""

from tradetrack.cli.ui.formatters import (
    create_consistency_table,
    create_growth_breakdown_table,
    create_growth_summary_table,
    create_kelly_table,
    create_position_size_table,
    create_risk_reward_table,
    create_sharpe_table,
)

__all__ = [
    "create_sharpe_table",
    "create_consistency_table",
    "create_kelly_table",
    "create_growth_summary_table",
    "create_growth_breakdown_table",
    "create_position_size_table",
    "create_risk_reward_table",
]
