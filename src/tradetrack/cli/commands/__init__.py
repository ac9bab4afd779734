"""Commands __init__ - exports all calculator commands."""

from tradetrack.cli.commands.calc import (
    compound_command,
    consistency_command,
    kelly_command,
    position_size_command,
    risk_reward_command,
    sharpe_command,
)

__all__ = [
    "sharpe_command",
    "consistency_command",
    "kelly_command",
    "compound_command",
    "position_size_command",
    "risk_reward_command",
]
