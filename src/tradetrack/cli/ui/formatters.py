"""Rich table formatters for CLI output."""

from rich.table import Table

from tradetrack.libraries.performance.models import ConsistencyResult, SharpeResult
from tradetrack.libraries.performance.sharpe import interpret_sharpe
from tradetrack.libraries.risk.models import CompoundProjection, KellyResult, PositionSize, RiskReward


def _field_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    return table


def _status(available: bool, passed: bool) -> str:
    if not available:
        return "[yellow]- Indeterminate[/yellow]"
    return "[green]✓ Passed[/green]" if passed else "[red]✗ Failed[/red]"


def create_sharpe_table(result: SharpeResult) -> Table:
    """
    Create a Rich table for a Sharpe estimate.

    Args:
        result: SharpeResult from the estimator

    Returns:
        Configured Rich Table
    """
    table = _field_table("Sharpe Ratio")

    if result.sharpe_ratio is None:
        table.add_row("Sharpe Ratio", "[yellow]N/A[/yellow]")
    else:
        table.add_row("Sharpe Ratio", f"{result.sharpe_ratio:.2f}")
    table.add_row("Rating", interpret_sharpe(result.sharpe_ratio))
    table.add_row("Method", result.method.value)
    if result.reason is not None:
        table.add_row("Reason", result.reason.value, style="yellow")
    if result.message:
        table.add_row("Note", result.message, style="dim")
    return table


def create_consistency_table(result: ConsistencyResult) -> Table:
    """
    Create a Rich table for a profit consistency evaluation.

    Args:
        result: ConsistencyResult from any of the evaluators

    Returns:
        Configured Rich Table
    """
    table = _field_table(f"Profit Consistency ({result.threshold:g}% rule)")

    table.add_row("Status", _status(result.is_available, result.passed))
    if result.consistency_percent is None:
        table.add_row("Consistency", "[yellow]N/A[/yellow]")
    else:
        table.add_row("Consistency", f"{result.consistency_percent:.2f}%")

    best_day = f"${result.best_day_profit:,.2f}"
    if result.best_day_date:
        best_day += f" ({result.best_day_date})"
    table.add_row("Best Day", best_day)
    table.add_row("Total Profit", f"${result.total_profit:,.2f}")
    table.add_row("Profitable Days", str(result.profitable_days))
    table.add_row("Losing Days", str(result.losing_days))
    table.add_row("Method", result.method.value)
    table.add_row("Note", result.message, style="dim")
    return table


def create_kelly_table(result: KellyResult) -> Table:
    """Create a Rich table for Kelly criterion fractions."""
    table = _field_table("Kelly Criterion")

    style = "green" if result.has_edge else "red"
    table.add_row("Full Kelly", f"{result.full_kelly_percent:.2f}%", style=style)
    table.add_row("Half Kelly", f"{result.half_kelly_percent:.2f}%")
    table.add_row("Quarter Kelly", f"{result.quarter_kelly_percent:.2f}%")
    table.add_row("Payoff Ratio", f"{result.payoff_ratio:.2f}")
    table.add_row("Expectancy", f"${result.expectancy:,.2f} per trade")
    table.add_row("Advice", result.advisory, style="dim")
    return table


def create_growth_summary_table(projection: CompoundProjection) -> Table:
    """Create a Rich table with the headline figures of a compound projection."""
    table = _field_table("Compound Growth")

    table.add_row("Starting Capital", f"${projection.starting_capital:,.2f}")
    table.add_row("Return per Period", f"{projection.periodic_return * 100:g}%")
    table.add_row("Periods", str(projection.num_periods))
    table.add_row("Final Capital", f"${projection.final_capital:,.2f}", style="green bold")
    table.add_row("Total Profit", f"${projection.total_profit:,.2f}")
    table.add_row("Total Return", f"{projection.total_return_percent:,.2f}%")
    return table


def create_growth_breakdown_table(projection: CompoundProjection) -> Table:
    """
    Create a Rich table listing each itemized period.

    Only the periods present in ``projection.breakdown`` are listed; the
    caption notes when the listing is truncated.
    """
    table = Table(title="Growth by Period")
    table.add_column("Period", style="cyan", justify="right")
    table.add_column("Capital", style="white", justify="right")
    table.add_column("Profit", style="magenta", justify="right")

    for row in projection.breakdown:
        table.add_row(str(row.period), f"${row.capital:,.2f}", f"${row.profit:,.2f}")

    if len(projection.breakdown) < projection.num_periods:
        table.caption = f"First {len(projection.breakdown)} of {projection.num_periods} periods shown"
    return table


def create_position_size_table(size: PositionSize, pair: str, pip_value: float) -> Table:
    """Create a Rich table for a fixed-risk position size."""
    table = _field_table(f"Position Size - {pair}")

    table.add_row("Risk Amount", f"${size.risk_amount:,.2f}")
    table.add_row("Stop Distance", f"{size.stop_loss_pips:.1f} pips")
    table.add_row("Pip Value", f"${pip_value:g} per lot")
    table.add_row("Standard Lots", f"{size.lot_size:.2f}", style="green bold")
    table.add_row("Mini Lots", f"{size.mini_lots:.2f}")
    table.add_row("Micro Lots", f"{size.micro_lots:.2f}")
    table.add_row("Units", f"{size.units:,.0f}")
    return table


def create_risk_reward_table(result: RiskReward) -> Table:
    """Create a Rich table for a planned trade's risk/reward."""
    table = _field_table("Risk / Reward")

    table.add_row("Risk", f"{result.risk:.5f}")
    table.add_row("Reward", f"{result.reward:.5f}")
    table.add_row("Ratio", f"1:{result.ratio:.2f}")
    table.add_row("Breakeven Win Rate", f"{result.breakeven_win_rate_percent:.1f}%")
    return table
