"""Calculator commands - thin CLI orchestration over the calculation libraries."""

import sys
from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.markup import escape

from tradetrack.cli.loaders import load_daily_pnl, load_equity_curve, load_monthly_returns
from tradetrack.cli.ui import (
    create_consistency_table,
    create_growth_breakdown_table,
    create_growth_summary_table,
    create_kelly_table,
    create_position_size_table,
    create_risk_reward_table,
    create_sharpe_table,
)
from tradetrack.libraries.performance import (
    BacktestStatsSummary,
    ReturnSummary,
    estimate_sharpe_ratio,
    evaluate_best,
    evaluate_from_stats,
    r_multiple_pnl,
)
from tradetrack.libraries.risk.tools.growth import project_compound_growth
from tradetrack.libraries.risk.tools.kelly import calculate_kelly
from tradetrack.libraries.risk.tools.sizing import calculate_position_size, calculate_risk_reward, pip_value_for
from tradetrack.system import LoggerFactory, SystemConfig, get_system_config

console = Console()

_input_file = click.Path(exists=True, dir_okay=False, path_type=Path)


def _settings() -> SystemConfig:
    """System config, with logging configured from it on first use."""
    config = get_system_config()
    if not LoggerFactory.is_configured():
        LoggerFactory.configure(config.logging.to_logger_config())
    return config


def _fail(error: Exception) -> NoReturn:
    LoggerFactory.get_logger(__name__).error("cli.command_failed", error=str(error))
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    sys.exit(1)


@click.command("sharpe")
@click.option(
    "--monthly-returns",
    "-m",
    type=_input_file,
    help="CSV with year,month,return_percent columns",
)
@click.option(
    "--equity-curve",
    "-e",
    type=_input_file,
    help="CSV with date,equity columns",
)
@click.option("--total-return", type=float, help="Total return in percent (simplified estimate)")
@click.option("--period-days", type=float, help="Backtest length in days (simplified estimate)")
@click.option("--max-drawdown", type=float, help="Maximum drawdown in percent (simplified estimate)")
@click.option(
    "--risk-free-rate",
    type=float,
    help="Annual risk-free rate as decimal (default from config, 0.02 = 2%)",
)
def sharpe_command(
    monthly_returns: Optional[Path],
    equity_curve: Optional[Path],
    total_return: Optional[float],
    period_days: Optional[float],
    max_drawdown: Optional[float],
    risk_free_rate: Optional[float],
):
    """
    Estimate an annualized Sharpe ratio.

    Uses the most accurate data supplied: monthly returns (3+), then the
    equity curve (10+ points), then the total return / period / drawdown
    summary.

    \b
    Examples:
        tradetrack sharpe -m monthly.csv
        tradetrack sharpe -e equity.csv --risk-free-rate 0.045
        tradetrack sharpe --total-return 25 --period-days 365 --max-drawdown 10
    """
    summary_values = (total_return, period_days, max_drawdown)
    if any(v is not None for v in summary_values) and any(v is None for v in summary_values):
        raise click.UsageError("--total-return, --period-days and --max-drawdown must be given together")

    config = _settings()
    try:
        summary = None
        if total_return is not None and period_days is not None and max_drawdown is not None:
            summary = ReturnSummary(
                total_return_percent=total_return,
                period_days=period_days,
                max_drawdown_percent=max_drawdown,
            )

        result = estimate_sharpe_ratio(
            monthly_returns=load_monthly_returns(monthly_returns) if monthly_returns else None,
            equity_curve=load_equity_curve(equity_curve) if equity_curve else None,
            summary=summary,
            risk_free_rate_annual=config.metrics.risk_free_rate if risk_free_rate is None else risk_free_rate,
        )
    except (ValueError, OSError) as e:
        _fail(e)

    console.print(create_sharpe_table(result))


@click.command("consistency")
@click.option("--daily-pnl", "-d", type=_input_file, help="File with date,pnl lines (header optional)")
@click.option("--equity-curve", "-e", type=_input_file, help="CSV with date,equity columns")
@click.option(
    "--r-multiples",
    is_flag=True,
    help="Treat the --daily-pnl values as R-multiples (requires --risk-per-trade)",
)
@click.option("--risk-per-trade", type=float, help="Currency amount of 1R for --r-multiples")
@click.option("--wins", type=int, help="Winning trades (estimate from backtest statistics)")
@click.option("--losses", type=int, default=0, show_default=True, help="Losing trades")
@click.option("--total-trades", type=int, help="Total trades (default: wins + losses)")
@click.option("--risk", type=float, help="Risk per trade in percent (default from config)")
@click.option("--rr", type=float, help="Reward multiple of risk (default from config)")
@click.option("--threshold", "-t", type=float, help="Maximum best-day share of profit in percent (default from config)")
def consistency_command(
    daily_pnl: Optional[Path],
    equity_curve: Optional[Path],
    r_multiples: bool,
    risk_per_trade: Optional[float],
    wins: Optional[int],
    losses: int,
    total_trades: Optional[int],
    risk: Optional[float],
    rr: Optional[float],
    threshold: Optional[float],
):
    """
    Check the profit consistency rule.

    No single day may account for more than the threshold percentage of
    total profit. Daily P&L is preferred, then the equity curve; with
    neither, --wins/--losses give an estimate from backtest statistics.

    \b
    Examples:
        tradetrack consistency -d daily_pnl.csv
        tradetrack consistency -e equity.csv -t 30
        tradetrack consistency -d trades.csv --r-multiples --risk-per-trade 100
        tradetrack consistency --wins 40 --losses 20 --risk 1 --rr 2
    """
    if daily_pnl is None and equity_curve is None and wins is None:
        raise click.UsageError("Provide --daily-pnl, --equity-curve, or --wins/--losses")
    if r_multiples and (daily_pnl is None or risk_per_trade is None):
        raise click.UsageError("--r-multiples requires --daily-pnl and --risk-per-trade")

    config = _settings()
    threshold_percent = config.metrics.consistency_threshold if threshold is None else threshold

    try:
        if wins is not None and daily_pnl is None and equity_curve is None:
            summary = BacktestStatsSummary(
                winning_trades=wins,
                losing_trades=losses,
                total_trades=wins + losses if total_trades is None else total_trades,
                risk_percent=config.metrics.default_risk_percent if risk is None else risk,
                rr_ratio=config.metrics.default_rr_ratio if rr is None else rr,
            )
            result = evaluate_from_stats(summary, threshold_percent)
        else:
            entries = load_daily_pnl(daily_pnl) if daily_pnl else None
            if entries is not None and risk_per_trade is not None and r_multiples:
                entries = r_multiple_pnl([(e.date, e.pnl) for e in entries], risk_per_trade)

            result = evaluate_best(
                daily_pnl=entries,
                equity_curve=load_equity_curve(equity_curve) if equity_curve else None,
                threshold_percent=threshold_percent,
            )
    except (ValueError, OSError) as e:
        _fail(e)

    console.print(create_consistency_table(result))


@click.command("kelly")
@click.option("--win-rate", "-w", type=float, required=True, help="Win rate in percent (e.g. 55)")
@click.option("--avg-win", type=float, required=True, help="Average winning trade")
@click.option("--avg-loss", type=float, required=True, help="Average losing trade (absolute value)")
def kelly_command(win_rate: float, avg_win: float, avg_loss: float):
    """
    Calculate Kelly criterion position fractions.

    \b
    Example:
        tradetrack kelly --win-rate 55 --avg-win 100 --avg-loss 50
    """
    _settings()
    try:
        result = calculate_kelly(win_rate=win_rate / 100, avg_win=avg_win, avg_loss=avg_loss)
    except ValueError as e:
        _fail(e)

    console.print(create_kelly_table(result))


@click.command("compound")
@click.option("--capital", "-c", type=float, required=True, help="Starting capital")
@click.option("--rate", "-r", type=float, required=True, help="Return per period in percent (e.g. 5)")
@click.option("--periods", "-n", type=int, required=True, help="Number of compounding periods")
@click.option("--breakdown", type=int, help="Maximum periods to itemize (default from config)")
def compound_command(capital: float, rate: float, periods: int, breakdown: Optional[int]):
    """
    Project compound growth of capital.

    \b
    Example:
        tradetrack compound --capital 10000 --rate 5 --periods 12
    """
    config = _settings()
    try:
        projection = project_compound_growth(
            starting_capital=capital,
            periodic_return=rate / 100,
            num_periods=periods,
            max_breakdown_periods=config.metrics.breakdown_limit if breakdown is None else breakdown,
        )
    except ValueError as e:
        _fail(e)

    console.print(create_growth_summary_table(projection))
    if projection.breakdown:
        console.print(create_growth_breakdown_table(projection))


@click.command("position-size")
@click.option("--balance", "-b", type=float, required=True, help="Account balance")
@click.option("--risk", type=float, help="Risk per trade in percent (default from config)")
@click.option("--entry", type=float, required=True, help="Entry price")
@click.option("--stop", type=float, required=True, help="Stop loss price")
@click.option("--pair", "-p", default="EUR/USD", show_default=True, help="Symbol for the pip value lookup")
@click.option("--pip-value", type=float, help="Custom pip value per standard lot (overrides --pair)")
def position_size_command(
    balance: float,
    risk: Optional[float],
    entry: float,
    stop: float,
    pair: str,
    pip_value: Optional[float],
):
    """
    Size a position so that hitting the stop loses a fixed % of balance.

    \b
    Examples:
        tradetrack position-size -b 10000 --risk 1 --entry 1.1000 --stop 1.0950
        tradetrack position-size -b 5000 --entry 1.2700 --stop 1.2650 --pip-value 12.5
    """
    config = _settings()
    if pip_value is not None:
        pair = "Custom"

    try:
        value = pip_value_for(pair, custom=pip_value, overrides=config.metrics.pip_values)
        size = calculate_position_size(
            account_balance=balance,
            risk_percent=config.metrics.default_risk_percent if risk is None else risk,
            entry_price=entry,
            stop_loss_price=stop,
            pip_value=value,
        )
    except ValueError as e:
        _fail(e)

    console.print(create_position_size_table(size, pair, value))


@click.command("risk-reward")
@click.option("--entry", type=float, required=True, help="Entry price")
@click.option("--stop", type=float, required=True, help="Stop loss price")
@click.option("--take-profit", type=float, required=True, help="Take profit price")
def risk_reward_command(entry: float, stop: float, take_profit: float):
    """
    Show the risk/reward ratio and breakeven win rate of a planned trade.

    \b
    Example:
        tradetrack risk-reward --entry 1.1000 --stop 1.0950 --take-profit 1.1100
    """
    _settings()
    try:
        result = calculate_risk_reward(entry_price=entry, stop_loss_price=stop, take_profit_price=take_profit)
    except ValueError as e:
        _fail(e)

    console.print(create_risk_reward_table(result))
