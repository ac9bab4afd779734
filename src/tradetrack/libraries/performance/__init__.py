"""Performance metrics library for backtest and journal analysis.

1. **Models** (`models.py`): Immutable Pydantic records
   - EquityPoint, MonthlyReturn, DailyPnLEntry: Input series
   - BacktestStatsSummary, ReturnSummary: Coarse backtest figures
   - SharpeResult, ConsistencyResult: Outputs with explicit "unavailable" reasons

2. **Stats** (`stats.py`): Descriptive statistics primitives
   - mean, sample_std_dev, percent_changes, equity_differences

3. **Sharpe** (`sharpe.py`): Annualized Sharpe ratio with method fallback
   - MonthlyReturnsSharpe -> EquityCurveSharpe -> SimplifiedSharpe

4. **Consistency** (`consistency.py`): Prop-firm profit consistency rule
   - From daily P&L, equity curve, or aggregate win/loss statistics

Usage:
    >>> from tradetrack.libraries.performance import estimate_sharpe_ratio
    >>> result = estimate_sharpe_ratio(monthly_returns=returns)
    >>> if result.sharpe_ratio is None:
    ...     print(result.message)

Design Principles:
    - Pure functions over plain floats (callers convert storage decimals)
    - "Cannot compute" is a result (None + reason), never a sentinel number
    - Explicit edge case handling (short series, zero variance, losing totals)
"""

from tradetrack.libraries.performance.base import BaseSharpeMethod
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
    ConsistencyResult,
    DailyPnLEntry,
    EquityPoint,
    MonthlyReturn,
    ReturnSummary,
    SharpeInputs,
    SharpeMethod,
    SharpeResult,
    UnavailableReason,
)
from tradetrack.libraries.performance.sharpe import (
    EquityCurveSharpe,
    MonthlyReturnsSharpe,
    SharpeEstimator,
    SimplifiedSharpe,
    estimate_sharpe_ratio,
    interpret_sharpe,
)

__all__ = [
    # Models
    "EquityPoint",
    "MonthlyReturn",
    "DailyPnLEntry",
    "BacktestStatsSummary",
    "ReturnSummary",
    "SharpeInputs",
    "SharpeResult",
    "SharpeMethod",
    "ConsistencyResult",
    "ConsistencyMethod",
    "UnavailableReason",
    # Sharpe
    "BaseSharpeMethod",
    "MonthlyReturnsSharpe",
    "EquityCurveSharpe",
    "SimplifiedSharpe",
    "SharpeEstimator",
    "estimate_sharpe_ratio",
    "interpret_sharpe",
    # Consistency
    "evaluate_from_daily",
    "evaluate_from_equity_curve",
    "evaluate_from_stats",
    "evaluate_best",
    "r_multiple_pnl",
]
