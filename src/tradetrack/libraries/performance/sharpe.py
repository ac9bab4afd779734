"""Sharpe ratio estimation with fallback across data sources.

Three estimation methods, tried in fixed priority order:

1. MonthlyReturnsSharpe: recorded monthly returns (most accurate)
2. EquityCurveSharpe: period returns derived from the equity curve
3. SimplifiedSharpe: headline return and max drawdown (least accurate)

The first method that applies and yields a value wins. The estimator never
raises for missing or degenerate data; it reports ``method="none"`` with a
reason instead.

Usage:
    >>> from tradetrack.libraries.performance.sharpe import estimate_sharpe_ratio
    >>> result = estimate_sharpe_ratio(monthly_returns=returns, equity_curve=curve)
    >>> result.sharpe_ratio, result.method
    (1.42, <SharpeMethod.MONTHLY_RETURNS: 'monthly_returns'>)
"""

import math
from typing import Sequence

import structlog

from tradetrack.libraries.errors import InsufficientDataError
from tradetrack.libraries.performance import stats
from tradetrack.libraries.performance.base import BaseSharpeMethod
from tradetrack.libraries.performance.models import (
    EquityPoint,
    MonthlyReturn,
    ReturnSummary,
    SharpeInputs,
    SharpeMethod,
    SharpeResult,
    UnavailableReason,
)

logger = structlog.get_logger(__name__)

DEFAULT_RISK_FREE_RATE = 0.02
MONTHS_PER_YEAR = 12
TRADING_DAYS_PER_YEAR = 252
CALENDAR_DAYS_PER_YEAR = 365


class MonthlyReturnsSharpe(BaseSharpeMethod):
    """
    Sharpe ratio from monthly percentage returns.

    Formula:
        rf_monthly = (annual_rate / 12) * 100      # percentage points
        sharpe = (mean - rf_monthly) / sample_std * sqrt(12)
    """

    method = SharpeMethod.MONTHLY_RETURNS
    min_samples = 3

    @property
    def display_name(self) -> str:
        return "Monthly Returns"

    def can_apply(self, inputs: SharpeInputs) -> bool:
        return len(inputs.monthly_returns) >= self.min_samples

    def compute(self, inputs: SharpeInputs) -> SharpeResult:
        returns = [r.return_percent for r in inputs.monthly_returns]

        try:
            mean_return = stats.mean(returns)
            std_dev = stats.sample_std_dev(returns)
        except InsufficientDataError as e:
            return self._unavailable(UnavailableReason.INSUFFICIENT_DATA, str(e))

        if stats.has_zero_dispersion(std_dev, mean_return):
            return self._unavailable(
                UnavailableReason.ZERO_VARIANCE,
                "Monthly returns have no volatility; Sharpe ratio is undefined",
            )

        monthly_risk_free = (inputs.risk_free_rate_annual / MONTHS_PER_YEAR) * 100
        monthly_sharpe = (mean_return - monthly_risk_free) / std_dev

        return self._result(monthly_sharpe * math.sqrt(MONTHS_PER_YEAR))


class EquityCurveSharpe(BaseSharpeMethod):
    """
    Sharpe ratio from an equity curve.

    Points are sorted by date (caller order is not trusted), converted to
    simple period returns, then annualized on a 252 trading-day basis.
    Steps from a non-positive equity are skipped.
    """

    method = SharpeMethod.EQUITY_CURVE
    min_points = 10
    min_returns = 2

    @property
    def display_name(self) -> str:
        return "Equity Curve"

    def can_apply(self, inputs: SharpeInputs) -> bool:
        return len(inputs.equity_curve) >= self.min_points

    def compute(self, inputs: SharpeInputs) -> SharpeResult:
        ordered = stats.sort_equity_curve(inputs.equity_curve)
        daily_returns = stats.percent_changes([p.equity for p in ordered])

        if len(daily_returns) < self.min_returns:
            return self._unavailable(
                UnavailableReason.INSUFFICIENT_DATA,
                f"Equity curve yields {len(daily_returns)} usable return(s); at least {self.min_returns} required",
            )

        mean_return = stats.mean(daily_returns)
        std_dev = stats.sample_std_dev(daily_returns)

        if stats.has_zero_dispersion(std_dev, mean_return):
            return self._unavailable(
                UnavailableReason.ZERO_VARIANCE,
                "Equity curve returns have no volatility; Sharpe ratio is undefined",
            )

        daily_risk_free = (inputs.risk_free_rate_annual / TRADING_DAYS_PER_YEAR) * 100
        daily_sharpe = (mean_return - daily_risk_free) / std_dev

        return self._result(daily_sharpe * math.sqrt(TRADING_DAYS_PER_YEAR))


class SimplifiedSharpe(BaseSharpeMethod):
    """
    Approximate Sharpe ratio from headline backtest figures.

    Formula:
        annualized_return = total_return_pct / period_days * 365
        estimated_volatility = |max_drawdown_pct| * 2
        sharpe = (annualized_return - annual_rate * 100) / estimated_volatility

    The volatility term is a rule of thumb with no statistical derivation:
    twice the max drawdown stands in for return dispersion. Results are
    indicative only and are used when no return series is recorded.
    """

    method = SharpeMethod.SIMPLIFIED
    drawdown_volatility_multiplier = 2

    @property
    def display_name(self) -> str:
        return "Simplified Estimate"

    def can_apply(self, inputs: SharpeInputs) -> bool:
        return inputs.summary is not None

    def compute(self, inputs: SharpeInputs) -> SharpeResult:
        summary = inputs.summary
        if summary is None:
            return self._unavailable(UnavailableReason.INSUFFICIENT_DATA, "No backtest summary provided")

        if summary.period_days <= 0:
            return self._unavailable(
                UnavailableReason.ZERO_DENOMINATOR,
                f"Backtest period must span at least one day, got {summary.period_days}",
            )

        if summary.max_drawdown_percent == 0:
            return self._unavailable(
                UnavailableReason.ZERO_DENOMINATOR,
                "Max drawdown is zero; volatility cannot be approximated",
            )

        annualized_return = (summary.total_return_percent / summary.period_days) * CALENDAR_DAYS_PER_YEAR
        risk_free_percent = inputs.risk_free_rate_annual * 100
        estimated_volatility = abs(summary.max_drawdown_percent) * self.drawdown_volatility_multiplier

        return self._result((annualized_return - risk_free_percent) / estimated_volatility)


class SharpeEstimator:
    """
    Coordinator that tries Sharpe methods in priority order.

    Stateless: one instance can score any number of backtests, including
    concurrently.

    Example:
        >>> estimator = SharpeEstimator()
        >>> result = estimator.estimate(equity_curve=curve)
        >>> result.method
        <SharpeMethod.EQUITY_CURVE: 'equity_curve'>
    """

    def __init__(self, methods: Sequence[BaseSharpeMethod] | None = None):
        if methods is None:
            methods = (MonthlyReturnsSharpe(), EquityCurveSharpe(), SimplifiedSharpe())
        self._methods = tuple(methods)

    @property
    def methods(self) -> tuple[BaseSharpeMethod, ...]:
        """Methods in priority order."""
        return self._methods

    def estimate(
        self,
        monthly_returns: Sequence[MonthlyReturn] | None = None,
        equity_curve: Sequence[EquityPoint] | None = None,
        summary: ReturnSummary | None = None,
        risk_free_rate_annual: float = DEFAULT_RISK_FREE_RATE,
    ) -> SharpeResult:
        """
        Estimate the annualized Sharpe ratio from whatever data is available.

        Args:
            monthly_returns: Monthly percentage returns (>= 3 used)
            equity_curve: Equity points in any order (>= 10 used)
            summary: Headline return / period / drawdown figures
            risk_free_rate_annual: Annual risk-free rate as decimal (0.02 = 2%)

        Returns:
            First available result in priority order, or a result with
            ``method=SharpeMethod.NONE`` and the reason from the last
            method attempted.
        """
        inputs = SharpeInputs(
            monthly_returns=tuple(monthly_returns or ()),
            equity_curve=tuple(equity_curve or ()),
            summary=summary,
            risk_free_rate_annual=risk_free_rate_annual,
        )
        return self.estimate_from(inputs)

    def estimate_from(self, inputs: SharpeInputs) -> SharpeResult:
        """Estimate from a prepared SharpeInputs bundle."""
        last_failure: SharpeResult | None = None

        for method in self._methods:
            if not method.can_apply(inputs):
                logger.debug("sharpe.method_skipped", method=method.name, reason="not_applicable")
                continue

            result = method.compute(inputs)
            if result.is_available:
                logger.debug("sharpe.method_selected", method=method.name, sharpe_ratio=result.sharpe_ratio)
                return result

            logger.debug("sharpe.method_skipped", method=method.name, reason=result.reason)
            last_failure = result

        if last_failure is not None:
            return SharpeResult(
                sharpe_ratio=None,
                method=SharpeMethod.NONE,
                reason=last_failure.reason,
                message=last_failure.message,
            )

        return SharpeResult(
            sharpe_ratio=None,
            method=SharpeMethod.NONE,
            reason=UnavailableReason.INSUFFICIENT_DATA,
            message=(
                "Unable to calculate Sharpe ratio. Add at least "
                f"{MonthlyReturnsSharpe.min_samples} monthly returns or "
                f"{EquityCurveSharpe.min_points} equity curve points first."
            ),
        )


_default_estimator = SharpeEstimator()


def estimate_sharpe_ratio(
    monthly_returns: Sequence[MonthlyReturn] | None = None,
    equity_curve: Sequence[EquityPoint] | None = None,
    summary: ReturnSummary | None = None,
    risk_free_rate_annual: float = DEFAULT_RISK_FREE_RATE,
) -> SharpeResult:
    """Estimate a Sharpe ratio with the default method priority."""
    return _default_estimator.estimate(
        monthly_returns=monthly_returns,
        equity_curve=equity_curve,
        summary=summary,
        risk_free_rate_annual=risk_free_rate_annual,
    )


def interpret_sharpe(sharpe_ratio: float | None) -> str:
    """
    Provide a display label for a Sharpe ratio.

    Example:
        >>> interpret_sharpe(1.4)
        'Good'
        >>> interpret_sharpe(None)
        'Unavailable'
    """
    if sharpe_ratio is None:
        return "Unavailable"
    if sharpe_ratio > 3:
        return "Exceptional"
    elif sharpe_ratio > 2:
        return "Very Good"
    elif sharpe_ratio > 1:
        return "Good"
    elif sharpe_ratio > 0:
        return "Acceptable"
    else:
        return "Poor"
