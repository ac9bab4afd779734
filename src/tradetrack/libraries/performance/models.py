"""Performance metrics data models.

Immutable Pydantic records passed into (and returned from) the pure
calculation functions. The engine never owns or mutates these; the
persistence layer does.

Numeric fields are plain floats. Pydantic coerces ``Decimal`` and ``int``
values supplied by storage collaborators at construction time, so the
calculations themselves never touch decimal arithmetic.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UnavailableReason(str, Enum):
    """Why an estimator produced no value."""

    INSUFFICIENT_DATA = "insufficient_data"
    ZERO_VARIANCE = "zero_variance"
    ZERO_DENOMINATOR = "zero_denominator"
    NON_POSITIVE_TOTAL = "non_positive_total"


class SharpeMethod(str, Enum):
    """Sharpe estimation method that produced a result."""

    MONTHLY_RETURNS = "monthly_returns"
    EQUITY_CURVE = "equity_curve"
    SIMPLIFIED = "simplified"
    NONE = "none"


class ConsistencyMethod(str, Enum):
    """Source of the data a consistency result was computed from."""

    DAILY_PNL = "daily_pnl"
    EQUITY_CURVE = "equity_curve"
    BACKTEST_STATS = "backtest_stats"
    NONE = "none"


# ============================================
# Input records
# ============================================


class EquityPoint(BaseModel):
    """Account equity at a point in time.

    Timezone-aware dates are converted to naive UTC so that points from
    different sources always compare and sort together.
    """

    model_config = ConfigDict(frozen=True)

    date: datetime
    equity: float

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        """Convert aware datetimes to naive UTC."""
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class MonthlyReturn(BaseModel):
    """Percentage return for one calendar month (e.g. 2.5 for +2.5%)."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(ge=1, le=12)
    return_percent: float


class DailyPnLEntry(BaseModel):
    """Raw currency P&L for one calendar day. Negative values are losses."""

    model_config = ConfigDict(frozen=True)

    date: str  # YYYY-MM-DD
    pnl: float


class BacktestStatsSummary(BaseModel):
    """
    Coarse backtest statistics.

    Used as a proxy for profit consistency when no daily P&L or equity
    series has been recorded for a backtest.
    """

    model_config = ConfigDict(frozen=True)

    winning_trades: int = Field(ge=0)
    losing_trades: int = Field(ge=0)
    total_trades: int = Field(ge=0)
    risk_percent: float  # Risk per trade as percentage of account
    rr_ratio: float  # Reward multiple of risk for a winning trade (1:X)


class ReturnSummary(BaseModel):
    """Headline backtest figures used by the simplified Sharpe estimate."""

    model_config = ConfigDict(frozen=True)

    total_return_percent: float
    period_days: float
    max_drawdown_percent: float


class SharpeInputs(BaseModel):
    """Everything a Sharpe estimation method may draw on."""

    model_config = ConfigDict(frozen=True)

    monthly_returns: tuple[MonthlyReturn, ...] = ()
    equity_curve: tuple[EquityPoint, ...] = ()
    summary: ReturnSummary | None = None
    risk_free_rate_annual: float = 0.02


# ============================================
# Results
# ============================================


class SharpeResult(BaseModel):
    """
    Annualized Sharpe ratio and the method that produced it.

    ``sharpe_ratio`` is None when no method could compute a value; ``reason``
    and ``message`` then explain why. None never means "zero".
    """

    model_config = ConfigDict(frozen=True)

    sharpe_ratio: float | None
    method: SharpeMethod
    reason: UnavailableReason | None = None
    message: str = ""

    @property
    def is_available(self) -> bool:
        """A value was computed."""
        return self.sharpe_ratio is not None


class ConsistencyResult(BaseModel):
    """
    Outcome of the profit consistency rule.

    ``consistency_percent`` is the best day's share of total profit. It is
    None when the series cannot be evaluated (too short, or not profitable);
    ``passed`` is then always False and ``message`` says why.
    """

    model_config = ConfigDict(frozen=True)

    consistency_percent: float | None
    passed: bool
    best_day_profit: float
    best_day_date: str | None = None
    total_profit: float
    profitable_days: int
    losing_days: int
    threshold: float
    message: str
    method: ConsistencyMethod
    reason: UnavailableReason | None = None

    @property
    def is_available(self) -> bool:
        """A consistency percentage was computed."""
        return self.consistency_percent is not None
