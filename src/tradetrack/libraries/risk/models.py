"""Risk tool result models.

Immutable data structures returned by the sizing, Kelly and growth tools.

Design Principles:
- Immutable (frozen dataclasses)
- Pure data (no business logic beyond derived read-only properties)
- Plain floats; formatting is left to presentation code

Thread Safety:
- All models are immutable and thread-safe
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class KellyResult:
    """Kelly criterion sizing fractions and per-trade expectancy.

    A negative ``full_kelly_percent`` is a valid result: the inputs show no
    edge and no position should be taken. It is never clamped to zero.

    Attributes:
        full_kelly_percent: Optimal fraction of capital to risk (%)
        half_kelly_percent: Half of full Kelly (%)
        quarter_kelly_percent: Quarter of full Kelly (%)
        payoff_ratio: Average win / average loss
        expectancy: Expected currency result per trade
        advisory: Caller-facing guidance for display

    Example:
        >>> result = calculate_kelly(win_rate=0.55, avg_win=100, avg_loss=50)
        >>> round(result.full_kelly_percent, 2)
        32.5
    """

    full_kelly_percent: float
    half_kelly_percent: float
    quarter_kelly_percent: float
    payoff_ratio: float
    expectancy: float
    advisory: str

    @property
    def has_edge(self) -> bool:
        """Full Kelly is positive (the inputs describe a winning system)."""
        return self.full_kelly_percent > 0


@dataclass(frozen=True)
class GrowthPeriod:
    """One itemized period of a compound projection.

    Attributes:
        period: 1-based period number
        capital: Capital at the end of the period
        profit: Cumulative profit since the start
    """

    period: int
    capital: float
    profit: float


@dataclass(frozen=True)
class CompoundProjection:
    """Capital growth under a constant periodic return.

    ``final_capital`` and the totals always cover every period, even when
    ``breakdown`` is truncated for display.
    """

    starting_capital: float
    periodic_return: float
    num_periods: int
    final_capital: float
    total_profit: float
    total_return_percent: float
    breakdown: tuple[GrowthPeriod, ...]


@dataclass(frozen=True)
class PositionSize:
    """Position size for a fixed-risk trade.

    Attributes:
        risk_amount: Currency at risk (balance * risk%)
        stop_loss_distance: |entry - stop| in price units
        stop_loss_pips: Stop distance in pips (price units * 10,000)
        lot_size: Standard lots (100,000 units)
        units: Position size in units of the instrument
    """

    risk_amount: float
    stop_loss_distance: float
    stop_loss_pips: float
    lot_size: float
    units: float

    @property
    def mini_lots(self) -> float:
        """Position size in mini lots (10,000 units)."""
        return self.lot_size * 10

    @property
    def micro_lots(self) -> float:
        """Position size in micro lots (1,000 units)."""
        return self.lot_size * 100


@dataclass(frozen=True)
class RiskReward:
    """Risk/reward profile of a planned trade.

    Attributes:
        risk: |entry - stop| in price units
        reward: |take_profit - entry| in price units
        ratio: reward / risk (the X in 1:X)
        breakeven_win_rate_percent: Win rate needed to break even at this ratio
    """

    risk: float
    reward: float
    ratio: float
    breakeven_win_rate_percent: float
