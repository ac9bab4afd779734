"""Position sizing tools for risk management.

Pure functions converting account risk parameters and a stop distance into
a position size, plus the risk/reward profile of a planned trade.

Design Principles:
- Pure functions (no side effects, no global state)
- Fail fast on invalid inputs with detailed messages
- FX conventions: 1 pip = 0.0001 price units, pip value quoted per standard lot

Supported Models:
- Fixed Risk: Risk a fixed % of balance between entry and stop

Thread Safety:
- All functions are pure and thread-safe
- No shared mutable state
"""

from typing import Mapping

from tradetrack.libraries.errors import InvalidParameterError
from tradetrack.libraries.risk.models import PositionSize, RiskReward

# Price units -> pips for 4-decimal FX quotes
PIP_MULTIPLIER = 10_000

# Pip value in account currency (USD) per standard lot
PIP_VALUES: dict[str, float] = {
    "EUR/USD": 10.0,
    "GBP/USD": 10.0,
    "USD/JPY": 9.09,
    "USD/CHF": 10.75,
    "AUD/USD": 10.0,
    "NZD/USD": 10.0,
    "USD/CAD": 7.58,
    "XAU/USD": 10.0,
    "BTC/USD": 1.0,
}


def calculate_position_size(
    *,
    account_balance: float,
    risk_percent: float,
    entry_price: float,
    stop_loss_price: float,
    pip_value: float,
) -> PositionSize:
    """Calculate position size so that hitting the stop loses a fixed % of balance.

    Formula:
        risk_amount = account_balance * risk_percent / 100
        stop_loss_distance = |entry_price - stop_loss_price|
        stop_loss_pips = stop_loss_distance * 10,000
        lot_size = risk_amount / (stop_loss_pips * pip_value)
        units = risk_amount / stop_loss_distance

    Args:
        account_balance: Account balance in account currency
        risk_percent: Risk per trade as percentage (1 = 1%)
        entry_price: Planned entry price
        stop_loss_price: Stop loss price (either side of entry)
        pip_value: Value of one pip per standard lot in account currency

    Returns:
        PositionSize

    Raises:
        InvalidParameterError: If balance, risk, prices or pip_value is not positive
        InvalidParameterError: If entry_price equals stop_loss_price

    Example:
        >>> size = calculate_position_size(
        ...     account_balance=10000,
        ...     risk_percent=1,
        ...     entry_price=1.1000,
        ...     stop_loss_price=1.0950,
        ...     pip_value=10,
        ... )
        >>> round(size.risk_amount, 2), round(size.stop_loss_pips, 1), round(size.lot_size, 2)
        (100.0, 50.0, 0.2)
    """
    if account_balance <= 0:
        raise InvalidParameterError(f"account_balance must be positive, got {account_balance}")

    if risk_percent <= 0:
        raise InvalidParameterError(f"risk_percent must be positive, got {risk_percent}")

    if entry_price <= 0:
        raise InvalidParameterError(f"entry_price must be positive, got {entry_price}")

    if stop_loss_price <= 0:
        raise InvalidParameterError(f"stop_loss_price must be positive, got {stop_loss_price}")

    if entry_price == stop_loss_price:
        raise InvalidParameterError(f"entry_price and stop_loss_price must differ, both are {entry_price}")

    if pip_value <= 0:
        raise InvalidParameterError(f"pip_value must be positive, got {pip_value}")

    risk_amount = account_balance * (risk_percent / 100)
    stop_loss_distance = abs(entry_price - stop_loss_price)
    stop_loss_pips = stop_loss_distance * PIP_MULTIPLIER

    return PositionSize(
        risk_amount=risk_amount,
        stop_loss_distance=stop_loss_distance,
        stop_loss_pips=stop_loss_pips,
        lot_size=risk_amount / (stop_loss_pips * pip_value),
        units=risk_amount / stop_loss_distance,
    )


def pip_value_for(
    pair: str,
    *,
    custom: float | None = None,
    overrides: Mapping[str, float] | None = None,
) -> float:
    """Look up the per-standard-lot pip value for a symbol.

    Args:
        pair: Symbol such as "EUR/USD", or "Custom"
        custom: Pip value to use when pair is "Custom"
        overrides: Extra or replacement pip values (e.g. from configuration)

    Returns:
        Pip value in account currency

    Raises:
        InvalidParameterError: If the pair is unknown, or "Custom" without a positive custom value

    Example:
        >>> pip_value_for("USD/JPY")
        9.09
        >>> pip_value_for("Custom", custom=12.5)
        12.5
    """
    if pair.lower() == "custom":
        if custom is None or custom <= 0:
            raise InvalidParameterError(f"custom pip value must be positive, got {custom}")
        return custom

    table = {symbol.upper(): value for symbol, value in {**PIP_VALUES, **(overrides or {})}.items()}
    key = pair.upper()
    if key not in table:
        raise InvalidParameterError(f"Unknown pair '{pair}'. Known pairs: {', '.join(sorted(table))}, Custom")

    return table[key]


def calculate_risk_reward(*, entry_price: float, stop_loss_price: float, take_profit_price: float) -> RiskReward:
    """Calculate the risk/reward profile of a planned trade.

    Formula:
        risk = |entry - stop|
        reward = |take_profit - entry|
        ratio = reward / risk
        breakeven_win_rate = 1 / (1 + ratio) * 100

    Raises:
        InvalidParameterError: If any price is not positive, or entry equals stop

    Example:
        >>> rr = calculate_risk_reward(entry_price=1.1000, stop_loss_price=1.0950, take_profit_price=1.1100)
        >>> round(rr.ratio, 2), round(rr.breakeven_win_rate_percent, 1)
        (2.0, 33.3)
    """
    if entry_price <= 0 or stop_loss_price <= 0 or take_profit_price <= 0:
        raise InvalidParameterError(
            "entry_price, stop_loss_price and take_profit_price must be positive, "
            f"got {entry_price}, {stop_loss_price}, {take_profit_price}"
        )

    if entry_price == stop_loss_price:
        raise InvalidParameterError(f"entry_price and stop_loss_price must differ, both are {entry_price}")

    risk = abs(entry_price - stop_loss_price)
    reward = abs(take_profit_price - entry_price)
    ratio = reward / risk

    return RiskReward(
        risk=risk,
        reward=reward,
        ratio=ratio,
        breakeven_win_rate_percent=(1 / (1 + ratio)) * 100,
    )
