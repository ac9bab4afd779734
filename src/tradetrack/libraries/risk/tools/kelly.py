"""Kelly criterion position sizing.

Formula:
    payoff_ratio = avg_win / avg_loss
    kelly = win_rate - (1 - win_rate) / payoff_ratio
    expectancy = win_rate * avg_win - (1 - win_rate) * avg_loss

Half and quarter Kelly are the usual practical fractions: full Kelly
maximizes long-run growth but with drawdowns most traders cannot tolerate.

Thread Safety:
- Pure function, no shared state
"""

import structlog

from tradetrack.libraries.errors import InvalidParameterError
from tradetrack.libraries.risk.models import KellyResult

logger = structlog.get_logger(__name__)


def calculate_kelly(*, win_rate: float, avg_win: float, avg_loss: float) -> KellyResult:
    """Calculate Kelly fractions and expectancy from trade statistics.

    Args:
        win_rate: Fraction of winning trades in (0, 1] (e.g. 0.55 = 55%)
        avg_win: Average winning trade (positive currency amount)
        avg_loss: Average losing trade as a positive amount (absolute value)

    Returns:
        KellyResult. A negative Kelly is returned as-is with a "no edge"
        advisory rather than being clamped to zero.

    Raises:
        InvalidParameterError: If win_rate not in (0, 1]
        InvalidParameterError: If avg_win or avg_loss is not positive

    Examples:
        >>> result = calculate_kelly(win_rate=0.55, avg_win=100, avg_loss=50)
        >>> result.payoff_ratio, round(result.full_kelly_percent, 2), round(result.expectancy, 2)
        (2.0, 32.5, 32.5)

        >>> # Losing system: negative Kelly surfaced, not hidden
        >>> round(calculate_kelly(win_rate=0.3, avg_win=50, avg_loss=100).full_kelly_percent, 2)
        -110.0
    """
    if not 0 < win_rate <= 1:
        raise InvalidParameterError(f"win_rate must be in (0, 1], got {win_rate}")

    if avg_win <= 0:
        raise InvalidParameterError(f"avg_win must be positive, got {avg_win}")

    if avg_loss <= 0:
        raise InvalidParameterError(f"avg_loss must be positive (absolute value of average loss), got {avg_loss}")

    loss_rate = 1 - win_rate
    payoff_ratio = avg_win / avg_loss
    kelly = win_rate - loss_rate / payoff_ratio
    expectancy = win_rate * avg_win - loss_rate * avg_loss

    if kelly > 0:
        advisory = (
            f"Edge detected: risk at most {kelly * 100:.2f}% per trade; "
            f"half Kelly ({kelly * 50:.2f}%) is the common practical choice"
        )
    else:
        logger.debug("kelly.no_edge", win_rate=win_rate, payoff_ratio=payoff_ratio, kelly=kelly)
        advisory = "No edge: Kelly is not positive, so no position should be sized on these statistics"

    return KellyResult(
        full_kelly_percent=kelly * 100,
        half_kelly_percent=kelly / 2 * 100,
        quarter_kelly_percent=kelly / 4 * 100,
        payoff_ratio=payoff_ratio,
        expectancy=expectancy,
        advisory=advisory,
    )
