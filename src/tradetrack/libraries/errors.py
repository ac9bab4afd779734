"""Exceptions raised by the calculation libraries.

Only caller contract violations are raised. Degenerate data (zero variance,
zero denominator, non-profitable series) is an expected business outcome and
is returned as a ``None`` value with an ``UnavailableReason`` instead.
"""


class MetricsError(Exception):
    """Base error for the calculation libraries."""

    pass


class InvalidParameterError(MetricsError, ValueError):
    """Parameter outside its valid domain (e.g. non-positive balance or price).

    Indicates a data-entry or integration bug upstream, never a
    "cannot compute" result.
    """

    pass


class InsufficientDataError(MetricsError, ValueError):
    """Series too short for the requested statistic.

    Raised by the descriptive-statistics primitives only. Estimators catch it
    and report ``UnavailableReason.INSUFFICIENT_DATA``.
    """

    def __init__(self, statistic: str, required: int, actual: int):
        self.statistic = statistic
        self.required = required
        self.actual = actual
        super().__init__(f"{statistic} requires at least {required} value(s), got {actual}")
