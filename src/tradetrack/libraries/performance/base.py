"""
Base Sharpe Estimation Method Abstract Class.

Every Sharpe estimation method inherits from BaseSharpeMethod. The
SharpeEstimator holds an ordered list of methods and returns the first
non-null result, so adding a new method is a pure extension.

Philosophy:
- Methods are stateless (compute from SharpeInputs only)
- Methods never raise for short or degenerate data; they return a
  SharpeResult with ``sharpe_ratio=None`` and a reason
- Methods declare their own applicability (minimum sample size)
"""

from abc import ABC, abstractmethod

from tradetrack.libraries.performance.models import (
    SharpeInputs,
    SharpeMethod,
    SharpeResult,
    UnavailableReason,
)


class BaseSharpeMethod(ABC):
    """
    Abstract base class for Sharpe ratio estimation methods.

    Responsibilities:
    - Decide whether the available inputs are enough (can_apply)
    - Compute an annualized Sharpe ratio from those inputs (compute)
    - Explain a missing result via UnavailableReason

    Does NOT:
    - Fetch or cache data
    - Fall back to other methods (the estimator does that)

    Example Implementation:
        ```python
        class WeeklyReturnsSharpe(BaseSharpeMethod):
            method = SharpeMethod.WEEKLY_RETURNS

            def can_apply(self, inputs: SharpeInputs) -> bool:
                return len(inputs.weekly_returns) >= 8

            def compute(self, inputs: SharpeInputs) -> SharpeResult:
                ...
        ```
    """

    method: SharpeMethod

    @abstractmethod
    def can_apply(self, inputs: SharpeInputs) -> bool:
        """
        Check whether this method's minimum-input requirement is met.

        Args:
            inputs: All data available to the estimator

        Returns:
            True if compute() should be attempted
        """
        pass

    @abstractmethod
    def compute(self, inputs: SharpeInputs) -> SharpeResult:
        """
        Compute the annualized Sharpe ratio.

        Args:
            inputs: All data available to the estimator

        Returns:
            SharpeResult tagged with this method. ``sharpe_ratio`` is None
            when the data is degenerate (e.g. zero variance).

        Note:
            - Must be deterministic (same input -> same output)
            - Must not raise for insufficient or degenerate data
        """
        pass

    @property
    def name(self) -> str:
        """Method identifier (e.g. "monthly_returns")."""
        return self.method.value

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable method name for reports (e.g. "Monthly Returns")."""
        pass

    def _unavailable(self, reason: UnavailableReason, message: str) -> SharpeResult:
        """Build a null result attributed to this method."""
        return SharpeResult(sharpe_ratio=None, method=self.method, reason=reason, message=message)

    def _result(self, sharpe_ratio: float) -> SharpeResult:
        """Build a successful result attributed to this method."""
        return SharpeResult(
            sharpe_ratio=sharpe_ratio,
            method=self.method,
            message=f"Sharpe ratio estimated from {self.display_name.lower()}",
        )
