"""
tradetrack - Trading Performance Tracker

Public API for deriving performance statistics from backtests and
trade-journal records.
"""

from importlib.metadata import version

try:
    __version__ = version("tradetrack")
except Exception:
    __version__ = "0.0.0.dev"  # Fallback for development


__all__ = [
    "__version__",
]
