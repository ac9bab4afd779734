"""Input loaders for CLI commands.

Reads the CSV layouts accepted by the calculators and turns them into the
performance library's input records:

- Monthly returns: ``year,month,return_percent``
- Equity curve: ``date,equity`` (ISO dates, any order)
- Daily P&L: ``date,pnl`` (header optional, invalid lines skipped)

Monthly-return and equity files are strict: a bad row is an error naming
the row. Daily P&L follows the bulk-paste convention instead, where lines
without a parsable number are skipped.
"""

import csv
from datetime import datetime
from pathlib import Path
from typing import Iterable

import structlog
from pydantic import ValidationError

from tradetrack.libraries.performance.models import DailyPnLEntry, EquityPoint, MonthlyReturn

logger = structlog.get_logger(__name__)

MONTHLY_RETURN_COLUMNS = ("year", "month", "return_percent")
EQUITY_CURVE_COLUMNS = ("date", "equity")


class InputFormatError(ValueError):
    """Input file is missing required columns or contains an unreadable row."""

    pass


def load_monthly_returns(path: Path | str) -> list[MonthlyReturn]:
    """Load monthly returns from a ``year,month,return_percent`` CSV."""
    returns = []
    for row_number, row in _read_rows(Path(path), MONTHLY_RETURN_COLUMNS):
        try:
            returns.append(
                MonthlyReturn(
                    year=int(row["year"]),
                    month=int(row["month"]),
                    return_percent=float(row["return_percent"]),
                )
            )
        except (ValueError, ValidationError) as e:
            raise InputFormatError(f"{path}: invalid monthly return on row {row_number}: {e}") from e
    return returns


def load_equity_curve(path: Path | str) -> list[EquityPoint]:
    """Load equity points from a ``date,equity`` CSV."""
    points = []
    for row_number, row in _read_rows(Path(path), EQUITY_CURVE_COLUMNS):
        try:
            points.append(
                EquityPoint(
                    date=datetime.fromisoformat(row["date"].strip()),
                    equity=float(row["equity"]),
                )
            )
        except (ValueError, ValidationError) as e:
            raise InputFormatError(f"{path}: invalid equity point on row {row_number}: {e}") from e
    return points


def load_daily_pnl(path: Path | str) -> list[DailyPnLEntry]:
    """Load daily P&L from a ``date,pnl`` file (header optional)."""
    with Path(path).open("r", encoding="utf-8") as f:
        return parse_daily_pnl_lines(f)


def parse_daily_pnl_lines(lines: Iterable[str]) -> list[DailyPnLEntry]:
    """
    Parse bulk-pasted ``date,pnl`` lines.

    Each line is split on commas; the first field is the date and the second
    the P&L. Blank lines, lines with fewer than two fields and lines whose
    P&L is not a number are skipped. A non-numeric first line is treated as
    a header and skipped silently.

    Example:
        >>> parse_daily_pnl_lines(["date,pnl", "2025-01-02,150.5", "oops", "2025-01-03,-40"])
        [DailyPnLEntry(date='2025-01-02', pnl=150.5), DailyPnLEntry(date='2025-01-03', pnl=-40.0)]
    """
    entries = []
    for line_number, line in enumerate(lines, start=1):
        text = line.strip()
        if not text:
            continue

        parts = [part.strip() for part in text.split(",")]
        date = parts[0]
        try:
            pnl = float(parts[1]) if len(parts) >= 2 else None
        except ValueError:
            pnl = None

        if not date or pnl is None:
            if line_number > 1:
                logger.warning("loaders.line_skipped", line_number=line_number, line=text)
            continue

        entries.append(DailyPnLEntry(date=date, pnl=pnl))

    return entries


def _read_rows(path: Path, required: tuple[str, ...]):
    """Yield (row_number, row) from a CSV after checking its header."""
    with path.open("r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        fieldnames = [name.strip() for name in reader.fieldnames or []]
        missing = [column for column in required if column not in fieldnames]
        if missing:
            raise InputFormatError(f"{path}: missing column(s) {', '.join(missing)}; expected {','.join(required)}")
        reader.fieldnames = fieldnames

        # Row 1 is the header
        for row_number, row in enumerate(reader, start=2):
            # DictReader fills fields missing from a short row with None
            empty = [column for column in required if row.get(column) is None]
            if empty:
                raise InputFormatError(f"{path}: row {row_number} is missing value(s) for {', '.join(empty)}")
            yield row_number, row
