"""Year-by-year table export.

CSV contract — one header row, one row per ``YearSnapshot``, raw numbers:
  Year, HomeLoanA, NetWealthA, HomeLoanB, InvestLoanB, PortfolioB,
  NetWealthB, DebtFreePosition
``DebtFreePosition`` is ``surplus_if_liquidated``.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import TextIO

import pandas as pd

from debt_recycling_sim.models.results import YearSnapshot

CSV_HEADER: list[str] = [
    "Year",
    "HomeLoanA",
    "NetWealthA",
    "HomeLoanB",
    "InvestLoanB",
    "PortfolioB",
    "NetWealthB",
    "DebtFreePosition",
]

_CSV_FIELDS: list[str] = [
    "year",
    "home_loan_a",
    "net_wealth_a",
    "home_loan_b",
    "invest_loan_b",
    "portfolio_b",
    "net_wealth_b",
    "surplus_if_liquidated",
]


def to_csv_rows(years: list[YearSnapshot]) -> list[list[float | int]]:
    """Data rows (no header) in ``CSV_HEADER`` column order."""
    return [[getattr(snap, name) for name in _CSV_FIELDS] for snap in years]


def write_csv(years: list[YearSnapshot], target: str | Path | TextIO) -> None:
    """Write header + rows to a file path or an open text stream."""
    if isinstance(target, (str, Path)):
        with open(target, "w", newline="") as f:
            _write(years, f)
    else:
        _write(years, target)


def to_csv_string(years: list[YearSnapshot]) -> str:
    buf = io.StringIO()
    _write(years, buf)
    return buf.getvalue()


def _write(years: list[YearSnapshot], stream: TextIO) -> None:
    writer = csv.writer(stream)
    writer.writerow(CSV_HEADER)
    writer.writerows(to_csv_rows(years))


def to_dataframe(years: list[YearSnapshot]) -> pd.DataFrame:
    """Every snapshot field as a column, indexed by ``year``.

    An empty run gives an empty frame that still carries the columns.
    """
    columns = list(YearSnapshot.model_fields)
    df = pd.DataFrame([snap.model_dump() for snap in years], columns=columns)
    return df.set_index("year")
