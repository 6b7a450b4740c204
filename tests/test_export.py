"""Tests for export/table.py — CSV contract and DataFrame view."""

from __future__ import annotations

import csv
import io
from pathlib import Path

import pytest

from debt_recycling_sim.config import SimulationConfig
from debt_recycling_sim.engine.simulation import run_simulation
from debt_recycling_sim.export import CSV_HEADER, to_csv_rows, to_csv_string, to_dataframe, write_csv


@pytest.fixture
def years(config: SimulationConfig):
    return run_simulation(config).years


class TestCsv:
    def test_header(self):
        assert CSV_HEADER == [
            "Year", "HomeLoanA", "NetWealthA", "HomeLoanB",
            "InvestLoanB", "PortfolioB", "NetWealthB", "DebtFreePosition",
        ]

    def test_one_row_per_year(self, years):
        rows = to_csv_rows(years)
        assert len(rows) == 20
        assert all(len(row) == len(CSV_HEADER) for row in rows)

    def test_row_values(self, years):
        first = years[0]
        assert to_csv_rows(years)[0] == [
            1,
            first.home_loan_a,
            first.net_wealth_a,
            first.home_loan_b,
            first.invest_loan_b,
            first.portfolio_b,
            first.net_wealth_b,
            first.surplus_if_liquidated,
        ]

    def test_string_parses_back(self, years):
        parsed = list(csv.reader(io.StringIO(to_csv_string(years))))
        assert parsed[0] == CSV_HEADER
        assert len(parsed) == 21
        assert float(parsed[1][4]) == pytest.approx(years[0].invest_loan_b)

    def test_numbers_unformatted(self, years):
        body = to_csv_string(years)
        assert "$" not in body

    def test_write_to_path(self, years, tmp_path: Path):
        out = tmp_path / "table.csv"
        write_csv(years, out)
        with open(out, newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == CSV_HEADER
        assert rows[-1][0] == "20"

    def test_write_to_stream(self, years):
        buf = io.StringIO()
        write_csv(years, buf)
        assert buf.getvalue() == to_csv_string(years)

    def test_empty_run_is_header_only(self):
        assert to_csv_string([]).strip() == ",".join(CSV_HEADER)


class TestDataFrame:
    def test_indexed_by_year(self, years):
        df = to_dataframe(years)
        assert df.index.name == "year"
        assert list(df.index) == list(range(1, 21))
        assert df.loc[1, "portfolio_b"] == pytest.approx(31_500)

    def test_all_snapshot_fields(self, years):
        df = to_dataframe(years)
        assert "surplus_if_liquidated" in df.columns
        assert "redraw_amount" in df.columns

    def test_empty(self):
        df = to_dataframe([])
        assert df.empty
        assert "net_wealth_b" in df.columns
