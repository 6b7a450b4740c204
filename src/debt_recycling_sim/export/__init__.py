"""Export — flat year-by-year table for CSV download and charting."""

from debt_recycling_sim.export.table import (
    CSV_HEADER,
    to_csv_rows,
    to_csv_string,
    to_dataframe,
    write_csv,
)

__all__ = [
    "CSV_HEADER",
    "to_csv_rows",
    "to_csv_string",
    "to_dataframe",
    "write_csv",
]
