"""Sortable, filterable rows for the postcode table."""

import locale
import math
from dataclasses import asdict, dataclass
from typing import List, Optional

import pandas as pd


SORT_COLUMNS = ['suburb', 'postcode', 'ratio', 'rent', 'payment']
TEXT_COLUMNS = {'suburb', 'postcode'}

MAX_SUBURBS_SHOWN = 9


@dataclass(frozen=True)
class DisplayRow:
    """One postcode as shown in the table."""

    postcode: str
    suburb: str  # comma-joined suburb names, or "Postcode <code>"
    ratio: Optional[float]
    rent: Optional[float]
    payment: Optional[float]


def _text_key(value: str):
    return locale.strxfrm(value.casefold())


class AffordabilityTable:
    """Rows in their current sort order, plus the active sort state.

    Freshly built tables are sorted by ratio, descending.
    """

    def __init__(self, rows: List[DisplayRow]):
        self.rows = list(rows)
        self.sort_column = 'ratio'
        self.ascending = False

    def __len__(self) -> int:
        return len(self.rows)

    def sort_by(self, column: str) -> List[DisplayRow]:
        """Sort by a column, toggling direction on repeated selection.

        Picking the column that is already sorted ascending sorts it
        descending; anything else sorts ascending.
        """
        ascending = not (column == self.sort_column and self.ascending)
        return self.apply_sort(column, ascending)

    def apply_sort(self, column: str, ascending: bool) -> List[DisplayRow]:
        """Sort by a column in a fixed direction. Missing values always go last.

        Raises:
            ValueError: If the column is not sortable
        """
        if column not in SORT_COLUMNS:
            raise ValueError(f"Unknown sort column: {column}")

        present = [row for row in self.rows if getattr(row, column) is not None]
        missing = [row for row in self.rows if getattr(row, column) is None]

        if column in TEXT_COLUMNS:
            key = lambda row: _text_key(getattr(row, column))
        else:
            key = lambda row: getattr(row, column)

        present.sort(key=key, reverse=not ascending)

        self.rows = present + missing
        self.sort_column = column
        self.ascending = ascending
        return self.rows

    def filter(self, query: str) -> List[DisplayRow]:
        """Rows whose postcode or suburb contains the query, case-insensitive.

        The table's own order is left untouched.
        """
        needle = query.strip().lower()
        if not needle:
            return list(self.rows)

        return [
            row for row in self.rows
            if needle in row.postcode.lower() or needle in row.suburb.lower()
        ]

    def to_dataframe(self, rows: Optional[List[DisplayRow]] = None) -> pd.DataFrame:
        """Rows as a DataFrame with columns in SORT_COLUMNS order."""
        rows = self.rows if rows is None else rows
        return pd.DataFrame([asdict(row) for row in rows], columns=SORT_COLUMNS)


def format_currency(value: Optional[float]) -> str:
    """Whole Australian dollars, or N/A."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "N/A"
    return f"${value:,.0f}"


def format_ratio(value: Optional[float]) -> str:
    if value is None or math.isnan(value):
        return "N/A"
    if math.isinf(value):
        return "∞"
    return f"{value:.2f}"


def shorten_suburb_list(suburbs: str, limit: int = MAX_SUBURBS_SHOWN) -> str:
    """Keep the first `limit` suburb names of a comma-joined list."""
    names = [name.strip() for name in suburbs.split(',')]
    if len(names) > limit:
        return ', '.join(names[:limit]) + '...'
    return suburbs
