"""Table formatting - turns a DataFrame into a ThemedTable.

Formatting rules:
- Percent columns (fractional rates in [0, 1]): "NN %" (value x 100, no decimals)
- Numeric columns: fixed two decimals
- Text columns: unchanged
- Missing values: empty cell

Column widths are allocated proportionally to the length of each header
label and normalised to the theme's total table width.

Usage::

    from slidebook.processor.formatting import format_table

    table = format_table(df)
    table.column("Percent")   # ("50 %", "75 %")
"""

from typing import Any, Iterable

import pandas as pd
from pandas.api import types as ptypes

from slidebook.schema.theme import ColumnKind, Theme, ThemedTable


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _is_missing(value: Any) -> bool:
    """Check if a scalar is None, NaN, NaT or pd.NA."""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # Array-like cell values are never "missing" as a whole.
        return False


# ---------------------------------------------------------------------------
# Column classification
# ---------------------------------------------------------------------------

def is_numeric(series: pd.Series) -> bool:
    """True for numeric dtypes. Booleans are not treated as numbers."""
    return ptypes.is_numeric_dtype(series) and not ptypes.is_bool_dtype(series)


def is_percent(series: pd.Series) -> bool:
    """True when a column holds fractional rates.

    The column must have a floating-point dtype, at least one non-missing
    value, and every non-missing value within [0, 1]. Integer columns are
    never percentages, even when they only hold 0 and 1.
    """
    if not ptypes.is_float_dtype(series):
        return False
    values = series.dropna()
    if values.empty:
        return False
    return bool(((values >= 0) & (values <= 1)).all())


def classify_column(series: pd.Series) -> ColumnKind:
    """Classify a column as percent, numeric or text (in that order)."""
    if is_percent(series):
        return ColumnKind.PERCENT
    if is_numeric(series):
        return ColumnKind.NUMERIC
    return ColumnKind.TEXT


# ---------------------------------------------------------------------------
# Cell formatting
# ---------------------------------------------------------------------------

def format_number(value: Any) -> str:
    """Format a number with exactly two decimals."""
    if _is_missing(value):
        return ""
    return f"{value:.2f}"


def format_percent(value: Any) -> str:
    """Format a fraction as a whole percentage, e.g. 0.5 -> '50 %'."""
    if _is_missing(value):
        return ""
    return f"{value * 100:.0f} %"


def format_text(value: Any) -> str:
    if _is_missing(value):
        return ""
    return str(value)


_FORMATTERS = {
    ColumnKind.PERCENT: format_percent,
    ColumnKind.NUMERIC: format_number,
    ColumnKind.TEXT: format_text,
}


def format_column(series: pd.Series, kind: ColumnKind) -> list[str]:
    """Format every value of a column according to its kind."""
    formatter = _FORMATTERS[kind]
    return [formatter(v) for v in series.tolist()]


# ---------------------------------------------------------------------------
# Column widths
# ---------------------------------------------------------------------------

def column_widths(labels: Iterable[str], total_width: float) -> tuple[float, ...]:
    """Split ``total_width`` across columns in proportion to label length.

    Empty labels count as one character so that no column collapses to
    zero width.
    """
    n_chars = [max(len(label), 1) for label in labels]
    if not n_chars:
        return ()
    total_chars = sum(n_chars)
    return tuple(n / total_chars * total_width for n in n_chars)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def format_table(df: pd.DataFrame, theme: Theme | None = None,
                 title: str | None = None) -> ThemedTable:
    """Format a DataFrame into a ThemedTable.

    Args:
        df: Table with named columns. The index is not rendered.
        theme: Styling and width budget. Defaults to ``Theme()``.
        title: Table annotation; defaults to ``df.attrs["title"]``.

    Returns:
        ThemedTable with formatted cells, column kinds and widths.

    Raises:
        ValueError: If the DataFrame has no columns.
    """
    theme = theme or Theme()
    if df.shape[1] == 0:
        raise ValueError("Cannot format a table with no columns")

    labels = [str(c) for c in df.columns]
    kinds = []
    cells = []
    for idx in range(df.shape[1]):
        series = df.iloc[:, idx]
        kind = classify_column(series)
        kinds.append(kind)
        cells.append(format_column(series, kind))

    rows = tuple(tuple(row) for row in zip(*cells))
    if title is None:
        title = df.attrs.get("title")

    return ThemedTable(
        columns=tuple(labels),
        rows=rows,
        kinds=tuple(kinds),
        widths=column_widths(labels, theme.table_width_inches),
        theme=theme,
        title=title,
    )
