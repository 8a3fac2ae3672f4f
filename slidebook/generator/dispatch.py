"""Dispatch - route any supported value to the matching Workbook method.

``to_ppt`` always adds exactly one new slide:

    DataFrame                    -> formatted table slide
    ThemedTable                  -> table slide (already formatted)
    Series / ndarray / list /
    tuple / dict                 -> coerced to DataFrame (with a warning)
    Figure / Axes                -> plot slide
    str                          -> markdown slide

A list, tuple or 1-D array made only of strings counts as "multi-element
text". A single element is used as the string; more than one is rejected.

Usage::

    from slidebook import ppt_workbook, to_ppt, write_data

    wb = ppt_workbook()
    to_ppt(df, wb, title="Example data")
    write_data(wb, "example.pptx")
"""

import warnings
from functools import singledispatch
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from slidebook.errors import UnsupportedInputError
from slidebook.generator.plots import figure_title, is_plot
from slidebook.generator.workbook import Workbook
from slidebook.processor.formatting import format_table
from slidebook.schema.theme import ThemedTable


# Warning is raised from _coerce_frame; point it at the caller of to_ppt.
_COERCE_STACKLEVEL = 5


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _check_workbook(wb: Any) -> None:
    if not isinstance(wb, Workbook):
        raise TypeError(
            f"'wb' should be a Workbook, got {type(wb).__name__}. "
            "Create one with ppt_workbook()."
        )


def _annotation(x: Any) -> str | None:
    """The 'title' annotation attached to a value, if any."""
    attrs = getattr(x, "attrs", None)
    if isinstance(attrs, dict):
        return attrs.get("title")
    return None


def _default(value: str | None, fallback: str | None) -> str | None:
    return value if value is not None else fallback


def _single_string(values: list) -> str:
    if len(values) != 1:
        raise UnsupportedInputError(
            f"'to_ppt' only supports single strings, got {len(values)} strings."
        )
    return values[0]


def _all_strings(values) -> bool:
    return len(values) > 0 and all(isinstance(v, str) for v in values)


def _coerce_frame(x: Any, make_frame) -> pd.DataFrame:
    """Build a DataFrame from ``x``, warning only once the coercion succeeded."""
    try:
        df = make_frame(x)
    except (ValueError, TypeError) as exc:
        raise UnsupportedInputError(
            f"Cannot coerce {type(x).__name__} to DataFrame: {exc}"
        ) from exc
    if df.shape[1] == 0:
        raise UnsupportedInputError(
            f"Cannot coerce {type(x).__name__} to DataFrame: no columns."
        )
    warnings.warn(f"Coercing {type(x).__name__} to DataFrame.", UserWarning,
                  stacklevel=_COERCE_STACKLEVEL)
    return df


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

@singledispatch
def _dispatch(x, wb: Workbook, title, subtitle) -> Workbook:
    if is_plot(x):
        return wb.add_plot(x, title, _default(subtitle, figure_title(x)))
    raise UnsupportedInputError(
        f"Unsupported input type {type(x).__module__}.{type(x).__qualname__}: "
        "'to_ppt' accepts DataFrames, ThemedTables, figures and strings."
    )


@_dispatch.register
def _(x: pd.DataFrame, wb: Workbook, title, subtitle) -> Workbook:
    table = format_table(x, wb.theme)
    return wb.add_table(table, title, _default(subtitle, table.title))


@_dispatch.register
def _(x: ThemedTable, wb: Workbook, title, subtitle) -> Workbook:
    return wb.add_table(x, title, _default(subtitle, x.title))


@_dispatch.register
def _(x: str, wb: Workbook, title, subtitle) -> Workbook:
    return wb.add_markdown(x, title, subtitle)


@_dispatch.register
def _(x: pd.Series, wb: Workbook, title, subtitle) -> Workbook:
    df = _coerce_frame(x, pd.Series.to_frame)
    return _dispatch(df, wb, title, _default(subtitle, _annotation(x)))


@_dispatch.register
def _(x: np.ndarray, wb: Workbook, title, subtitle) -> Workbook:
    if x.ndim == 1 and _all_strings(x.tolist()):
        return wb.add_markdown(_single_string(x.tolist()), title, subtitle)
    if x.ndim > 2:
        raise UnsupportedInputError(
            f"Cannot place a {x.ndim}-dimensional array on a slide."
        )
    df = _coerce_frame(x, pd.DataFrame)
    return _dispatch(df, wb, title, subtitle)


@_dispatch.register(list)
@_dispatch.register(tuple)
def _(x, wb: Workbook, title, subtitle) -> Workbook:
    if _all_strings(x):
        return wb.add_markdown(_single_string(list(x)), title, subtitle)
    df = _coerce_frame(x, lambda v: pd.DataFrame(list(v)))
    return _dispatch(df, wb, title, subtitle)


@_dispatch.register
def _(x: dict, wb: Workbook, title, subtitle) -> Workbook:
    df = _coerce_frame(x, pd.DataFrame)
    return _dispatch(df, wb, title, subtitle)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def to_ppt(x: Any, wb: Workbook, title: str | None = None,
           subtitle: str | None = None) -> Workbook:
    """Add ``x`` to a new slide of ``wb``.

    Args:
        x: DataFrame, ThemedTable, figure or markdown string. Series,
            arrays, lists of records and dicts of columns are coerced to a
            DataFrame with a ``UserWarning``.
        wb: Workbook to append to.
        title: Slide title. A single space when missing.
        subtitle: Text below the content. Defaults to the value's ``title``
            annotation (``df.attrs["title"]``, ``ThemedTable.title`` or the
            figure's suptitle), else a single space.

    Returns:
        ``wb``, for chaining.

    Raises:
        TypeError: If ``wb`` is not a Workbook.
        UnsupportedInputError: If ``x`` cannot be placed on a slide.
    """
    _check_workbook(wb)
    return _dispatch(x, wb, title, subtitle)


def ppt_workbook(template: Any = None, font: str = "Calibri",
                 font_size: float = 10) -> Workbook:
    """Create a Workbook with the given default font and size."""
    return Workbook(template, font=font, font_size=font_size)


def add_title_slide(wb: Workbook, type: str | None = None, title: str | None = None,
                    author: str | None = None, date: str | None = None) -> Workbook:
    """Add a title slide: report type, title, author and date."""
    _check_workbook(wb)
    return wb.title_slide(type, title, author, date)


def write_data(wb: Workbook, file: str | Path) -> None:
    """Write a Workbook to a .pptx file."""
    _check_workbook(wb)
    wb.save(file)
