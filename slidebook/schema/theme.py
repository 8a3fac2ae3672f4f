"""Theme and table models - the contract between the formatter and the workbook.

A ``Theme`` carries the typography, colors, borders and padding used for
every table a workbook renders. A ``ThemedTable`` is the read-only artefact
produced by ``slidebook.processor.formatting.format_table`` and consumed by
``Workbook.add_table``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import pandas as pd


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ColumnKind(Enum):
    """How a table column is classified for formatting."""
    PERCENT = "percent"    # Fractional rates, shown as "NN %"
    NUMERIC = "numeric"    # Numbers, shown with two decimals
    TEXT = "text"          # Passed through unchanged

    @property
    def centered(self) -> bool:
        return self is not ColumnKind.TEXT


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Theme:
    """Fonts, colors and table styling applied across a workbook.

    Sizes are in points unless the field name says otherwise.
    """
    # Typography
    font: str = "Calibri"
    font_size: float = 10
    markdown_font_size: float = 18       # Body text of markdown slides

    # Colors
    text_color: str = "#000000"
    accent: str = "#0094A5"              # Header borders, closing border of the last row
    header_background: str = "#CCE9EB"
    separator: str = "#BFBFBF"           # Bottom border between body rows

    # Borders
    header_top_border_pt: float = 3.0
    header_bottom_border_pt: float = 1.0
    body_border_pt: float = 1.0
    last_row_border_pt: float = 2.0

    # Padding
    header_padding_top_pt: float = 2.0
    header_padding_bottom_pt: float = 1.0
    body_padding_top_pt: float = 1.0
    body_padding_bottom_pt: float = 1.0

    # Layout
    table_width_inches: float = 9.0
    subtitle_height_inches: float = 0.5

    @property
    def body_font_size(self) -> float:
        """Body text is two points smaller than the header."""
        return max(self.font_size - 2, 1)

    def to_dict(self) -> dict:
        return {
            "fonts": {
                "font": self.font,
                "font_size": self.font_size,
                "markdown_font_size": self.markdown_font_size,
            },
            "colors": {
                "text_color": self.text_color,
                "accent": self.accent,
                "header_background": self.header_background,
                "separator": self.separator,
            },
            "borders": {
                "header_top_pt": self.header_top_border_pt,
                "header_bottom_pt": self.header_bottom_border_pt,
                "body_pt": self.body_border_pt,
                "last_row_pt": self.last_row_border_pt,
            },
            "padding": {
                "header_top_pt": self.header_padding_top_pt,
                "header_bottom_pt": self.header_padding_bottom_pt,
                "body_top_pt": self.body_padding_top_pt,
                "body_bottom_pt": self.body_padding_bottom_pt,
            },
            "layout": {
                "table_width_inches": self.table_width_inches,
                "subtitle_height_inches": self.subtitle_height_inches,
            },
        }

    @classmethod
    def from_dict(cls, d: dict | None) -> "Theme":
        d = d or {}
        fonts = d.get("fonts") or {}
        colors = d.get("colors") or {}
        borders = d.get("borders") or {}
        padding = d.get("padding") or {}
        layout = d.get("layout") or {}
        default = cls()
        return cls(
            font=fonts.get("font", default.font),
            font_size=fonts.get("font_size", default.font_size),
            markdown_font_size=fonts.get("markdown_font_size", default.markdown_font_size),
            text_color=colors.get("text_color", default.text_color),
            accent=colors.get("accent", default.accent),
            header_background=colors.get("header_background", default.header_background),
            separator=colors.get("separator", default.separator),
            header_top_border_pt=borders.get("header_top_pt", default.header_top_border_pt),
            header_bottom_border_pt=borders.get("header_bottom_pt", default.header_bottom_border_pt),
            body_border_pt=borders.get("body_pt", default.body_border_pt),
            last_row_border_pt=borders.get("last_row_pt", default.last_row_border_pt),
            header_padding_top_pt=padding.get("header_top_pt", default.header_padding_top_pt),
            header_padding_bottom_pt=padding.get("header_bottom_pt", default.header_padding_bottom_pt),
            body_padding_top_pt=padding.get("body_top_pt", default.body_padding_top_pt),
            body_padding_bottom_pt=padding.get("body_bottom_pt", default.body_padding_bottom_pt),
            table_width_inches=layout.get("table_width_inches", default.table_width_inches),
            subtitle_height_inches=layout.get("subtitle_height_inches", default.subtitle_height_inches),
        )


# ---------------------------------------------------------------------------
# ThemedTable
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ThemedTable:
    """A formatted table ready to be placed on a slide.

    ``rows`` holds display strings only; all number formatting has already
    happened. ``widths`` are column widths in inches, in column order.
    """
    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    kinds: tuple[ColumnKind, ...]
    widths: tuple[float, ...]
    theme: Theme = field(default_factory=Theme)
    title: str | None = None

    def __post_init__(self) -> None:
        n = len(self.columns)
        if len(self.kinds) != n or len(self.widths) != n:
            raise ValueError(
                f"ThemedTable has {n} columns but {len(self.kinds)} kinds "
                f"and {len(self.widths)} widths"
            )
        for idx, row in enumerate(self.rows):
            if len(row) != n:
                raise ValueError(f"Row {idx} has {len(row)} cells, expected {n}")

    @property
    def n_rows(self) -> int:
        """Number of body rows (the header is not counted)."""
        return len(self.rows)

    @property
    def n_cols(self) -> int:
        return len(self.columns)

    def column(self, name: str) -> tuple[str, ...]:
        """Return the formatted cells of a column by header label."""
        try:
            idx = self.columns.index(name)
        except ValueError:
            raise KeyError(name) from None
        return tuple(row[idx] for row in self.rows)

    def kind_of(self, name: str) -> ColumnKind:
        return self.kinds[self.columns.index(name)]

    def to_frame(self) -> pd.DataFrame:
        """The formatted cells as a string DataFrame."""
        return pd.DataFrame(list(self.rows), columns=list(self.columns), dtype=object)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "columns": list(self.columns),
            "kinds": [k.value for k in self.kinds],
            "widths": list(self.widths),
            "rows": [list(r) for r in self.rows],
        }
        if self.title:
            d["title"] = self.title
        return d
