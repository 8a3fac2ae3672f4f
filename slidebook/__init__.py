"""slidebook - pass tables, figures and markdown to PowerPoint slides.

    from slidebook import ppt_workbook, to_ppt, write_data

    wb = ppt_workbook(font="Calibri", font_size=10)
    to_ppt(df, wb, title="Example data")
    write_data(wb, "example.pptx")
"""

from .errors import LayoutNotFoundError, SlidebookError, UnsupportedInputError
from .generator import Workbook, add_title_slide, ppt_workbook, to_ppt, write_data
from .processor import format_table, is_percent
from .schema import ColumnKind, Theme, ThemedTable, load_theme, save_theme

__version__ = "0.1.0"

__all__ = [
    "ColumnKind",
    "LayoutNotFoundError",
    "SlidebookError",
    "Theme",
    "ThemedTable",
    "UnsupportedInputError",
    "Workbook",
    "add_title_slide",
    "format_table",
    "is_percent",
    "load_theme",
    "ppt_workbook",
    "save_theme",
    "to_ppt",
    "write_data",
]
