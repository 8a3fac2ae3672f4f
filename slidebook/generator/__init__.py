"""Presentation generator package - the Workbook handle and its renderers.

Modules:
    workbook: Chainable Workbook around a python-pptx Presentation
    dispatch: to_ppt and the convenience constructors
    tables: ThemedTable rendering
    plots: Figure rendering
    text: Markdown rendering
"""

from .dispatch import add_title_slide, ppt_workbook, to_ppt, write_data
from .workbook import Workbook

__all__ = [
    "Workbook",
    "add_title_slide",
    "ppt_workbook",
    "to_ppt",
    "write_data",
]
