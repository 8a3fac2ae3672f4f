"""Presentation inspector - reads a .pptx back and summarises each slide.

Usage::

    from slidebook.qa.inspector import inspect_presentation

    for summary in inspect_presentation("report.pptx"):
        print(summary)
"""

import io
import os
from dataclasses import dataclass, field
from typing import Any

from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE

from slidebook.generator.workbook import SUBTITLE_SHAPE_NAME, Workbook


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class SlideSummary:
    """What a single slide contains."""
    index: int
    layout: str
    title: str
    kinds: list[str] = field(default_factory=list)   # "table", "picture", "chart", "text"
    subtitle: str = ""
    table_size: tuple[int, int] | None = None        # (rows incl. header, cols)

    def __str__(self) -> str:
        parts = [f"[{self.index:2d}] {self.layout}"]
        parts.append(f"title={self.title!r}")
        if self.kinds:
            parts.append(f"content={'+'.join(self.kinds)}")
        if self.table_size:
            parts.append(f"table={self.table_size[0]}x{self.table_size[1]}")
        if self.subtitle.strip():
            parts.append(f"subtitle={self.subtitle!r}")
        return " ".join(parts)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _open(source: Any):
    """Open a Presentation from a path, bytes, file-like or Workbook."""
    if isinstance(source, Workbook):
        return source.prs
    if isinstance(source, (bytes, bytearray)):
        return Presentation(io.BytesIO(source))
    if isinstance(source, os.PathLike):
        source = os.fspath(source)
    return Presentation(source)


def _shape_kind(shape) -> str | None:
    if shape.has_table:
        return "table"
    if shape.has_chart:
        return "chart"
    if shape.shape_type == MSO_SHAPE_TYPE.PICTURE:
        return "picture"
    if shape.has_text_frame and shape.text_frame.text.strip():
        return "text"
    return None


def summarise_slide(slide, index: int) -> SlideSummary:
    title_shape = slide.shapes.title
    summary = SlideSummary(
        index=index,
        layout=slide.slide_layout.name,
        title=title_shape.text_frame.text if title_shape is not None else "",
    )
    for shape in slide.shapes:
        if title_shape is not None and shape.shape_id == title_shape.shape_id:
            continue
        if shape.name == SUBTITLE_SHAPE_NAME and shape.has_text_frame:
            summary.subtitle = shape.text_frame.text
            continue
        kind = _shape_kind(shape)
        if kind is None:
            continue
        summary.kinds.append(kind)
        if kind == "table" and summary.table_size is None:
            tbl = shape.table
            summary.table_size = (len(tbl.rows), len(tbl.columns))
    return summary


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def inspect_presentation(source: Any) -> list[SlideSummary]:
    """Summarise every slide of a presentation, in order."""
    prs = _open(source)
    return [summarise_slide(slide, idx) for idx, slide in enumerate(prs.slides)]
