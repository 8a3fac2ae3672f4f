"""Workbook - a chainable, mutable handle around one python-pptx Presentation.

Every slide-adding method appends exactly one slide and returns the
workbook itself, so calls can be chained::

    from slidebook.generator.workbook import Workbook
    from slidebook.processor.formatting import format_table

    wb = Workbook(font="Calibri", font_size=10)
    (wb.title_slide("Report", "Customer survey", "Analytics", "2026")
       .add_table(format_table(df), "Satisfaction")
       .add_markdown("- Up **4 %** on last year", "Summary"))
    wb.save("survey.pptx")

Missing titles and subtitles are written as a single space rather than an
empty string, so every placeholder on a generated slide holds text.
"""

import io
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from pptx import Presentation
from pptx.util import Inches, Pt

from slidebook.errors import LayoutNotFoundError, UnsupportedInputError
from slidebook.generator.plots import add_figure, resolve_figure
from slidebook.generator.tables import add_themed_table
from slidebook.generator.text import render_markdown
from slidebook.schema.theme import Theme, ThemedTable


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TITLE_LAYOUT = "Title Slide"
CONTENT_LAYOUT = "Title and Content"

BLANK = " "

SUBTITLE_SHAPE_NAME = "Subtitle"

# Used when a layout has no body placeholder to take the content region from.
_MARGIN = Inches(0.5)
_CONTENT_TOP = Inches(1.5)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def blank(value: str | None) -> str:
    """Replace a missing or empty string with a single space."""
    return value if value else BLANK


@dataclass(frozen=True)
class Region:
    """A rectangle on a slide, in EMU."""
    left: int
    top: int
    width: int
    height: int


def _body_placeholder(slide):
    """The first placeholder on a slide that is not the title."""
    title = slide.shapes.title
    for ph in slide.placeholders:
        if title is None or ph.shape_id != title.shape_id:
            return ph
    return None


def _remove_shape(shape) -> None:
    el = shape._element
    el.getparent().remove(el)


# ---------------------------------------------------------------------------
# Workbook
# ---------------------------------------------------------------------------

class Workbook:
    """A presentation under construction.

    Parameters
    ----------
    template : str | Path | file-like, optional
        An existing .pptx used as the base document. Its slides are kept and
        new slides are appended. Defaults to python-pptx's blank template.
    theme : Theme, optional
        Styling for tables and text. Defaults to ``Theme()``.
    font, font_size : optional
        Override the theme's font family and size.
    """

    def __init__(self, template: Any = None, theme: Theme | None = None,
                 font: str | None = None, font_size: float | None = None) -> None:
        theme = theme or Theme()
        if font is not None:
            theme = replace(theme, font=font)
        if font_size is not None:
            theme = replace(theme, font_size=font_size)
        self.theme = theme
        self.template = template

        if isinstance(template, (str, os.PathLike)):
            template = os.fspath(template)
        self.prs = Presentation(template)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def slide_count(self) -> int:
        return len(self.prs.slides)

    def __len__(self) -> int:
        return self.slide_count

    def __repr__(self) -> str:
        source = self.template if self.template is not None else "default"
        return (
            f"<Workbook: {self.slide_count} slide(s), template={source!s}, "
            f"font={self.theme.font!r} {self.theme.font_size}pt>"
        )

    # ------------------------------------------------------------------
    # Slide builders
    # ------------------------------------------------------------------

    def _layout(self, name: str):
        layout = self.prs.slide_layouts.get_by_name(name)
        if layout is None:
            raise LayoutNotFoundError(name, [lo.name for lo in self.prs.slide_layouts])
        return layout

    def _content_region(self, slide) -> tuple[Region, Any]:
        """Content region of a slide and the body placeholder it came from."""
        ph = _body_placeholder(slide)
        if ph is not None:
            return Region(ph.left, ph.top, ph.width, ph.height), ph
        width = self.prs.slide_width - 2 * _MARGIN
        height = self.prs.slide_height - _CONTENT_TOP - _MARGIN
        return Region(_MARGIN, _CONTENT_TOP, width, height), None

    def _content_slide(self, title: str | None) -> tuple[Any, Region, Region, Any]:
        """Append a content slide with its title set.

        Returns the slide, the region left for content, the strip reserved
        for the subtitle below it, and the body placeholder (or None).
        """
        layout = self._layout(CONTENT_LAYOUT)
        slide = self.prs.slides.add_slide(layout)
        if slide.shapes.title is not None:
            slide.shapes.title.text = blank(title)

        region, ph = self._content_region(slide)
        strip = min(Inches(self.theme.subtitle_height_inches), region.height // 2)
        content = Region(region.left, region.top, region.width, region.height - strip)
        subtitle = Region(region.left, content.top + content.height, region.width, strip)
        return slide, content, subtitle, ph

    def _add_subtitle(self, slide, region: Region, subtitle: str | None) -> None:
        box = slide.shapes.add_textbox(region.left, region.top, region.width, region.height)
        box.name = SUBTITLE_SHAPE_NAME
        tf = box.text_frame
        tf.word_wrap = True
        run = tf.paragraphs[0].add_run()
        run.text = blank(subtitle)
        run.font.name = self.theme.font
        run.font.size = Pt(self.theme.font_size)

    def title_slide(self, type: str | None = None, title: str | None = None,
                    author: str | None = None, date: str | None = None) -> "Workbook":
        """Append a title slide.

        ``type`` goes into the title placeholder; ``title``, ``author`` and
        ``date`` become the three lines of the subtitle placeholder.
        """
        layout = self._layout(TITLE_LAYOUT)
        slide = self.prs.slides.add_slide(layout)
        if slide.shapes.title is not None:
            slide.shapes.title.text = blank(type)

        body = _body_placeholder(slide)
        if body is None:
            region, _ = self._content_region(slide)
            body = slide.shapes.add_textbox(region.left, region.top, region.width, region.height)
        tf = body.text_frame
        tf.text = blank(title)
        for line in (author, date):
            tf.add_paragraph().text = blank(line)
        return self

    def add_table(self, table: ThemedTable, title: str | None = None,
                  subtitle: str | None = None) -> "Workbook":
        """Append a slide holding a themed table."""
        if not isinstance(table, ThemedTable):
            raise TypeError(
                f"add_table expects a ThemedTable, got {type(table).__name__}. "
                "Use format_table() or to_ppt() for DataFrames."
            )
        slide, content, strip, ph = self._content_slide(title)
        if ph is not None:
            _remove_shape(ph)
        add_themed_table(slide, table, content.left, content.top)
        self._add_subtitle(slide, strip, subtitle)
        return self

    def add_plot(self, plot: Any, title: str | None = None,
                 subtitle: str | None = None) -> "Workbook":
        """Append a slide holding a figure scaled into the content region."""
        resolve_figure(plot)
        slide, content, strip, ph = self._content_slide(title)
        if ph is not None:
            _remove_shape(ph)
        add_figure(slide, plot, content.left, content.top, content.width, content.height)
        self._add_subtitle(slide, strip, subtitle)
        return self

    def add_markdown(self, text: str, title: str | None = None,
                     subtitle: str | None = None) -> "Workbook":
        """Append a slide with ``text`` rendered as markdown."""
        if not isinstance(text, str):
            raise UnsupportedInputError(
                f"add_markdown expects a single string, got {type(text).__name__}"
            )
        slide, content, strip, ph = self._content_slide(title)
        if ph is None:
            ph = slide.shapes.add_textbox(content.left, content.top,
                                          content.width, content.height)
        else:
            # Pin all four values; assigning one alone drops the inherited rest.
            ph.left, ph.top = content.left, content.top
            ph.width, ph.height = content.width, content.height
        if not render_markdown(ph.text_frame, text, self.theme):
            # Nothing to render; an empty body would show the layout prompt.
            ph.text_frame.paragraphs[0].add_run().text = BLANK
        self._add_subtitle(slide, strip, subtitle)
        return self

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> None:
        """Write the presentation to ``path``."""
        if isinstance(path, os.PathLike):
            path = os.fspath(path)
        self.prs.save(path)

    def to_bytes(self) -> bytes:
        """Return the presentation as .pptx bytes."""
        buf = io.BytesIO()
        self.prs.save(buf)
        return buf.getvalue()
