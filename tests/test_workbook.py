"""Tests for the Workbook handle (slides, placeholders, persistence)."""

import io

import pandas as pd
import pytest
from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE
from pptx.exc import PackageNotFoundError
from pptx.oxml.ns import qn
from pptx.util import Inches, Pt

from slidebook.errors import LayoutNotFoundError, UnsupportedInputError
from slidebook.generator.text import CODE_FONT
from slidebook.generator.workbook import (
    BLANK,
    CONTENT_LAYOUT,
    SUBTITLE_SHAPE_NAME,
    TITLE_LAYOUT,
    Workbook,
    blank,
)
from slidebook.processor.formatting import format_table
from slidebook.schema.theme import Theme


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def wb():
    return Workbook()


@pytest.fixture
def themed():
    df = pd.DataFrame({"String": ["A", "B"], "Int": [1, 2], "Percent": [0.5, 0.75]})
    return format_table(df)


def _bytes_to_prs(pptx_bytes: bytes) -> Presentation:
    """Load a Presentation from bytes."""
    return Presentation(io.BytesIO(pptx_bytes))


def _subtitle(slide) -> str:
    for shape in slide.shapes:
        if shape.name == SUBTITLE_SHAPE_NAME:
            return shape.text_frame.text
    raise AssertionError("slide has no subtitle box")


def _tables(slide):
    return [s for s in slide.shapes if s.has_table]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestBlank:
    def test_none(self):
        assert blank(None) == " "

    def test_empty(self):
        assert blank("") == " "

    def test_value(self):
        assert blank("Title") == "Title"

    def test_constant(self):
        assert BLANK == " "


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_empty_document(self, wb):
        assert wb.slide_count == 0
        assert len(wb) == 0

    def test_default_theme(self, wb):
        assert wb.theme.font == "Calibri"
        assert wb.theme.font_size == 10

    def test_font_overrides(self):
        wb = Workbook(font="Arial", font_size=12)
        assert wb.theme.font == "Arial"
        assert wb.theme.font_size == 12

    def test_theme_kept_without_overrides(self):
        theme = Theme(font="Georgia", accent="#123456")
        assert Workbook(theme=theme).theme == theme

    def test_override_on_top_of_theme(self):
        wb = Workbook(theme=Theme(font="Georgia"), font_size=14)
        assert wb.theme.font == "Georgia"
        assert wb.theme.font_size == 14

    def test_repr(self, wb):
        assert "0 slide(s)" in repr(wb)

    def test_missing_template(self, tmp_path):
        with pytest.raises(PackageNotFoundError):
            Workbook(tmp_path / "missing.pptx")

    def test_template_slides_kept(self, tmp_path):
        base = Workbook().add_markdown("base slide", "Existing")
        path = tmp_path / "template.pptx"
        base.save(path)

        wb = Workbook(path)
        assert wb.slide_count == 1
        wb.add_markdown("new", "Appended")
        titles = [s.shapes.title.text for s in wb.prs.slides]
        assert titles == ["Existing", "Appended"]

    def test_template_from_string_path(self, tmp_path):
        path = tmp_path / "template.pptx"
        Workbook().save(path)
        assert Workbook(str(path)).slide_count == 0


# ---------------------------------------------------------------------------
# Title slide
# ---------------------------------------------------------------------------

class TestTitleSlide:
    def test_returns_self(self, wb):
        assert wb.title_slide("Report") is wb

    def test_layout(self, wb):
        wb.title_slide("Report")
        assert wb.prs.slides[0].slide_layout.name == TITLE_LAYOUT

    def test_placeholders(self, wb):
        wb.title_slide("Report", "Customer survey", "Analytics", "2026")
        slide = wb.prs.slides[0]
        assert slide.shapes.title.text == "Report"
        assert slide.placeholders[1].text_frame.text == "Customer survey\nAnalytics\n2026"

    def test_defaults_are_single_space(self, wb):
        wb.title_slide()
        slide = wb.prs.slides[0]
        assert slide.shapes.title.text == " "
        paragraphs = [p.text for p in slide.placeholders[1].text_frame.paragraphs]
        assert paragraphs == [" ", " ", " "]

    def test_empty_strings_become_space(self, wb):
        wb.title_slide("", "", "", "")
        assert wb.prs.slides[0].shapes.title.text == " "


# ---------------------------------------------------------------------------
# Table slides
# ---------------------------------------------------------------------------

class TestAddTable:
    def test_returns_self(self, wb, themed):
        assert wb.add_table(themed) is wb

    def test_layout_and_title(self, wb, themed):
        wb.add_table(themed, "Example data", "Source: test")
        slide = wb.prs.slides[0]
        assert slide.slide_layout.name == CONTENT_LAYOUT
        assert slide.shapes.title.text == "Example data"
        assert _subtitle(slide) == "Source: test"

    def test_table_inserted(self, wb, themed):
        wb.add_table(themed)
        tables = _tables(wb.prs.slides[0])
        assert len(tables) == 1
        assert len(tables[0].table.rows) == 3
        assert tables[0].table.cell(1, 2).text == "50 %"

    def test_body_placeholder_replaced(self, wb, themed):
        wb.add_table(themed)
        slide = wb.prs.slides[0]
        assert len(slide.placeholders) == 1  # title only

    def test_missing_title_and_subtitle(self, wb, themed):
        wb.add_table(themed)
        slide = wb.prs.slides[0]
        assert slide.shapes.title.text == " "
        assert _subtitle(slide) == " "

    def test_subtitle_below_table(self, wb, themed):
        wb.add_table(themed, subtitle="note")
        slide = wb.prs.slides[0]
        table = _tables(slide)[0]
        box = next(s for s in slide.shapes if s.name == SUBTITLE_SHAPE_NAME)
        assert box.top >= table.top + table.height

    def test_subtitle_font(self, themed):
        wb = Workbook(font="Arial", font_size=12)
        wb.add_table(themed, subtitle="note")
        box = next(s for s in wb.prs.slides[0].shapes if s.name == SUBTITLE_SHAPE_NAME)
        run = box.text_frame.paragraphs[0].runs[0]
        assert run.font.name == "Arial"
        assert run.font.size == Pt(12)

    def test_rejects_dataframe(self, wb):
        with pytest.raises(TypeError, match="ThemedTable"):
            wb.add_table(pd.DataFrame({"a": [1]}))
        assert wb.slide_count == 0


# ---------------------------------------------------------------------------
# Markdown slides
# ---------------------------------------------------------------------------

class TestAddMarkdown:
    def test_returns_self(self, wb):
        assert wb.add_markdown("text") is wb

    def test_text_in_body_placeholder(self, wb):
        wb.add_markdown("# Heading\n\nSome **bold** text", "Notes")
        slide = wb.prs.slides[0]
        body = slide.placeholders[1]
        assert body.text_frame.text == "Heading\nSome bold text"
        assert slide.shapes.title.text == "Notes"

    def test_bold_run(self, wb):
        wb.add_markdown("Some **bold** text")
        runs = wb.prs.slides[0].placeholders[1].text_frame.paragraphs[0].runs
        assert [r.font.bold for r in runs] == [False, True, False]

    def test_heading_is_bold_and_larger(self, wb):
        wb.add_markdown("# Big\n\nsmall")
        paragraphs = wb.prs.slides[0].placeholders[1].text_frame.paragraphs
        heading, body = paragraphs[0].runs[0], paragraphs[1].runs[0]
        assert heading.font.bold is True
        assert heading.font.size > body.font.size

    def test_bullets_and_levels(self, wb):
        wb.add_markdown("- one\n  - two")
        paragraphs = wb.prs.slides[0].placeholders[1].text_frame.paragraphs
        assert [p.level for p in paragraphs] == [0, 1]
        pPr = paragraphs[0]._element.pPr
        assert pPr.find(qn("a:buChar")) is not None

    def test_numbering_starts_once(self, wb):
        wb.add_markdown("1. first\n2. second")
        paragraphs = wb.prs.slides[0].placeholders[1].text_frame.paragraphs
        first = paragraphs[0]._element.pPr.find(qn("a:buAutoNum"))
        second = paragraphs[1]._element.pPr.find(qn("a:buAutoNum"))
        assert first.get("startAt") == "1"
        assert second.get("startAt") is None

    def test_plain_paragraph_has_no_bullet(self, wb):
        wb.add_markdown("plain")
        pPr = wb.prs.slides[0].placeholders[1].text_frame.paragraphs[0]._element.pPr
        assert pPr.find(qn("a:buNone")) is not None

    def test_link(self, wb):
        wb.add_markdown("[site](https://example.com)")
        run = wb.prs.slides[0].placeholders[1].text_frame.paragraphs[0].runs[0]
        assert run.hyperlink.address == "https://example.com"

    def test_body_leaves_room_for_subtitle(self, wb):
        wb.add_markdown("text", subtitle="below")
        slide = wb.prs.slides[0]
        body = slide.placeholders[1]
        box = next(s for s in slide.shapes if s.name == SUBTITLE_SHAPE_NAME)
        assert box.top == body.top + body.height
        assert box.height == Inches(0.5)

    def test_missing_subtitle(self, wb):
        wb.add_markdown("text")
        assert _subtitle(wb.prs.slides[0]) == " "

    @pytest.mark.parametrize("text", ["", "   \n\n"])
    def test_empty_text_is_single_space(self, wb, text):
        wb.add_markdown(text, "T")
        assert wb.prs.slides[0].placeholders[1].text_frame.text == " "

    def test_code_block_lines(self, wb):
        wb.add_markdown("Intro\n\n```python\n# load data\n    y = 2\n- not a bullet\n```")
        paragraphs = wb.prs.slides[0].placeholders[1].text_frame.paragraphs
        assert [p.text for p in paragraphs] == [
            "Intro", "# load data", "    y = 2", "- not a bullet",
        ]
        for paragraph in paragraphs[1:]:
            assert paragraph._element.pPr.find(qn("a:buNone")) is not None
            run = paragraph.runs[0]
            assert run.font.name == CODE_FONT
            assert not run.font.bold

    def test_numbering_restarts_after_code_block(self, wb):
        wb.add_markdown("1. one\n\n```\ncode\n```\n\n2. two")
        paragraphs = wb.prs.slides[0].placeholders[1].text_frame.paragraphs
        last = paragraphs[-1]._element.pPr.find(qn("a:buAutoNum"))
        assert last.get("startAt") == "2"

    def test_rejects_list(self, wb):
        with pytest.raises(UnsupportedInputError):
            wb.add_markdown(["a", "b"])
        assert wb.slide_count == 0


# ---------------------------------------------------------------------------
# Plot slides
# ---------------------------------------------------------------------------

class TestAddPlot:
    @pytest.fixture
    def figure(self):
        mpl = pytest.importorskip("matplotlib")
        mpl.use("Agg")
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(figsize=(6, 4))
        ax.plot([1, 2, 3], [3, 1, 2])
        yield fig
        plt.close(fig)

    def test_returns_self(self, wb, figure):
        assert wb.add_plot(figure) is wb

    def test_picture_inserted(self, wb, figure):
        wb.add_plot(figure, "Trend", "Source: test")
        slide = wb.prs.slides[0]
        pictures = [s for s in slide.shapes if s.shape_type == MSO_SHAPE_TYPE.PICTURE]
        assert len(pictures) == 1
        assert slide.shapes.title.text == "Trend"
        assert _subtitle(slide) == "Source: test"

    def test_picture_fits_content_region(self, wb, figure):
        wb.add_plot(figure, subtitle="note")
        slide = wb.prs.slides[0]
        picture = next(s for s in slide.shapes if s.shape_type == MSO_SHAPE_TYPE.PICTURE)
        box = next(s for s in slide.shapes if s.name == SUBTITLE_SHAPE_NAME)
        assert picture.top + picture.height <= box.top + 1
        assert picture.left + picture.width <= wb.prs.slide_width

    def test_axes_accepted(self, wb, figure):
        wb.add_plot(figure.axes[0])
        assert wb.slide_count == 1

    def test_rejects_non_plot(self, wb):
        with pytest.raises(UnsupportedInputError):
            wb.add_plot(object())
        assert wb.slide_count == 0


# ---------------------------------------------------------------------------
# Layout lookup
# ---------------------------------------------------------------------------

class TestLayouts:
    def test_missing_layout(self, wb, themed):
        layout = wb.prs.slide_layouts.get_by_name(CONTENT_LAYOUT)
        layout._element.cSld.set("name", "Renamed")
        with pytest.raises(LayoutNotFoundError) as excinfo:
            wb.add_table(themed)
        assert CONTENT_LAYOUT in str(excinfo.value)
        assert "Renamed" in excinfo.value.available
        assert wb.slide_count == 0

    def test_layout_error_is_key_error(self, wb):
        layout = wb.prs.slide_layouts.get_by_name(TITLE_LAYOUT)
        layout._element.cSld.set("name", "Other")
        with pytest.raises(KeyError):
            wb.title_slide()


# ---------------------------------------------------------------------------
# Chaining and persistence
# ---------------------------------------------------------------------------

class TestPersistence:
    def test_chained_calls(self, wb, themed):
        result = (wb.title_slide("Report")
                    .add_table(themed, "Table")
                    .add_markdown("text", "Notes"))
        assert result is wb
        assert wb.slide_count == 3

    def test_save_round_trip(self, wb, themed, tmp_path):
        wb.title_slide("Report").add_table(themed, "Table").add_markdown("x", "Notes")
        path = tmp_path / "out.pptx"
        assert wb.save(path) is None

        prs = Presentation(str(path))
        titles = [s.shapes.title.text for s in prs.slides]
        assert titles == ["Report", "Table", "Notes"]

    def test_save_to_string_path(self, wb, tmp_path):
        path = tmp_path / "out.pptx"
        wb.add_markdown("x").save(str(path))
        assert path.exists()

    def test_save_missing_directory_raises(self, wb, tmp_path):
        with pytest.raises(OSError):
            wb.save(tmp_path / "no" / "such" / "dir" / "out.pptx")

    def test_to_bytes(self, wb, themed):
        wb.add_table(themed)
        prs = _bytes_to_prs(wb.to_bytes())
        assert len(prs.slides) == 1
        assert any(s.has_table for s in prs.slides[0].shapes)
