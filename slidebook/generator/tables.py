"""Table rendering - places a ThemedTable on a slide as a python-pptx table.

Theme applied to every table:
- header row: bold, accent top (heavy) and bottom (thin) borders, light fill
- body rows: thin grey bottom separator, no fill
- last body row: accent bottom border closing the table
- numeric and percent columns centered (header and body)
- no vertical borders anywhere

Usage::

    from slidebook.generator.tables import add_themed_table

    shape = add_themed_table(slide, themed, Inches(0.5), Inches(1.5))
"""

from lxml import etree
from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.oxml.ns import qn
from pptx.util import Inches, Pt

from slidebook.schema.theme import Theme, ThemedTable


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Built-in "No Style, No Grid" table style; keeps the template's default
# banding and header colors from bleeding into the themed cells.
NO_STYLE_TABLE_ID = "{2D5ABB26-0587-4C30-8999-92F81FD0307C}"

_EDGES = ("a:lnL", "a:lnR", "a:lnT", "a:lnB")

_ROW_HEIGHT_FACTOR = 1.8


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _hex_to_rgb(hex_color: str) -> RGBColor:
    """Convert '#RRGGBB' hex string to an RGBColor."""
    h = hex_color.lstrip("#")
    return RGBColor(*bytes.fromhex(h))


def _line(tcPr, tag: str, width_pt: float | None, color: str | None):
    """Build an ``a:ln*`` border element. ``None`` width means no border."""
    ln = tcPr.makeelement(qn(tag), {})
    if width_pt is None or color is None:
        ln.set("w", "0")
        etree.SubElement(ln, qn("a:noFill"))
        return ln
    ln.set("w", str(Pt(width_pt)))
    ln.set("cap", "flat")
    ln.set("cmpd", "sng")
    ln.set("algn", "ctr")
    fill = etree.SubElement(ln, qn("a:solidFill"))
    etree.SubElement(fill, qn("a:srgbClr"), val=color.lstrip("#").upper())
    etree.SubElement(ln, qn("a:prstDash"), val="solid")
    return ln


def _set_borders(cell, top: tuple[float, str] | None,
                 bottom: tuple[float, str] | None) -> None:
    """Replace all four borders of a cell. Left and right are always off."""
    tcPr = cell._tc.get_or_add_tcPr()
    for child in list(tcPr):
        if child.tag in {qn(e) for e in _EDGES}:
            tcPr.remove(child)

    specs = {
        "a:lnL": None,
        "a:lnR": None,
        "a:lnT": top,
        "a:lnB": bottom,
    }
    # Borders must precede the fill element in a:tcPr.
    for idx, tag in enumerate(_EDGES):
        spec = specs[tag]
        width, color = spec if spec else (None, None)
        tcPr.insert(idx, _line(tcPr, tag, width, color))


def _set_table_style(table, style_id: str) -> None:
    tblPr = table._tbl.tblPr
    style = tblPr.find(qn("a:tableStyleId"))
    if style is None:
        style = etree.SubElement(tblPr, qn("a:tableStyleId"))
    style.text = style_id


def _style_text(cell, text: str, theme: Theme, is_header: bool,
                centered: bool) -> None:
    cell.text = text
    size = Pt(theme.font_size if is_header else theme.body_font_size)
    color = _hex_to_rgb(theme.text_color)
    for paragraph in cell.text_frame.paragraphs:
        paragraph.alignment = PP_ALIGN.CENTER if centered else PP_ALIGN.LEFT
        # Paragraph-level font covers empty cells, which have no runs.
        paragraph.font.name = theme.font
        paragraph.font.size = size
        paragraph.font.bold = is_header
        for run in paragraph.runs:
            run.font.name = theme.font
            run.font.size = size
            run.font.bold = is_header
            run.font.color.rgb = color


def _style_header_cell(cell, theme: Theme) -> None:
    cell.vertical_anchor = MSO_ANCHOR.MIDDLE
    cell.margin_top = Pt(theme.header_padding_top_pt)
    cell.margin_bottom = Pt(theme.header_padding_bottom_pt)
    _set_borders(
        cell,
        top=(theme.header_top_border_pt, theme.accent),
        bottom=(theme.header_bottom_border_pt, theme.accent),
    )
    cell.fill.solid()
    cell.fill.fore_color.rgb = _hex_to_rgb(theme.header_background)


def _style_body_cell(cell, theme: Theme, is_last: bool) -> None:
    cell.vertical_anchor = MSO_ANCHOR.MIDDLE
    cell.margin_top = Pt(theme.body_padding_top_pt)
    cell.margin_bottom = Pt(theme.body_padding_bottom_pt)
    if is_last:
        bottom = (theme.last_row_border_pt, theme.accent)
    else:
        bottom = (theme.body_border_pt, theme.separator)
    _set_borders(cell, top=None, bottom=bottom)
    cell.fill.background()


def _row_height(theme: Theme, is_header: bool) -> int:
    size = theme.font_size if is_header else theme.body_font_size
    if is_header:
        padding = theme.header_padding_top_pt + theme.header_padding_bottom_pt
    else:
        padding = theme.body_padding_top_pt + theme.body_padding_bottom_pt
    return Pt(size * _ROW_HEIGHT_FACTOR + padding)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def add_themed_table(slide, table: ThemedTable, left: int, top: int):
    """Add a ThemedTable to a slide.

    Args:
        slide: python-pptx Slide.
        table: Formatted table with theme and column widths.
        left, top: Position of the table's top-left corner (EMU).

    Returns:
        The GraphicFrame holding the table.
    """
    theme = table.theme
    header_height = _row_height(theme, is_header=True)
    body_height = _row_height(theme, is_header=False)
    total_height = header_height + body_height * table.n_rows
    total_width = Inches(sum(table.widths))

    frame = slide.shapes.add_table(
        table.n_rows + 1, table.n_cols,
        left, top, total_width, total_height,
    )
    frame.name = "Themed Table"
    tbl = frame.table
    _set_table_style(tbl, NO_STYLE_TABLE_ID)
    tbl.first_row = True
    tbl.horz_banding = False

    for col_idx, width in enumerate(table.widths):
        tbl.columns[col_idx].width = Inches(width)

    tbl.rows[0].height = header_height
    for col_idx, label in enumerate(table.columns):
        cell = tbl.cell(0, col_idx)
        _style_header_cell(cell, theme)
        _style_text(cell, label, theme, is_header=True,
                    centered=table.kinds[col_idx].centered)

    for row_idx, row in enumerate(table.rows, start=1):
        tbl.rows[row_idx].height = body_height
        is_last = row_idx == table.n_rows
        for col_idx, value in enumerate(row):
            cell = tbl.cell(row_idx, col_idx)
            _style_body_cell(cell, theme, is_last)
            _style_text(cell, value, theme, is_header=False,
                        centered=table.kinds[col_idx].centered)

    return frame
