"""Text rendering - fills a python-pptx text frame from markdown blocks."""

from pptx.dml.color import RGBColor
from pptx.oxml.ns import qn
from pptx.util import Pt

from slidebook.processor.markdown import Block, BlockStyle, Run, parse_markdown
from slidebook.schema.theme import Theme


CODE_FONT = "Consolas"

_HEADING_SCALE = {1: 1.6, 2: 1.4, 3: 1.2}
_CODE_SCALE = 0.8

_LIST_TAGS = ("a:buChar", "a:buAutoNum", "a:buBlip", "a:buNone")


def _rgb(hex_color: str) -> RGBColor:
    return RGBColor(*bytes.fromhex(hex_color.lstrip("#")))


# ---------------------------------------------------------------------------
# Bullet helpers
# ---------------------------------------------------------------------------

def _clear_list_props(paragraph) -> None:
    """Remove any existing bullet/numbering from a paragraph."""
    pPr = paragraph._element.get_or_add_pPr()
    for child in list(pPr):
        if child.tag in {qn(t) for t in _LIST_TAGS}:
            pPr.remove(child)


def _set_no_bullets(paragraph) -> None:
    pPr = paragraph._element.get_or_add_pPr()
    _clear_list_props(paragraph)
    pPr.append(pPr.makeelement(qn("a:buNone"), {}))


def _set_bullet(paragraph, char: str = "•") -> None:
    pPr = paragraph._element.get_or_add_pPr()
    _clear_list_props(paragraph)
    pPr.append(pPr.makeelement(qn("a:buChar"), {"char": char}))


def _set_numbering(paragraph, start_at: int | None = None) -> None:
    """Use PowerPoint auto-numbering; ``start_at`` only on the first item."""
    pPr = paragraph._element.get_or_add_pPr()
    _clear_list_props(paragraph)
    attrs = {"type": "arabicPeriod"}
    if start_at is not None:
        attrs["startAt"] = str(int(start_at))
    pPr.append(pPr.makeelement(qn("a:buAutoNum"), attrs))


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _block_size(block: Block, theme: Theme) -> float:
    if block.style is BlockStyle.HEADING:
        return theme.markdown_font_size * _HEADING_SCALE.get(block.heading_level, 1.1)
    return theme.markdown_font_size


def _render_block(paragraph, block: Block, theme: Theme, first_number: bool) -> None:
    paragraph.level = block.level
    if block.style is BlockStyle.BULLET:
        _set_bullet(paragraph)
    elif block.style is BlockStyle.NUMBERED:
        _set_numbering(paragraph, block.number if first_number else None)
    else:
        _set_no_bullets(paragraph)

    size = Pt(_block_size(block, theme))
    color = _rgb(theme.text_color)
    for span in block.runs:
        run = paragraph.add_run()
        run.text = span.text
        run.font.name = CODE_FONT if span.code else theme.font
        run.font.size = size
        run.font.color.rgb = color
        run.font.bold = span.bold or block.style is BlockStyle.HEADING
        if span.italic:
            run.font.italic = True
        if span.url:
            run.hyperlink.address = span.url


def _render_code(paragraphs, block: Block, theme: Theme) -> None:
    """One unbulleted paragraph per source line, indentation kept."""
    size = Pt(theme.markdown_font_size * _CODE_SCALE)
    color = _rgb(theme.text_color)
    for line in block.runs or [Run("", code=True)]:
        paragraph = next(paragraphs)
        _set_no_bullets(paragraph)
        run = paragraph.add_run()
        run.text = line.text
        run.font.name = CODE_FONT
        run.font.size = size
        run.font.color.rgb = color


def _paragraphs(text_frame):
    """Yield the frame's first paragraph, then new ones on demand."""
    yield text_frame.paragraphs[0]
    while True:
        yield text_frame.add_paragraph()


def render_blocks(text_frame, blocks: list[Block], theme: Theme) -> None:
    """Replace the content of a text frame with the given blocks."""
    text_frame.clear()
    text_frame.word_wrap = True
    paragraphs = _paragraphs(text_frame)
    previous: Block | None = None
    for block in blocks:
        if block.style is BlockStyle.CODE:
            _render_code(paragraphs, block, theme)
            previous = block
            continue
        first_number = block.style is BlockStyle.NUMBERED and not (
            previous is not None
            and previous.style is BlockStyle.NUMBERED
            and previous.level == block.level
        )
        _render_block(next(paragraphs), block, theme, first_number)
        previous = block


def render_markdown(text_frame, text: str, theme: Theme) -> list[Block]:
    """Parse ``text`` as markdown and render it into ``text_frame``.

    Returns the parsed blocks.
    """
    blocks = parse_markdown(text)
    render_blocks(text_frame, blocks, theme)
    return blocks
