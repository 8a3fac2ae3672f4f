"""Markdown parsing - splits a markdown string into paragraph blocks.

Only the subset that makes sense on a slide is recognised:

    # Heading            -> HEADING block (levels 1-6)
    - item / * item      -> BULLET block, nesting from indentation
    1. item              -> NUMBERED block
    plain lines          -> PARAGRAPH block (consecutive lines are joined)
    ```lang ... ```      -> CODE block, lines kept verbatim (~~~ fences too)
    ---                  -> ignored (horizontal rule)

Inline markup: **bold** / __bold__, *italic* / _italic_, `code` and
[text](url) links. Anything else is kept as literal text.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum


class BlockStyle(Enum):
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLET = "bullet"
    NUMBERED = "numbered"
    CODE = "code"


@dataclass
class Run:
    """A span of text sharing one character format."""
    text: str
    bold: bool = False
    italic: bool = False
    code: bool = False
    url: str | None = None


@dataclass
class Block:
    """One paragraph of rendered markdown."""
    style: BlockStyle
    runs: list[Run] = field(default_factory=list)
    level: int = 0                 # Indentation level for list items
    heading_level: int = 0         # 1-6 for headings
    number: int | None = None      # Source number for numbered items
    language: str | None = None    # Info string of a fenced code block

    @property
    def text(self) -> str:
        sep = "\n" if self.style is BlockStyle.CODE else ""
        return sep.join(r.text for r in self.runs)


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_HEADING = re.compile(r"^(#{1,6})\s+(.*?)\s*#*\s*$")
_RULE = re.compile(r"^\s*([-*_])(\s*\1){2,}\s*$")
_BULLET = re.compile(r"^(\s*)[-*+]\s+(.*)$")
_NUMBERED = re.compile(r"^(\s*)(\d+)[.)]\s+(.*)$")
_CODE_FENCE = re.compile(r"^\s*(`{3,}|~{3,})\s*([\w+\-.#]*)")

_INLINE = re.compile(
    r"(\*\*|__)(?P<bold>.+?)\1"
    r"|`(?P<code>[^`]+)`"
    r"|\[(?P<label>[^\]]+)\]\((?P<url>[^)\s]+)\)"
    r"|(?<![\w*])(\*|_)(?P<italic>[^*_]+?)\6(?!\w)"
)

_INDENT_WIDTH = 2
_MAX_LEVEL = 8


def _indent_level(indent: str) -> int:
    return min(len(indent.expandtabs(4)) // _INDENT_WIDTH, _MAX_LEVEL)


# ---------------------------------------------------------------------------
# Inline parsing
# ---------------------------------------------------------------------------

def parse_inline(text: str) -> list[Run]:
    """Split a line into formatted runs."""
    runs: list[Run] = []
    pos = 0
    for m in _INLINE.finditer(text):
        if m.start() > pos:
            runs.append(Run(text[pos:m.start()]))
        if m.group("bold") is not None:
            runs.extend(replace(r, bold=True) for r in parse_inline(m.group("bold")))
        elif m.group("code") is not None:
            runs.append(Run(m.group("code"), code=True))
        elif m.group("label") is not None:
            runs.extend(replace(r, url=m.group("url")) for r in parse_inline(m.group("label")))
        else:
            runs.extend(replace(r, italic=True) for r in parse_inline(m.group("italic")))
        pos = m.end()
    if pos < len(text):
        runs.append(Run(text[pos:]))
    return runs


# ---------------------------------------------------------------------------
# Block parsing
# ---------------------------------------------------------------------------

def _closes_fence(line: str, marker: str) -> bool:
    """A closing fence uses the opening character, at least as many times."""
    stripped = line.strip()
    return (len(stripped) >= len(marker)
            and stripped == marker[0] * len(stripped))


def parse_markdown(text: str) -> list[Block]:
    """Parse a markdown string into a list of blocks, in document order."""
    blocks: list[Block] = []
    paragraph: list[str] = []
    code: Block | None = None
    fence = ""

    def flush() -> None:
        if paragraph:
            joined = " ".join(line.strip() for line in paragraph)
            blocks.append(Block(BlockStyle.PARAGRAPH, parse_inline(joined)))
            paragraph.clear()

    for line in text.splitlines():
        if code is not None:
            if _closes_fence(line, fence):
                code = None
            else:
                code.runs.append(Run(line.rstrip(), code=True))
            continue

        m = _CODE_FENCE.match(line)
        if m:
            flush()
            fence = m.group(1)
            code = Block(BlockStyle.CODE, language=m.group(2) or None)
            blocks.append(code)
            continue

        if not line.strip():
            flush()
            continue
        if _RULE.match(line):
            flush()
            continue

        m = _HEADING.match(line)
        if m:
            flush()
            blocks.append(Block(BlockStyle.HEADING, parse_inline(m.group(2)),
                                heading_level=len(m.group(1))))
            continue

        m = _BULLET.match(line)
        if m:
            flush()
            blocks.append(Block(BlockStyle.BULLET, parse_inline(m.group(2).strip()),
                                level=_indent_level(m.group(1))))
            continue

        m = _NUMBERED.match(line)
        if m:
            flush()
            blocks.append(Block(BlockStyle.NUMBERED, parse_inline(m.group(3).strip()),
                                level=_indent_level(m.group(1)),
                                number=int(m.group(2))))
            continue

        paragraph.append(line)

    flush()
    return blocks
