"""Data processor package - formatting, markdown parsing and file ingestion."""

from .formatting import (
    classify_column,
    column_widths,
    format_column,
    format_number,
    format_percent,
    format_table,
    format_text,
    is_numeric,
    is_percent,
)
from .ingestion import (
    clean_columns,
    detect_encoding,
    load_content,
    read_csv_auto,
    read_markdown,
    read_table,
)
from .markdown import Block, BlockStyle, Run, parse_inline, parse_markdown
