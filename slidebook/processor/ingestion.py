"""Data ingestion - reads files from disk into values that ``to_ppt`` accepts.

Handles:
- CSV / TSV / TXT tables (UTF-8 comma-delimited or UTF-16 LE tab-delimited)
- Excel workbooks (.xlsx, .xlsm, .xls)
- Markdown documents (.md, .markdown)

Tables get ``df.attrs["title"]`` set to the file stem, which becomes the
slide subtitle when none is given explicitly.
"""

from pathlib import Path

import pandas as pd


CSV_SUFFIXES = {".csv", ".tsv", ".txt"}
EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}
MARKDOWN_SUFFIXES = {".md", ".markdown"}
TABLE_SUFFIXES = CSV_SUFFIXES | EXCEL_SUFFIXES


# ---------------------------------------------------------------------------
# Column cleaning
# ---------------------------------------------------------------------------

def clean_columns(df):
    """Strip whitespace from string column names."""
    df.columns = [c.strip() if isinstance(c, str) else c for c in df.columns]
    return df


# ---------------------------------------------------------------------------
# Encoding detection and CSV reading
# ---------------------------------------------------------------------------

def detect_encoding(path):
    """Detect whether a file is UTF-16 LE (with BOM) or UTF-8.

    Returns (encoding, delimiter) tuple. Files with a ``.tsv`` suffix are
    always tab-delimited.
    """
    path = Path(path)
    with open(path, "rb") as f:
        raw = f.read(4)
    if raw[:2] == b"\xff\xfe":
        return "utf-16", "\t"
    sep = "\t" if path.suffix.lower() == ".tsv" else ","
    return "utf-8", sep


def read_csv_auto(path):
    """Read a CSV file with automatic encoding and delimiter detection."""
    encoding, sep = detect_encoding(path)
    df = pd.read_csv(path, encoding=encoding, sep=sep)
    return clean_columns(df)


# ---------------------------------------------------------------------------
# Readers
# ---------------------------------------------------------------------------

def read_table(path, sheet_name=0):
    """Read a tabular file into a DataFrame titled after the file stem.

    Raises:
        ValueError: If the suffix is not a supported table format.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in CSV_SUFFIXES:
        df = read_csv_auto(path)
    elif suffix in EXCEL_SUFFIXES:
        engine = "openpyxl" if suffix != ".xls" else None
        df = clean_columns(pd.read_excel(path, sheet_name=sheet_name, engine=engine))
    else:
        raise ValueError(
            f"Unsupported table format '{path.suffix}'. "
            f"Valid formats: {', '.join(sorted(TABLE_SUFFIXES))}"
        )
    df.attrs["title"] = path.stem
    return df


def read_markdown(path):
    """Read a markdown document as a single string."""
    return Path(path).read_text(encoding="utf-8")


def load_content(path):
    """Load a file as slide content, choosing the reader by suffix.

    Returns:
        str for markdown files, DataFrame for tabular files.

    Raises:
        ValueError: If the suffix is not recognized.
    """
    suffix = Path(path).suffix.lower()
    if suffix in MARKDOWN_SUFFIXES:
        return read_markdown(path)
    if suffix in TABLE_SUFFIXES:
        return read_table(path)
    valid = sorted(MARKDOWN_SUFFIXES | TABLE_SUFFIXES)
    raise ValueError(
        f"Cannot load '{path}': unsupported format '{Path(path).suffix}'. "
        f"Valid formats: {', '.join(valid)}"
    )
