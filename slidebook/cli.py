"""CLI entry point for slidebook.

Builds a presentation from data files on disk and inspects the result.

Usage::

    # One slide per input file (tables from CSV/Excel, text from markdown)
    slidebook build data/sales.csv notes/summary.md -o output/report.pptx

    # With a title slide and a custom template
    slidebook build data/sales.xlsx -o output/report.pptx \\
        --template templates/house.pptx \\
        --title-slide "Monthly sales" --type "Report" \\
        --author "Analytics" --date "October 2026"

    # Use a YAML theme (see `slidebook theme`)
    slidebook build data/sales.csv -o out.pptx --theme theme.yaml

    # Show what a presentation contains
    slidebook inspect output/report.pptx

    # Dump the default theme as a starting point
    slidebook theme -o theme.yaml
"""

import argparse
import sys
import warnings
from pathlib import Path

from slidebook.errors import SlidebookError
from slidebook.generator.dispatch import to_ppt
from slidebook.generator.workbook import Workbook
from slidebook.processor.ingestion import load_content
from slidebook.qa.inspector import inspect_presentation
from slidebook.schema.loader import dump_theme, load_theme, save_theme
from slidebook.schema.theme import Theme


# ---------------------------------------------------------------------------
# Workbook setup
# ---------------------------------------------------------------------------

def _load_theme(args):
    """Load a Theme from --theme, or the default theme."""
    if getattr(args, "theme", None):
        path = Path(args.theme)
        if not path.exists():
            _error(f"Theme file not found: {path}")
        return load_theme(path)
    return Theme()


def _open_workbook(args):
    theme = _load_theme(args)
    template = None
    if args.template:
        template = Path(args.template)
        if not template.exists():
            _error(f"Template file not found: {template}")
        _info(f"Template: {template}")
    return Workbook(template, theme=theme, font=args.font, font_size=args.font_size)


def _slide_title(path):
    return path.stem.replace("_", " ").replace("-", " ")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_build(args):
    """Build a PPTX presentation from input files."""
    paths = [Path(p) for p in args.inputs]
    for p in paths:
        if not p.exists():
            _error(f"Input file not found: {p}")

    wb = _open_workbook(args)

    if args.title_slide is not None:
        _info(f"Title slide: {args.title_slide}")
        wb.title_slide(args.type, args.title_slide, args.author, args.date)

    for p in paths:
        _info(f"Adding {p}")
        try:
            content = load_content(p)
        except ValueError as exc:
            _error(str(exc))

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            try:
                to_ppt(content, wb, title=_slide_title(p), subtitle=f"Source: {p.name}")
            except SlidebookError as exc:
                _error(f"{p}: {exc}")
        for w in caught:
            _warn(f"{p}: {w.message}")

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output)
    _info(f"Written: {output} ({len(wb)} slides, {output.stat().st_size:,} bytes)")


def cmd_inspect(args):
    """Show the slides of an existing PPTX."""
    pptx_path = Path(args.pptx)
    if not pptx_path.exists():
        _error(f"PPTX file not found: {pptx_path}")

    summaries = inspect_presentation(pptx_path)
    print(f"Presentation: {pptx_path}")
    print(f"Slides:       {len(summaries)}")
    if summaries:
        print()
    for summary in summaries:
        print(f"  {summary}")


def cmd_theme(args):
    """Print or save the default theme as YAML."""
    theme = _load_theme(args)
    if args.output:
        save_theme(theme, args.output)
        _info(f"Written: {args.output}")
    else:
        print(dump_theme(theme), end="")


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def _info(msg):
    print(f"  {msg}", file=sys.stderr)


def _warn(msg):
    print(f"  WARNING: {msg}", file=sys.stderr)


def _error(msg):
    print(f"  ERROR: {msg}", file=sys.stderr)
    sys.exit(1)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="slidebook",
        description="Turn tables, figures and markdown into PowerPoint slides.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- build ----
    build = subparsers.add_parser(
        "build",
        help="Build a PPTX presentation with one slide per input file.",
    )
    build.add_argument(
        "inputs",
        nargs="+",
        help="Input files (.csv, .tsv, .txt, .xlsx, .xlsm, .xls, .md).",
    )
    build.add_argument(
        "-o", "--output",
        required=True,
        help="Output PPTX file path.",
    )
    build.add_argument(
        "--template",
        help="Existing PPTX to use as the base document.",
    )
    _add_theme_args(build)
    build.add_argument(
        "--font",
        default=None,
        help="Font family (overrides the theme; default: Calibri).",
    )
    build.add_argument(
        "--font-size",
        dest="font_size",
        type=float,
        default=None,
        help="Table font size in points (overrides the theme; default: 10).",
    )
    _add_title_slide_args(build)
    build.set_defaults(func=cmd_build)

    # ---- inspect ----
    insp = subparsers.add_parser(
        "inspect",
        help="List the slides of an existing PPTX.",
    )
    insp.add_argument(
        "pptx",
        help="Path to the PPTX file to inspect.",
    )
    insp.set_defaults(func=cmd_inspect)

    # ---- theme ----
    thm = subparsers.add_parser(
        "theme",
        help="Print the theme as YAML (default theme unless --theme is given).",
    )
    _add_theme_args(thm)
    thm.add_argument(
        "-o", "--output",
        help="Write the YAML to a file instead of stdout.",
    )
    thm.set_defaults(func=cmd_theme)

    return parser


def _add_theme_args(parser):
    parser.add_argument(
        "--theme",
        help="Path to a YAML theme file.",
    )


def _add_title_slide_args(parser):
    """Add title slide arguments."""
    ts = parser.add_argument_group("title slide")
    ts.add_argument(
        "--title-slide",
        dest="title_slide",
        default=None,
        help="Add a title slide with this report title.",
    )
    ts.add_argument(
        "--type",
        help="Report type shown above the title.",
    )
    ts.add_argument(
        "--author",
        help="Author line of the title slide.",
    )
    ts.add_argument(
        "--date",
        help="Date line of the title slide.",
    )


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
