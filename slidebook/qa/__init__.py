"""QA package - reads generated presentations back for checking."""

from .inspector import SlideSummary, inspect_presentation, summarise_slide

__all__ = [
    "SlideSummary",
    "inspect_presentation",
    "summarise_slide",
]
