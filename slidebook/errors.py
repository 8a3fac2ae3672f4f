"""Exception types raised by slidebook.

Engine failures (python-pptx, pandas readers) are never wrapped; only
precondition violations detected by slidebook itself use these classes.
"""


class SlidebookError(Exception):
    """Base class for slidebook errors."""


class UnsupportedInputError(SlidebookError, TypeError):
    """A value cannot be placed on a slide (e.g. a multi-element string)."""


class LayoutNotFoundError(SlidebookError, KeyError):
    """The presentation template has no slide layout with the given name."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(name)

    def __str__(self) -> str:
        return (
            f"Template has no slide layout named {self.name!r}. "
            f"Available layouts: {', '.join(self.available) or '(none)'}"
        )
