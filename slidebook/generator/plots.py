"""Plot rendering - places a matplotlib figure on a slide as a picture.

Any object with ``savefig`` (a ``Figure``) or ``get_figure`` (an ``Axes``,
or the return value of ``DataFrame.plot``) is accepted. matplotlib itself is
never imported here; the figure renders itself.
"""

import io
from typing import Any

from slidebook.errors import UnsupportedInputError


DEFAULT_DPI = 200


def is_plot(obj: Any) -> bool:
    """True for objects that can be rendered as a figure."""
    return callable(getattr(obj, "savefig", None)) or callable(getattr(obj, "get_figure", None))


def resolve_figure(obj: Any):
    """Return the Figure behind a Figure or Axes-like object."""
    if callable(getattr(obj, "savefig", None)):
        return obj
    if callable(getattr(obj, "get_figure", None)):
        fig = obj.get_figure()
        if fig is not None and callable(getattr(fig, "savefig", None)):
            return fig
    raise UnsupportedInputError(
        f"Cannot render {type(obj).__name__} as a plot: it has no figure to save."
    )


def figure_title(obj: Any) -> str | None:
    """The figure's suptitle text, if it has one."""
    try:
        fig = resolve_figure(obj)
    except UnsupportedInputError:
        return None
    suptitle = getattr(fig, "_suptitle", None)
    text = suptitle.get_text() if suptitle is not None else ""
    return text or None


def render_png(obj: Any, dpi: int = DEFAULT_DPI) -> bytes:
    """Render a figure to PNG bytes with a transparent background."""
    fig = resolve_figure(obj)
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=dpi, transparent=True, bbox_inches="tight")
    return buf.getvalue()


def add_figure(slide, obj: Any, left: int, top: int, width: int, height: int,
               dpi: int = DEFAULT_DPI):
    """Add a figure to a slide, scaled to fit the given box.

    The aspect ratio is preserved and the picture is centered horizontally
    within the box.

    Returns:
        The Picture shape.
    """
    blob = render_png(obj, dpi=dpi)
    picture = slide.shapes.add_picture(io.BytesIO(blob), left, top)
    scale = min(width / picture.width, height / picture.height)
    picture.width = int(picture.width * scale)
    picture.height = int(picture.height * scale)
    picture.left = left + (width - picture.width) // 2
    picture.name = "Plot"
    return picture
