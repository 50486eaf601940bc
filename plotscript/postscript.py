"""PostScript serialisation for figures, and documents that embed a figure in a template."""

from __future__ import annotations

import io
import logging
from typing import Optional

from plotscript.config import figure_key
from plotscript.figure import Figure, Point, closed_figure, compose, open_figure
from plotscript.template import Template, Writer, compile_template

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = """\
%!PS-Adobe-3.0
%%BoundingBox: 0 0 1000 1000
{{figure}}
showpage
"""


def to_postscript(obj, writer: Writer) -> None:
    """Write the PostScript form of a figure, point, list or number."""
    if isinstance(obj, Figure):
        writer.write("[")
        writer.write(f"({obj.kind.value})")
        to_postscript(list(obj.items), writer)
        writer.write("]")
    elif isinstance(obj, Point):
        writer.write("[")
        to_postscript(obj.x, writer)
        writer.write(" ")
        to_postscript(obj.y, writer)
        writer.write("]")
    elif isinstance(obj, (list, tuple)):
        writer.write("[")
        for item in obj:
            to_postscript(item, writer)
        writer.write("]")
    elif isinstance(obj, (int, float)) and not isinstance(obj, bool):
        writer.write(str(obj))
    else:
        raise TypeError(f"Can not serialise {type(obj).__name__} to PostScript")


def postscript_string(obj) -> str:
    buf = io.StringIO()
    to_postscript(obj, buf)
    return buf.getvalue()


class Document:
    """A template with an optional figure substituted at the figure key."""

    def __init__(self, template: Template, figure: Optional[Figure] = None) -> None:
        self.template = template
        self.figure = figure

    @classmethod
    def with_default_template(cls, figure: Optional[Figure] = None) -> Document:
        return cls(compile_template(DEFAULT_TEMPLATE), figure)

    def embed(self, figure: Figure) -> None:
        self.figure = figure

    def to_postscript(self, writer: Writer) -> None:
        data: dict[str, str] = {}
        if self.figure is not None:
            data[figure_key()] = postscript_string(self.figure)
        else:
            logger.debug("No figure embedded; placeholder passes through")
        self.template.render(writer, data)

    def __str__(self) -> str:
        buf = io.StringIO()
        self.to_postscript(buf)
        return buf.getvalue()


def sample_figure() -> Figure:
    """Two nested squares: an open outer one and a closed inner one."""
    return compose([
        open_figure([(100, 100), (900, 100), (900, 900), (100, 900)]),
        closed_figure([(200, 200), (800, 200), (800, 800), (200, 800)]),
    ])
