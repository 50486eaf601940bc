"""Figure model: points, open and closed polylines, and compositions of figures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence, Union

Number = Union[int, float]


@dataclass(frozen=True)
class Point:
    x: Number
    y: Number

    @classmethod
    def of(cls, coords: Sequence[Number]) -> Point:
        x, y = coords
        return cls(x, y)

    def __str__(self) -> str:
        return f"[{self.x} {self.y}]"


class FigureKind(Enum):
    OPEN = "open"
    CLOSED = "closed"
    COMPOSED = "compose"


@dataclass(frozen=True)
class Figure:
    """A polyline (``OPEN``/``CLOSED`` over points) or a ``COMPOSED`` group of figures."""

    kind: FigureKind
    items: tuple

    def __str__(self) -> str:
        parts = [f"({self.kind.value})"]
        parts.extend(str(item) for item in self.items)
        return "[" + " ".join(parts) + "]"


def _points(points: Iterable) -> tuple[Point, ...]:
    return tuple(p if isinstance(p, Point) else Point.of(p) for p in points)


def open_figure(points: Iterable) -> Figure:
    return Figure(FigureKind.OPEN, _points(points))


def closed_figure(points: Iterable) -> Figure:
    return Figure(FigureKind.CLOSED, _points(points))


def compose(figures: Iterable[Figure]) -> Figure:
    figures = tuple(figures)
    for figure in figures:
        if not isinstance(figure, Figure):
            raise TypeError(f"compose() expects figures, got {type(figure).__name__}")
    return Figure(FigureKind.COMPOSED, figures)
