"""Tests for plotscript.figure."""

import pytest

from plotscript.figure import FigureKind, Point, closed_figure, compose, open_figure


class TestPoint:
    def test_equal_when_coordinates_equal(self):
        assert Point.of([0, 1]) == Point.of([0, 1])

    def test_different_when_coordinates_differ(self):
        u, v, w = Point.of([0, 1]), Point.of([0, 0]), Point.of([1, 0])
        assert u != v
        assert u != w
        assert v != w

    def test_display(self):
        assert str(Point(100, 900)) == "[100 900]"


class TestFigure:
    def test_open_display(self):
        figure = open_figure([(1, 2), (3, 4)])
        assert figure.kind is FigureKind.OPEN
        assert str(figure) == "[(open) [1 2] [3 4]]"

    def test_closed_display(self):
        assert str(closed_figure([Point(0, 0)])) == "[(closed) [0 0]]"

    def test_empty_figure(self):
        assert str(open_figure([])) == "[(open)]"

    def test_compose_display(self):
        figure = compose([open_figure([(1, 2)]), closed_figure([(3, 4)])])
        assert str(figure) == "[(compose) [(open) [1 2]] [(closed) [3 4]]]"

    def test_compose_rejects_points(self):
        with pytest.raises(TypeError):
            compose([Point(1, 2)])

    def test_points_normalised(self):
        figure = open_figure([[5, 6]])
        assert figure.items == (Point(5, 6),)
