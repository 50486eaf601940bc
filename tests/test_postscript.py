"""Tests for plotscript.postscript."""

import io
from unittest.mock import patch

import pytest

from plotscript.figure import Point, closed_figure, compose, open_figure
from plotscript.postscript import (
    DEFAULT_TEMPLATE,
    Document,
    postscript_string,
    sample_figure,
    to_postscript,
)
from plotscript.template import compile_template


class TestToPostscript:
    def test_number(self):
        assert postscript_string(42) == "42"

    def test_point(self):
        assert postscript_string(Point(100, 900)) == "[100 900]"

    def test_list(self):
        assert postscript_string([Point(1, 2), Point(3, 4)]) == "[[1 2][3 4]]"

    def test_open_figure(self):
        assert postscript_string(open_figure([(1, 2)])) == "[(open)[[1 2]]]"

    def test_composed_figure(self):
        figure = compose([open_figure([(1, 2)]), closed_figure([(3, 4)])])
        assert postscript_string(figure) == "[(compose)[[(open)[[1 2]]][(closed)[[3 4]]]]]"

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            to_postscript("text", io.StringIO())

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            postscript_string(True)


class TestDocument:
    def test_embeds_figure(self):
        document = Document(compile_template("%!PS\n{{figure}}\nshowpage\n"))
        document.embed(open_figure([(1, 2)]))
        assert str(document) == "%!PS\n[(open)[[1 2]]]\nshowpage\n"

    def test_without_figure_placeholder_passes_through(self):
        document = Document(compile_template("before {{figure}} after"))
        assert str(document) == "before {{figure}} after"

    def test_default_template(self):
        document = Document.with_default_template(sample_figure())
        out = str(document)
        assert out.startswith("%!PS-Adobe-3.0\n")
        assert "[(compose)[[(open)[[100 100][900 100][900 900][100 900]]]" in out
        assert "{{figure}}" in DEFAULT_TEMPLATE
        assert "{{figure}}" not in out

    def test_figure_key_from_env(self):
        document = Document(compile_template("{{shape}}|{{figure}}"), open_figure([]))
        with patch.dict("os.environ", {"PLOTSCRIPT_FIGURE_KEY": "shape"}):
            assert str(document) == "[(open)[]]|{{figure}}"

    def test_writes_to_writer(self):
        buf = io.StringIO()
        Document(compile_template("{{figure}}"), open_figure([(0, 0)])).to_postscript(buf)
        assert buf.getvalue() == "[(open)[[0 0]]]"
