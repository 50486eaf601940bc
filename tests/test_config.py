"""Tests for plotscript.config."""

from unittest.mock import patch

import pytest

from plotscript.config import DEFAULT_FIGURE_KEY, figure_key, load_data, parse_assignments


class TestLoadData:
    def test_scalar_values(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_text("subject: World\nport: 8000\nempty:\n")
        assert load_data(path) == {"subject": "World", "port": "8000", "empty": ""}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_text("")
        assert load_data(path) == {}

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="must be a mapping"):
            load_data(path)

    def test_nested_value_rejected(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_text("outer:\n  inner: 1\n")
        with pytest.raises(ValueError, match="'outer'"):
            load_data(path)


class TestParseAssignments:
    def test_pairs(self):
        assert parse_assignments(["a=1", "b=x=y"]) == {"a": "1", "b": "x=y"}

    def test_later_wins(self):
        assert parse_assignments(["a=1", "a=2"]) == {"a": "2"}

    def test_empty_value(self):
        assert parse_assignments(["a="]) == {"a": ""}

    def test_none(self):
        assert parse_assignments(None) == {}

    def test_missing_equals(self):
        with pytest.raises(ValueError, match="key=value"):
            parse_assignments(["oops"])


class TestFigureKey:
    def test_default(self):
        with patch.dict("os.environ", {}, clear=True):
            assert figure_key() == DEFAULT_FIGURE_KEY == "figure"

    def test_env_override(self):
        with patch.dict("os.environ", {"PLOTSCRIPT_FIGURE_KEY": "drawing"}):
            assert figure_key() == "drawing"
