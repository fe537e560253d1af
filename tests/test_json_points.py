"""Tests for loading and dumping JSON point lists."""

import json

import pytest
from interactive_voronoi.core import Bounds, Point, PointSet
from interactive_voronoi.errors import InputError
from interactive_voronoi.io import dumps_points, load_points, parse_points


class TestParsePoints:
    """Test decoded JSON conversion."""

    def test_pairs(self):
        assert parse_points([[1, 2], [3, 4]]) == [Point(1, 2), Point(3, 4)]

    def test_objects(self):
        assert parse_points([{"x": 1.5, "y": 2}]) == [Point(1.5, 2)]

    def test_empty_list(self):
        assert parse_points([]) == []

    @pytest.mark.parametrize("data", [
        {"x": 1, "y": 2},
        "points",
        [[1]],
        [[1, 2, 3]],
        [["1", 2]],
        [{"x": 1}],
        [{"x": 1, "y": 2, "z": 3}],
        [[1, None]],
    ])
    def test_malformed(self, data):
        with pytest.raises(InputError):
            parse_points(data)

    def test_error_names_position(self):
        with pytest.raises(InputError, match="Point 1"):
            parse_points([[1, 2], [3]])

    def test_out_of_range(self):
        bounds = Bounds.from_size(100, 100)
        assert parse_points([[0, 0], [100, 100]], bounds) == [Point(0, 0), Point(100, 100)]
        with pytest.raises(InputError, match="outside"):
            parse_points([[50, 50], [150, 10]], bounds)


class TestLoadPoints:
    """Test reading point files."""

    def test_load_in_order(self, tmp_path):
        path = tmp_path / "dots.json"
        path.write_text("[[1,2],[3,4]]")
        assert load_points(path) == [Point(1, 2), Point(3, 4)]

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError, match="Can't read"):
            load_points(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[[1, 2],")
        with pytest.raises(InputError, match="JSON"):
            load_points(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "binary.json"
        path.write_bytes(b"[[1,2],\xff\xfe]")
        with pytest.raises(InputError, match="Can't read"):
            load_points(path)

    def test_huge_integer(self, tmp_path):
        """Integers beyond float range are rejected, not overflowed."""
        path = tmp_path / "huge.json"
        path.write_text("[[" + "9" * 400 + ", 1]]")
        with pytest.raises(InputError, match="too large"):
            load_points(path)

    def test_non_finite_tokens(self, tmp_path):
        """Python's JSON decoder accepts NaN, the loader must not."""
        path = tmp_path / "nan.json"
        path.write_text("[[NaN, 1]]")
        with pytest.raises(InputError):
            load_points(path)


class TestDumpPoints:
    """Test the console dump format."""

    def test_round_trip_of_loaded_file(self, tmp_path):
        """Loading [[1,2],[3,4]] and dumping reproduces it exactly."""
        path = tmp_path / "dots.json"
        path.write_text("[[1,2],[3,4]]")
        points = PointSet(load_points(path))
        assert dumps_points(points.snapshot()) == "[[1,2],[3,4]]"

    def test_floats(self):
        dumped = dumps_points([Point(1.5, 2.25)])
        assert json.loads(dumped) == [[1.5, 2.25]]

    def test_empty(self):
        assert dumps_points([]) == "[]"
