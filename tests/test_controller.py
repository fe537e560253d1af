"""Tests for application state and input handling."""

import io

import pytest
import numpy as np
from interactive_voronoi.app import AppState, InputController
from interactive_voronoi.config import load_settings
from interactive_voronoi.core import Bounds, Point, RenderMode
from interactive_voronoi.errors import ConfigError, InputError
from interactive_voronoi.utils.random import make_rng


@pytest.fixture
def state():
    return AppState(bounds=Bounds.from_size(200, 100), random_count=5, rng=make_rng(0))


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def controller(state, output):
    return InputController(state, out=output)


class TestAppStateFromSettings:
    """Test startup state construction."""

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        state = AppState.from_settings(load_settings())
        assert state.bounds == Bounds.from_size(1280, 720)
        assert state.mode is RenderMode.FILLED
        assert state.random_count == 50
        assert len(state.points) == 0

    def test_lines_only(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        state = AppState.from_settings(load_settings(lines_only=True))
        assert state.mode is RenderMode.WIREFRAME

    def test_json_points_loaded(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "dots.json"
        path.write_text("[[1,2],[3,4]]")
        state = AppState.from_settings(load_settings(json_path=str(path)))

        assert state.points.snapshot() == (Point(1, 2), Point(3, 4))
        assert state.colors.shape == (2, 4)

    def test_out_of_window_points(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "dots.json"
        path.write_text("[[1,2],[5000,4]]")
        with pytest.raises(InputError):
            AppState.from_settings(load_settings(json_path=str(path)))

    def test_seed_reproduces_colors(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "dots.json"
        path.write_text("[[1,2],[3,4]]")
        settings = load_settings(json_path=str(path), seed=11)
        a = AppState.from_settings(settings)
        b = AppState.from_settings(settings)
        np.testing.assert_array_equal(a.colors, b.colors)


class TestClicks:
    """Test mouse handling."""

    def test_click_adds_point(self, controller, state):
        assert controller.on_click(10.0, 20.0)
        assert state.points.snapshot() == (Point(10.0, 20.0),)
        assert len(state.colors) == 1

    def test_click_on_existing_point_ignored(self, controller, state):
        controller.on_click(10.0, 20.0)
        assert not controller.on_click(10.0002, 20.0)
        assert len(state.points) == 1

    def test_click_outside_ignored(self, controller, state):
        assert not controller.on_click(500.0, 20.0)
        assert len(state.points) == 0

    def test_click_rebuilds_diagram(self, controller, state):
        controller.on_click(10.0, 20.0)
        first = state.current_diagram()
        assert len(first) == 1
        assert state.current_diagram() is first  # cached until the next change

        controller.on_click(150.0, 50.0)
        assert len(state.current_diagram()) == 2


class TestKeys:
    """Test keyboard bindings."""

    def test_clear(self, controller, state):
        controller.on_click(10.0, 20.0)
        assert controller.on_key("n")
        assert len(state.points) == 0
        assert state.current_diagram().is_empty

    def test_randomize(self, controller, state):
        """R places exactly random_count points inside the window."""
        assert controller.on_key("r")
        assert len(state.points) == 5
        assert all(state.bounds.contains(p.x, p.y) for p in state.points)
        assert state.colors.shape == (5, 4)
        assert len(state.current_diagram()) == 5

    def test_randomize_zero(self, state, output):
        state.random_count = 0
        controller = InputController(state, out=output)
        controller.on_click(10.0, 20.0)
        controller.on_key("r")
        assert state.current_diagram().is_empty

    def test_toggle_mode(self, controller, state):
        assert state.current_diagram().mode is RenderMode.FILLED
        assert controller.on_key("l")
        assert state.mode is RenderMode.WIREFRAME
        assert state.current_diagram().mode is RenderMode.WIREFRAME
        controller.on_key("L")
        assert state.mode is RenderMode.FILLED

    def test_recolor(self, controller, state):
        controller.on_click(10.0, 20.0)
        controller.on_click(150.0, 50.0)
        before = state.colors.copy()
        assert controller.on_key("c")
        assert state.colors.shape == (2, 4)
        assert not np.array_equal(before, state.colors)

    def test_dump(self, controller, state, output):
        state.points.replace([(1, 2), (3, 4)])
        assert not controller.on_key("s")
        assert output.getvalue() == "[[1,2],[3,4]]\n"

    def test_dump_preserves_click_order(self, controller, output):
        controller.on_click(50.0, 50.0)
        controller.on_click(10.0, 10.0)
        controller.on_key("S")
        assert output.getvalue().strip() == "[[50.0,50.0],[10.0,10.0]]"

    @pytest.mark.parametrize("key", [None, "", "x", "ctrl+s", "shift"])
    def test_unbound_keys(self, controller, state, key):
        assert not controller.on_key(key)
        assert len(state.points) == 0


class TestRandomCountValidation:
    """Test that a negative count never reaches the point set."""

    def test_negative_count_rejected_at_startup(self):
        with pytest.raises(ConfigError):
            load_settings(random_count=-3)
