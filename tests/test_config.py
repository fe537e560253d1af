"""Tests for settings loading."""

import pytest
from pathlib import Path
from interactive_voronoi.config import (
    DEFAULT_RANDOM_COUNT, DEFAULT_WINDOW_HEIGHT, DEFAULT_WINDOW_WIDTH, load_settings
)
from interactive_voronoi.errors import ConfigError


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the developer's environment and .env out of the tests."""
    monkeypatch.chdir(tmp_path)
    for name in ("WIDTH", "HEIGHT", "LINES_ONLY", "RANDOM_COUNT", "JSON_PATH", "SEED"):
        monkeypatch.delenv(f"INTERACTIVE_VORONOI_{name}", raising=False)


class TestSettings:
    """Test defaults, overrides and validation."""

    def test_defaults(self):
        settings = load_settings()
        assert settings.width == DEFAULT_WINDOW_WIDTH == 1280
        assert settings.height == DEFAULT_WINDOW_HEIGHT == 720
        assert settings.random_count == DEFAULT_RANDOM_COUNT == 50
        assert settings.lines_only is False
        assert settings.json_path is None
        assert settings.seed is None

    def test_overrides(self):
        settings = load_settings(random_count=5, lines_only=True, json_path="dots.json")
        assert settings.random_count == 5
        assert settings.lines_only is True
        assert settings.json_path == Path("dots.json")

    def test_none_overrides_ignored(self, monkeypatch):
        monkeypatch.setenv("INTERACTIVE_VORONOI_RANDOM_COUNT", "7")
        assert load_settings(random_count=None).random_count == 7

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("INTERACTIVE_VORONOI_LINES_ONLY", "true")
        monkeypatch.setenv("INTERACTIVE_VORONOI_WIDTH", "640")
        settings = load_settings()
        assert settings.lines_only is True
        assert settings.width == 640

    def test_explicit_beats_environment(self, monkeypatch):
        monkeypatch.setenv("INTERACTIVE_VORONOI_RANDOM_COUNT", "7")
        assert load_settings(random_count=3).random_count == 3

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("INTERACTIVE_VORONOI_SEED=99\n")
        assert load_settings().seed == 99

    def test_log_level_case_insensitive(self):
        assert load_settings(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize("overrides", [
        {"random_count": -1},
        {"width": 0},
        {"height": -10},
        {"random_count": "many"},
        {"log_level": "LOUD"},
        {"log_format": "xml"},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigError):
            load_settings(**overrides)
