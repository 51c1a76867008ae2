"""Configuration loading tests."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from template_canvas.configs.base_config import Config, CanvasConfig, ZoomConfig, load_config

REPO_ROOT = Path(__file__).resolve().parents[2]


class TestConfig:

    def test_defaults_match_page_constants(self):
        config = Config()
        assert (config.canvas.page_width, config.canvas.page_height) == (612, 792)
        assert (config.canvas.min_width, config.canvas.min_height) == (100, 40)
        assert (config.zoom.min_zoom, config.zoom.max_zoom, config.zoom.step) == (0.3, 3.0, 0.1)
        assert config.export.filename == "template.json"

    def test_shipped_yaml_matches_defaults(self):
        assert load_config(REPO_ROOT / "configs" / "default_config.yaml") == Config()

    def test_partial_yaml_keeps_other_defaults(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("canvas:\n  duplicate_offset: 10\n")
        config = load_config(path)
        assert config.canvas.duplicate_offset == 10
        assert config.canvas.page_width == 612

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_minimum_must_fit_page(self):
        with pytest.raises(ValidationError):
            CanvasConfig(page_width=50)

    def test_zoom_default_must_be_in_range(self):
        with pytest.raises(ValidationError):
            ZoomConfig(default=5.0)
