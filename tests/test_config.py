"""Tests for configuration loading."""

import os

import pytest

from course_planner.config import Config, load_config
from course_planner.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("CPL_"):
            monkeypatch.delenv(key)


class TestDefaults:
    def test_defaults(self):
        config = Config()
        assert config.probe.ffprobe_path == "ffprobe"
        assert config.probe.max_workers is None
        assert "mp4" in config.videos.extensions and "m4v" in config.videos.extensions
        assert config.layout.slides_dir == "_02_SLIDES"
        assert config.logging.level == "INFO"


class TestLoadConfig:
    def test_yaml_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "probe:\n"
            "  ffprobe_path: /usr/local/bin/ffprobe\n"
            "  max_workers: 4\n"
            "videos:\n"
            "  extensions: [mp4, webm]\n"
            "unknown_section:\n"
            "  ignored: true\n"
        )
        config = load_config(str(path))
        assert config.probe.ffprobe_path == "/usr/local/bin/ffprobe"
        assert config.probe.max_workers == 4
        assert config.probe.timeout_seconds == 60.0
        assert config.videos.extensions == ["mp4", "webm"]

    def test_config_yaml_found_in_working_directory(self, tmp_path):
        (tmp_path / "config.yaml").write_text("logging:\n  level: WARNING\n")
        assert load_config().logging.level == "WARNING"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CPL_PROBE__TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("CPL_PROBE__MAX_WORKERS", "8")
        monkeypatch.setenv("CPL_VIDEOS__EXTENSIONS", "mp4, mov")
        monkeypatch.setenv("CPL_LOGGING__JSON_FORMAT", "true")
        config = load_config()
        assert config.probe.timeout_seconds == 2.5
        assert config.probe.max_workers == 8
        assert config.videos.extensions == ["mp4", "mov"]
        assert config.logging.json_format is True

    def test_env_beats_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: WARNING\n")
        monkeypatch.setenv("CPL_LOGGING__LEVEL", "DEBUG")
        assert load_config(str(path)).logging.level == "DEBUG"

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("CPL_PROBE__TIMEOUT_SECONDS", "soon")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config()
        assert exc_info.value.config_key == "CPL_PROBE__TIMEOUT_SECONDS"

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("probe: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_yaml_must_be_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))
