"""Tests for application config models and loading."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError
import pytest

from calface.core.config.loader import (
    LOG_LEVEL_ENV,
    detect_format,
    load_app_config,
    load_config,
)
from calface.core.config.models import AppConfig, DialConfig, LayoutConfig, LoggingConfig
from calface.core.layout.constraint import DEFAULT_MAX_LEVEL
from calface.core.layout.orchestrator import SolverFailurePolicy


class TestAppConfigDefaults:
    """Test default values."""

    def test_defaults(self):
        config = AppConfig()
        assert config.logging.level == "INFO"
        assert config.layout.max_level == DEFAULT_MAX_LEVEL
        assert config.layout.on_solver_failure is SolverFailurePolicy.GREEDY
        assert config.refresh.check_interval_s == 60.0
        assert config.dial.ring_width == pytest.approx(0.7)

    def test_unknown_top_level_keys_ignored(self):
        config = AppConfig.model_validate({"future_section": {"x": 1}})
        assert config == AppConfig()


class TestConfigValidation:
    """Test field validation."""

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")

    def test_max_level_must_be_positive(self):
        with pytest.raises(ValidationError):
            LayoutConfig(max_level=0)

    def test_failure_policy_from_string(self):
        assert LayoutConfig(on_solver_failure="empty").on_solver_failure is SolverFailurePolicy.EMPTY

    def test_ring_must_have_width(self):
        with pytest.raises(ValidationError):
            DialConfig(ring_min_radius=0.6, ring_max_radius=0.5)


class TestDetectFormat:
    """Test config format detection."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("a.json", "json"), ("a.yaml", "yaml"), ("a.YML", "yaml")],
    )
    def test_known_formats(self, name, expected):
        assert detect_format(name) == expected

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported config format"):
            detect_format("calface.toml")


class TestLoadConfig:
    """Test raw config loading."""

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_empty_yaml_is_empty_mapping(self, tmp_path: Path):
        path = tmp_path / "calface.yaml"
        path.write_text("")
        assert load_config(path) == {}

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "calface.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_config(path)

    def test_non_mapping_root(self, tmp_path: Path):
        path = tmp_path / "calface.yaml"
        path.write_text("- one\n- two\n")
        with pytest.raises(ValueError, match="must be a mapping"):
            load_config(path)


class TestLoadAppConfig:
    """Test validated app config loading."""

    def test_yaml(self, tmp_path: Path):
        path = tmp_path / "calface.yaml"
        path.write_text(
            "layout:\n"
            "  max_level: 500\n"
            "  on_solver_failure: empty\n"
            "refresh:\n"
            "  check_interval_s: 5\n"
        )
        config = load_app_config(path)
        assert config.layout.max_level == 500
        assert config.layout.on_solver_failure is SolverFailurePolicy.EMPTY
        assert config.refresh.check_interval_s == 5.0

    def test_json(self, tmp_path: Path):
        path = tmp_path / "calface.json"
        path.write_text(json.dumps({"dial": {"ring_min_radius": 0.3, "ring_max_radius": 0.8}}))
        config = load_app_config(path)
        assert config.dial.ring_width == pytest.approx(0.5)

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        assert load_app_config(tmp_path / "absent.yaml") == AppConfig()

    def test_invalid_values_raise(self, tmp_path: Path):
        path = tmp_path / "calface.yaml"
        path.write_text("layout:\n  max_level: -3\n")
        with pytest.raises(ValidationError):
            load_app_config(path)

    def test_env_overrides_log_level(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
        config = load_app_config(tmp_path / "absent.yaml")
        assert config.logging.level == "DEBUG"

    def test_invalid_env_log_level(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "chatty")
        with pytest.raises(ValidationError):
            load_app_config(tmp_path / "absent.yaml")
