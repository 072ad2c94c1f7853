"""Tests for configuration system."""

import pytest
from pydantic import ValidationError

from allyhub.utils.config import Config, get_config, load_config, reset_config, set_config


def test_config_defaults():
    """Test that config has sensible defaults."""
    config = Config()

    assert config.timer.total_duration_seconds == 3600
    assert config.timer.tick_interval_seconds == 1.0
    assert config.tasks.seed_titles == ["Email triage", "Spec doc review", "Prototype create", "Break"]
    assert config.notifications.enabled is True
    assert config.notifications.on_timer_completed is True


def test_config_from_dict():
    """Test creating config from dictionary."""
    config = Config(
        timer={"total_duration_seconds": 1500},
        tasks={"seed_titles": ["Focus", "Rest"]},
    )

    assert config.timer.total_duration_seconds == 1500
    assert config.tasks.seed_titles == ["Focus", "Rest"]


def test_load_config_nonexistent_file(tmp_path):
    """Test loading config when file doesn't exist returns defaults."""
    config = load_config(tmp_path / "nonexistent.yaml")

    assert isinstance(config, Config)
    assert config.timer.total_duration_seconds == 3600


def test_load_config_from_yaml(tmp_path):
    """Test loading config from YAML file."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
timer:
  total_duration_seconds: 1500
  tick_interval_seconds: 0.5

tasks:
  seed_titles:
    - Write
    - Review

notifications:
  sound: false
"""
    )

    config = load_config(config_path)

    assert config.timer.total_duration_seconds == 1500
    assert config.timer.tick_interval_seconds == 0.5
    assert config.tasks.seed_titles == ["Write", "Review"]
    assert config.notifications.sound is False
    assert config.notifications.enabled is True


def test_load_empty_yaml(tmp_path):
    """Test that an empty file yields defaults."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("")

    assert load_config(config_path).timer.total_duration_seconds == 3600


def test_config_validation():
    """Test that config validation works."""
    with pytest.raises(ValidationError):
        Config(timer={"total_duration_seconds": 0})

    with pytest.raises(ValidationError):
        Config(timer={"tick_interval_seconds": -1})

    with pytest.raises(ValidationError):
        Config(tasks={"seed_titles": ["ok", "   "]})


def test_seed_titles_are_stripped():
    config = Config(tasks={"seed_titles": ["  Focus  "]})
    assert config.tasks.seed_titles == ["Focus"]


def test_env_override(monkeypatch):
    """Test nested environment variables."""
    monkeypatch.setenv("ALLYHUB_TIMER__TOTAL_DURATION_SECONDS", "900")

    assert Config().timer.total_duration_seconds == 900


def test_global_config(tmp_path, monkeypatch):
    """Test the lazily loaded global instance."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("timer:\n  total_duration_seconds: 60\n")

    assert get_config().timer.total_duration_seconds == 60
    assert get_config() is get_config()

    custom = Config(timer={"total_duration_seconds": 30})
    set_config(custom)
    assert get_config() is custom

    reset_config()
    assert get_config().timer.total_duration_seconds == 60
