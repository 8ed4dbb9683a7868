"""Tests for configuration loading."""

import json

import pytest

from padel.config import CONFIG_FILE, DATA_DIR_ENV, clear_config_cache, default_data_dir, get_config


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_config_cache()
    yield
    clear_config_cache()


class TestGetConfig:
    """Tests for reading tracker_config.json."""

    def test_defaults_without_file(self, tmp_path):
        """Test the defaults when the data directory has no config file."""
        config = get_config(tmp_path)
        assert config.export_dir == 'exports'
        assert config.log_dir == 'logs'
        assert config.unknown_player_label == '?'

    def test_values_from_file(self, tmp_path):
        """Test that file values override the defaults."""
        (tmp_path / CONFIG_FILE).write_text(
            json.dumps({'export_dir': 'reports', 'unknown_player_label': '(deleted)'}),
            encoding='utf-8',
        )
        config = get_config(tmp_path)
        assert config.export_dir == 'reports'
        assert config.unknown_player_label == '(deleted)'

    def test_unknown_field_falls_back_to_defaults(self, tmp_path):
        """Test that a file naming a field the config doesn't have is ignored."""
        (tmp_path / CONFIG_FILE).write_text(
            json.dumps({'data_dir': 'elsewhere', 'export_dir': 'reports'}),
            encoding='utf-8',
        )
        config = get_config(tmp_path)
        assert config.export_dir == 'exports'
        assert not hasattr(config, 'data_dir')

    def test_cached_until_cleared(self, tmp_path):
        """Test that a changed file is only seen after clearing the cache."""
        first = get_config(tmp_path)
        (tmp_path / CONFIG_FILE).write_text(json.dumps({'log_dir': 'audit'}), encoding='utf-8')
        assert get_config(tmp_path) is first
        clear_config_cache()
        assert get_config(tmp_path).log_dir == 'audit'


class TestDataDir:
    """Tests for choosing the data directory."""

    def test_default(self, monkeypatch):
        """Test ./data when the environment doesn't set one."""
        monkeypatch.delenv(DATA_DIR_ENV, raising=False)
        assert str(default_data_dir()) == 'data'

    def test_from_environment(self, monkeypatch, tmp_path):
        """Test the environment variable."""
        monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
        assert default_data_dir() == tmp_path
