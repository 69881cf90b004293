"""Tests for configuration loading."""

import pytest

from config import CONFIG_FILENAME, ExportSettings, load_settings, settings_from_dict
from fragments.errors import ConfigError
from scanner.discovery import DEFAULT_EXCLUDE_DIRS, DEFAULT_EXTENSIONS


class TestLoadSettings:
    """Tests for reading .fragexport.yml."""
    
    def test_defaults_without_file(self, tmp_path):
        """Test that a missing config file yields defaults."""
        settings = load_settings(tmp_path)
        
        assert settings.extensions == DEFAULT_EXTENSIONS
        assert settings.exclude_dirs == DEFAULT_EXCLUDE_DIRS
        assert settings.max_depth is None
        assert settings.on_parse_error == "fail"
        assert settings.duplicates == "warn"
        assert not settings.skip_invalid
    
    def test_reads_root_config(self, tmp_path):
        """Test that the root config file is picked up."""
        (tmp_path / CONFIG_FILENAME).write_text(
            "extensions: [graphql, .GQL]\n"
            "exclude_dirs: generated\n"
            "max_depth: 3\n"
            "on_parse_error: skip\n"
            "duplicates: error\n"
            "unknown_key: ignored\n",
            encoding="utf-8",
        )
        
        settings = load_settings(tmp_path)
        
        assert settings.extensions == {".graphql", ".gql"}
        assert "generated" in settings.exclude_dirs
        assert ".git" in settings.exclude_dirs
        assert settings.max_depth == 3
        assert settings.skip_invalid
        assert settings.duplicates == "error"
    
    def test_empty_file(self, tmp_path):
        """Test that an empty config file yields defaults."""
        (tmp_path / CONFIG_FILENAME).write_text("\n", encoding="utf-8")
        
        assert load_settings(tmp_path) == ExportSettings()
    
    def test_explicit_path_must_exist(self, tmp_path):
        """Test that a missing explicit config is an error."""
        with pytest.raises(ConfigError):
            load_settings(tmp_path, tmp_path / "missing.yml")
    
    def test_invalid_yaml(self, tmp_path):
        """Test that malformed YAML raises ConfigError."""
        config = tmp_path / "custom.yml"
        config.write_text("extensions: [.graphql\n", encoding="utf-8")
        
        with pytest.raises(ConfigError) as excinfo:
            load_settings(tmp_path, config)
        
        assert "custom.yml" in str(excinfo.value)
    
    def test_root_must_be_mapping(self, tmp_path):
        """Test that a list at the root is rejected."""
        (tmp_path / CONFIG_FILENAME).write_text("- .graphql\n", encoding="utf-8")
        
        with pytest.raises(ConfigError):
            load_settings(tmp_path)


class TestSettingsFromDict:
    """Tests for validating config values."""
    
    @pytest.mark.parametrize("data", [
        {"max_depth": -1},
        {"max_depth": "3"},
        {"max_depth": True},
        {"on_parse_error": "ignore"},
        {"duplicates": "fail"},
        {"extensions": [1, 2]},
    ])
    def test_invalid_values(self, data):
        """Test that wrong types or values raise ConfigError."""
        with pytest.raises(ConfigError):
            settings_from_dict(data)
