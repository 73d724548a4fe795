"""Tests for config.py coverage"""
import pytest
from pathlib import Path
from unittest.mock import patch, mock_open
import yaml

from gender_analyzer import config
from gender_analyzer.config import (
    get_api_key,
    get_setting,
    load_settings,
    save_settings,
)


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_file_not_found_error(self):
        with patch.object(Path, 'exists', return_value=False):
            with pytest.raises(FileNotFoundError, match="Settings file not found"):
                load_settings()

    def test_empty_settings_error(self):
        with patch.object(Path, 'exists', return_value=True):
            with patch("builtins.open", mock_open(read_data="")):
                with pytest.raises(ValueError, match="Settings file .* is empty or invalid"):
                    load_settings()

    def test_successful_load(self):
        test_settings = {
            "pipeline": {"delay_seconds": 0.1},
            "providers": {"openrouter": {"model": "openai/gpt-4o-mini"}},
        }

        with patch.object(Path, 'exists', return_value=True):
            with patch("builtins.open", mock_open(read_data=yaml.dump(test_settings))):
                assert load_settings() == test_settings

    def test_packaged_settings_match_defaults(self):
        settings = load_settings(config.PACKAGE_DIR / "settings.yaml")

        assert get_setting(settings, "pipeline", "delay_seconds") == config.DEFAULT_DELAY_SECONDS
        assert get_setting(settings, "pipeline", "reanalysis_delay_seconds") == config.DEFAULT_REANALYSIS_DELAY_SECONDS
        assert get_setting(settings, "pipeline", "low_confidence_threshold") == config.LOW_CONFIDENCE_THRESHOLD
        assert settings["providers"]["openrouter"]["model"] == config.OPENROUTER_DEFAULT_MODEL
        assert settings["providers"]["perplexity"]["endpoint"] == config.PERPLEXITY_ENDPOINT


class TestSaveSettings:
    """Tests for save_settings function."""

    @patch('pathlib.Path.mkdir')
    @patch('builtins.open', new_callable=mock_open)
    def test_save_settings_creates_directory(self, mock_file, mock_mkdir):
        test_settings = {"http": {"timeout_seconds": 5}}

        save_settings(test_settings)

        mock_mkdir.assert_called_once_with(parents=True, exist_ok=True)
        mock_file.assert_called_once()

        handle = mock_file()
        written_data = ''.join(call.args[0] for call in handle.write.call_args_list)
        assert yaml.safe_load(written_data) == test_settings

    def test_round_trip_to_custom_path(self, tmp_path):
        path = tmp_path / "nested" / "settings.yaml"
        save_settings({"pipeline": {"delay_seconds": 0}}, path)

        assert load_settings(path) == {"pipeline": {"delay_seconds": 0}}


class TestGetSetting:
    """Tests for get_setting helper."""

    def test_returns_value(self):
        assert get_setting({"http": {"timeout_seconds": 3}}, "http", "timeout_seconds", 15) == 3

    def test_missing_section_uses_default(self):
        assert get_setting({}, "http", "timeout_seconds", 15) == 15

    def test_null_value_uses_default(self):
        assert get_setting({"http": {"timeout_seconds": None}}, "http", "timeout_seconds", 15) == 15


class TestGetApiKey:
    """Tests for reading credentials from the environment."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
        assert get_api_key("openrouter") == "sk-test"

    def test_blank_is_none(self, monkeypatch):
        monkeypatch.setenv("PERPLEXITY_API_KEY", "   ")
        assert get_api_key("perplexity") is None

    def test_unknown_provider(self):
        assert get_api_key("simple") is None
