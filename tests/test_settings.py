"""
Tests for Configuration Validation

Tests for validate_settings() and get_config_summary().
"""

import sys
import os

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import validators
from utils.exceptions import ConfigurationError


class TestValidateSettings:
    """Tests for settings validation."""

    def test_valid_settings(self, test_settings):
        assert validators.validate_settings() is True

    def test_settings_module_delegates(self, test_settings):
        assert test_settings.validate_settings() is True

    def test_missing_content_dir(self, test_settings):
        test_settings.CONTENT_DIR = ""

        with pytest.raises(ConfigurationError) as exc:
            validators.validate_settings()

        assert "CONTENT_DIR" in str(exc.value)

    def test_no_extensions(self, test_settings):
        test_settings.CONTENT_EXTENSIONS = []

        with pytest.raises(ConfigurationError):
            validators.validate_settings()

    def test_collects_every_error(self, test_settings):
        test_settings.SCAN_WORKERS = 0
        test_settings.LINK_CHECK_TIMEOUT = -1

        with pytest.raises(ConfigurationError) as exc:
            validators.validate_settings()

        assert "SCAN_WORKERS" in str(exc.value)
        assert "LINK_CHECK_TIMEOUT" in str(exc.value)

    def test_show_drafts_logs_warning(self, test_settings, capture_logs):
        test_settings.SHOW_DRAFTS = True

        validators.validate_settings()

        assert any("SHOW_DRAFTS" in r.getMessage() for r in capture_logs)


class TestConfigSummary:
    """Tests for the configuration summary."""

    def test_summary_contents(self, test_settings):
        summary = validators.get_config_summary()

        assert summary["content"]["directory"] == test_settings.CONTENT_DIR
        assert summary["content"]["extensions"] == [".md", ".mdx"]
        assert summary["link_check"]["workers"] == 2
