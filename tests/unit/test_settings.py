"""Unit tests for settings singleton"""

import pytest
from dataclasses import replace

from web2glass.common.settings import Settings, settings


class TestSettingsSingleton:
    """Test Settings singleton pattern"""

    def test_singleton_same_instance(self, reset_settings):
        """Test that Settings() returns same instance"""
        s1 = Settings()
        s2 = Settings()
        assert s1 is s2

    def test_global_settings_is_singleton(self, reset_settings):
        """Test that global 'settings' is the singleton"""
        s = Settings()
        assert settings is s


class TestSettingsConstants:
    """Test that all constants are accessible"""

    def test_bridge_constants(self):
        """Test bridge constants exist and have correct values"""
        assert settings.DEFAULT_CONNECT_TIMEOUT_MS == 4000
        assert settings.LIST_LABEL_MAX_LENGTH == 62
        assert settings.EMPTY_LIST_LABEL == "No URL configured"

    def test_restapi_constants(self):
        """Test REST API preview constants exist"""
        assert settings.RESPONSE_PREVIEW_LENGTH == 200
        assert settings.GLASSES_PREVIEW_LENGTH == 96
        assert settings.GLASSES_ERROR_LENGTH == 80


class TestSettingsInitialization:
    """Test settings initialization with config"""

    def test_initialize_with_config(self, reset_settings, sample_config):
        """Test settings can be initialized with config"""
        settings.initialize(sample_config)

        assert settings.initialized_check() is True
        assert settings.config is sample_config

    def test_config_property_before_init_raises(self, reset_settings):
        """Test accessing config before initialization raises error"""
        assert settings.initialized_check() is False
        with pytest.raises(RuntimeError, match="Settings not initialized"):
            _ = settings.config

    def test_initialize_multiple_times(self, reset_settings, sample_config):
        """Test that initialize can be called multiple times"""
        settings.initialize(sample_config)
        config1 = settings.config

        different_config = replace(sample_config, restapi=replace(sample_config.restapi, urls=[]))

        settings.initialize(different_config)
        config2 = settings.config

        assert config2 is different_config
        assert config2 is not config1


class TestSettingsDocumentation:
    """Test that constants have docstrings"""

    def test_class_docstring(self):
        """Test the singleton is documented"""
        assert Settings.__doc__ is not None
        assert "singleton" in Settings.__doc__.lower()
