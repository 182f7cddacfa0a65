"""Unit tests for settings singleton"""

import pytest

from overlayremote.common.settings import Settings, settings


class TestSettingsSingleton:
    """Test Settings singleton pattern"""

    def test_singleton_same_instance(self, reset_settings):
        s1 = Settings()
        s2 = Settings()
        assert s1 is s2

    def test_global_settings_is_singleton(self, reset_settings):
        assert settings is Settings()


class TestSettingsConstants:
    """Test that constants are accessible"""

    def test_layout_constants(self):
        assert settings.DEFAULT_TOLERANCE_PX == 30.0

    def test_host_constants(self):
        assert settings.DEFAULT_START_DELAY_SEC == 10.0
        assert settings.EVENT_SELECT_TIMEOUT_SEC == 0.1

    def test_output_constants(self):
        assert settings.UINPUT_DEVICE_NODE == "/dev/uinput"
        assert settings.DEFAULT_VOLUME_STEP_PERCENT == 5


class TestSettingsInitialization:
    """Test settings initialization with config"""

    def test_initialize_with_config(self, reset_settings, sample_config):
        settings.initialize(sample_config)
        assert settings.config is sample_config

    def test_config_property_before_init_raises(self, reset_settings):
        with pytest.raises(RuntimeError, match="Settings not initialized"):
            _ = settings.config
