"""Application settings singleton - single source of truth for configuration

This module provides a singleton Settings class that consolidates:
1. Application constants (timing, defaults, device nodes)
2. Runtime configuration from config.yml

Usage:
    from overlayremote.common.settings import settings

    # Initialize once at startup with loaded config
    config = ConfigLoader.config_load()
    settings.initialize(config)

    # Use anywhere in the application
    tolerance = settings.config.layout.tolerance_px
    rlist = select.select(devices, [], [], settings.EVENT_SELECT_TIMEOUT_SEC)
"""

from typing import Optional

from overlayremote.common import config as config_module
from overlayremote.common.config import Config


class Settings:
    """Singleton settings manager combining config.yml and application constants"""

    _instance: Optional["Settings"] = None

    def __new__(cls) -> "Settings":
        """Ensure only one Settings instance exists"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize settings singleton (only runs once)"""
        if hasattr(self, "_initialized"):
            return
        self._initialized = True
        self._config: Optional[Config] = None

    def initialize(self, config: Config) -> None:
        """
        Initialize with loaded configuration

        Args:
            config: Loaded configuration.
        """
        self._config = config

    # =========================================================================
    # Layout Constants
    # =========================================================================

    DEFAULT_TOLERANCE_PX: float = config_module.DEFAULT_TOLERANCE_PX
    """Default per-axis hit-test slack in pixels

    A press counts as a hit when both |dx| and |dy| are strictly below this.
    """

    # =========================================================================
    # Host Constants
    # =========================================================================

    DEFAULT_START_DELAY_SEC: float = config_module.DEFAULT_START_DELAY_SEC
    """Delay before the overlay engine starts accepting presses (seconds)"""

    EVENT_SELECT_TIMEOUT_SEC: float = 0.1
    """select() timeout while waiting for device input (seconds)

    Bounds how long the event loop can go without checking the stop flag.
    """

    # =========================================================================
    # Output Constants
    # =========================================================================

    UINPUT_DEVICE_NODE: str = "/dev/uinput"
    """Device node used to create the virtual media keyboard"""

    UINPUT_DEVICE_NAME: str = "overlayremote-virtual-keyboard"

    DEFAULT_VOLUME_STEP_PERCENT: int = config_module.DEFAULT_VOLUME_STEP_PERCENT
    """Volume change per press when using pactl"""

    # =========================================================================
    # Runtime Configuration Access
    # =========================================================================

    @property
    def config(self) -> Config:
        """
        Get loaded configuration object

        Raises:
            RuntimeError: If initialize() was not called
        """
        if self._config is None:
            raise RuntimeError("Settings not initialized. Call settings.initialize(config) first.")
        return self._config


# Global singleton instance
settings = Settings()
"""Global settings singleton instance

Import this anywhere in the application:
    from overlayremote.common.settings import settings
"""
