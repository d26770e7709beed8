"""Application settings singleton - constants and loaded configuration

This module provides a singleton Settings class that consolidates:
1. Bridge protocol constants (event codes, layout limits)
2. Application constants (timeouts, preview lengths)
3. Runtime configuration from config.yml

Usage:
    from web2glass.common.settings import settings

    # Initialize once at startup with loaded config
    config = ConfigLoader.config_load()
    settings.initialize(config)

    # Use anywhere in the application
    label = url[: settings.LIST_LABEL_MAX_LENGTH]
"""

from typing import Optional

from web2glass.common.config import Config


class Settings:
    """Singleton settings manager combining config.yml and bridge constants

    Only configuration lives here. Application state is owned per app
    instance and is never placed on this object.
    """

    _instance: Optional["Settings"] = None

    def __new__(cls) -> "Settings":
        """Ensure only one Settings instance exists"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize settings singleton (only runs once)"""
        if hasattr(self, "_initialized") and self._initialized:
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

    def initialized_check(self) -> bool:
        """Check whether a configuration has been loaded"""
        return self._config is not None

    # =========================================================================
    # Bridge Constants
    # =========================================================================

    DEFAULT_CONNECT_TIMEOUT_MS: int = 4000
    """Budget for bridge acquisition before falling back to mock mode"""

    LIST_LABEL_MAX_LENGTH: int = 62
    """Longest list label the glasses list container shows untruncated

    Longer labels are cut to LIST_LABEL_MAX_LENGTH - 3 characters plus '...'.
    """

    EMPTY_LIST_LABEL: str = "No URL configured"
    """Placeholder row rendered when the URL list is empty"""

    # =========================================================================
    # REST API Constants
    # =========================================================================

    RESPONSE_PREVIEW_LENGTH: int = 200
    """Characters of response body kept for the event log preview"""

    GLASSES_PREVIEW_LENGTH: int = 96
    """Characters of compacted response preview shown on the glasses"""

    GLASSES_ERROR_LENGTH: int = 80
    """Characters of an error message shown on the glasses"""

    # =========================================================================
    # Runtime Configuration Access
    # =========================================================================

    @property
    def config(self) -> Config:
        """Get loaded configuration object"""
        if self._config is None:
            raise RuntimeError("Settings not initialized. Call settings.initialize(config) first.")
        return self._config


# Global singleton instance
settings = Settings()
"""Global settings singleton instance

Import this anywhere in the application:
    from web2glass.common.settings import settings
"""
