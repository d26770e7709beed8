"""Configuration file loading and management"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_THEMES: List[str] = ["Blue", "Green", "Orange"]
DEFAULT_URLS: List[str] = [
    "http://livingkitchen.local/rest/system/clock",
    "http://livingkitchen.local/rest/rgb/toggle",
]
DEFAULT_LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class BridgeConfig:
    """Glasses bridge acquisition settings"""
    backend: str  # "simulator" or "none"
    connect_timeout_ms: int
    acquire_delay_ms: int = 0
    reject_updates: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str
    file: Optional[str]
    format: str
    event_log: Optional[str] = None
    event_history_size: int = 200


@dataclass
class BaseAppConfig:
    """Base template app settings"""
    themes: List[str] = field(default_factory=lambda: list(DEFAULT_THEMES))


@dataclass
class RestApiConfig:
    """REST API app settings"""
    urls: List[str] = field(default_factory=lambda: list(DEFAULT_URLS))
    proxy_url: Optional[str] = None
    request_timeout_seconds: float = 10.0


@dataclass
class Config:
    """Complete application configuration"""
    bridge: BridgeConfig
    logging: LoggingConfig
    base_app: BaseAppConfig
    restapi: RestApiConfig


class ConfigLoader:
    """Loads and parses configuration from YAML files"""

    DEFAULT_CONFIG_PATHS = [
        "config.yml",
        "~/.config/web2glass/config.yml",
        "/etc/web2glass/config.yml",
    ]

    @staticmethod
    def configFile_find() -> Optional[Path]:
        """
        Find configuration file in standard locations

        Returns:
            Path to config file, or None if not found
        """
        for config_path in ConfigLoader.DEFAULT_CONFIG_PATHS:
            path = Path(config_path).expanduser().resolve()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If file does not exist
            yaml.YAMLError: If file is not valid YAML
        """
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> Config:
        """
        Parse configuration dictionary into Config object

        The `bridge` and `logging` sections are required; the per-app
        sections fall back to built-in defaults.

        Args:
            data: Raw configuration dictionary

        Returns:
            Parsed Config object

        Raises:
            KeyError: If required configuration keys are missing
            ValueError: If a value is out of range
        """
        bridge_data = data["bridge"]
        bridge = BridgeConfig(
            backend=bridge_data.get("backend", "simulator"),
            connect_timeout_ms=bridge_data["connect_timeout_ms"],
            acquire_delay_ms=bridge_data.get("acquire_delay_ms", 0),
            reject_updates=bridge_data.get("reject_updates", False),
        )
        if bridge.backend not in ("simulator", "none"):
            raise ValueError(f"Unsupported bridge backend '{bridge.backend}'. Supported: simulator, none.")
        if bridge.connect_timeout_ms <= 0:
            raise ValueError("bridge.connect_timeout_ms must be positive")

        logging_data = data["logging"]
        logging = LoggingConfig(
            level=logging_data["level"],
            file=logging_data.get("file"),
            format=logging_data.get("format", DEFAULT_LOG_FORMAT),
            event_log=logging_data.get("event_log"),
            event_history_size=logging_data.get("event_history_size", 200),
        )

        base_data = data.get("base_app") or {}
        base_app = BaseAppConfig(themes=list(base_data.get("themes", DEFAULT_THEMES)))
        if not base_app.themes:
            raise ValueError("base_app.themes must not be empty")

        restapi_data = data.get("restapi") or {}
        restapi = RestApiConfig(
            urls=list(restapi_data.get("urls", DEFAULT_URLS)),
            proxy_url=restapi_data.get("proxy_url"),
            request_timeout_seconds=restapi_data.get("request_timeout_seconds", 10.0),
        )

        return Config(
            bridge=bridge,
            logging=logging,
            base_app=base_app,
            restapi=restapi,
        )

    @staticmethod
    def config_load(file_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file

        Args:
            file_path: Optional path to config file. If None, searches standard locations.

        Returns:
            Parsed Config object

        Raises:
            FileNotFoundError: If config file not found
            ValueError: If config file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find()
            if file_path is None:
                raise FileNotFoundError(
                    f"Config file not found in standard locations: "
                    f"{ConfigLoader.DEFAULT_CONFIG_PATHS}"
                )

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)

    @staticmethod
    def configWithOverrides_load(
        file_path: Optional[Path] = None,
        **overrides: Any
    ) -> Config:
        """
        Load configuration and apply command-line overrides

        Args:
            file_path: Optional path to config file
            **overrides: Key-value pairs to override config values

        Returns:
            Config object with overrides applied

        Example:
            config = ConfigLoader.configWithOverrides_load(
                bridge_backend="none",
                connect_timeout_ms=500
            )
        """
        config = ConfigLoader.config_load(file_path)

        if overrides.get("bridge_backend") is not None:
            config.bridge.backend = overrides["bridge_backend"]
        if overrides.get("connect_timeout_ms") is not None:
            config.bridge.connect_timeout_ms = overrides["connect_timeout_ms"]
        if overrides.get("proxy_url") is not None:
            config.restapi.proxy_url = overrides["proxy_url"]

        return config
