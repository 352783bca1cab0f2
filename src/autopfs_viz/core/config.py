"""Configuration management for the dashboard.

Loads configuration from TOML file with sensible defaults.
Location: ~/.config/autopfs_viz/config.toml
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger


@dataclass
class ApiConfig:
    """Result fetch configuration."""
    base_url: str = "http://localhost:8080"
    timeout: Optional[float] = None  # None waits forever
    max_retries: int = 1
    retry_delay: float = 1.0


@dataclass
class StreamConfig:
    """Live status stream configuration."""
    reconnect_delay: float = 1.0
    open_timeout: Optional[float] = None


@dataclass
class UIConfig:
    """UI configuration."""
    default_sort_column: str = "Date"
    show_sort_markers: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_dir: Optional[str] = None


@dataclass
class Config:
    """Main configuration container."""
    api: ApiConfig = field(default_factory=ApiConfig)
    stream: StreamConfig = field(default_factory=StreamConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from TOML file or use defaults.

        Args:
            config_path: Path to config file. If None, uses default location.

        Returns:
            Config object
        """
        if config_path is None:
            config_path = cls.get_default_config_path()

        config = cls()

        # If config file doesn't exist, return defaults and create default file
        if not config_path.exists():
            logger.info(f"Config file not found at {config_path}, using defaults")
            cls._create_default_config(config_path)
            return config

        try:
            import tomllib  # Python 3.11+
        except ImportError:
            import tomli as tomllib

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)

            if "api" in data:
                config.api = ApiConfig(**data["api"])
            if "stream" in data:
                config.stream = StreamConfig(**data["stream"])
            if "ui" in data:
                config.ui = UIConfig(**data["ui"])
            if "logging" in data:
                config.logging = LoggingConfig(**data["logging"])

            logger.info(f"Loaded config from {config_path}")
            return config

        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Failed to load config from {config_path}: {e}")
            logger.info("Using default configuration")
            return cls()

    @staticmethod
    def get_default_config_path() -> Path:
        """Get default configuration file path.

        Returns:
            Path to ~/.config/autopfs_viz/config.toml
        """
        config_dir = Path.home() / ".config" / "autopfs_viz"
        return config_dir / "config.toml"

    @staticmethod
    def _create_default_config(config_path: Path) -> None:
        """Create default configuration file.

        Args:
            config_path: Path where to create config file
        """
        default_config = """# autopfs-viz configuration
# Location: ~/.config/autopfs_viz/config.toml

[api]
base_url = "http://localhost:8080"
# timeout = 30.0
max_retries = 1
retry_delay = 1.0

[stream]
reconnect_delay = 1.0
# open_timeout = 10.0

[ui]
default_sort_column = "Date"
show_sort_markers = true

[logging]
level = "INFO"
# log_dir = "~/.autopfs_viz/logs"
"""

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w") as f:
                f.write(default_config)
            logger.info(f"Created default config at {config_path}")
        except OSError as e:
            logger.error(f"Failed to create default config: {e}")
