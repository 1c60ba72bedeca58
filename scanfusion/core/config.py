"""
Configuration management for the ScanFusion platform.

This module provides centralized configuration management with support for
multiple sources (files, environment variables, defaults) and validation.
"""

import os
from typing import Dict, Any, Optional, List, Union
from pathlib import Path
import yaml
import json
from dataclasses import dataclass, field, asdict

from loguru import logger


ENV_PREFIX = "SCANFUSION_"


@dataclass
class AlignmentConfig:
    """Scanner alignment configuration."""
    overlap_threshold: int = 12
    max_passes: Optional[int] = None  # defaults to the number of scanners
    workers: int = 1
    reference_index: int = 0


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}"
    file_path: Optional[str] = None
    max_file_size: str = "10 MB"
    retention: str = "1 week"


@dataclass
class APIConfig:
    """API server configuration."""
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    max_report_lines: int = 100_000


class Config:
    """
    Main configuration class for ScanFusion.

    This class manages all configuration settings and provides methods
    to load from various sources with proper validation.
    """

    SECTIONS = ("alignment", "logging", "api")

    def __init__(
        self,
        alignment: Optional[AlignmentConfig] = None,
        logging: Optional[LoggingConfig] = None,
        api: Optional[APIConfig] = None,
        **kwargs
    ):
        """
        Initialize configuration.

        Args:
            alignment: Alignment engine configuration
            logging: Logging configuration
            api: API server configuration
            **kwargs: Additional configuration options
        """
        self.alignment = alignment or AlignmentConfig()
        self.logging = logging or LoggingConfig()
        self.api = api or APIConfig()

        self.environment = kwargs.get("environment", "development")
        self.debug = kwargs.get("debug", False)
        self.testing = kwargs.get("testing", False)

    @classmethod
    def load_from_file(cls, config_path: Union[str, Path]) -> "Config":
        """
        Load configuration from file.

        Args:
            config_path: Path to configuration file (YAML or JSON)

        Returns:
            Loaded configuration
        """
        config_path = Path(config_path)

        if not config_path.exists():
            logger.warning(f"Config file {config_path} not found, using defaults")
            return cls()

        logger.info(f"Loading configuration from {config_path}")

        with open(config_path, 'r') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                data = yaml.safe_load(f) or {}
            elif config_path.suffix.lower() == '.json':
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported config file format: {config_path.suffix}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """
        Create configuration from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Configuration object
        """
        alignment_config = AlignmentConfig(**data.get("alignment", {}))
        logging_config = LoggingConfig(**data.get("logging", {}))
        api_config = APIConfig(**data.get("api", {}))

        remaining_data = {k: v for k, v in data.items() if k not in cls.SECTIONS}

        return cls(
            alignment=alignment_config,
            logging=logging_config,
            api=api_config,
            **remaining_data
        )

    @classmethod
    def load_from_env(cls) -> "Config":
        """
        Load configuration from environment variables.

        Returns:
            Configuration loaded from environment
        """
        logger.info("Loading configuration from environment variables")
        config = cls()
        config.update_from_env()
        return config

    @classmethod
    def load_default(cls) -> "Config":
        """
        Load default configuration.

        Returns:
            Default configuration
        """
        config_files = [
            "scanfusion.yaml", "scanfusion.yml", "scanfusion.json",
        ]

        for config_file in config_files:
            if Path(config_file).exists():
                config = cls.load_from_file(config_file)
                # Override with environment variables
                config.update_from_env()
                return config

        return cls.load_from_env()

    def update_from_env(self) -> None:
        """Update configuration with environment variables."""
        # Alignment settings
        if os.getenv(ENV_PREFIX + "OVERLAP_THRESHOLD"):
            self.alignment.overlap_threshold = int(os.getenv(ENV_PREFIX + "OVERLAP_THRESHOLD"))
        if os.getenv(ENV_PREFIX + "MAX_PASSES"):
            self.alignment.max_passes = int(os.getenv(ENV_PREFIX + "MAX_PASSES"))
        if os.getenv(ENV_PREFIX + "WORKERS"):
            self.alignment.workers = int(os.getenv(ENV_PREFIX + "WORKERS"))

        # Logging settings
        if os.getenv(ENV_PREFIX + "LOG_LEVEL"):
            self.logging.level = os.getenv(ENV_PREFIX + "LOG_LEVEL").upper()
        if os.getenv(ENV_PREFIX + "LOG_FILE"):
            self.logging.file_path = os.getenv(ENV_PREFIX + "LOG_FILE")

        # API settings
        if os.getenv(ENV_PREFIX + "API_HOST"):
            self.api.host = os.getenv(ENV_PREFIX + "API_HOST")
        if os.getenv(ENV_PREFIX + "API_PORT"):
            self.api.port = int(os.getenv(ENV_PREFIX + "API_PORT"))

        # General settings
        if os.getenv(ENV_PREFIX + "ENVIRONMENT"):
            self.environment = os.getenv(ENV_PREFIX + "ENVIRONMENT")
        if os.getenv(ENV_PREFIX + "DEBUG"):
            self.debug = os.getenv(ENV_PREFIX + "DEBUG").lower() == "true"

    def save_to_file(self, config_path: Union[str, Path]) -> None:
        """
        Save configuration to file.

        Args:
            config_path: Path to save configuration file
        """
        config_path = Path(config_path)

        data = self.to_dict()

        with open(config_path, 'w') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                yaml.dump(data, f, default_flow_style=False)
            elif config_path.suffix.lower() == '.json':
                json.dump(data, f, indent=2)
            else:
                raise ValueError(f"Unsupported config file format: {config_path.suffix}")

        logger.info(f"Configuration saved to {config_path}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "alignment": asdict(self.alignment),
            "logging": asdict(self.logging),
            "api": asdict(self.api),
            "environment": self.environment,
            "debug": self.debug,
            "testing": self.testing,
        }

    def validate(self) -> bool:
        """
        Validate configuration settings.

        Returns:
            True if configuration is valid
        """
        errors = []

        if self.alignment.overlap_threshold < 1:
            errors.append(f"Invalid overlap threshold: {self.alignment.overlap_threshold}")
        if self.alignment.max_passes is not None and self.alignment.max_passes < 1:
            errors.append(f"Invalid pass budget: {self.alignment.max_passes}")
        if self.alignment.workers < 1:
            errors.append(f"Invalid worker count: {self.alignment.workers}")
        if self.alignment.reference_index < 0:
            errors.append(f"Invalid reference scanner: {self.alignment.reference_index}")

        if self.api.port < 1 or self.api.port > 65535:
            errors.append(f"Invalid API port: {self.api.port}")

        if self.logging.level.upper() not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            for error in errors:
                logger.error(f"Configuration validation error: {error}")
            return False

        return True

    def __repr__(self) -> str:
        return (
            f"Config(environment={self.environment}, "
            f"overlap_threshold={self.alignment.overlap_threshold})"
        )


class ConfigManager:
    """
    Configuration manager with caching and reloading capabilities.
    """

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> Config:
        """
        Load configuration with caching.

        Args:
            config_path: Optional path to configuration file

        Returns:
            Loaded configuration
        """
        if config_path:
            self._config_path = Path(config_path)
            self._config = Config.load_from_file(self._config_path)
        else:
            self._config = Config.load_default()

        if not self._config.validate():
            logger.warning("Configuration validation failed, but continuing with current settings")

        return self._config

    def get_config(self) -> Config:
        """Get current configuration, loading default if not loaded."""
        if self._config is None:
            self._config = Config.load_default()
        return self._config

    def reload_config(self) -> Config:
        """Reload configuration from source."""
        if self._config_path:
            self._config = Config.load_from_file(self._config_path)
        else:
            self._config = Config.load_default()

        logger.info("Configuration reloaded")
        return self._config

    def update_config(self, **kwargs) -> None:
        """
        Update configuration with new values.

        Args:
            **kwargs: Configuration updates
        """
        if self._config is None:
            self._config = Config.load_default()

        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
            else:
                logger.warning(f"Unknown configuration key: {key}")
