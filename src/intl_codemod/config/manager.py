"""Configuration manager for intl-codemod.

This module provides functionality for loading and validating YAML
configuration files with Pydantic model validation.
"""

import logging
from pathlib import Path

import yaml

from ..utils.core.exceptions import ConfigurationError
from .schema import CodemodConfig


logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Configuration manager for handling YAML config files with Pydantic validation.
    """

    @staticmethod
    def load_config(config_path: Path) -> CodemodConfig:
        """
        Load and validate configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            CodemodConfig: Validated configuration object

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ConfigurationError: If the YAML syntax is invalid or not a mapping
            ValidationError: If the configuration fails Pydantic validation
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML syntax in {config_path}: {e}", context=config_path
            ) from e

        if raw_config_data is None:
            config_data: dict[str, object] = {}
        elif isinstance(raw_config_data, dict):
            config_data = raw_config_data  # pyright: ignore[reportUnknownVariableType]
        else:
            raise ConfigurationError(
                f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}",
                context=config_path,
            )

        config = CodemodConfig.model_validate(config_data)
        logger.debug(f"Loaded configuration from {config_path}")
        return config

    @staticmethod
    def get_default_config() -> CodemodConfig:
        """
        Get a configuration object with default values.

        Returns:
            CodemodConfig: Configuration with default values
        """
        return CodemodConfig()

    @staticmethod
    def load_or_default(config_path: Path | None) -> CodemodConfig:
        """
        Load configuration from ``config_path`` or fall back to defaults.

        Args:
            config_path: Optional path to a YAML configuration file

        Returns:
            CodemodConfig: Loaded or default configuration
        """
        if config_path is None:
            return ConfigManager.get_default_config()
        return ConfigManager.load_config(config_path)
