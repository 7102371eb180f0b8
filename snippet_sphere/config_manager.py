"""Centralized Configuration Manager for the Snippet Sphere AI layer.

This module provides a singleton ConfigManager class to load and access
configuration from cfg/config.json with proper defaults and type hints.

Usage:
    from snippet_sphere.config_manager import ConfigManager

    # Get root config
    config = ConfigManager.load("cfg/config.json")

    # Get nested values with defaults
    exclude = ConfigManager.get("flows", "suggest_tags", "exclude_existing", default=True)

    # Get LLM settings for one flow
    llm_cfg = ConfigManager.get_llm_config("explainer")
"""

import json
import os
import logging
from typing import Any, Dict, Optional, List

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "cfg/config.json"


class ConfigManager:
    """Singleton configuration manager with hierarchical key access."""

    _instance: Optional['ConfigManager'] = None
    _config: Optional[Dict[str, Any]] = None
    _config_path: Optional[str] = None

    def __new__(cls) -> 'ConfigManager':
        """Implement singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
        """Load configuration from JSON file.

        Args:
            config_path: Path to configuration file. Defaults to cfg/config.json.

        Returns:
            Dictionary containing the entire configuration.

        Raises:
            FileNotFoundError: If configuration file does not exist.
            json.JSONDecodeError: If configuration file is invalid JSON.
        """
        if cls._config is not None and cls._config_path == config_path:
            logger.debug(f"Using cached configuration from {config_path}")
            return cls._config

        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                cls._config = json.load(f)
                cls._config_path = config_path
                logger.info(f"✅ Configuration loaded from {config_path}")
                return cls._config
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in configuration file: {e}")
            raise

    @classmethod
    def get(cls, *keys: str, default: Any = None) -> Any:
        """Get a configuration value using hierarchical keys.

        Args:
            *keys: Variable-length argument list of keys to traverse the config tree.
            default: Default value if key path is not found.

        Returns:
            The configuration value at the specified key path, or default if not found.

        Examples:
            >>> ConfigManager.get("llm_settings", "model_name")
            "gemini-2.0-flash"

            >>> ConfigManager.get("nonexistent", "key", default="fallback")
            "fallback"
        """
        if cls._config is None:
            cls.load()

        value = cls._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    logger.debug(f"Key path not found: {' -> '.join(keys)}. Using default: {default}")
                    return default
            else:
                logger.warning(f"Cannot traverse non-dict value at key: {key}")
                return default

        return value if value is not None else default

    @classmethod
    def get_section(cls, section: str) -> Dict[str, Any]:
        """Get an entire configuration section, or an empty dict if not found."""
        if cls._config is None:
            cls.load()

        return cls._config.get(section, {})

    @classmethod
    def validate_required_keys(cls, required_keys: List[str]) -> bool:
        """Validate that all required configuration keys exist.

        Args:
            required_keys: List of dot-separated key paths to validate.
                Example: ["llm_settings.model_name", "flows.suggest_tags"]

        Returns:
            True if all keys exist, False otherwise.
        """
        if cls._config is None:
            cls.load()

        missing_keys = []
        for key_path in required_keys:
            keys = key_path.split('.')
            if cls.get(*keys) is None:
                missing_keys.append(key_path)

        if missing_keys:
            logger.error(f"Missing required configuration keys: {missing_keys}")
            return False

        logger.debug("All required configuration keys are present")
        return True

    @classmethod
    def get_llm_config(cls, component: str = "default") -> Dict[str, Any]:
        """Get LLM configuration for a specific component.

        Component settings are layered over the general llm_settings, so a
        component only has to declare what it changes.

        Args:
            component: Component name (default, explainer, tagger, chat).

        Returns:
            Dictionary with LLM configuration for the specified component.
        """
        base = {k: v for k, v in cls.get_section("llm_settings").items() if k != "components"}
        if component == "default":
            return base

        component_config = cls.get("llm_settings", "components", component)
        if component_config:
            return {**base, **component_config}

        logger.warning(f"No component-specific config for '{component}', using default")
        return base

    @classmethod
    def get_flow_config(cls, flow: str) -> Dict[str, Any]:
        """Get the options block for one flow (explain_code, suggest_tags, general_chat)."""
        flow_config = cls.get("flows", flow)
        return flow_config if flow_config else {}

    @classmethod
    def get_prompt(cls, prompt_type: str, default: str = "") -> str:
        """Get a prompt override by type (e.g. chat_system)."""
        return cls.get("prompts", prompt_type, default=default)
