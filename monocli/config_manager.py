#!/usr/bin/env python3
"""
monocli/config_manager.py

Configuration Manager

Provides a class to manage user and monorepo configuration settings.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from monocli.constants import TEMPLATE_URL, USER_APP_DIR
from monocli.utils import load_json, merge_configs, save_json

logger = logging.getLogger(__name__)

ENV_OVERRIDES = {
    "MONO_LOG_LEVEL": "log_level",
    "MONO_LOG_FORMAT": "log_format",
}


class ConfigManager:
    CONFIG_FILE = USER_APP_DIR / "config.json"
    DEFAULT_CONFIG: Dict[str, Any] = {
        "log_level": "WARNING",
        "log_format": "default",
        "turbo_command": "pnpm turbo",
        "composer_command": "composer",
        "template_url": TEMPLATE_URL,
        "vendor": "mono-php",
        "env_file": ".env",
        "interactive": True,
    }

    def __init__(
        self,
        runtime_options: Optional[Dict[str, Any]] = None,
        root: Optional[Path] = None,
    ):
        self.root = root
        self.runtime_options = merge_configs(
            self.load_env_overrides(), runtime_options or {}
        )
        self.workspace_config = self.load_workspace_config()
        self.user_config = self.load_user_config()
        self._update_effective_config()

    def to_dict(self) -> Dict[str, Any]:
        """
        Returns the effective configuration dictionary.
        """
        return self.effective_config

    @staticmethod
    def load_env_overrides() -> Dict[str, Any]:
        return {
            key: os.environ[var] for var, key in ENV_OVERRIDES.items() if os.environ.get(var)
        }

    def load_user_config(self) -> Dict[str, Any]:
        """
        Loads the persistent user configuration.
        If the configuration file does not exist, creates it using DEFAULT_CONFIG.
        Also merges the loaded config with DEFAULT_CONFIG to ensure all keys exist.
        """
        if not self.CONFIG_FILE.exists():
            save_json(self.CONFIG_FILE, self.DEFAULT_CONFIG)
            logger.debug("Created configuration file at %s", self.CONFIG_FILE)
            return dict(self.DEFAULT_CONFIG)
        config = merge_configs(self.DEFAULT_CONFIG, load_json(self.CONFIG_FILE))
        logger.debug("Loaded configuration file at %s", self.CONFIG_FILE)
        return config

    def load_workspace_config(self) -> Dict[str, Any]:
        """
        Loads the "mono" section of the monorepo root package.json.
        Returns an empty dictionary if there is no root or no such section.
        """
        if self.root is None:
            return {}
        manifest = load_json(self.root / "package.json")
        workspace_config = manifest.get("mono", {})
        if not isinstance(workspace_config, dict):
            logger.warning("Ignoring non-object 'mono' section in %s", self.root / "package.json")
            return {}
        logger.debug("Loaded workspace configuration: %s", workspace_config)
        return workspace_config

    def _update_effective_config(self) -> None:
        self.effective_config = merge_configs(
            self.user_config, self.workspace_config, self.runtime_options
        )

    def _save_user_config(self) -> None:
        save_json(self.CONFIG_FILE, self.user_config)
        self._update_effective_config()

    def get_config_value(self, key: str, default: Any = None) -> Any:
        return self.effective_config.get(key, default)

    def set_config_value(self, key: str, value: Any) -> None:
        """
        Sets a single configuration value and persists the change.
        """
        self.user_config[key] = value
        self._save_user_config()
        logger.debug("Set config key '%s' to '%s'.", key, value)

    def update_config_from_list(self, options: List[str]) -> Dict[str, Any]:
        """
        Parses and updates configuration from a list of KEY=VALUE strings.
        Returns a dictionary of updated configuration options.
        Raises ValueError on parsing or validation errors.
        """
        updates = {}
        for option in options:
            if "=" not in option:
                raise ValueError(f"Invalid format: '{option}'. Expected KEY=VALUE.")
            key, value = option.split("=", 1)
            key = key.strip()
            value = value.strip()

            if key not in self.DEFAULT_CONFIG:
                valid_keys = ", ".join(f"'{k}'" for k in self.DEFAULT_CONFIG.keys())
                raise ValueError(f"Unknown configuration key: '{key}'. Valid keys are: {valid_keys}")

            default_val = self.DEFAULT_CONFIG[key]
            if isinstance(default_val, bool):
                value_lower = value.lower()
                if value_lower in ["true", "1", "yes"]:
                    value = True
                elif value_lower in ["false", "0", "no"]:
                    value = False
                else:
                    raise ValueError(f"Error converting value for '{key}': expected true/false.")
            elif isinstance(default_val, int):
                try:
                    value = int(value)
                except ValueError as e:
                    raise ValueError(f"Error converting value for '{key}': {e}") from e

            updates[key] = value

        for key, value in updates.items():
            self.set_config_value(key, value)
        return updates

    def reset(self) -> None:
        """
        Resets the user configuration to its default values.
        """
        self.user_config = self.DEFAULT_CONFIG.copy()
        self._save_user_config()
        logger.debug("Configuration reset to default values: %s", self.DEFAULT_CONFIG)
