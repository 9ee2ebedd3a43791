"""
Minimal Configuration Reader for EQ Log Tools

A lightweight configuration system for the EQ log tools that provides:
- Profile-based configuration management
- JSON-based configuration storage with read-only access
- Built-in defaults that every profile is merged over
- Hierarchical configuration with dot-notation access
- Automatic path resolution for file paths

Usage:
    from config import Config
    config = Config(profile='raid_night')
    delimiter = config.get('export.delimiter')

Settings are resolved in this order (later overrides earlier):
1. Built-in defaults (Config.DEFAULT_SETTINGS)
2. Profile file (profiles/<profile>.json)
"""

import copy
from typing import Dict, Any, List, Optional
from pathlib import Path

from eqlog_tools.base import JSONTool, logger


class Config(JSONTool):
    """
    A minimal JSON-based configuration reader for the EQ log tools.

    Attributes:
        config_dir (str): Directory containing profile JSON files
        profile (str): Currently active profile name
        data (dict): Loaded configuration data
    """

    DEFAULT_CONFIG_DIR = str(Path(__file__).parent / 'profiles')
    DEFAULT_PROFILE = "default"

    DEFAULT_SETTINGS = {
        "general": {
            "log_level": "INFO",
            "output_path": "output",
        },
        "paths": {
            "eqlog_file": "",
        },
        "export": {
            "delimiter": "|",
            "missing_value": "",
        },
        "frequency": {
            "excel": False,
            "chart": False,
        },
    }

    def __init__(self, config_dir: str = None, profile: str = None,
                 config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Config instance.

        Args:
            config_dir (str, optional): Directory for config profiles.
                Defaults to 'profiles' subdirectory relative to this file.
            profile (str, optional): Profile name to use. Defaults to 'default'.
            config (dict, optional): Base configuration dictionary for JSONTool compatibility.
        """
        super().__init__(config)

        self.config_dir = config_dir or self.DEFAULT_CONFIG_DIR
        self.profile = profile or self.DEFAULT_PROFILE
        self.data = {}

        self._load()

    def run(self) -> Dict[str, Any]:
        """
        Run the config tool (implementation of abstract method from EQLogTool).

        Returns:
            The full configuration dictionary.
        """
        return self.get_full_config()

    def _load(self):
        """
        Load the profile JSON file and merge it over the built-in defaults.

        A missing or unreadable profile leaves the defaults in place.
        """
        self.data = copy.deepcopy(self.DEFAULT_SETTINGS)
        profile_path = Path(self.config_dir) / f"{self.profile}.json"

        if not profile_path.exists():
            if self.profile != self.DEFAULT_PROFILE:
                logger.warning(f"Profile '{self.profile}' not found. Using default settings.")
            return

        try:
            profile_data = self.read_json(str(profile_path))
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration: {e}")
            return

        if isinstance(profile_data, dict):
            self._deep_merge(self.data, profile_data)
            logger.info(f"Loaded configuration from '{self.profile}'")
        else:
            logger.error(f"Profile '{self.profile}' does not contain a JSON object")

    def _deep_merge(self, target: Dict[str, Any], source: Dict[str, Any]):
        """
        Deep merge two dictionaries.

        Args:
            target (dict): The target dictionary to merge into
            source (dict): The source dictionary to merge from

        Note:
            Recursively merges nested dictionaries. Non-dict values in source
            will completely replace values in target.
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._deep_merge(target[key], value)
            else:
                target[key] = value

    def get(self, path: str = None, default: Any = None) -> Any:
        """
        Get a configuration value by path using dot notation.

        Args:
            path (str, optional): Dot notation path to the value
                (e.g., "export.delimiter"). If None, returns the entire configuration dictionary.
            default (Any, optional): Value to return if path not found.

        Returns:
            Any: The configuration value at the specified path, or default if not found.

        Examples:
            >>> config.get('export.delimiter')
            '|'
            >>> config.get('paths.nonexistent', 'fallback')
            'fallback'
        """
        if path is None:
            return self.data

        current = self.data
        if path:
            for key in path.split('.'):
                if isinstance(current, dict) and key in current:
                    current = current[key]
                else:
                    return default

        return current

    def list_profiles(self) -> List[str]:
        """
        List all available profile names.

        Returns:
            List[str]: Profile names (without .json extension) found in the config directory.
        """
        config_path = Path(self.config_dir)
        return sorted(f.stem for f in config_path.glob("*.json"))

    def switch_profile(self, profile: str) -> bool:
        """
        Switch to a different profile.

        Args:
            profile (str): Name of profile to switch to (without .json extension).

        Returns:
            bool: True if successful, False if profile not found.
        """
        profile_path = Path(self.config_dir) / f"{profile}.json"
        if profile_path.exists():
            self.profile = profile
            self._load()
            return True
        else:
            logger.warning(f"Profile '{profile}' not found.")
            return False

    def get_full_config(self) -> Dict[str, Any]:
        """
        Return the full configuration dictionary.

        Note:
            This is equivalent to calling get() with no arguments.
        """
        return self.data

    def get_path(self, path_key: str, fallback: str = None) -> str:
        """
        Get a resolved filesystem path from configuration.

        Args:
            path_key (str): Path key in dot notation (e.g., "paths.eqlog_file")
            fallback (str, optional): Default path if not found

        Returns:
            str: Resolved absolute path. Returns empty string if path is None/empty.
                 Relative paths are resolved relative to the config directory.
        """
        path = self.get(path_key, fallback)
        if not path:
            return ""

        path_obj = Path(path).expanduser()
        if path_obj.is_absolute():
            return str(path_obj)

        return str(Path(self.config_dir) / path_obj)
