# src/frontcheck_cli/core/managers/config_manager.py
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from frontcheck_cli.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

TRUE_STRINGS = ("1", "true", "yes", "on")


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _cast_like(current: Any, value: Any, key_path: str) -> Any:
    """Converts `value` to the type of the setting it replaces (CLI input arrives as str)."""
    if current is None:
        return value
    if isinstance(current, bool):
        return value.strip().lower() in TRUE_STRINGS if isinstance(value, str) else bool(value)
    try:
        return type(current)(value)
    except (ValueError, TypeError):
        logger.warning("'%s' expects %s; keeping %r as given.", key_path, type(current).__name__, value)
        return value


class ConfigManager:
    """
    Process-wide configuration of the checker.

    The packaged settings.json holds the defaults; ~/.frontcheck/settings.json,
    when present, is merged over it key by key. Values are addressed with
    dotted paths such as 'w3c.timeout'.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager ready with sections: %s", ", ".join(self._config))

    def get_all(self) -> Dict[str, Any]:
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """Value at `key_path`, or `default` when a segment is missing or null."""
        node: Any = self._config
        for segment in key_path.split('.'):
            if not isinstance(node, dict) or segment not in node:
                return default
            node = node[segment]
        return default if node is None else node

    def set_nested(self, key_path: str, value: Any) -> bool:
        """Changes one setting in memory only; settings.json is never written."""
        *parents, leaf = key_path.split('.')
        section = self._config
        for segment in parents:
            section = section.setdefault(segment, {})
            if not isinstance(section, dict):
                logger.error("Cannot set '%s': '%s' is not a section.", key_path, segment)
                return False

        section[leaf] = _cast_like(section.get(leaf), value, key_path)
        logger.debug("Setting changed: %s = %r", key_path, section[leaf])
        return True

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path} does not contain a JSON object")
        return data

    def reset(self):
        """Reloads the packaged defaults and the user file, dropping in-memory changes."""
        config: Dict[str, Any] = {}
        default_path = PathUtils.get_default_settings_file()
        try:
            if default_path.exists():
                config = self._read(default_path)
            else:
                logger.warning("settings.json not found at %s. Using built-in defaults.", default_path)
        except (OSError, ValueError) as e:
            logger.error("Failed to load %s: %s", default_path, e)

        user_path = PathUtils.get_user_settings_file()
        if user_path.exists():
            try:
                config = _deep_merge(config, self._read(user_path))
                logger.debug("Merged user settings from %s", user_path)
            except (OSError, ValueError) as e:
                logger.error("Ignoring %s: %s", user_path, e)

        self._config = config


# Shared instance used by the CLI
config_manager = ConfigManager()
