# tests/core/test_config_management.py
import json
import logging

import pytest

from frontcheck_cli.core.managers.config_manager import ConfigManager
from frontcheck_cli.core.utils.configure_logging import LogWithTqdm, configure_logger
from frontcheck_cli.core.utils.path_utils import PathUtils

# A small, predictable configuration for the tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING"
    },
    "w3c": {
        "enabled": True,
        "timeout": 15
    },
    "runner": {
        "workers": 1
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Isolated environment for the ConfigManager:
    - writes a fake packaged settings.json into a temporary package root,
    - points the user settings file at a temporary home,
    - reloads the singleton from those files.
    """
    package_root = tmp_path / "frontcheck_cli"
    package_root.mkdir()
    settings_file = package_root / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))
    user_file = tmp_path / "home" / ".frontcheck" / "settings.json"

    monkeypatch.setattr(PathUtils, 'get_default_settings_file', lambda: settings_file)
    monkeypatch.setattr(PathUtils, 'get_user_settings_file', lambda: user_file)

    manager = ConfigManager()
    manager.reset()
    yield manager, user_file
    monkeypatch.undo()
    manager.reset()


def test_config_manager_load(config_env):
    """The packaged settings are loaded."""
    manager, _ = config_env
    config = manager.get_all()
    assert config["debug"]["level"] == "WARNING"
    assert config["w3c"]["timeout"] == 15


def test_config_manager_is_singleton(config_env):
    """Every construction returns the same instance."""
    manager, _ = config_env
    assert ConfigManager() is manager


def test_config_manager_get_nested(config_env):
    """Dotted keys reach nested values; missing keys give the default."""
    manager, _ = config_env
    assert manager.get_nested("runner.workers") == 1
    assert manager.get_nested("non.existent.key", "default") == "default"
    assert manager.get_nested("debug.level.deeper", "default") == "default"


def test_config_manager_set_nested(config_env):
    """In-memory updates keep the type of the value they replace."""
    manager, _ = config_env

    manager.set_nested("debug.level", "INFO")
    assert manager.get_nested("debug.level") == "INFO"

    manager.set_nested("runner.workers", "4")
    assert manager.get_nested("runner.workers") == 4

    manager.set_nested("w3c.enabled", "false")
    assert manager.get_nested("w3c.enabled") is False

    manager.set_nested("stylelint.enabled", True)
    assert manager.get_nested("stylelint.enabled") is True


def test_config_manager_reset(config_env):
    """reset() reloads the configuration from disk."""
    manager, _ = config_env
    manager.set_nested("debug.level", "DEBUG")
    manager.reset()
    assert manager.get_nested("debug.level") == "WARNING"


def test_user_settings_are_merged(config_env):
    """The user file overrides single keys and keeps the rest."""
    manager, user_file = config_env
    user_file.parent.mkdir(parents=True)
    user_file.write_text(json.dumps({"w3c": {"enabled": False}}))

    manager.reset()
    assert manager.get_nested("w3c.enabled") is False
    assert manager.get_nested("w3c.timeout") == 15


def test_broken_user_settings_are_ignored(config_env):
    """An unreadable user file leaves the packaged defaults in place."""
    manager, user_file = config_env
    user_file.parent.mkdir(parents=True)
    user_file.write_text("{not json")

    manager.reset()
    assert manager.get_nested("w3c.enabled") is True


def test_configure_logger_installs_tqdm_handler():
    """The root logger gets exactly one tqdm-aware handler."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logger("info", module_specific_levels={"frontcheck.engine": "DEBUG"})
        assert root.level == logging.INFO
        assert len(root.handlers) == 1 and isinstance(root.handlers[0], LogWithTqdm)
        assert logging.getLogger("frontcheck.engine").level == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        logging.getLogger("frontcheck.engine").setLevel(logging.NOTSET)
