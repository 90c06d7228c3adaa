# src/frontcheck_cli/core/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and user paths.
    """

    # --- Package specific paths

    @staticmethod
    def get_cli_package_root() -> Path:
        """Directory of the frontcheck_cli package (holds settings.json)."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_default_settings_file() -> Path:
        return PathUtils.get_cli_package_root() / "settings.json"

    # --- User specific paths ---

    @staticmethod
    def get_user_config_dir() -> Path:
        """
        Returns the path to the user's .frontcheck config directory.
        (e.g., ~/.frontcheck/)
        """
        return Path.home() / ".frontcheck"

    @staticmethod
    def get_user_settings_file() -> Path:
        """Optional per-user overrides, merged over the packaged defaults."""
        return PathUtils.get_user_config_dir() / "settings.json"

    @staticmethod
    def resolve_output_path(filename: str) -> Path:
        """Relative export paths are resolved against the current directory."""
        path = Path(filename).expanduser()
        return path if path.is_absolute() else Path.cwd() / path
