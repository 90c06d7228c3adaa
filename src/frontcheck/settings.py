# src/frontcheck/settings.py
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

# Environment variable -> settings field
ENV_OVERRIDES: Dict[str, str] = {
    "WORKING_DIR": "working_dir",
    "ASSETS_DIR": "assets_dir",
    "STYLES_DIR": "styles_dir",
    "IMAGES_DIR": "images_dir",
}


class CheckerSettings(BaseModel):
    """
    Explicit configuration for one validation run.

    Everything that used to be ambient process state (working directory,
    directory names) lives here and is passed into the loader and the rules.
    """
    working_dir: Path = Field(default_factory=Path.cwd)
    styles_dir: str = "styles"
    images_dir: str = "images"
    assets_dir: str = "assets"
    entry_page: str = "index.html"

    # External markup conformance (Nu HTML Checker)
    w3c_enabled: bool = True
    w3c_url: str = "https://validator.w3.org/nu/?out=json"
    w3c_timeout: float = 15.0

    # Optional stylelint bridge (needs Node.js / npx)
    stylelint_enabled: bool = False
    stylelint_config: Optional[str] = None
    stylelint_timeout: float = 60.0

    # Rule thresholds
    max_nesting_depth: int = 2
    max_image_dimension: int = 2000
    max_image_bytes: int = 1024 * 1024

    @field_validator('working_dir', mode='before')
    @classmethod
    def expand_working_dir(cls, v: Any) -> Path:
        return Path(v).expanduser()

    # --- Path helpers ---

    def resolve(self, *parts: str) -> Path:
        return self.working_dir.joinpath(*parts)

    @property
    def styles_path(self) -> Path:
        return self.resolve(self.styles_dir)

    @property
    def images_path(self) -> Path:
        return self.resolve(self.images_dir)

    @property
    def assets_path(self) -> Path:
        return self.resolve(self.assets_dir)

    @property
    def assets_images_path(self) -> Path:
        return self.assets_path / "images"

    @property
    def assets_images_dir(self) -> str:
        """Relative (posix) name of the generated image directory."""
        return f"{self.assets_dir.strip('/')}/images"

    @classmethod
    def from_config(
            cls,
            config: Optional[Mapping[str, Any]] = None,
            environ: Optional[Mapping[str, str]] = None,
            **overrides: Any
    ) -> "CheckerSettings":
        """
        Builds settings from the nested settings.json layout, then applies
        environment overrides (WORKING_DIR, ...) and finally explicit keyword
        overrides (CLI flags). None values in overrides are ignored.
        """
        config = config or {}
        environ = os.environ if environ is None else environ

        paths = config.get("paths") or {}
        w3c = config.get("w3c") or {}
        stylelint = config.get("stylelint") or {}
        rules = config.get("rules") or {}

        values: Dict[str, Any] = {
            "working_dir": paths.get("working_dir"),
            "styles_dir": paths.get("styles_dir"),
            "images_dir": paths.get("images_dir"),
            "assets_dir": paths.get("assets_dir"),
            "entry_page": paths.get("entry_page"),
            "w3c_enabled": w3c.get("enabled"),
            "w3c_url": w3c.get("url"),
            "w3c_timeout": w3c.get("timeout"),
            "stylelint_enabled": stylelint.get("enabled"),
            "stylelint_config": stylelint.get("config"),
            "stylelint_timeout": stylelint.get("timeout"),
            "max_nesting_depth": rules.get("max_nesting_depth"),
            "max_image_dimension": rules.get("max_image_dimension"),
            "max_image_bytes": rules.get("max_image_bytes"),
        }

        for env_name, field_name in ENV_OVERRIDES.items():
            env_value = environ.get(env_name)
            if env_value:
                values[field_name] = env_value

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**{k: v for k, v in values.items() if v is not None})
