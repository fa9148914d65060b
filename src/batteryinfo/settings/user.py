"""User-configurable label settings loaded from a YAML file."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from batteryinfo.errors import ConfigError
from batteryinfo.templates import TemplateCatalog, TemplateKey, check_template

# Load environment variables from .env file(s)
load_dotenv()

CONFIG_ENV_VAR = "BATTERYINFO_CONFIG"


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class LabelSettings(BaseModel):
    """Presentation flags and template overrides.

    Every field has a default, so an empty config file is valid.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("batteryinfo.yaml"),
        Path("~/.config/batteryinfo/config.yaml").expanduser(),
        Path("/etc/batteryinfo/config.yaml"),
    ]

    short_string: bool = Field(False, description="Use terse label phrasing")
    based_on_usage: bool = Field(
        False, description="Treat supplied discharge estimates as usage-based"
    )
    templates: dict[str, str] = Field(
        default_factory=dict, description="Template overrides keyed by template name"
    )

    # ---- validators ----
    @field_validator("templates")
    @classmethod
    def validate_template_keys(cls, v: dict[str, str]) -> dict[str, str]:
        known = {key.value for key in TemplateKey}
        unknown = sorted(set(v) - known)
        if unknown:
            raise ValueError(f"unknown template keys: {', '.join(unknown)}")
        for name, pattern in v.items():
            check_template(TemplateKey(name), pattern)
        return v

    # ---- convenience methods ----
    def template_catalog(self) -> TemplateCatalog:
        """Build a TemplateCatalog with the configured overrides applied."""
        return TemplateCatalog(
            overrides={TemplateKey(name): text for name, text in self.templates.items()}
        )

    @classmethod
    def load(cls, path: Path | None = None) -> LabelSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated LabelSettings object

        Raises:
            FileNotFoundError: If no config file is found
            ConfigError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from {CONFIG_ENV_VAR} not found: {path}")
            else:
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    raise FileNotFoundError(
                        f"No configuration file found. Create batteryinfo.yaml or set {CONFIG_ENV_VAR}."
                    )
        elif not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text(encoding="utf-8"))
            data = yaml.safe_load(raw) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise ConfigError(f"Invalid configuration:\n{err}") from err
