"""Configuration loading.

Settings come from a YAML file, overridden by ``SEATS_AERO_*`` environment
variables. Nothing here is cached at module level: callers load a Config
once and pass it along.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml

from seats_aero.errors import ConfigError

APP_NAME = "seats-aero"
CONFIG_FILENAME = "config.yaml"
API_KEY_ENV = "SEATS_AERO_API_KEY"

_LIST_ENV = {
    "default_sources": "SEATS_AERO_DEFAULT_SOURCES",
    "default_cabins": "SEATS_AERO_DEFAULT_CABINS",
    "preferred_airports": "SEATS_AERO_PREFERRED_AIRPORTS",
}


@dataclass
class Config:
    """Application settings."""

    api_key: str = ""
    default_sources: List[str] = field(default_factory=list)
    default_cabins: List[str] = field(default_factory=lambda: ["J", "F"])
    preferred_airports: List[str] = field(default_factory=list)
    path: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: Optional[Path] = None) -> "Config":
        """Create Config from a parsed YAML mapping."""
        defaults = cls()
        return cls(
            api_key=str(data.get("api_key") or ""),
            default_sources=_as_list(data.get("default_sources", defaults.default_sources)),
            default_cabins=_as_list(data.get("default_cabins", defaults.default_cabins)),
            preferred_airports=_as_list(
                data.get("preferred_airports", defaults.preferred_airports)
            ),
            path=path,
        )

    def validate(self) -> None:
        """
        Check that the configuration can be used to call the API.

        Raises:
            ConfigError: If no API key is configured
        """
        if not self.api_key:
            raise ConfigError(
                f"API key not configured. Set {API_KEY_ENV} environment variable "
                "or add api_key to config file"
            )


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(item) for item in value]


def default_config_path() -> Path:
    """Path where the config file is created by default."""
    return Path(typer.get_app_dir(APP_NAME)) / CONFIG_FILENAME


def candidate_paths(explicit: Optional[Path] = None) -> List[Path]:
    if explicit is not None:
        return [explicit]
    return [default_config_path(), Path.cwd() / CONFIG_FILENAME]


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Dict[str, str]] = None,
) -> Config:
    """
    Load configuration from YAML and the environment.

    Args:
        config_path: Explicit config file; when None the app config dir and
            the working directory are searched
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Loaded configuration; defaults when no file exists

    Raises:
        ConfigError: If a config file exists but cannot be read or parsed
    """
    if environ is None:
        environ = dict(os.environ)

    data: Dict[str, Any] = {}
    found: Optional[Path] = None
    for path in candidate_paths(config_path):
        if not path.is_file():
            continue
        try:
            with open(path, "r") as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"error reading config file {path}: {e}") from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError(f"error reading config file {path}: expected a mapping")
        data = loaded or {}
        found = path
        break

    for key, env_name in _LIST_ENV.items():
        if environ.get(env_name):
            data[key] = environ[env_name]
    if environ.get(API_KEY_ENV):
        data["api_key"] = environ[API_KEY_ENV]

    return Config.from_dict(data, path=found)


def write_sample_config(config_path: Path) -> None:
    """Create a sample YAML configuration file."""
    sample_config = {
        "api_key": "",
        "default_sources": ["aeroplan", "united"],
        "default_cabins": ["J", "F"],
        "preferred_airports": ["SFO", "LAX"],
    }

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f, default_flow_style=False, sort_keys=False)


def mask_api_key(key: str) -> str:
    if not key:
        return "(not set)"
    if len(key) <= 8:
        return "****"
    return f"{key[:4]}...{key[-4:]}"
