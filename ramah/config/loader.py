from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load YAML config (default: config/ramah.yml, or $RAMAH_CONFIG)
- Validate against the packaged JSON schema (config_schema.json)
- Apply defaults for every missing key

A missing default config file is not an error: the tool runs on defaults.
An explicitly requested file that does not exist is.
"""

__all__ = [
    "ConfigError",
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "SCHEMA_PATH",
    "resolve_config_path",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/ramah.yml")
CONFIG_ENV_VAR = "RAMAH_CONFIG"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class AppConfig:
    export_directory: str = "./exports"
    default_sheet: str | None = None
    keep_na_strings: list[str] = field(default_factory=list)  # e.g. ['NA'] kept as literal values
    header_scan_depth: int = 100  # rows scanned for header inference
    top_n: int = 10  # bars in the top chart
    distribution_slices: int = 11  # pie slices including "Other Categories"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or invalid, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(explicit: Path | None = None) -> tuple[Path, bool]:
    """Pick the config path: CLI argument, then $RAMAH_CONFIG, then the default.

    Returns:
        (path, required) where required is False only for the default path
    """
    if explicit is not None:
        return explicit, True
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True
    return DEFAULT_CONFIG_PATH, False


def load_config(path: Path | None = None, *, required: bool = True) -> AppConfig:
    if path is None:
        path, required = resolve_config_path(None)
    if not path.exists():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return AppConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = AppConfig()
    return AppConfig(
        export_directory=data.get("export_directory", defaults.export_directory),
        default_sheet=data.get("default_sheet"),
        keep_na_strings=list(data.get("keep_na_strings", [])),
        header_scan_depth=data.get("header_scan_depth", defaults.header_scan_depth),
        top_n=data.get("top_n", defaults.top_n),
        distribution_slices=data.get("distribution_slices", defaults.distribution_slices),
    )
