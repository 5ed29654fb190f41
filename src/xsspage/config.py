"""Configuration loading for the CLI and the HTTP adapter.

Values are resolved in three layers: built-in defaults, an optional YAML
file, then keyword overrides (CLI flags, test fixtures). The engines
themselves take no configuration; the limits here are enforced at the
calling boundary.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from xsspage.exceptions import ConfigError

logger = logging.getLogger(__name__)

# File looked up in the working directory when no path is given.
DEFAULT_CONFIG_FILE = "xsspage.yaml"

# Environment variable naming a config file.
CONFIG_ENV_VAR = "XSSPAGE_CONFIG"


@dataclass
class AppConfig:
    """Flattened runtime configuration.

    Attributes:
        max_payload_length: Largest payload accepted by the fuzz endpoint.
        default_limit: Mutations returned when a request gives no limit.
        max_limit: Upper clamp for the requested limit.
        default_generate_count: Payloads produced by generation mode by default.
        default_search_limit: Database records returned by a search by default.
        max_code_length: Largest source accepted by the scan endpoint.
        default_framework: Framework hint used when none is supplied.
        progress_path: JSON file backing the learning-progress store.
    """

    max_payload_length: int = 5000
    default_limit: int = 1
    max_limit: int = 500
    default_generate_count: int = 10
    default_search_limit: int = 100
    max_code_length: int = 100_000
    default_framework: str = "vanilla"
    progress_path: Path = field(
        default_factory=lambda: Path.home() / ".xsspage" / "progress.json"
    )

    def to_dict(self) -> dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["progress_path"] = str(self.progress_path)
        return data


def _read_yaml_file(path: Path) -> dict[str, Any]:
    """Read a YAML mapping from *path*, raising ``ConfigError`` on failure."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _config_source(path: Path | None) -> Path | None:
    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    default = Path.cwd() / DEFAULT_CONFIG_FILE
    if default.exists():
        return default
    return None


def _coerce(name: str, value: Any) -> Any:
    if name == "progress_path":
        return Path(str(value)).expanduser()
    if name == "default_framework":
        return str(value)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Config value {name!r} must be an integer") from exc


def load_config(
    path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Load configuration from defaults, a YAML file, and overrides.

    Args:
        path: Explicit config file. When None, ``$XSSPAGE_CONFIG`` and then
            ``./xsspage.yaml`` are tried.
        overrides: Values that win over both defaults and the file.

    Returns:
        The resolved ``AppConfig``.

    Raises:
        ConfigError: If the file is unreadable, not YAML, not a mapping, or
            holds a value of the wrong type.
    """
    merged: dict[str, Any] = {}
    source = _config_source(path)
    if source is not None:
        if not source.exists():
            raise ConfigError(f"Config file not found: {source}")
        logger.debug("Loading config from %s", source)
        merged.update(_read_yaml_file(source))
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(AppConfig)}
    values: dict[str, Any] = {}
    for key, value in merged.items():
        if key not in known:
            logger.debug("Ignoring unknown config key: %s", key)
            continue
        values[key] = _coerce(key, value)
    return AppConfig(**values)
