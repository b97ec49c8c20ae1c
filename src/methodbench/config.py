"""Path constants and settings loading.

Settings live in ``methodbench.yaml`` in the working directory::

    presenter: auto      # auto | plain | rich
    resolution: fine     # fine | coarse
    times: 100
    verbose: false
    summary: true
    log_file: .methodbench/methodbench.log
    log_level: INFO
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from methodbench.domain.errors import ConfigurationError
from methodbench.domain.models import Resolution
from methodbench.presenter import BACKENDS
from methodbench.timer import validate_times

CONFIG_FILE = "methodbench.yaml"
STATE_DIR = ".methodbench"
LOG_FILE = "methodbench.log"


def config_file(project_root: Path) -> Path:
    """Return the methodbench.yaml path."""
    return project_root / CONFIG_FILE


def default_log_file(project_root: Path) -> Path:
    """Return the default log file path."""
    return project_root / STATE_DIR / LOG_FILE


@dataclass(frozen=True)
class Settings:
    """Defaults applied by the CLI."""

    presenter: str = "auto"
    resolution: Resolution = Resolution.FINE
    times: int = 100
    verbose: bool = False
    summary: bool = True
    log_file: Path | None = None
    log_level: str = "INFO"


_KEYS = {f.name for f in fields(Settings)}


def _require_bool(key: str, value: object) -> bool:
    if not isinstance(value, bool):
        msg = f"{key} must be true or false, got {value!r}"
        raise ConfigurationError(msg)
    return value


def _settings_from_dict(data: dict[str, Any], project_root: Path) -> Settings:
    unknown = sorted(set(data) - _KEYS)
    if unknown:
        msg = f"unknown setting(s) in {CONFIG_FILE}: {', '.join(unknown)}"
        raise ConfigurationError(msg)

    presenter = str(data.get("presenter", "auto"))
    if presenter not in BACKENDS:
        msg = f"presenter must be one of {', '.join(BACKENDS)}, got {presenter!r}"
        raise ConfigurationError(msg)

    try:
        resolution = Resolution(str(data.get("resolution", "fine")).lower())
    except ValueError as exc:
        msg = f"resolution must be 'fine' or 'coarse', got {data['resolution']!r}"
        raise ConfigurationError(msg) from exc

    log_level = str(data.get("log_level", "INFO")).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        msg = f"unknown log_level {log_level!r}"
        raise ConfigurationError(msg)

    raw_log_file = data.get("log_file")
    log_file = project_root / str(raw_log_file) if raw_log_file else default_log_file(project_root)

    return Settings(
        presenter=presenter,
        resolution=resolution,
        times=validate_times(data.get("times", 100)),
        verbose=_require_bool("verbose", data.get("verbose", False)),
        summary=_require_bool("summary", data.get("summary", True)),
        log_file=log_file,
        log_level=log_level,
    )


def load_settings(path: Path | None = None, project_root: Path | None = None) -> Settings:
    """Load settings from ``path`` (default: ``methodbench.yaml`` in ``project_root``).

    A missing file yields the defaults.

    Raises:
        ConfigurationError: If the file is not a YAML mapping or holds an
            unknown key or an invalid value.
    """
    root = project_root if project_root is not None else Path.cwd()
    cf = path if path is not None else config_file(root)
    if not cf.exists():
        return _settings_from_dict({}, root)

    try:
        data = yaml.safe_load(cf.read_text()) or {}
    except yaml.YAMLError as exc:
        msg = f"cannot parse {cf}: {exc}"
        raise ConfigurationError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{cf} must contain a mapping, got {type(data).__name__}"
        raise ConfigurationError(msg)
    return _settings_from_dict(data, root)
