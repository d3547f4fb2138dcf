"""Configuration management with XDG paths and precedence resolution.

This module handles all configuration for swagts:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.swagts/`` on macOS and Windows. Only the data directory is used (for
  crash logs); see :func:`get_data_dir`.
* **Project config** -- an optional ``./swagts.json`` (or an explicit
  ``--config`` path) holding :class:`~swagts.models.GenerateOptions` fields.
* **Precedence resolution** -- :func:`resolve_options` merges CLI flags,
  environment variables, project config, and defaults into the effective
  options.
* **Render config** -- :func:`build_render_config` reads custom template
  files and produces the :class:`~swagts.models.RenderConfig` handed to the
  renderer.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from swagts.exceptions import ConfigError
from swagts.models import GenerateOptions, RenderConfig

_APP_NAME = "swagts"
_PROJECT_CONFIG_FILENAME = "swagts.json"

# Environment variables and the GenerateOptions field each one sets
_ENV_OVERRIDES: dict[str, str] = {
    "SWAGTS_DIST": "dist",
    "SWAGTS_DEFINITION_DIR": "definition_dir",
    "SWAGTS_OPERATION_DIR": "operation_dir",
    "SWAGTS_NAMING": "naming",
}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/swagts/`` (default ``~/.local/share/swagts/``).
    On macOS/Windows: ``~/.swagts/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Project-local config ---


def load_project_config(path: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project configuration.

    Args:
        path: Explicit config file. When ``None``, ``./swagts.json`` is used
            if it exists.

    Returns:
        The parsed JSON object, or ``None`` when no explicit path was given
        and ``./swagts.json`` does not exist.

    Raises:
        ConfigError: If an explicit *path* does not exist, or the file is not
            a JSON object.
    """
    if path is None:
        path = Path.cwd() / _PROJECT_CONFIG_FILENAME
        if not path.is_file():
            return None
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {path} must be a JSON object")
    return data


# --- Precedence resolution ---


def resolve_options(
    cli_overrides: Optional[dict[str, Any]] = None,
    config_path: Optional[Path] = None,
) -> GenerateOptions:
    """Resolve generate options with full precedence chain.

    Precedence (high to low):
        1. CLI flags (entries of *cli_overrides* that are not ``None``)
        2. Environment variables (``SWAGTS_DIST``, ``SWAGTS_DEFINITION_DIR``,
           ``SWAGTS_OPERATION_DIR``, ``SWAGTS_NAMING``)
        3. Project config (``./swagts.json`` or *config_path*)
        4. Defaults

    Raises:
        ConfigError: If the project config cannot be read or any layer holds
            an invalid value (e.g. an unknown naming convention).
    """
    merged: dict[str, Any] = {}

    project = load_project_config(config_path)
    if project is not None:
        merged.update(project)

    for env_var, field in _ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            merged[field] = value

    for field, value in (cli_overrides or {}).items():
        if value is not None:
            merged[field] = value

    try:
        return GenerateOptions.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid generate options: {exc}") from exc


def build_render_config(options: GenerateOptions) -> RenderConfig:
    """Build the :class:`~swagts.models.RenderConfig` for *options*.

    Custom template paths are read here so the renderer only ever sees
    template source.

    Raises:
        ConfigError: If a custom template file cannot be read.
    """
    return RenderConfig(
        naming=options.naming,
        definition_dir=options.definition_dir,
        operation_dir=options.operation_dir,
        definition_template=_read_template(options.definition_template),
        operation_template=_read_template(options.operation_template),
    )


def _read_template(path: Optional[str]) -> Optional[str]:
    if path is None:
        return None
    template_path = Path(path).expanduser()
    if not template_path.is_file():
        raise ConfigError(f"Template file not found: {template_path}")
    try:
        return template_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read template {template_path}: {exc}") from exc
