"""Configuration loader for TagView.

Settings are merged in increasing priority:

1. Built-in defaults (``DEFAULT_CONFIG``)
2. User config at ``~/.tagview/config.yml|yaml``
3. Project config at ``./tagview.yml|yaml``
4. Environment variables (``TAGVIEW_TEXT_ENCODING``, ``TAGVIEW_VERBOSE``,
   ``TAGVIEW_QUIET``)
5. Explicit overrides passed by the caller (e.g. CLI flags)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from tagview.config.defaults import (
    CONFIG_BASENAME,
    DEFAULT_CONFIG,
    PROJECT_CONFIG_BASENAME,
    USER_CONFIG_DIR,
)
from tagview.config.validator import flatten_pydantic_errors
from tagview.lib.errors import ConfigError, FileNotFoundError
from tagview.lib.logging_config import get_logger
from tagview.models.config import TagViewConfig

logger = get_logger(__name__)

# Environment variable to field name mapping
ENV_VAR_MAP = {
    "text_encoding": "TAGVIEW_TEXT_ENCODING",
    "verbose": "TAGVIEW_VERBOSE",
    "quiet": "TAGVIEW_QUIET",
}


def _parse_env_value(field_name: str, value: str) -> Any:
    """Parse environment variable value to appropriate type.

    Args:
        field_name: Name of the field (used to determine type)
        value: String value from environment variable

    Returns:
        Parsed value in correct type (bool or str)
    """
    if field_name in ("verbose", "quiet"):
        return value.lower() in ("true", "1", "yes", "on")
    return value


def _read_yaml(path: Path) -> dict[str, Any] | None:
    """Read a YAML mapping from ``path``.

    Returns:
        Parsed dictionary, or None if the file is empty

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping
    """
    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(str(path), f"Invalid YAML: {e}") from e

    if not content:
        return None
    if not isinstance(content, dict):
        raise ConfigError(str(path), "Top-level value must be a mapping")
    return content


def _find_config_file(directory: Path, basename: str) -> Path | None:
    """Return ``basename.yml`` or ``basename.yaml`` in ``directory``.

    ``.yml`` is preferred when both exist.
    """
    for suffix in (".yml", ".yaml"):
        candidate = directory / f"{basename}{suffix}"
        if candidate.is_file():
            return candidate
    return None


class ConfigLoader:
    """Loads and validates TagView configuration."""

    def __init__(
        self,
        env_vars: os._Environ[str] | dict[str, str] | None = None,
        project_dir: Path | None = None,
    ) -> None:
        """Create a loader.

        Args:
            env_vars: Environment mapping, defaults to ``os.environ``
            project_dir: Directory searched for the project config file,
                defaults to the current working directory
        """
        self.env_vars = env_vars if env_vars is not None else os.environ
        self.project_dir = project_dir

    def _user_config_path(self) -> Path | None:
        home = self.env_vars.get("HOME")
        base = Path(home) if home else Path.home()
        return _find_config_file(base / USER_CONFIG_DIR, CONFIG_BASENAME)

    def _project_config_path(self) -> Path | None:
        base = self.project_dir if self.project_dir is not None else Path.cwd()
        return _find_config_file(base, PROJECT_CONFIG_BASENAME)

    def _env_overrides(self) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        for field_name, env_var_name in ENV_VAR_MAP.items():
            if env_var_name in self.env_vars:
                overrides[field_name] = _parse_env_value(
                    field_name, self.env_vars[env_var_name]
                )
        return overrides

    def load(
        self,
        config_path: Path | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> TagViewConfig:
        """Load the effective configuration.

        Args:
            config_path: Explicit config file; replaces the project-level
                file when given and must exist
            overrides: Highest-priority values, None entries are ignored

        Returns:
            Validated TagViewConfig

        Raises:
            FileNotFoundError: If ``config_path`` does not exist
            ConfigError: If a file is malformed or validation fails
        """
        merged: dict[str, Any] = dict(DEFAULT_CONFIG)

        user_path = self._user_config_path()
        if user_path is not None:
            logger.debug(f"Loading user config from {user_path}")
            merged.update(_read_yaml(user_path) or {})

        if config_path is not None:
            if not config_path.is_file():
                raise FileNotFoundError(
                    str(config_path), "Pass an existing YAML config file."
                )
            project_path: Path | None = config_path
        else:
            project_path = self._project_config_path()

        if project_path is not None:
            logger.debug(f"Loading project config from {project_path}")
            merged.update(_read_yaml(project_path) or {})

        merged.update(self._env_overrides())
        if overrides:
            merged.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return TagViewConfig(**merged)
        except PydanticValidationError as e:
            messages = flatten_pydantic_errors(e)
            raise ConfigError("tagview", "\n".join(messages)) from e


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> TagViewConfig:
    """One-call helper for CLI commands.

    Args:
        config_path: Optional explicit config file
        overrides: Highest-priority values (e.g. CLI flags)

    Returns:
        Validated TagViewConfig
    """
    return ConfigLoader().load(config_path=config_path, overrides=overrides)
