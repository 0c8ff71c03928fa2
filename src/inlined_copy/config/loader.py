"""Configuration loader for inlined-copy.

This module provides the ConfigLoader class for loading, parsing, and
validating expansion settings from YAML files and environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from inlined_copy.config.defaults import (
    DEFAULT_EXPANSION_CONFIG,
    PROJECT_CONFIG_FILENAMES,
    USER_CONFIG_DIRNAME,
    USER_CONFIG_FILENAMES,
)
from inlined_copy.config.validator import flatten_pydantic_errors
from inlined_copy.lib.errors import ConfigError
from inlined_copy.models.config import ExpansionConfig, ProjectConfig

logger = logging.getLogger(__name__)

# Environment variable to field name mapping
ENV_VAR_MAP = {
    "max_file_size": "INLINED_COPY_MAX_FILE_SIZE",
    "max_recursion_depth": "INLINED_COPY_MAX_RECURSION_DEPTH",
    "process_parameters": "INLINED_COPY_PROCESS_PARAMETERS",
    "cache_enabled": "INLINED_COPY_CACHE_ENABLED",
}


def _parse_env_value(field_name: str, value: str) -> Any:
    """Parse environment variable value to appropriate type.

    Args:
        field_name: Name of the field (used to determine type)
        value: String value from environment variable

    Returns:
        Parsed value in correct type (int or bool)

    Raises:
        ValueError: If value cannot be parsed
    """
    if field_name in ("max_file_size", "max_recursion_depth"):
        return int(value)
    return value.lower() in ("true", "1", "yes", "on")


def _get_env_value(
    field_name: str, env_vars: os._Environ[str] | dict[str, str]
) -> Any | None:
    """Get environment variable value for a field.

    Args:
        field_name: Name of field to get
        env_vars: Environment variables mapping

    Returns:
        Parsed value or None if not found or invalid
    """
    env_var_name = ENV_VAR_MAP.get(field_name)
    if not env_var_name or env_var_name not in env_vars:
        return None

    try:
        return _parse_env_value(field_name, env_vars[env_var_name])
    except (ValueError, KeyError):
        logger.warning(
            f"Ignoring invalid value for {env_var_name}: {env_vars[env_var_name]!r}"
        )
        return None


class ConfigLoader:
    """Loads and resolves expansion configuration.

    This class handles:
    - Loading project configuration from .inlined-copy.yml|.yaml
    - Loading user configuration from ~/.inlined-copy/config.yml|.yaml
    - Resolving settings with CLI > project > user > env > default precedence
    - Converting validation errors into human-readable messages
    """

    def __init__(self, home_dir: Path | None = None) -> None:
        """Initialize the ConfigLoader with empty caches.

        Args:
            home_dir: Directory holding the user config directory.
                Defaults to the current user's home directory.
        """
        self._home_dir = home_dir
        self._user_config_loaded = False
        self._user_config: ProjectConfig | None = None
        self._project_configs: dict[str, ProjectConfig | None] = {}

    def load_user_config(self) -> ProjectConfig | None:
        """Load user configuration from ~/.inlined-copy/config.yml|config.yaml.

        Results are cached after first load.

        Returns:
            ProjectConfig instance, or None if no config file exists

        Raises:
            ConfigError: If YAML parsing fails or validation fails
        """
        if self._user_config_loaded:
            return self._user_config

        home_dir = self._home_dir or Path.home()
        result = self._load_config_file(
            home_dir / USER_CONFIG_DIRNAME,
            USER_CONFIG_FILENAMES,
            "user_config",
            "user configuration",
        )
        self._user_config = result
        self._user_config_loaded = True
        return result

    def load_project_config(self, project_dir: str) -> ProjectConfig | None:
        """Load project-level configuration from .inlined-copy.yml|.yaml.

        Results are cached per project_dir after first load.

        Args:
            project_dir: Path to project directory

        Returns:
            ProjectConfig instance, or None if no config file exists

        Raises:
            ConfigError: If YAML parsing fails or validation fails
        """
        if project_dir in self._project_configs:
            return self._project_configs[project_dir]

        result = self._load_config_file(
            Path(project_dir),
            PROJECT_CONFIG_FILENAMES,
            "project_config",
            "project configuration",
        )
        self._project_configs[project_dir] = result
        return result

    def _load_config_file(
        self,
        config_dir: Path,
        filenames: tuple[str, ...],
        error_code: str,
        config_name: str,
    ) -> ProjectConfig | None:
        """Load the first existing configuration file from a directory.

        Args:
            config_dir: Directory to search for config files
            filenames: Candidate file names in order of preference
            error_code: Error code prefix for error messages
            config_name: Human-readable config name for error messages

        Returns:
            ProjectConfig instance, or None if no config file exists

        Raises:
            ConfigError: If YAML parsing fails or validation fails
        """
        existing = [config_dir / name for name in filenames if (config_dir / name).exists()]
        if not existing:
            return None

        config_path = existing[0]
        if len(existing) > 1:
            logger.info(
                f"Both {existing[0]} and {existing[1]} exist. Using {config_path}."
            )

        try:
            config_dict = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(
                f"{error_code}_parse",
                f"Failed to parse {config_name} at {config_path}: {str(e)}",
            ) from e
        except OSError as e:
            raise ConfigError(
                f"{error_code}_read",
                f"Failed to read {config_name} at {config_path}: {str(e)}",
            ) from e

        if not config_dict:
            return None
        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"{error_code}_validation",
                f"Invalid {config_name} in {config_path}: expected a mapping",
            )

        try:
            return ProjectConfig(**config_dict)
        except PydanticValidationError as e:
            error_text = "\n".join(flatten_pydantic_errors(e))
            raise ConfigError(
                f"{error_code}_validation",
                f"Invalid {config_name} in {config_path}:\n{error_text}",
            ) from e

    def resolve_expansion_config(
        self,
        cli_config: ExpansionConfig | None,
        project_config: ExpansionConfig | None,
        user_config: ExpansionConfig | None,
        defaults: dict[str, Any] | None = None,
    ) -> ExpansionConfig:
        """Resolve expansion configuration with priority hierarchy.

        Configuration priority (highest to lowest):
        1. CLI flags (cli_config)
        2. Project config expansion section
        3. User config expansion section
        4. Environment variables (INLINED_COPY_* vars)
        5. Built-in defaults

        Args:
            cli_config: Expansion config from CLI flags (optional)
            project_config: Expansion config from the project file (optional)
            user_config: Expansion config from the user file (optional)
            defaults: Dictionary of default values

        Returns:
            Resolved ExpansionConfig with all fields populated
        """
        defaults = defaults if defaults is not None else DEFAULT_EXPANSION_CONFIG
        resolved: dict[str, Any] = {}

        for field in ExpansionConfig.model_fields:
            if cli_config and getattr(cli_config, field, None) is not None:
                resolved[field] = getattr(cli_config, field)
            elif project_config and getattr(project_config, field, None) is not None:
                resolved[field] = getattr(project_config, field)
            elif user_config and getattr(user_config, field, None) is not None:
                resolved[field] = getattr(user_config, field)
            elif (env_value := _get_env_value(field, os.environ)) is not None:
                resolved[field] = env_value
            else:
                resolved[field] = defaults.get(field)

        try:
            return ExpansionConfig(**resolved)
        except PydanticValidationError as e:
            error_text = "\n".join(flatten_pydantic_errors(e))
            raise ConfigError(
                "expansion", f"Invalid expansion configuration:\n{error_text}"
            ) from e

    def load_expansion_config(
        self, project_dir: str, cli_config: ExpansionConfig | None = None
    ) -> ExpansionConfig:
        """Load and resolve the expansion configuration for a project.

        Args:
            project_dir: Directory searched for a project config file
            cli_config: Values given on the command line

        Returns:
            Fully populated ExpansionConfig

        Raises:
            ConfigError: If a config file is malformed or a value is invalid
        """
        project = self.load_project_config(project_dir)
        user = self.load_user_config()

        config = self.resolve_expansion_config(
            cli_config,
            project.expansion if project else None,
            user.expansion if user else None,
        )
        logger.debug(f"Resolved expansion config: {config.model_dump()}")
        return config
