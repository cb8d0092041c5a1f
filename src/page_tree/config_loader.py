"""YAML configuration loading and validation.

Configuration is optional: without a file every setting keeps its default.

Configuration file structure:
    copy_suffix: " (Copy)"
    mode: lenient        # lenient | strict
"""

import logging
import os
from typing import Any, Dict

import yaml

from .errors import ConfigError, FilesystemError
from .models import DuplicationMode, DuplicatorConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = ".page-tree-copy/config.yaml"


class ConfigLoader:
    """Handles configuration file loading, validation, and saving."""

    KNOWN_FIELDS = {'copy_suffix', 'mode'}

    DEFAULTS = {
        'copy_suffix': " (Copy)",
        'mode': DuplicationMode.LENIENT.value,
    }

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG_PATH) -> DuplicatorConfig:
        """Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            DuplicatorConfig (all defaults when the file does not exist)

        Raises:
            FilesystemError: If the file exists but cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            logger.debug(f"No configuration at {config_path}, using defaults")
            return DuplicatorConfig()
        except PermissionError:
            raise FilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(config_path, 'read', str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return DuplicatorConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, config: DuplicatorConfig) -> None:
        """Save configuration to a YAML file.

        Raises:
            FilesystemError: If file cannot be written
        """
        yaml_str = yaml.safe_dump(
            {'copy_suffix': config.copy_suffix, 'mode': config.mode.value},
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(config_dir, 'create_directory', str(e))

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(config_path, 'write', 'Permission denied')
        except OSError as e:
            raise FilesystemError(config_path, 'write', str(e))

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> DuplicatorConfig:
        """Validate a raw configuration dictionary.

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown = set(config_dict) - cls.KNOWN_FIELDS
        if unknown:
            logger.warning(f"Ignoring unknown configuration fields: {', '.join(sorted(unknown))}")

        copy_suffix = config_dict.get('copy_suffix', cls.DEFAULTS['copy_suffix'])
        if not isinstance(copy_suffix, str):
            raise ConfigError(
                f"Field 'copy_suffix' must be a string, got {type(copy_suffix).__name__}",
                'copy_suffix'
            )

        mode_raw = config_dict.get('mode', cls.DEFAULTS['mode'])
        try:
            mode = DuplicationMode(str(mode_raw).lower())
        except ValueError:
            raise ConfigError(
                f"Field 'mode' must be 'lenient' or 'strict', got '{mode_raw}'",
                'mode'
            )

        return DuplicatorConfig(copy_suffix=copy_suffix, mode=mode)
