"""
YAML configuration loading for termfind.

A configuration file is taken from, in order: an explicit path, the
TERMFIND_CONFIG environment variable, or the first known file name found in
the current directory, the home directory or ~/.config/termfind. Without one,
the built-in defaults apply.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from ..models.config import FinderConfig, validate_config_dict


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TERMFIND_CONFIG"


@dataclass
class ConfigParseResult:
    """
    Outcome of loading a configuration.

    Attributes:
        config: Validated configuration
        warnings: Non-fatal problems found in the configuration
        config_path: File the configuration came from, None for defaults
        is_default: Whether no file was found and defaults were used
    """
    config: FinderConfig
    warnings: List[str]
    config_path: Optional[Path]
    is_default: bool

    @property
    def project_folder(self) -> Optional[Path]:
        """Directory holding the configuration file, if one was loaded."""
        if self.config_path is None:
            return None
        return self.config_path.resolve().parent


class ConfigurationError(Exception):
    """Raised when configuration cannot be read or is invalid."""
    pass


class ConfigParser:
    """Locates and validates termfind configuration files."""

    DEFAULT_CONFIG_NAMES = [
        '.termfind.yaml',
        '.termfind.yml',
        'termfind.yaml',
        'termfind.yml'
    ]

    SECTION_COMMENTS = [
        ("skip_folders", "Directory names that are never searched, even recursively"),
        ("limits", "Files larger than max_bytes_per_file are reported and skipped"),
        ("search", "Defaults for the command line flags"),
        ("logging", "Diagnostics written to stderr")
    ]

    def __init__(self, strict_mode: bool = False):
        """
        Args:
            strict_mode: Reject configurations that produce warnings
        """
        self.strict_mode = strict_mode

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load the configuration for this run.

        Args:
            config_path: Explicit configuration file, overriding discovery

        Returns:
            ConfigParseResult with the validated configuration

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        config_path = config_path or os.getenv(CONFIG_ENV_VAR)

        if config_path:
            config_path = Path(config_path).expanduser()
            if not config_path.is_file():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            config_data = self._read_yaml(config_path)
        else:
            config_path = self._discover()
            config_data = self._read_yaml(config_path) if config_path else {}

        try:
            config = FinderConfig.from_dict(validate_config_dict(config_data))
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        warnings = config.validate_configuration()
        if self.strict_mode and warnings:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

        is_default = config_path is None
        if is_default:
            warnings.append("No configuration file found, using default settings")

        logger.info(f"Configuration loaded from {config_path or 'defaults'}")
        return ConfigParseResult(config=config, warnings=warnings, config_path=config_path, is_default=is_default)

    def _discover(self) -> Optional[Path]:
        """Find the first known configuration file in the search directories."""
        for directory in (Path.cwd(), Path.home(), Path.home() / '.config' / 'termfind'):
            for name in self.DEFAULT_CONFIG_NAMES:
                candidate = directory / name
                if candidate.is_file():
                    logger.debug(f"Found configuration file: {candidate}")
                    return candidate
        return None

    def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """
        Parse a YAML file into a mapping; empty files give an empty mapping.

        Raises:
            ConfigurationError: If the file cannot be read or is not a YAML mapping
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")
        return data

    def get_config_template(self, config: Optional[FinderConfig] = None) -> str:
        """Render a configuration as commented YAML (defaults when omitted)."""
        config_dict = (config or FinderConfig()).to_dict()
        lines = [
            "# termfind configuration",
            f"# Point {CONFIG_ENV_VAR} at this file or keep it as .termfind.yaml in your project",
            "",
        ]
        for section, comment in self.SECTION_COMMENTS:
            lines.append(f"# {comment}")
            lines.append(yaml.dump({section: config_dict[section]}, default_flow_style=False, sort_keys=False).rstrip())
            lines.append("")
        return "\n".join(lines)


def load_config(config_path: Optional[Union[str, Path]] = None, strict_mode: bool = False) -> ConfigParseResult:
    """
    Convenience function to load configuration.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    return ConfigParser(strict_mode=strict_mode).load_config(config_path)


def create_config_template(output_path: Union[str, Path], config: Optional[FinderConfig] = None) -> None:
    """
    Write a commented configuration file.

    Raises:
        ConfigurationError: If the file cannot be written
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(ConfigParser().get_config_template(config), encoding='utf-8')
    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
