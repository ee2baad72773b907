"""
Configuration management package for termfind.

This package provides configuration discovery, parsing and validation.
"""

from .parser import (
    CONFIG_ENV_VAR,
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    create_config_template
)

__all__ = [
    'CONFIG_ENV_VAR',
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'load_config',
    'create_config_template'
]
