"""
Configuration data models for termfind.

This module defines the data structures for application configuration:
the directory exclusion set, file size limits, search defaults and logging.
"""

from typing import Dict, List, Any
import logging
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .search_request import DEFAULT_EXTENSION_PATTERN


DEFAULT_SKIP_FOLDERS = ["vendor", "node_modules", ".git"]
DEFAULT_MAX_BYTES_PER_FILE = 1048576


class LimitsConfig(BaseModel):
    """
    Configuration for per-file limits.

    Attributes:
        max_bytes_per_file: Largest file (bytes) that is read and searched
    """

    model_config = ConfigDict(extra='forbid')

    max_bytes_per_file: int = Field(
        DEFAULT_MAX_BYTES_PER_FILE, ge=0, description="Maximum file size to search (bytes)"
    )

    def get_max_size_human_readable(self) -> str:
        """Get max file size in human-readable format."""
        size = float(self.max_bytes_per_file)
        for unit in ['B', 'KB', 'MB', 'GB']:
            if size < 1024.0:
                return f"{size:.1f} {unit}"
            size /= 1024.0
        return f"{size:.1f} TB"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class SearchDefaults(BaseModel):
    """
    Defaults used when a run does not set a parameter explicitly.

    Attributes:
        extension_pattern: Glob applied to file names
        recursive: Whether to descend into subdirectories
        match_filename: Whether file names are also tested
    """

    model_config = ConfigDict(extra='forbid')

    extension_pattern: str = Field(DEFAULT_EXTENSION_PATTERN, min_length=1, description="Default glob")
    recursive: bool = Field(False, description="Default recursion flag")
    match_filename: bool = Field(False, description="Default filename-match flag")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class LoggingConfig(BaseModel):
    """
    Logging settings applied by the command line.

    Attributes:
        level: Root logger level name
        format: Log record format string
    """

    model_config = ConfigDict(extra='forbid')

    level: str = Field("WARNING", description="Root logger level")
    format: str = Field("%(levelname)s %(name)s: %(message)s", description="Log record format")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and validate the level name."""
        level = v.strip().upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Invalid logging level: {v}")
        return level

    def get_level(self) -> int:
        """Get the numeric logging level."""
        return logging.getLevelName(self.level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class FinderConfig(BaseModel):
    """
    Main configuration class for termfind.

    Attributes:
        skip_folders: Directory names that are never descended into
        limits: Per-file limits
        search: Defaults for search parameters
        logging: Logging settings
    """

    model_config = ConfigDict(extra='forbid')

    skip_folders: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SKIP_FOLDERS),
        description="Directory names never descended into"
    )
    limits: LimitsConfig = Field(default_factory=LimitsConfig, description="Per-file limits")
    search: SearchDefaults = Field(default_factory=SearchDefaults, description="Search defaults")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    @field_validator('skip_folders')
    @classmethod
    def validate_skip_folders(cls, v: List[str]) -> List[str]:
        """Exclusions are bare directory names, deduplicated in order."""
        normalized = []
        for name in v:
            if not isinstance(name, str) or not name.strip():
                raise ValueError("Skip folder names cannot be empty")
            name = name.strip()
            if '/' in name or '\\' in name:
                raise ValueError(f"Skip folder must be a bare directory name, got: {name}")
            if name not in normalized:
                normalized.append(name)
        return normalized

    def validate_configuration(self) -> List[str]:
        """
        Check for settings that are legal but probably unintended.

        Returns:
            List of warning messages
        """
        warnings = []

        if not self.skip_folders:
            warnings.append("No skip folders configured - version control and dependency folders will be searched")

        if self.limits.max_bytes_per_file == 0:
            warnings.append("max_bytes_per_file is 0 - only empty files will be searched")
        elif self.limits.max_bytes_per_file > 50000000:  # 50MB
            warnings.append("Very high max_bytes_per_file limit may cause memory issues")

        if '.' in self.skip_folders:
            warnings.append("'.' in skip_folders has no effect, the root folder is always searched")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'skip_folders': list(self.skip_folders),
            'limits': self.limits.to_dict(),
            'search': self.search.to_dict(),
            'logging': self.logging.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FinderConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        parts = [f"Skip folders: {len(self.skip_folders)}"]
        parts.append(f"Max file size: {self.limits.get_max_size_human_readable()}")
        parts.append(f"Pattern: {self.search.extension_pattern}")
        parts.append(f"Recursive: {self.search.recursive}")

        return " | ".join(parts)


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a configuration dictionary using Pydantic.

    Args:
        config_data: Dictionary containing configuration data

    Returns:
        Validated and normalized configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    try:
        return FinderConfig.model_validate(config_data).to_dict()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}") from e
