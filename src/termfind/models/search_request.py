"""
Search request data model for termfind.

This module defines the run parameters of a single search: the literal term,
the root folder, the extension glob, and the recursion and filename flags.
"""

from typing import Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .search_results import FsText


DEFAULT_EXTENSION_PATTERN = "*.go"


class SearchRequest(BaseModel):
    """
    Represents one search run with all of its parameters.

    The request is frozen: it is built once before the walk begins and is
    never mutated while the walk is in progress.

    Attributes:
        term: Literal, case-sensitive substring to search for
        root_path: Directory the walk starts from, kept exactly as given
        extension_pattern: Shell-style glob tested against bare file names
        recursive: Whether to descend into subdirectories of the root
        match_filename: Whether file names are also tested for the term
    """

    model_config = ConfigDict(frozen=True)

    term: str = Field(..., min_length=1, description="Literal substring to search for")
    root_path: FsText = Field(..., description="Starting directory")
    extension_pattern: str = Field(DEFAULT_EXTENSION_PATTERN, min_length=1, description="Glob for file names")
    recursive: bool = Field(False, description="Descend into subdirectories")
    match_filename: bool = Field(False, description="Also test file names for the term")

    @field_validator('root_path')
    @classmethod
    def validate_root_path(cls, v: str) -> str:
        """Reject blank root paths without normalizing the given one."""
        if not v.strip():
            raise ValueError("Root path cannot be empty")
        return v

    def term_bytes(self) -> bytes:
        """Get the search term as it is looked up in file contents."""
        return self.term.encode('utf-8')

    def to_dict(self) -> Dict[str, Any]:
        """Convert the search request to a dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchRequest':
        """Create a SearchRequest instance from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the search request."""
        parts = [f"Term: '{self.term}'"]
        parts.append(f"Root: {self.root_path}")
        parts.append(f"Pattern: {self.extension_pattern}")
        parts.append(f"Recursive: {self.recursive}")
        parts.append(f"Filenames: {self.match_filename}")
        return " | ".join(parts)
