"""
Search result data models for termfind.

This module defines the events emitted while walking a tree: filename and
content matches, per-file warnings, and the per-directory walk decision.
Every event renders to exactly one report line.
"""

import os
from typing import Annotated, Dict, Any, Optional
from pathlib import Path
from enum import Enum
from pydantic import BaseModel, Field, PlainValidator, model_validator


def _validate_fs_text(value: Any) -> str:
    """Accept names as the OS returns them, undecodable bytes included."""
    if isinstance(value, bytes):
        value = os.fsdecode(value)
    if not isinstance(value, str):
        raise ValueError(f"Expected a path string, got {type(value).__name__}")
    if not value:
        raise ValueError("Path cannot be empty")
    return value


# Paths from os.scandir and sys.argv may carry surrogate escapes for bytes
# that are not valid UTF-8; plain str fields would reject them.
FsText = Annotated[str, PlainValidator(_validate_fs_text)]


class MatchType(Enum):
    """Enumeration of the two independent match tests."""
    FILENAME = "filename"
    CONTENTS = "contents"


class WarningReason(Enum):
    """Why a file that passed the extension filter was not searched."""
    TOO_BIG = "too_big"
    UNREADABLE = "unreadable"


class WalkDecision(Enum):
    """What the traverser does with a directory it reaches."""
    SKIP = "skip"
    DESCEND = "descend"
    DESCEND_ROOT = "descend_root"

    def descends(self) -> bool:
        """Check if the directory contents are walked."""
        return self is not WalkDecision.SKIP


class FileMatch(BaseModel):
    """
    A file whose name or contents contain the search term.

    Attributes:
        path: Path of the file as reached by the walk
        match_type: Which test matched
        count: Non-overlapping occurrences in the contents (contents matches only)
    """

    path: FsText = Field(..., description="Path of the matched file")
    match_type: MatchType = Field(..., description="Which test matched")
    count: Optional[int] = Field(None, ge=1, description="Occurrences of the term in the contents")

    @model_validator(mode='after')
    def validate_count(self):
        """Contents matches carry a count, filename matches do not."""
        if self.match_type == MatchType.CONTENTS and self.count is None:
            raise ValueError("Contents match requires an occurrence count")
        if self.match_type == MatchType.FILENAME and self.count is not None:
            raise ValueError("Filename match does not carry an occurrence count")
        return self

    def get_filename(self) -> str:
        """Get just the filename without directory path."""
        return Path(self.path).name

    def to_dict(self) -> Dict[str, Any]:
        """Convert file match to dictionary representation."""
        data = self.model_dump()
        data['match_type'] = self.match_type.value
        data['filename'] = self.get_filename()
        return data

    def __str__(self) -> str:
        if self.match_type == MatchType.FILENAME:
            return f"Filename: {self.path}"
        return f"Contents: {self.path} ({self.count})"


class FileWarning(BaseModel):
    """
    A matching file that was skipped without aborting the walk.

    Attributes:
        path: Path of the skipped file
        reason: Why it was skipped
        size: File size in bytes (too-big warnings)
        error: Description of the read failure (unreadable warnings)
    """

    path: FsText = Field(..., description="Path of the skipped file")
    reason: WarningReason = Field(..., description="Why the file was skipped")
    size: Optional[int] = Field(None, ge=0, description="File size in bytes")
    error: Optional[str] = Field(None, description="Read failure description")

    def to_dict(self) -> Dict[str, Any]:
        """Convert warning to dictionary representation."""
        data = self.model_dump()
        data['reason'] = self.reason.value
        return data

    def __str__(self) -> str:
        if self.reason == WarningReason.TOO_BIG:
            return f"**ERROR: Skipping file too big {self.path}"
        return f"**ERROR: Could not read from {self.path}"
