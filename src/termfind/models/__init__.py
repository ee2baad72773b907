"""
Data models for termfind.

This module contains all the core data structures used throughout the system.
"""

from .search_request import SearchRequest
from .search_results import FileMatch, FileWarning, MatchType, WalkDecision, WarningReason
from .config import FinderConfig

__all__ = [
    'SearchRequest',
    'FileMatch',
    'FileWarning',
    'MatchType',
    'WalkDecision',
    'WarningReason',
    'FinderConfig'
]
