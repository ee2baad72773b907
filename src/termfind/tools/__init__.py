"""
Search tools for termfind.

This module contains the directory traverser, glob matching for file names,
and the plain-text report writer.
"""

from .glob_match import GlobPatternError, compile_glob, match_glob
from .traverser import TraversalError, Traverser, search
from .report import ConsoleReporter, format_event, run_search

__all__ = [
    'GlobPatternError',
    'compile_glob',
    'match_glob',
    'TraversalError',
    'Traverser',
    'search',
    'ConsoleReporter',
    'format_event',
    'run_search'
]
