"""
Directory traverser for termfind.

This module walks a directory tree depth-first, decides per directory whether
to descend or skip it, filters files by an extension glob and a size limit,
and tests the remaining files for the search term in their name and contents.
Events are yielded as soon as each file is processed.
"""

import os
import stat
import logging
from typing import Dict, Iterator, List, Optional, Union

from ..models.config import FinderConfig
from ..models.search_request import SearchRequest
from ..models.search_results import FileMatch, FileWarning, MatchType, WalkDecision, WarningReason
from .glob_match import GlobPatternError, match_glob


logger = logging.getLogger(__name__)

CURRENT_DIR_MARKER = "."

SearchEvent = Union[FileMatch, FileWarning]


class TraversalError(Exception):
    """Raised when the walk cannot continue; aborts the whole search."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class Traverser:
    """
    Depth-first walker that reports filename and content matches.

    Entries of each directory are visited in lexical order of their names and
    a subdirectory is walked as soon as it is reached. Symlinks are reported
    as files and never followed into.
    """

    def __init__(self, config: Optional[FinderConfig] = None):
        """
        Initialize the traverser.

        Args:
            config: Configuration holding the exclusion set and size limit
        """
        self.config = config or FinderConfig()
        self.skip_folders = frozenset(self.config.skip_folders)
        self.max_bytes_per_file = self.config.limits.max_bytes_per_file
        self.reset_stats()

    def decide_directory(self, name: str, is_root: bool, recursive: bool) -> WalkDecision:
        """
        Decide what to do with a directory reached by the walk.

        The root is always descended, even when its name is excluded or
        recursion is off.
        """
        if is_root or name == CURRENT_DIR_MARKER:
            return WalkDecision.DESCEND_ROOT
        if name in self.skip_folders:
            return WalkDecision.SKIP
        if recursive:
            return WalkDecision.DESCEND
        return WalkDecision.SKIP

    def walk(self, request: SearchRequest) -> Iterator[SearchEvent]:
        """
        Walk the request's root and yield match and warning events.

        Args:
            request: Parameters of this run

        Yields:
            FileMatch and FileWarning events in walk order

        Raises:
            TraversalError: If the root or a directory cannot be read, or the
                extension pattern is malformed
        """
        root = request.root_path
        try:
            root_stat = os.lstat(root)
        except OSError as e:
            raise TraversalError(f"Cannot access root {root}: {e}", root) from e

        logger.info(f"Searching {root} for '{request.term}' in {request.extension_pattern} files")

        if stat.S_ISDIR(root_stat.st_mode):
            decision = self.decide_directory(os.path.basename(root), True, request.recursive)
            logger.debug(f"Directory {root}: {decision.value}")
            if decision.descends():
                yield from self._walk_directory(root, request)
            else:
                self._stats['directories_skipped'] += 1
        else:
            yield from self._visit_file(root, os.path.basename(root), root_stat.st_size, request)

    def _walk_directory(self, dir_path: str, request: SearchRequest) -> Iterator[SearchEvent]:
        """Visit every entry of one directory that the walk descends into."""
        self._stats['directories_traversed'] += 1
        try:
            with os.scandir(dir_path) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise TraversalError(f"Cannot read directory {dir_path}: {e}", dir_path) from e

        for entry in entries:
            path = os.path.normpath(os.path.join(dir_path, entry.name))
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                size = 0 if is_dir else entry.stat(follow_symlinks=False).st_size
            except OSError as e:
                raise TraversalError(f"Cannot stat {path}: {e}", path) from e

            if is_dir:
                decision = self.decide_directory(entry.name, False, request.recursive)
                if not decision.descends():
                    logger.debug(f"Skipping directory {path}")
                    self._stats['directories_skipped'] += 1
                    continue
                yield from self._walk_directory(path, request)
            else:
                yield from self._visit_file(path, entry.name, size, request)

    def _visit_file(self, path: str, name: str, size: int, request: SearchRequest) -> Iterator[SearchEvent]:
        """Filter one file by pattern and size, then test its name and contents."""
        self._stats['files_scanned'] += 1
        if not self._matches_pattern(name, request.extension_pattern):
            return

        if size > self.max_bytes_per_file:
            logger.warning(f"Skipping large file: {path} ({size} bytes)")
            self._stats['files_too_big'] += 1
            yield FileWarning(path=path, reason=WarningReason.TOO_BIG, size=size)
            return

        try:
            contents = self._read_file(path)
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            self._stats['read_errors'] += 1
            yield FileWarning(path=path, reason=WarningReason.UNREADABLE, error=str(e))
            return

        self._stats['files_inspected'] += 1
        matched = False

        if request.match_filename and request.term in name:
            matched = True
            yield FileMatch(path=path, match_type=MatchType.FILENAME)

        count = contents.count(request.term_bytes())
        if count:
            matched = True
            yield FileMatch(path=path, match_type=MatchType.CONTENTS, count=count)

        if matched:
            self._stats['files_matched'] += 1

    def _matches_pattern(self, name: str, pattern: str) -> bool:
        """Test a file name against the extension glob."""
        try:
            return match_glob(pattern, name)
        except GlobPatternError as e:
            raise TraversalError(str(e)) from e

    def _read_file(self, path: str) -> bytes:
        """Read the entire file into memory."""
        with open(path, 'rb') as f:
            return f.read()

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the last walk.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = {
            'directories_traversed': 0,
            'directories_skipped': 0,
            'files_scanned': 0,
            'files_inspected': 0,
            'files_matched': 0,
            'files_too_big': 0,
            'read_errors': 0
        }


def search(request: SearchRequest, config: Optional[FinderConfig] = None) -> List[SearchEvent]:
    """
    Convenience function to run a whole walk and collect its events.

    Args:
        request: Parameters of this run
        config: Optional configuration

    Returns:
        List of events in walk order

    Raises:
        TraversalError: If the walk is aborted
    """
    return list(Traverser(config).walk(request))
