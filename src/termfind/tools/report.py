"""
Plain-text search report for termfind.

The report is a header banner followed by one line per event, written and
flushed as soon as the traverser yields it.
"""

import sys
import logging
from typing import Dict, Optional, TextIO

from ..models.config import FinderConfig
from ..models.search_request import SearchRequest
from .traverser import SearchEvent, Traverser


logger = logging.getLogger(__name__)

HEADER_LINES = ["", "Search Results", "=============="]


def format_event(event: SearchEvent) -> str:
    """Render one event as its report line."""
    return str(event)


class ConsoleReporter:
    """Writes report lines to a text stream without buffering them."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.lines_written = 0

    def header(self) -> None:
        for line in HEADER_LINES:
            self._write(line)

    def emit(self, event: SearchEvent) -> None:
        self._write(format_event(event))
        self.lines_written += 1

    def _write(self, line: str) -> None:
        text = line + "\n"
        try:
            self.stream.write(text)
        except UnicodeEncodeError:
            # Undecodable file names come back from the OS as lone surrogates.
            encoding = getattr(self.stream, 'encoding', None) or 'utf-8'
            self.stream.write(text.encode(encoding, 'backslashreplace').decode(encoding))
        self.stream.flush()


def run_search(
    request: SearchRequest,
    config: Optional[FinderConfig] = None,
    stream: Optional[TextIO] = None,
    traverser: Optional[Traverser] = None,
) -> Dict[str, int]:
    """
    Print the report for one search.

    Args:
        request: Parameters of this run
        config: Configuration used when no traverser is given
        stream: Where report lines go (default: stdout)
        traverser: Traverser to use (default: a new one built from config)

    Returns:
        Traverser statistics for the run

    Raises:
        TraversalError: If the walk is aborted; lines already written stay written
    """
    traverser = traverser or Traverser(config)
    traverser.reset_stats()
    reporter = ConsoleReporter(stream)

    reporter.header()
    for event in traverser.walk(request):
        reporter.emit(event)

    stats = traverser.get_stats()
    logger.info(
        f"Search finished: {stats['files_matched']} matching files, "
        f"{stats['files_inspected']} searched, {reporter.lines_written} report lines"
    )
    return stats
