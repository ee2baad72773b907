"""
Unit tests for the plain-text report.
"""

import io
import os
import shutil
import tempfile
from pathlib import Path

import pytest

from termfind.models.config import FinderConfig
from termfind.models.search_request import SearchRequest
from termfind.models.search_results import FileMatch, FileWarning, MatchType, WarningReason
from termfind.tools.report import HEADER_LINES, ConsoleReporter, format_event, run_search
from termfind.tools.traverser import TraversalError, Traverser


class TestConsoleReporter:
    """Test cases for ConsoleReporter."""

    def test_header(self):
        """Test the header banner."""
        stream = io.StringIO()
        ConsoleReporter(stream).header()

        assert stream.getvalue() == "\nSearch Results\n==============\n"

    def test_emit(self):
        """Test one line per event."""
        stream = io.StringIO()
        reporter = ConsoleReporter(stream)

        reporter.emit(FileMatch(path="a.go", match_type=MatchType.CONTENTS, count=2))
        reporter.emit(FileWarning(path="b.go", reason=WarningReason.TOO_BIG, size=10))

        assert stream.getvalue().splitlines() == [
            "Contents: a.go (2)",
            "**ERROR: Skipping file too big b.go",
        ]
        assert reporter.lines_written == 2

    def test_emit_undecodable_name(self):
        """Test that names the stream cannot encode are escaped, not fatal."""
        buffer = io.BytesIO()
        stream = io.TextIOWrapper(buffer, encoding='utf-8', write_through=True)
        reporter = ConsoleReporter(stream)

        reporter.emit(FileMatch(path=os.fsdecode(b"\xff.go"), match_type=MatchType.CONTENTS, count=1))
        reporter.emit(FileMatch(path="ok.go", match_type=MatchType.FILENAME))

        assert buffer.getvalue().decode('utf-8').splitlines() == [
            "Contents: \\udcff.go (1)",
            "Filename: ok.go",
        ]
        assert reporter.lines_written == 2

    def test_format_event(self):
        """Test event formatting."""
        assert format_event(FileMatch(path="x", match_type=MatchType.FILENAME)) == "Filename: x"


class TestRunSearch:
    """Test cases for run_search."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.test_root = Path(self.temp_dir)
        (self.test_root / "a.go").write_text("redred")
        (self.test_root / "big.go").write_text("red" * 10)
        (self.test_root / "red_b.go").write_text("blue")
        (self.test_root / "vendor").mkdir()
        (self.test_root / "vendor" / "v.go").write_text("red")

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_full_report(self):
        """Test header followed by events in walk order."""
        stream = io.StringIO()
        request = SearchRequest(term="red", root_path=self.temp_dir, recursive=True, match_filename=True)
        config = FinderConfig(limits={'max_bytes_per_file': 20})

        stats = run_search(request, config=config, stream=stream)
        root = self.temp_dir

        assert stream.getvalue().splitlines() == HEADER_LINES + [
            f"Contents: {os.path.join(root, 'a.go')} (2)",
            f"**ERROR: Skipping file too big {os.path.join(root, 'big.go')}",
            f"Filename: {os.path.join(root, 'red_b.go')}",
        ]
        assert stats['files_matched'] == 2
        assert stats['files_too_big'] == 1
        assert stats['directories_skipped'] == 1

    def test_header_only_when_nothing_matches(self):
        """Test that a search without matches still succeeds."""
        stream = io.StringIO()
        request = SearchRequest(term="green", root_path=self.temp_dir)

        run_search(request, stream=stream)

        assert stream.getvalue().splitlines() == HEADER_LINES

    def test_error_keeps_emitted_lines(self):
        """Test that a fatal error propagates after the header is written."""
        stream = io.StringIO()
        request = SearchRequest(term="red", root_path=self.temp_dir, extension_pattern="[")

        with pytest.raises(TraversalError):
            run_search(request, stream=stream, traverser=Traverser())

        assert stream.getvalue().splitlines() == HEADER_LINES
