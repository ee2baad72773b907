"""
Shell-style glob matching for termfind.

Patterns are matched against a bare file name, never a path. Supported syntax:
- ``*`` matches any run of non-separator characters
- ``?`` matches a single non-separator character
- ``[abc]``, ``[a-z]`` character classes, negated with a leading ``^`` or ``!``
- ``\\x`` matches ``x`` literally

Malformed patterns raise GlobPatternError instead of silently matching
literally, so a typo in the pattern fails the search.
"""

import re
from functools import lru_cache
from typing import List, Tuple


class GlobPatternError(ValueError):
    """Raised when a glob pattern is malformed."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid glob pattern '{pattern}': {reason}")


def translate_glob(pattern: str) -> str:
    """
    Convert a glob pattern to an anchored regex string.

    Args:
        pattern: Shell-style glob

    Returns:
        Regex source matching whole file names

    Raises:
        GlobPatternError: If the pattern is malformed
    """
    parts = []
    i, n = 0, len(pattern)

    while i < n:
        c = pattern[i]
        i += 1
        if c == '*':
            # Collapse runs of stars
            while i < n and pattern[i] == '*':
                i += 1
            parts.append('[^/]*')
        elif c == '?':
            parts.append('[^/]')
        elif c == '\\':
            if i >= n:
                raise GlobPatternError(pattern, "trailing backslash")
            parts.append(re.escape(pattern[i]))
            i += 1
        elif c == '[':
            class_regex, i = _translate_class(pattern, i)
            parts.append(class_regex)
        else:
            parts.append(re.escape(c))

    return r'(?s:' + ''.join(parts) + r')\Z'


def _translate_class(pattern: str, i: int) -> Tuple[str, int]:
    """
    Translate a character class starting just after its opening bracket.

    Returns:
        Tuple of (regex for the class, index just after the closing bracket)
    """
    n = len(pattern)
    negate = False
    if i < n and pattern[i] in '^!':
        negate = True
        i += 1

    ranges: List[str] = []
    nrange = 0
    while True:
        if i >= n:
            raise GlobPatternError(pattern, "unterminated character class")
        if pattern[i] == ']':
            if nrange == 0:
                raise GlobPatternError(pattern, "empty character class")
            i += 1
            break

        lo, i = _class_char(pattern, i)
        hi = lo
        if i < n and pattern[i] == '-':
            hi, i = _class_char(pattern, i + 1)
        nrange += 1

        # Reversed ranges are legal but match nothing
        if lo <= hi:
            ranges.append(re.escape(lo) if lo == hi else f'{re.escape(lo)}-{re.escape(hi)}')

    if not ranges:
        return ('[^/]' if negate else '(?!)'), i
    return f"[{'^' if negate else ''}{''.join(ranges)}]", i


def _class_char(pattern: str, i: int) -> Tuple[str, int]:
    """Read one possibly escaped character inside a class."""
    n = len(pattern)
    if i >= n:
        raise GlobPatternError(pattern, "unterminated character class")
    c = pattern[i]
    if c in '-]':
        raise GlobPatternError(pattern, f"unescaped '{c}' in character class")
    if c == '\\':
        i += 1
        if i >= n:
            raise GlobPatternError(pattern, "trailing backslash")
        c = pattern[i]
    return c, i + 1


@lru_cache(maxsize=64)
def compile_glob(pattern: str) -> re.Pattern:
    """
    Compile a glob pattern, caching the result.

    Raises:
        GlobPatternError: If the pattern is malformed
    """
    return re.compile(translate_glob(pattern))


def match_glob(pattern: str, name: str) -> bool:
    """
    Check whether a bare file name matches a glob pattern.

    Args:
        pattern: Shell-style glob
        name: File name without directory components

    Returns:
        True if the whole name matches

    Raises:
        GlobPatternError: If the pattern is malformed
    """
    return compile_glob(pattern).match(name) is not None
