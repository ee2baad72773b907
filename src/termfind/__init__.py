"""
termfind - Core Package

A local developer search utility that walks a directory tree and reports
files whose name or contents contain a literal search term.
"""

__version__ = "0.1.0"
__author__ = "termfind Team"
