"""
filesearch - Core Package

A command-line utility that walks a directory tree, filters files by
modification date and extension, and reports the matches as a console table,
a JSON file, or a Markdown file.
"""

__version__ = "1.1.0"
__author__ = "filesearch Team"
