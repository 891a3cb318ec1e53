"""
Data models for filesearch.

This module contains all the core data structures used throughout the system.
"""

from .search_query import OutputFormat, SearchCriteria, normalize_extensions
from .search_results import FileRecord, ScanStats, SearchResults, format_size
from .config import FileSearchSettings

__all__ = [
    'OutputFormat',
    'SearchCriteria',
    'normalize_extensions',
    'FileRecord',
    'ScanStats',
    'SearchResults',
    'format_size',
    'FileSearchSettings',
]
