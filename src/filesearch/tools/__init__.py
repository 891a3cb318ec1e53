"""
Search tools for filesearch.

This module contains the filesystem walker, the match predicate and the
search orchestration that combines them.
"""

from .fs_walker import FSWalker
from .matcher import filter_records, matches_criteria
from .search import run_search, validate_target

__all__ = ['FSWalker', 'filter_records', 'matches_criteria', 'run_search', 'validate_target']
