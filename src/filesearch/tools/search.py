"""
Search orchestration for filesearch.

Ties the walker and the match predicate together: validates the target,
walks it, keeps the accepted records in traversal order and times the run.
"""

import os
import time
from typing import Optional, Protocol
import logging

from ..errors import TargetNotFoundError
from ..models.search_query import SearchCriteria
from ..models.search_results import SearchResults
from .fs_walker import FSWalker
from .matcher import filter_records


logger = logging.getLogger(__name__)


class MatchObserver(Protocol):
    """Receives an event for every accepted file."""

    def on_match(self, path: str, matched: int) -> None: ...


def validate_target(target_dir: str) -> None:
    """
    Ensure the target exists and is a directory.

    Raises:
        TargetNotFoundError: If the target is missing or not a directory
    """
    if not os.path.exists(target_dir):
        raise TargetNotFoundError(target_dir)
    if not os.path.isdir(target_dir):
        raise TargetNotFoundError(target_dir, "is not a directory")


def run_search(criteria: SearchCriteria,
               walker: Optional[FSWalker] = None,
               observer: Optional[MatchObserver] = None) -> SearchResults:
    """
    Scan the target directory and collect matching files.

    Args:
        criteria: What to scan and how to filter
        walker: Walker to use (a fresh FSWalker when None)
        observer: Optional receiver of match events

    Returns:
        SearchResults with records in traversal order

    Raises:
        TargetNotFoundError: If the target directory does not exist
        TraversalError: If the target directory cannot be listed
    """
    validate_target(criteria.target_dir)

    if walker is None:
        walker = FSWalker()

    logger.debug(f"Starting search: {criteria}")
    results = SearchResults(criteria=criteria)
    matched = 0
    start = time.perf_counter()

    candidates = walker.walk(criteria.target_dir, recursive=criteria.recursive)
    for record in filter_records(candidates, criteria):
        matched += 1
        results.add_record(record)
        if observer is not None:
            observer.on_match(record.path, matched)

    stats = walker.get_stats()
    stats.matched = matched
    stats.elapsed = time.perf_counter() - start
    results.stats = stats

    logger.info(f"Search finished: {results}")
    return results
