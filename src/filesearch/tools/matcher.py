"""
Match predicate for filesearch.

Decides whether a file record satisfies the extension and date filters of a
SearchCriteria. Pure functions only; no filesystem access.
"""

from typing import Iterable, Iterator

from ..models.search_query import SearchCriteria
from ..models.search_results import FileRecord


def matches_criteria(record: FileRecord, criteria: SearchCriteria) -> bool:
    """
    Check whether a file record passes the extension and date filters.

    A well-formed exact date (three integer parts) is the only date
    criterion when present. Otherwise every non-zero partial field must
    equal the corresponding field of the modification date.

    Args:
        record: File to check
        criteria: Filters to apply

    Returns:
        True if the record is accepted
    """
    extensions = criteria.extension_set
    if extensions and record.extension not in extensions:
        return False

    modified = record.modified_time

    exact = criteria.parse_exact_date()
    if exact is not None:
        day, month, year = exact
        return (modified.day, modified.month, modified.year) == (day, month, year)

    if criteria.year and criteria.year != modified.year:
        return False
    if criteria.month and criteria.month != modified.month:
        return False
    if criteria.day and criteria.day != modified.day:
        return False

    return True


def filter_records(records: Iterable[FileRecord], criteria: SearchCriteria) -> Iterator[FileRecord]:
    """Lazily yield the records accepted by matches_criteria, preserving order."""
    for record in records:
        if matches_criteria(record, criteria):
            yield record
