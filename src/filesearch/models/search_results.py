"""
Search results data models for filesearch.

This module defines the records produced by the traversal engine, the scan
counters, and the complete result set handed to the formatters.
"""

import os
import sys
from typing import Dict, List, Any
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from .search_query import SearchCriteria


DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

KB = 1024
MB = KB * 1024
GB = MB * 1024


def format_size(size: int) -> str:
    """
    Format a byte count using the largest fitting unit.

    Bytes are rendered as a bare integer, KB/MB/GB with two decimals,
    using 1024-based thresholds.

    Args:
        size: Size in bytes

    Returns:
        Human readable size such as '0 B' or '1.50 KB'
    """
    if size >= GB:
        return f"{size / GB:.2f} GB"
    if size >= MB:
        return f"{size / MB:.2f} MB"
    if size >= KB:
        return f"{size / KB:.2f} KB"
    return f"{size} B"


def to_display_text(value: str) -> str:
    """Replace surrogate-escaped bytes from undecodable filenames with U+FFFD."""
    return os.fsencode(value).decode(sys.getfilesystemencoding(), errors="replace")


class FileRecord(BaseModel):
    """
    Metadata about one regular file seen during traversal.

    Attributes:
        name: Base filename
        path: Traversal directory joined with the filename
        size: File size in bytes
        modified_time: Last modification timestamp
    """

    name: str = Field(..., min_length=1, description="Base filename")
    path: str = Field(..., min_length=1, description="Full path to the file")
    size: int = Field(..., ge=0, description="File size in bytes")
    modified_time: datetime = Field(..., description="Last modification timestamp")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names that carry a directory component."""
        if "/" in v or (os.sep != "/" and os.sep in v):
            raise ValueError(f"File name must not contain a path separator: {v}")
        return v

    @classmethod
    def from_stat(cls, directory: str, name: str, stat_result: os.stat_result) -> 'FileRecord':
        """
        Create a record from a directory, a filename and its stat result.

        Undecodable bytes in the name or directory are replaced with U+FFFD
        so the record can always be validated and written to a report.
        """
        return cls(
            name=to_display_text(name),
            path=to_display_text(os.path.join(directory, name)),
            size=stat_result.st_size,
            modified_time=datetime.fromtimestamp(stat_result.st_mtime),
        )

    @property
    def extension(self) -> str:
        """Lowercase extension including the dot, or '' when there is none."""
        return os.path.splitext(self.name)[1].lower()

    @property
    def last_modified(self) -> str:
        """Modification time in the fixed display layout."""
        return self.modified_time.strftime(DISPLAY_TIME_FORMAT)

    def get_size_human_readable(self) -> str:
        """Get file size in human-readable format."""
        return format_size(self.size)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to its JSON report representation."""
        return {
            'name': self.name,
            'path': self.path,
            'last_modified': self.last_modified,
            'size_bytes': self.size,
        }

    def __str__(self) -> str:
        return f"{self.last_modified}  {self.get_size_human_readable()}  {self.path}"


class ScanStats(BaseModel):
    """
    Counters collected while scanning.

    Attributes:
        scanned: Files examined (directories are not counted)
        matched: Files accepted by the match predicate
        directories: Directories visited during a deep scan
        skipped: Entries skipped because they could not be read
        elapsed: Wall-clock duration of the scan in seconds
    """

    scanned: int = Field(0, ge=0)
    matched: int = Field(0, ge=0)
    directories: int = Field(0, ge=0)
    skipped: int = Field(0, ge=0)
    elapsed: float = Field(0.0, ge=0.0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert counters to dictionary representation."""
        return self.model_dump()


class SearchResults(BaseModel):
    """
    Complete results from a scan.

    Records keep traversal order; nothing here sorts them.

    Attributes:
        criteria: The criteria the scan ran with
        records: Matched files in traversal order
        stats: Scan counters
        generated_at: When the scan finished
    """

    criteria: SearchCriteria = Field(..., description="Criteria used for the scan")
    records: List[FileRecord] = Field(default_factory=list, description="Matched files")
    stats: ScanStats = Field(default_factory=ScanStats, description="Scan counters")
    generated_at: datetime = Field(default_factory=datetime.now, description="When the scan finished")

    def get_match_count(self) -> int:
        """Get the total number of matches."""
        return len(self.records)

    def is_empty(self) -> bool:
        """Check if the scan produced no matches."""
        return not self.records

    def add_record(self, record: FileRecord) -> None:
        """Append a matched record, keeping traversal order."""
        self.records.append(record)

    def to_dict(self) -> Dict[str, Any]:
        """Convert search results to dictionary representation."""
        return {
            'records': [record.to_dict() for record in self.records],
            'match_count': self.get_match_count(),
            'stats': self.stats.to_dict(),
            'generated_at': self.generated_at.isoformat(),
        }

    def __str__(self) -> str:
        """String representation of search results."""
        parts = [f"Found {self.get_match_count()} matches"]
        parts.append(f"Scanned {self.stats.scanned} files")
        parts.append(f"Took {self.stats.elapsed:.2f}s")
        return " | ".join(parts)
