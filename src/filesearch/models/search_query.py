"""
Search criteria data models for filesearch.

This module defines the immutable criteria a scan runs with: the target
directory, the date filters, the traversal mode, the extension filter and the
output format. It also holds the extension normalization helpers.
"""

from typing import FrozenSet, Iterable, List, Optional, Tuple, Union
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator


class OutputFormat(Enum):
    """Supported output formats."""
    TABULAR = "tabular"
    JSON = "json"
    MARKDOWN = "md"

    @property
    def writes_file(self) -> bool:
        """Whether this format persists a report file instead of printing a table."""
        return self is not OutputFormat.TABULAR

    @classmethod
    def parse(cls, value: Union[str, 'OutputFormat']) -> 'OutputFormat':
        """Convert a user supplied format name to an OutputFormat."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        if name == "markdown":
            name = "md"
        try:
            return cls(name)
        except ValueError:
            valid = ", ".join(fmt.value for fmt in cls)
            raise ValueError(f"Invalid output format: {value} (expected one of: {valid})")


def normalize_extensions(raw: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    """
    Normalize an extension list into lowercase, dot-prefixed entries.

    Entries are trimmed, lowercased and prefixed with '.' when not already
    dotted. Empty segments (from doubled commas) become the literal '.'.
    Duplicates are dropped, keeping the first occurrence.

    Args:
        raw: Comma-separated string, iterable of strings, or None

    Returns:
        Tuple of normalized extensions in input order (empty means no filter)
    """
    if raw is None:
        return ()

    if isinstance(raw, str):
        if raw == "":
            return ()
        parts: List[str] = raw.split(",")
    else:
        parts = list(raw)

    normalized: List[str] = []
    for part in parts:
        ext = part.strip().lower()
        if not ext.startswith('.'):
            ext = '.' + ext
        if ext not in normalized:
            normalized.append(ext)

    return tuple(normalized)


class SearchCriteria(BaseModel):
    """
    Immutable configuration for a single scan.

    Attributes:
        target_dir: Directory to scan
        day: Day-of-month filter (0 means unconstrained)
        month: Month filter (0 means unconstrained)
        year: Year filter (0 means unconstrained)
        exact_date: Combined 'D/M/YYYY' filter, overrides the partial fields
        recursive: Deep scan when True, direct children only otherwise
        extensions: Normalized extension filter (empty means all files)
        output_format: How results are rendered
    """

    model_config = ConfigDict(frozen=True)

    target_dir: str = Field(".", min_length=1, description="Directory to scan")
    day: int = Field(0, description="Day-of-month filter")
    month: int = Field(0, description="Month filter")
    year: int = Field(0, description="Year filter")
    exact_date: Optional[str] = Field(None, description="Exact date filter in D/M/YYYY form")
    recursive: bool = Field(False, description="Recursive traversal")
    extensions: Tuple[str, ...] = Field(default_factory=tuple, description="Normalized extensions")
    output_format: OutputFormat = Field(OutputFormat.TABULAR, description="Output format")

    _extension_set: FrozenSet[str] = PrivateAttr(default_factory=frozenset)

    def model_post_init(self, __context) -> None:
        """Build the extension membership set once."""
        self._extension_set = frozenset(self.extensions)

    @field_validator('extensions', mode='before')
    @classmethod
    def validate_extensions(cls, v) -> Tuple[str, ...]:
        """Normalize extensions from a comma-separated string or a list."""
        return normalize_extensions(v)

    @field_validator('exact_date', mode='before')
    @classmethod
    def validate_exact_date(cls, v) -> Optional[str]:
        """Treat a blank exact date as absent."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator('day', 'month', 'year', mode='before')
    @classmethod
    def validate_date_field(cls, v) -> int:
        """Map an absent partial date field to 0."""
        if v is None:
            return 0
        return v

    @field_validator('output_format', mode='before')
    @classmethod
    def validate_output_format(cls, v) -> OutputFormat:
        """Validate and convert output format to enum."""
        return OutputFormat.parse(v)

    @property
    def extension_set(self) -> FrozenSet[str]:
        """Extension filter as a set for membership tests."""
        return self._extension_set

    def has_extension_filter(self) -> bool:
        """Check if an extension filter is configured."""
        return bool(self.extensions)

    def parse_exact_date(self) -> Optional[Tuple[int, int, int]]:
        """
        Parse the exact date filter.

        Returns:
            (day, month, year) when the filter splits into exactly three
            parts made of ASCII digits only, None otherwise
        """
        if not self.exact_date:
            return None

        parts = self.exact_date.split("/")
        if len(parts) != 3:
            return None

        if not all(part.isascii() and part.isdigit() for part in parts):
            return None

        day, month, year = (int(part) for part in parts)
        return day, month, year

    def describe_date_filter(self) -> Optional[str]:
        """Human readable summary of the date filter, or None when there is none."""
        if self.exact_date:
            return f"Exact match for {self.exact_date}"

        parts = []
        if self.day:
            parts.append(f"Day={self.day}")
        if self.month:
            parts.append(f"Month={self.month}")
        if self.year:
            parts.append(f"Year={self.year}")

        return ", ".join(parts) if parts else None

    def __str__(self) -> str:
        """String representation of the criteria."""
        parts = [f"Target: {self.target_dir}"]
        parts.append("Mode: deep" if self.recursive else "Mode: flat")

        if self.has_extension_filter():
            parts.append(f"Extensions: {','.join(self.extensions)}")

        date_filter = self.describe_date_filter()
        if date_filter:
            parts.append(f"Date: {date_filter}")

        parts.append(f"Output: {self.output_format.value}")

        return " | ".join(parts)
