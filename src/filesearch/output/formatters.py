"""
Result formatters for filesearch.

Renders matched records as a console table, or writes them to a JSON or
Markdown report in the output directory. Formatters never reorder or
transform the records.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union
import logging

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..errors import OutputError
from ..models.search_query import OutputFormat, normalize_extensions
from ..models.search_results import FileRecord, SearchResults, format_size


logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "output"
ALL_EXTENSIONS_TOKEN = "all"
GENERATED_TIME_FORMAT = "%a, %d %b %Y %H:%M:%S %Z"


def generate_filename(prefix: str, extensions: Union[str, Iterable[str], None], suffix: str) -> str:
    """
    Build the report filename for an extension filter.

    Args:
        prefix: Fixed filename prefix
        extensions: Extension filter, raw or normalized
        suffix: File extension of the report, without the dot

    Returns:
        Filename such as 'output_go_py.json' or 'output_all.md'
    """
    normalized = normalize_extensions(extensions)
    token = "_".join(ext[1:] for ext in normalized) if normalized else ALL_EXTENSIONS_TOKEN
    return f"{prefix}_{token}.{suffix}"


def render_table(records: Sequence[FileRecord], console: Console) -> None:
    """Print the records as an aligned DATE / SIZE / FILE / PATH table."""
    table = Table(title="Search Results", title_justify="left", header_style="bold cyan")
    table.add_column("DATE", style="yellow", no_wrap=True)
    table.add_column("SIZE", style="green", justify="right", no_wrap=True)
    table.add_column("FILE")
    table.add_column("PATH", style="dim", overflow="fold")

    for record in records:
        table.add_row(
            record.last_modified,
            format_size(record.size),
            Text(record.name),
            Text(record.path),
        )

    console.print()
    console.print(table)
    console.print()


def _report_path(directory: Union[str, Path], filename: str) -> Path:
    return Path(directory) / filename


def save_json(records: Sequence[FileRecord],
              extensions: Union[str, Iterable[str], None],
              directory: Union[str, Path] = ".",
              prefix: str = DEFAULT_PREFIX) -> Path:
    """
    Write the records to an indented JSON array.

    Returns:
        Path of the written report

    Raises:
        OutputError: If the report cannot be created or written
    """
    path = _report_path(directory, generate_filename(prefix, extensions, "json"))
    payload = [record.to_dict() for record in records]

    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
            f.write("\n")
    except (OSError, UnicodeError) as e:
        raise OutputError(str(path), e) from e

    logger.info(f"Wrote {len(payload)} records to {path}")
    return path


def escape_markdown_cell(value: str) -> str:
    """Escape pipe characters so a value stays inside its table cell."""
    return value.replace("|", "\\|")


def render_markdown(records: Sequence[FileRecord], generated_at: Optional[datetime] = None) -> str:
    """
    Render the Markdown report body.

    Args:
        records: Matched files
        generated_at: Timestamp for the header (now when None)

    Returns:
        Markdown document as a string
    """
    if generated_at is None:
        generated_at = datetime.now()
    if generated_at.tzinfo is None:
        generated_at = generated_at.astimezone()

    lines: List[str] = [
        "# File Search Results",
        f"**Generated:** {generated_at.strftime(GENERATED_TIME_FORMAT)}",
        "",
        f"**Total Files Found:** {len(records)}",
        "",
        "| Last Modified | Size | File Name | Full Path |",
        "|---|---|---|---|",
    ]

    for record in records:
        lines.append(
            f"| {record.last_modified} | {format_size(record.size)} "
            f"| {escape_markdown_cell(record.name)} | {escape_markdown_cell(record.path)} |"
        )

    return "\n".join(lines) + "\n"


def save_markdown(records: Sequence[FileRecord],
                  extensions: Union[str, Iterable[str], None],
                  directory: Union[str, Path] = ".",
                  prefix: str = DEFAULT_PREFIX,
                  generated_at: Optional[datetime] = None) -> Path:
    """
    Write the records to a Markdown table report.

    Returns:
        Path of the written report

    Raises:
        OutputError: If the report cannot be created or written
    """
    path = _report_path(directory, generate_filename(prefix, extensions, "md"))
    content = render_markdown(records, generated_at)

    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except (OSError, UnicodeError) as e:
        raise OutputError(str(path), e) from e

    logger.info(f"Wrote {len(records)} records to {path}")
    return path


def write_report(results: SearchResults,
                 console: Console,
                 directory: Union[str, Path] = ".",
                 prefix: str = DEFAULT_PREFIX) -> Optional[Path]:
    """
    Render results in the format selected by their criteria.

    Args:
        results: Completed search results
        console: Console used for the tabular format
        directory: Directory for report files
        prefix: Report filename prefix

    Returns:
        Path of the written report, or None for the tabular format

    Raises:
        OutputError: If a report file cannot be created or written
    """
    criteria = results.criteria
    output_format = criteria.output_format

    if output_format is OutputFormat.JSON:
        return save_json(results.records, criteria.extensions, directory, prefix)
    if output_format is OutputFormat.MARKDOWN:
        return save_markdown(results.records, criteria.extensions, directory, prefix,
                             generated_at=results.generated_at)

    render_table(results.records, console)
    return None
