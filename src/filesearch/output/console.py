"""
Console output helpers.

Results and the summary go to stdout; live progress and error messages go to
stderr so that piping the table stays clean.
"""

from datetime import timedelta
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..models.search_query import SearchCriteria
from ..models.search_results import ScanStats


console = Console()
err_console = Console(stderr=True)


def print_info(message: str, target: Optional[Console] = None) -> None:
    (target or console).print(Text(message, style="blue"), soft_wrap=True)


def print_success(message: str, target: Optional[Console] = None) -> None:
    (target or console).print(Text(f"✓ {message}", style="green"), soft_wrap=True)


def print_warning(message: str, target: Optional[Console] = None) -> None:
    (target or console).print(Text(f"! {message}", style="yellow"), soft_wrap=True)


def print_error(message: str, target: Optional[Console] = None) -> None:
    (target or err_console).print(Text(f"Error: {message}", style="bold red"), soft_wrap=True)


def print_criteria(criteria: SearchCriteria, target: Optional[Console] = None) -> None:
    """Print the target, scan mode and active filters before scanning."""
    print_info(f"Target: {criteria.target_dir}", target)

    if criteria.recursive:
        print_info("Mode: Deep Scan (Recursive Traversal)", target)
    else:
        print_info("Mode: Flat Scan (Current Folder Only)", target)

    if criteria.has_extension_filter():
        print_info(f"Filter: {','.join(criteria.extensions)} files", target)

    date_filter = criteria.describe_date_filter()
    if date_filter:
        print_info(f"Date Filter: {date_filter}", target)

    (target or console).print()


def format_elapsed(seconds: float) -> str:
    """Round the elapsed time to milliseconds for display."""
    return str(timedelta(milliseconds=round(seconds * 1000)))


def print_summary(stats: ScanStats, target: Optional[Console] = None) -> None:
    """Print the scanned / matched / elapsed summary panel."""
    body = "\n".join([
        f"Files Scanned: {stats.scanned}",
        f"Matches Found: {stats.matched}",
        f"Time Taken:    {format_elapsed(stats.elapsed)}",
    ])
    (target or console).print(Panel(body, title="SCAN COMPLETE", title_align="left",
                                    border_style="bold white", expand=False))
