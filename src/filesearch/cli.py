"""
Command-line interface for filesearch.

Usage:
    filesearch --dir ~/projects --ext go,py -r          # deep scan, table
    filesearch -d . --year 2024 --month 1 -o json       # flat scan, JSON report
    filesearch --date 15/1/2024 -r -o md                # exact date, Markdown
    filesearch --init-config .filesearch.yaml           # write a settings template
"""

from pathlib import Path
from typing import Optional
import logging

import typer
from pydantic import ValidationError

from . import __version__
from .config.parser import ConfigurationError, create_config_template, load_config
from .errors import OutputError, TargetNotFoundError, TraversalError
from .log_config import configure_logging
from .models.search_query import OutputFormat, SearchCriteria
from .output.console import (
    console,
    err_console,
    print_criteria,
    print_error,
    print_success,
    print_summary,
    print_warning,
)
from .output.formatters import write_report
from .output.progress import ProgressReporter
from .tools.fs_walker import FSWalker
from .tools.search import run_search


logger = logging.getLogger(__name__)

app = typer.Typer(
    name="filesearch",
    help="Find files by modification date and extension.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"filesearch {__version__}")
        raise typer.Exit()


@app.command()
def search(
    directory: Optional[str] = typer.Option(None, "--dir", "-d", help="Target directory path"),
    day: int = typer.Option(0, "--day", "-D", help="Day (1-31)"),
    month: int = typer.Option(0, "--month", "-m", help="Month (1-12)"),
    year: int = typer.Option(0, "--year", "-y", help="Year (e.g. 2024)"),
    exact_date: Optional[str] = typer.Option(None, "--date", "-a",
                                             help="Complete date 'D/M/YYYY' (e.g. 24/1/2026)"),
    recursive: Optional[bool] = typer.Option(None, "--recursive/--flat", "-r/-f",
                                             help="Recursive (deep) or flat scan"),
    extensions: Optional[str] = typer.Option(None, "--ext", "-e",
                                             help="Comma separated extensions (e.g. go,py,txt)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output format: tabular, json, md"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings file path"),
    strict_config: bool = typer.Option(False, "--strict-config",
                                       help="Treat settings file warnings as errors"),
    init_config: Optional[Path] = typer.Option(None, "--init-config",
                                               help="Write a commented settings template and exit"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(False, "--version", callback=version_callback, is_eager=True,
                                 help="Show version and exit"),
):
    """
    Scan a directory for files matching date and extension filters.
    """
    if init_config is not None:
        try:
            create_config_template(init_config)
        except ConfigurationError as e:
            print_error(str(e))
            raise typer.Exit(code=1)
        print_success(f"Settings template written to: {init_config}")
        raise typer.Exit()

    try:
        config_result = load_config(config_path, strict_mode=strict_config)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    settings = config_result.settings
    configure_logging("DEBUG" if verbose else settings.logging.level)
    for warning in config_result.warnings:
        print_warning(warning, err_console)

    defaults = settings.defaults
    try:
        output_format = OutputFormat.parse(output) if output is not None else defaults.output_format
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--output")

    try:
        criteria = SearchCriteria(
            target_dir=directory if directory is not None else defaults.directory,
            day=day,
            month=month,
            year=year,
            exact_date=exact_date,
            recursive=defaults.recursive if recursive is None else recursive,
            extensions=defaults.get_extensions() if extensions is None else extensions,
            output_format=output_format,
        )
    except ValidationError as e:
        raise typer.BadParameter(str(e))
    logger.debug(f"Resolved criteria: {criteria}")

    print_criteria(criteria)

    live = output_format.writes_file and settings.progress.enabled
    reporter = ProgressReporter(
        err_console,
        enabled=live,
        throttle=settings.progress.throttle if criteria.recursive else 1,
    )

    try:
        with reporter:
            results = run_search(criteria, walker=FSWalker(observer=reporter), observer=reporter)
    except (TargetNotFoundError, TraversalError) as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_summary(results.stats)

    if results.is_empty():
        print_warning("No files found matching your criteria.")
        return

    try:
        report_path = write_report(results, console,
                                   directory=settings.output.get_output_path(),
                                   prefix=settings.output.prefix)
    except OutputError as e:
        print_error(str(e))
        return

    if report_path is not None:
        label = "JSON" if output_format is OutputFormat.JSON else "Markdown"
        print_success(f"{label} saved to: {report_path}")


def main():
    """Entry point for the console script."""
    app()


if __name__ == "__main__":
    main()
