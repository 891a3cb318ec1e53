"""
Output package for filesearch: result formatters, live progress and
console helpers.
"""

from .formatters import (
    generate_filename,
    render_markdown,
    render_table,
    save_json,
    save_markdown,
    write_report,
)
from .progress import ProgressReporter

__all__ = [
    'generate_filename',
    'render_markdown',
    'render_table',
    'save_json',
    'save_markdown',
    'write_report',
    'ProgressReporter',
]
