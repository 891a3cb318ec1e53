"""
Live progress display for file-producing scans.

Shows a transient status line with the path being examined and the running
counts, and prints every match as a persistent line. Disabled for the tabular
format so the final table is not mixed with status output.
"""

import os
from typing import Optional

from rich.console import Console
from rich.status import Status
from rich.text import Text


def shorten_left(value: str, width: int) -> str:
    """Keep the tail of a long value, prefixed with '...'."""
    if len(value) <= width:
        return value
    return "..." + value[-(width - 3):]


def shorten_right(value: str, width: int) -> str:
    """Keep the head of a long value, suffixed with '...'."""
    if len(value) <= width:
        return value
    return value[:width - 3] + "..."


class ProgressReporter:
    """
    Transient status line plus persistent match lines.

    File updates are throttled: the status line changes only every
    `throttle` files. Directory updates are always shown.
    """

    def __init__(self, console: Console, enabled: bool = True, throttle: int = 50,
                 dir_width: int = 60, name_width: int = 40):
        self.console = console
        self.enabled = enabled
        self.throttle = max(1, throttle)
        self.dir_width = dir_width
        self.name_width = name_width
        self._status: Optional[Status] = None

    def start(self) -> None:
        if not self.enabled or self._status is not None:
            return
        self._status = self.console.status(Text("Scanning...", style="cyan"), spinner="dots")
        self._status.start()

    def stop(self) -> None:
        """Clear the transient status line."""
        if self._status is not None:
            self._status.stop()
            self._status = None

    def __enter__(self) -> 'ProgressReporter':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _update(self, text: Text) -> None:
        if self._status is not None:
            self._status.update(text)

    def on_directory(self, path: str) -> None:
        if not self.enabled:
            return
        self._update(Text(f"Scanning: {shorten_left(path, self.dir_width)}", style="cyan"))

    def on_file(self, path: str, scanned: int) -> None:
        if not self.enabled or scanned % self.throttle:
            return
        name = shorten_right(os.path.basename(path), self.name_width)
        self._update(Text(f"Checking: {name} [Scanned: {scanned}]", style="dim"))

    def on_match(self, path: str, matched: int) -> None:
        if not self.enabled:
            return
        name = shorten_right(os.path.basename(path), self.name_width)
        self.console.print(Text(f"✓ Match: {name} [Found: {matched}]", style="green"))
