"""
Filesystem walker for filesearch.

This module enumerates candidate files under a target directory, either the
direct children only (flat scan) or the full tree (deep scan), and yields a
FileRecord for every regular file whose metadata can be read. Matching is left
to the caller so that traversal and filtering can be tested separately.
"""

import os
from typing import Iterator, List, Optional, Protocol
import logging

from ..errors import TraversalError
from ..models.search_results import FileRecord, ScanStats


logger = logging.getLogger(__name__)


class TraversalObserver(Protocol):
    """Receives traversal events, e.g. for live progress display."""

    def on_directory(self, path: str) -> None: ...

    def on_file(self, path: str, scanned: int) -> None: ...


class FSWalker:
    """
    Filesystem walker that yields file records lazily.

    Flat scans list the target directory once and skip subdirectories. Deep
    scans descend depth-first; a subdirectory that cannot be read is pruned
    and traversal continues with its siblings. Only a failure on the target
    directory itself is fatal.

    Counters are kept per walker instance and exposed through get_stats().
    """

    def __init__(self, observer: Optional[TraversalObserver] = None):
        """
        Initialize the filesystem walker.

        Args:
            observer: Optional receiver of directory and file events
        """
        self.observer = observer
        self._stats = ScanStats()

    def walk(self, root: str, recursive: bool = False) -> Iterator[FileRecord]:
        """
        Walk a directory and yield a record for every readable file.

        Args:
            root: Directory to scan
            recursive: Descend into subdirectories when True

        Yields:
            FileRecord objects in enumeration order

        Raises:
            TraversalError: If the root directory itself cannot be listed
        """
        if recursive:
            logger.info(f"Deep scan of {root}")
            return self._walk_deep(root)

        logger.info(f"Flat scan of {root}")
        return self._walk_flat(root)

    def _walk_flat(self, root: str) -> Iterator[FileRecord]:
        """List the direct children of root, skipping directories."""
        try:
            entries = os.scandir(root)
        except OSError as e:
            raise TraversalError(root, e) from e

        with entries:
            while True:
                # Only a failure while listing the root itself is fatal.
                try:
                    entry = next(entries)
                except StopIteration:
                    break
                except OSError as e:
                    raise TraversalError(root, e) from e

                try:
                    if entry.is_dir():
                        continue
                    stat_result = entry.stat()
                except OSError as e:
                    logger.debug(f"Skipping unreadable entry {entry.path}: {e}")
                    self._stats.skipped += 1
                    continue

                self._stats.scanned += 1
                self._notify_file(entry.path)
                yield FileRecord.from_stat(root, entry.name, stat_result)

    def _walk_deep(self, root: str) -> Iterator[FileRecord]:
        """Depth-first descent from root, pruning unreadable subdirectories."""
        root_errors: List[OSError] = []
        normalized_root = os.path.normpath(root)

        def on_error(error: OSError) -> None:
            if error.filename is not None and os.path.normpath(error.filename) == normalized_root:
                root_errors.append(error)
                return
            logger.debug(f"Skipping unreadable directory {error.filename}: {error}")
            self._stats.skipped += 1

        for current_dir, _subdirs, files in os.walk(root, onerror=on_error):
            self._stats.directories += 1
            if self.observer is not None:
                self.observer.on_directory(current_dir)

            for filename in files:
                file_path = os.path.join(current_dir, filename)
                try:
                    stat_result = os.stat(file_path)
                except OSError as e:
                    logger.debug(f"Skipping unreadable file {file_path}: {e}")
                    self._stats.skipped += 1
                    continue

                self._stats.scanned += 1
                self._notify_file(file_path)
                yield FileRecord.from_stat(current_dir, filename, stat_result)

        if root_errors:
            raise TraversalError(root, root_errors[0]) from root_errors[0]

    def _notify_file(self, path: str) -> None:
        if self.observer is not None:
            self.observer.on_file(path, self._stats.scanned)

    def get_stats(self) -> ScanStats:
        """
        Get statistics about the walking operation.

        Returns:
            Copy of the walker's counters
        """
        return self._stats.model_copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = ScanStats()
