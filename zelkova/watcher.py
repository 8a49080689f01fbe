"""Polling watcher that reports changed markdown files in a vault."""

from __future__ import annotations

import enum
import logging
import os
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

Snapshot = dict[Path, int]


class ChangeKind(enum.Enum):
    NEW = "new"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass(frozen=True)
class FileChange:
    path: Path
    kind: ChangeKind


def scan_files(directory: Path | str) -> Snapshot:
    """Map every markdown file below the directory to its modification time.

    Hidden directories are skipped; unreadable entries are ignored.
    """
    result: Snapshot = {}
    try:
        entries = list(os.scandir(directory))
    except OSError:
        return result
    for entry in entries:
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir()
        except OSError:
            continue
        if is_dir:
            if entry.name.startswith("."):
                continue
            result.update(scan_files(path))
        elif path.suffix == ".md":
            try:
                result[path] = entry.stat().st_mtime_ns
            except OSError:
                continue
    return result


def diff_snapshots(previous: Mapping[Path, int], current: Mapping[Path, int]) -> list[FileChange]:
    """List new and modified files, then deleted ones."""
    changes = []
    for path, modified in current.items():
        if path not in previous:
            changes.append(FileChange(path, ChangeKind.NEW))
        elif previous[path] != modified:
            changes.append(FileChange(path, ChangeKind.MODIFIED))
    changes.extend(
        FileChange(path, ChangeKind.DELETED) for path in previous if path not in current
    )
    return changes


def start_watcher(
    vault_path: Path | str,
    on_change: Callable[[FileChange], None],
    interval: float = 2.0,
) -> threading.Event:
    """Poll the vault in a background thread.

    ``on_change`` is called for new and modified files; deletions are only
    logged. Setting the returned event stops the watcher.
    """
    stop = threading.Event()

    def run() -> None:
        last = scan_files(vault_path)
        while not stop.wait(interval):
            current = scan_files(vault_path)
            for change in diff_snapshots(last, current):
                logger.info("watcher: %s: %s", change.kind.value, change.path)
                if change.kind is ChangeKind.DELETED:
                    continue
                try:
                    on_change(change)
                except Exception as exc:  # keep watching after a failed reindex
                    logger.warning("watcher: reindex error: %s", exc)
            last = current

    threading.Thread(target=run, name="zelkova-watcher", daemon=True).start()
    return stop