"""One-way directory mirroring for static assets."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from ..core.errors import SyncError

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    copied: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    unchanged: int = 0


def _is_current(source: os.DirEntry, target: Path) -> bool:
    if target.is_symlink() or not target.is_file():
        return False
    src_stat = source.stat()
    dst_stat = target.stat()
    return (
        src_stat.st_size == dst_stat.st_size
        and src_stat.st_mtime_ns == dst_stat.st_mtime_ns
    )


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _sync_dir(source: Path, destination: Path, report: SyncReport) -> None:
    if destination.is_symlink() or (destination.exists() and not destination.is_dir()):
        _remove(destination)
        report.removed.append(destination)
    destination.mkdir(parents=True, exist_ok=True)
    shutil.copymode(source, destination)

    with os.scandir(source) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    names = set()
    for entry in entries:
        names.add(entry.name)
        target = destination / entry.name
        if entry.is_dir():
            _sync_dir(Path(entry.path), target, report)
            continue
        if _is_current(entry, target):
            report.unchanged += 1
            continue
        if target.exists() or target.is_symlink():
            _remove(target)
        shutil.copy2(entry.path, target)
        report.copied.append(target)

    with os.scandir(destination) as it:
        extra = [Path(entry.path) for entry in it if entry.name not in names]
    for path in extra:
        _remove(path)
        report.removed.append(path)


def sync_tree(source: Path, destination: Path) -> SyncReport:
    """Make ``destination`` a mirror of ``source``.

    New and changed files are copied with their timestamps, entries missing
    from ``source`` are deleted, and files whose size and modification time
    already match are left alone, so repeated runs are no-ops.

    Args:
        source: Directory to mirror
        destination: Mirror location; created if missing

    Returns:
        What was copied, removed and left unchanged
    """
    if not source.is_dir():
        raise SyncError(f"Static directory not found: {source}")

    report = SyncReport()
    try:
        _sync_dir(source, destination, report)
    except OSError as exc:
        raise SyncError(f"Error syncing {source} to {destination}: {exc}") from exc

    logger.debug(
        f"Synced {source} → {destination}: {len(report.copied)} copied, "
        f"{len(report.removed)} removed, {report.unchanged} unchanged"
    )
    return report
