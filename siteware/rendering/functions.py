"""Host functions exposed to templates."""

from __future__ import annotations

import datetime as dt
import logging
import os
from pathlib import Path
from typing import Callable

from ..core.models import DirectoryEntry

logger = logging.getLogger(__name__)


def read_directory(path: str | os.PathLike[str], base: Path | None = None) -> list[DirectoryEntry]:
    """List a directory for use inside a template.

    Relative paths are resolved against ``base`` (or the working directory).
    Any failure yields an empty listing so a template referencing an
    inaccessible directory cannot abort the build.

    Args:
        path: Directory to list
        base: Directory relative paths are resolved against

    Returns:
        Entries sorted by name, or an empty list
    """
    try:
        target = Path(path)
        if not target.is_absolute() and base is not None:
            target = base / target
        target = target.resolve()

        entries = []
        with os.scandir(target) as it:
            for entry in it:
                info = entry.stat(follow_symlinks=False)
                entries.append(
                    DirectoryEntry(
                        name=entry.name,
                        size=info.st_size,
                        mode=info.st_mode,
                        mod_time=dt.datetime.fromtimestamp(info.st_mtime, tz=dt.timezone.utc),
                        is_dir=entry.is_dir(follow_symlinks=False),
                    )
                )
    except (OSError, TypeError, ValueError) as exc:
        logger.debug(f"readdir({path!r}) returned no entries: {exc}")
        return []

    return sorted(entries, key=lambda entry: entry.name)


def make_readdir(base: Path) -> Callable[[str], list[DirectoryEntry]]:
    """Bind :func:`read_directory` to a project root."""

    def readdir(path: str) -> list[DirectoryEntry]:
        return read_directory(path, base)

    return readdir
