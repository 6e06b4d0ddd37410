"""Output tree reconciliation before a build."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable

from ..core.errors import FilesystemError

logger = logging.getLogger(__name__)


def clear_output(output_root: Path, protected: Iterable[str]) -> list[str]:
    """Delete every top-level entry of ``output_root`` not in ``protected``.

    Only immediate children are matched against the allow-list; anything
    below an unprotected directory goes with it.

    Args:
        output_root: Existing output directory
        protected: Entry names to keep

    Returns:
        Names of the removed entries
    """
    keep = set(protected)

    try:
        with os.scandir(output_root) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except FileNotFoundError as exc:
        raise FilesystemError(f"Path {output_root} does not exist") from exc
    except OSError as exc:
        raise FilesystemError(f"Can't open path {output_root}: {exc}") from exc

    removed: list[str] = []
    for entry in entries:
        if entry.name in keep:
            logger.debug(f"Keeping {entry.name}")
            continue
        path = Path(entry.path)
        try:
            if entry.is_dir(follow_symlinks=False):
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as exc:
            raise FilesystemError(f"Error removing {path}: {exc}") from exc
        logger.debug(f"Removed {path}")
        removed.append(entry.name)

    return removed
