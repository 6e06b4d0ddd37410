"""Error taxonomy for the build pipeline.

Every error is fatal to the build. Component seams wrap low-level
exceptions into one of these types so the CLI can report a single message.
"""

from __future__ import annotations


class SitewareError(Exception):
    """Base class for all build failures."""


class ConfigError(SitewareError):
    """Raised when build or directory configuration is missing or malformed."""


class FilesystemError(SitewareError):
    """Raised when walking, creating, listing or removing paths fails."""


class RenderError(SitewareError):
    """Raised when a template is missing, fails to parse or fails to render."""


class ImageError(SitewareError):
    """Raised when a thumbnail cannot be decoded, resized or encoded."""


class SyncError(SitewareError):
    """Raised when mirroring static assets fails."""


def raise_walk_error(exc: OSError) -> None:
    """``os.walk`` onerror hook that aborts the traversal."""
    raise FilesystemError(f"Error walking {exc.filename}: {exc.strerror or exc}") from exc
