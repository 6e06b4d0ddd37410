"""The per-build context threaded through every component."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..configuration.directory import DirectoryConfigResolver
from .layout import PROTECTED_OUTPUT_NAMES, ProjectPaths
from .models import BuildConfig


def resolve_output(paths: ProjectPaths, config: BuildConfig) -> Path:
    """Return the output directory, anchoring relative paths at the project root."""
    output = config.output
    if not output.is_absolute():
        output = paths.root / output
    return output


@dataclass(frozen=True)
class BuildContext:
    """Everything a build step needs, created once per build."""

    paths: ProjectPaths
    config: BuildConfig
    resolver: DirectoryConfigResolver
    logger: logging.Logger

    @property
    def output(self) -> Path:
        return resolve_output(self.paths, self.config)

    @property
    def protected_names(self) -> frozenset[str]:
        return PROTECTED_OUTPUT_NAMES | frozenset(self.config.preserve)
