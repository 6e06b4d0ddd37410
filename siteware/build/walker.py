"""Source tree traversal: directory mirroring, thumbnails and page rendering."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from pathlib import Path

from ..core.context import BuildContext
from ..core.errors import ConfigError, FilesystemError, raise_walk_error
from ..core.layout import HTML_SUFFIXES, STATIC_DIR_NAME
from ..core.models import DEFAULT_FILE_CONFIG, DirectoryConfig
from ..imaging.thumbnails import generate_thumbnails
from ..rendering.engine import TemplateRenderer


@dataclass
class BuildReport:
    pages: list[Path] = field(default_factory=list)
    directories: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    thumbnails: list[Path] = field(default_factory=list)


def run_auto_thumbnails(
    context: BuildContext, config: DirectoryConfig, report: BuildReport
) -> None:
    """Generate thumbnails declared under the ``static`` entry of ``config``."""
    static_entry = config.get(STATIC_DIR_NAME)
    if static_entry is None:
        return

    static_root = context.paths.static.resolve()
    for subpath, spec in static_entry.auto_thumbnail.items():
        image_root = (static_root / subpath).resolve()
        if not image_root.is_relative_to(static_root):
            raise ConfigError(f"Thumbnail path {subpath!r} is outside {static_root}")
        context.logger.info(f"Generating thumbnails for {subpath}...")
        report.thumbnails.extend(
            generate_thumbnails(
                image_root,
                context.output / STATIC_DIR_NAME / image_root.relative_to(static_root),
                spec,
            )
        )


def resolve_directory(
    context: BuildContext, directory: Path, report: BuildReport
) -> DirectoryConfig:
    """Resolve the configuration of ``directory``, running its thumbnails once."""
    first_visit = not context.resolver.is_cached(directory)
    config = context.resolver.resolve(directory)
    if first_visit:
        run_auto_thumbnails(context, config, report)
    return config


def mirror_directory(source: Path, destination: Path) -> None:
    try:
        mode = stat.S_IMODE(source.stat().st_mode)
        destination.mkdir(mode=mode, parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Error creating directory {destination}: {exc}") from exc


def walk_source_tree(context: BuildContext, renderer: TemplateRenderer) -> BuildReport:
    """Render every HTML file of the source tree into the output tree.

    Args:
        context: Current build context
        renderer: Renderer bound to the project's templates

    Returns:
        Summary of the generated output
    """
    source_root = context.paths.source
    if not source_root.is_dir():
        raise FilesystemError(f"Source directory not found: {source_root}")

    report = BuildReport()
    # The source root itself is an entry of the project root
    resolve_directory(context, source_root.parent, report)

    for dirpath, dirnames, filenames in os.walk(source_root, onerror=raise_walk_error):
        directory = Path(dirpath)
        relative = directory.relative_to(source_root)
        destination = context.output / relative
        config = resolve_directory(context, directory, report)

        for name in dirnames:
            mirror_directory(directory / name, destination / name)
            report.directories.append(destination / name)

        for name in filenames:
            source = directory / name
            if source.suffix.lower() not in HTML_SUFFIXES or not source.is_file():
                context.logger.debug(f"Skipping {source}")
                report.skipped.append(source)
                continue

            file_config = config.get(name, DEFAULT_FILE_CONFIG)
            page = {
                "name": name,
                "path": (relative / name).as_posix(),
                "source": str(source),
            }
            report.pages.append(
                renderer.render_file(
                    file_config.template,
                    source,
                    destination / name,
                    file_config.data,
                    page=page,
                )
            )

    return report
